"""
Silver Layer: CRM/ERP Conformance

Cleans, types and deduplicates the bronze tables into the silver schema.
One task per component; each task replaces its silver tables in a single
transaction, so a failed task leaves its tables as they were.

Schedule: Triggered when bronze ingestion completes

Components:
- customer: crm_customer, erp_customer_demographic, erp_customer_location
- product: crm_product (end dates derived from product versions)
- sales: crm_sales_line (amount and price repaired)
- category: erp_category

All tasks of a run stamp the same conformed_at (the DAG run start).
report_conformance runs last: it prints the total load duration from the
component results and publishes the silver Dataset.

Manual Trigger:
    airflow dags trigger silver_crm_erp_conformance
"""
from datetime import datetime

from airflow import DAG
from airflow.operators.python import PythonOperator

from dwh.conformance import COMPONENTS, finish_conformance, get_component, run_component
from dwh.datasets import BRONZE_CRM_ERP, SILVER_CRM_ERP
from dwh.utils import get_run_timestamp
from dwh.verification import print_run_report


# =============================================================================
# TASKS
# =============================================================================
def conform_component(component_name: str, **context):
    """Run one conformance component with the DAG run's timestamp."""
    return run_component(get_component(component_name), get_run_timestamp(context))


def report_conformance(**context):
    """Total the component results pulled from XCom and print the run report."""
    task_ids = [f'conform_{component.name}' for component in COMPONENTS]
    results = context['ti'].xcom_pull(task_ids=task_ids)
    result = finish_conformance(
        results,
        get_run_timestamp(context),
        sum(r['duration_seconds'] for r in results),
    )
    print_run_report(result)
    return result['duration_seconds']


# =============================================================================
# DAG DEFINITION
# =============================================================================
default_args = {
    'owner': 'data-engineering',
    'depends_on_past': False,
    'email_on_failure': False,
    'retries': 0,
}

with DAG(
    dag_id='silver_crm_erp_conformance',
    default_args=default_args,
    description='Silver: Conform CRM/ERP bronze tables',
    schedule=[BRONZE_CRM_ERP],  # Triggered by bronze completion
    start_date=datetime(2024, 1, 1),
    catchup=False,
    max_active_runs=1,
    tags=['silver', 'crm', 'erp', 'conformance', 'medallion'],
    doc_md=__doc__,
) as dag:

    tasks = [
        PythonOperator(
            task_id=f'conform_{component.name}',
            python_callable=conform_component,
            op_kwargs={'component_name': component.name},
        )
        for component in COMPONENTS
    ]

    report = PythonOperator(
        task_id='report_conformance',
        python_callable=report_conformance,
        outlets=[SILVER_CRM_ERP],  # Gold must see every component
    )

    # Components run sequentially in declared order, then the report
    for upstream, downstream in zip(tasks, tasks[1:] + [report]):
        upstream >> downstream
