"""
Gold Layer: Star Schema

Builds dim_customer, dim_product and fact_sales from the silver tables and
replaces all three gold tables in one transaction.

Schedule: Triggered when silver conformance completes

Manual Trigger:
    airflow dags trigger gold_star_schema
"""
from datetime import datetime

from airflow import DAG
from airflow.operators.python import PythonOperator

from dwh.assembly import run_assembly
from dwh.datasets import GOLD_STAR_SCHEMA, SILVER_CRM_ERP
from dwh.verification import print_run_report


# =============================================================================
# TASKS
# =============================================================================
def build_star_schema(**context):
    """Build and load the gold dimensions and fact."""
    result = run_assembly()
    print_run_report(result)
    return result['components'][0]['tables']


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
    dag_id='gold_star_schema',
    default_args=default_args,
    description='Gold: Build customer/product dimensions and sales fact',
    schedule=[SILVER_CRM_ERP],  # Triggered by silver completion
    start_date=datetime(2024, 1, 1),
    catchup=False,
    max_active_runs=1,
    tags=['gold', 'crm', 'erp', 'star-schema', 'medallion'],
    doc_md=__doc__,
) as dag:

    star_schema = PythonOperator(
        task_id='build_star_schema',
        python_callable=build_star_schema,
        outlets=[GOLD_STAR_SCHEMA],
    )
