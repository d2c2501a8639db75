"""
Bronze Layer: CRM/ERP Extract Ingestion

Loads the CRM and ERP CSV extracts from the landing container into the
bronze schema of the warehouse. Every table is a full refresh.

Schedule: @daily
Source: landing/source_crm/*.csv, landing/source_erp/*.csv

Tables:
- crm_cust_info, crm_prd_info, crm_sales_details
- erp_cust_az12, erp_loc_a101, erp_px_cat_g1v2

Manual Trigger:
    airflow dags trigger bronze_crm_erp_ingestion
"""
from datetime import datetime

from airflow import DAG
from airflow.operators.python import PythonOperator

from dwh.datasets import BRONZE_CRM_ERP
from dwh.ingestion import run_ingestion
from dwh.verification import print_run_report


# =============================================================================
# TASKS
# =============================================================================
def ingest_sources(**context):
    """Load all six extracts into bronze."""
    result = run_ingestion()
    print_run_report(result)
    return {c['component']: c['rows_out'] for c in result['components']}


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
    dag_id='bronze_crm_erp_ingestion',
    default_args=default_args,
    description='Bronze: Load CRM/ERP CSV extracts into the warehouse',
    schedule='@daily',
    start_date=datetime(2024, 1, 1),
    catchup=False,
    max_active_runs=1,
    tags=['bronze', 'crm', 'erp', 'ingestion', 'medallion'],
    doc_md=__doc__,
) as dag:

    ingest = PythonOperator(
        task_id='ingest_sources',
        python_callable=ingest_sources,
        outlets=[BRONZE_CRM_ERP],
    )
