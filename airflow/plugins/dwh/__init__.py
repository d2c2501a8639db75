"""
Shared warehouse pipeline code for the CRM/ERP DAGs.

Airflow-specific definitions live in dwh.datasets and are imported by the
DAGs directly, so everything re-exported here works without Airflow.

Usage in DAGs:
    from dwh.ingestion import run_ingestion
    from dwh.conformance import get_component, run_component
    from dwh.assembly import run_assembly
    from dwh.utils import get_run_timestamp
    from dwh.datasets import BRONZE_CRM_ERP, SILVER_CRM_ERP
"""
from dwh.exceptions import (
    WarehouseError,
    WarehouseConfigError,
    SourceFileError,
    TableWriteError,
    ComponentFailedError,
)
from dwh.utils import get_run_timestamp
