"""
Airflow Dataset Definitions

Central location for all dataset URIs used in data lineage.
These datasets connect DAGs and track data dependencies.
"""
from airflow import Dataset

# Bronze layer datasets (raw CSV extracts)
BRONZE_CRM_ERP = Dataset("mssql://warehouse/DataWarehouse/bronze")

# Silver layer datasets (conformed tables)
SILVER_CRM_ERP = Dataset("mssql://warehouse/DataWarehouse/silver")

# Gold layer datasets (star schema)
GOLD_STAR_SCHEMA = Dataset("mssql://warehouse/DataWarehouse/gold")
