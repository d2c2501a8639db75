"""
Table configuration module for the warehouse pipelines.

Provides the TableConfig dataclass and Layer enum, plus the declared bronze,
silver and gold tables.

Usage:
    from dwh.tables import TableConfig, Layer
    from dwh.tables.bronze import BRONZE_TABLES, CRM_CUST_INFO
"""
from dwh.tables.base import (
    TableConfig,
    Layer,
    get_table,
)
from dwh.tables.bronze import BRONZE_TABLES
from dwh.tables.silver import SILVER_TABLES
from dwh.tables.gold import GOLD_TABLES

ALL_TABLES = BRONZE_TABLES + SILVER_TABLES + GOLD_TABLES

__all__ = [
    'TableConfig',
    'Layer',
    'get_table',
    'BRONZE_TABLES',
    'SILVER_TABLES',
    'GOLD_TABLES',
    'ALL_TABLES',
]
