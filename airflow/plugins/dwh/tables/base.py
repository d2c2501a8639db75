"""
Base table configuration classes for the warehouse pipelines.

Provides:
- Layer: Enum naming the medallion layer (and SQL Server schema) of a table
- TableConfig: Dataclass describing a warehouse table
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Layer(Enum):
    """Medallion layer of a table. The value is the SQL Server schema name.

    BRONZE: Raw records exactly as received from the CRM/ERP extracts
    SILVER: Conformed records (typed, repaired, deduplicated)
    GOLD: Star-schema dimensions and facts built from silver
    """
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"


@dataclass
class TableConfig:
    """Configuration for a warehouse table.

    Attributes:
        name: Table name inside its schema (e.g., 'crm_cust_info')
        layer: Medallion layer, which is also the schema
        columns: Ordered mapping of column name to SQL Server type
        source_file: Landing-zone path of the CSV feeding this table (bronze only)
        primary_key: Business key column, if the table has one
        description: Human-readable description of the table

    Example:
        TableConfig(
            name='erp_loc_a101',
            layer=Layer.BRONZE,
            columns={'cid': 'NVARCHAR(50)', 'cntry': 'NVARCHAR(50)'},
            source_file='source_erp/LOC_A101.csv',
            description='Customer country from the ERP'
        )
    """
    name: str
    layer: Layer
    columns: Dict[str, str] = field(default_factory=dict)
    source_file: Optional[str] = None
    primary_key: Optional[str] = None
    description: Optional[str] = None

    @property
    def schema(self) -> str:
        return self.layer.value

    @property
    def full_name(self) -> str:
        """Full qualified table name: [schema].[table]"""
        return f"[{self.schema}].[{self.name}]"

    @property
    def column_names(self) -> List[str]:
        return list(self.columns)

    def columns_of_type(self, sql_type: str) -> List[str]:
        """Columns whose SQL type starts with sql_type (e.g. 'INT', 'DATE')."""
        prefix = sql_type.upper()
        return [
            name for name, dtype in self.columns.items()
            if dtype.upper().split('(')[0] == prefix
        ]


def get_table(tables: List[TableConfig], name: str) -> TableConfig:
    """Look up a table by name, raising KeyError if it is not configured."""
    for table in tables:
        if table.name == name:
            return table
    raise KeyError(f"Table '{name}' is not configured. Available: {[t.name for t in tables]}")
