"""
SQL Server Warehouse Connection Utilities

Reads and full-refreshes the bronze, silver and gold tables of the warehouse.
Connection settings come from the environment (WAREHOUSE_* variables).

Every replace is a single transaction: the TRUNCATE and the INSERTs for all
tables passed together are committed at once or rolled back together, so a
reader never sees an emptied or half-written table.
"""
import os
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import pymssql

from dwh.exceptions import TableWriteError, WarehouseConfigError
from dwh.sql_templates import render_sql
from dwh.tables.base import TableConfig


def get_warehouse_config() -> Dict[str, Any]:
    """Get warehouse connection configuration from environment."""
    return {
        'server': os.environ.get('WAREHOUSE_SERVER', ''),
        'port': int(os.environ.get('WAREHOUSE_PORT', '1433')),
        'user': os.environ.get('WAREHOUSE_USER', 'etl'),
        'password': os.environ.get('WAREHOUSE_PASSWORD', ''),
        'database': os.environ.get('WAREHOUSE_DATABASE', 'DataWarehouse'),
    }


def get_connection_info() -> dict:
    """
    Get connection info (without password) for logging/display.

    Returns:
        dict with server, port, database, user
    """
    config = get_warehouse_config()
    return {key: value for key, value in config.items() if key != 'password'}


def format_connection_info() -> str:
    """user@server:port/database, for run banners."""
    info = get_connection_info()
    return f"{info['user']}@{info['server']}:{info['port']}/{info['database']}"


def get_warehouse_connection() -> pymssql.Connection:
    """
    Create connection to the warehouse.

    Returns:
        pymssql.Connection: Active database connection (autocommit off)

    Raises:
        WarehouseConfigError: If WAREHOUSE_SERVER or WAREHOUSE_PASSWORD is not set
    """
    config = get_warehouse_config()
    missing = [
        name for name, key in (('WAREHOUSE_SERVER', 'server'), ('WAREHOUSE_PASSWORD', 'password'))
        if not config[key]
    ]
    if missing:
        raise WarehouseConfigError(missing)

    return pymssql.connect(
        server=config['server'],
        port=config['port'],
        user=config['user'],
        password=config['password'],
        database=config['database'],
        login_timeout=30,
    )


@contextmanager
def warehouse_cursor(as_dict: bool = True):
    """
    Context manager for a transactional cursor.

    Commits when the block exits normally, rolls back if it raises.

    Args:
        as_dict: If True, return rows as dictionaries

    Yields:
        pymssql.Cursor: Database cursor

    Example:
        >>> with warehouse_cursor() as cursor:
        ...     cursor.execute("SELECT TOP 5 * FROM [silver].[crm_customer]")
        ...     rows = cursor.fetchall()
    """
    conn = get_warehouse_connection()
    cursor = conn.cursor(as_dict=as_dict)
    try:
        yield cursor
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cursor.close()
        conn.close()


def fetch_table(table_config: TableConfig) -> pd.DataFrame:
    """
    Read a whole table into a DataFrame.

    Args:
        table_config: Table to read

    Returns:
        DataFrame with exactly the configured columns, in configured order
    """
    sql = render_sql(
        'sqlserver/select_table.sql.j2',
        schema=table_config.schema,
        table=table_config.name,
        columns=table_config.column_names,
    )
    with warehouse_cursor(as_dict=True) as cursor:
        cursor.execute(sql)
        rows = cursor.fetchall()
    return pd.DataFrame(rows, columns=table_config.column_names)


def replace_table(table_config: TableConfig, df: pd.DataFrame) -> int:
    """Full-refresh a single table. See replace_tables."""
    return replace_tables([(table_config, df)])[table_config.name]


def replace_tables(writes: Sequence[Tuple[TableConfig, pd.DataFrame]]) -> Dict[str, int]:
    """
    Truncate and reload one or more tables in a single transaction.

    Args:
        writes: (table_config, DataFrame) pairs; each DataFrame must hold
                every configured column of its table

    Returns:
        Dict mapping table name to rows inserted

    Raises:
        TableWriteError: If SQL Server rejects a statement (nothing is committed)
    """
    written = {}
    with warehouse_cursor(as_dict=False) as cursor:
        for table_config, df in writes:
            written[table_config.name] = _replace_in_transaction(cursor, table_config, df)
    return written


def _replace_in_transaction(cursor, table_config: TableConfig, df: pd.DataFrame) -> int:
    columns = table_config.column_names
    truncate_sql = render_sql(
        'sqlserver/truncate_table.sql.j2',
        schema=table_config.schema,
        table=table_config.name,
    )
    insert_sql = render_sql(
        'sqlserver/insert_rows.sql.j2',
        schema=table_config.schema,
        table=table_config.name,
        columns=columns,
    )
    rows = frame_to_rows(df, columns)

    try:
        cursor.execute(truncate_sql)
        if rows:
            cursor.executemany(insert_sql, rows)
    except pymssql.Error as e:
        raise TableWriteError(
            table_config.full_name,
            str(e),
            error_number=_error_number(e),
        ) from e

    print(f"  Loaded {len(rows)} rows into {table_config.full_name}")
    return len(rows)


def frame_to_rows(df: pd.DataFrame, columns: List[str]) -> List[tuple]:
    """
    Convert a DataFrame into DB-API parameter tuples.

    pandas missing markers (NaN, NaT, pd.NA) become None and numpy scalars
    become plain Python values.
    """
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise KeyError(f"DataFrame is missing columns {missing}")

    return [
        tuple(_to_db_value(value) for value in row)
        for row in df[columns].itertuples(index=False, name=None)
    ]


def _to_db_value(value: Any) -> Any:
    if value is None or value is pd.NA or value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and np.isnan(value):
        return None
    return value


def _error_number(error: Exception) -> Optional[int]:
    """SQL Server error number from a pymssql error, when it carries one."""
    if error.args and isinstance(error.args[0], int):
        return error.args[0]
    return None
