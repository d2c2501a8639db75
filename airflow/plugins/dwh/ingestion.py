"""
Bronze layer ingestion utilities.

Loads the CRM and ERP CSV extracts from the landing container of the Data
Lake into the bronze tables of the warehouse. Every load is a full refresh.

Usage:
    from dwh.ingestion import ingest_table
    from dwh.tables.bronze import CRM_CUST_INFO

    result = ingest_table(CRM_CUST_INFO)
"""
import time
from io import StringIO
from typing import Any, Callable, Dict, List, Optional

import pandas as pd

from dwh.datalake import LANDING_CONTAINER, read_from_datalake, wait_for_file
from dwh.exceptions import ComponentFailedError, SourceFileError, fault_id_for
from dwh.tables.base import TableConfig, get_table
from dwh.tables.bronze import BRONZE_TABLES
from dwh.transformations._helpers import to_date, to_int
from dwh.warehouse import format_connection_info, replace_table


def parse_source_csv(text: str, table_config: TableConfig, path: Optional[str] = None) -> pd.DataFrame:
    """
    Parse a CSV extract into the columns of a bronze table.

    Empty fields become NULL. INT columns are coerced to integers and DATE
    columns parsed as YYYY-MM-DD; values that do not convert become NULL.
    Text is kept exactly as received.

    Args:
        text: CSV contents, header row first
        table_config: Bronze table the file feeds
        path: File path for error messages (default: table_config.source_file)

    Returns:
        DataFrame with exactly the table's columns, in configured order

    Raises:
        SourceFileError: If the header lacks a configured column
    """
    path = path or table_config.source_file or table_config.name
    try:
        raw = pd.read_csv(StringIO(text), dtype=str, keep_default_na=False)
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise SourceFileError(path, str(e)) from e

    raw.columns = [str(c).strip() for c in raw.columns]
    missing = [c for c in table_config.column_names if c not in raw.columns]
    if missing:
        raise SourceFileError(path, f"missing columns {missing}")

    df = raw[table_config.column_names]
    df = df.mask(df == '')

    for column in table_config.columns_of_type('INT'):
        df[column] = to_int(df[column])
    for column in table_config.columns_of_type('DATE'):
        df[column] = to_date(df[column])

    return df


def ingest_table(
    table_config: TableConfig,
    read_fn: Callable[[str, str], str] = read_from_datalake,
    wait: bool = True,
) -> Dict[str, Any]:
    """
    Ingest a single CSV extract into its bronze table.

    Args:
        table_config: Bronze TableConfig with a source_file
        read_fn: Function (container, path) -> file text
        wait: Wait for the file to land before reading

    Returns:
        Dict with ingestion results:
        - table: Target table name
        - path: Landing-zone path read
        - rows_loaded: Number of rows written
        - duration_seconds: Time taken
    """
    path = table_config.source_file
    if not path:
        raise ValueError(f"{table_config.full_name} has no source_file")

    start_time = time.time()
    print(f"Starting ingestion for {table_config.full_name}")
    print(f"  Source: {LANDING_CONTAINER}/{path}")

    if wait:
        wait_for_file(LANDING_CONTAINER, path)

    df = parse_source_csv(read_fn(LANDING_CONTAINER, path), table_config, path)
    print(f"  Parsed {len(df)} rows")

    rows_loaded = replace_table(table_config, df)

    duration = time.time() - start_time
    print(f"  Load Duration: {duration:.2f}s")

    return {
        'table': table_config.name,
        'path': f"{LANDING_CONTAINER}/{path}",
        'rows_loaded': rows_loaded,
        'duration_seconds': round(duration, 2),
    }


def run_ingestion(
    tables: Optional[List[str]] = None,
    read_fn: Callable[[str, str], str] = read_from_datalake,
    wait: bool = True,
) -> Dict[str, Any]:
    """
    Ingest every bronze table, one after another.

    Args:
        tables: Bronze table names to ingest (default: all, in order)
        read_fn: Function (container, path) -> file text
        wait: Wait for each file to land before reading

    Returns:
        Dict with run results in the same shape as run_conformance

    Raises:
        ComponentFailedError: On the first table that fails; tables loaded
            before it keep their new data
    """
    selected = [get_table(BRONZE_TABLES, name) for name in tables] if tables else BRONZE_TABLES
    start_time = time.time()

    print("=" * 60)
    print("Loading Bronze Layer")
    print(f"Warehouse: {format_connection_info()}")
    print("=" * 60)

    results = []
    for table_config in selected:
        try:
            result = ingest_table(table_config, read_fn=read_fn, wait=wait)
        except Exception as e:
            print("=" * 60)
            print("ERROR OCCURRED DURING LOADING BRONZE LAYER")
            print(f"  Table: {table_config.full_name}")
            print(f"  {type(e).__name__}: {e}")
            print("=" * 60)
            raise ComponentFailedError(table_config.name, str(e), fault_id_for(e)) from e

        results.append({
            'component': table_config.name,
            'tables': {table_config.name: result['rows_loaded']},
            'rows_in': result['rows_loaded'],
            'rows_out': result['rows_loaded'],
            'duration_seconds': result['duration_seconds'],
            'status': 'success',
        })

    duration = time.time() - start_time
    print("=" * 60)
    print("Loading Bronze Layer is Completed")
    print(f"  Total Load Duration: {duration:.2f}s")
    print("=" * 60)

    return {
        'run': 'ingestion',
        'components': results,
        'duration_seconds': round(duration, 2),
        'status': 'success',
    }
