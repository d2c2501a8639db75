"""
Verification Utilities for the CRM/ERP warehouse pipelines.

Provides data quality audits of conformed frames and human-readable run
reports for the task logs.

Usage:
    from dwh.verification import (
        check_conformed_frame,
        print_run_report,
    )
"""
from datetime import datetime
from typing import Any, Dict, List

import pandas as pd

from dwh.transformations._constants import GENDERS, MARITAL_STATUSES, PRODUCT_LINES


# Columns that must only hold members of their enumeration, per silver table
ENUMERATED_COLUMNS = {
    'crm_customer': {
        'marital_status': MARITAL_STATUSES,
        'gender': GENDERS,
    },
    'erp_customer_demographic': {
        'gender': GENDERS,
    },
    'crm_product': {
        'product_line': PRODUCT_LINES,
    },
}

# Business keys that must be present and unique, per silver table
UNIQUE_KEYS = {
    'crm_customer': 'customer_business_id',
}


def check_conformed_frame(table_name: str, df: pd.DataFrame) -> List[str]:
    """
    Audit a conformed frame before it is written.

    Checks that enumerated columns only hold their allowed values and that
    business keys are non-null and unique. Tables without rules pass.

    Args:
        table_name: Silver table name (e.g. 'crm_customer')
        df: Conformed DataFrame

    Returns:
        List of issue descriptions (empty when the frame is clean)
    """
    issues = []

    for column, allowed in ENUMERATED_COLUMNS.get(table_name, {}).items():
        if column not in df.columns:
            issues.append(f"{table_name}.{column}: column missing")
            continue
        unexpected = sorted(
            {str(v) for v in df[column] if v not in allowed}
        )
        if unexpected:
            issues.append(
                f"{table_name}.{column}: unexpected values {unexpected}"
            )

    key = UNIQUE_KEYS.get(table_name)
    if key and key in df.columns:
        null_count = int(df[key].isna().sum())
        if null_count:
            issues.append(f"{table_name}.{key}: {null_count} NULL keys")
        duplicate_count = int(df[key].dropna().duplicated().sum())
        if duplicate_count:
            issues.append(f"{table_name}.{key}: {duplicate_count} duplicate keys")

    return issues


def summarize_components(components: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Aggregate per-component results into run totals.

    Args:
        components: Component result dicts

    Returns:
        Dict with component count, failed count and row totals
    """
    return {
        'components': len(components),
        'failed': sum(1 for c in components if c.get('status') != 'success'),
        'rows_in': sum(c.get('rows_in', 0) for c in components),
        'rows_out': sum(c.get('rows_out', 0) for c in components),
    }


def print_run_report(result: Dict[str, Any]) -> None:
    """
    Print a human-readable run report.

    Args:
        result: Run result from run_conformance, run_ingestion or run_assembly
    """
    components = result.get('components', [])
    summary = summarize_components(components)

    print("=" * 60)
    print(f"{result.get('run', 'warehouse').upper()} RUN REPORT")
    print(f"Generated: {datetime.utcnow().isoformat()}Z")
    print("=" * 60)

    print(f"\nRUN SUMMARY")
    print(f"  Status: {result.get('status', 'N/A')}")
    if result.get('conformed_at'):
        print(f"  Run timestamp: {result['conformed_at']}")
    print(f"  Components: {summary['components']} ({summary['failed']} failed)")
    print(f"  Rows in: {summary['rows_in']:,}")
    print(f"  Rows out: {summary['rows_out']:,}")
    print(f"  Total duration: {result.get('duration_seconds', 0):.2f}s")

    if components:
        print(f"\nCOMPONENTS")
        for c in components:
            dropped = c.get('rows_in', 0) - c.get('rows_out', 0)
            print(
                f"  - {c['component']}: {c.get('status')} "
                f"{c.get('rows_in', 0):,} in / {c.get('rows_out', 0):,} out "
                f"({dropped:,} dropped) in {c.get('duration_seconds', 0):.2f}s"
            )
            for table, count in c.get('tables', {}).items():
                print(f"      {table}: {count:,} rows")

    if result.get('error'):
        print(f"\nFAILURE")
        print(f"  {result['error']}")

    print("\n" + "=" * 60)
