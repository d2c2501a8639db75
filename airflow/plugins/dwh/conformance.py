"""
Silver layer conformance runner.

Reads the bronze tables, applies the conformance transformations and
full-refreshes the silver tables. Components run one after another; each
component writes all of its tables in a single transaction.

Usage:
    from dwh.conformance import run_conformance

    result = run_conformance()
"""
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

import pandas as pd

from dwh.exceptions import ComponentFailedError, fault_id_for
from dwh.tables.base import TableConfig
from dwh.tables.bronze import (
    CRM_CUST_INFO,
    CRM_PRD_INFO,
    CRM_SALES_DETAILS,
    ERP_CUST_AZ12,
    ERP_LOC_A101,
    ERP_PX_CAT_G1V2,
)
from dwh.tables.silver import (
    CRM_CUSTOMER,
    CRM_PRODUCT,
    CRM_SALES_LINE,
    ERP_CATEGORY,
    ERP_CUSTOMER_DEMOGRAPHIC,
    ERP_CUSTOMER_LOCATION,
)
from dwh.transformations.crm import conform_customer, conform_product, conform_sales_line
from dwh.transformations.erp import (
    conform_category,
    conform_customer_demographic,
    conform_customer_location,
)
from dwh.verification import check_conformed_frame
from dwh.warehouse import fetch_table, format_connection_info, replace_tables

logger = logging.getLogger(__name__)

Frames = Dict[str, pd.DataFrame]


@dataclass(frozen=True)
class Component:
    """A unit of conformance work committed as one transaction.

    Attributes:
        name: Component name (also the Airflow task suffix)
        sources: Bronze tables read
        targets: Silver tables replaced
        transform: Maps {source name: frame} and the run timestamp to
                   {target name: frame}
    """
    name: str
    sources: Sequence[TableConfig]
    targets: Sequence[TableConfig]
    transform: Callable[[Frames, datetime], Frames]


def _conform_customer_tables(frames: Frames, conformed_at: datetime) -> Frames:
    return {
        CRM_CUSTOMER.name: conform_customer(frames[CRM_CUST_INFO.name], conformed_at),
        ERP_CUSTOMER_DEMOGRAPHIC.name: conform_customer_demographic(
            frames[ERP_CUST_AZ12.name], conformed_at,
        ),
        ERP_CUSTOMER_LOCATION.name: conform_customer_location(
            frames[ERP_LOC_A101.name], conformed_at,
        ),
    }


def _conform_product_tables(frames: Frames, conformed_at: datetime) -> Frames:
    return {CRM_PRODUCT.name: conform_product(frames[CRM_PRD_INFO.name], conformed_at)}


def _conform_sales_tables(frames: Frames, conformed_at: datetime) -> Frames:
    return {CRM_SALES_LINE.name: conform_sales_line(frames[CRM_SALES_DETAILS.name], conformed_at)}


def _conform_category_tables(frames: Frames, conformed_at: datetime) -> Frames:
    return {ERP_CATEGORY.name: conform_category(frames[ERP_PX_CAT_G1V2.name], conformed_at)}


COMPONENTS = [
    Component(
        name='customer',
        sources=(CRM_CUST_INFO, ERP_CUST_AZ12, ERP_LOC_A101),
        targets=(CRM_CUSTOMER, ERP_CUSTOMER_DEMOGRAPHIC, ERP_CUSTOMER_LOCATION),
        transform=_conform_customer_tables,
    ),
    Component(
        name='product',
        sources=(CRM_PRD_INFO,),
        targets=(CRM_PRODUCT,),
        transform=_conform_product_tables,
    ),
    Component(
        name='sales',
        sources=(CRM_SALES_DETAILS,),
        targets=(CRM_SALES_LINE,),
        transform=_conform_sales_tables,
    ),
    Component(
        name='category',
        sources=(ERP_PX_CAT_G1V2,),
        targets=(ERP_CATEGORY,),
        transform=_conform_category_tables,
    ),
]


def get_component(name: str) -> Component:
    """Look up a component by name, raising KeyError if unknown."""
    for component in COMPONENTS:
        if component.name == name:
            return component
    raise KeyError(f"Unknown component '{name}'. Available: {[c.name for c in COMPONENTS]}")


def run_component(component: Component, conformed_at: datetime) -> Dict[str, Any]:
    """
    Run one conformance component.

    Args:
        component: Component to run
        conformed_at: Run timestamp stamped on every written row

    Returns:
        Dict with component results:
        - component: Component name
        - tables: Rows written per silver table
        - rows_in: Bronze rows read
        - rows_out: Silver rows written
        - duration_seconds: Time taken
        - status: 'success'

    Raises:
        ComponentFailedError: If any step fails; the component's tables keep
            their previous contents
    """
    start_time = time.time()
    print(f"Conforming {component.name}")
    print(f"  Sources: {', '.join(t.full_name for t in component.sources)}")

    try:
        frames = {source.name: fetch_table(source) for source in component.sources}
        rows_in = sum(len(df) for df in frames.values())
        print(f"  Fetched {rows_in} rows")

        conformed = component.transform(frames, conformed_at)
        for target in component.targets:
            for issue in check_conformed_frame(target.name, conformed[target.name]):
                logger.warning("Data quality issue in %s: %s", target.full_name, issue)

        written = replace_tables([(target, conformed[target.name]) for target in component.targets])
    except Exception as e:
        raise ComponentFailedError(component.name, str(e), fault_id_for(e)) from e

    duration = time.time() - start_time
    print(f"  Load Duration: {duration:.2f}s")

    return {
        'component': component.name,
        'tables': written,
        'rows_in': rows_in,
        'rows_out': sum(written.values()),
        'duration_seconds': round(duration, 2),
        'status': 'success',
    }


def run_conformance(
    conformed_at: Optional[datetime] = None,
    components: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """
    Conform all bronze tables into silver.

    Idempotent in effect: re-running on unchanged bronze data yields the same
    silver rows apart from conformed_at.

    Args:
        conformed_at: Run timestamp, captured once (default: now)
        components: Component names to run (default: all, in order)

    Returns:
        Dict with run results: run, conformed_at, components (per-component
        results), duration_seconds, status

    Raises:
        ComponentFailedError: On the first failing component. Components that
            completed before it keep their new data.
    """
    conformed_at = conformed_at or datetime.now()
    selected = [get_component(name) for name in components] if components else COMPONENTS
    start_time = time.time()

    print("=" * 60)
    print("Loading Silver Layer")
    print(f"Warehouse: {format_connection_info()}")
    print(f"Run timestamp: {conformed_at.isoformat()}")
    print("=" * 60)

    results = []
    for component in selected:
        try:
            results.append(run_component(component, conformed_at))
        except ComponentFailedError as e:
            print("=" * 60)
            print("ERROR OCCURRED DURING LOADING SILVER LAYER")
            print(f"  Component: {e.component}")
            print(f"  Fault: {e.fault_id}")
            print(f"  Message: {e.message}")
            print("=" * 60)
            raise

    return finish_conformance(results, conformed_at, time.time() - start_time)


def finish_conformance(
    results: List[Dict[str, Any]],
    conformed_at: datetime,
    duration_seconds: float,
) -> Dict[str, Any]:
    """
    Close a conformance run: print the completion banner and build the run
    result from the per-component results.

    Used by run_conformance and by the silver DAG, whose components run as
    separate tasks.
    """
    print("=" * 60)
    print("Loading Silver Layer is Completed")
    print(f"  Total Load Duration: {duration_seconds:.2f}s")
    print("=" * 60)

    return {
        'run': 'conformance',
        'conformed_at': conformed_at.isoformat(),
        'components': list(results),
        'duration_seconds': round(duration_seconds, 2),
        'status': 'success',
    }
