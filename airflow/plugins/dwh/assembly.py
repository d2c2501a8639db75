"""
Gold layer star schema runner.

Reads the silver tables, builds dim_customer, dim_product and fact_sales and
replaces all three gold tables in one transaction.
"""
import time
from typing import Any, Dict

from dwh.exceptions import ComponentFailedError, fault_id_for
from dwh.tables.gold import DIM_CUSTOMER, DIM_PRODUCT, FACT_SALES
from dwh.tables.silver import (
    CRM_CUSTOMER,
    CRM_PRODUCT,
    CRM_SALES_LINE,
    ERP_CATEGORY,
    ERP_CUSTOMER_DEMOGRAPHIC,
    ERP_CUSTOMER_LOCATION,
)
from dwh.transformations._helpers import to_date, to_int
from dwh.transformations.gold import build_dim_customer, build_dim_product, build_fact_sales
from dwh.warehouse import fetch_table, format_connection_info, replace_tables

COMPONENT_NAME = 'star_schema'


def _fetch_silver() -> Dict[str, Any]:
    customer = fetch_table(CRM_CUSTOMER)
    customer['customer_business_id'] = to_int(customer['customer_business_id'])

    product = fetch_table(CRM_PRODUCT)
    product['product_id'] = to_int(product['product_id'])
    product['start_date'] = to_date(product['start_date'])
    product['end_date'] = to_date(product['end_date'])

    sales = fetch_table(CRM_SALES_LINE)
    sales['customer_business_id'] = to_int(sales['customer_business_id'])

    return {
        'customer': customer,
        'demographic': fetch_table(ERP_CUSTOMER_DEMOGRAPHIC),
        'location': fetch_table(ERP_CUSTOMER_LOCATION),
        'product': product,
        'category': fetch_table(ERP_CATEGORY),
        'sales': sales,
    }


def run_assembly() -> Dict[str, Any]:
    """
    Build and load the gold star schema.

    Returns:
        Dict with run results in the same shape as run_conformance

    Raises:
        ComponentFailedError: If reading, building or writing fails; the gold
            tables keep their previous contents
    """
    start_time = time.time()

    print("=" * 60)
    print("Loading Gold Layer")
    print(f"Warehouse: {format_connection_info()}")
    print("=" * 60)

    try:
        silver = _fetch_silver()
        rows_in = sum(len(df) for df in silver.values())
        print(f"  Fetched {rows_in} silver rows")

        dim_customer = build_dim_customer(silver['customer'], silver['demographic'], silver['location'])
        dim_product = build_dim_product(silver['product'], silver['category'])
        fact_sales = build_fact_sales(silver['sales'], dim_customer, dim_product)

        written = replace_tables([
            (DIM_CUSTOMER, dim_customer),
            (DIM_PRODUCT, dim_product),
            (FACT_SALES, fact_sales),
        ])
    except Exception as e:
        print("=" * 60)
        print("ERROR OCCURRED DURING LOADING GOLD LAYER")
        print(f"  {type(e).__name__}: {e}")
        print("=" * 60)
        raise ComponentFailedError(COMPONENT_NAME, str(e), fault_id_for(e)) from e

    duration = time.time() - start_time
    print(f"  Total Load Duration: {duration:.2f}s")
    print("=" * 60)

    return {
        'run': 'assembly',
        'components': [{
            'component': COMPONENT_NAME,
            'tables': written,
            'rows_in': rows_in,
            'rows_out': sum(written.values()),
            'duration_seconds': round(duration, 2),
            'status': 'success',
        }],
        'duration_seconds': round(duration, 2),
        'status': 'success',
    }
