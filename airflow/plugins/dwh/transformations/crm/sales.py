"""
CRM sales line transformation.

Source tables:
- crm_sales_details -> crm_sales_line
"""
from datetime import datetime

import pandas as pd

from dwh.transformations._helpers import (
    parse_packed_dates,
    repair_sales_amount,
    repair_unit_price,
    to_int,
)

__all__ = ['conform_sales_line']


def conform_sales_line(df: pd.DataFrame, conformed_at: datetime) -> pd.DataFrame:
    """
    Transform crm_sales_details -> crm_sales_line.

    Source: bronze.crm_sales_details
    Grain: one row per source row (no deduplication)

    Repairs run in two passes: the amount is fixed first, then missing or
    non-positive prices are derived from the fixed amount.

    Columns:
        order_number: Sales order number
        product_key: Product serial number (joins crm_product.serial_number)
        customer_business_id: CRM customer id
        order_date / ship_date / due_date: Calendar dates, NULL if malformed
        sales_amount: |quantity| * |price| when missing or inconsistent
        quantity: Unchanged
        unit_price: amount / quantity when missing or <= 0
        conformed_at: Run timestamp
    """
    quantity = to_int(df['sls_quantity'])
    price = to_int(df['sls_price'])
    stored_amount = to_int(df['sls_sales'])

    sales_amount = pd.Series(
        [repair_sales_amount(a, q, p) for a, q, p in zip(stored_amount, quantity, price)],
        index=df.index,
        dtype='Int64',
    )
    unit_price = pd.Series(
        [repair_unit_price(p, a, q) for p, a, q in zip(price, sales_amount, quantity)],
        index=df.index,
        dtype='Int64',
    )

    return pd.DataFrame({
        'order_number': df['sls_ord_num'],
        'product_key': df['sls_prd_key'],
        'customer_business_id': to_int(df['sls_cust_id']),
        'order_date': parse_packed_dates(df['sls_order_dt']),
        'ship_date': parse_packed_dates(df['sls_ship_dt']),
        'due_date': parse_packed_dates(df['sls_due_dt']),
        'sales_amount': sales_amount,
        'quantity': quantity,
        'unit_price': unit_price,
        'conformed_at': conformed_at,
    }).reset_index(drop=True)
