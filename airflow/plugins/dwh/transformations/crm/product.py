"""
CRM product transformation.

Source tables:
- crm_prd_info -> crm_product
"""
from datetime import datetime

import pandas as pd

from dwh.transformations._helpers import (
    category_key_from_product_key,
    default_cost,
    derive_end_dates,
    expand_product_line,
    serial_number_from_product_key,
    to_date,
    to_int,
    trim,
)

__all__ = ['conform_product']


def conform_product(df: pd.DataFrame, conformed_at: datetime) -> pd.DataFrame:
    """
    Transform crm_prd_info -> crm_product.

    Source: bronze.crm_prd_info
    Primary Key: product_id

    The composite prd_key (CO-RF-FR-R92B-58) is split into the category key
    (CO-RF, joins erp_category.id) and the serial number (FR-R92B-58, joins
    crm_sales_line.product_key).

    The source end date is ignored. Each product's end date is derived from
    the next version of the same product name: one day before that version
    starts. The newest version has no end date.

    Columns:
        product_id: CRM product id
        category_key: Category part of the composite key
        serial_number: Remainder of the composite key
        product_name: Trimmed name
        cost: Cost, NULL -> 0
        product_line: Mountain, Road, Touring, Other Sales or Unknown
        start_date: Version start date
        end_date: Derived version end date
        conformed_at: Run timestamp

    Returns:
        Rows ordered by product_name, start_date
    """
    products = pd.DataFrame({
        'product_id': to_int(df['prd_id']),
        'category_key': df['prd_key'].map(category_key_from_product_key),
        'serial_number': df['prd_key'].map(serial_number_from_product_key),
        'product_name': df['prd_nm'].map(trim),
        'cost': default_cost(df['prd_cost']),
        'product_line': df['prd_line'].map(expand_product_line),
        'start_date': to_date(df['prd_start_dt']),
    })
    products['end_date'] = derive_end_dates(products, group_by='product_name', order_by='start_date')
    products['conformed_at'] = conformed_at

    return products.sort_values(
        ['product_name', 'start_date'],
        na_position='first',
    ).reset_index(drop=True)
