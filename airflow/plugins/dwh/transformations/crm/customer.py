"""
CRM customer transformation.

Source tables:
- crm_cust_info -> crm_customer
"""
from datetime import datetime

import pandas as pd

from dwh.transformations._helpers import (
    expand_crm_gender,
    expand_marital_status,
    keep_latest,
    to_date,
    to_int,
    trim,
)

__all__ = ['conform_customer']


def conform_customer(df: pd.DataFrame, conformed_at: datetime) -> pd.DataFrame:
    """
    Transform crm_cust_info -> crm_customer.

    Source: bronze.crm_cust_info
    Primary Key: customer_business_id

    Rows without a business id are dropped. When a customer appears more
    than once, the row with the latest creation date is kept.

    Columns:
        customer_business_id: CRM customer id
        customer_code: Customer code shared with the ERP (AW00011000)
        first_name / last_name: Trimmed names
        marital_status: Single, Married or Unknown
        gender: Female, Male or Unknown
        create_date: CRM creation date
        conformed_at: Run timestamp
    """
    customers = df.assign(
        cst_id=to_int(df['cst_id']),
        cst_create_date=to_date(df['cst_create_date']),
    )
    customers = customers[customers['cst_id'].notna()]
    latest = keep_latest(customers, key='cst_id', order_by='cst_create_date')

    return pd.DataFrame({
        'customer_business_id': latest['cst_id'],
        'customer_code': latest['cst_key'],
        'first_name': latest['cst_firstname'].map(trim),
        'last_name': latest['cst_lastname'].map(trim),
        'marital_status': latest['cst_marital_status'].map(expand_marital_status),
        'gender': latest['cst_gndr'].map(expand_crm_gender),
        'create_date': latest['cst_create_date'],
        'conformed_at': conformed_at,
    }).reset_index(drop=True)
