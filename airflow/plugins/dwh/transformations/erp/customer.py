"""
ERP customer-side transformations.

Source tables:
- erp_cust_az12 -> erp_customer_demographic
- erp_loc_a101 -> erp_customer_location

Neither table is deduplicated; values are repaired row by row.
"""
from datetime import datetime

import pandas as pd

from dwh.transformations._helpers import (
    expand_erp_gender,
    normalize_country,
    null_implausible_birth_dates,
    strip_demographic_prefix,
    strip_location_separator,
)

__all__ = ['conform_customer_demographic', 'conform_customer_location']


def conform_customer_demographic(df: pd.DataFrame, conformed_at: datetime) -> pd.DataFrame:
    """
    Transform erp_cust_az12 -> erp_customer_demographic.

    Columns:
        customer_code: cid without the NAS prefix
        birth_date: bdate, NULL when after the plausibility cutoff
        gender: Female, Male or Unknown (accepts F/FEMALE/M/MALE in any case)
        conformed_at: Run timestamp
    """
    return pd.DataFrame({
        'customer_code': df['cid'].map(strip_demographic_prefix),
        'birth_date': null_implausible_birth_dates(df['bdate']),
        'gender': df['gen'].map(expand_erp_gender),
        'conformed_at': conformed_at,
    }).reset_index(drop=True)


def conform_customer_location(df: pd.DataFrame, conformed_at: datetime) -> pd.DataFrame:
    """
    Transform erp_loc_a101 -> erp_customer_location.

    Columns:
        customer_code: cid with separators removed
        country: Full country name for known abbreviations, Unknown when
                 empty, otherwise the source value unchanged
        conformed_at: Run timestamp
    """
    return pd.DataFrame({
        'customer_code': df['cid'].map(strip_location_separator),
        'country': df['cntry'].map(normalize_country),
        'conformed_at': conformed_at,
    }).reset_index(drop=True)
