"""
ERP category transformation.

Source tables:
- erp_px_cat_g1v2 -> erp_category
"""
from datetime import datetime

import pandas as pd

from dwh.transformations._helpers import normalize_category_key

__all__ = ['conform_category']


def conform_category(df: pd.DataFrame, conformed_at: datetime) -> pd.DataFrame:
    """
    Transform erp_px_cat_g1v2 -> erp_category.

    Only the id changes (CO_RF -> CO-RF), through the same function that
    derives crm_product.category_key.
    """
    return pd.DataFrame({
        'id': df['id'].map(normalize_category_key),
        'category': df['cat'],
        'subcategory': df['subcat'],
        'maintenance': df['maintenance'],
        'conformed_at': conformed_at,
    }).reset_index(drop=True)
