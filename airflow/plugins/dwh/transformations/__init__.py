"""
Silver and gold layer transformation functions.

This package provides the pure pandas functions that conform raw bronze
tables into silver tables and assemble the gold star schema.

Structure:
    _constants.py   - Lookup tables and defaults (enumerations, key formats)
    _helpers.py     - One small function per data-quality rule
    crm/            - CRM transformations (customer, product, sales)
    erp/            - ERP transformations (demographic, location, category)
    gold.py         - Star schema assembly (dimensions, fact)

Usage:
    from dwh.transformations.crm import conform_customer
    from dwh.transformations import build_dim_customer, UNKNOWN

Extending:
    1. New source table: Add module to crm/ or erp/
    2. New lookup or default: Add to _constants.py
    3. New rule: Add to _helpers.py
"""

from dwh.transformations._constants import (
    UNKNOWN,
    DEFAULT_PRODUCT_COST,
    MARITAL_STATUS_MAPPING,
    CRM_GENDER_MAPPING,
    ERP_GENDER_MAPPING,
    PRODUCT_LINE_MAPPING,
    COUNTRY_MAPPING,
    MARITAL_STATUSES,
    GENDERS,
    PRODUCT_LINES,
    BIRTH_DATE_CUTOFF,
)

from dwh.transformations.crm import (
    conform_customer,
    conform_product,
    conform_sales_line,
)
from dwh.transformations.erp import (
    conform_customer_demographic,
    conform_customer_location,
    conform_category,
)
from dwh.transformations.gold import (
    build_dim_customer,
    build_dim_product,
    build_fact_sales,
)

__all__ = [
    # Constants
    'UNKNOWN',
    'DEFAULT_PRODUCT_COST',
    'MARITAL_STATUS_MAPPING',
    'CRM_GENDER_MAPPING',
    'ERP_GENDER_MAPPING',
    'PRODUCT_LINE_MAPPING',
    'COUNTRY_MAPPING',
    'MARITAL_STATUSES',
    'GENDERS',
    'PRODUCT_LINES',
    'BIRTH_DATE_CUTOFF',
    # Silver
    'conform_customer',
    'conform_product',
    'conform_sales_line',
    'conform_customer_demographic',
    'conform_customer_location',
    'conform_category',
    # Gold
    'build_dim_customer',
    'build_dim_product',
    'build_fact_sales',
]
