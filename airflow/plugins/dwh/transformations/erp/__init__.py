"""
ERP transformations (Bronze -> Silver).

Source: ERP extracts (customer demographics, customer location, categories)

Modules:
- customer: Demographics and location (erp_customer_demographic, erp_customer_location)
- category: Product categories (erp_category)
"""
from dwh.transformations.erp.customer import (
    conform_customer_demographic,
    conform_customer_location,
)
from dwh.transformations.erp.category import conform_category

__all__ = [
    'conform_customer_demographic',
    'conform_customer_location',
    'conform_category',
]
