"""
CRM transformations (Bronze -> Silver).

Source: CRM extracts (customers, products, sales lines)

Modules:
- customer: Customer master (crm_customer)
- product: Product catalog (crm_product)
- sales: Sales order lines (crm_sales_line)
"""
from dwh.transformations.crm.customer import conform_customer
from dwh.transformations.crm.product import conform_product
from dwh.transformations.crm.sales import conform_sales_line

__all__ = [
    'conform_customer',
    'conform_product',
    'conform_sales_line',
]
