"""
Gold (star schema) table configurations.

Tables:
- dim_customer: CRM customers enriched with ERP demographics and location
- dim_product: Products with category hierarchy
- fact_sales: Sales lines keyed to both dimensions
"""
from dwh.tables.base import TableConfig, Layer


DIM_CUSTOMER = TableConfig(
    name="dim_customer",
    layer=Layer.GOLD,
    columns={
        "customer_key": "INT",
        "customer_business_id": "INT",
        "customer_code": "NVARCHAR(50)",
        "first_name": "NVARCHAR(50)",
        "last_name": "NVARCHAR(50)",
        "gender": "NVARCHAR(50)",
        "birth_date": "DATE",
        "marital_status": "NVARCHAR(50)",
        "country": "NVARCHAR(50)",
        "create_date": "DATE",
    },
    primary_key="customer_key",
    description="Customer dimension",
)

DIM_PRODUCT = TableConfig(
    name="dim_product",
    layer=Layer.GOLD,
    columns={
        "product_key": "INT",
        "product_id": "INT",
        "category_key": "NVARCHAR(50)",
        "category": "NVARCHAR(50)",
        "subcategory": "NVARCHAR(50)",
        "serial_number": "NVARCHAR(50)",
        "product_name": "NVARCHAR(50)",
        "cost": "INT",
        "product_line": "NVARCHAR(50)",
        "start_date": "DATE",
        "end_date": "DATE",
        "maintenance": "NVARCHAR(50)",
    },
    primary_key="product_key",
    description="Product dimension (end_date NULL = currently active)",
)

FACT_SALES = TableConfig(
    name="fact_sales",
    layer=Layer.GOLD,
    columns={
        "order_number": "NVARCHAR(50)",
        "product_key": "INT",
        "customer_key": "INT",
        "order_date": "DATE",
        "ship_date": "DATE",
        "due_date": "DATE",
        "sales_amount": "INT",
        "quantity": "INT",
        "unit_price": "INT",
    },
    description="Sales fact, one row per sales line",
)

GOLD_TABLES = [DIM_CUSTOMER, DIM_PRODUCT, FACT_SALES]
