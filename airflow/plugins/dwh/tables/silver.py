"""
Silver (conformed) table configurations.

Typed, repaired and deduplicated versions of the bronze tables. Every table
carries conformed_at, stamped once per conformance run.
"""
from dwh.tables.base import TableConfig, Layer


CRM_CUSTOMER = TableConfig(
    name="crm_customer",
    layer=Layer.SILVER,
    columns={
        "customer_business_id": "INT",
        "customer_code": "NVARCHAR(50)",
        "first_name": "NVARCHAR(50)",
        "last_name": "NVARCHAR(50)",
        "marital_status": "NVARCHAR(50)",
        "gender": "NVARCHAR(50)",
        "create_date": "DATE",
        "conformed_at": "DATETIME2",
    },
    primary_key="customer_business_id",
    description="CRM customers, one row per business id (latest creation date wins)",
)

ERP_CUSTOMER_DEMOGRAPHIC = TableConfig(
    name="erp_customer_demographic",
    layer=Layer.SILVER,
    columns={
        "customer_code": "NVARCHAR(50)",
        "birth_date": "DATE",
        "gender": "NVARCHAR(50)",
        "conformed_at": "DATETIME2",
    },
    description="ERP demographics with implausible birth dates nulled",
)

ERP_CUSTOMER_LOCATION = TableConfig(
    name="erp_customer_location",
    layer=Layer.SILVER,
    columns={
        "customer_code": "NVARCHAR(50)",
        "country": "NVARCHAR(50)",
        "conformed_at": "DATETIME2",
    },
    description="ERP customer country, abbreviations expanded",
)

CRM_PRODUCT = TableConfig(
    name="crm_product",
    layer=Layer.SILVER,
    columns={
        "product_id": "INT",
        "category_key": "NVARCHAR(50)",
        "serial_number": "NVARCHAR(50)",
        "product_name": "NVARCHAR(50)",
        "cost": "INT",
        "product_line": "NVARCHAR(50)",
        "start_date": "DATE",
        "end_date": "DATE",
        "conformed_at": "DATETIME2",
    },
    primary_key="product_id",
    description="CRM products with split composite key and derived validity window",
)

CRM_SALES_LINE = TableConfig(
    name="crm_sales_line",
    layer=Layer.SILVER,
    columns={
        "order_number": "NVARCHAR(50)",
        "product_key": "NVARCHAR(50)",
        "customer_business_id": "INT",
        "order_date": "DATE",
        "ship_date": "DATE",
        "due_date": "DATE",
        "sales_amount": "INT",
        "quantity": "INT",
        "unit_price": "INT",
        "conformed_at": "DATETIME2",
    },
    description="CRM sales lines with calendar dates and repaired amounts",
)

ERP_CATEGORY = TableConfig(
    name="erp_category",
    layer=Layer.SILVER,
    columns={
        "id": "NVARCHAR(50)",
        "category": "NVARCHAR(50)",
        "subcategory": "NVARCHAR(50)",
        "maintenance": "NVARCHAR(50)",
        "conformed_at": "DATETIME2",
    },
    primary_key="id",
    description="ERP categories keyed by the same format as crm_product.category_key",
)

SILVER_TABLES = [
    CRM_CUSTOMER,
    ERP_CUSTOMER_DEMOGRAPHIC,
    ERP_CUSTOMER_LOCATION,
    CRM_PRODUCT,
    CRM_SALES_LINE,
    ERP_CATEGORY,
]
