"""
Bronze (raw) table configurations.

One table per source extract, columns exactly as the CRM and ERP export them.
Loaded by full refresh from CSV drops in the landing container.

Tables:
- crm_cust_info: CRM customer master
- crm_prd_info: CRM product catalog
- crm_sales_details: CRM sales order lines (dates packed as YYYYMMDD integers)
- erp_cust_az12: ERP customer demographics
- erp_loc_a101: ERP customer location
- erp_px_cat_g1v2: ERP product categories
"""
from dwh.tables.base import TableConfig, Layer


CRM_CUST_INFO = TableConfig(
    name="crm_cust_info",
    layer=Layer.BRONZE,
    columns={
        "cst_id": "INT",
        "cst_key": "NVARCHAR(50)",
        "cst_firstname": "NVARCHAR(50)",
        "cst_lastname": "NVARCHAR(50)",
        "cst_marital_status": "NVARCHAR(50)",
        "cst_gndr": "NVARCHAR(50)",
        "cst_create_date": "DATE",
    },
    source_file="source_crm/cust_info.csv",
    primary_key="cst_id",
    description="CRM customer master data",
)

CRM_PRD_INFO = TableConfig(
    name="crm_prd_info",
    layer=Layer.BRONZE,
    columns={
        "prd_id": "INT",
        "prd_key": "NVARCHAR(50)",
        "prd_nm": "NVARCHAR(50)",
        "prd_cost": "INT",
        "prd_line": "NVARCHAR(50)",
        "prd_start_dt": "DATE",
        "prd_end_dt": "DATE",
    },
    source_file="source_crm/prd_info.csv",
    primary_key="prd_id",
    description="CRM product catalog with composite product keys",
)

CRM_SALES_DETAILS = TableConfig(
    name="crm_sales_details",
    layer=Layer.BRONZE,
    columns={
        "sls_ord_num": "NVARCHAR(50)",
        "sls_prd_key": "NVARCHAR(50)",
        "sls_cust_id": "INT",
        "sls_order_dt": "INT",
        "sls_ship_dt": "INT",
        "sls_due_dt": "INT",
        "sls_sales": "INT",
        "sls_quantity": "INT",
        "sls_price": "INT",
    },
    source_file="source_crm/sales_details.csv",
    description="CRM sales order lines",
)

ERP_CUST_AZ12 = TableConfig(
    name="erp_cust_az12",
    layer=Layer.BRONZE,
    columns={
        "cid": "NVARCHAR(50)",
        "bdate": "DATE",
        "gen": "NVARCHAR(50)",
    },
    source_file="source_erp/CUST_AZ12.csv",
    primary_key="cid",
    description="ERP customer demographics (birth date, gender)",
)

ERP_LOC_A101 = TableConfig(
    name="erp_loc_a101",
    layer=Layer.BRONZE,
    columns={
        "cid": "NVARCHAR(50)",
        "cntry": "NVARCHAR(50)",
    },
    source_file="source_erp/LOC_A101.csv",
    primary_key="cid",
    description="ERP customer location",
)

ERP_PX_CAT_G1V2 = TableConfig(
    name="erp_px_cat_g1v2",
    layer=Layer.BRONZE,
    columns={
        "id": "NVARCHAR(50)",
        "cat": "NVARCHAR(50)",
        "subcat": "NVARCHAR(50)",
        "maintenance": "NVARCHAR(50)",
    },
    source_file="source_erp/PX_CAT_G1V2.csv",
    primary_key="id",
    description="ERP product category hierarchy",
)

CRM_TABLES = [CRM_CUST_INFO, CRM_PRD_INFO, CRM_SALES_DETAILS]
ERP_TABLES = [ERP_CUST_AZ12, ERP_LOC_A101, ERP_PX_CAT_G1V2]

BRONZE_TABLES = CRM_TABLES + ERP_TABLES
