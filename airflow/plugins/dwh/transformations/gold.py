"""
Gold layer star schema assembly.

Builds the customer and product dimensions and the sales fact from the
conformed silver tables. All joins are left joins: an unmatched foreign key
yields NULL attributes (or a NULL surrogate key) instead of dropping the row.
"""
import pandas as pd

from dwh.transformations._constants import UNKNOWN

__all__ = ['build_dim_customer', 'build_dim_product', 'build_fact_sales']


def _lookup(df: pd.DataFrame, key: str, columns: list) -> pd.DataFrame:
    """
    Right-hand side of a left join.

    NULL keys never match in SQL, so they are removed here rather than
    letting pandas pair NaN with NaN.
    """
    return df.loc[df[key].notna(), [key] + columns]


def build_dim_customer(
    customer: pd.DataFrame,
    demographic: pd.DataFrame,
    location: pd.DataFrame,
) -> pd.DataFrame:
    """
    Build dim_customer from crm_customer, erp_customer_demographic and
    erp_customer_location.

    Keys:
        customer_key: Surrogate key, 1..n ordered by customer_business_id
        customer_business_id: CRM customer id

    Gender prefers the CRM value and falls back to the ERP value when the CRM
    value is Unknown.
    """
    demographic = _lookup(demographic, 'customer_code', ['birth_date', 'gender'])
    demographic = demographic.rename(columns={'gender': 'erp_gender'})
    location = _lookup(location, 'customer_code', ['country'])

    merged = customer.merge(demographic, on='customer_code', how='left')
    merged = merged.merge(location, on='customer_code', how='left')
    merged = merged.sort_values('customer_business_id', kind='mergesort').reset_index(drop=True)

    gender = merged['gender'].where(merged['gender'] != UNKNOWN, merged['erp_gender'])
    gender = gender.fillna(UNKNOWN)

    return pd.DataFrame({
        'customer_key': pd.Series(range(1, len(merged) + 1), dtype='Int64'),
        'customer_business_id': merged['customer_business_id'],
        'customer_code': merged['customer_code'],
        'first_name': merged['first_name'],
        'last_name': merged['last_name'],
        'gender': gender,
        'birth_date': merged['birth_date'],
        'marital_status': merged['marital_status'],
        'country': merged['country'],
        'create_date': merged['create_date'],
    })


def build_dim_product(product: pd.DataFrame, category: pd.DataFrame) -> pd.DataFrame:
    """
    Build dim_product from crm_product and erp_category.

    Keeps every product version; end_date NULL marks the active one.

    Keys:
        product_key: Surrogate key, 1..n ordered by product_id, start_date
        product_id: CRM product id
    """
    category = _lookup(category, 'id', ['category', 'subcategory', 'maintenance'])
    category = category.rename(columns={'id': 'category_key'})

    merged = product.merge(category, on='category_key', how='left')
    merged = merged.sort_values(
        ['product_id', 'start_date'],
        kind='mergesort',
        na_position='first',
    ).reset_index(drop=True)

    return pd.DataFrame({
        'product_key': pd.Series(range(1, len(merged) + 1), dtype='Int64'),
        'product_id': merged['product_id'],
        'category_key': merged['category_key'],
        'category': merged['category'],
        'subcategory': merged['subcategory'],
        'serial_number': merged['serial_number'],
        'product_name': merged['product_name'],
        'cost': merged['cost'],
        'product_line': merged['product_line'],
        'start_date': merged['start_date'],
        'end_date': merged['end_date'],
        'maintenance': merged['maintenance'],
    })


def build_fact_sales(
    sales: pd.DataFrame,
    dim_customer: pd.DataFrame,
    dim_product: pd.DataFrame,
) -> pd.DataFrame:
    """
    Build fact_sales from crm_sales_line and the two dimensions.

    Grain: one row per sales line. Sales lines join the active version of
    their product only, so historic product versions cannot multiply rows.
    """
    active = dim_product[dim_product['end_date'].isna()]
    products = _lookup(active, 'serial_number', ['product_key'])
    products = products.drop_duplicates(subset='serial_number', keep='first')
    products = products.rename(columns={'product_key': 'dim_product_key'})

    customers = _lookup(dim_customer, 'customer_business_id', ['customer_key'])
    customers = customers.drop_duplicates(subset='customer_business_id', keep='first')

    merged = sales.merge(
        products, left_on='product_key', right_on='serial_number', how='left',
    )
    merged = merged.merge(customers, on='customer_business_id', how='left')

    return pd.DataFrame({
        'order_number': merged['order_number'],
        'product_key': merged['dim_product_key'].astype('Int64'),
        'customer_key': merged['customer_key'].astype('Int64'),
        'order_date': merged['order_date'],
        'ship_date': merged['ship_date'],
        'due_date': merged['due_date'],
        'sales_amount': merged['sales_amount'],
        'quantity': merged['quantity'],
        'unit_price': merged['unit_price'],
    })
