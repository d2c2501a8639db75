# Tests for transformations/gold.py - Star schema assembly
# Run with: pytest tests/test_gold.py -v

import pandas as pd
import pytest

from dwh.tables.gold import DIM_CUSTOMER, DIM_PRODUCT, FACT_SALES
from dwh.transformations.gold import build_dim_customer, build_dim_product, build_fact_sales


@pytest.fixture
def customer():
    return pd.DataFrame({
        'customer_business_id': pd.array([11002, 11000, 11001], dtype='Int64'),
        'customer_code': ['AW00011002', 'AW00011000', 'AW00011001'],
        'first_name': ['Ruben', 'Jon', 'Eugene'],
        'last_name': ['Torres', 'Yang', 'Huang'],
        'marital_status': ['Married', 'Married', 'Single'],
        'gender': ['Unknown', 'Male', 'Unknown'],
        'create_date': pd.to_datetime(['2025-10-06', '2025-10-06', '2025-10-06']),
    })


@pytest.fixture
def demographic():
    return pd.DataFrame({
        'customer_code': ['AW00011000', 'AW00011002', None],
        'birth_date': pd.to_datetime(['1971-10-06', '1976-05-10', '1980-01-01']),
        'gender': ['Female', 'Male', 'Female'],
    })


@pytest.fixture
def location():
    return pd.DataFrame({
        'customer_code': ['AW00011000', 'AW00011001'],
        'country': ['Australia', 'Germany'],
    })


@pytest.fixture
def product():
    return pd.DataFrame({
        'product_id': pd.array([213, 212, 210], dtype='Int64'),
        'category_key': ['AC-HE', 'AC-HE', 'CO-XX'],
        'serial_number': ['HL-U509-R', 'HL-U509-R', 'FR-R92B-58'],
        'product_name': ['Sport-100 Helmet- Red'] * 2 + ['HL Road Frame - Black- 58'],
        'cost': pd.array([13, 12, 0], dtype='Int64'),
        'product_line': ['Other Sales', 'Other Sales', 'Road'],
        'start_date': pd.to_datetime(['2012-07-01', '2011-07-01', '2003-07-01']),
        'end_date': pd.to_datetime([None, '2012-06-30', None]),
    })


@pytest.fixture
def category():
    return pd.DataFrame({
        'id': ['AC-HE', 'CO-RF'],
        'category': ['Accessories', 'Components'],
        'subcategory': ['Helmets', 'Road Frames'],
        'maintenance': ['Yes', 'No'],
    })


@pytest.fixture
def sales():
    return pd.DataFrame({
        'order_number': ['SO1', 'SO2', 'SO3'],
        'product_key': ['HL-U509-R', 'FR-R92B-58', 'XX-UNKNOWN'],
        'customer_business_id': pd.array([11000, 99999, None], dtype='Int64'),
        'order_date': pd.to_datetime(['2013-01-01', '2013-01-02', None]),
        'ship_date': pd.to_datetime(['2013-01-08', '2013-01-09', None]),
        'due_date': pd.to_datetime(['2013-01-13', '2013-01-14', None]),
        'sales_amount': pd.array([35, 1000, 5], dtype='Int64'),
        'quantity': pd.array([1, 1, 1], dtype='Int64'),
        'unit_price': pd.array([35, 1000, 5], dtype='Int64'),
    })


class TestBuildDimCustomer:
    """crm_customer + erp demographics + erp location -> dim_customer"""

    def test_columns_and_surrogate_keys(self, customer, demographic, location):
        result = build_dim_customer(customer, demographic, location)
        assert list(result.columns) == DIM_CUSTOMER.column_names
        assert list(result['customer_business_id']) == [11000, 11001, 11002]
        assert list(result['customer_key']) == [1, 2, 3]

    def test_gender_fallback(self, customer, demographic, location):
        result = build_dim_customer(customer, demographic, location).set_index('customer_business_id')
        # CRM value wins when known
        assert result.loc[11000, 'gender'] == 'Male'
        # Unknown in CRM falls back to ERP
        assert result.loc[11002, 'gender'] == 'Male'
        # No ERP match either
        assert result.loc[11001, 'gender'] == 'Unknown'

    def test_unmatched_attributes_null(self, customer, demographic, location):
        result = build_dim_customer(customer, demographic, location).set_index('customer_business_id')
        assert result.loc[11000, 'country'] == 'Australia'
        assert pd.isna(result.loc[11002, 'country'])
        assert pd.isna(result.loc[11001, 'birth_date'])
        assert result.loc[11002, 'birth_date'] == pd.Timestamp('1976-05-10')


class TestBuildDimProduct:
    """crm_product + erp_category -> dim_product"""

    def test_columns_and_surrogate_keys(self, product, category):
        result = build_dim_product(product, category)
        assert list(result.columns) == DIM_PRODUCT.column_names
        assert list(result['product_id']) == [210, 212, 213]
        assert list(result['product_key']) == [1, 2, 3]

    def test_category_attributes(self, product, category):
        result = build_dim_product(product, category).set_index('product_id')
        assert result.loc[212, 'category'] == 'Accessories'
        assert result.loc[212, 'subcategory'] == 'Helmets'
        assert result.loc[213, 'maintenance'] == 'Yes'

    def test_unmatched_category_null(self, product, category):
        result = build_dim_product(product, category).set_index('product_id')
        assert pd.isna(result.loc[210, 'category'])
        assert result.loc[210, 'category_key'] == 'CO-XX'


class TestBuildFactSales:
    """crm_sales_line + dimensions -> fact_sales"""

    @pytest.fixture
    def dims(self, customer, demographic, location, product, category):
        return (
            build_dim_customer(customer, demographic, location),
            build_dim_product(product, category),
        )

    def test_one_row_per_sales_line(self, sales, dims):
        result = build_fact_sales(sales, *dims)
        assert list(result.columns) == FACT_SALES.column_names
        assert list(result['order_number']) == ['SO1', 'SO2', 'SO3']

    def test_joins_active_product_version(self, sales, dims):
        result = build_fact_sales(sales, *dims)
        # 213 is the active helmet version -> product_key 3
        assert result.loc[0, 'product_key'] == 3
        assert result.loc[1, 'product_key'] == 1
        assert pd.isna(result.loc[2, 'product_key'])

    def test_customer_keys(self, sales, dims):
        result = build_fact_sales(sales, *dims)
        assert result.loc[0, 'customer_key'] == 1
        assert pd.isna(result.loc[1, 'customer_key'])
        assert pd.isna(result.loc[2, 'customer_key'])

    def test_measures_pass_through(self, sales, dims):
        result = build_fact_sales(sales, *dims)
        assert list(result['sales_amount']) == [35, 1000, 5]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
