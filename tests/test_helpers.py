# Tests for transformations/_helpers.py - Data-quality rules
# Run with: pytest tests/test_helpers.py -v

from datetime import date, datetime

import pandas as pd
import pytest

from dwh.transformations._constants import (
    GENDERS,
    MARITAL_STATUSES,
    PRODUCT_LINES,
    UNKNOWN,
)
from dwh.transformations._helpers import (
    category_key_from_product_key,
    default_cost,
    derive_end_dates,
    divide_toward_zero,
    expand_crm_gender,
    expand_erp_gender,
    expand_marital_status,
    expand_product_line,
    is_missing,
    keep_latest,
    normalize_category_key,
    normalize_country,
    null_implausible_birth_dates,
    parse_date,
    parse_packed_date,
    parse_packed_dates,
    repair_sales_amount,
    repair_unit_price,
    serial_number_from_product_key,
    strip_demographic_prefix,
    strip_location_separator,
    to_date,
    to_int,
    trim,
)


class TestCoercion:
    """Raw values are coerced without raising."""

    def test_is_missing(self):
        assert is_missing(None)
        assert is_missing(float('nan'))
        assert is_missing(pd.NA)
        assert is_missing(pd.NaT)
        assert not is_missing(0)
        assert not is_missing('')

    def test_to_int_nulls_non_integers(self):
        result = to_int(pd.Series(['1', 'x', None, '2.5', '-4']))
        assert str(result.dtype) == 'Int64'
        assert result[0] == 1
        assert result[1:4].isna().all()
        assert result[4] == -4

    def test_trim_keeps_null(self):
        assert trim('  Jon ') == 'Jon'
        assert trim(None) is None

    def test_to_date(self):
        result = to_date(pd.Series(['2025-10-06', 'not-a-date', None, date(2024, 1, 31)]))
        assert str(result.dtype) == 'datetime64[s]'
        assert result[0] == pd.Timestamp('2025-10-06')
        assert result[1:3].isna().all()
        assert result[3] == pd.Timestamp('2024-01-31')

    def test_to_date_keeps_early_and_late_years(self):
        result = to_date(pd.Series(['1600-05-01', '2999-12-31']))
        assert result[0] == datetime(1600, 5, 1)
        assert result[1] == datetime(2999, 12, 31)

    def test_parse_date_drops_time_of_day(self):
        assert parse_date(datetime(2025, 10, 6, 14, 30)) == datetime(2025, 10, 6)
        assert parse_date('2025-10-06 14:30:00') == datetime(2025, 10, 6)
        assert parse_date('') is None


class TestEnumerations:
    """Every expansion returns a member of its enumeration."""

    @pytest.mark.parametrize("raw,expected", [
        ('S', 'Single'),
        ('M', 'Married'),
        (' m ', 'Married'),
        ('X', UNKNOWN),
        ('', UNKNOWN),
        (None, UNKNOWN),
    ])
    def test_marital_status(self, raw, expected):
        assert expand_marital_status(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ('F', 'Female'),
        ('M', 'Male'),
        ('f', 'Female'),
        ('n/a', UNKNOWN),
        (None, UNKNOWN),
    ])
    def test_crm_gender(self, raw, expected):
        assert expand_crm_gender(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ('F', 'Female'),
        ('Female', 'Female'),
        (' FEMALE ', 'Female'),
        ('M', 'Male'),
        ('male', 'Male'),
        ('', UNKNOWN),
        (None, UNKNOWN),
    ])
    def test_erp_gender(self, raw, expected):
        assert expand_erp_gender(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ('M', 'Mountain'),
        ('R ', 'Road'),
        ('S', 'Other Sales'),
        ('t', 'Touring'),
        ('Z', UNKNOWN),
        (None, UNKNOWN),
    ])
    def test_product_line(self, raw, expected):
        assert expand_product_line(raw) == expected

    def test_totality(self):
        """Arbitrary garbage still lands inside the enumeration."""
        garbage = ['', ' ', 'N\\A', 'n/a', '??', 42, None, float('nan')]
        for value in garbage:
            assert expand_marital_status(value) in MARITAL_STATUSES
            assert expand_crm_gender(value) in GENDERS
            assert expand_erp_gender(value) in GENDERS
            assert expand_product_line(value) in PRODUCT_LINES

    @pytest.mark.parametrize("raw,expected", [
        ('us', 'United States'),
        ('USA', 'United States'),
        ('de', 'Germany'),
        ('', UNKNOWN),
        (None, UNKNOWN),
        ('fr', 'fr'),
        ('Australia', 'Australia'),
    ])
    def test_country(self, raw, expected):
        assert normalize_country(raw) == expected


class TestKeys:
    """Customer and product key normalization."""

    def test_demographic_prefix(self):
        assert strip_demographic_prefix('NASAW00011000') == 'AW00011000'
        assert strip_demographic_prefix('AW00011000') == 'AW00011000'
        assert strip_demographic_prefix(None) is None

    def test_location_separator(self):
        assert strip_location_separator('AW-00011000') == 'AW00011000'
        assert strip_location_separator('A-W-0') == 'AW0'

    def test_category_key(self):
        assert normalize_category_key('CO_RF') == 'CO-RF'
        assert normalize_category_key(None) is None

    def test_composite_key_split(self):
        assert category_key_from_product_key('CO-RF-FR-R92B-58') == 'CO-RF'
        assert serial_number_from_product_key('CO-RF-FR-R92B-58') == 'FR-R92B-58'

    def test_composite_key_uses_category_normalization(self):
        assert category_key_from_product_key('AC_HE-HL-U509-R') == 'AC-HE'
        assert serial_number_from_product_key('AC_HE-HL-U509-R') == 'HL-U509-R'

    def test_null_composite_key(self):
        assert category_key_from_product_key(None) is None
        assert serial_number_from_product_key(None) is None


class TestValueRepairs:
    """Defaults and repairs for costs, dates, amounts and prices."""

    def test_default_cost(self):
        result = default_cost(pd.Series([None, 12, -5]))
        assert list(result) == [0, 12, -5]

    def test_implausible_birth_dates(self):
        result = null_implausible_birth_dates(pd.Series(['1980-05-01', '2010-01-01', '2015-01-01', None]))
        assert result[0] == pd.Timestamp('1980-05-01')
        assert result[1] == pd.Timestamp('2010-01-01')
        assert pd.isna(result[2])
        assert pd.isna(result[3])

    @pytest.mark.parametrize("raw,expected", [
        (20240315, date(2024, 3, 15)),
        ('20240315', date(2024, 3, 15)),
        (20240315.0, date(2024, 3, 15)),
        (2024315, None),
        (202403150, None),
        (0, None),
        (20240231, None),
        (None, None),
    ])
    def test_packed_date(self, raw, expected):
        assert parse_packed_date(raw) == expected

    def test_packed_dates_column(self):
        result = parse_packed_dates(pd.Series([20240315, 0]))
        assert result[0] == pd.Timestamp('2024-03-15')
        assert pd.isna(result[1])

    def test_packed_dates_outside_nanosecond_range(self):
        result = parse_packed_dates(pd.Series([15000101, 29991231]))
        assert result[0] == datetime(1500, 1, 1)
        assert result[1] == datetime(2999, 12, 31)

    def test_early_birth_dates_kept(self):
        result = null_implausible_birth_dates(pd.Series(['1600-05-01']))
        assert result[0] == datetime(1600, 5, 1)

    @pytest.mark.parametrize("amount,quantity,price,expected", [
        (3578, 1, 3578, 3578),
        (None, 3, 0, 0),
        (100, 2, 40, 80),
        (-80, 2, 40, 80),
        (10, 2, -5, 10),
        (50, None, 10, 50),
        (None, None, 10, None),
    ])
    def test_sales_amount(self, amount, quantity, price, expected):
        assert repair_sales_amount(amount, quantity, price) == expected

    @pytest.mark.parametrize("price,amount,quantity,expected", [
        (40, 80, 2, 40),
        (None, 80, 2, 40),
        (0, 0, 3, 0),
        (-5, 81, 2, 40),
        (None, 80, 0, None),
        (None, 80, None, None),
        (None, -7, 2, -3),
    ])
    def test_unit_price(self, price, amount, quantity, expected):
        assert repair_unit_price(price, amount, quantity) == expected

    def test_division_truncates_toward_zero(self):
        assert divide_toward_zero(7, 2) == 3
        assert divide_toward_zero(-7, 2) == -3
        assert divide_toward_zero(7, -2) == -3
        assert divide_toward_zero(7, 0) is None


class TestGroupRules:
    """Deduplication and end-date derivation."""

    def test_keep_latest(self):
        df = pd.DataFrame({
            'id': [1, 1, 2, 1],
            'created': pd.to_datetime(['2024-01-01', '2024-03-01', None, '2024-03-01']),
            'tag': ['a', 'b', 'c', 'd'],
        })
        result = keep_latest(df, key='id', order_by='created')
        assert list(result['id']) == [1, 2]
        # Tie on 2024-03-01: first in input order wins
        assert list(result['tag']) == ['b', 'c']

    def test_keep_latest_null_dates_rank_last(self):
        df = pd.DataFrame({
            'id': [7, 7],
            'created': pd.to_datetime([None, '2020-01-01']),
            'tag': ['undated', 'dated'],
        })
        result = keep_latest(df, key='id', order_by='created')
        assert list(result['tag']) == ['dated']

    def test_derive_end_dates(self):
        df = pd.DataFrame({
            'name': ['A', 'A', 'A', 'B'],
            'start': pd.to_datetime(['2021-01-01', '2022-01-01', '2021-06-01', '2020-01-01']),
        })
        result = derive_end_dates(df, group_by='name', order_by='start')
        assert result[0] == pd.Timestamp('2021-05-31')
        assert pd.isna(result[1])
        assert result[2] == pd.Timestamp('2021-12-31')
        assert pd.isna(result[3])

    def test_derive_end_dates_early_years(self):
        df = pd.DataFrame({
            'name': ['A', 'A'],
            'start': to_date(pd.Series(['1500-01-01', '1600-01-01'])),
        })
        result = derive_end_dates(df, group_by='name', order_by='start')
        assert result[0] == datetime(1599, 12, 31)
        assert pd.isna(result[1])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
