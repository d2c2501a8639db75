"""
Shared helper functions for silver layer conformance.

Each data-quality rule is a small function taking raw values and returning
the conformed value, so every default can be tested on its own. The
transformation modules apply them column-wise.
"""
from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional

import numpy as np
import pandas as pd

from dwh.transformations._constants import (
    UNKNOWN,
    MARITAL_STATUS_MAPPING,
    CRM_GENDER_MAPPING,
    ERP_GENDER_MAPPING,
    PRODUCT_LINE_MAPPING,
    COUNTRY_MAPPING,
    DEMOGRAPHIC_CODE_PREFIX,
    LOCATION_CODE_SEPARATOR,
    SOURCE_KEY_SEPARATOR,
    CONFORMED_KEY_SEPARATOR,
    CATEGORY_KEY_LENGTH,
    SERIAL_NUMBER_OFFSET,
    BIRTH_DATE_CUTOFF,
    PACKED_DATE_LENGTH,
    PACKED_DATE_FORMAT,
    DEFAULT_PRODUCT_COST,
)

__all__ = [
    'is_missing',
    'to_int',
    'parse_date',
    'as_dates',
    'to_date',
    'trim',
    'expand_code',
    'expand_marital_status',
    'expand_crm_gender',
    'expand_erp_gender',
    'expand_product_line',
    'normalize_country',
    'strip_demographic_prefix',
    'strip_location_separator',
    'normalize_category_key',
    'category_key_from_product_key',
    'serial_number_from_product_key',
    'default_cost',
    'null_implausible_birth_dates',
    'parse_packed_date',
    'parse_packed_dates',
    'repair_sales_amount',
    'repair_unit_price',
    'divide_toward_zero',
    'keep_latest',
    'derive_end_dates',
]


# =============================================================================
# TYPE COERCION
# =============================================================================

def is_missing(value: Any) -> bool:
    """True for None, NaN, pd.NA and NaT."""
    return value is None or bool(pd.isna(value))


def to_int(series: pd.Series) -> pd.Series:
    """
    Coerce a raw column to nullable integers.

    Non-numeric and non-integral values become <NA>.
    """
    numbers = pd.to_numeric(series, errors='coerce')
    if pd.api.types.is_integer_dtype(numbers):
        return numbers.astype('Int64')
    numbers = numbers.astype('float64')
    return numbers.where(numbers == numbers.round()).astype('Int64')


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse one calendar date.

    Accepts date/datetime objects and ISO strings (2025-10-06). Any time of
    day is dropped. Unparseable values become None.
    """
    if is_missing(value):
        return None
    if not isinstance(value, date):
        try:
            value = datetime.fromisoformat(str(value).strip())
        except ValueError:
            return None
    return datetime(value.year, value.month, value.day)


def as_dates(values: Iterable[Any], index: pd.Index) -> pd.Series:
    """
    Build a datetime64[s] column from dates and Nones.

    Second resolution covers any four-digit year; nanosecond columns stop
    at 1677-2262.
    """
    return pd.Series(np.array(list(values), dtype='datetime64[s]'), index=index)


def to_date(series: pd.Series) -> pd.Series:
    """Coerce a raw column to datetime64[s]; unparseable values become NaT."""
    return as_dates((parse_date(value) for value in series), series.index)


def trim(value: Any) -> Optional[str]:
    """Strip leading/trailing whitespace, keeping NULL as None."""
    if is_missing(value):
        return None
    return str(value).strip()


# =============================================================================
# ENUMERATIONS
# =============================================================================

def expand_code(value: Any, mapping: Dict[str, str]) -> str:
    """
    Expand a source code through a lookup table.

    The raw value is trimmed and upper-cased before lookup. Anything not in
    the mapping, NULL included, becomes UNKNOWN, so the result is always a
    member of the enumeration.
    """
    if is_missing(value):
        return UNKNOWN
    return mapping.get(str(value).strip().upper(), UNKNOWN)


def expand_marital_status(value: Any) -> str:
    return expand_code(value, MARITAL_STATUS_MAPPING)


def expand_crm_gender(value: Any) -> str:
    return expand_code(value, CRM_GENDER_MAPPING)


def expand_erp_gender(value: Any) -> str:
    return expand_code(value, ERP_GENDER_MAPPING)


def expand_product_line(value: Any) -> str:
    return expand_code(value, PRODUCT_LINE_MAPPING)


def normalize_country(value: Any) -> Any:
    """
    Expand country abbreviations.

    Known abbreviations map to full names, empty or NULL maps to UNKNOWN,
    and anything else is returned exactly as received.
    """
    if is_missing(value):
        return UNKNOWN
    code = str(value).strip().upper()
    if code == '':
        return UNKNOWN
    return COUNTRY_MAPPING.get(code, value)


# =============================================================================
# KEYS
# =============================================================================

def strip_demographic_prefix(code: Any) -> Optional[str]:
    """NASAW00011000 -> AW00011000"""
    if is_missing(code):
        return None
    code = str(code)
    if code.startswith(DEMOGRAPHIC_CODE_PREFIX):
        return code[len(DEMOGRAPHIC_CODE_PREFIX):]
    return code


def strip_location_separator(code: Any) -> Optional[str]:
    """AW-00011000 -> AW00011000"""
    if is_missing(code):
        return None
    return str(code).replace(LOCATION_CODE_SEPARATOR, '')


def normalize_category_key(value: Any) -> Optional[str]:
    """
    CO_RF -> CO-RF

    Used for both the ERP category id and the category part of the CRM
    product key; the gold product dimension joins on the two results.
    """
    if is_missing(value):
        return None
    return str(value).replace(SOURCE_KEY_SEPARATOR, CONFORMED_KEY_SEPARATOR)


def category_key_from_product_key(product_key: Any) -> Optional[str]:
    """CO-RF-FR-R92B-58 -> CO-RF"""
    if is_missing(product_key):
        return None
    return normalize_category_key(str(product_key)[:CATEGORY_KEY_LENGTH])


def serial_number_from_product_key(product_key: Any) -> Optional[str]:
    """CO-RF-FR-R92B-58 -> FR-R92B-58"""
    if is_missing(product_key):
        return None
    return str(product_key)[SERIAL_NUMBER_OFFSET:]


# =============================================================================
# VALUE REPAIRS
# =============================================================================

def default_cost(cost: pd.Series) -> pd.Series:
    """NULL cost -> DEFAULT_PRODUCT_COST. Negative costs are left as they are."""
    return to_int(cost).fillna(DEFAULT_PRODUCT_COST)


def null_implausible_birth_dates(birth_dates: pd.Series) -> pd.Series:
    """Birth dates after BIRTH_DATE_CUTOFF become NaT; the row is kept."""
    dates = to_date(birth_dates)
    return dates.where(dates <= pd.Timestamp(BIRTH_DATE_CUTOFF).as_unit('s'))


def parse_packed_date(value: Any) -> Optional[date]:
    """
    Parse an integer date like 20240315.

    Returns None when the value does not have exactly eight digits
    (0, 2024315, 202403150) or is not a real calendar date.
    """
    if is_missing(value):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)

    text = str(value).strip()
    if len(text) != PACKED_DATE_LENGTH:
        return None
    try:
        return datetime.strptime(text, PACKED_DATE_FORMAT).date()
    except ValueError:
        return None


def parse_packed_dates(series: pd.Series) -> pd.Series:
    """Column-wise parse_packed_date, returned as datetime64[s]."""
    return as_dates((parse_packed_date(value) for value in series), series.index)


def repair_sales_amount(amount: Any, quantity: Any, price: Any) -> Optional[int]:
    """
    Recompute the line amount as |quantity| * |price| when it is missing or
    inconsistent.

    If quantity or price is missing the stored amount cannot be checked and
    is kept as it is.
    """
    if is_missing(quantity) or is_missing(price):
        expected = None
    else:
        expected = abs(int(quantity)) * abs(int(price))

    if is_missing(amount):
        return expected
    if expected is None:
        return int(amount)
    return expected if int(amount) != expected else int(amount)


def repair_unit_price(price: Any, amount: Any, quantity: Any) -> Optional[int]:
    """
    Derive the unit price from the (already repaired) amount when the stored
    price is missing or not positive.
    """
    if not is_missing(price) and int(price) > 0:
        return int(price)
    return divide_toward_zero(amount, quantity)


def divide_toward_zero(numerator: Any, denominator: Any) -> Optional[int]:
    """
    Integer division truncating toward zero, as SQL Server does for INT / INT.

    Returns None for a missing operand or a zero denominator.
    """
    if is_missing(numerator) or is_missing(denominator):
        return None
    numerator, denominator = int(numerator), int(denominator)
    if denominator == 0:
        return None
    quotient = abs(numerator) // abs(denominator)
    return -quotient if (numerator < 0) != (denominator < 0) else quotient


# =============================================================================
# GROUP-WISE RULES
# =============================================================================

def keep_latest(df: pd.DataFrame, key: str, order_by: str) -> pd.DataFrame:
    """
    Keep one row per key: the one with the greatest order_by value.

    Rows with a NULL order_by lose to any dated row. Ties keep the row that
    came first in the input. The result is sorted by key.
    """
    ranked = df.assign(_input_order=range(len(df))).sort_values(
        [order_by, '_input_order'],
        ascending=[False, True],
        na_position='last',
    )
    latest = ranked.drop_duplicates(subset=key, keep='first')
    return latest.sort_values([key, '_input_order']).drop(columns='_input_order')


def derive_end_dates(df: pd.DataFrame, group_by: str, order_by: str) -> pd.Series:
    """
    End of each row's validity window: one day before the next start in its
    group.

    Rows are ordered by order_by within each group_by value; the last row of
    a group gets NaT (still active). Needs the whole table in memory.

    Returns:
        Series aligned to df.index
    """
    ordered = df.sort_values([group_by, order_by], na_position='first', kind='mergesort')
    next_start = ordered.groupby(group_by, dropna=False, sort=False)[order_by].shift(-1)
    return (next_start - pd.Timedelta(days=1).as_unit('s')).reindex(df.index)
