"""
Shared helper functions for silver layer transformations.

These functions encapsulate the cleansing rules that are reused across
the CRM and ERP normalizers: text trimming, code-to-label mapping,
identifier repair, packed date parsing, deduplication and the windowed
end-date derivation.

Malformed values never raise here. They fall through to None/NaT or to
the NOT_AVAILABLE sentinel.
"""
from datetime import date, datetime
from typing import Any, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from warehouse.transformations._constants import (
    CATEGORY_ID_LENGTH,
    CATEGORY_ID_SEPARATOR,
    COUNTRY_MAPPING,
    NOT_AVAILABLE,
    PACKED_DATE_FORMAT,
    PACKED_DATE_LENGTH,
)

__all__ = [
    'trim_text',
    'map_code',
    'normalize_country',
    'strip_prefix',
    'remove_separator',
    'parse_packed_date',
    'to_datetime',
    'to_integer',
    'keep_latest',
    'derive_end_dates',
    'split_product_key',
    'reconcile_sales_amount',
    'reconcile_price',
]

_ROW_ORDER = '_row_order'


def _is_missing(value: Any) -> bool:
    return value is None or (not isinstance(value, str) and pd.isna(value))


# =============================================================================
# TEXT NORMALIZATION
# =============================================================================

def trim_text(value: Any) -> Optional[str]:
    """Strip leading/trailing whitespace, keeping nulls as None."""
    if _is_missing(value):
        return None
    return str(value).strip()


def map_code(
    value: Any,
    mapping: Mapping[str, str],
    default: str = NOT_AVAILABLE
) -> str:
    """
    Map a source code to its label.

    The code is trimmed and upper-cased before the lookup, so ' m ' and 'M'
    resolve to the same label.

    Args:
        value: Raw code from source
        mapping: Lookup table keyed by upper-case code
        default: Label for null or unmapped codes

    Returns:
        Mapped label, or default
    """
    if _is_missing(value):
        return default
    return mapping.get(str(value).strip().upper(), default)


def normalize_country(
    value: Any,
    mapping: Mapping[str, str] = COUNTRY_MAPPING,
    default: str = NOT_AVAILABLE
) -> str:
    """
    Normalize a country token.

    Known aliases (any case) map to their label, blank or null values become
    the default, anything else is passed through trimmed.
    """
    text = trim_text(value)
    if not text:
        return default
    return mapping.get(text.upper(), text)


# =============================================================================
# IDENTIFIER REPAIR
# =============================================================================

def strip_prefix(value: Any, prefix: str) -> Any:
    """Remove a literal prefix from an identifier when present."""
    if _is_missing(value):
        return None
    text = str(value)
    if text.startswith(prefix):
        return text[len(prefix):]
    return text


def remove_separator(value: Any, separator: str) -> Any:
    """Remove every occurrence of separator from an identifier."""
    if _is_missing(value):
        return None
    return str(value).replace(separator, '')


def split_product_key(value: Any) -> Tuple[Optional[str], Optional[str]]:
    """
    Split a composite CRM product key into category id and product key.

    The first CATEGORY_ID_LENGTH characters form the category id (with the
    separator replaced by an underscore). The character after it is the
    separator and is dropped; the remainder is the product key.

    Example:
        >>> split_product_key('CO-RF-FR-R92B-58')
        ('CO_RF', 'FR-R92B-58')
    """
    if _is_missing(value):
        return None, None
    text = str(value)
    category_id = text[:CATEGORY_ID_LENGTH].replace(CATEGORY_ID_SEPARATOR, '_')
    return category_id, text[CATEGORY_ID_LENGTH + 1:]


# =============================================================================
# TYPE COERCION
# =============================================================================

def parse_packed_date(value: Any) -> Optional[date]:
    """
    Parse a YYYYMMDD integer into a calendar date.

    Returns None when the value is null, zero, not an integer, not exactly
    PACKED_DATE_LENGTH digits long, or not a valid calendar date.

    Example:
        >>> parse_packed_date(20240115)
        datetime.date(2024, 1, 15)
        >>> parse_packed_date('0') is None
        True
    """
    if _is_missing(value):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    if number != value and not isinstance(value, str):
        # 20240115.5 is not a packed date
        return None

    text = str(number)
    if number == 0 or len(text) != PACKED_DATE_LENGTH:
        return None

    try:
        return datetime.strptime(text, PACKED_DATE_FORMAT).date()
    except ValueError:
        return None


def to_datetime(series: pd.Series) -> pd.Series:
    """Coerce a column to datetime64, unparseable values become NaT."""
    return pd.to_datetime(series, errors='coerce')


def to_integer(series: pd.Series) -> pd.Series:
    """Coerce a column to nullable integers, truncating toward zero."""
    numeric = pd.to_numeric(series, errors='coerce')
    return pd.Series(np.trunc(numeric.astype('float64')), index=series.index).astype('Int64')


# =============================================================================
# WINDOWED DERIVATIONS
# =============================================================================

def keep_latest(df: pd.DataFrame, key: str, order_by: str) -> pd.DataFrame:
    """
    Keep one row per key: the row with the greatest order_by value.

    Rows with a null key are discarded. Null order_by values rank below any
    real value. When several rows share the greatest value, the row that
    appears last in the input wins.

    Args:
        df: Input rows (order_by already coerced to a comparable type)
        key: Natural key column
        order_by: Recency column

    Returns:
        Deduplicated DataFrame ordered by key
    """
    ranked = df[df[key].notna()].copy()
    ranked[_ROW_ORDER] = np.arange(len(ranked))

    ranked = ranked.sort_values(
        [order_by, _ROW_ORDER],
        na_position='first',
        kind='mergesort',
    )
    latest = ranked.drop_duplicates(subset=key, keep='last')

    return (
        latest.sort_values(key, kind='mergesort')
        .drop(columns=_ROW_ORDER)
        .reset_index(drop=True)
    )


def derive_end_dates(df: pd.DataFrame, key: str, start: str) -> pd.Series:
    """
    Derive validity end dates from the next start date per key.

    Rows sharing a key are ordered by start ascending (input order breaks
    ties); each row ends one day before the next row starts. The most recent
    row per key gets NaT, meaning it is currently active. Two rows with the
    same key and start date leave the first ending the day before it starts;
    the date_range quality check reports them.

    Args:
        df: Input rows, start column as datetime64
        key: Partition column
        start: Start date column

    Returns:
        datetime64 Series aligned with df.index
    """
    ordered = df[[key, start]].copy()
    ordered[_ROW_ORDER] = np.arange(len(ordered))
    ordered = ordered.sort_values(
        [key, start, _ROW_ORDER],
        na_position='first',
        kind='mergesort',
    )

    next_start = ordered.groupby(key, sort=False, dropna=False)[start].shift(-1)
    end_dates = next_start - pd.Timedelta(days=1)
    return end_dates.reindex(df.index)


# =============================================================================
# MEASURE RECONCILIATION
# =============================================================================

def reconcile_sales_amount(
    sales: pd.Series,
    quantity: pd.Series,
    price: pd.Series
) -> pd.Series:
    """
    Recompute sales as |price| * quantity when the stored value is unusable.

    A stored amount is unusable when it is null, not positive, or differs
    from quantity * price. The comparison only applies when quantity and
    price are both present; a missing factor never flags a mismatch.

    All three inputs are the original stored values.
    """
    sales, quantity, price = (s.astype('float64') for s in (sales, quantity, price))
    expected = quantity * price
    mismatch = expected.notna() & sales.notna() & (sales != expected)
    unusable = sales.isna() | (sales <= 0) | mismatch
    return sales.where(~unusable, price.abs() * quantity)


def reconcile_price(
    sales: pd.Series,
    quantity: pd.Series,
    price: pd.Series
) -> pd.Series:
    """
    Recompute price as sales / quantity when the stored value is unusable.

    A stored price is unusable when it is null or not positive. The division
    uses the original stored sales amount, truncates toward zero, and yields
    null for a zero or missing quantity.
    """
    sales, quantity, price = (s.astype('float64') for s in (sales, quantity, price))
    unusable = price.isna() | (price <= 0)
    safe_quantity = quantity.where(quantity != 0)
    derived = (sales / safe_quantity).astype('float64')
    return price.where(~unusable, np.trunc(derived))
