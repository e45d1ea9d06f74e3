"""
Verification Utilities for the warehouse pipelines.

Data quality checks over the silver tables and the gold star schema. Every
check returns the offending rows; an empty frame means the check passed.

Usage:
    from warehouse.verification import (
        verify_warehouse,
        assert_checks_pass,
        print_verification_report,
    )
"""
import logging
from datetime import datetime
from typing import Dict, Iterable, Mapping, Optional, Sequence

import pandas as pd

from warehouse.errors import QualityCheckError
from warehouse.tables import ALL_TABLES, SILVER_SCHEMA
from warehouse.transformations import (
    CRM_GENDER_MAPPING,
    MARITAL_STATUS_MAPPING,
    NOT_AVAILABLE,
    PRODUCT_LINE_MAPPING,
    ERP_GENDER_MAPPING,
    build_dim_customers,
    build_dim_products,
    build_fact_sales,
)
from warehouse.warehouse_db import fetch_dataframe

logger = logging.getLogger(__name__)


def _labels(mapping: Mapping[str, str]) -> set:
    return set(mapping.values()) | {NOT_AVAILABLE}


def _as_dates(series: pd.Series) -> pd.Series:
    return pd.to_datetime(series, errors='coerce')


def _as_numbers(series: pd.Series) -> pd.Series:
    return pd.to_numeric(series, errors='coerce').astype('float64')


# =============================================================================
# PREDICATES
# =============================================================================

def duplicate_or_null_keys(df: pd.DataFrame, key: str) -> pd.DataFrame:
    """Rows whose key is null or appears more than once."""
    return df[df[key].isna() | df[key].duplicated(keep=False)]


def untrimmed_text(df: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
    """Rows with leading or trailing whitespace in any of the columns."""
    mask = pd.Series(False, index=df.index)
    for column in columns:
        values = df[column]
        text = values.astype(str)
        mask |= values.notna() & (text != text.str.strip())
    return df[mask]


def negative_or_null(df: pd.DataFrame, column: str) -> pd.DataFrame:
    values = _as_numbers(df[column])
    return df[values.isna() | (values < 0)]


def blank_values(df: pd.DataFrame, column: str) -> pd.DataFrame:
    values = df[column]
    return df[values.isna() | (values.astype(str).str.strip() == '')]


def inverted_date_range(df: pd.DataFrame, start: str, end: str) -> pd.DataFrame:
    """Rows whose end date falls before their start date."""
    return df[_as_dates(df[end]) < _as_dates(df[start])]


def sales_dates_out_of_order(df: pd.DataFrame) -> pd.DataFrame:
    """Sales lines shipped or due before they were ordered."""
    order = _as_dates(df['sls_order_dt'])
    return df[(order > _as_dates(df['sls_ship_dt'])) | (order > _as_dates(df['sls_due_dt']))]


def inconsistent_sales(df: pd.DataFrame) -> pd.DataFrame:
    """
    Sales lines breaking sales = quantity * price.

    Null or non-positive measures are reported as well.
    """
    sales = _as_numbers(df['sls_sales'])
    quantity = _as_numbers(df['sls_quantity'])
    price = _as_numbers(df['sls_price'])

    mask = sales.isna() | quantity.isna() | price.isna()
    mask |= (sales <= 0) | (quantity <= 0) | (price <= 0)
    mask |= sales != quantity * price
    return df[mask]


def future_dates(
    df: pd.DataFrame,
    column: str,
    as_of: Optional[datetime] = None
) -> pd.DataFrame:
    cutoff = pd.Timestamp(as_of) if as_of is not None else pd.Timestamp.now()
    return df[_as_dates(df[column]) > cutoff]


def values_outside(df: pd.DataFrame, column: str, allowed: Iterable[str]) -> pd.DataFrame:
    """Rows whose value is not one of the allowed labels (nulls included)."""
    return df[~df[column].isin(set(allowed))]


def orphan_facts(
    fact_sales: pd.DataFrame,
    dim_customers: pd.DataFrame,
    dim_products: pd.DataFrame
) -> pd.DataFrame:
    """Fact rows whose customer or product key has no dimension member."""
    known_customer = fact_sales['customer_key'].isin(dim_customers['customer_key'])
    known_product = fact_sales['product_key'].isin(dim_products['product_key'])
    return fact_sales[~known_customer | ~known_product]


# =============================================================================
# CHECK SUITES
# =============================================================================

def run_silver_checks(
    frames: Mapping[str, pd.DataFrame],
    as_of: Optional[datetime] = None
) -> Dict[str, pd.DataFrame]:
    """
    Run the silver checks for every table present in frames.

    Args:
        frames: Silver table name -> DataFrame
        as_of: Reference time for the future-date check (defaults to now)

    Returns:
        Dict of check name -> offending rows
    """
    results = {}

    customers = frames.get('crm_cust_info')
    if customers is not None:
        results['crm_cust_info.cst_id_unique'] = duplicate_or_null_keys(customers, 'cst_id')
        results['crm_cust_info.text_trimmed'] = untrimmed_text(
            customers, ['cst_key', 'cst_firstname', 'cst_lastname']
        )
        results['crm_cust_info.gender_domain'] = values_outside(
            customers, 'cst_gndr', _labels(CRM_GENDER_MAPPING)
        )
        results['crm_cust_info.marital_status_domain'] = values_outside(
            customers, 'cst_marital_status', _labels(MARITAL_STATUS_MAPPING)
        )

    products = frames.get('crm_prd_info')
    if products is not None:
        results['crm_prd_info.prd_id_unique'] = duplicate_or_null_keys(products, 'prd_id')
        results['crm_prd_info.text_trimmed'] = untrimmed_text(products, ['prd_nm'])
        results['crm_prd_info.cost_not_negative'] = negative_or_null(products, 'prd_cost')
        results['crm_prd_info.product_line_domain'] = values_outside(
            products, 'prd_line', _labels(PRODUCT_LINE_MAPPING)
        )
        results['crm_prd_info.date_range'] = inverted_date_range(
            products, 'prd_start_dt', 'prd_end_dt'
        )

    sales = frames.get('crm_sales_details')
    if sales is not None:
        results['crm_sales_details.date_order'] = sales_dates_out_of_order(sales)
        results['crm_sales_details.sales_consistency'] = inconsistent_sales(sales)

    erp_customers = frames.get('erp_cust_az12')
    if erp_customers is not None:
        results['erp_cust_az12.birthdate_not_future'] = future_dates(erp_customers, 'bdate', as_of)
        results['erp_cust_az12.gender_domain'] = values_outside(
            erp_customers, 'gen', _labels(ERP_GENDER_MAPPING)
        )

    locations = frames.get('erp_loc_a101')
    if locations is not None:
        results['erp_loc_a101.country_present'] = blank_values(locations, 'ctry')

    categories = frames.get('erp_px_cat_g1v2')
    if categories is not None:
        results['erp_px_cat_g1v2.text_trimmed'] = untrimmed_text(
            categories, ['id', 'cat', 'subcat', 'maintenance']
        )

    return results


def run_gold_checks(
    dim_customers: pd.DataFrame,
    dim_products: pd.DataFrame,
    fact_sales: pd.DataFrame
) -> Dict[str, pd.DataFrame]:
    """Run the gold checks: surrogate key uniqueness and fact integrity."""
    return {
        'dim_customers.customer_key_unique': duplicate_or_null_keys(dim_customers, 'customer_key'),
        'dim_products.product_key_unique': duplicate_or_null_keys(dim_products, 'product_key'),
        'fact_sales.orphan_rows': orphan_facts(fact_sales, dim_customers, dim_products),
    }


def assert_checks_pass(results: Mapping[str, pd.DataFrame]) -> None:
    """
    Raise if any check returned rows.

    Raises:
        QualityCheckError: Naming every failed check and its row count
    """
    failed = {name: len(rows) for name, rows in results.items() if len(rows) > 0}
    if failed:
        raise QualityCheckError(failed)


def fetch_silver_frames() -> Dict[str, pd.DataFrame]:
    """Read every silver table (without the audit column)."""
    return {
        table.name: fetch_dataframe(SILVER_SCHEMA, table.name, table.conformed_columns)
        for table in ALL_TABLES
    }


def verify_warehouse(as_of: Optional[datetime] = None) -> Dict[str, pd.DataFrame]:
    """
    Run the silver and gold checks against the current silver snapshot.

    The gold model is rebuilt in pandas from the same snapshot, so both
    suites see consistent data.
    """
    frames = fetch_silver_frames()
    dim_customers = build_dim_customers(
        frames['crm_cust_info'], frames['erp_cust_az12'], frames['erp_loc_a101']
    )
    dim_products = build_dim_products(frames['crm_prd_info'], frames['erp_px_cat_g1v2'])
    fact_sales = build_fact_sales(frames['crm_sales_details'], dim_products, dim_customers)

    results = run_silver_checks(frames, as_of=as_of)
    results.update(run_gold_checks(dim_customers, dim_products, fact_sales))
    logger.info(
        "Ran %d checks, %d failed",
        len(results), sum(1 for rows in results.values() if len(rows) > 0)
    )
    return results


def print_verification_report(results: Mapping[str, pd.DataFrame]) -> None:
    """Print a summary of check results."""
    print("=" * 60)
    print("WAREHOUSE VERIFICATION REPORT")
    print(f"Generated: {datetime.now().isoformat()}")
    print("=" * 60)

    failed = [name for name, rows in results.items() if len(rows) > 0]
    print(f"\nCHECKS RUN: {len(results)}")
    print(f"CHECKS FAILED: {len(failed)}")

    for name, rows in results.items():
        status = 'FAIL' if len(rows) > 0 else 'OK'
        print(f"  [{status}] {name}: {len(rows)} row(s)")

    for name in failed:
        print(f"\nSAMPLE: {name}")
        print(results[name].head(5).to_string(index=False))

    print("\n" + "=" * 60)
