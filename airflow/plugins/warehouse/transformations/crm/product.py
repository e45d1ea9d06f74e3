"""
CRM product transformations.

Source tables:
- bronze.crm_prd_info -> silver.crm_prd_info
"""
from typing import Mapping

import pandas as pd

from warehouse.transformations._constants import PRODUCT_LINE_MAPPING
from warehouse.transformations._helpers import (
    derive_end_dates,
    map_code,
    split_product_key,
    to_datetime,
    to_integer,
)

__all__ = ['transform_crm_product']


def transform_crm_product(
    df: pd.DataFrame,
    product_line_mapping: Mapping[str, str] = PRODUCT_LINE_MAPPING,
) -> pd.DataFrame:
    """
    Transform crm_prd_info -> silver crm_prd_info.

    Natural Key: prd_key, prd_start_dt

    The composite source key is split into cat_id and prd_key. The stored
    end date is ignored: each version ends the day before the next version
    of the same product starts, and the current version has no end date.

    Columns:
        prd_id: Product id
        cat_id: Category id (joins erp_px_cat_g1v2.id)
        prd_key: Product key (joins crm_sales_details.sls_prd_key)
        prd_nm: Product name
        prd_cost: Cost, 0 when missing
        prd_line: Mountain / Road / other Sales / Touring / n/a
        prd_start_dt: Version start date
        prd_end_dt: Version end date (null = current)
    """
    result = df.reset_index(drop=True)
    keys = result['prd_key'].map(split_product_key)
    start_dates = to_datetime(result['prd_start_dt']).dt.normalize()

    derived = pd.DataFrame({
        'cat_id': keys.map(lambda parts: parts[0]),
        'prd_key': keys.map(lambda parts: parts[1]),
        'prd_start_dt': start_dates,
    })
    end_dates = derive_end_dates(derived, key='prd_key', start='prd_start_dt')

    return pd.DataFrame({
        'prd_id': to_integer(result['prd_id']),
        'cat_id': derived['cat_id'],
        'prd_key': derived['prd_key'],
        'prd_nm': result['prd_nm'],
        'prd_cost': to_integer(result['prd_cost']).fillna(0),
        'prd_line': result['prd_line'].map(lambda code: map_code(code, product_line_mapping)),
        'prd_start_dt': start_dates.dt.date,
        'prd_end_dt': end_dates.dt.date,
    })
