"""
CRM customer transformations.

Source tables:
- bronze.crm_cust_info -> silver.crm_cust_info
"""
from typing import Mapping

import pandas as pd

from warehouse.transformations._constants import CRM_GENDER_MAPPING, MARITAL_STATUS_MAPPING
from warehouse.transformations._helpers import keep_latest, map_code, to_datetime, to_integer, trim_text

__all__ = ['transform_crm_customer']


def transform_crm_customer(
    df: pd.DataFrame,
    marital_status_mapping: Mapping[str, str] = MARITAL_STATUS_MAPPING,
    gender_mapping: Mapping[str, str] = CRM_GENDER_MAPPING,
) -> pd.DataFrame:
    """
    Transform crm_cust_info -> silver crm_cust_info.

    Natural Key: cst_id (one row per id, nulls dropped)

    The most recently created row per customer wins; see keep_latest for
    the tie-break.

    Columns:
        cst_id: Customer id
        cst_key: Customer number (as landed)
        cst_firstname / cst_lastname: Trimmed names
        cst_marital_status: Married / Single / n/a
        cst_gndr: Female / Male / n/a
        cst_create_date: Creation date
    """
    raw = df.assign(
        cst_id=to_integer(df['cst_id']),
        cst_create_date=to_datetime(df['cst_create_date']),
    )
    latest = keep_latest(raw, key='cst_id', order_by='cst_create_date')

    return pd.DataFrame({
        'cst_id': latest['cst_id'],
        'cst_key': latest['cst_key'],
        'cst_firstname': latest['cst_firstname'].map(trim_text),
        'cst_lastname': latest['cst_lastname'].map(trim_text),
        'cst_marital_status': latest['cst_marital_status'].map(
            lambda code: map_code(code, marital_status_mapping)
        ),
        'cst_gndr': latest['cst_gndr'].map(lambda code: map_code(code, gender_mapping)),
        'cst_create_date': latest['cst_create_date'].dt.date,
    })
