"""
ERP customer location transformations.

Source tables:
- bronze.erp_loc_a101 -> silver.erp_loc_a101
"""
from typing import Mapping

import pandas as pd

from warehouse.transformations._constants import COUNTRY_MAPPING, LOCATION_ID_SEPARATOR
from warehouse.transformations._helpers import normalize_country, remove_separator

__all__ = ['transform_erp_location']


def transform_erp_location(
    df: pd.DataFrame,
    country_mapping: Mapping[str, str] = COUNTRY_MAPPING,
) -> pd.DataFrame:
    """
    Transform erp_loc_a101 -> silver erp_loc_a101.

    Key: cid (separators removed, matches crm_cust_info.cst_key)

    Columns:
        cid: Customer number
        ctry: Country label, 'n/a' when blank
    """
    return pd.DataFrame({
        'cid': df['cid'].map(lambda cid: remove_separator(cid, LOCATION_ID_SEPARATOR)),
        'ctry': df['ctry'].map(lambda country: normalize_country(country, country_mapping)),
    }).reset_index(drop=True)
