"""
ERP customer demographics transformations.

Source tables:
- bronze.erp_cust_az12 -> silver.erp_cust_az12
"""
from datetime import datetime
from typing import Mapping, Optional

import pandas as pd

from warehouse.transformations._constants import ERP_CUSTOMER_ID_PREFIX, ERP_GENDER_MAPPING
from warehouse.transformations._helpers import map_code, strip_prefix, to_datetime

__all__ = ['transform_erp_customer']


def transform_erp_customer(
    df: pd.DataFrame,
    as_of: Optional[datetime] = None,
    gender_mapping: Mapping[str, str] = ERP_GENDER_MAPPING,
) -> pd.DataFrame:
    """
    Transform erp_cust_az12 -> silver erp_cust_az12.

    Key: cid (after prefix strip, matches crm_cust_info.cst_key)

    Args:
        df: Bronze rows
        as_of: Processing time; birthdates after it are nulled (default: now)
        gender_mapping: Gender token lookup

    Columns:
        cid: Customer number without the NAS prefix
        bdate: Birthdate, null when in the future
        gen: Female / Male / n/a
    """
    cutoff = pd.Timestamp(as_of) if as_of is not None else pd.Timestamp.now()
    birthdates = to_datetime(df['bdate'])

    return pd.DataFrame({
        'cid': df['cid'].map(lambda cid: strip_prefix(cid, ERP_CUSTOMER_ID_PREFIX)),
        'bdate': birthdates.where(birthdates <= cutoff).dt.date,
        'gen': df['gen'].map(lambda token: map_code(token, gender_mapping)),
    }).reset_index(drop=True)
