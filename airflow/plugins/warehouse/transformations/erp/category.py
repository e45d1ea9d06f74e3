"""
ERP product category transformations.

Source tables:
- bronze.erp_px_cat_g1v2 -> silver.erp_px_cat_g1v2
"""
import pandas as pd

__all__ = ['transform_erp_category']


def transform_erp_category(df: pd.DataFrame) -> pd.DataFrame:
    """
    Transform erp_px_cat_g1v2 -> silver erp_px_cat_g1v2.

    Key: id (matches crm_prd_info.cat_id)

    Passthrough copy, the source is already clean.
    """
    return pd.DataFrame({
        'id': df['id'],
        'cat': df['cat'],
        'subcat': df['subcat'],
        'maintenance': df['maintenance'],
    }).reset_index(drop=True)
