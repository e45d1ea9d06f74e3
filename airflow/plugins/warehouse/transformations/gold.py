"""
Gold layer star schema built from silver tables.

The same model is deployed as SQL views (see warehouse.views); these
pandas renditions feed the quality checks and local analysis.

Tables:
- dim_customers: CRM customers enriched with ERP demographics and country
- dim_products: Current product versions with their category
- fact_sales: Sales lines keyed by the dimension surrogate keys
"""
import numpy as np
import pandas as pd

from warehouse.transformations._constants import NOT_AVAILABLE

__all__ = ['build_dim_customers', 'build_dim_products', 'build_fact_sales']


def _surrogate_keys(length: int) -> np.ndarray:
    return np.arange(1, length + 1)


def build_dim_customers(
    crm_customers: pd.DataFrame,
    erp_customers: pd.DataFrame,
    erp_locations: pd.DataFrame
) -> pd.DataFrame:
    """
    Create dim_customers from silver customer tables.

    Join Logic:
        crm_cust_info (base, ordered by cst_id)
        LEFT JOIN erp_cust_az12 ON cst_key = cid
        LEFT JOIN erp_loc_a101 ON cst_key = cid

    Gender comes from CRM unless CRM says 'n/a', then from ERP.

    Returns:
        DataFrame with customer_key assigned 1..n in customer_id order
    """
    result = crm_customers.sort_values('cst_id', kind='mergesort')

    result = result.merge(
        erp_customers[['cid', 'bdate', 'gen']],
        left_on='cst_key',
        right_on='cid',
        how='left'
    )
    result = result.merge(
        erp_locations[['cid', 'ctry']].rename(columns={'cid': 'loc_cid'}),
        left_on='cst_key',
        right_on='loc_cid',
        how='left'
    )

    gender = result['cst_gndr'].where(
        result['cst_gndr'] != NOT_AVAILABLE,
        result['gen'].fillna(NOT_AVAILABLE)
    )

    return pd.DataFrame({
        'customer_key': _surrogate_keys(len(result)),
        'customer_id': result['cst_id'],
        'customer_number': result['cst_key'],
        'first_name': result['cst_firstname'],
        'last_name': result['cst_lastname'],
        'country': result['ctry'],
        'marital_status': result['cst_marital_status'],
        'gender': gender,
        'birthdate': result['bdate'],
        'create_date': result['cst_create_date'],
    })


def build_dim_products(
    crm_products: pd.DataFrame,
    erp_categories: pd.DataFrame
) -> pd.DataFrame:
    """
    Create dim_products from current product versions.

    Join Logic:
        crm_prd_info WHERE prd_end_dt IS NULL (ordered by prd_start_dt, prd_key)
        LEFT JOIN erp_px_cat_g1v2 ON cat_id = id

    Returns:
        DataFrame with product_key assigned 1..n in (start date, key) order
    """
    current = crm_products[crm_products['prd_end_dt'].isna()].copy()
    current['_start'] = pd.to_datetime(current['prd_start_dt'], errors='coerce')
    current = current.sort_values(['_start', 'prd_key'], kind='mergesort')

    result = current.merge(
        erp_categories[['id', 'cat', 'subcat', 'maintenance']],
        left_on='cat_id',
        right_on='id',
        how='left'
    )

    return pd.DataFrame({
        'product_key': _surrogate_keys(len(result)),
        'product_id': result['prd_id'],
        'product_number': result['prd_key'],
        'product_name': result['prd_nm'],
        'category_id': result['cat_id'],
        'category': result['cat'],
        'subcategory': result['subcat'],
        'maintenance': result['maintenance'],
        'cost': result['prd_cost'],
        'product_line': result['prd_line'],
        'start_date': result['prd_start_dt'],
    })


def build_fact_sales(
    crm_sales: pd.DataFrame,
    dim_products: pd.DataFrame,
    dim_customers: pd.DataFrame
) -> pd.DataFrame:
    """
    Create fact_sales from silver sales lines.

    Join Logic:
        crm_sales_details (base)
        LEFT JOIN dim_products ON sls_prd_key = product_number
        LEFT JOIN dim_customers ON sls_cust_id = customer_id

    Unmatched lines keep a null surrogate key; the orphan check in
    warehouse.verification reports them.
    """
    result = crm_sales.merge(
        dim_products[['product_number', 'product_key']],
        left_on='sls_prd_key',
        right_on='product_number',
        how='left'
    )
    result = result.merge(
        dim_customers[['customer_id', 'customer_key']],
        left_on='sls_cust_id',
        right_on='customer_id',
        how='left'
    )

    return pd.DataFrame({
        'order_number': result['sls_ord_num'],
        'product_key': result['product_key'].astype('Int64'),
        'customer_key': result['customer_key'].astype('Int64'),
        'order_date': result['sls_order_dt'],
        'shipping_date': result['sls_ship_dt'],
        'due_date': result['sls_due_dt'],
        'sales_amount': result['sls_sales'],
        'quantity': result['sls_quantity'],
        'price': result['sls_price'],
    })
