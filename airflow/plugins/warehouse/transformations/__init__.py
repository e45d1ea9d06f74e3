"""
Silver layer transformation functions.

This package provides the cleansing and standardization rules applied when
moving raw bronze rows into the conformed silver layer, plus the gold star
schema built on top of silver.

Structure:
    _constants.py   - Code-to-label lookup tables and key layouts
    _helpers.py     - Shared helper functions (normalization, dedup, dates)
    crm/            - CRM source transformations
    erp/            - ERP source transformations
    gold.py         - Star schema (dimensions and fact)

Usage:
    from warehouse.transformations.crm import transform_crm_customer

    silver_df = transform_crm_customer(bronze_df)

Extending:
    1. New source table: Add module to crm/ or erp/ and register it in
       warehouse.tables
    2. New mapping: Add to _constants.py
    3. New helper: Add to _helpers.py
"""
from warehouse.transformations._constants import (
    NOT_AVAILABLE,
    MARITAL_STATUS_MAPPING,
    CRM_GENDER_MAPPING,
    PRODUCT_LINE_MAPPING,
    ERP_GENDER_MAPPING,
    COUNTRY_MAPPING,
)

from warehouse.transformations.crm import (
    transform_crm_customer,
    transform_crm_product,
    transform_crm_sales,
)
from warehouse.transformations.erp import (
    transform_erp_customer,
    transform_erp_location,
    transform_erp_category,
)
from warehouse.transformations.gold import (
    build_dim_customers,
    build_dim_products,
    build_fact_sales,
)

__all__ = [
    # Constants
    'NOT_AVAILABLE',
    'MARITAL_STATUS_MAPPING',
    'CRM_GENDER_MAPPING',
    'PRODUCT_LINE_MAPPING',
    'ERP_GENDER_MAPPING',
    'COUNTRY_MAPPING',
    # CRM transformations
    'transform_crm_customer',
    'transform_crm_product',
    'transform_crm_sales',
    # ERP transformations
    'transform_erp_customer',
    'transform_erp_location',
    'transform_erp_category',
    # Gold
    'build_dim_customers',
    'build_dim_products',
    'build_fact_sales',
]
