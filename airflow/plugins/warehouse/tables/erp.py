"""
ERP table configurations.

Files exported from the ERP system land under source_erp/ in the
landing container.
"""
from warehouse.tables.base import TableConfig
from warehouse.transformations.erp import (
    transform_erp_category,
    transform_erp_customer,
    transform_erp_location,
)


ERP_TABLES = [
    TableConfig(
        source_system="erp",
        name="erp_cust_az12",
        landing_path="source_erp/CUST_AZ12.csv",
        raw_columns=("cid", "bdate", "gen"),
        conformed_columns=("cid", "bdate", "gen"),
        transform=transform_erp_customer,
        natural_key=("cid",),
        description="Customer birthdate and gender"
    ),
    TableConfig(
        source_system="erp",
        name="erp_loc_a101",
        landing_path="source_erp/LOC_A101.csv",
        raw_columns=("cid", "ctry"),
        conformed_columns=("cid", "ctry"),
        transform=transform_erp_location,
        natural_key=("cid",),
        description="Customer country"
    ),
    TableConfig(
        source_system="erp",
        name="erp_px_cat_g1v2",
        landing_path="source_erp/PX_CAT_G1V2.csv",
        raw_columns=("id", "cat", "subcat", "maintenance"),
        conformed_columns=("id", "cat", "subcat", "maintenance"),
        transform=transform_erp_category,
        natural_key=("id",),
        description="Product category and subcategory map"
    ),
]
