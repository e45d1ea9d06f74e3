"""
CRM table configurations.

Files exported from the CRM system land under source_crm/ in the
landing container.
"""
from warehouse.tables.base import TableConfig
from warehouse.transformations.crm import (
    transform_crm_customer,
    transform_crm_product,
    transform_crm_sales,
)


CRM_TABLES = [
    TableConfig(
        source_system="crm",
        name="crm_cust_info",
        landing_path="source_crm/cust_info.csv",
        raw_columns=(
            "cst_id", "cst_key", "cst_firstname", "cst_lastname",
            "cst_marital_status", "cst_gndr", "cst_create_date",
        ),
        conformed_columns=(
            "cst_id", "cst_key", "cst_firstname", "cst_lastname",
            "cst_marital_status", "cst_gndr", "cst_create_date",
        ),
        transform=transform_crm_customer,
        natural_key=("cst_id",),
        description="Customer master, latest record per customer"
    ),
    TableConfig(
        source_system="crm",
        name="crm_prd_info",
        landing_path="source_crm/prd_info.csv",
        raw_columns=(
            "prd_id", "prd_key", "prd_nm", "prd_cost",
            "prd_line", "prd_start_dt", "prd_end_dt",
        ),
        conformed_columns=(
            "prd_id", "cat_id", "prd_key", "prd_nm", "prd_cost",
            "prd_line", "prd_start_dt", "prd_end_dt",
        ),
        transform=transform_crm_product,
        natural_key=("prd_key", "prd_start_dt"),
        description="Product versions with derived validity end dates"
    ),
    TableConfig(
        source_system="crm",
        name="crm_sales_details",
        landing_path="source_crm/sales_details.csv",
        raw_columns=(
            "sls_ord_num", "sls_prd_key", "sls_cust_id",
            "sls_order_dt", "sls_ship_dt", "sls_due_dt",
            "sls_sales", "sls_quantity", "sls_price",
        ),
        conformed_columns=(
            "sls_ord_num", "sls_prd_key", "sls_cust_id",
            "sls_order_dt", "sls_ship_dt", "sls_due_dt",
            "sls_sales", "sls_quantity", "sls_price",
        ),
        transform=transform_crm_sales,
        description="Sales order lines with repaired dates and amounts"
    ),
]
