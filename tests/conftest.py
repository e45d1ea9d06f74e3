"""Shared fixtures: a small raw snapshot of every source table, as landed in bronze."""
import pandas as pd
import pytest

from warehouse.tables import ALL_TABLES


@pytest.fixture
def raw_crm_customers():
    return pd.DataFrame({
        'cst_id': ['11000', '11001', '11000'],
        'cst_key': ['AW00011000', 'AW00011001', 'AW00011000'],
        'cst_firstname': [' Jon', 'Eugene ', 'Jon'],
        'cst_lastname': ['Yang', 'Huang', 'Yang '],
        'cst_marital_status': ['M', 'S', 'M'],
        'cst_gndr': ['M', None, 'M'],
        'cst_create_date': ['2025-10-06', '2025-10-07', '2025-10-09'],
    })


@pytest.fixture
def raw_crm_products():
    return pd.DataFrame({
        'prd_id': ['210', '211', '212'],
        'prd_key': ['CO-RF-FR-R92B-58', 'BI-RB-BK-R93R-62', 'BI-RB-BK-R93R-62'],
        'prd_nm': ['HL Road Frame - Black- 58', 'Road-150 Red- 62', 'Road-150 Red- 62'],
        'prd_cost': [None, '2171', '2200'],
        'prd_line': ['R', 'R', 'r '],
        'prd_start_dt': ['2003-07-01', '2023-01-01', '2023-06-01'],
        'prd_end_dt': [None, None, None],
    })


@pytest.fixture
def raw_crm_sales():
    return pd.DataFrame({
        'sls_ord_num': ['SO43697', 'SO43698', 'SO43699'],
        'sls_prd_key': ['BK-R93R-62', 'FR-R92B-58', 'BK-R93R-62'],
        'sls_cust_id': ['11000', '11001', '11000'],
        'sls_order_dt': ['20240115', '20240116', '20240117'],
        'sls_ship_dt': ['20240122', '20240123', '20240124'],
        'sls_due_dt': ['20240127', '20240128', '20240129'],
        'sls_sales': ['3578', '0', '100'],
        'sls_quantity': ['1', '2', '5'],
        'sls_price': ['3578', '10', None],
    })


@pytest.fixture
def raw_erp_customers():
    return pd.DataFrame({
        'cid': ['NASAW00011000', 'AW00011001'],
        'bdate': ['1971-10-06', '2060-01-01'],
        'gen': ['Male', 'F'],
    })


@pytest.fixture
def raw_erp_locations():
    return pd.DataFrame({
        'cid': ['AW-00011000', 'AW-00011001'],
        'ctry': ['US', ' DE'],
    })


@pytest.fixture
def raw_erp_categories():
    return pd.DataFrame({
        'id': ['BI_RB', 'CO_RF'],
        'cat': ['Bikes', 'Components'],
        'subcat': ['Road Bikes', 'Road Frames'],
        'maintenance': ['Yes', 'No'],
    })


@pytest.fixture
def raw_frames(
    raw_crm_customers,
    raw_crm_products,
    raw_crm_sales,
    raw_erp_customers,
    raw_erp_locations,
    raw_erp_categories,
):
    """Bronze snapshot keyed by table name."""
    return {
        'crm_cust_info': raw_crm_customers,
        'crm_prd_info': raw_crm_products,
        'crm_sales_details': raw_crm_sales,
        'erp_cust_az12': raw_erp_customers,
        'erp_loc_a101': raw_erp_locations,
        'erp_px_cat_g1v2': raw_erp_categories,
    }


@pytest.fixture
def silver_frames(raw_frames):
    """Silver snapshot produced by each table's transform."""
    return {table.name: table.transform(raw_frames[table.name]) for table in ALL_TABLES}
