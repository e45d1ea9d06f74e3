# Tests for transformations/crm - customer, product and sales normalizers
# Run with: pytest tests/test_crm_transformations.py -v

from datetime import date

import pandas as pd
import pytest

from warehouse.tables import get_table
from warehouse.transformations.crm import (
    transform_crm_customer,
    transform_crm_product,
    transform_crm_sales,
)


class TestTransformCrmCustomer:

    def test_latest_row_per_customer(self, raw_crm_customers):
        result = transform_crm_customer(raw_crm_customers)

        assert result['cst_id'].tolist() == [11000, 11001]
        assert result['cst_create_date'].tolist() == [date(2025, 10, 9), date(2025, 10, 7)]

    def test_names_trimmed_and_codes_mapped(self, raw_crm_customers):
        result = transform_crm_customer(raw_crm_customers)

        assert result['cst_firstname'].tolist() == ['Jon', 'Eugene']
        assert result['cst_lastname'].tolist() == ['Yang', 'Huang']
        assert result['cst_marital_status'].tolist() == ['Married', 'Single']
        assert result['cst_gndr'].tolist() == ['Male', 'n/a']

    def test_null_ids_are_discarded(self):
        raw = pd.DataFrame({
            'cst_id': [None, '5'],
            'cst_key': ['AW0', 'AW5'],
            'cst_firstname': ['A', 'B'],
            'cst_lastname': ['A', 'B'],
            'cst_marital_status': ['s', ' m'],
            'cst_gndr': ['f', 'F '],
            'cst_create_date': ['2025-01-01', '2025-01-01'],
        })

        result = transform_crm_customer(raw)

        assert result['cst_id'].tolist() == [5]
        assert result['cst_marital_status'].tolist() == ['Married']
        assert result['cst_gndr'].tolist() == ['Female']

    def test_custom_mapping(self, raw_crm_customers):
        result = transform_crm_customer(raw_crm_customers, gender_mapping={'M': 'Man'})

        assert result['cst_gndr'].tolist() == ['Man', 'n/a']

    def test_output_matches_conformed_columns(self, raw_crm_customers):
        result = transform_crm_customer(raw_crm_customers)

        assert tuple(result.columns) == get_table('crm_cust_info').conformed_columns

    def test_idempotent(self, raw_crm_customers):
        pd.testing.assert_frame_equal(
            transform_crm_customer(raw_crm_customers),
            transform_crm_customer(raw_crm_customers),
        )


class TestTransformCrmProduct:

    def test_key_split(self, raw_crm_products):
        result = transform_crm_product(raw_crm_products)

        assert result['cat_id'].tolist() == ['CO_RF', 'BI_RB', 'BI_RB']
        assert result['prd_key'].tolist() == ['FR-R92B-58', 'BK-R93R-62', 'BK-R93R-62']

    def test_end_dates_from_next_version(self, raw_crm_products):
        result = transform_crm_product(raw_crm_products)

        assert pd.isna(result['prd_end_dt'].iloc[0])
        assert result['prd_end_dt'].iloc[1] == date(2023, 5, 31)
        assert pd.isna(result['prd_end_dt'].iloc[2])

    def test_stored_end_date_is_ignored(self, raw_crm_products):
        raw = raw_crm_products.assign(prd_end_dt=['2099-01-01', '2000-01-01', '2000-01-01'])

        result = transform_crm_product(raw)

        assert result['prd_end_dt'].iloc[1] == date(2023, 5, 31)
        assert pd.isna(result['prd_end_dt'].iloc[2])

    def test_versions_out_of_order(self):
        raw = pd.DataFrame({
            'prd_id': ['2', '1'],
            'prd_key': ['BI-RB-BK-R93R-62', 'BI-RB-BK-R93R-62'],
            'prd_nm': ['Road-150', 'Road-150'],
            'prd_cost': ['10', '9'],
            'prd_line': ['R', 'R'],
            'prd_start_dt': ['2023-06-01', '2023-01-01'],
            'prd_end_dt': [None, None],
        })

        result = transform_crm_product(raw)

        assert pd.isna(result['prd_end_dt'].iloc[0])
        assert result['prd_end_dt'].iloc[1] == date(2023, 5, 31)

    def test_cost_defaults_to_zero(self, raw_crm_products):
        result = transform_crm_product(raw_crm_products)

        assert result['prd_cost'].tolist() == [0, 2171, 2200]

    def test_product_line_mapping(self, raw_crm_products):
        raw = raw_crm_products.assign(prd_line=[' m', 'S', 'x'])

        result = transform_crm_product(raw)

        assert result['prd_line'].tolist() == ['Mountain', 'other Sales', 'n/a']

    def test_start_dates_are_calendar_dates(self, raw_crm_products):
        result = transform_crm_product(raw_crm_products)

        assert result['prd_start_dt'].tolist() == [
            date(2003, 7, 1), date(2023, 1, 1), date(2023, 6, 1),
        ]

    def test_output_matches_conformed_columns(self, raw_crm_products):
        result = transform_crm_product(raw_crm_products)

        assert tuple(result.columns) == get_table('crm_prd_info').conformed_columns


class TestTransformCrmSales:

    @pytest.fixture
    def messy_sales(self):
        return pd.DataFrame({
            'sls_ord_num': ['SO1', 'SO2', 'SO3', 'SO4', 'SO5'],
            'sls_prd_key': ['BK-R93R-62'] * 5,
            'sls_cust_id': ['1', '2', '3', '4', '5'],
            'sls_order_dt': ['20240115', '0', '2024011', '20231332', '20240201'],
            'sls_ship_dt': ['20240122'] * 5,
            'sls_due_dt': ['20240127'] * 5,
            'sls_sales': ['0', '100', '30', '50', None],
            'sls_quantity': ['2', '5', '3', '3', '0'],
            'sls_price': ['10', None, '10', '10', None],
        })

    def test_packed_dates(self, messy_sales):
        result = transform_crm_sales(messy_sales)

        assert result['sls_order_dt'].iloc[0] == date(2024, 1, 15)
        assert result['sls_order_dt'].iloc[1:4].isna().all()
        assert result['sls_ship_dt'].iloc[0] == date(2024, 1, 22)

    def test_zero_amount_recomputed(self, messy_sales):
        result = transform_crm_sales(messy_sales)

        assert result['sls_sales'].iloc[0] == 20
        assert result['sls_price'].iloc[0] == 10

    def test_missing_price_derived(self, messy_sales):
        result = transform_crm_sales(messy_sales)

        assert result['sls_sales'].iloc[1] == 100
        assert result['sls_price'].iloc[1] == 20

    def test_inconsistent_amount_recomputed(self, messy_sales):
        result = transform_crm_sales(messy_sales)

        assert result['sls_sales'].iloc[2] == 30
        assert result['sls_sales'].iloc[3] == 30

    def test_zero_quantity_leaves_price_null(self, messy_sales):
        result = transform_crm_sales(messy_sales)

        assert result['sls_quantity'].iloc[4] == 0
        assert pd.isna(result['sls_price'].iloc[4])

    def test_sales_equals_quantity_times_price(self, raw_crm_sales):
        result = transform_crm_sales(raw_crm_sales)

        assert (result['sls_sales'] == result['sls_quantity'] * result['sls_price']).all()

    def test_derived_price_truncates(self):
        raw = pd.DataFrame({
            'sls_ord_num': ['SO1'],
            'sls_prd_key': ['BK-R93R-62'],
            'sls_cust_id': ['1'],
            'sls_order_dt': ['20240115'],
            'sls_ship_dt': ['20240122'],
            'sls_due_dt': ['20240127'],
            'sls_sales': ['100'],
            'sls_quantity': ['3'],
            'sls_price': [None],
        })

        result = transform_crm_sales(raw)

        # amount is kept (no price to compare against), price is 100 / 3 truncated
        assert result['sls_sales'].iloc[0] == 100
        assert result['sls_price'].iloc[0] == 33

    def test_output_matches_conformed_columns(self, raw_crm_sales):
        result = transform_crm_sales(raw_crm_sales)

        assert tuple(result.columns) == get_table('crm_sales_details').conformed_columns

    def test_idempotent(self, messy_sales):
        pd.testing.assert_frame_equal(
            transform_crm_sales(messy_sales),
            transform_crm_sales(messy_sales),
        )
