# Tests for transformations/erp - customer demographics, location and category
# Run with: pytest tests/test_erp_transformations.py -v

from datetime import date, datetime

import pandas as pd
import pytest

from warehouse.transformations.erp import (
    transform_erp_category,
    transform_erp_customer,
    transform_erp_location,
)


class TestTransformErpCustomer:

    @pytest.fixture
    def raw(self):
        return pd.DataFrame({
            'cid': ['NASAW00011000', 'AW00011001', None],
            'bdate': ['1971-10-06', '2050-01-01', None],
            'gen': [' F', 'male', None],
        })

    def test_prefix_stripped(self, raw):
        result = transform_erp_customer(raw, as_of=datetime(2026, 1, 1))

        assert result['cid'].iloc[0] == 'AW00011000'
        assert result['cid'].iloc[1] == 'AW00011001'
        assert pd.isna(result['cid'].iloc[2])

    def test_future_birthdates_nulled(self, raw):
        result = transform_erp_customer(raw, as_of=datetime(2026, 1, 1))

        assert result['bdate'].iloc[0] == date(1971, 10, 6)
        assert pd.isna(result['bdate'].iloc[1])
        assert pd.isna(result['bdate'].iloc[2])

    def test_cutoff_is_processing_time(self, raw):
        result = transform_erp_customer(raw, as_of=datetime(2051, 1, 1))

        assert result['bdate'].iloc[1] == date(2050, 1, 1)

    def test_gender_tokens(self, raw):
        result = transform_erp_customer(raw, as_of=datetime(2026, 1, 1))

        assert result['gen'].tolist() == ['Female', 'Male', 'n/a']


class TestTransformErpLocation:

    def test_separators_removed(self):
        raw = pd.DataFrame({'cid': ['AW-00011000', 'AW-000-11001'], 'ctry': ['DE', 'US']})

        result = transform_erp_location(raw)

        assert result['cid'].tolist() == ['AW00011000', 'AW00011001']

    def test_country_normalized(self):
        raw = pd.DataFrame({
            'cid': ['A', 'B', 'C', 'D', 'E', 'F'],
            'ctry': ['DE', ' usa ', 'US', '', None, 'Australia '],
        })

        result = transform_erp_location(raw)

        assert result['ctry'].tolist() == [
            'Germany', 'United States', 'United States', 'n/a', 'n/a', 'Australia',
        ]


class TestTransformErpCategory:

    def test_passthrough(self, raw_erp_categories):
        result = transform_erp_category(raw_erp_categories)

        pd.testing.assert_frame_equal(result, raw_erp_categories)
