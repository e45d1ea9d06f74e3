# Tests for ingestion.py and datalake.py - landing files into bronze
# Run with: pytest tests/test_ingestion.py -v

import json
from unittest.mock import MagicMock, patch

import pytest

from warehouse import datalake
from warehouse.ingestion import ingest_table, read_landing_file
from warehouse.tables import get_table

LOCATIONS_CSV = "ctry,cid,extra\nDE,AW-00011000,1\n,AW-00011001,2\n"


@pytest.fixture
def mock_read():
    with patch('warehouse.ingestion.read_from_datalake', return_value=LOCATIONS_CSV) as read:
        yield read


class TestReadLandingFile:

    def test_raw_columns_in_table_order(self, mock_read):
        df = read_landing_file(get_table('erp_loc_a101'))

        mock_read.assert_called_once_with('landing', 'source_erp/LOC_A101.csv')
        assert list(df.columns) == ['cid', 'ctry']
        assert df['cid'].tolist() == ['AW-00011000', 'AW-00011001']

    def test_values_stay_strings_and_blanks_are_null(self):
        csv = "cst_id,cst_key,cst_firstname,cst_lastname,cst_marital_status,cst_gndr,cst_create_date\n" \
              "00042,AW42, Jon ,Yang,M,,2025-10-06\n"
        with patch('warehouse.ingestion.read_from_datalake', return_value=csv):
            df = read_landing_file(get_table('crm_cust_info'))

        assert df['cst_id'].iloc[0] == '00042'
        assert df['cst_firstname'].iloc[0] == ' Jon '
        assert df['cst_gndr'].isna().all()

    def test_missing_column(self):
        with patch('warehouse.ingestion.read_from_datalake', return_value="cid\nAW-1\n"):
            with pytest.raises(ValueError, match=r"\['ctry'\]"):
                read_landing_file(get_table('erp_loc_a101'))


class TestIngestTable:

    def test_full_replace_without_audit_column(self, mock_read):
        with patch('warehouse.ingestion.full_replace', return_value=2) as replace, \
                patch('warehouse.ingestion.write_metadata') as metadata:
            result = ingest_table(get_table('erp_loc_a101'))

        schema, table, df = replace.call_args[0]
        assert (schema, table) == ('bronze', 'erp_loc_a101')
        assert 'load_timestamp' not in replace.call_args[1]
        assert len(df) == 2
        metadata.assert_called_once_with(
            'landing',
            'source_erp/LOC_A101.csv',
            target_table='bronze.erp_loc_a101',
            extra={'row_count': 2},
        )
        assert result == {
            'table': 'erp_loc_a101',
            'source': 'landing/source_erp/LOC_A101.csv',
            'rows_written': 2,
        }


class TestDatalake:

    def test_client_requires_credentials(self, monkeypatch):
        monkeypatch.delenv('AZURE_STORAGE_ACCOUNT_NAME', raising=False)
        monkeypatch.delenv('AZURE_STORAGE_ACCOUNT_KEY', raising=False)

        with pytest.raises(ValueError, match='AZURE_STORAGE_ACCOUNT_NAME'):
            datalake.get_datalake_client()

    def test_metadata_written_beside_file(self):
        with patch('warehouse.datalake.write_to_datalake') as write:
            datalake.write_metadata(
                'landing',
                'source_crm/cust_info.csv',
                target_table='bronze.crm_cust_info',
                extra={'row_count': 18494},
            )

        container, path, payload = write.call_args[0]
        assert container == 'landing'
        assert path == 'source_crm/_metadata/cust_info.csv.json'
        metadata = json.loads(payload)
        assert metadata['source_path'] == 'landing/source_crm/cust_info.csv'
        assert metadata['target_table'] == 'bronze.crm_cust_info'
        assert metadata['row_count'] == 18494

    def test_wait_for_file_times_out(self):
        with patch('warehouse.datalake.file_exists', return_value=False), \
                patch('warehouse.datalake.time.sleep'):
            with pytest.raises(TimeoutError):
                datalake.wait_for_file('landing', 'source_crm/cust_info.csv', timeout_seconds=0)

    def test_read_decodes_utf8(self):
        file_client = MagicMock()
        file_client.download_file.return_value.readall.return_value = '\ufeffcid\nAW-1\n'.encode('utf-8')

        with patch('warehouse.datalake._get_file_client', return_value=file_client):
            assert datalake.read_from_datalake('landing', 'x.csv') == 'cid\nAW-1\n'
