"""
Azure Data Lake Storage Operations

Source systems drop their CSV exports into the landing container; the
bronze ingestion reads them from there and records lineage metadata next
to each file.
"""
import json
import logging
import os
import time
from datetime import datetime

from azure.core.exceptions import ResourceNotFoundError
from azure.storage.filedatalake import DataLakeServiceClient

logger = logging.getLogger(__name__)

LANDING_CONTAINER = 'landing'


def get_datalake_client() -> DataLakeServiceClient:
    """Create Data Lake service client from AZURE_STORAGE_ACCOUNT_NAME/KEY."""
    account_name = os.environ.get('AZURE_STORAGE_ACCOUNT_NAME', '')
    account_key = os.environ.get('AZURE_STORAGE_ACCOUNT_KEY', '')
    if not account_name or not account_key:
        raise ValueError(
            "Missing AZURE_STORAGE_ACCOUNT_NAME or AZURE_STORAGE_ACCOUNT_KEY. "
            "Set these in /opt/airflow/.env"
        )
    account_url = f"https://{account_name}.dfs.core.windows.net"
    return DataLakeServiceClient(account_url=account_url, credential=account_key)


def _get_file_client(container: str, path: str):
    service_client = get_datalake_client()
    file_system_client = service_client.get_file_system_client(container)
    return file_system_client.get_file_client(path)


def write_to_datalake(container: str, path: str, data: str) -> None:
    """
    Write data to Data Lake, replacing any existing file.

    Args:
        container: Container name (e.g., landing)
        path: File path within container
        data: String data to write
    """
    _get_file_client(container, path).upload_data(data, overwrite=True)
    logger.info("Wrote data to %s/%s", container, path)


def read_from_datalake(container: str, path: str) -> str:
    """
    Read a file from Data Lake.

    Returns:
        File contents decoded as UTF-8 (a leading BOM is dropped)
    """
    download = _get_file_client(container, path).download_file()
    return download.readall().decode('utf-8-sig')


def file_exists(container: str, path: str) -> bool:
    """Check if file exists in Data Lake."""
    try:
        _get_file_client(container, path).get_file_properties()
        return True
    except ResourceNotFoundError:
        return False


def wait_for_file(
    container: str,
    path: str,
    timeout_seconds: int = 300,
    poll_interval: int = 10
) -> None:
    """
    Wait for a file to exist in Data Lake.

    Use this to wait for a source export before ingesting it.

    Raises:
        TimeoutError: If the file does not appear within timeout_seconds

    Example:
        >>> wait_for_file('landing', 'source_crm/cust_info.csv')
    """
    full_path = f"{container}/{path}"
    logger.info("Waiting for %s (timeout: %ss)...", full_path, timeout_seconds)

    start_time = time.time()
    attempts = 0

    while time.time() - start_time < timeout_seconds:
        attempts += 1
        if file_exists(container, path):
            logger.info("Found %s after %d attempt(s)", full_path, attempts)
            return
        logger.info("  Attempt %d: Not found, retrying in %ss...", attempts, poll_interval)
        time.sleep(poll_interval)

    elapsed = time.time() - start_time
    raise TimeoutError(
        f"Timeout waiting for {full_path} after {elapsed:.1f}s ({attempts} attempts)"
    )


def write_metadata(
    container: str,
    path: str,
    target_table: str = None,
    extra: dict = None
) -> None:
    """
    Write a lineage record next to a landed file.

    Args:
        container: Container name
        path: Path of the landed file (metadata written to
            _metadata/<file name>.json in the same directory)
        target_table: Qualified table the file was loaded into
        extra: Additional metadata fields
    """
    metadata = {
        'source_path': f"{container}/{path}",
        'written_at': datetime.now().isoformat(),
    }

    if target_table:
        metadata['target_table'] = target_table
    if extra:
        metadata.update(extra)

    dir_path, _, file_name = path.rpartition('/')
    prefix = f"{dir_path}/" if dir_path else ''
    metadata_path = f"{prefix}_metadata/{file_name}.json"
    write_to_datalake(container, metadata_path, json.dumps(metadata, indent=2))
