"""
Silver layer load.

Each entity is read as a full bronze snapshot, transformed in pandas and
written back with a full replace of the silver table. Entities run one at
a time in ALL_TABLES order; the first failure aborts the run, leaving the
failing entity rolled back and later entities untouched.
"""
import logging
import time
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import pymssql

from warehouse.errors import EntityLoadError
from warehouse.tables import ALL_TABLES, BRONZE_SCHEMA, SILVER_SCHEMA, TableConfig
from warehouse.warehouse_db import fetch_dataframe, full_replace

logger = logging.getLogger(__name__)


def _describe_error(exc: Exception) -> Dict[str, Any]:
    """Extract error number, message and state from a database exception."""
    number = None
    message = str(exc)
    # pymssql errors carry (number, message bytes) in args
    if isinstance(exc, pymssql.Error) and len(exc.args) >= 2 and isinstance(exc.args[0], int):
        number = exc.args[0]
        detail = exc.args[1]
        message = detail.decode('utf-8', errors='replace') if isinstance(detail, bytes) else str(detail)
    return {
        'error_number': number,
        'error_message': message,
        'error_state': type(exc).__name__,
    }


def load_table(
    table_config: TableConfig,
    load_timestamp: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Rebuild one silver table from its bronze snapshot.

    Args:
        table_config: Entity to load
        load_timestamp: Value for dwh_create_date (defaults to now)

    Returns:
        Dict with table, rows_read, rows_written, duration_seconds
    """
    load_timestamp = load_timestamp or datetime.now()
    start = time.monotonic()

    logger.info("Loading table: %s", table_config.silver_table)
    raw = fetch_dataframe(BRONZE_SCHEMA, table_config.name, table_config.raw_columns)
    conformed = table_config.transform(raw)
    conformed = conformed[list(table_config.conformed_columns)]

    rows_written = full_replace(
        SILVER_SCHEMA,
        table_config.name,
        conformed,
        load_timestamp=load_timestamp,
    )
    duration = round(time.monotonic() - start, 3)
    logger.info(
        ">> %s: %d raw rows -> %d conformed rows in %.3f seconds",
        table_config.silver_table, len(raw), rows_written, duration
    )

    return {
        'table': table_config.name,
        'rows_read': len(raw),
        'rows_written': rows_written,
        'duration_seconds': duration,
    }


def load_silver(
    tables: Sequence[TableConfig] = ALL_TABLES,
    load_timestamp: Optional[datetime] = None
) -> List[Dict[str, Any]]:
    """
    Load every silver table, stopping at the first failure.

    All tables loaded by one call share a single load timestamp
    (defaults to now).

    Raises:
        EntityLoadError: When a table fails; carries the database error
            number, message and state when available
    """
    load_timestamp = load_timestamp or datetime.now()
    run_start = time.monotonic()
    results = []

    logger.info("Loading silver layer (%d tables)", len(tables))
    for table_config in tables:
        try:
            results.append(load_table(table_config, load_timestamp))
        except Exception as e:
            details = _describe_error(e)
            logger.error(
                "Error occurred during loading %s: %s (error number: %s, state: %s)",
                table_config.silver_table,
                details['error_message'],
                details['error_number'],
                details['error_state'],
            )
            raise EntityLoadError(
                table_config.name,
                details['error_message'],
                error_number=details['error_number'],
                error_state=details['error_state'],
            ) from e

    logger.info(
        "Loading silver layer is completed in %.3f seconds",
        time.monotonic() - run_start
    )
    return results
