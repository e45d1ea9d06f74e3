"""
Bronze layer ingestion.

Landed CSV exports are loaded as-is into bronze.<table>: every value stays
a string (empty cells become NULL) and the table is fully replaced on
each run. Typing and cleansing happen in the silver load.
"""
import logging
from io import StringIO
from typing import Any, Dict

import pandas as pd

from warehouse.datalake import LANDING_CONTAINER, read_from_datalake, write_metadata
from warehouse.tables import BRONZE_SCHEMA, TableConfig
from warehouse.warehouse_db import full_replace

logger = logging.getLogger(__name__)


def read_landing_file(table_config: TableConfig) -> pd.DataFrame:
    """
    Read the landed CSV for an entity.

    Returns:
        DataFrame with exactly the raw columns, in table order

    Raises:
        ValueError: If the file lacks one of the raw columns
    """
    content = read_from_datalake(LANDING_CONTAINER, table_config.landing_path)
    df = pd.read_csv(StringIO(content), dtype=str, keep_default_na=False, na_values=[''])

    missing = [c for c in table_config.raw_columns if c not in df.columns]
    if missing:
        raise ValueError(
            f"{LANDING_CONTAINER}/{table_config.landing_path} is missing "
            f"columns {missing} for {table_config.bronze_table}"
        )
    return df[list(table_config.raw_columns)]


def ingest_table(table_config: TableConfig) -> Dict[str, Any]:
    """
    Full-replace bronze.<table> with the landed file.

    Returns:
        Dict with table, source, rows_written
    """
    df = read_landing_file(table_config)
    logger.info(
        "Loading %d rows from %s/%s into %s",
        len(df), LANDING_CONTAINER, table_config.landing_path, table_config.bronze_table
    )
    rows_written = full_replace(BRONZE_SCHEMA, table_config.name, df)

    write_metadata(
        LANDING_CONTAINER,
        table_config.landing_path,
        target_table=table_config.bronze_table,
        extra={'row_count': rows_written},
    )

    return {
        'table': table_config.name,
        'source': f"{LANDING_CONTAINER}/{table_config.landing_path}",
        'rows_written': rows_written,
    }
