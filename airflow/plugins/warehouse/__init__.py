"""
Shared warehouse library for the medallion DAGs.

Usage in DAGs:
    from warehouse.tables import ALL_TABLES, get_table
    from warehouse.ingestion import ingest_table
    from warehouse.silver import load_table, load_silver
    from warehouse.views import create_gold_views
    from warehouse.verification import verify_warehouse, assert_checks_pass
    from warehouse.datasets import BRONZE_TABLES, SILVER_TABLES, GOLD_STAR_SCHEMA
"""
from warehouse.errors import EntityLoadError, QualityCheckError, WarehouseError
from warehouse.tables import ALL_TABLES, TableConfig, get_table

__all__ = [
    'WarehouseError',
    'EntityLoadError',
    'QualityCheckError',
    'TableConfig',
    'ALL_TABLES',
    'get_table',
]
