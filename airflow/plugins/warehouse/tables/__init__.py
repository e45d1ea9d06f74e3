"""
Table configuration module for the warehouse pipelines.

Provides the TableConfig dataclass and the six source entities, listed in
processing order (CRM customer, product, sales; ERP customer, location,
category).

Usage:
    from warehouse.tables import ALL_TABLES, get_table

    table = get_table('crm_cust_info')
"""
from warehouse.tables.base import (
    BRONZE_SCHEMA,
    SILVER_SCHEMA,
    GOLD_SCHEMA,
    TableConfig,
    find_table,
)
from warehouse.tables.crm import CRM_TABLES
from warehouse.tables.erp import ERP_TABLES

# Combined list of all tables
ALL_TABLES = CRM_TABLES + ERP_TABLES


def get_table(name: str) -> TableConfig:
    """Get a configured table by name."""
    return find_table(ALL_TABLES, name)


__all__ = [
    'BRONZE_SCHEMA',
    'SILVER_SCHEMA',
    'GOLD_SCHEMA',
    'TableConfig',
    'find_table',
    'get_table',
    'CRM_TABLES',
    'ERP_TABLES',
    'ALL_TABLES',
]
