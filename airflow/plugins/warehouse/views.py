"""
Gold layer view management.

The gold layer is a set of SQL Server views over the silver tables. This
module (re)creates them from the templates in sql/sqlserver/gold/.
"""
import logging
from typing import Dict, List, Optional

import pymssql

from warehouse.sql_templates import render_sql
from warehouse.tables import GOLD_SCHEMA, SILVER_SCHEMA
from warehouse.warehouse_db import warehouse_cursor

__all__ = ['GOLD_VIEWS', 'create_gold_views']

logger = logging.getLogger(__name__)

# Creation order matters: fact_sales selects from both dimensions
GOLD_VIEWS = {
    'dim_customers': 'sqlserver/gold/dim_customers.sql.j2',
    'dim_products': 'sqlserver/gold/dim_products.sql.j2',
    'fact_sales': 'sqlserver/gold/fact_sales.sql.j2',
}


def create_gold_views(views: Optional[List[str]] = None) -> Dict[str, str]:
    """
    Create or replace the gold views.

    Each view is dropped and recreated in its own transaction, so one
    failing view does not undo the others.

    Args:
        views: View names to create. If None, creates all views in
            dependency order.

    Returns:
        Dict with view names and their status ('created' or 'error')
    """
    views_to_create = views or list(GOLD_VIEWS.keys())
    results = {}

    for view_name in views_to_create:
        if view_name not in GOLD_VIEWS:
            logger.error("Unknown view: %s", view_name)
            results[view_name] = 'error'
            continue

        drop_sql = render_sql('sqlserver/gold/drop_view.sql.j2', schema=GOLD_SCHEMA, view=view_name)
        create_sql = render_sql(
            GOLD_VIEWS[view_name],
            gold_schema=GOLD_SCHEMA,
            silver_schema=SILVER_SCHEMA,
        )

        logger.info("Creating view: %s.%s", GOLD_SCHEMA, view_name)
        try:
            with warehouse_cursor() as cursor:
                cursor.execute(drop_sql)
                cursor.execute(create_sql)
            results[view_name] = 'created'
        except pymssql.Error as e:
            logger.error("View %s.%s failed: %s", GOLD_SCHEMA, view_name, e)
            results[view_name] = 'error'

    return results
