"""
Warehouse SQL Server Connection Utilities

Connects to the SQL Server instance hosting the bronze, silver and gold
schemas. Uses an Airflow Connection for credential storage (encrypted with
the Fernet key); the connection id defaults to 'warehouse_sqlserver' and can
be overridden with the WAREHOUSE_CONN_ID environment variable.
"""
import logging
import math
import os
from contextlib import contextmanager
from datetime import datetime
from typing import Any, List, Optional, Sequence

import numpy as np
import pandas as pd
import pymssql

from warehouse.sql_templates import render_sql

logger = logging.getLogger(__name__)

# Airflow Connection ID for the warehouse SQL Server
DEFAULT_WAREHOUSE_CONN_ID = 'warehouse_sqlserver'

# Load timestamp column carried by every silver table
AUDIT_COLUMN = 'dwh_create_date'


def get_warehouse_conn_id() -> str:
    return os.environ.get('WAREHOUSE_CONN_ID', DEFAULT_WAREHOUSE_CONN_ID)


def _get_connection_details() -> dict:
    """
    Retrieve connection details from Airflow Connection.

    Returns:
        dict with server, port, user, password, database

    Raises:
        ValueError: If connection not found or incomplete
    """
    from airflow.hooks.base import BaseHook

    conn_id = get_warehouse_conn_id()
    try:
        conn = BaseHook.get_connection(conn_id)
    except Exception as e:
        raise ValueError(
            f"Airflow Connection '{conn_id}' not found. "
            f"Create it via: airflow connections add {conn_id} --conn-type mssql ..."
        ) from e

    if not conn.host or not conn.login or not conn.password:
        raise ValueError(
            f"Airflow Connection '{conn_id}' is incomplete. "
            "Ensure host, login, password, and schema are set."
        )

    return {
        'server': conn.host,
        'port': conn.port or 1433,
        'user': conn.login,
        'password': conn.password,
        'database': conn.schema,
    }


def get_warehouse_connection() -> pymssql.Connection:
    """
    Create connection to the warehouse SQL Server.

    Raises:
        ValueError: If Airflow Connection not configured
    """
    details = _get_connection_details()

    return pymssql.connect(
        server=details['server'],
        port=details['port'],
        user=details['user'],
        password=details['password'],
        database=details['database'],
        login_timeout=30,
        timeout=600
    )


@contextmanager
def warehouse_cursor(as_dict: bool = False):
    """
    Context manager for a transactional cursor.

    Everything executed on the yielded cursor is committed together when the
    block exits normally and rolled back when it raises.

    Args:
        as_dict: If True, return rows as dictionaries

    Yields:
        pymssql.Cursor: Database cursor

    Example:
        >>> with warehouse_cursor() as cursor:
        ...     cursor.execute("SELECT COUNT(*) FROM [silver].[crm_cust_info]")
        ...     count = cursor.fetchone()[0]
    """
    conn = get_warehouse_connection()
    cursor = conn.cursor(as_dict=as_dict)
    try:
        yield cursor
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cursor.close()
        conn.close()


def fetch_dataframe(schema: str, table: str, columns: Sequence[str]) -> pd.DataFrame:
    """
    Read a full table snapshot into a DataFrame.

    Args:
        schema: Source schema (bronze, silver, gold)
        table: Table or view name
        columns: Columns to select, in output order

    Returns:
        DataFrame with exactly the requested columns (empty if no rows)
    """
    query = render_sql(
        'sqlserver/common/select.sql.j2',
        schema=schema,
        table=table,
        columns=list(columns),
    )
    with warehouse_cursor(as_dict=False) as cursor:
        cursor.execute(query)
        rows = cursor.fetchall()
    return pd.DataFrame.from_records(rows, columns=list(columns))


def _to_db_value(value: Any) -> Any:
    """Convert a pandas/numpy cell into a value pymssql can bind."""
    if value is None or value is pd.NA or value is pd.NaT:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, np.generic):
        unboxed = value.item()
        if isinstance(unboxed, float) and math.isnan(unboxed):
            return None
        return unboxed
    return value


def dataframe_to_rows(
    df: pd.DataFrame,
    load_timestamp: Optional[datetime] = None
) -> List[tuple]:
    """
    Convert a DataFrame into parameter tuples for executemany.

    When load_timestamp is given it is appended to every row, matching the
    AUDIT_COLUMN appended to the insert column list.
    """
    rows = []
    for record in df.itertuples(index=False, name=None):
        row = [_to_db_value(value) for value in record]
        if load_timestamp is not None:
            row.append(load_timestamp)
        rows.append(tuple(row))
    return rows


def full_replace(
    schema: str,
    table: str,
    df: pd.DataFrame,
    load_timestamp: Optional[datetime] = None
) -> int:
    """
    Replace the contents of a table with a DataFrame.

    TRUNCATE and the bulk INSERT run on one cursor inside one transaction,
    so readers see either the previous snapshot or the complete new one.

    Args:
        schema: Target schema
        table: Target table
        df: Rows to write; column names must match the table columns
        load_timestamp: Written to AUDIT_COLUMN on every row when given

    Returns:
        Number of rows written
    """
    columns = list(df.columns)
    if load_timestamp is not None:
        columns.append(AUDIT_COLUMN)

    truncate_sql = render_sql('sqlserver/common/truncate.sql.j2', schema=schema, table=table)
    insert_sql = render_sql(
        'sqlserver/common/insert.sql.j2',
        schema=schema,
        table=table,
        columns=columns,
    )
    rows = dataframe_to_rows(df, load_timestamp)

    with warehouse_cursor(as_dict=False) as cursor:
        logger.info("Truncating [%s].[%s]", schema, table)
        cursor.execute(truncate_sql)
        if rows:
            logger.info("Inserting %d rows into [%s].[%s]", len(rows), schema, table)
            cursor.executemany(insert_sql, rows)

    return len(rows)
