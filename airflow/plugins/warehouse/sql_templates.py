"""
SQL rendering for the warehouse statements.

Templates live in warehouse/sql/sqlserver/ and are rendered with
StrictUndefined, so a missing variable fails instead of producing broken
SQL. Schema, table, view and column names pass through filters that reject
anything outside [A-Za-z0-9_-] before bracket-quoting it:

    {{ schema | q }}.{{ table | q }}     -> [silver].[crm_cust_info]
    {{ columns | column_list }}          -> [cid], [ctry]
    {{ columns | placeholders }}         -> %s, %s

Usage:
    from warehouse.sql_templates import render_sql

    sql = render_sql('sqlserver/common/truncate.sql.j2', schema='silver', table='crm_cust_info')
"""
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable

from jinja2 import Environment, FileSystemLoader, StrictUndefined

SQL_DIR = Path(__file__).parent / "sql"

_IDENTIFIER = re.compile(r'^[a-zA-Z0-9_-]+$')

# pymssql paramstyle
_PARAMETER = '%s'


def validate_id(identifier: str) -> str:
    """Return the identifier unchanged, or raise ValueError if it is unsafe."""
    if not isinstance(identifier, str) or not _IDENTIFIER.match(identifier):
        raise ValueError(
            f"Invalid SQL identifier: {identifier!r}. "
            f"Only alphanumeric characters, underscores, and hyphens are allowed."
        )
    return identifier


def quote_sqlserver(identifier: str) -> str:
    """Bracket-quote a validated identifier: crm_cust_info -> [crm_cust_info]."""
    return f'[{validate_id(identifier)}]'


def column_list(columns: Iterable[str]) -> str:
    """Comma-separated, quoted column names for SELECT and INSERT lists."""
    quoted = [quote_sqlserver(column) for column in columns]
    if not quoted:
        raise ValueError("Column list cannot be empty")
    return ', '.join(quoted)


def placeholders(columns: Iterable[str]) -> str:
    """One bind parameter per column, matching column_list."""
    return ', '.join(_PARAMETER for _ in columns)


@lru_cache(maxsize=1)
def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(SQL_DIR)),
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters['q'] = quote_sqlserver
    env.filters['column_list'] = column_list
    env.filters['placeholders'] = placeholders
    return env


def render_sql(template_path: str, **kwargs: Any) -> str:
    """
    Render a template under warehouse/sql/.

    Args:
        template_path: Path relative to the sql directory
            (e.g., 'sqlserver/common/insert.sql.j2')
        **kwargs: Template variables

    Returns:
        The rendered statement, stripped of surrounding whitespace

    Raises:
        jinja2.TemplateNotFound: If the template does not exist
        jinja2.UndefinedError: If a template variable is missing
        ValueError: If an identifier fails validation
    """
    return _environment().get_template(template_path).render(**kwargs).strip()
