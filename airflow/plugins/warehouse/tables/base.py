"""
Base table configuration for the warehouse pipelines.

Provides:
- TableConfig: Dataclass describing one source entity from landing file
  through bronze to silver
"""
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

import pandas as pd

BRONZE_SCHEMA = "bronze"
SILVER_SCHEMA = "silver"
GOLD_SCHEMA = "gold"


@dataclass(frozen=True)
class TableConfig:
    """Configuration for one source entity.

    Every entity is loaded with a full replace: the bronze table is
    truncated and reloaded from the landed CSV, and the silver table is
    truncated and rebuilt from the bronze snapshot.

    Attributes:
        source_system: Source system code ('crm' or 'erp')
        name: Table name, shared by bronze and silver (e.g., 'crm_cust_info')
        landing_path: Path of the CSV file in the landing container
        raw_columns: Columns landed in bronze, in file order
        conformed_columns: Columns written to silver, in table order
        transform: Function turning a bronze frame into a silver frame
        natural_key: Natural key column(s) of the silver table
        description: Human-readable description of the table

    Example:
        TableConfig(
            source_system='erp',
            name='erp_loc_a101',
            landing_path='source_erp/LOC_A101.csv',
            raw_columns=('cid', 'ctry'),
            conformed_columns=('cid', 'ctry'),
            transform=transform_erp_location,
            natural_key=('cid',),
            description='Customer country'
        )
    """
    source_system: str
    name: str
    landing_path: str
    raw_columns: Tuple[str, ...]
    conformed_columns: Tuple[str, ...]
    transform: Callable[[pd.DataFrame], pd.DataFrame] = field(compare=False, repr=False)
    natural_key: Tuple[str, ...] = ()
    description: Optional[str] = None

    @property
    def bronze_table(self) -> str:
        """Qualified bronze table name: bronze.{name}"""
        return f"{BRONZE_SCHEMA}.{self.name}"

    @property
    def silver_table(self) -> str:
        """Qualified silver table name: silver.{name}"""
        return f"{SILVER_SCHEMA}.{self.name}"


def find_table(tables: List[TableConfig], name: str) -> TableConfig:
    """Look a table up by name."""
    for table in tables:
        if table.name == name:
            return table
    raise ValueError(
        f"Unknown table: '{name}'. "
        f"Available tables: {[t.name for t in tables]}"
    )
