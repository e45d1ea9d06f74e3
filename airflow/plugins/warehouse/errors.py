"""
Custom exceptions for the warehouse pipelines.

Loader and verification failures carry enough context (entity, database
error number, failed checks) for the Airflow task log to identify the
root cause without re-running the load.
"""
from typing import Dict, Optional


class WarehouseError(Exception):
    """Base exception for all warehouse pipeline errors."""
    pass


class EntityLoadError(WarehouseError):
    """Raised when an entity fails to load and the run is aborted."""

    def __init__(
        self,
        table: str,
        message: str,
        error_number: Optional[int] = None,
        error_state: Optional[str] = None
    ):
        self.table = table
        self.error_message = message
        self.error_number = error_number
        self.error_state = error_state
        super().__init__(
            f"Loading '{table}' failed: {message} "
            f"(error number: {error_number}, state: {error_state})"
        )


class QualityCheckError(WarehouseError):
    """Raised when one or more data quality checks return offending rows."""

    def __init__(self, failed_checks: Dict[str, int]):
        self.failed_checks = failed_checks
        details = "\n  - ".join(
            f"{name}: {count} row(s)" for name, count in failed_checks.items()
        )
        super().__init__(f"{len(failed_checks)} quality check(s) failed:\n  - {details}")
