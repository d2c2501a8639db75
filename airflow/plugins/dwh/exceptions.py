"""
Exception types for the CRM/ERP warehouse pipelines.

Row-level data-quality defects are never raised; they are repaired by the
conformance rules. These exceptions cover configuration problems, unreadable
source files, failed table writes and the per-component failure signal that
aborts a run.
"""
from typing import Optional


class WarehouseError(Exception):
    """Base exception for all warehouse pipeline errors."""
    pass


class WarehouseConfigError(WarehouseError, ValueError):
    """Raised when warehouse connection settings are missing."""

    def __init__(self, missing: list):
        self.missing = missing
        message = (
            f"Missing warehouse configuration: {', '.join(missing)}. "
            "Set these in /opt/airflow/.env"
        )
        super().__init__(message)


class SourceFileError(WarehouseError):
    """Raised when a landing-zone source file cannot be parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Source file '{path}' is unusable: {reason}")


class TableWriteError(WarehouseError):
    """Raised when truncating or inserting into a warehouse table fails."""

    def __init__(self, table: str, reason: str, error_number: Optional[int] = None):
        self.table = table
        self.reason = reason
        self.error_number = error_number
        number = f" (SQL Server error {error_number})" if error_number is not None else ""
        super().__init__(f"Write to {table} failed{number}: {reason}")


class ComponentFailedError(WarehouseError):
    """
    Raised when a pipeline component aborts.

    Carries enough detail for an operator to diagnose the failure without
    reading a stack trace: the component name, the underlying message and a
    fault identifier (SQL Server error number or exception type).
    """

    def __init__(self, component: str, message: str, fault_id: str):
        self.component = component
        self.message = message
        self.fault_id = fault_id
        super().__init__(
            f"Component '{component}' failed [{fault_id}]: {message}"
        )


def fault_id_for(error: Exception) -> str:
    """
    Fault identifier for an exception: its type name, plus the SQL Server
    error number when the database reported one.

    Examples: 'KeyError', 'TableWriteError/MSSQL-8152'
    """
    fault_id = type(error).__name__
    error_number = getattr(error, 'error_number', None)
    if error_number is not None:
        fault_id += f"/MSSQL-{error_number}"
    return fault_id
