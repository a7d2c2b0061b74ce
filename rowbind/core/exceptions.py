"""rowbind exception hierarchy.

Structural and I/O failures abort the call and are raised as one of the
classes below, always chained to the originating driver exception. Per-value
mapping gaps (unmatched columns, inconvertible values) are never errors.
"""

from __future__ import annotations


class RowBindError(Exception):
    """Base exception for all rowbind errors."""


# --- Execution ---


class ExecutionError(RowBindError):
    """Base for failures reported by the executor."""


class QueryError(ExecutionError):
    """Raised when the executor fails to run a query."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Query failed: {detail}")


class RowRetrievalError(ExecutionError):
    """Raised when the values of a single row cannot be retrieved."""

    def __init__(self, row_number: int, detail: str) -> None:
        self.row_number = row_number
        super().__init__(f"Failed to get values for row {row_number}: {detail}")


class IterationError(ExecutionError):
    """Raised when the result set reports an error after iteration stops."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Row iteration error: {detail}")


class InsertError(ExecutionError):
    """Raised when the executor fails to run a generated INSERT."""

    def __init__(self, table: str, detail: str) -> None:
        self.table = table
        super().__init__(f"Insert into '{table}' failed: {detail}")


class ParameterBindingError(ExecutionError):
    """Raised when placeholders and arguments cannot be bound together."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Parameter binding error: {detail}")


# --- Mapping ---


class MappingError(RowBindError):
    """Base for mapping errors."""


class DestinationShapeError(MappingError):
    """Raised when a typed-query destination is not a list of records."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid destination: {detail}")


class ExtractionError(MappingError):
    """Raised when a value to insert is not a record instance."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(
            f"Cannot extract fields from {type_name}: expected a dataclass "
            "or pydantic model instance"
        )


class NoInsertableFieldsError(MappingError):
    """Raised when a record yields no tagged columns to insert."""

    def __init__(self, table: str) -> None:
        self.table = table
        super().__init__(f"No valid fields found for insertion into '{table}'")


class RecordConstructionError(MappingError):
    """Raised when a decoded row cannot be turned into a record instance."""

    def __init__(self, record_type: str, detail: str) -> None:
        self.record_type = record_type
        super().__init__(f"Cannot construct {record_type} from row: {detail}")


class StrictModeViolation(MappingError):
    """Raised in strict mode when two fields resolve to the same column."""

    def __init__(self, column: str, first_field: str, second_field: str) -> None:
        self.column = column
        self.fields = (first_field, second_field)
        super().__init__(
            f"Column '{column}' is claimed by both '{first_field}' and '{second_field}'"
        )


# --- Serialization ---


class SerializationError(RowBindError):
    """Raised when row maps cannot be rendered as JSON."""


# --- Adapter ---


class AdapterError(RowBindError):
    """Base for adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised on connection failures."""
