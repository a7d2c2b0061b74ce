"""rowbind - tag-driven mapping between SQL rows, dicts and typed records."""

from __future__ import annotations

from rowbind.core.connection import (
    AsyncConnectionManager,
    ConnectionConfig,
    ConnectionManager,
)
from rowbind.core.engine import AsyncEngine, Engine
from rowbind.core.enums import DatabaseBackend
from rowbind.core.exceptions import (
    AdapterError,
    ConnectionError,  # noqa: A004
    DestinationShapeError,
    ExecutionError,
    ExtractionError,
    InsertError,
    IterationError,
    MappingError,
    NoInsertableFieldsError,
    ParameterBindingError,
    QueryError,
    RecordConstructionError,
    RowBindError,
    RowRetrievalError,
    SerializationError,
    StrictModeViolation,
)
from rowbind.core.log import configure_logging, get_logger
from rowbind.mapping.insert import InsertStatement, build_insert
from rowbind.mapping.rows import RecordMapper, RowMap
from rowbind.mapping.tags import Tag, column

__all__ = [
    # Connection
    "ConnectionConfig",
    "ConnectionManager",
    "AsyncConnectionManager",
    # Engine
    "Engine",
    "AsyncEngine",
    # Mapping
    "Tag",
    "column",
    "RowMap",
    "RecordMapper",
    "InsertStatement",
    "build_insert",
    # Logging
    "configure_logging",
    "get_logger",
    # Enums
    "DatabaseBackend",
    # Exceptions
    "RowBindError",
    "ExecutionError",
    "QueryError",
    "RowRetrievalError",
    "IterationError",
    "InsertError",
    "ParameterBindingError",
    "MappingError",
    "DestinationShapeError",
    "ExtractionError",
    "NoInsertableFieldsError",
    "RecordConstructionError",
    "StrictModeViolation",
    "SerializationError",
    "AdapterError",
    "ConnectionError",
]
