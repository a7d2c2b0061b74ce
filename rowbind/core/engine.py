"""Query mapping engine.

The Engine hands SQL to an Executor and maps what comes back: rows to
ordered dicts, rows to JSON, rows to typed records, and records to INSERT
statements. It keeps no state between calls; every result set it opens is
closed before the call returns, whatever the outcome.
"""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from contextlib import closing
from typing import Any, TypeVar

from pydantic_core import PydanticSerializationError, to_json

from rowbind.core.connection import AsyncConnectionManager, ConnectionConfig, ConnectionManager
from rowbind.core.exceptions import (
    DestinationShapeError,
    InsertError,
    IterationError,
    QueryError,
    RowRetrievalError,
    SerializationError,
)
from rowbind.core.log import silent_logger
from rowbind.mapping.fields import extract_fields, is_record_type
from rowbind.mapping.insert import InsertStatement, build_insert
from rowbind.mapping.protocol import Mapper
from rowbind.mapping.rows import RecordMapper, RowMap, assemble_row_map

T = TypeVar("T")


def _check_sql(sql: str) -> None:
    if not isinstance(sql, str) or not sql.strip():
        raise QueryError("sql must be a non-empty string")


def _check_destination(dest: Any, record_type: Any) -> None:
    """Validate a typed-query destination before any query runs."""
    if dest is None:
        raise DestinationShapeError("dest cannot be None; must be a list of records")
    if not isinstance(dest, MutableSequence):
        raise DestinationShapeError(
            f"dest must be a mutable sequence of records, got {type(dest).__name__}"
        )
    if not is_record_type(record_type):
        raise DestinationShapeError(
            f"record_type must be a dataclass or pydantic model, got {record_type!r}"
        )


def _row_values(result_set: Any, row_number: int) -> Sequence[Any]:
    try:
        return result_set.values()
    except Exception as e:
        raise RowRetrievalError(row_number, str(e)) from e


def _check_iteration(result_set: Any) -> None:
    error = result_set.error()
    if error is not None:
        raise IterationError(str(error)) from error


def _map_row(columns: Sequence[str], values: Sequence[Any], row_number: int) -> RowMap:
    try:
        return assemble_row_map(columns, values)
    except ValueError as e:
        raise RowRetrievalError(row_number, str(e)) from e


def _decode_rows(result_set: Any, mapper: Mapper[T]) -> list[T]:
    records: list[T] = []
    while result_set.advance():
        records.append(mapper.map_one(_row_values(result_set, len(records) + 1)))
    _check_iteration(result_set)
    return records


def _render_json(rows: list[RowMap]) -> bytes:
    try:
        return to_json(rows, bytes_mode="base64")
    except PydanticSerializationError as e:
        raise SerializationError(f"Cannot serialize rows to JSON: {e}") from e


def _prepare_insert(table: str, record: Any) -> InsertStatement:
    columns, values = extract_fields(record)
    return build_insert(table, columns, values)


class Engine:
    """Synchronous mapping engine.

    Args:
        executor: Anything implementing the Executor protocol.
        logger: Optional structlog logger. Without one nothing is logged.
        strict: Reject records whose fields resolve to the same column.
    """

    def __init__(
        self,
        executor: Any,
        *,
        logger: Any | None = None,
        strict: bool = False,
    ) -> None:
        self._executor = executor
        self._log = logger if logger is not None else silent_logger()
        self._strict = strict

    @classmethod
    def from_config(cls, config: ConnectionConfig, **kwargs: Any) -> Engine:
        """Create an Engine over a ConnectionManager for ``config``."""
        return cls(ConnectionManager(config), **kwargs)

    @property
    def executor(self) -> Any:
        return self._executor

    def _query(self, sql: str, args: Sequence[Any], context: Any) -> Any:
        _check_sql(sql)
        self._log.debug("query.start", sql=sql, arg_count=len(args))
        try:
            return self._executor.query(sql, args, context)
        except Exception as e:
            raise QueryError(str(e)) from e

    def query_maps(self, sql: str, *args: Any, context: Any = None) -> list[RowMap]:
        """Run a query and return one ordered dict per row."""
        rows: list[RowMap] = []
        with closing(self._query(sql, args, context)) as result_set:
            columns = result_set.columns
            while result_set.advance():
                values = _row_values(result_set, len(rows) + 1)
                rows.append(_map_row(columns, values, len(rows) + 1))
            _check_iteration(result_set)
        self._log.debug("query.done", row_count=len(rows))
        return rows

    def query_json(self, sql: str, *args: Any, context: Any = None) -> bytes:
        """Run a query and return the row maps as a JSON array."""
        return _render_json(self.query_maps(sql, *args, context=context))

    def query_records(
        self,
        dest: MutableSequence[T],
        record_type: type[T],
        sql: str,
        *args: Any,
        context: Any = None,
    ) -> None:
        """Run a query and append one ``record_type`` instance per row to ``dest``.

        ``dest`` is only extended once every row has been decoded.
        """
        _check_destination(dest, record_type)
        with closing(self._query(sql, args, context)) as result_set:
            mapper = RecordMapper(record_type, result_set.columns, strict=self._strict)
            if mapper.unmapped:
                self._log.debug(
                    "records.unmapped_fields",
                    record_type=record_type.__name__,
                    fields=mapper.unmapped,
                )
            records = _decode_rows(result_set, mapper)
        dest.extend(records)
        self._log.debug("query.done", row_count=len(records))

    def fetch_records(
        self,
        record_type: type[T],
        sql: str,
        *args: Any,
        context: Any = None,
    ) -> list[T]:
        """Run a query and return a new list of ``record_type`` instances."""
        records: list[T] = []
        self.query_records(records, record_type, sql, *args, context=context)
        return records

    def insert_record(self, table: str, record: Any, *, context: Any = None) -> None:
        """Insert a record's tagged fields into ``table``."""
        statement = _prepare_insert(table, record)
        self._log.debug("insert.start", table=table, sql=statement.sql)
        try:
            self._executor.execute(statement.sql, statement.args, context)
        except Exception as e:
            raise InsertError(table, str(e)) from e


class AsyncEngine:
    """Asynchronous mapping engine over an AsyncExecutor."""

    def __init__(
        self,
        executor: Any,
        *,
        logger: Any | None = None,
        strict: bool = False,
    ) -> None:
        self._executor = executor
        self._log = logger if logger is not None else silent_logger()
        self._strict = strict

    @classmethod
    def from_config(cls, config: ConnectionConfig, **kwargs: Any) -> AsyncEngine:
        """Create an AsyncEngine over an AsyncConnectionManager for ``config``."""
        return cls(AsyncConnectionManager(config), **kwargs)

    @property
    def executor(self) -> Any:
        return self._executor

    async def _query(self, sql: str, args: Sequence[Any], context: Any) -> Any:
        _check_sql(sql)
        self._log.debug("query.start", sql=sql, arg_count=len(args))
        try:
            return await self._executor.query(sql, args, context)
        except Exception as e:
            raise QueryError(str(e)) from e

    async def query_maps(self, sql: str, *args: Any, context: Any = None) -> list[RowMap]:
        """Run a query and return one ordered dict per row."""
        rows: list[RowMap] = []
        result_set = await self._query(sql, args, context)
        try:
            columns = result_set.columns
            while await result_set.advance():
                values = _row_values(result_set, len(rows) + 1)
                rows.append(_map_row(columns, values, len(rows) + 1))
            _check_iteration(result_set)
        finally:
            await result_set.close()
        self._log.debug("query.done", row_count=len(rows))
        return rows

    async def query_json(self, sql: str, *args: Any, context: Any = None) -> bytes:
        """Run a query and return the row maps as a JSON array."""
        return _render_json(await self.query_maps(sql, *args, context=context))

    async def query_records(
        self,
        dest: MutableSequence[T],
        record_type: type[T],
        sql: str,
        *args: Any,
        context: Any = None,
    ) -> None:
        """Run a query and append one ``record_type`` instance per row to ``dest``."""
        _check_destination(dest, record_type)
        records: list[T] = []
        result_set = await self._query(sql, args, context)
        try:
            mapper = RecordMapper(record_type, result_set.columns, strict=self._strict)
            if mapper.unmapped:
                self._log.debug(
                    "records.unmapped_fields",
                    record_type=record_type.__name__,
                    fields=mapper.unmapped,
                )
            while await result_set.advance():
                records.append(mapper.map_one(_row_values(result_set, len(records) + 1)))
            _check_iteration(result_set)
        finally:
            await result_set.close()
        dest.extend(records)
        self._log.debug("query.done", row_count=len(records))

    async def fetch_records(
        self,
        record_type: type[T],
        sql: str,
        *args: Any,
        context: Any = None,
    ) -> list[T]:
        """Run a query and return a new list of ``record_type`` instances."""
        records: list[T] = []
        await self.query_records(records, record_type, sql, *args, context=context)
        return records

    async def insert_record(self, table: str, record: Any, *, context: Any = None) -> None:
        """Insert a record's tagged fields into ``table``."""
        statement = _prepare_insert(table, record)
        self._log.debug("insert.start", table=table, sql=statement.sql)
        try:
            await self._executor.execute(statement.sql, statement.args, context)
        except Exception as e:
            raise InsertError(table, str(e)) from e
