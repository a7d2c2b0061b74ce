"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from rowbind.core.connection import ConnectionConfig


class FakeResultSet:
    """In-memory ResultSet that records how it was consumed."""

    def __init__(
        self,
        columns: list[str],
        rows: list[Sequence[Any]],
        *,
        fail_at: int | None = None,
        values_error: Exception | None = None,
        iteration_error: Exception | None = None,
    ) -> None:
        self._columns = columns
        self._rows = rows
        self._current = -1
        self._fail_at = fail_at
        self._values_error = values_error
        self._iteration_error = iteration_error
        self._error: BaseException | None = None
        self.close_calls = 0

    @property
    def columns(self) -> list[str]:
        return list(self._columns)

    @property
    def closed(self) -> bool:
        return self.close_calls > 0

    def advance(self) -> bool:
        self._current += 1
        if self._iteration_error is not None and self._current == len(self._rows):
            self._error = self._iteration_error
            return False
        return self._current < len(self._rows)

    def values(self) -> Sequence[Any]:
        if self._values_error is not None and self._current == self._fail_at:
            raise self._values_error
        return self._rows[self._current]

    def error(self) -> BaseException | None:
        return self._error

    def close(self) -> None:
        self.close_calls += 1


class FakeExecutor:
    """Executor double returning a canned result set and recording calls."""

    def __init__(
        self,
        result_set: FakeResultSet | None = None,
        *,
        query_error: Exception | None = None,
        execute_error: Exception | None = None,
    ) -> None:
        self.result_set = result_set or FakeResultSet(["id", "name", "email"], [])
        self.query_error = query_error
        self.execute_error = execute_error
        self.queries: list[tuple[str, tuple[Any, ...], Any]] = []
        self.executed: list[tuple[str, tuple[Any, ...], Any]] = []

    def query(self, sql: str, args: Sequence[Any] = (), context: Any = None) -> FakeResultSet:
        self.queries.append((sql, tuple(args), context))
        if self.query_error is not None:
            raise self.query_error
        return self.result_set

    def execute(self, sql: str, args: Sequence[Any] = (), context: Any = None) -> int:
        self.executed.append((sql, tuple(args), context))
        if self.execute_error is not None:
            raise self.execute_error
        return 1


class FakeAsyncResultSet(FakeResultSet):
    async def advance(self) -> bool:  # type: ignore[override]
        return super().advance()

    async def close(self) -> None:  # type: ignore[override]
        super().close()


class FakeAsyncExecutor(FakeExecutor):
    async def query(  # type: ignore[override]
        self, sql: str, args: Sequence[Any] = (), context: Any = None
    ) -> FakeResultSet:
        return super().query(sql, args, context)

    async def execute(  # type: ignore[override]
        self, sql: str, args: Sequence[Any] = (), context: Any = None
    ) -> int:
        return super().execute(sql, args, context)


USER_COLUMNS = ["id", "name", "email"]
USER_ROWS: list[Sequence[Any]] = [
    (1, "John", "john@example.com"),
    (2, "Jane", "jane@example.com"),
]


@pytest.fixture
def users_executor() -> FakeExecutor:
    """Executor returning two user rows."""
    return FakeExecutor(FakeResultSet(USER_COLUMNS, list(USER_ROWS)))


@pytest.fixture
def async_users_executor() -> FakeAsyncExecutor:
    """Async executor returning two user rows."""
    return FakeAsyncExecutor(FakeAsyncResultSet(USER_COLUMNS, list(USER_ROWS)))


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config."""
    return ConnectionConfig(driver="sqlite", database=":memory:")
