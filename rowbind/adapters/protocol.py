"""Executor, result-set and adapter protocols.

The engine only ever talks to an Executor (or AsyncExecutor). Adapters are
the driver-specific halves that connection managers use to implement it.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from rowbind.core.connection import ConnectionConfig


@runtime_checkable
class ResultSet(Protocol):
    """Cursor-like stream of rows, consumed once."""

    @property
    def columns(self) -> list[str]:
        """Column names in result order."""
        ...

    def advance(self) -> bool:
        """Move to the next row. False at the end or after a failure."""
        ...

    def values(self) -> Sequence[Any]:
        """Values of the current row, aligned with ``columns``."""
        ...

    def error(self) -> BaseException | None:
        """Failure that stopped iteration, if any."""
        ...

    def close(self) -> None:
        """Release the cursor. Safe to call more than once."""
        ...


@runtime_checkable
class AsyncResultSet(Protocol):
    """Asynchronous ResultSet."""

    @property
    def columns(self) -> list[str]: ...

    async def advance(self) -> bool: ...

    def values(self) -> Sequence[Any]: ...

    def error(self) -> BaseException | None: ...

    async def close(self) -> None: ...


@runtime_checkable
class Executor(Protocol):
    """Runs SQL on behalf of the engine."""

    def query(self, sql: str, args: Sequence[Any] = (), context: Any = None) -> ResultSet:
        """Run a query and return an open result set."""
        ...

    def execute(self, sql: str, args: Sequence[Any] = (), context: Any = None) -> Any:
        """Run a statement and return an execution summary."""
        ...


@runtime_checkable
class AsyncExecutor(Protocol):
    """Asynchronous Executor."""

    async def query(
        self, sql: str, args: Sequence[Any] = (), context: Any = None
    ) -> AsyncResultSet: ...

    async def execute(self, sql: str, args: Sequence[Any] = (), context: Any = None) -> Any: ...


@runtime_checkable
class SyncAdapter(Protocol):
    """Synchronous database adapter protocol."""

    @property
    def paramstyle(self) -> str:
        """DB-API paramstyle the driver expects: 'qmark' or 'format'."""
        ...

    def connect(self, config: ConnectionConfig) -> Any:
        """Open a connection."""
        ...

    def close(self, connection: Any) -> None:
        """Close a connection."""
        ...

    def query(
        self,
        connection: Any,
        sql: str,
        args: Sequence[Any] = (),
        context: Any = None,
    ) -> ResultSet:
        """Run a query and wrap its cursor."""
        ...

    def execute(
        self,
        connection: Any,
        sql: str,
        args: Sequence[Any] = (),
        context: Any = None,
    ) -> int:
        """Run a statement and return the affected row count."""
        ...


@runtime_checkable
class AsyncAdapter(Protocol):
    """Asynchronous database adapter protocol."""

    @property
    def paramstyle(self) -> str:
        """DB-API paramstyle the driver expects: 'qmark' or 'format'."""
        ...

    async def connect_async(self, config: ConnectionConfig) -> Any:
        """Open an async connection."""
        ...

    async def close_async(self, connection: Any) -> None:
        """Close an async connection."""
        ...

    async def query_async(
        self,
        connection: Any,
        sql: str,
        args: Sequence[Any] = (),
        context: Any = None,
    ) -> AsyncResultSet:
        """Run a query asynchronously and wrap its cursor."""
        ...

    async def execute_async(
        self,
        connection: Any,
        sql: str,
        args: Sequence[Any] = (),
        context: Any = None,
    ) -> int:
        """Run a statement asynchronously and return the affected row count."""
        ...
