"""PostgreSQL adapter - sync and async using psycopg (v3+).

psycopg binds client-side with ``%s``, so ``$N`` placeholders are rewritten
before execution. A ``context`` carrying a ``timeout`` attribute (seconds)
sets ``statement_timeout`` for the statement's transaction. Every statement runs
in its own ``connection.transaction()`` block, so a failure rolls back and
the timeout never outlives the call. Results are fetched client-side and stay
readable after the block commits.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rowbind.adapters.cursor import AsyncCursorResultSet, CursorResultSet
from rowbind.core.connection import ConnectionConfig
from rowbind.core.params import normalize_params


def _build_conninfo(config: ConnectionConfig) -> str:
    """Build a libpq connection string from config fields."""
    parts: list[str] = []
    if config.host is not None:
        parts.append(f"host={config.host}")
    if config.port is not None:
        parts.append(f"port={config.port}")
    if config.user is not None:
        parts.append(f"user={config.user}")
    if config.password is not None:
        parts.append(f"password={config.password}")
    parts.append(f"dbname={config.database}")
    return " ".join(parts)


def _timeout_ms(context: Any) -> int | None:
    timeout = getattr(context, "timeout", None)
    if timeout is None:
        return None
    return max(int(float(timeout) * 1000), 1)


class PostgresqlSyncAdapter:
    """Synchronous PostgreSQL adapter using psycopg (v3+)."""

    @property
    def paramstyle(self) -> str:
        return "format"

    def connect(self, config: ConnectionConfig) -> Any:
        import psycopg

        return psycopg.connect(_build_conninfo(config), **config.extra)

    def close(self, connection: Any) -> None:
        connection.close()

    def _run(self, connection: Any, sql: str, args: Sequence[Any], context: Any) -> Any:
        sql, params = normalize_params(sql, args, self.paramstyle)
        timeout = _timeout_ms(context)
        with connection.transaction():
            if timeout is not None:
                connection.execute(f"SET LOCAL statement_timeout = {timeout}")
            return connection.execute(sql, params or None)

    def query(
        self,
        connection: Any,
        sql: str,
        args: Sequence[Any] = (),
        context: Any = None,
    ) -> CursorResultSet:
        return CursorResultSet(self._run(connection, sql, args, context))

    def execute(
        self,
        connection: Any,
        sql: str,
        args: Sequence[Any] = (),
        context: Any = None,
    ) -> int:
        cursor = self._run(connection, sql, args, context)
        try:
            return int(cursor.rowcount)
        finally:
            cursor.close()


class PostgresqlAsyncAdapter:
    """Asynchronous PostgreSQL adapter using psycopg (v3+) async support."""

    @property
    def paramstyle(self) -> str:
        return "format"

    async def connect_async(self, config: ConnectionConfig) -> Any:
        import psycopg

        return await psycopg.AsyncConnection.connect(_build_conninfo(config), **config.extra)

    async def close_async(self, connection: Any) -> None:
        await connection.close()

    async def _run(self, connection: Any, sql: str, args: Sequence[Any], context: Any) -> Any:
        sql, params = normalize_params(sql, args, self.paramstyle)
        timeout = _timeout_ms(context)
        async with connection.transaction():
            if timeout is not None:
                await connection.execute(f"SET LOCAL statement_timeout = {timeout}")
            return await connection.execute(sql, params or None)

    async def query_async(
        self,
        connection: Any,
        sql: str,
        args: Sequence[Any] = (),
        context: Any = None,
    ) -> AsyncCursorResultSet:
        return AsyncCursorResultSet(await self._run(connection, sql, args, context))

    async def execute_async(
        self,
        connection: Any,
        sql: str,
        args: Sequence[Any] = (),
        context: Any = None,
    ) -> int:
        cursor = await self._run(connection, sql, args, context)
        try:
            return int(cursor.rowcount)
        finally:
            await cursor.close()
