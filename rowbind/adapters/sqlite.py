"""SQLite adapter - sync (sqlite3 stdlib) and async (aiosqlite).

Rows are left as plain tuples so repeated column names survive.
The ``context`` token is accepted for protocol compatibility; SQLite calls
are not cancellable.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Sequence
from typing import Any

from rowbind.adapters.cursor import AsyncCursorResultSet, CursorResultSet
from rowbind.core.connection import ConnectionConfig
from rowbind.core.params import normalize_params


class SqliteSyncAdapter:
    """Synchronous SQLite adapter using stdlib sqlite3."""

    @property
    def paramstyle(self) -> str:
        return "qmark"

    def connect(self, config: ConnectionConfig) -> sqlite3.Connection:
        """Open a connection to ``config.database``."""
        return sqlite3.connect(config.database, **config.extra)

    def close(self, connection: sqlite3.Connection) -> None:
        connection.close()

    def query(
        self,
        connection: sqlite3.Connection,
        sql: str,
        args: Sequence[Any] = (),
        context: Any = None,
    ) -> CursorResultSet:
        """Execute a query and wrap its cursor."""
        sql, params = normalize_params(sql, args, self.paramstyle)
        return CursorResultSet(connection.execute(sql, params))

    def execute(
        self,
        connection: sqlite3.Connection,
        sql: str,
        args: Sequence[Any] = (),
        context: Any = None,
    ) -> int:
        """Execute a statement and return its row count."""
        sql, params = normalize_params(sql, args, self.paramstyle)
        cursor = connection.execute(sql, params)
        try:
            return int(cursor.rowcount)
        finally:
            cursor.close()


class SqliteAsyncAdapter:
    """Asynchronous SQLite adapter using aiosqlite."""

    @property
    def paramstyle(self) -> str:
        return "qmark"

    async def connect_async(self, config: ConnectionConfig) -> Any:
        """Open an aiosqlite connection."""
        import aiosqlite

        return await aiosqlite.connect(config.database, **config.extra)

    async def close_async(self, connection: Any) -> None:
        await connection.close()

    async def query_async(
        self,
        connection: Any,
        sql: str,
        args: Sequence[Any] = (),
        context: Any = None,
    ) -> AsyncCursorResultSet:
        """Execute a query asynchronously and wrap its cursor."""
        sql, params = normalize_params(sql, args, self.paramstyle)
        return AsyncCursorResultSet(await connection.execute(sql, params))

    async def execute_async(
        self,
        connection: Any,
        sql: str,
        args: Sequence[Any] = (),
        context: Any = None,
    ) -> int:
        """Execute a statement asynchronously and return its row count."""
        sql, params = normalize_params(sql, args, self.paramstyle)
        cursor = await connection.execute(sql, params)
        try:
            return int(cursor.rowcount)
        finally:
            await cursor.close()
