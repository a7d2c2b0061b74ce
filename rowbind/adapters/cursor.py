"""ResultSet implementations over DB-API cursors.

Driver errors raised while fetching are captured and reported through
``error()`` once ``advance()`` returns False, so the caller can tell a
clean end of rows from an interrupted one.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def _columns(cursor: Any) -> list[str]:
    if cursor.description is None:
        return []
    return [desc[0] for desc in cursor.description]


def _row_values(row: Any) -> list[Any]:
    if row is None:
        raise LookupError("no current row; call advance() first")
    # dict-like rows (e.g. psycopg dict_row) keep column order
    if isinstance(row, Mapping):
        return list(row.values())
    return list(row)


class CursorResultSet:
    """ResultSet over a synchronous DB-API cursor."""

    def __init__(self, cursor: Any) -> None:
        self._cursor = cursor
        self._columns = _columns(cursor)
        self._row: Any = None
        self._error: BaseException | None = None
        self._closed = False

    @property
    def columns(self) -> list[str]:
        return list(self._columns)

    def advance(self) -> bool:
        if self._closed or self._error is not None or not self._columns:
            return False
        try:
            self._row = self._cursor.fetchone()
        except Exception as e:
            self._error = e
            self._row = None
            return False
        return self._row is not None

    def values(self) -> Sequence[Any]:
        return _row_values(self._row)

    def error(self) -> BaseException | None:
        return self._error

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._cursor.close()


class AsyncCursorResultSet:
    """ResultSet over an asynchronous cursor (aiosqlite, psycopg async)."""

    def __init__(self, cursor: Any) -> None:
        self._cursor = cursor
        self._columns = _columns(cursor)
        self._row: Any = None
        self._error: BaseException | None = None
        self._closed = False

    @property
    def columns(self) -> list[str]:
        return list(self._columns)

    async def advance(self) -> bool:
        if self._closed or self._error is not None or not self._columns:
            return False
        try:
            self._row = await self._cursor.fetchone()
        except Exception as e:
            self._error = e
            self._row = None
            return False
        return self._row is not None

    def values(self) -> Sequence[Any]:
        return _row_values(self._row)

    def error(self) -> BaseException | None:
        return self._error

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._cursor.close()
