"""INSERT statement rendering.

Placeholders are always PostgreSQL-style ``$1, $2, ...``; executors that
speak another paramstyle translate them at the driver boundary.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from rowbind.core.exceptions import NoInsertableFieldsError


@dataclass(frozen=True)
class InsertStatement:
    """A rendered INSERT and its positional arguments."""

    sql: str
    args: tuple[Any, ...]


def placeholders(count: int) -> list[str]:
    """Return ``["$1", ..., "$count"]``."""
    return [f"${n}" for n in range(1, count + 1)]


def build_insert(table: str, columns: Sequence[str], values: Sequence[Any]) -> InsertStatement:
    """Render ``INSERT INTO table (cols) VALUES ($1, ...)`` for one record."""
    if not columns:
        raise NoInsertableFieldsError(table)
    if len(columns) != len(values):
        raise ValueError(f"{len(columns)} columns but {len(values)} values")

    sql = "INSERT INTO {} ({}) VALUES ({})".format(
        table,
        ", ".join(columns),
        ", ".join(placeholders(len(columns))),
    )
    return InsertStatement(sql=sql, args=tuple(values))
