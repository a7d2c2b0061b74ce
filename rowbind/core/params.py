"""SQL placeholder translation.

rowbind always renders PostgreSQL-style ``$N`` positional placeholders.
Executors convert them to their driver's DB-API paramstyle just before
execution, leaving quoted literals and identifiers untouched.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from rowbind.core.exceptions import ParameterBindingError

# Matches $1, $2, ... but not identifiers containing $ and not $$ quoting
_PLACEHOLDER_PATTERN = re.compile(r"(?<![\w$])\$(\d+)")

# Matches single-quoted string literals and double-quoted identifiers
_QUOTED_PATTERN = re.compile(r"'(?:[^'\\]|\\.)*'|\"(?:[^\"]|\"\")*\"")

PARAMSTYLES = ("numeric_dollar", "qmark", "format")


def _split_quoted(sql: str) -> list[tuple[str, bool]]:
    """Split sql into ``(segment, is_quoted)`` pairs."""
    parts: list[tuple[str, bool]] = []
    last_end = 0
    for match in _QUOTED_PATTERN.finditer(sql):
        start, end = match.span()
        if start > last_end:
            parts.append((sql[last_end:start], False))
        parts.append((match.group(), True))
        last_end = end
    if last_end < len(sql):
        parts.append((sql[last_end:], False))
    return parts


def normalize_params(
    sql: str,
    args: Sequence[Any],
    paramstyle: str,
) -> tuple[str, tuple[Any, ...]]:
    """Convert ``$N`` placeholders to ``paramstyle``.

    Args:
        sql: SQL using ``$1``-style placeholders.
        args: Positional arguments, ``args[0]`` binds ``$1``.
        paramstyle: ``numeric_dollar`` (no conversion), ``qmark`` (``?``) or
            ``format`` (``%s``, literal ``%`` doubled).

    Returns:
        The converted SQL and the arguments reordered to placeholder order.
    """
    args = tuple(args)
    if paramstyle == "numeric_dollar":
        return sql, args
    if paramstyle not in PARAMSTYLES:
        raise ParameterBindingError(f"unsupported paramstyle '{paramstyle}'")

    marker = "?" if paramstyle == "qmark" else "%s"
    escape_percent = paramstyle == "format" and bool(args)
    ordered: list[Any] = []

    def _replace(match: re.Match[str]) -> str:
        number = int(match.group(1))
        if number < 1 or number > len(args):
            raise ParameterBindingError(
                f"placeholder ${number} has no argument ({len(args)} given)"
            )
        ordered.append(args[number - 1])
        return marker

    parts: list[str] = []
    for segment, quoted in _split_quoted(sql):
        if escape_percent:
            segment = segment.replace("%", "%%")
        if not quoted:
            segment = _PLACEHOLDER_PATTERN.sub(_replace, segment)
        parts.append(segment)

    if not ordered:
        return "".join(parts), args
    return "".join(parts), tuple(ordered)
