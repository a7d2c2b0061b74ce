"""Column-to-field resolution.

Builds the column position → field position mapping used to decode rows into
records. Matching rules per field, first hit wins:

1. the full raw tag (``users.email``) against a column name
2. for qualified tags, the bare column part (``email``)
3. the field's own attribute name

Duplicate column names resolve to their last position. When two fields land
on the same column the later-declared field wins, unless ``strict`` is set.
"""

from __future__ import annotations

from collections.abc import Sequence

from rowbind.core.exceptions import StrictModeViolation
from rowbind.mapping.fields import FieldSpec
from rowbind.mapping.tags import QualifiedColumn


def index_columns(columns: Sequence[str]) -> dict[str, int]:
    """Map each column name to its position. Last occurrence wins."""
    return {name: position for position, name in enumerate(columns)}


def _match(spec: FieldSpec, index: dict[str, int]) -> int | None:
    tag = spec.tag
    position = index.get(tag.raw)  # type: ignore[union-attr]
    if position is not None:
        return position
    if isinstance(tag, QualifiedColumn):
        position = index.get(tag.name)
        if position is not None:
            return position
    return index.get(spec.name)


def resolve_columns(
    columns: Sequence[str],
    specs: Sequence[FieldSpec],
    *,
    strict: bool = False,
) -> dict[int, int]:
    """Resolve result-set columns against record fields.

    Args:
        columns: Column names in result-set order.
        specs: Record fields in declaration order.
        strict: Raise StrictModeViolation when two fields claim one column.

    Returns:
        Mapping of column position to field index. Fields without a match
        are absent.
    """
    index = index_columns(columns)
    mapping: dict[int, int] = {}
    for spec in specs:
        if spec.ignored:
            continue
        position = _match(spec, index)
        if position is None:
            continue
        if strict and position in mapping:
            raise StrictModeViolation(
                columns[position], specs[mapping[position]].name, spec.name
            )
        mapping[position] = spec.index
    return mapping


def unmapped_fields(specs: Sequence[FieldSpec], mapping: dict[int, int]) -> list[str]:
    """Names of tagged fields that no column resolved to."""
    claimed = set(mapping.values())
    return [s.name for s in specs if not s.ignored and s.index not in claimed]
