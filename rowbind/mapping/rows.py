"""Row assembly: raw rows to row maps or typed records."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from rowbind.core.exceptions import RecordConstructionError
from rowbind.mapping.decoder import decode_value
from rowbind.mapping.fields import build_record, record_fields
from rowbind.mapping.resolver import resolve_columns, unmapped_fields

T = TypeVar("T")

RowMap = dict[str, Any]


def assemble_row_map(columns: Sequence[str], values: Sequence[Any]) -> RowMap:
    """Zip column names with raw row values.

    Values are kept as-is. A repeated column name keeps the value of its
    last occurrence.
    """
    return dict(zip(columns, values, strict=True))


class RecordMapper(Generic[T]):
    """Positional row-to-record mapper for one result set.

    The column mapping is resolved once, in the constructor, against the
    result set's columns and is discarded with the mapper.

    Args:
        record_type: Dataclass or pydantic model to build.
        columns: Column names in result-set order.
        strict: Reject two fields resolving to the same column.
    """

    def __init__(
        self,
        record_type: type[T],
        columns: Sequence[str],
        *,
        strict: bool = False,
    ) -> None:
        self._record_type = record_type
        self._specs = record_fields(record_type)
        self._mapping = resolve_columns(columns, self._specs, strict=strict)

    @property
    def mapping(self) -> dict[int, int]:
        return dict(self._mapping)

    @property
    def unmapped(self) -> list[str]:
        return unmapped_fields(self._specs, self._mapping)

    def map_one(self, values: Sequence[Any]) -> T:
        """Decode a single row into a new record."""
        fields = {spec.name: spec.zero() for spec in self._specs}
        for column, field_index in self._mapping.items():
            if column >= len(values):
                continue
            spec = self._specs[field_index]
            fields[spec.name] = decode_value(values[column], spec, fields[spec.name])
        try:
            return build_record(self._record_type, fields, self._specs)  # type: ignore[no-any-return]
        except Exception as e:
            raise RecordConstructionError(self._record_type.__name__, str(e)) from e

    def map_many(self, rows: Sequence[Sequence[Any]]) -> list[T]:
        """Decode rows in order."""
        return [self.map_one(values) for values in rows]
