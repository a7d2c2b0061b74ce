"""Mapping layer - tags, field resolution, value decoding and insert rendering."""

from __future__ import annotations

from rowbind.mapping.decoder import ValueKind, classify, convert, decode_value, zero_value
from rowbind.mapping.fields import FieldSpec, extract_fields, record_fields
from rowbind.mapping.insert import InsertStatement, build_insert
from rowbind.mapping.resolver import resolve_columns
from rowbind.mapping.rows import RecordMapper, RowMap, assemble_row_map
from rowbind.mapping.tags import (
    Column,
    FieldTag,
    Ignored,
    QualifiedColumn,
    Tag,
    column,
    parse_tag,
)

__all__ = [
    "Tag",
    "column",
    "parse_tag",
    "FieldTag",
    "Ignored",
    "Column",
    "QualifiedColumn",
    "FieldSpec",
    "record_fields",
    "extract_fields",
    "resolve_columns",
    "ValueKind",
    "classify",
    "convert",
    "decode_value",
    "zero_value",
    "RowMap",
    "RecordMapper",
    "assemble_row_map",
    "InsertStatement",
    "build_insert",
]
