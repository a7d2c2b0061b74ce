"""Column value decoding.

Raw row values are classified into a closed set of kinds and converted through
a fixed table keyed by ``(kind, target type)``. A value that has no entry in
the table, or whose converter fails, is not an error: the field keeps its
current value.
"""

from __future__ import annotations

import types
import uuid
from collections.abc import Callable
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Union, get_args, get_origin

if TYPE_CHECKING:
    from rowbind.mapping.fields import FieldSpec


class ValueKind(Enum):
    """Kinds of raw values a result set can produce."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    TEXT = "text"
    BYTES = "bytes"
    TIMESTAMP = "timestamp"
    DATE = "date"
    TIME = "time"
    UUID = "uuid"
    OTHER = "other"


def classify(value: Any) -> ValueKind:
    """Return the kind of a raw value."""
    if value is None:
        return ValueKind.NULL
    # bool before int, datetime before date: both are subclasses
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, Decimal):
        return ValueKind.DECIMAL
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return ValueKind.BYTES
    if isinstance(value, datetime):
        return ValueKind.TIMESTAMP
    if isinstance(value, date):
        return ValueKind.DATE
    if isinstance(value, time):
        return ValueKind.TIME
    if isinstance(value, uuid.UUID):
        return ValueKind.UUID
    return ValueKind.OTHER


def _identity(value: Any) -> Any:
    return value


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def _bytes_to_str(value: Any) -> str:
    return bytes(value).decode("utf-8")


_CONVERTERS: dict[tuple[ValueKind, type], Callable[[Any], Any]] = {
    (ValueKind.INTEGER, int): _identity,
    (ValueKind.FLOAT, int): int,
    (ValueKind.DECIMAL, int): int,
    (ValueKind.INTEGER, float): float,
    (ValueKind.FLOAT, float): _identity,
    (ValueKind.DECIMAL, float): float,
    (ValueKind.INTEGER, Decimal): _to_decimal,
    (ValueKind.FLOAT, Decimal): _to_decimal,
    (ValueKind.DECIMAL, Decimal): _identity,
    (ValueKind.TEXT, str): _identity,
    (ValueKind.BYTES, str): _bytes_to_str,
    (ValueKind.BYTES, bytes): bytes,
    (ValueKind.TEXT, bytes): lambda value: value.encode("utf-8"),
    (ValueKind.BOOLEAN, bool): _identity,
    (ValueKind.TIMESTAMP, datetime): _identity,
    (ValueKind.DATE, date): _identity,
    (ValueKind.TIME, time): _identity,
    (ValueKind.UUID, uuid.UUID): _identity,
}

_TABLE_TARGETS = frozenset(target for _, target in _CONVERTERS)

_ZERO_VALUES: dict[type, Callable[[], Any]] = {
    int: int,
    float: float,
    Decimal: Decimal,
    str: str,
    bytes: bytes,
    bool: bool,
    list: list,
    dict: dict,
    set: set,
    frozenset: frozenset,
    tuple: tuple,
}


class _NotConvertible:
    def __repr__(self) -> str:
        return "NOT_CONVERTIBLE"


NOT_CONVERTIBLE: Any = _NotConvertible()


def _is_union(tp: Any) -> bool:
    return get_origin(tp) is Union or isinstance(tp, types.UnionType)


def _unwrap_newtype(tp: Any) -> Any:
    while hasattr(tp, "__supertype__"):
        tp = tp.__supertype__
    return tp


def zero_value(tp: Any) -> Any:
    """Return the empty value of a declared type.

    Optional types and types without a natural empty value yield ``None``.
    """
    tp = _unwrap_newtype(tp)
    if _is_union(tp):
        if type(None) in get_args(tp):
            return None
        return zero_value(get_args(tp)[0])
    factory = _ZERO_VALUES.get(get_origin(tp) or tp)
    return factory() if factory is not None else None


def convert(value: Any, target: Any) -> Any:
    """Convert a non-null value to ``target`` or return ``NOT_CONVERTIBLE``."""
    target = _unwrap_newtype(target)
    if target is Any or target is object:
        return value

    if _is_union(target):
        for member in get_args(target):
            if member is type(None):
                continue
            result = convert(value, member)
            if result is not NOT_CONVERTIBLE:
                return result
        return NOT_CONVERTIBLE

    kind = classify(value)
    origin = get_origin(target) or target
    try:
        converter = _CONVERTERS.get((kind, origin))
        if converter is not None:
            return converter(value)
        if origin in _TABLE_TARGETS:
            return NOT_CONVERTIBLE
        if isinstance(origin, type) and issubclass(origin, Enum):
            return origin(value)
        if isinstance(origin, type) and isinstance(value, origin):
            return value
    except (ValueError, TypeError, ArithmeticError):
        return NOT_CONVERTIBLE
    return NOT_CONVERTIBLE


def decode_value(raw: Any, spec: FieldSpec, current: Any) -> Any:
    """Decode one raw column value for ``spec``.

    ``None`` becomes the field's zero value, a convertible value is converted,
    anything else leaves ``current`` in place.
    """
    if raw is None:
        return spec.zero()
    result = convert(raw, spec.type)
    if result is NOT_CONVERTIBLE:
        return current
    return result
