"""Mapper protocol.

Mappers turn positional row values into target objects. The engine builds
one mapper per typed query and calls map_one for every row it reads.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Mapper(Protocol[T_co]):
    """Base mapper protocol."""

    def map_one(self, values: Sequence[Any]) -> T_co:
        """Map one row of values to a target object."""
        ...

    def map_many(self, rows: Sequence[Sequence[Any]]) -> list[T_co]:
        """Map multiple rows to a list of target objects."""
        ...
