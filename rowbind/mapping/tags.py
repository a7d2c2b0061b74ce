"""Field tag parsing.

A tag is the string annotation that tells the mapper which column a record
field corresponds to:

    -               the field is ignored
    email           bare column name
    users.email     qualified column name (only ``email`` is used for matching)

Tags are attached to dataclass fields through ``column()`` or to any
dataclass/pydantic field through ``Annotated[..., Tag("users.email")]``.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Union

TAG_KEY = "db"
IGNORE_MARKER = "-"
QUALIFIER_SEPARATOR = "."


@dataclass(frozen=True)
class Tag:
    """``Annotated`` marker carrying a raw tag string."""

    raw: str


@dataclass(frozen=True)
class Ignored:
    """The field takes no part in mapping."""


@dataclass(frozen=True)
class Column:
    """The field maps to a bare column name."""

    name: str

    @property
    def raw(self) -> str:
        return self.name


@dataclass(frozen=True)
class QualifiedColumn:
    """The field maps to ``qualifier.name``. The qualifier is informational."""

    qualifier: str
    name: str

    @property
    def raw(self) -> str:
        return f"{self.qualifier}{QUALIFIER_SEPARATOR}{self.name}"


FieldTag = Union[Ignored, Column, QualifiedColumn]


def parse_tag(raw: str | None) -> FieldTag:
    """Parse a raw tag string.

    Only the first separator splits; any further dots stay in the name.
    """
    if not raw or raw == IGNORE_MARKER:
        return Ignored()
    qualifier, sep, name = raw.partition(QUALIFIER_SEPARATOR)
    if sep:
        return QualifiedColumn(qualifier=qualifier, name=name)
    return Column(name=raw)


def column(raw: str, **kwargs: Any) -> Any:
    """Declare a dataclass field with a tag.

    Accepts the usual ``dataclasses.field`` keyword arguments::

        @dataclass
        class User:
            id: int = column("users.id", default=0)
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TAG_KEY] = raw
    return dataclasses.field(metadata=metadata, **kwargs)
