"""Record field discovery and extraction.

Records are dataclasses or pydantic models. Field order is declaration order
and is authoritative both for insert extraction and for resolving column
collisions.
"""

from __future__ import annotations

import copy
import dataclasses
import inspect
import sys
from dataclasses import dataclass
from typing import Annotated, Any, Callable, get_args, get_origin, get_type_hints

from rowbind.core.exceptions import ExtractionError
from rowbind.mapping.decoder import zero_value
from rowbind.mapping.tags import TAG_KEY, FieldTag, Ignored, Tag, parse_tag

_NO_DEFAULT: Any = object()


@dataclass(frozen=True)
class FieldSpec:
    """A record field as seen by the mapper."""

    index: int
    name: str
    type: Any
    tag: FieldTag
    raw_tag: str | None = None
    default: Any = _NO_DEFAULT
    default_factory: Callable[[], Any] | None = None
    init: bool = True

    @property
    def ignored(self) -> bool:
        return isinstance(self.tag, Ignored)

    def zero(self) -> Any:
        """Value the field holds before any column is decoded into it."""
        if self.default_factory is not None:
            return self.default_factory()
        if self.default is not _NO_DEFAULT:
            return copy.deepcopy(self.default)
        return zero_value(self.type)


def _is_pydantic_model(cls: Any) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    from pydantic import BaseModel

    return isinstance(cls, type) and issubclass(cls, BaseModel)


def is_record_type(cls: Any) -> bool:
    """True for dataclass types and pydantic model types."""
    return isinstance(cls, type) and (dataclasses.is_dataclass(cls) or _is_pydantic_model(cls))


def is_record(value: Any) -> bool:
    """True for dataclass and pydantic model instances."""
    return not isinstance(value, type) and is_record_type(type(value))


def _split_annotated(tp: Any) -> tuple[Any, str | None]:
    """Strip ``Annotated`` and return the first ``Tag`` found in it."""
    if get_origin(tp) is not Annotated:
        return tp, None
    base, *extras = get_args(tp)
    for extra in extras:
        if isinstance(extra, Tag):
            return base, extra.raw
    return base, None


def _resolve_annotation(
    annotation: Any, globalns: dict[str, Any], localns: dict[str, Any]
) -> Any:
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns, localns)  # noqa: S307
    except (NameError, AttributeError, SyntaxError, TypeError):
        return Any


def _type_hints(cls: type) -> dict[str, Any]:
    """Resolve field annotations, one field at a time if the class as a whole fails.

    Names that cannot be resolved (local classes, ``TYPE_CHECKING`` imports)
    become ``Any``.
    """
    try:
        return get_type_hints(cls, include_extras=True)
    except NameError:
        pass

    hints: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        annotations = inspect.get_annotations(klass)
        module = sys.modules.get(klass.__module__)
        globalns = dict(vars(module)) if module is not None else {}
        localns = dict(vars(klass))
        for name, annotation in annotations.items():
            hints[name] = _resolve_annotation(annotation, globalns, localns)
    return hints


def _dataclass_fields(cls: type) -> list[FieldSpec]:
    hints = _type_hints(cls)
    specs: list[FieldSpec] = []
    for index, f in enumerate(dataclasses.fields(cls)):
        tp, annotated_tag = _split_annotated(hints.get(f.name, Any))
        raw = f.metadata.get(TAG_KEY, annotated_tag)
        factory = None if f.default_factory is dataclasses.MISSING else f.default_factory
        specs.append(
            FieldSpec(
                index=index,
                name=f.name,
                type=tp,
                tag=parse_tag(raw),
                raw_tag=raw,
                default=_NO_DEFAULT if f.default is dataclasses.MISSING else f.default,
                default_factory=factory,
                init=f.init,
            )
        )
    return specs


def _pydantic_fields(cls: Any) -> list[FieldSpec]:
    from pydantic_core import PydanticUndefined

    specs: list[FieldSpec] = []
    for index, (name, info) in enumerate(cls.model_fields.items()):
        raw = next((m.raw for m in info.metadata if isinstance(m, Tag)), None)
        if raw is None and isinstance(info.json_schema_extra, dict):
            extra = info.json_schema_extra.get(TAG_KEY)
            raw = extra if isinstance(extra, str) else None
        default = _NO_DEFAULT if info.default is PydanticUndefined else info.default
        specs.append(
            FieldSpec(
                index=index,
                name=name,
                type=info.annotation,
                tag=parse_tag(raw),
                raw_tag=raw,
                default=default,
                default_factory=info.default_factory,
            )
        )
    return specs


def record_fields(cls: type) -> list[FieldSpec]:
    """Return the FieldSpecs of a record type in declaration order."""
    if _is_pydantic_model(cls):
        return _pydantic_fields(cls)
    if dataclasses.is_dataclass(cls):
        return _dataclass_fields(cls)
    raise TypeError(f"{cls!r} is not a dataclass or pydantic model")


def extract_fields(record: Any) -> tuple[list[str], list[Any]]:
    """Collect the column names and current values of a record's tagged fields.

    Returns two parallel lists in field declaration order. Ignored fields are
    skipped; qualified tags contribute only their column part.
    """
    if not is_record(record):
        raise ExtractionError(type(record).__name__)

    columns: list[str] = []
    values: list[Any] = []
    for spec in record_fields(type(record)):
        if spec.ignored:
            continue
        columns.append(spec.tag.name)  # type: ignore[union-attr]
        values.append(getattr(record, spec.name))
    return columns, values


def build_record(cls: Any, values: dict[str, Any], specs: list[FieldSpec]) -> Any:
    """Construct a record from a complete field-name → value dict."""
    if _is_pydantic_model(cls):
        return cls.model_construct(**values)

    instance = cls(**{s.name: values[s.name] for s in specs if s.init})
    for spec in specs:
        if not spec.init:
            object.__setattr__(instance, spec.name, values[spec.name])
    return instance
