"""Give a class a plain record twin and an ``into_record`` method.

For a class ``Name`` a class ``NameRecord`` is made, reachable as
``Name.Record``, with the same fields minus those marked :class:`Skip`.
A field marked :class:`Flatten` holds the record of its value instead of
the value, so its type must itself have a record. Fields are marked with
``typing.Annotated``: ``child: Annotated[Child, Flatten()]``.
Unnamed fields that remain are renumbered ``value0``, ``value1`` and so on.
"""

from __future__ import annotations

import inspect
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any

from ztd.shape import TUPLE_MARKER, DeriveError, Kind, Shape, shape_of

_RECORD_ATTRIBUTE = "__ztd_record__"


class Flatten:
    """Field marker: the record holds this field's own record."""

    def __repr__(self) -> str:
        return "Flatten()"


class Skip:
    """Field marker: the record leaves this field out."""

    def __repr__(self) -> str:
        return "Skip()"


class _Treatment(Enum):
    KEEP = "keep"
    FLATTEN = "flatten"
    SKIP = "skip"


@dataclass(frozen=True)
class _RecordField:
    name: str
    treatment: _Treatment


@dataclass(frozen=True)
class _RecordSpec:
    record_class: type
    fields: tuple[_RecordField, ...]


def _split(annotation: Any) -> tuple[Any, _Treatment, tuple[Any, ...]]:
    """Separate an annotation into its base type, its treatment and other metadata."""
    if typing.get_origin(annotation) is not Annotated:
        return annotation, _Treatment.KEEP, ()
    base, *metadata = typing.get_args(annotation)
    treatment = _Treatment.KEEP
    others = []
    for item in metadata:
        if item is Flatten or isinstance(item, Flatten):
            treatment = _Treatment.FLATTEN
        elif item is Skip or isinstance(item, Skip):
            treatment = _Treatment.SKIP
        else:
            others.append(item)
    return base, treatment, tuple(others)


def _annotations(shape: Shape) -> list[Any]:
    return [field.annotation for field in shape.fields]


def _record_class_of(base: Any) -> type:
    spec = base.__dict__.get(_RECORD_ATTRIBUTE) if isinstance(base, type) else None
    if spec is None:
        raise DeriveError(f"Cannot flatten {base!r}")
    return spec.record_class


def _make_record_class(cls: type, kind: Kind, fields: list[tuple[str, Any]]) -> type:
    namespace: dict[str, Any] = {
        "__module__": cls.__module__,
        "__qualname__": f"{cls.__qualname__}Record",
        "__doc__": f"Plain record of a {cls.__name__}.",
    }
    if kind is Kind.UNNAMED:
        attributes = [f"value{index}" for index in range(len(fields))]
        namespace[TUPLE_MARKER] = tuple(annotation for _name, annotation in fields)
    else:
        attributes = [name for name, _annotation in fields]
        namespace["__annotations__"] = dict(fields)

    signature = inspect.Signature(
        [inspect.Parameter(name, inspect.Parameter.POSITIONAL_OR_KEYWORD) for name in attributes]
    )

    def __init__(self: Any, *args: Any, **kwargs: Any) -> None:
        for name, value in signature.bind(*args, **kwargs).arguments.items():
            setattr(self, name, value)

    def __eq__(self: Any, other: Any) -> Any:
        if type(other) is not type(self):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in attributes)

    def __repr__(self: Any) -> str:
        body = ", ".join(f"{name}={getattr(self, name)!r}" for name in attributes)
        return f"{type(self).__name__}({body})"

    namespace.update(__init__=__init__, __eq__=__eq__, __repr__=__repr__, __hash__=None)
    return types.new_class(
        f"{cls.__name__}Record", (), exec_body=lambda body: body.update(namespace)
    )


def record(cls: Any) -> type:
    """Give ``cls`` a ``Record`` class and an ``into_record`` method.

    Raises ``DeriveError`` for something that is not a class, for a class
    that already defines either name, and for a flattened field whose type
    has no record.
    """
    shape = shape_of(cls)
    for name in ("Record", "into_record"):
        if name in cls.__dict__:
            raise DeriveError(f"{cls.__name__} already defines {name}")

    fields = []
    kept: list[tuple[str, Any]] = []
    for field, annotation in zip(shape.fields, _annotations(shape)):
        base, treatment, others = _split(annotation)
        fields.append(_RecordField(field.name, treatment))
        if treatment is _Treatment.SKIP:
            continue
        if treatment is _Treatment.FLATTEN:
            base = _record_class_of(base)
        kept.append((field.name, Annotated[(base, *others)] if others else base))

    record_class = _make_record_class(cls, shape.kind, kept)
    setattr(cls, _RECORD_ATTRIBUTE, _RecordSpec(record_class, tuple(fields)))
    cls.Record = record_class

    def _into_record(self: Any) -> Any:
        return into_record(self)

    _into_record.__name__ = "into_record"
    _into_record.__qualname__ = f"{cls.__qualname__}.into_record"
    _into_record.__doc__ = f"Return the {record_class.__name__} of this {cls.__name__}."
    cls.into_record = _into_record
    return cls


def into_record(instance: Any) -> Any:
    """Return the record of ``instance``, whose class must have been given one."""
    spec = type(instance).__dict__.get(_RECORD_ATTRIBUTE)
    if spec is None:
        raise TypeError(f"{type(instance).__name__} has no record")
    values = []
    for field in spec.fields:
        if field.treatment is _Treatment.SKIP:
            continue
        value = getattr(instance, field.name)
        if field.treatment is _Treatment.FLATTEN:
            value = into_record(value)
        values.append(value)
    return spec.record_class(*values)


__all__ = ["Flatten", "Skip", "record", "into_record"]