"""Build instances of a class, or of an enumeration's variants, from plain values.

A class decorated with :func:`convertible` can be built with
:func:`convert`. The value it is built from depends on the fields:

* named fields: a tuple holding every field in order;
* one unnamed field: the value of that field itself;
* no unnamed field, or a class without fields: the empty tuple;
* several unnamed fields: a tuple holding every field in order.

An enumeration is a convertible base class whose variants are its
direct subclasses. A variant takes part when the base enables its kind
of fields (``all``, ``named``, ``unnamed``, ``unit``) or when the
variant is marked with :func:`enable`; :func:`skip` keeps it out. The
variant chosen is the first whose field types accept the value.
"""

from __future__ import annotations

import inspect
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ztd.shape import DeriveError, Kind, Shape, _track_variants, shape_of, variants_of

_SETTINGS_ATTRIBUTE = "__ztd_from__"
_MODIFIER_ATTRIBUTE = "__ztd_from_modifier__"


class _Modifier(Enum):
    ENABLED = "enabled"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class _Settings:
    named: bool = False
    unnamed: bool = False
    unit: bool = False

    def enables(self, kind: Kind) -> bool:
        return {Kind.NAMED: self.named, Kind.UNNAMED: self.unnamed, Kind.UNIT: self.unit}[kind]


def _matches(value: Any, annotation: Any) -> bool:
    """Tell whether ``value`` fits ``annotation`` as far as it can be checked."""
    if annotation is typing.Any or annotation is object or annotation is inspect.Parameter.empty:
        return True
    if isinstance(annotation, str):
        return True
    if annotation is None or annotation is type(None):
        return value is None
    if isinstance(annotation, type):
        return isinstance(value, annotation)
    origin = typing.get_origin(annotation)
    arguments = typing.get_args(annotation)
    if origin is typing.Union or origin is types.UnionType:
        return any(_matches(value, argument) for argument in arguments)
    if origin is typing.Annotated:
        return _matches(value, arguments[0])
    if origin is typing.Literal:
        return value in arguments
    if isinstance(origin, type):
        return isinstance(value, origin)
    return True


def _field_types(shape: Shape) -> tuple[Any, ...]:
    return tuple(field.annotation for field in shape.fields)


@dataclass(frozen=True)
class _Conversion:
    target: type
    shape: Shape
    single: bool
    types: tuple[Any, ...]

    @classmethod
    def of(cls, target: type) -> _Conversion:
        shape = shape_of(target)
        single = shape.kind is Kind.UNNAMED and len(shape.fields) == 1
        return cls(target, shape, single, _field_types(shape))

    @property
    def key(self) -> tuple[str, Any]:
        if self.single:
            return ("single", self.types[0])
        return ("tuple", self.types)

    def accepts(self, value: Any) -> bool:
        if self.single:
            return _matches(value, self.types[0])
        if not isinstance(value, tuple) or len(value) != len(self.types):
            return False
        return all(_matches(item, annotation) for item, annotation in zip(value, self.types))

    def build(self, value: Any) -> Any:
        values = (value,) if self.single else value
        instance = self.target.__new__(self.target)
        for field, item in zip(self.shape.fields, values):
            object.__setattr__(instance, field.name, item)
        return instance


def convertible(
    cls: Any = None,
    *,
    all: bool = False,
    named: bool = False,
    unnamed: bool = False,
    unit: bool = False,
) -> Any:
    """Mark ``cls`` as buildable with :func:`convert`.

    The flags only matter for an enumeration: they enable every variant
    with the given kind of fields, or every variant for ``all``.
    """
    settings = _Settings(named=all or named, unnamed=all or unnamed, unit=all or unit)

    def apply(target: Any) -> type:
        shape_of(target)
        _track_variants(target)
        setattr(target, _SETTINGS_ATTRIBUTE, settings)
        return target

    if cls is None:
        return apply
    return apply(cls)


def _mark(variant: Any, modifier: _Modifier) -> type:
    shape_of(variant)
    setattr(variant, _MODIFIER_ATTRIBUTE, modifier)
    return variant


def enable(variant: Any) -> type:
    """Let an enumeration variant be built with :func:`convert`."""
    return _mark(variant, _Modifier.ENABLED)


def skip(variant: Any) -> type:
    """Keep an enumeration variant out of :func:`convert`, whatever the base enables."""
    return _mark(variant, _Modifier.SKIPPED)


def _conversions(cls: type) -> list[_Conversion]:
    settings = cls.__dict__.get(_SETTINGS_ATTRIBUTE)
    if settings is None:
        raise TypeError(f"{cls.__name__} is not convertible")

    variants = variants_of(cls)
    if not variants:
        return [_Conversion.of(cls)]

    conversions = []
    for variant in variants:
        modifier = variant.__dict__.get(_MODIFIER_ATTRIBUTE)
        if modifier is _Modifier.SKIPPED:
            continue
        shape = shape_of(variant)
        if not settings.enables(shape.kind) and modifier is not _Modifier.ENABLED:
            continue
        conversions.append(_Conversion.of(variant))

    for position, conversion in enumerate(conversions):
        for other in conversions[position + 1:]:
            if conversion.key == other.key:
                raise DeriveError(
                    f"conflicting conversions into {cls.__name__} "
                    f"from {conversion.target.__name__} and {other.target.__name__}"
                )
    return conversions


def convert(cls: Any, value: Any) -> Any:
    """Build an instance of ``cls``, or of one of its variants, from ``value``.

    Raises ``TypeError`` when ``cls`` is not convertible or no conversion
    accepts the value.
    """
    if not isinstance(cls, type):
        raise TypeError(f"{cls!r} is not a class")
    for conversion in _conversions(cls):
        if conversion.accepts(value):
            return conversion.build(value)
    raise TypeError(f"cannot convert {type(value).__name__} into {cls.__name__}")


__all__ = ["convertible", "enable", "skip", "convert"]