"""Describe the fields of a class the way the derivations see them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

TUPLE_MARKER = "__tuple__"
_VARIANTS_ATTRIBUTE = "__ztd_variants__"
_SHADOW_MARKER = "__ztd_shadow__"


class DeriveError(TypeError):
    """Raised when a derivation cannot be applied to a class."""


class Kind(Enum):
    """How a class lays out its fields."""

    NAMED = "named"
    UNNAMED = "unnamed"
    UNIT = "unit"


@dataclass(frozen=True)
class Field:
    """One field of a class: its attribute name, annotation and position."""

    name: str
    annotation: Any
    index: int


@dataclass(frozen=True)
class Shape:
    """The name, kind and ordered fields of a class."""

    name: str
    kind: Kind
    fields: tuple[Field, ...] = ()

    def names(self) -> tuple[str, ...]:
        """Return the attribute names of the fields, in order."""
        return tuple(field.name for field in self.fields)


def _require_class(cls: Any) -> type:
    if not isinstance(cls, type):
        raise DeriveError("Unsupported item")
    return cls


def _own_annotations(cls: type) -> dict[str, Any]:
    return dict(getattr(cls, "__annotations__", None) or {})


def shape_of(cls: Any) -> Shape:
    """Read the shape of ``cls`` from its own annotations or ``__tuple__``.

    Annotated attributes give named fields. A ``__tuple__`` sequence of
    types gives unnamed fields stored as ``value0``, ``value1`` and so on.
    A class with neither is a unit.
    """
    cls = _require_class(cls)
    annotations = _own_annotations(cls)
    tuple_types = cls.__dict__.get(TUPLE_MARKER)

    if tuple_types is not None:
        if annotations:
            raise DeriveError(f"{cls.__name__} mixes named and unnamed fields")
        if not isinstance(tuple_types, (tuple, list)):
            raise DeriveError(f"{cls.__name__}.{TUPLE_MARKER} must be a sequence of types")
        fields = tuple(
            Field(f"value{index}", annotation, index)
            for index, annotation in enumerate(tuple_types)
        )
        return Shape(cls.__name__, Kind.UNNAMED, fields)

    if annotations:
        fields = tuple(
            Field(name, annotation, index)
            for index, (name, annotation) in enumerate(annotations.items())
        )
        return Shape(cls.__name__, Kind.NAMED, fields)

    return Shape(cls.__name__, Kind.UNIT)


def _track_variants(cls: Any) -> type:
    """Start recording the direct subclasses of ``cls`` as they are defined."""
    cls = _require_class(cls)
    if _VARIANTS_ATTRIBUTE in cls.__dict__:
        return cls

    variants: list[type] = []
    original = cls.__dict__.get("__init_subclass__")

    def __init_subclass__(subclass: type, **kwargs: Any) -> None:
        if original is not None:
            original.__get__(subclass, subclass)(**kwargs)
        else:
            super(cls, subclass).__init_subclass__(**kwargs)
        if cls in subclass.__bases__ and _SHADOW_MARKER not in subclass.__dict__:
            variants.append(subclass)

    setattr(cls, _VARIANTS_ATTRIBUTE, variants)
    cls.__init_subclass__ = classmethod(__init_subclass__)
    return cls


def variants_of(cls: Any) -> tuple[type, ...]:
    """Return the recorded variants of an enumeration class, in definition order.

    Only subclasses defined after the class was taken up by a derivation
    that tracks variants are known; an untracked class has none.
    """
    cls = _require_class(cls)
    return tuple(cls.__dict__.get(_VARIANTS_ATTRIBUTE, ()))