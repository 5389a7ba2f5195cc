"""Give a class a ``new`` class method that takes every field in order."""

from __future__ import annotations

import inspect
from typing import Any, Callable

from ztd.shape import DeriveError, Shape, shape_of

_METHOD_NAMES = {"public": "new", "private": "_new"}


def _method_name(cls: type, visibility: str | None) -> str:
    if visibility is None:
        visibility = "private" if cls.__name__.startswith("_") else "public"
    return _METHOD_NAMES[visibility]


def _build_new(shape: Shape) -> classmethod:
    parameters = [
        inspect.Parameter(field.name, inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=field.annotation)
        for field in shape.fields
    ]
    arguments = inspect.Signature(parameters)

    def new(cls, *args, **kwargs):
        bound = arguments.bind(*args, **kwargs)
        instance = cls.__new__(cls)
        for name, value in bound.arguments.items():
            object.__setattr__(instance, name, value)
        return instance

    owner = inspect.Parameter("cls", inspect.Parameter.POSITIONAL_ONLY)
    new.__signature__ = arguments.replace(parameters=[owner, *parameters])
    new.__doc__ = f"Build a {shape.name} from its fields, in order."
    return classmethod(new)


def constructor(cls: Any = None, *, visibility: str | None = None) -> Any:
    """Add a constructor to ``cls``.

    The constructor is named ``new`` when public and ``_new`` when private.
    Without a visibility it follows the class: a class whose name starts
    with an underscore gets a private constructor. Fields are set directly,
    without calling ``__init__``.
    """
    if visibility is not None and visibility not in _METHOD_NAMES:
        raise DeriveError("Unknown visibility")

    def apply(target: Any) -> type:
        shape = shape_of(target)
        name = _method_name(target, visibility)
        if name in target.__dict__:
            raise DeriveError(f"{target.__name__} already defines {name}")
        setattr(target, name, _build_new(shape))
        return target

    if cls is None:
        return apply
    return apply(cls)


__all__: list[str] = ["constructor"]
_: Callable[..., Any] = constructor