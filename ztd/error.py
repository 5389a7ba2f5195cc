"""Turn a class, or the base of an enumeration, into an exception type."""

from __future__ import annotations

import types
from typing import Any

from ztd.shape import (
    _SHADOW_MARKER,
    _VARIANTS_ATTRIBUTE,
    TUPLE_MARKER,
    _track_variants,
    shape_of,
)


def error(cls: Any) -> type:
    """Return an exception class that behaves like ``cls``.

    The result subclasses both ``cls`` and ``Exception`` and keeps its
    name, fields and methods. Variants declared as subclasses of the result
    are exceptions too. A class that already is an exception is returned
    unchanged.
    """
    shape_of(cls)
    if issubclass(cls, BaseException):
        return cls

    namespace: dict[str, Any] = {
        "__module__": cls.__module__,
        "__qualname__": cls.__qualname__,
        "__doc__": cls.__doc__,
        "__annotations__": dict(getattr(cls, "__annotations__", None) or {}),
        _SHADOW_MARKER: True,
    }
    if TUPLE_MARKER in cls.__dict__:
        namespace[TUPLE_MARKER] = cls.__dict__[TUPLE_MARKER]

    result = types.new_class(
        cls.__name__, (cls, Exception), exec_body=lambda body: body.update(namespace)
    )
    if _VARIANTS_ATTRIBUTE in cls.__dict__:
        _track_variants(result)
    return result