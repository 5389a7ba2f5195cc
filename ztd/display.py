"""Give a class, or every variant of an enumeration, a ``__str__``.

Without a strategy an instance is shown in debug form: the bare name for
a class without fields, ``Name { field: value, ... }`` for named fields
and ``Name(value, ...)`` for unnamed fields, each value by its ``repr``.

A strategy attached with :func:`display_as` replaces that form. It is
either a message, formatted with the fields by name, or a callable that
receives the field values in order and whose result is shown. In a
message, unnamed fields are called ``value0``, ``value1`` and so on, or
just ``value`` when there is only one.
"""

from __future__ import annotations

import re
from string import Formatter
from typing import Any, Callable, Union

from ztd.shape import DeriveError, Kind, Shape, shape_of

Strategy = Union[str, Callable[..., Any]]

_STRATEGY_ATTRIBUTE = "__ztd_display__"
_FIELD_ROOT = re.compile(r"[.\[]")


def _bindings(shape: Shape) -> dict[str, str]:
    """Map the names a message may use to the attributes that hold them."""
    if shape.kind is Kind.UNNAMED and len(shape.fields) == 1:
        return {"value": shape.fields[0].name}
    return {field.name: field.name for field in shape.fields}


def _check_message(shape: Shape, message: str) -> None:
    known = _bindings(shape)
    try:
        parts = list(Formatter().parse(message))
    except ValueError as exc:
        raise DeriveError("Unsupported strategy") from exc
    for _literal, field_name, _spec, _conversion in parts:
        if field_name is None:
            continue
        root = _FIELD_ROOT.split(field_name, maxsplit=1)[0]
        if root not in known:
            raise DeriveError(f"Unknown field in message: {field_name!r}")


def _debug(shape: Shape, values: list[Any]) -> str:
    if not shape.fields:
        return shape.name
    if shape.kind is Kind.NAMED:
        body = ", ".join(
            f"{field.name}: {value!r}" for field, value in zip(shape.fields, values)
        )
        return f"{shape.name} {{ {body} }}"
    return f"{shape.name}({', '.join(repr(value) for value in values)})"


def _render(instance: Any) -> str:
    kind = type(instance)
    shape = shape_of(kind)
    values = [getattr(instance, field.name) for field in shape.fields]
    strategy = kind.__dict__.get(_STRATEGY_ATTRIBUTE)

    if strategy is None:
        return _debug(shape, values)
    if isinstance(strategy, str):
        arguments = {
            display_name: getattr(instance, attribute)
            for display_name, attribute in _bindings(shape).items()
        }
        return strategy.format(**arguments)
    return str(strategy(*values))


def display(cls: Any) -> type:
    """Make ``str`` of ``cls`` and of its variants follow their strategies.

    Each instance is shown according to its own class: a variant declared
    as a subclass is shown by its own name, fields and strategy.
    """
    shape_of(cls)

    def __str__(self: Any) -> str:
        return _render(self)

    __str__.__qualname__ = f"{cls.__qualname__}.__str__"
    cls.__str__ = __str__
    return cls


def display_as(strategy: Strategy) -> Callable[[type], type]:
    """Return a decorator that attaches ``strategy`` to a class or variant.

    Raises ``DeriveError`` when the strategy is neither a message nor a
    callable, or when a message names a field the class does not have.
    """
    if not isinstance(strategy, str) and not callable(strategy):
        raise DeriveError("Unsupported strategy")

    def apply(cls: Any) -> type:
        shape = shape_of(cls)
        if isinstance(strategy, str):
            _check_message(shape, strategy)
        setattr(cls, _STRATEGY_ATTRIBUTE, strategy)
        return cls

    return apply


__all__ = ["display", "display_as"]