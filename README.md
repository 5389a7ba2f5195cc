# ztd

Class decorators that add routine behaviour to a class, worked out from the
fields the class declares.

| Module            | What it gives                                                                |
|-------------------|------------------------------------------------------------------------------|
| `ztd.shape`       | `shape_of`, `variants_of`, `Shape`, `Field`, `Kind`, `DeriveError`: how fields are read |
| `ztd.constructor` | `constructor`: a `new` class method taking every field in order              |
| `ztd.display`     | `display`, `display_as`: a `__str__` built from the fields or a strategy     |
| `ztd.error`       | `error`: an exception class that behaves like the decorated class           |
| `ztd.conversion`  | `convertible`, `enable`, `skip`, `convert`: build instances from plain values |
| `ztd.record`      | `record`, `into_record`, `Flatten`, `Skip`: a plain record copy of an instance |

No third-party libraries are needed at run time.

## Installing

```
pip install ztd
```

## How fields are read

`ztd.shape.shape_of` decides what a class's fields are:

* annotated attributes in the class body are **named** fields, in order;
* a `__tuple__` sequence of types gives **unnamed** fields, stored as
  `value0`, `value1` and so on;
* a class with neither is a **unit**.

Mixing the two, or passing something that is not a class, raises
`ztd.shape.DeriveError` (a `TypeError`).

An "enumeration" is a base class whose variants are its direct subclasses.
Variants are only recorded once the base has been taken up by
`convertible` (or by `error` on such a base); `variants_of` returns them in
definition order.

## Constructors

```python
from ztd.constructor import constructor


@constructor
class Point:
    x: int
    y: int


point = Point.new(1, 2)
```

`new` sets each field directly without calling `__init__`. Pass
`visibility="private"` to name it `_new` instead; without a visibility, a
class whose name starts with an underscore gets `_new`. Any other
visibility raises `DeriveError("Unknown visibility")`, as does a class that
already defines the method.

## Display

```python
from ztd.display import display, display_as


@display
@constructor
class Point:
    x: int
    y: int


str(Point.new(1, 2))        # 'Point { x: 1, y: 2 }'


@display
@display_as("{value}!")
class Shout:
    __tuple__ = (str,)
```

Without a strategy, `str` gives the bare class name for a unit,
`Name { field: value, ... }` for named fields and `Name(value, ...)` for
unnamed fields, each value by its `repr`. `display_as` attaches either a
message, formatted with the fields by name (a single unnamed field is
`value`, several are `value0`, `value1`, ...), or a callable that receives
the field values in order. A message naming an unknown field, or a strategy
that is neither a string nor callable, raises `DeriveError`. Each instance
is shown according to its own class, so variants of a displayed base can
carry strategies of their own.

## Exceptions

```python
from ztd.error import error


@error
@constructor
class Failure:
    code: int


raise Failure.new(3)
```

`error` returns a new class, with the same name and fields, that subclasses
both the original class and `Exception`. A class that already is an
exception is returned unchanged.

## Conversions

```python
from ztd.conversion import convert, convertible, enable, skip


@convertible(all=True)
class Event:
    pass


class Started(Event):
    at: int


class Renamed(Event):
    __tuple__ = (str,)


class Idle(Event):
    pass


convert(Event, (5,))      # a Started with at == 5
convert(Event, "new")     # a Renamed with value0 == "new"
convert(Event, ())        # an Idle
```

Named fields are built from a tuple of every field; one unnamed field from
the value itself; several unnamed fields from a tuple; no fields from `()`.
For an enumeration, `all`, `named`, `unnamed` and `unit` enable variants by
kind, `enable` enables one variant and `skip` keeps one out. The first
variant whose field types accept the value is built. Two enabled variants
taking the same input raise `DeriveError`; a value nobody accepts, or a
class that is not convertible, raises `TypeError`. Annotations given as
strings accept anything.

## Records

```python
from typing import Annotated

from ztd.record import Flatten, Skip, record


@record
@constructor
class Child:
    name: str


@record
@constructor
class Parent:
    child: Annotated[Child, Flatten()]
    cache: Annotated[dict, Skip()]


Parent.new(Child.new("a"), {}).into_record()
# ParentRecord(child=ChildRecord(name='a'))
```

`record` adds `Name.Record` (a class called `NameRecord` with `__init__`,
`__eq__` and `__repr__`) and an `into_record` method; the function
`ztd.record.into_record` does the same for any such instance. `Skip` leaves
a field out, `Flatten` stores the field's own record, so its type must have
a record, otherwise `DeriveError("Cannot flatten ...")`. Remaining unnamed
fields are renumbered `value0`, `value1`, .... Markers are read from real
`Annotated` objects, so they are not seen in modules using
`from __future__ import annotations`.

## What it does not do

There is no command-line tool, and no decorator for generating accessor,
mutator or setter methods.

## Running the tests

```
pip install ztd[test]
pytest
```