from dataclasses import dataclass

import pytest

from ztd.constructor import constructor
from ztd.error import error
from ztd.shape import DeriveError, Kind, shape_of


def test_struct():
    class Struct:
        def __str__(self):
            return ""

    Struct = error(Struct)

    assert issubclass(Struct, Exception)
    with pytest.raises(Struct) as caught:
        raise Struct()
    assert str(caught.value) == ""


def test_enum():
    class Enum:
        def __str__(self):
            return ""

    Enum = error(Enum)

    class Case(Enum):
        pass

    with pytest.raises(Enum) as caught:
        raise Case()
    assert isinstance(caught.value, Exception)
    assert type(caught.value).__name__ == "Case"


def test_union_analogue_is_unsupported():
    with pytest.raises(DeriveError, match="Unsupported item"):
        error(lambda: None)


def test_names_are_kept():
    class Struct:
        """A failure."""

    Struct = error(Struct)

    assert Struct.__name__ == "Struct"
    assert Struct.__qualname__.endswith("Struct")
    assert Struct.__doc__ == "A failure."


def test_dataclass_fields_survive():
    @error
    @dataclass
    class Failure:
        code: int
        reason: str

    with pytest.raises(Failure) as caught:
        raise Failure(7, "broken")
    assert (caught.value.code, caught.value.reason) == (7, "broken")
    assert shape_of(Failure).names() == ("code", "reason")


def test_tuple_fields_survive():
    @error
    class Failure:
        __tuple__ = (str,)

    assert shape_of(Failure).kind is Kind.UNNAMED


def test_constructor_still_builds_errors():
    class Failure:
        reason: str

    Failure = error(constructor(Failure))

    instance = Failure.new("broken")
    assert isinstance(instance, Exception)
    assert instance.reason == "broken"


def test_existing_exception_is_returned_unchanged():
    class Failure(ValueError):
        pass

    assert error(Failure) is Failure