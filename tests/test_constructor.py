import pytest

from ztd.constructor import constructor
from ztd.shape import DeriveError


def test_struct():
    class Struct:
        _first: str
        second: str

    Struct = constructor(Struct)

    assert Struct.new("foo", "bar").second == "bar"


def test_struct_with_three_fields_keeps_identity():
    class StructWithLifetimes:
        _first: list
        second: list
        _third: str

    StructWithLifetimes = constructor(StructWithLifetimes)

    second = ["bar"]
    instance = StructWithLifetimes.new(["foo"], second, "foobar")

    assert instance.second is second
    assert instance._third == "foobar"


def test_tuple_struct():
    class TupleStruct:
        __tuple__ = (str, str)

    TupleStruct = constructor(TupleStruct)

    assert TupleStruct.new("foo", "bar").value1 == "bar"


def test_tuple_struct_keeps_identity():
    class TupleStructWithLifetimes:
        __tuple__ = (list, list)

    TupleStructWithLifetimes = constructor(TupleStructWithLifetimes)

    first = ["foo"]

    assert TupleStructWithLifetimes.new(first, ["bar"]).value0 is first


def test_unit_struct():
    class UnitStruct:
        pass

    UnitStruct = constructor(UnitStruct)

    assert type(UnitStruct.new()).__name__ == "UnitStruct"


def test_keyword_arguments():
    class Struct:
        _first: str
        second: str

    Struct = constructor(Struct)

    instance = Struct.new(second="bar", _first="foo")

    assert (instance._first, instance.second) == ("foo", "bar")


def test_wrong_number_of_arguments():
    class Struct:
        first: str

    Struct = constructor(Struct)

    with pytest.raises(TypeError):
        Struct.new("foo", "bar")


def test_init_is_not_called():
    class Struct:
        first: str

        def __init__(self):
            raise AssertionError("init must not run")

    Struct = constructor(Struct)

    assert Struct.new("foo").first == "foo"


def test_explicit_public_visibility():
    class _Struct:
        _first: int

    _Struct = constructor(_Struct, visibility="public")

    assert _Struct.new(5)._first == 5


def test_private_visibility():
    class Struct:
        _first: str

    Struct = constructor(Struct, visibility="private")

    assert Struct._new("foo")._first == "foo"
    assert not hasattr(Struct, "new")


def test_visibility_follows_class_name():
    class _Struct:
        _first: int

    _Struct = constructor(_Struct)

    assert _Struct._new(7)._first == 7
    assert "new" not in _Struct.__dict__


def test_unknown_visibility():
    class _Struct:
        _first: int

    with pytest.raises(DeriveError, match="Unknown visibility"):
        constructor(_Struct, visibility="foobar")


def test_unknown_attribute():
    class _Struct:
        _first: int

    with pytest.raises(TypeError):
        constructor(_Struct, foo="bar")


def test_existing_constructor_is_not_replaced():
    class Struct:
        first: int

        @classmethod
        def new(cls):
            return cls()

    with pytest.raises(DeriveError, match="already defines new"):
        constructor(Struct)


def test_non_class_is_unsupported():
    with pytest.raises(DeriveError, match="Unsupported item"):
        constructor(len)