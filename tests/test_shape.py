from dataclasses import dataclass

import pytest

from ztd.shape import DeriveError, Field, Kind, Shape, shape_of, variants_of


def test_named_fields_follow_annotations():
    @dataclass
    class Point:
        first: int
        second: str

    shape = shape_of(Point)

    assert shape.name == "Point"
    assert shape.kind is Kind.NAMED
    assert shape.names() == ("first", "second")
    assert [field.annotation for field in shape.fields] == [int, str]


def test_field_indices_are_positions():
    @dataclass
    class Triple:
        a: int
        b: int
        c: int

    shape = shape_of(Triple)

    assert [field.index for field in shape.fields] == list(range(len(shape.fields)))


def test_unnamed_fields_are_numbered_values():
    class Pair:
        __tuple__ = (str, int)

    shape = shape_of(Pair)

    assert shape.kind is Kind.UNNAMED
    assert shape.names() == ("value0", "value1")
    assert shape.fields[1] == Field("value1", int, 1)


def test_empty_tuple_marker_is_unnamed_without_fields():
    class Empty:
        __tuple__ = ()

    shape = shape_of(Empty)

    assert shape == Shape("Empty", Kind.UNNAMED, ())


def test_class_without_fields_is_unit():
    class Unit:
        pass

    assert shape_of(Unit) == Shape("Unit", Kind.UNIT)
    assert shape_of(Unit).names() == ()


def test_inherited_annotations_are_not_fields():
    class Base:
        value: int

    class Case(Base):
        pass

    assert shape_of(Case).kind is Kind.UNIT


def test_non_class_is_unsupported():
    with pytest.raises(DeriveError, match="Unsupported item"):
        shape_of(lambda: None)


def test_derive_error_is_type_error():
    with pytest.raises(TypeError):
        shape_of(42)


def test_tuple_marker_must_be_a_sequence():
    class Broken:
        __tuple__ = str

    with pytest.raises(DeriveError, match="__tuple__"):
        shape_of(Broken)


def test_mixing_named_and_unnamed_fields_is_rejected():
    class Mixed:
        __tuple__ = (int,)
        name: str

    with pytest.raises(DeriveError, match="mixes"):
        shape_of(Mixed)


def test_variants_of_non_class_is_unsupported():
    with pytest.raises(DeriveError, match="Unsupported item"):
        variants_of("Enum")