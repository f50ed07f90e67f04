"""
Tests for semantic/type_system.py - structural equality, zero values, conformance.
"""

from sexpr_compiler.src.ir.values import (
    UNIT,
    ArrayValue,
    Int64Value,
    TypeValue,
)
from sexpr_compiler.src.semantic.type_system import (
    ArrayType,
    Int64Type,
    TypeOfType,
    UnitType,
    conforms,
)


class TestStructuralEquality:
    def test_equal_when_components_match(self):
        assert ArrayType(ArrayType(Int64Type())) == ArrayType(ArrayType(Int64Type()))
        assert TypeOfType(UnitType()) == TypeOfType(UnitType())

    def test_different_components(self):
        assert ArrayType(Int64Type()) != ArrayType(UnitType())
        assert TypeOfType(Int64Type()) != Int64Type()
        assert ArrayType(Int64Type()) != TypeOfType(Int64Type())

    def test_rendering(self):
        assert str(TypeOfType(ArrayType(Int64Type()))) == "TypeOf(Array(Int64))"
        assert str(UnitType()) == "Unit"


class TestZeroValues:
    def test_zero_values(self):
        assert UnitType().zero() == UNIT
        assert Int64Type().zero() == Int64Value(0)
        assert TypeOfType(Int64Type()).zero() == TypeValue(UnitType())
        assert ArrayType(Int64Type()).zero() == ArrayValue(())


class TestConforms:
    def test_scalars(self):
        assert conforms(Int64Value(3), Int64Type())
        assert conforms(UNIT, UnitType())
        assert not conforms(Int64Value(3), UnitType())

    def test_type_values(self):
        assert conforms(TypeValue(Int64Type()), TypeOfType(Int64Type()))
        assert not conforms(TypeValue(UnitType()), TypeOfType(Int64Type()))

    def test_arrays_checked_recursively(self):
        nested = ArrayValue((ArrayValue((Int64Value(1),)), ArrayValue(())))
        assert conforms(nested, ArrayType(ArrayType(Int64Type())))
        assert not conforms(nested, ArrayType(Int64Type()))
        assert conforms(ArrayValue(()), ArrayType(Int64Type()))
