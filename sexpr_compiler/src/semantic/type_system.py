from __future__ import annotations
from dataclasses import dataclass
from typing import Union

from sexpr_compiler.src.ir.values import (
    UNIT,
    ArrayValue,
    Int64Value,
    TypeValue,
    UnitValue,
    Value,
)

"""Type system primitives used by the type checker.

Types are frozen dataclasses, so ``==`` is structural equality: two types are
equal when their variants and all nested components match.
"""


@dataclass(frozen=True)
class UnitType:
    """Type of expressions evaluated only for their effect."""

    def zero(self) -> Value:
        return UNIT

    def __str__(self) -> str:
        return "Unit"


@dataclass(frozen=True)
class Int64Type:
    """Signed 64-bit integers."""

    def zero(self) -> Value:
        return Int64Value(0)

    def __str__(self) -> str:
        return "Int64"


@dataclass(frozen=True)
class TypeOfType:
    """The type of a type value: ``i64`` has type ``TypeOf(Int64)``."""

    inner: "TypeInfo"

    def zero(self) -> Value:
        return TypeValue(UnitType())

    def __str__(self) -> str:
        return f"TypeOf({self.inner})"


@dataclass(frozen=True)
class ArrayType:
    """Homogeneous arrays of ``element``."""

    element: "TypeInfo"

    def zero(self) -> Value:
        return ArrayValue(())

    def __str__(self) -> str:
        return f"Array({self.element})"


TypeInfo = Union[UnitType, Int64Type, TypeOfType, ArrayType]


def conforms(value: Value, type_info: TypeInfo) -> bool:
    """Check that a runtime value has the shape its static type promises."""
    if isinstance(type_info, UnitType):
        return isinstance(value, UnitValue)
    if isinstance(type_info, Int64Type):
        return isinstance(value, Int64Value)
    if isinstance(type_info, TypeOfType):
        return isinstance(value, TypeValue) and value.type_info == type_info.inner
    if isinstance(type_info, ArrayType):
        return isinstance(value, ArrayValue) and all(
            conforms(item, type_info.element) for item in value.elements
        )
    return False
