"""Runtime values produced by the evaluator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Tuple, Union

if TYPE_CHECKING:
    from sexpr_compiler.src.semantic.type_system import TypeInfo


@dataclass(frozen=True)
class UnitValue:
    """The only value of type Unit."""


@dataclass(frozen=True)
class Int64Value:
    """A signed 64-bit integer."""

    value: int


@dataclass(frozen=True)
class TypeValue:
    """A type used as a value, e.g. the binding of ``i64``."""

    type_info: "TypeInfo"


@dataclass(frozen=True)
class ArrayValue:
    """An ordered sequence of values.

    Arrays are immutable; ``array-set`` stores an updated copy in the
    variable's slot, so every read of a variable is an independent snapshot.
    """

    elements: Tuple["Value", ...] = ()

    def replace(self, index: int, value: "Value") -> "ArrayValue":
        return ArrayValue(self.elements[:index] + (value,) + self.elements[index + 1 :])


Value = Union[UnitValue, Int64Value, TypeValue, ArrayValue]

UNIT = UnitValue()


def format_value(value: Value) -> str:
    """Human-readable rendering of a runtime value."""
    if isinstance(value, UnitValue):
        return "()"
    if isinstance(value, Int64Value):
        return str(value.value)
    if isinstance(value, TypeValue):
        return f"type {value.type_info}"
    return "[" + ", ".join(format_value(item) for item in value.elements) + "]"


def value_to_json(value: Value) -> Any:
    """JSON-friendly structure for a runtime value."""
    if isinstance(value, UnitValue):
        return None
    if isinstance(value, Int64Value):
        return value.value
    if isinstance(value, TypeValue):
        return {"type": str(value.type_info)}
    return [value_to_json(item) for item in value.elements]
