"""Type-annotated intermediate representation and runtime values."""

from .nodes import (
    IRNode,
    IR_Const,
    IR_Load,
    IR_Store,
    IR_Let,
    IR_Var,
    IR_Seq,
    IR_MakeArray,
    IR_ArrayType,
    IR_Arith,
    IR_ArrayGet,
    IR_ArraySet,
)
from .printer import format_ir, ir_to_dict
from .values import (
    UNIT,
    ArrayValue,
    Int64Value,
    TypeValue,
    UnitValue,
    Value,
    format_value,
    value_to_json,
)

__all__ = [
    "IRNode",
    "IR_Const",
    "IR_Load",
    "IR_Store",
    "IR_Let",
    "IR_Var",
    "IR_Seq",
    "IR_MakeArray",
    "IR_ArrayType",
    "IR_Arith",
    "IR_ArrayGet",
    "IR_ArraySet",
    "format_ir",
    "ir_to_dict",
    "UNIT",
    "ArrayValue",
    "Int64Value",
    "TypeValue",
    "UnitValue",
    "Value",
    "format_value",
    "value_to_json",
]
