"""Renderings of the type-annotated tree for output and debugging."""

from __future__ import annotations

from typing import Any, Dict, List

from sexpr_compiler.src.ast.expressions import ArithmeticOp
from .nodes import IRNode
from .values import (
    ArrayValue,
    Int64Value,
    TypeValue,
    UnitValue,
    format_value,
    value_to_json,
)

_SKIPPED_FIELDS = ("value_type", "source_ast")

_VALUE_TYPES = (UnitValue, Int64Value, TypeValue, ArrayValue)


def ir_to_dict(node: IRNode) -> Dict[str, Any]:
    """Convert a type-annotated tree to a JSON-friendly dictionary."""
    result: Dict[str, Any] = {
        "node": type(node).__name__,
        "type": str(node.value_type),
    }
    for field_name, field_value in node.__dict__.items():
        if field_name in _SKIPPED_FIELDS:
            continue
        if isinstance(field_value, IRNode):
            result[field_name] = ir_to_dict(field_value)
        elif isinstance(field_value, list):
            result[field_name] = [ir_to_dict(item) for item in field_value]
        elif isinstance(field_value, ArithmeticOp):
            result[field_name] = field_value.value
        elif isinstance(field_value, _VALUE_TYPES):
            result[field_name] = value_to_json(field_value)
        else:
            result[field_name] = field_value
    return result


def format_ir(node: IRNode, indent: int = 0) -> str:
    """Render a type-annotated tree as indented ``Op : Type`` lines."""
    lines: List[str] = []
    _format_into(lines, node, indent)
    return "\n".join(lines)


def _format_into(lines: List[str], node: IRNode, indent: int) -> None:
    spaces = "  " * indent
    details = []
    children = []
    for field_name, field_value in node.__dict__.items():
        if field_name in _SKIPPED_FIELDS:
            continue
        if isinstance(field_value, IRNode):
            children.append(field_value)
        elif isinstance(field_value, list):
            children.extend(field_value)
        elif isinstance(field_value, ArithmeticOp):
            details.append(field_value.value)
        elif isinstance(field_value, _VALUE_TYPES):
            details.append(format_value(field_value))
        else:
            details.append(f"{field_name}={field_value}")

    label = type(node).__name__
    if details:
        label += "(" + ", ".join(details) + ")"
    lines.append(f"{spaces}{label} : {node.value_type}")
    for child in children:
        _format_into(lines, child, indent + 1)
