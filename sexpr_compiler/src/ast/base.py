"""Base classes and utilities for syntax tree traversal."""

from __future__ import annotations

from abc import ABC
from enum import Enum
from typing import Any, Dict, List, Optional


class ASTNode(ABC):
    """Base class for all syntax tree nodes."""

    def __init__(
        self,
        line: int = 0,
        column: int = 0,
        source_file: Optional[str] = None,
    ) -> None:
        self.line = line
        self.column = column
        self.source_file = source_file


class ASTVisitor:
    """Base class for syntax tree traversal visitors."""

    def visit(self, node: ASTNode) -> Any:
        """Visit a node and return result."""
        method_name = f"visit_{type(node).__name__}"
        if hasattr(self, method_name):
            return getattr(self, method_name)(node)
        return self.generic_visit(node)

    def generic_visit(self, node: ASTNode) -> Any:
        """Default visitor for unhandled node types."""
        pass


_LOCATION_FIELDS = ("line", "column", "source_file")


def ast_to_dict(node: ASTNode) -> Any:
    """Convert a syntax tree to a JSON-friendly dictionary."""
    if isinstance(node, Enum):
        return node.value
    if not isinstance(node, ASTNode):
        return node

    result: Dict[str, Any] = {"type": type(node).__name__}
    for field_name, field_value in node.__dict__.items():
        if field_name in _LOCATION_FIELDS:
            continue
        if isinstance(field_value, list):
            result[field_name] = [ast_to_dict(item) for item in field_value]
        else:
            result[field_name] = ast_to_dict(field_value)

    return result


def format_ast(node: ASTNode, indent: int = 0) -> str:
    """Render a syntax tree as indented text."""
    lines: List[str] = []
    _format_into(lines, node, indent)
    return "\n".join(lines)


def _format_into(lines: List[str], node: ASTNode, indent: int) -> None:
    spaces = "  " * indent
    lines.append(f"{spaces}{type(node).__name__}")

    for field_name, field_value in node.__dict__.items():
        if field_name in _LOCATION_FIELDS:
            continue
        if isinstance(field_value, ASTNode):
            lines.append(f"{spaces}  {field_name}:")
            _format_into(lines, field_value, indent + 2)
        elif isinstance(field_value, list):
            lines.append(f"{spaces}  {field_name}:")
            for item in field_value:
                _format_into(lines, item, indent + 2)
        else:
            shown = field_value.value if isinstance(field_value, Enum) else field_value
            lines.append(f"{spaces}  {field_name}: {shown}")

