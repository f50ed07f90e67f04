"""Syntax tree definitions for the s-expression language."""

from .base import ASTNode, ASTVisitor, ast_to_dict, format_ast
from .expressions import (
    Expr,
    ArithmeticOp,
    Identifier,
    IntegerLiteral,
    LetValue,
    LetType,
    Sequence,
    Assign,
    ArrayLiteral,
    ArrayTypeLiteral,
    Arithmetic,
    ArrayGet,
    ArraySet,
)

__all__ = [
    # Base classes
    "ASTNode",
    "ASTVisitor",
    "ast_to_dict",
    "format_ast",
    # Expressions
    "Expr",
    "ArithmeticOp",
    "Identifier",
    "IntegerLiteral",
    "LetValue",
    "LetType",
    "Sequence",
    "Assign",
    "ArrayLiteral",
    "ArrayTypeLiteral",
    "Arithmetic",
    "ArrayGet",
    "ArraySet",
]
