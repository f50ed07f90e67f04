"""Static type checking package for the s-expression language."""

from .analyzer import TypeChecker, check_program
from .symbol_table import Symbol, SymbolTable
from .type_system import (
    ArrayType,
    Int64Type,
    TypeInfo,
    TypeOfType,
    UnitType,
    conforms,
)

__all__ = [
    "TypeChecker",
    "check_program",
    "Symbol",
    "SymbolTable",
    "ArrayType",
    "Int64Type",
    "TypeInfo",
    "TypeOfType",
    "UnitType",
    "conforms",
]
