from __future__ import annotations
from enum import Enum
from typing import List, Optional
from .base import ASTNode

"""Expression node definitions for the s-expression language."""


class ArithmeticOp(Enum):
    """Integer operators, keyed by their source spelling."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    REM = "%"


class Expr(ASTNode):
    """Base class for all expressions."""

    def __init__(
        self, line: int = 0, column: int = 0, source_file: Optional[str] = None
    ) -> None:
        super().__init__(line, column, source_file)


class Identifier(Expr):
    """Variable reference: x"""

    def __init__(self, name: str, line: int = 0, column: int = 0) -> None:
        super().__init__(line, column)
        self.name = name


class IntegerLiteral(Expr):
    """64-bit integer literal: 42, -17"""

    def __init__(self, value: int, line: int = 0, column: int = 0) -> None:
        super().__init__(line, column)
        self.value = value


class LetValue(Expr):
    """(let name value body)"""

    def __init__(
        self, name: str, value: Expr, body: Expr, line: int = 0, column: int = 0
    ) -> None:
        super().__init__(line, column)
        self.name = name
        self.value = value
        self.body = body


class LetType(Expr):
    """(var name type body) - binds the zero value of the type"""

    def __init__(
        self, name: str, type_expr: Expr, body: Expr, line: int = 0, column: int = 0
    ) -> None:
        super().__init__(line, column)
        self.name = name
        self.type_expr = type_expr
        self.body = body


class Sequence(Expr):
    """(seq expr...)"""

    def __init__(self, items: List[Expr], line: int = 0, column: int = 0) -> None:
        super().__init__(line, column)
        self.items = items


class Assign(Expr):
    """(set name value)"""

    def __init__(self, name: str, value: Expr, line: int = 0, column: int = 0) -> None:
        super().__init__(line, column)
        self.name = name
        self.value = value


class ArrayLiteral(Expr):
    """(array expr...)"""

    def __init__(self, elements: List[Expr], line: int = 0, column: int = 0) -> None:
        super().__init__(line, column)
        self.elements = elements


class ArrayTypeLiteral(Expr):
    """(array-t inner-type)"""

    def __init__(self, inner: Expr, line: int = 0, column: int = 0) -> None:
        super().__init__(line, column)
        self.inner = inner


class Arithmetic(Expr):
    """(op operand...) folded left to right"""

    def __init__(
        self, op: ArithmeticOp, operands: List[Expr], line: int = 0, column: int = 0
    ) -> None:
        super().__init__(line, column)
        self.op = op
        self.operands = operands


class ArrayGet(Expr):
    """(array-get index array)"""

    def __init__(self, array: Expr, index: Expr, line: int = 0, column: int = 0) -> None:
        super().__init__(line, column)
        self.array = array
        self.index = index


class ArraySet(Expr):
    """(array-set index array value)"""

    def __init__(
        self,
        array: Expr,
        index: Expr,
        value: Expr,
        line: int = 0,
        column: int = 0,
    ) -> None:
        super().__init__(line, column)
        self.array = array
        self.index = index
        self.value = value
