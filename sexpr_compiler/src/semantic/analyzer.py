"""Static type checking for the s-expression language."""

import logging
from typing import List, Optional

from sexpr_compiler.src.ast.base import ASTNode, ASTVisitor
from sexpr_compiler.src.ast.expressions import (
    Arithmetic,
    ArrayGet,
    ArrayLiteral,
    ArraySet,
    ArrayTypeLiteral,
    Assign,
    Expr,
    Identifier,
    IntegerLiteral,
    LetType,
    LetValue,
    Sequence,
)
from sexpr_compiler.src.common.constants import DEFAULT_CONFIG, CompilerConfig
from sexpr_compiler.src.common.diagnostics import DiagnosticKind, ProgramDiagnostics
from sexpr_compiler.src.ir.nodes import (
    IRNode,
    IR_Arith,
    IR_ArrayGet,
    IR_ArraySet,
    IR_ArrayType,
    IR_Const,
    IR_Let,
    IR_Load,
    IR_MakeArray,
    IR_Seq,
    IR_Store,
    IR_Var,
)
from sexpr_compiler.src.ir.values import Int64Value

from .symbol_table import SymbolTable
from .type_system import ArrayType, Int64Type, TypeInfo, TypeOfType, UnitType

logger = logging.getLogger(__name__)


class TypeChecker(ASTVisitor):
    """Best-effort type checker producing the type-annotated tree.

    Every visit returns an ``IRNode`` or ``None``. A local failure is logged
    and reported upwards as ``None``, but independent sub-expressions are
    still checked so one pass collects as many diagnostics as possible.
    Nothing here raises for a user error.
    """

    def __init__(
        self,
        diagnostics: ProgramDiagnostics,
        config: CompilerConfig = DEFAULT_CONFIG,
        symbol_table: Optional[SymbolTable] = None,
    ):
        self.diagnostics = diagnostics
        self.config = config
        self.symbol_table = (
            symbol_table if symbol_table is not None else SymbolTable.with_prelude()
        )

    def _error(self, message: str, kind: DiagnosticKind, node: ASTNode) -> None:
        self.diagnostics.error(message, kind=kind, stage="semantic", node=node)

    def _type_error(self, message: str, node: ASTNode) -> None:
        self._error(message, DiagnosticKind.TYPE, node)

    def check(self, node: Expr) -> Optional[IRNode]:
        """Type check ``node`` in the current scope."""
        return self.visit(node)

    def generic_visit(self, node: ASTNode) -> Optional[IRNode]:
        self._error(
            f"unsupported expression {type(node).__name__}", DiagnosticKind.SHAPE, node
        )
        return None

    def _check_all(self, nodes: List[Expr]) -> List[Optional[IRNode]]:
        return [self.visit(node) for node in nodes]

    def visit_IntegerLiteral(self, node: IntegerLiteral) -> IRNode:
        return IR_Const(Int64Type(), Int64Value(node.value), node)

    def visit_Identifier(self, node: Identifier) -> Optional[IRNode]:
        symbol = self.symbol_table.lookup(node.name)
        if symbol is None:
            self._error(f"unknown variable '{node.name}'", DiagnosticKind.NAME, node)
            return None
        if symbol.value_type is None:
            # Already reported where the binding failed
            return None
        return IR_Load(symbol.value_type, symbol.slot, node.name, node)

    def visit_LetValue(self, node: LetValue) -> Optional[IRNode]:
        init = self.visit(node.value)
        bound_type = init.value_type if init is not None else None

        with self.symbol_table.bind(node.name, bound_type, node) as symbol:
            body = self.visit(node.body)

        if init is None or body is None:
            return None
        return IR_Let(body.value_type, symbol.slot, node.name, init, body, node)

    def visit_LetType(self, node: LetType) -> Optional[IRNode]:
        type_expr = self.visit(node.type_expr)
        declared: Optional[TypeInfo] = None
        if type_expr is not None:
            if isinstance(type_expr.value_type, TypeOfType):
                declared = type_expr.value_type.inner
            else:
                self._type_error(
                    f"'var' expects a type for '{node.name}', "
                    f"found a value of type {type_expr.value_type}",
                    node.type_expr,
                )

        with self.symbol_table.bind(node.name, declared, node) as symbol:
            body = self.visit(node.body)

        if declared is None or body is None:
            return None
        return IR_Var(body.value_type, symbol.slot, node.name, type_expr, body, node)

    def visit_Assign(self, node: Assign) -> Optional[IRNode]:
        symbol = self.symbol_table.lookup(node.name)
        value = self.visit(node.value)

        if symbol is None:
            self._error(
                f"assignment to undeclared variable '{node.name}'",
                DiagnosticKind.NAME,
                node,
            )
            return None
        if symbol.value_type is None or value is None:
            return None
        if value.value_type != symbol.value_type:
            self._type_error(
                f"cannot assign {value.value_type} to '{node.name}' "
                f"of type {symbol.value_type}",
                node,
            )
            return None
        return IR_Store(UnitType(), symbol.slot, node.name, value, node)

    def visit_Sequence(self, node: Sequence) -> Optional[IRNode]:
        items = self._check_all(node.items)
        if not items or any(item is None for item in items):
            return None
        return IR_Seq(items[-1].value_type, items, node)

    def visit_Arithmetic(self, node: Arithmetic) -> Optional[IRNode]:
        ok = True
        minimum = self.config.min_arithmetic_operands
        if len(node.operands) < minimum:
            self._error(
                f"'{node.op.value}' expects at least {minimum} operand(s), "
                f"got {len(node.operands)}",
                DiagnosticKind.SHAPE,
                node,
            )
            ok = False

        operands = self._check_all(node.operands)
        for position, (operand, source) in enumerate(zip(operands, node.operands), 1):
            if operand is None:
                ok = False
            elif operand.value_type != Int64Type():
                self._type_error(
                    f"operand {position} of '{node.op.value}' must be Int64, "
                    f"found {operand.value_type}",
                    source,
                )
                ok = False

        if not ok:
            return None
        return IR_Arith(Int64Type(), node.op, operands, node)

    def visit_ArrayLiteral(self, node: ArrayLiteral) -> Optional[IRNode]:
        if not node.elements:
            return IR_MakeArray(ArrayType(UnitType()), [], node)

        elements = self._check_all(node.elements)
        ok = all(element is not None for element in elements)

        expected: Optional[TypeInfo] = None
        for position, (element, source) in enumerate(zip(elements, node.elements), 1):
            if element is None:
                continue
            if expected is None:
                expected = element.value_type
            elif element.value_type != expected:
                self._type_error(
                    f"array element {position} has type {element.value_type}, "
                    f"expected {expected} like the first element",
                    source,
                )
                ok = False

        if not ok:
            return None
        return IR_MakeArray(ArrayType(expected), elements, node)

    def visit_ArrayTypeLiteral(self, node: ArrayTypeLiteral) -> Optional[IRNode]:
        inner = self.visit(node.inner)
        if inner is None:
            return None
        if not isinstance(inner.value_type, TypeOfType):
            self._type_error(
                f"'array-t' expects a type, found a value of type {inner.value_type}",
                node.inner,
            )
            return None
        element_type = inner.value_type.inner
        return IR_ArrayType(TypeOfType(ArrayType(element_type)), inner, node)

    def _check_index(self, index: Optional[IRNode], source: Expr) -> bool:
        if index is None:
            return False
        if index.value_type != Int64Type():
            self._type_error(
                f"array index must be Int64, found {index.value_type}", source
            )
            return False
        return True

    def _element_type(
        self, array: Optional[IRNode], source: Expr, form: str
    ) -> Optional[TypeInfo]:
        if array is None:
            return None
        if not isinstance(array.value_type, ArrayType):
            self._type_error(
                f"'{form}' expects an array, found {array.value_type}", source
            )
            return None
        return array.value_type.element

    def visit_ArrayGet(self, node: ArrayGet) -> Optional[IRNode]:
        index = self.visit(node.index)
        array = self.visit(node.array)

        index_ok = self._check_index(index, node.index)
        element_type = self._element_type(array, node.array, "array-get")

        if not index_ok or element_type is None:
            return None
        return IR_ArrayGet(element_type, index, array, node)

    def visit_ArraySet(self, node: ArraySet) -> Optional[IRNode]:
        index = self.visit(node.index)
        value = self.visit(node.value)

        target: Optional[IRNode] = None
        if isinstance(node.array, Identifier):
            target = self.visit(node.array)
        else:
            self._error(
                "'array-set' target must be a variable",
                DiagnosticKind.SHAPE,
                node.array,
            )
            # Checked only for its own diagnostics
            self.visit(node.array)

        index_ok = self._check_index(index, node.index)
        element_type = self._element_type(target, node.array, "array-set")

        if value is not None and element_type is not None:
            if value.value_type != element_type:
                self._type_error(
                    f"cannot store {value.value_type} into an array of {element_type}",
                    node.value,
                )
                return None

        if not index_ok or element_type is None or value is None:
            return None
        return IR_ArraySet(
            UnitType(), target.slot, target.name, index, value, node
        )


def check_program(
    program: Expr,
    diagnostics: ProgramDiagnostics,
    config: CompilerConfig = DEFAULT_CONFIG,
) -> Optional[IRNode]:
    """Type check a whole program against the prelude scope."""
    checker = TypeChecker(diagnostics, config)
    typed = checker.check(program)
    if typed is None:
        logger.debug("type checking failed with %d error(s)", diagnostics.error_count())
    return typed
