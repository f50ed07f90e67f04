"""Fail-fast evaluation of the type-annotated tree."""

import logging
from typing import Optional

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
from sexpr_compiler.src.ir.values import (
    UNIT,
    ArrayValue,
    Int64Value,
    TypeValue,
    Value,
)
from sexpr_compiler.src.semantic.type_system import ArrayType

from .arithmetic import apply_arithmetic
from .environment import Environment
from .exceptions import EvaluationError, IndexOutOfBoundsError, ValueShapeError

logger = logging.getLogger(__name__)


class Evaluator:
    """Walks the type-annotated tree and computes its value.

    The first runtime fault raises an ``EvaluationError`` subclass and aborts
    the evaluation. Binding forms pop their slot on every exit path, so the
    environment is back to its entry depth even after a fault.
    """

    def __init__(self, environment: Optional[Environment] = None):
        self.environment = (
            environment if environment is not None else Environment.with_prelude()
        )

    def evaluate(self, node: IRNode) -> Value:
        method = getattr(self, f"eval_{type(node).__name__}", None)
        if method is None:
            raise EvaluationError(
                f"cannot evaluate {type(node).__name__}", node.source_ast
            )
        return method(node)

    def _expect_int(self, node: IRNode) -> int:
        value = self.evaluate(node)
        if not isinstance(value, Int64Value):
            raise ValueShapeError(
                f"expected an integer, got {type(value).__name__}", node.source_ast
            )
        return value.value

    def _expect_array(self, value: Value, node: IRNode) -> ArrayValue:
        if not isinstance(value, ArrayValue):
            raise ValueShapeError(
                f"expected an array, got {type(value).__name__}", node.source_ast
            )
        return value

    def _check_bounds(self, index: int, array: ArrayValue, node: IRNode) -> None:
        if not 0 <= index < len(array.elements):
            raise IndexOutOfBoundsError(index, len(array.elements), node.source_ast)

    def eval_IR_Const(self, node: IR_Const) -> Value:
        return node.value

    def eval_IR_Load(self, node: IR_Load) -> Value:
        return self.environment.load(node.slot, node.name)

    def eval_IR_Store(self, node: IR_Store) -> Value:
        value = self.evaluate(node.value)
        self.environment.store(node.slot, value, node.name)
        return UNIT

    def eval_IR_Let(self, node: IR_Let) -> Value:
        init = self.evaluate(node.init)
        with self.environment.push(node.slot, init):
            return self.evaluate(node.body)

    def eval_IR_Var(self, node: IR_Var) -> Value:
        declared = self.evaluate(node.type_expr)
        if not isinstance(declared, TypeValue):
            raise ValueShapeError(
                f"'{node.name}' declared with a non-type value", node.source_ast
            )
        with self.environment.push(node.slot, declared.type_info.zero()):
            return self.evaluate(node.body)

    def eval_IR_Seq(self, node: IR_Seq) -> Value:
        result: Value = UNIT
        for item in node.items:
            result = self.evaluate(item)
        return result

    def eval_IR_MakeArray(self, node: IR_MakeArray) -> Value:
        return ArrayValue(tuple(self.evaluate(element) for element in node.elements))

    def eval_IR_ArrayType(self, node: IR_ArrayType) -> Value:
        inner = self.evaluate(node.inner)
        if not isinstance(inner, TypeValue):
            raise ValueShapeError("'array-t' applied to a non-type value", node.source_ast)
        return TypeValue(ArrayType(inner.type_info))

    def eval_IR_Arith(self, node: IR_Arith) -> Value:
        operands = iter(node.operands)
        result = self._expect_int(next(operands))
        for operand in operands:
            result = apply_arithmetic(
                node.op, result, self._expect_int(operand), node.source_ast
            )
        return Int64Value(result)

    def eval_IR_ArrayGet(self, node: IR_ArrayGet) -> Value:
        index = self._expect_int(node.index)
        array = self._expect_array(self.evaluate(node.array), node.array)
        self._check_bounds(index, array, node)
        return array.elements[index]

    def eval_IR_ArraySet(self, node: IR_ArraySet) -> Value:
        value = self.evaluate(node.value)
        index = self._expect_int(node.index)
        current = self._expect_array(
            self.environment.load(node.slot, node.name), node
        )
        self._check_bounds(index, current, node)
        self.environment.store(node.slot, current.replace(index, value), node.name)
        return UNIT


def evaluate_program(
    program: IRNode, environment: Optional[Environment] = None
) -> Value:
    """Evaluate a checked program over a fresh prelude environment."""
    evaluator = Evaluator(environment)
    result = evaluator.evaluate(program)
    logger.debug("evaluated to %r", result)
    return result
