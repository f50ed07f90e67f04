"""Signed 64-bit integer arithmetic for the evaluator."""

from __future__ import annotations

from typing import Optional

from sexpr_compiler.src.ast import ASTNode, ArithmeticOp
from sexpr_compiler.src.common.constants import INT64_BITS, INT64_MIN

from .exceptions import DivisionByZeroError

_MASK = (1 << INT64_BITS) - 1


def wrap_int64(value: int) -> int:
    """Reduce an unbounded integer to two's-complement 64-bit range."""
    value &= _MASK
    if value >= 1 << (INT64_BITS - 1):
        value -= 1 << INT64_BITS
    return value


def _truncating_div(left: int, right: int) -> int:
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def apply_arithmetic(
    op: ArithmeticOp,
    left: int,
    right: int,
    node: Optional[ASTNode] = None,
) -> int:
    """Apply one binary step of an arithmetic fold.

    ``/`` truncates toward zero and the sign of ``%`` follows the dividend.
    ``INT64_MIN / -1`` wraps back to ``INT64_MIN``.
    """
    if op is ArithmeticOp.ADD:
        return wrap_int64(left + right)
    if op is ArithmeticOp.SUB:
        return wrap_int64(left - right)
    if op is ArithmeticOp.MUL:
        return wrap_int64(left * right)

    if right == 0:
        raise DivisionByZeroError("division by zero", node)

    if op is ArithmeticOp.DIV:
        return wrap_int64(_truncating_div(left, right))
    if op is ArithmeticOp.REM:
        if left == INT64_MIN and right == -1:
            return 0
        return left - right * _truncating_div(left, right)

    raise ValueError(f"unknown arithmetic operator {op!r}")
