"""
Tests for evaluation/arithmetic.py - 64-bit wraparound and truncating division.
"""

import pytest

from sexpr_compiler.src.ast.expressions import ArithmeticOp
from sexpr_compiler.src.common.constants import INT64_MAX, INT64_MIN
from sexpr_compiler.src.evaluation.arithmetic import apply_arithmetic, wrap_int64
from sexpr_compiler.src.evaluation.exceptions import DivisionByZeroError


class TestWrapInt64:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (0, 0),
            (-1, -1),
            (INT64_MAX + 1, INT64_MIN),
            (INT64_MIN - 1, INT64_MAX),
            (2**64 + 5, 5),
        ],
    )
    def test_wrap(self, value, expected):
        assert wrap_int64(value) == expected


class TestApplyArithmetic:
    def test_overflow_wraps(self):
        assert apply_arithmetic(ArithmeticOp.ADD, INT64_MAX, 1) == INT64_MIN
        assert apply_arithmetic(ArithmeticOp.SUB, INT64_MIN, 1) == INT64_MAX
        assert apply_arithmetic(ArithmeticOp.MUL, 2**62, 2) == INT64_MIN

    @pytest.mark.parametrize(
        "left, right, quotient, remainder",
        [
            (7, 2, 3, 1),
            (-7, 2, -3, -1),
            (7, -2, -3, 1),
            (-7, -2, 3, -1),
            (6, 3, 2, 0),
        ],
    )
    def test_truncating_division(self, left, right, quotient, remainder):
        assert apply_arithmetic(ArithmeticOp.DIV, left, right) == quotient
        assert apply_arithmetic(ArithmeticOp.REM, left, right) == remainder

    def test_min_divided_by_minus_one(self):
        assert apply_arithmetic(ArithmeticOp.DIV, INT64_MIN, -1) == INT64_MIN
        assert apply_arithmetic(ArithmeticOp.REM, INT64_MIN, -1) == 0

    @pytest.mark.parametrize("op", [ArithmeticOp.DIV, ArithmeticOp.REM])
    def test_zero_divisor(self, op):
        with pytest.raises(DivisionByZeroError):
            apply_arithmetic(op, 5, 0)
