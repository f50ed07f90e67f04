"""
Tests for evaluation/evaluator.py - runtime semantics of checked programs.
"""

import pytest

from sexpr_compiler.src.common.constants import INT64_MAX, INT64_MIN
from sexpr_compiler.src.common.diagnostics import DiagnosticKind, ProgramDiagnostics
from sexpr_compiler.src.evaluation.environment import Environment
from sexpr_compiler.src.evaluation.evaluator import Evaluator, evaluate_program
from sexpr_compiler.src.evaluation.exceptions import (
    DivisionByZeroError,
    IndexOutOfBoundsError,
)
from sexpr_compiler.src.ir.values import (
    UNIT,
    ArrayValue,
    Int64Value,
    TypeValue,
    format_value,
)
from sexpr_compiler.src.parsing.parser import SExprParser
from sexpr_compiler.src.semantic.analyzer import check_program
from sexpr_compiler.src.semantic.type_system import ArrayType, Int64Type, conforms


def typed(source):
    diagnostics = ProgramDiagnostics()
    program = SExprParser(diagnostics).parse(source)
    assert program is not None, diagnostics.get_messages()
    result = check_program(program, diagnostics)
    assert result is not None, diagnostics.get_messages()
    return result


def run(source):
    return evaluate_program(typed(source))


class TestArithmetic:
    def test_wraparound(self):
        assert run(f"(+ {INT64_MAX} 1)") == Int64Value(INT64_MIN)

    def test_left_fold(self):
        assert run("(- 10 1 2 3)") == Int64Value(4)
        assert run("(/ 100 5 2)") == Int64Value(10)

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZeroError) as excinfo:
            run("(/ 5 0)")
        assert str(excinfo.value) == "division by zero at 1:1"
        assert excinfo.value.kind is DiagnosticKind.RUNTIME

    def test_remainder_by_computed_zero(self):
        with pytest.raises(DivisionByZeroError):
            run("(% 5 (- 2 2))")

    def test_truncation(self):
        assert run("(/ -7 2)") == Int64Value(-3)
        assert run("(% -7 2)") == Int64Value(-1)


class TestBindings:
    def test_set_then_read(self):
        assert run("(let x 1 (seq (set x 2) x))") == Int64Value(2)

    def test_set_yields_unit(self):
        assert run("(let x 1 (set x 2))") == UNIT

    def test_shadowing(self):
        assert run("(let x 1 (+ (let x 10 x) x))") == Int64Value(11)

    def test_set_targets_innermost_binding(self):
        assert run("(let x 1 (seq (let x 5 (set x 7)) x))") == Int64Value(1)

    def test_var_starts_at_zero(self):
        assert run("(var n i64 n)") == Int64Value(0)
        assert run("(var xs (array-t i64) xs)") == ArrayValue(())

    def test_var_declared_with_prelude_type(self):
        assert run("(var t i64 (set t 3))") == UNIT

    def test_prelude_type_value(self):
        assert run("i64") == TypeValue(Int64Type())
        assert run("(array-t i64)") == TypeValue(ArrayType(Int64Type()))

    def test_environment_restored_after_fault(self):
        env = Environment.with_prelude()
        with pytest.raises(DivisionByZeroError):
            Evaluator(env).evaluate(typed("(let x 1 (var y i64 (/ x y)))"))
        assert len(env) == 1


class TestArrays:
    def test_array_get(self):
        assert run("(array-get 1 (array 1 2 3))") == Int64Value(2)

    @pytest.mark.parametrize("index", ["5", "3", "-1"])
    def test_array_get_out_of_bounds(self, index):
        with pytest.raises(IndexOutOfBoundsError) as excinfo:
            run(f"(array-get {index} (array 1 2 3))")
        assert excinfo.value.index == int(index)
        assert excinfo.value.length == 3

    def test_array_get_leaves_variable_untouched(self):
        source = "(let a (array 1 2 3) (seq (array-get 0 a) a))"
        assert format_value(run(source)) == "[1, 2, 3]"

    def test_array_set(self):
        source = "(let a (array 1 2 3) (seq (array-set 1 a 9) a))"
        assert format_value(run(source)) == "[1, 9, 3]"

    def test_array_set_out_of_bounds(self):
        with pytest.raises(IndexOutOfBoundsError):
            run("(let a (array 1) (array-set 1 a 9))")

    def test_array_set_on_zero_value(self):
        with pytest.raises(IndexOutOfBoundsError):
            run("(var a (array-t i64) (array-set 0 a 1))")

    def test_reads_are_snapshots(self):
        source = "(let a (array 1 2) (let b a (seq (array-set 0 a 7) (array-get 0 b))))"
        assert run(source) == Int64Value(1)

    def test_nested_array_set(self):
        source = (
            "(let m (array (array 1 2) (array 3 4))"
            " (seq (array-set 1 m (array 5 6)) m))"
        )
        assert format_value(run(source)) == "[[1, 2], [5, 6]]"

    def test_elements_evaluate_left_to_right(self):
        source = "(let x 0 (array (seq (set x (+ x 1)) x) (seq (set x (* x 10)) x)))"
        assert format_value(run(source)) == "[1, 10]"

    def test_array_set_evaluates_value_before_loading_target(self):
        source = "(let a (array 1 2) (seq (array-set 0 a (seq (set a (array 5 6 7)) 9)) a))"
        assert format_value(run(source)) == "[9, 6, 7]"


class TestShapeMatchesType:
    @pytest.mark.parametrize(
        "source",
        [
            "(+ 1 2)",
            "(array)",
            "(array (array 1) (array 2))",
            "(array-t (array-t i64))",
            "(var a (array-t (array-t i64)) (seq (set a (array (array 1))) a))",
            "(let x (array i64) (array-get 0 x))",
            "(seq 1 (array 2))",
        ],
    )
    def test_value_conforms_to_static_type(self, source):
        program = typed(source)
        assert conforms(evaluate_program(program), program.value_type)
