"""Evaluation package for the s-expression language."""

from .arithmetic import apply_arithmetic, wrap_int64
from .environment import Environment
from .evaluator import Evaluator, evaluate_program
from .exceptions import (
    DivisionByZeroError,
    EvaluationError,
    IndexOutOfBoundsError,
    UndeclaredVariableError,
    ValueShapeError,
)

__all__ = [
    "apply_arithmetic",
    "wrap_int64",
    "Environment",
    "Evaluator",
    "evaluate_program",
    "DivisionByZeroError",
    "EvaluationError",
    "IndexOutOfBoundsError",
    "UndeclaredVariableError",
    "ValueShapeError",
]
