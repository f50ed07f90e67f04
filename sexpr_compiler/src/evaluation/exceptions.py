from typing import Optional

from sexpr_compiler.src.ast import ASTNode
from sexpr_compiler.src.common.diagnostics import DiagnosticKind
from sexpr_compiler.src.common.source_location import SourceLocation

"""Runtime exceptions raised by the evaluator."""


class EvaluationError(Exception):
    """Base class for faults that abort an evaluation."""

    kind = DiagnosticKind.RUNTIME

    def __init__(self, message: str, node: Optional[ASTNode] = None) -> None:
        self.message = message
        self.node = node
        rendered = SourceLocation.render(node)
        location = f" at {rendered}" if rendered else ""
        super().__init__(f"{message}{location}")


class DivisionByZeroError(EvaluationError):
    """Raised when ``/`` or ``%`` meets a zero divisor."""


class IndexOutOfBoundsError(EvaluationError):
    """Raised when an array index is negative or past the end."""

    def __init__(
        self, index: int, length: int, node: Optional[ASTNode] = None
    ) -> None:
        self.index = index
        self.length = length
        super().__init__(
            f"index out of bounds: {index} (array length {length})", node
        )


class UndeclaredVariableError(EvaluationError):
    """Raised when a slot is read or written before it is bound."""

    kind = DiagnosticKind.NAME


class ValueShapeError(EvaluationError):
    """Raised when a runtime value does not have the shape its type promised."""

    kind = DiagnosticKind.TYPE
