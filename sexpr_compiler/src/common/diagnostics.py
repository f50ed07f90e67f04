from dataclasses import dataclass
from enum import Enum
import logging
from typing import List, Optional, Any

from .source_location import SourceLocation

"""Unified diagnostic collection for the entire compiler pipeline."""

logger = logging.getLogger(__name__)


class DiagnosticSeverity(Enum):
    """Severity levels for compiler diagnostics."""

    WARNING = "warning"  # Issues that don't prevent evaluation
    ERROR = "error"  # Issues that prevent a result from being produced


_SEVERITY_ORDER = [
    DiagnosticSeverity.WARNING,
    DiagnosticSeverity.ERROR,
]


class DiagnosticKind(Enum):
    """Error taxonomy shared by every stage."""

    SYNTAX = "SyntaxError"  # brackets, end of input
    SHAPE = "ShapeError"  # arity, heads, misplaced literals
    NAME = "NameError"  # unknown or undeclared variables
    TYPE = "TypeError"  # operand, assignment and element mismatches
    RUNTIME = "RuntimeError"  # division by zero, index out of bounds


@dataclass
class Diagnostic:
    """A single diagnostic message with context."""

    severity: DiagnosticSeverity
    kind: Optional[DiagnosticKind]
    message: str
    stage: str  # parsing, syntax, semantic, evaluation
    line: int = 0
    column: int = 0
    source_file: Optional[str] = None
    node: Optional[Any] = None  # tree node reference if available

    @property
    def location(self) -> SourceLocation:
        return SourceLocation(self.source_file, self.line, self.column)


class ProgramDiagnostics:
    """Central diagnostic collection for one run of the pipeline.

    Every stage appends to the same collector, so a single run can report
    problems from tokenizing, syntax building and type checking together
    with their source positions.

    Usage:
        diagnostics = ProgramDiagnostics()
        diagnostics.error("unknown variable 'x'", kind=DiagnosticKind.NAME, line=1)
        if diagnostics.has_errors():
            print("\n".join(diagnostics.get_messages()))
    """

    def __init__(self) -> None:
        self.diagnostics: List[Diagnostic] = []
        self._error_count = 0
        self._warning_count = 0

    def warning(
        self,
        message: str,
        kind: Optional[DiagnosticKind] = None,
        stage: str | None = None,
        line: int = 0,
        column: int = 0,
        source_file: Optional[str] = None,
        node: Optional[Any] = None,
    ) -> None:
        """Add a warning (always shown, doesn't stop the pipeline)."""
        self._add(
            DiagnosticSeverity.WARNING,
            kind,
            message,
            stage,
            line,
            column,
            source_file,
            node,
        )
        self._warning_count += 1

    def error(
        self,
        message: str,
        kind: DiagnosticKind,
        stage: str | None = None,
        line: int = 0,
        column: int = 0,
        source_file: Optional[str] = None,
        node: Optional[Any] = None,
    ) -> None:
        """Add an error (always shown, the run produces no result)."""
        self._add(
            DiagnosticSeverity.ERROR,
            kind,
            message,
            stage,
            line,
            column,
            source_file,
            node,
        )
        self._error_count += 1

    def _add(
        self,
        severity: DiagnosticSeverity,
        kind: Optional[DiagnosticKind],
        message: str,
        stage: str | None,
        line: int,
        column: int,
        source_file: Optional[str],
        node: Optional[Any],
    ) -> None:
        """Internal method to add a diagnostic."""
        # Extract location from node if provided and location not specified
        if node is not None and line == 0:
            line = getattr(node, "line", 0)
            column = getattr(node, "column", 0)
            if source_file is None:
                source_file = getattr(node, "source_file", None)

        diag = Diagnostic(
            severity=severity,
            kind=kind,
            message=message,
            stage=stage or "unknown",
            line=line,
            column=column,
            source_file=source_file,
            node=node,
        )
        self.diagnostics.append(diag)
        logger.debug("recorded %s", self._format_diagnostic(diag))

    def has_errors(self) -> bool:
        """Check if any errors have been recorded."""
        return self._error_count > 0

    def error_count(self) -> int:
        """Get the number of errors."""
        return self._error_count

    def warning_count(self) -> int:
        """Get the number of warnings."""
        return self._warning_count

    def by_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        """Return the recorded diagnostics of one kind, in recording order."""
        return [diag for diag in self.diagnostics if diag.kind is kind]

    def get_messages(
        self, min_severity: DiagnosticSeverity = DiagnosticSeverity.WARNING
    ) -> List[str]:
        """Get formatted messages at or above the specified severity level."""
        threshold = _SEVERITY_ORDER.index(min_severity)
        return [
            self._format_diagnostic(diag)
            for diag in self.diagnostics
            if _SEVERITY_ORDER.index(diag.severity) >= threshold
        ]

    def _format_diagnostic(self, diag: Diagnostic) -> str:
        """Format a single diagnostic for display."""
        # Format: SEVERITY [stage:file:line:col] Kind: message
        location_parts = [diag.stage]
        if diag.location.is_known or diag.source_file:
            rendered = str(diag.location)
            if rendered != "unknown":
                location_parts.append(rendered)

        location = ":".join(location_parts)
        kind = f" {diag.kind.value}:" if diag.kind is not None else ""
        return f"{diag.severity.value.upper()} [{location}]{kind} {diag.message}"

