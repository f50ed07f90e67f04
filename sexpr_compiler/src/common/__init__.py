"""Common utilities shared across compiler stages."""

from .diagnostics import (
    Diagnostic,
    DiagnosticKind,
    DiagnosticSeverity,
    ProgramDiagnostics,
)
from .source_location import SourceLocation
from .constants import *

__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticSeverity",
    "ProgramDiagnostics",
    "SourceLocation",
    # Constants
    "INT64_MIN",
    "INT64_MAX",
    "PRELUDE_INT64_NAME",
    "CompilerConfig",
    "DEFAULT_CONFIG",
]
