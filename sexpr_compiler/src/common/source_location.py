from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Any

"""Source location utilities for tracking code positions."""


@dataclass
class SourceLocation:
    """Represents a location in source code."""

    file: Optional[str] = None
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        """Format as file:line:col."""
        parts = []
        if self.file and self.file != "<string>":
            parts.append(Path(self.file).name)
        if self.line > 0:
            parts.append(str(self.line))
            if self.column > 0:
                parts.append(str(self.column))
        return ":".join(parts) if parts else "unknown"

    @property
    def is_known(self) -> bool:
        return self.line > 0

    @classmethod
    def from_node(cls, node: Optional[Any]) -> "SourceLocation":
        """Build a location from anything carrying ``line``/``column`` attributes."""
        if node is None:
            return cls()
        return cls(
            file=getattr(node, "source_file", None),
            line=getattr(node, "line", 0) or 0,
            column=getattr(node, "column", 0) or 0,
        )

    @staticmethod
    def render(
        node: Optional[Any], default_file: Optional[str] = None
    ) -> Optional[str]:
        """Format a human-friendly ``line:col`` string for a tree node.

        The file name is prefixed when one is known and is not the
        ``<string>`` placeholder used for inline programs.
        """
        if node is None:
            return None

        filename = getattr(node, "source_file", None) or default_file
        line = getattr(node, "line", 0) or 0
        column = getattr(node, "column", 0) or 0

        if filename == "<string>":
            filename = None

        if not filename and line <= 0:
            return None

        position = f"{line}:{column}" if column > 0 else f"{line}"

        if filename and line > 0:
            return f"{Path(filename).name}:{position}"

        if filename:
            return Path(filename).name

        return position
