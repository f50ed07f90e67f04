"""Parser entry point: tokenizer followed by the syntax builder."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from sexpr_compiler.src.ast import ASTNode, Expr
from sexpr_compiler.src.common.diagnostics import ProgramDiagnostics
from .syntax_builder import SyntaxBuilder
from .token_tree import TokenNode
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)


class SExprParser:
    """Main parser class for the s-expression language."""

    def __init__(
        self, diagnostics: ProgramDiagnostics, grammar_path: Optional[Path] = None
    ):
        self.diagnostics = diagnostics
        self.tokenizer = Tokenizer(diagnostics, grammar_path)
        self.builder = SyntaxBuilder(diagnostics)

    def parse(self, source_code: str, filename: str = "<string>") -> Optional[Expr]:
        """Parse program text into a syntax tree.

        Args:
            source_code: The program text
            filename: Source name used in diagnostics

        Returns:
            The syntax tree, or None when tokenizing or syntax building
            logged errors
        """
        tokens = self.tokenize(source_code, filename)
        if tokens is None:
            return None
        return self.build(tokens, filename)

    def tokenize(
        self, source_code: str, filename: str = "<string>"
    ) -> Optional[TokenNode]:
        """Run only the tokenizer stage."""
        return self.tokenizer.tokenize(source_code, filename)

    def build(self, tokens: TokenNode, filename: str = "<string>") -> Optional[Expr]:
        """Run only the syntax builder stage on an existing token tree."""
        tree = self.builder.build(tokens, filename)
        if tree is None:
            logger.debug("syntax building failed for %s", filename)
            return None

        self._attach_source_file(tree, filename)
        return tree

    def parse_file(self, file_path: Path) -> Optional[Expr]:
        """Parse a program file into a syntax tree."""
        try:
            source_code = Path(file_path).read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise FileNotFoundError(f"Source file not found: {file_path}") from exc
        return self.parse(source_code, str(file_path))

    def _attach_source_file(self, node: ASTNode, filename: str) -> None:
        """Recursively annotate syntax nodes with their originating filename."""
        if not isinstance(node, ASTNode):
            return

        if filename:
            node.source_file = filename

        for attr in vars(node).values():
            if isinstance(attr, ASTNode):
                self._attach_source_file(attr, filename)
            elif isinstance(attr, list):
                for item in attr:
                    if isinstance(item, ASTNode):
                        self._attach_source_file(item, filename)
