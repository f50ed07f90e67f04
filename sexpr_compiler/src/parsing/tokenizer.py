"""Tokenizer turning program text into a raw token tree."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedToken

from sexpr_compiler.src.common.constants import INT64_MAX, INT64_MIN
from sexpr_compiler.src.common.diagnostics import DiagnosticKind, ProgramDiagnostics
from .token_tree import INTEGER_WORD, Atom, IntegerToken, TokenList, TokenNode

logger = logging.getLogger(__name__)


def word_to_token(word: Token) -> TokenNode:
    """Classify a lexed word as an integer literal or an atom."""
    text = str(word)
    if INTEGER_WORD.fullmatch(text):
        value = int(text, 10)
        if INT64_MIN <= value <= INT64_MAX:
            return IntegerToken(value, word.line, word.column)
    return Atom(text, word.line, word.column)


class TokenTreeTransformer(Transformer):
    """Transforms the Lark parse tree into token tree nodes."""

    def _convert(self, item) -> TokenNode:
        if isinstance(item, Token):
            return word_to_token(item)
        return item

    def start(self, items) -> TokenNode:
        """start: expr"""
        return self._convert(items[0])

    def list(self, items) -> TokenList:
        """list: LPAR expr* RPAR"""
        lpar = items[0]
        children = tuple(self._convert(item) for item in items[1:-1])
        return TokenList(children, lpar.line, lpar.column)


class Tokenizer:
    """Lark-backed tokenizer with bracket diagnostics."""

    def __init__(
        self, diagnostics: ProgramDiagnostics, grammar_path: Optional[Path] = None
    ):
        """Initialize tokenizer with grammar file."""
        if grammar_path is None:
            grammar_path = (
                Path(__file__).resolve().parent.parent.parent / "grammar" / "sexpr.lark"
            )

        self.diagnostics = diagnostics
        self.grammar_path = grammar_path
        self.parser: Optional[Lark] = None
        self.transformer = TokenTreeTransformer()
        self._filename = "<string>"
        self._load_grammar()

    def _load_grammar(self) -> None:
        """Load and compile the Lark grammar."""
        try:
            with open(self.grammar_path, "r", encoding="utf-8") as handle:
                grammar_text = handle.read()
        except FileNotFoundError as exc:
            raise FileNotFoundError(
                f"Grammar file not found: {self.grammar_path}"
            ) from exc

        self.parser = Lark(
            grammar_text,
            parser="lalr",
            lexer="basic",
            transformer=self.transformer,
            start="start",
        )

    def tokenize(
        self, source_code: str, filename: str = "<string>"
    ) -> Optional[TokenNode]:
        """Tokenize a whole program.

        Returns the token tree for the single expression the program
        consists of, or ``None`` after logging a syntax diagnostic. The
        first fatal error stops tokenizing.
        """
        if self.parser is None:
            raise RuntimeError("Tokenizer not initialized")

        self._filename = filename
        try:
            tree = self.parser.parse(source_code)
        except UnexpectedToken as exc:
            self._report_unexpected_token(source_code, exc.token)
            return None
        except UnexpectedEOF:
            self._report_end_of_input(source_code)
            return None
        except UnexpectedCharacters as exc:
            self._error(f"unexpected character {exc.char!r}", exc.line, exc.column)
            return None

        logger.debug("tokenized %s", filename)
        return tree

    def _report_unexpected_token(self, source_code: str, token: Token) -> None:
        if token.type == "$END":
            self._report_end_of_input(source_code)
        elif token.type == "RPAR":
            self._error(
                f"unbalanced bracket at {token.line}:{token.column}",
                token.line,
                token.column,
            )
        else:
            self._error(
                f"unexpected trailing input at {token.line}:{token.column}",
                token.line,
                token.column,
            )

    def _report_end_of_input(self, source_code: str) -> None:
        self._error("unexpected end of input")
        for bracket in self._unclosed_brackets(source_code):
            self._error(
                f"unbalanced bracket at {bracket.line}:{bracket.column}",
                bracket.line,
                bracket.column,
            )

    def _unclosed_brackets(self, source_code: str) -> List[Token]:
        """Opening brackets still open at the end of input, innermost first."""
        open_brackets: List[Token] = []
        for token in self.parser.lex(source_code):
            if token.type == "LPAR":
                open_brackets.append(token)
            elif token.type == "RPAR" and open_brackets:
                open_brackets.pop()
        open_brackets.reverse()
        return open_brackets

    def _error(self, message: str, line: int = 0, column: int = 0) -> None:
        self.diagnostics.error(
            message,
            kind=DiagnosticKind.SYNTAX,
            stage="parsing",
            line=line,
            column=column,
            source_file=self._filename,
        )
