"""
Tests for parsing/tokenizer.py - program text to raw token tree.
"""

import pytest

from sexpr_compiler.src.common.constants import INT64_MAX, INT64_MIN
from sexpr_compiler.src.common.diagnostics import DiagnosticKind, ProgramDiagnostics
from sexpr_compiler.src.parsing.token_tree import (
    Atom,
    IntegerToken,
    TokenList,
    format_token_tree,
    token_tree_to_json,
)
from sexpr_compiler.src.parsing.tokenizer import Tokenizer


@pytest.fixture
def diagnostics():
    return ProgramDiagnostics()


@pytest.fixture
def tokenizer(diagnostics):
    return Tokenizer(diagnostics)


def messages(diagnostics):
    return [diag.message for diag in diagnostics.diagnostics]


class TestWellFormedInput:
    """Token trees for valid programs."""

    def test_single_atom(self, tokenizer):
        assert tokenizer.tokenize("x") == Atom("x", 1, 1)

    def test_single_integer(self, tokenizer):
        assert tokenizer.tokenize("42") == IntegerToken(42, 1, 1)

    def test_list_positions(self, tokenizer):
        """Every token carries the 1-based position of its first character."""
        tree = tokenizer.tokenize("(+ 1 2)")
        assert tree == TokenList(
            (Atom("+", 1, 2), IntegerToken(1, 1, 4), IntegerToken(2, 1, 6)), 1, 1
        )

    def test_positions_across_lines(self, tokenizer):
        tree = tokenizer.tokenize("(seq\n   x\n\t(array))")
        assert isinstance(tree, TokenList)
        assert tree.items[1] == Atom("x", 2, 4)
        assert tree.items[2] == TokenList((Atom("array", 3, 3),), 3, 2)

    def test_surrounding_whitespace_is_ignored(self, tokenizer, diagnostics):
        assert tokenizer.tokenize("  \n 7 \n") == IntegerToken(7, 2, 2)
        assert not diagnostics.has_errors()

    def test_brackets_delimit_words(self, tokenizer):
        tree = tokenizer.tokenize("(a(b)c)")
        assert format_token_tree(tree) == "(a (b) c)"

    def test_empty_list(self, tokenizer):
        assert tokenizer.tokenize("()") == TokenList((), 1, 1)

    def test_nested_json_shape(self, tokenizer):
        tree = tokenizer.tokenize("(let x (array 1 2) x)")
        assert token_tree_to_json(tree) == ["let", "x", ["array", 1, 2], "x"]


class TestIntegerWords:
    """Which words become integer literals."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("0", 0),
            ("-5", -5),
            ("007", 7),
            (str(INT64_MAX), INT64_MAX),
            (str(INT64_MIN), INT64_MIN),
        ],
    )
    def test_integer_literals(self, tokenizer, text, expected):
        assert tokenizer.tokenize(text) == IntegerToken(expected, 1, 1)

    @pytest.mark.parametrize(
        "text",
        ["+5", "1a", "-", "--1", str(INT64_MAX + 1), str(INT64_MIN - 1), "1.5"],
    )
    def test_non_integer_words_are_atoms(self, tokenizer, text):
        assert tokenizer.tokenize(text) == Atom(text, 1, 1)


class TestSyntaxErrors:
    """Bracket and end-of-input diagnostics."""

    def test_empty_input(self, tokenizer, diagnostics):
        assert tokenizer.tokenize("") is None
        assert messages(diagnostics) == ["unexpected end of input"]
        assert diagnostics.by_kind(DiagnosticKind.SYNTAX)

    def test_whitespace_only_input(self, tokenizer, diagnostics):
        assert tokenizer.tokenize("   \n ") is None
        assert messages(diagnostics) == ["unexpected end of input"]

    def test_unclosed_bracket_reports_opening_position(self, tokenizer, diagnostics):
        assert tokenizer.tokenize("(+ 1\n  2") is None
        assert messages(diagnostics) == [
            "unexpected end of input",
            "unbalanced bracket at 1:1",
        ]
        assert diagnostics.diagnostics[1].line == 1
        assert diagnostics.diagnostics[1].column == 1

    def test_nested_unclosed_brackets_innermost_first(self, tokenizer, diagnostics):
        assert tokenizer.tokenize("(seq (+ 1 (array)") is None
        assert messages(diagnostics) == [
            "unexpected end of input",
            "unbalanced bracket at 1:6",
            "unbalanced bracket at 1:1",
        ]

    def test_stray_closing_bracket(self, tokenizer, diagnostics):
        assert tokenizer.tokenize(")") is None
        assert messages(diagnostics) == ["unbalanced bracket at 1:1"]

    def test_extra_closing_bracket(self, tokenizer, diagnostics):
        assert tokenizer.tokenize("(a))") is None
        assert messages(diagnostics) == ["unbalanced bracket at 1:4"]

    def test_trailing_input(self, tokenizer, diagnostics):
        assert tokenizer.tokenize("1 2") is None
        assert messages(diagnostics) == ["unexpected trailing input at 1:3"]

    def test_errors_are_stage_tagged(self, tokenizer, diagnostics):
        tokenizer.tokenize("(", "prog.sexp")
        assert all(diag.stage == "parsing" for diag in diagnostics.diagnostics)
        assert diagnostics.diagnostics[1].source_file == "prog.sexp"

    def test_tokenizer_is_reusable_after_error(self, tokenizer, diagnostics):
        assert tokenizer.tokenize("(") is None
        assert tokenizer.tokenize("(x)") == TokenList((Atom("x", 1, 2),), 1, 1)
