"""
Tests for parsing/parser.py - the tokenizer plus syntax builder facade.
"""

from sexpr_compiler.src.ast.expressions import Arithmetic, LetValue
from sexpr_compiler.src.common.diagnostics import ProgramDiagnostics
from sexpr_compiler.src.parsing.parser import SExprParser


class TestSExprParser:
    """Tests for SExprParser."""

    def test_parse_returns_syntax_tree(self):
        parser = SExprParser(ProgramDiagnostics())
        tree = parser.parse("(+ 1 2)")
        assert isinstance(tree, Arithmetic)

    def test_source_file_stamped_on_every_node(self):
        parser = SExprParser(ProgramDiagnostics())
        tree = parser.parse("(let x 1 (+ x 2))", "prog.sexp")
        assert isinstance(tree, LetValue)
        assert tree.source_file == "prog.sexp"
        assert tree.value.source_file == "prog.sexp"
        assert tree.body.operands[1].source_file == "prog.sexp"

    def test_tokenizer_failure_stops_before_building(self):
        diagnostics = ProgramDiagnostics()
        parser = SExprParser(diagnostics)
        assert parser.parse("(foo") is None
        assert all(diag.stage == "parsing" for diag in diagnostics.diagnostics)

    def test_builder_failure(self):
        diagnostics = ProgramDiagnostics()
        parser = SExprParser(diagnostics)
        assert parser.parse("(foo)") is None
        assert diagnostics.diagnostics[0].stage == "syntax"

    def test_parse_file(self, tmp_path):
        path = tmp_path / "prog.sexp"
        path.write_text("(* 6 7)\n", encoding="utf-8")
        parser = SExprParser(ProgramDiagnostics())
        tree = parser.parse_file(path)
        assert isinstance(tree, Arithmetic)
        assert tree.source_file == str(path)

    def test_builder_errors_carry_source_file(self):
        diagnostics = ProgramDiagnostics()
        parser = SExprParser(diagnostics)
        assert parser.parse("(foo)", "prog.sexp") is None
        assert diagnostics.diagnostics[0].source_file == "prog.sexp"
        assert diagnostics.get_messages() == [
            "ERROR [syntax:prog.sexp:1:2] ShapeError: unknown head 'foo'"
        ]
