"""Syntax builder resolving keyword forms in a token tree."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional

from sexpr_compiler.src.ast.expressions import (
    Arithmetic,
    ArithmeticOp,
    ArrayGet,
    ArrayLiteral,
    ArraySet,
    ArrayTypeLiteral,
    Assign,
    Expr,
    Identifier,
    IntegerLiteral,
    LetType,
    LetValue,
    Sequence,
)
from sexpr_compiler.src.common.constants import (
    ARRAY_GET_KW,
    ARRAY_KW,
    ARRAY_SET_KW,
    ARRAY_TYPE_KW,
    LET_KW,
    SEQ_KW,
    SET_KW,
    VAR_KW,
)
from sexpr_compiler.src.common.diagnostics import DiagnosticKind, ProgramDiagnostics
from .token_tree import (
    INTEGER_WORD,
    Atom,
    IntegerToken,
    TokenList,
    TokenNode,
    describe_token,
)


FormBuilder = Callable[[str, TokenList], Optional[Expr]]


class SyntaxBuilder:
    """Transforms a token tree into syntax tree nodes.

    Every local problem is logged to the shared diagnostics. Once a form has
    the right number of arguments all of its children are built, so sibling
    problems are reported in the same pass; the form itself fails if any
    child failed.
    """

    def __init__(self, diagnostics: ProgramDiagnostics):
        self.diagnostics = diagnostics
        self._filename = "<string>"
        self._forms: Dict[str, FormBuilder] = {
            LET_KW: self._build_let,
            VAR_KW: self._build_var,
            SEQ_KW: self._build_seq,
            SET_KW: self._build_set,
            ARRAY_KW: self._build_array,
            ARRAY_TYPE_KW: self._build_array_type,
            ARRAY_GET_KW: self._build_array_get,
            ARRAY_SET_KW: self._build_array_set,
        }
        for op in ArithmeticOp:
            self._forms[op.value] = self._build_arithmetic

    def _error(self, message: str, token: TokenNode) -> None:
        self.diagnostics.error(
            message,
            kind=DiagnosticKind.SHAPE,
            stage="syntax",
            line=token.line,
            column=token.column,
            source_file=self._filename,
        )

    def build(
        self, token: TokenNode, filename: str = "<string>"
    ) -> Optional[Expr]:
        """Build the syntax tree for a whole program."""
        self._filename = filename
        return self._build(token)

    def _build(self, token: TokenNode) -> Optional[Expr]:
        if isinstance(token, Atom):
            if INTEGER_WORD.fullmatch(token.text):
                self.diagnostics.warning(
                    f"integer literal {token.text} does not fit in 64 bits, "
                    "reading it as a name",
                    kind=DiagnosticKind.SHAPE,
                    stage="syntax",
                    line=token.line,
                    column=token.column,
                    source_file=self._filename,
                )
            return Identifier(token.text, token.line, token.column)
        if isinstance(token, IntegerToken):
            return IntegerLiteral(token.value, token.line, token.column)
        return self._build_form(token)

    def _build_form(self, form: TokenList) -> Optional[Expr]:
        if not form.items:
            self._error("empty form", form)
            return None

        head = form.items[0]
        if not isinstance(head, Atom):
            self._error(f"{describe_token(head)} used as function", head)
            return None

        builder = self._forms.get(head.text)
        if builder is None:
            self._error(f"unknown head '{head.text}'", head)
            return None
        return builder(head.text, form)

    def _check_arity(
        self, head: str, form: TokenList, expected: int, names: str
    ) -> bool:
        actual = len(form.items) - 1
        if actual != expected:
            self._error(
                f"'{head}' expects {expected} argument(s) ({names}), got {actual}",
                form,
            )
            return False
        return True

    def _check_min_arity(self, head: str, form: TokenList, minimum: int) -> bool:
        actual = len(form.items) - 1
        if actual < minimum:
            self._error(
                f"'{head}' expects at least {minimum} argument(s), got {actual}", form
            )
            return False
        return True

    def _binding_name(self, head: str, token: TokenNode) -> Optional[str]:
        if isinstance(token, Atom):
            return token.text
        self._error(
            f"binding name in '{head}' must be an identifier, "
            f"found {describe_token(token)}",
            token,
        )
        return None

    def _build_all(self, tokens: Iterable[TokenNode]) -> Optional[List[Expr]]:
        """Build every token, returning ``None`` if any of them failed."""
        built = [self._build(token) for token in tokens]
        if any(item is None for item in built):
            return None
        return built

    def _build_let(self, head: str, form: TokenList) -> Optional[Expr]:
        if not self._check_arity(head, form, 3, "name, value, body"):
            return None
        name = self._binding_name(head, form.items[1])
        value = self._build(form.items[2])
        body = self._build(form.items[3])
        if name is None or value is None or body is None:
            return None
        return LetValue(name, value, body, form.line, form.column)

    def _build_var(self, head: str, form: TokenList) -> Optional[Expr]:
        if not self._check_arity(head, form, 3, "name, type, body"):
            return None
        name = self._binding_name(head, form.items[1])
        type_expr = self._build(form.items[2])
        body = self._build(form.items[3])
        if name is None or type_expr is None or body is None:
            return None
        return LetType(name, type_expr, body, form.line, form.column)

    def _build_seq(self, head: str, form: TokenList) -> Optional[Expr]:
        if not self._check_min_arity(head, form, 1):
            return None
        items = self._build_all(form.items[1:])
        if items is None:
            return None
        return Sequence(items, form.line, form.column)

    def _build_set(self, head: str, form: TokenList) -> Optional[Expr]:
        if not self._check_arity(head, form, 2, "name, value"):
            return None
        name = self._binding_name(head, form.items[1])
        value = self._build(form.items[2])
        if name is None or value is None:
            return None
        return Assign(name, value, form.line, form.column)

    def _build_array(self, head: str, form: TokenList) -> Optional[Expr]:
        elements = self._build_all(form.items[1:])
        if elements is None:
            return None
        return ArrayLiteral(elements, form.line, form.column)

    def _build_array_type(self, head: str, form: TokenList) -> Optional[Expr]:
        if not self._check_arity(head, form, 1, "element type"):
            return None
        inner = self._build(form.items[1])
        if inner is None:
            return None
        return ArrayTypeLiteral(inner, form.line, form.column)

    def _build_arithmetic(self, head: str, form: TokenList) -> Optional[Expr]:
        if not self._check_min_arity(head, form, 1):
            return None
        operands = self._build_all(form.items[1:])
        if operands is None:
            return None
        return Arithmetic(ArithmeticOp(head), operands, form.line, form.column)

    def _build_array_get(self, head: str, form: TokenList) -> Optional[Expr]:
        if not self._check_arity(head, form, 2, "index, array"):
            return None
        index = self._build(form.items[1])
        array = self._build(form.items[2])
        if index is None or array is None:
            return None
        return ArrayGet(array, index, form.line, form.column)

    def _build_array_set(self, head: str, form: TokenList) -> Optional[Expr]:
        if not self._check_arity(head, form, 3, "index, array, value"):
            return None
        index = self._build(form.items[1])
        array = self._build(form.items[2])
        value = self._build(form.items[3])
        if index is None or array is None or value is None:
            return None
        return ArraySet(array, index, value, form.line, form.column)
