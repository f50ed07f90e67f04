from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from sexpr_compiler.src.ast.base import ASTNode
from sexpr_compiler.src.common.constants import PRELUDE_INT64_NAME
from .type_system import Int64Type, TypeInfo, TypeOfType

"""Symbol table implementation for type checking."""


@dataclass
class Symbol:
    """Symbol table entry.

    ``value_type`` is ``None`` when the bound expression failed to type
    check; lookups of such a symbol fail without a second diagnostic.
    """

    name: str
    slot: int
    value_type: Optional[TypeInfo]
    defined_at: Optional[ASTNode] = None


class SymbolTable:
    """Stack-disciplined lexical scope.

    Each binding form gets the next slot index; because binding forms nest
    strictly, slot ``n`` is the ``n``-th live binding and the evaluator can
    address its environment by index.
    """

    def __init__(self) -> None:
        self.symbols: Dict[str, Symbol] = {}
        self.depth = 0

    @classmethod
    def with_prelude(cls) -> "SymbolTable":
        """A table holding the bindings available at program start."""
        table = cls()
        table.define(PRELUDE_INT64_NAME, TypeOfType(Int64Type()))
        return table

    def define(
        self,
        name: str,
        value_type: Optional[TypeInfo],
        node: Optional[ASTNode] = None,
    ) -> Symbol:
        """Install a binding that lives as long as the table."""
        symbol = Symbol(name, self.depth, value_type, node)
        self.symbols[name] = symbol
        self.depth += 1
        return symbol

    def lookup(self, name: str) -> Optional[Symbol]:
        """Look up the innermost symbol bound to ``name``."""
        return self.symbols.get(name)

    @contextmanager
    def bind(
        self,
        name: str,
        value_type: Optional[TypeInfo],
        node: Optional[ASTNode] = None,
    ) -> Iterator[Symbol]:
        """Shadow ``name`` for the duration of the ``with`` block.

        The previous symbol is restored, or the name removed, on every exit
        path.
        """
        previous = self.symbols.get(name)
        symbol = Symbol(name, self.depth, value_type, node)
        self.symbols[name] = symbol
        self.depth += 1
        try:
            yield symbol
        finally:
            self.depth -= 1
            if previous is None:
                del self.symbols[name]
            else:
                self.symbols[name] = previous

    def snapshot(self) -> Dict[str, Symbol]:
        """Copy of the visible bindings, for comparing scopes."""
        return dict(self.symbols)
