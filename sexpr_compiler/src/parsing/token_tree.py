"""Raw token tree produced by the tokenizer."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Tuple, Union

# Words of this shape are integer literals when they fit in 64 bits
INTEGER_WORD = re.compile(r"-?[0-9]+")


@dataclass(frozen=True)
class Atom:
    """A word that is not an integer literal."""

    text: str
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class IntegerToken:
    """A word that reads as a signed 64-bit decimal integer."""

    value: int
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class TokenList:
    """A bracketed list; the position is the opening bracket."""

    items: Tuple["TokenNode", ...] = ()
    line: int = 0
    column: int = 0


TokenNode = Union[Atom, IntegerToken, TokenList]


def format_token_tree(node: TokenNode) -> str:
    """Render a token tree back as s-expression text."""
    if isinstance(node, TokenList):
        return "(" + " ".join(format_token_tree(item) for item in node.items) + ")"
    if isinstance(node, IntegerToken):
        return str(node.value)
    return node.text


def describe_token(node: TokenNode) -> str:
    """Short noun phrase for a token, used in diagnostics."""
    if isinstance(node, TokenList):
        return "array"
    if isinstance(node, IntegerToken):
        return "number"
    return f"atom '{node.text}'"


def token_tree_to_json(node: TokenNode):
    """JSON-friendly structure: lists stay lists, integers stay integers."""
    if isinstance(node, TokenList):
        return [token_tree_to_json(item) for item in node.items]
    if isinstance(node, IntegerToken):
        return node.value
    return node.text
