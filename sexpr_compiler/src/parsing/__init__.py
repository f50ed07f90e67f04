from .parser import SExprParser
from .syntax_builder import SyntaxBuilder
from .token_tree import (
    Atom,
    IntegerToken,
    TokenList,
    TokenNode,
    format_token_tree,
    token_tree_to_json,
)
from .tokenizer import Tokenizer

"""Parsing module for the s-expression language."""


__all__ = [
    "SExprParser",
    "SyntaxBuilder",
    "Tokenizer",
    "Atom",
    "IntegerToken",
    "TokenList",
    "TokenNode",
    "format_token_tree",
    "token_tree_to_json",
]
