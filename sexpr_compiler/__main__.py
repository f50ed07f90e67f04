#!/usr/bin/env python3
"""
sexprc CLI - Entry point for the s-expression evaluator.

This module allows running the evaluator as:
    python -m sexpr_compiler program.sexp
    sexprc program.sexp  (when installed via pip)
"""

from sexpr_compiler.cli import main

if __name__ == "__main__":
    main()
