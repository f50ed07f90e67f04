#!/usr/bin/env python3
"""
sexprc CLI - Command-line interface for the s-expression evaluator.

This module provides the entry point for the 'sexprc' command installed via pip.

Usage:
    sexprc program.sexp                     # Evaluate a program file
    sexprc --input "(+ 1 2)"                # Evaluate a string
    sexprc program.sexp --emit typed        # Show the type-annotated tree
    sexprc program.sexp --emit value --json # Print the result as JSON
"""

import json
import logging
import sys
from pathlib import Path

import click

from sexpr_compiler.src.ast import ast_to_dict, format_ast
from sexpr_compiler.src.common.constants import (
    DEFAULT_CONFIG,
    EMIT_TARGETS,
    CompilerConfig,
)
from sexpr_compiler.src.common.diagnostics import ProgramDiagnostics
from sexpr_compiler.src.evaluation import EvaluationError, evaluate_program
from sexpr_compiler.src.ir import format_ir, format_value, ir_to_dict, value_to_json
from sexpr_compiler.src.parsing import (
    SExprParser,
    format_token_tree,
    token_tree_to_json,
)
from sexpr_compiler.src.semantic import check_program

logger = logging.getLogger(__name__)


def run_source(
    source_code: str,
    source_name: str = "<string>",
    emit: str = "value",
    use_json: bool = False,
    config: CompilerConfig = DEFAULT_CONFIG,
) -> tuple[bool, str, list]:
    """
    Run a program through the pipeline up to the requested stage.

    Args:
        source_code: The program text
        source_name: Name of the source (for error messages)
        emit: Last stage to run: tokens, ast, typed or value
        use_json: If True, render the stage output as JSON
        config: Compiler configuration settings

    Returns:
        (success: bool, result: str, diagnostics: list)
    """
    if emit not in EMIT_TARGETS:
        raise ValueError(f"Unknown emit target: {emit}")

    diagnostics = ProgramDiagnostics()
    parser = SExprParser(diagnostics)

    # Tokenize
    tokens = parser.tokenize(source_code, source_name)
    if tokens is None or diagnostics.has_errors():
        return False, "Parsing failed", diagnostics.get_messages()
    if emit == "tokens":
        if use_json:
            return True, json.dumps(token_tree_to_json(tokens)), diagnostics.get_messages()
        return True, format_token_tree(tokens), diagnostics.get_messages()

    # Syntax building
    program = parser.build(tokens, source_name)
    if program is None or diagnostics.has_errors():
        return False, "Syntax building failed", diagnostics.get_messages()
    if emit == "ast":
        if use_json:
            return True, json.dumps(ast_to_dict(program)), diagnostics.get_messages()
        return True, format_ast(program), diagnostics.get_messages()

    # Type checking
    typed = check_program(program, diagnostics, config)
    if typed is None or diagnostics.has_errors():
        return False, "Type checking failed", diagnostics.get_messages()
    if emit == "typed":
        if use_json:
            return True, json.dumps(ir_to_dict(typed)), diagnostics.get_messages()
        return True, format_ir(typed), diagnostics.get_messages()

    # Evaluation
    try:
        value = evaluate_program(typed)
    except EvaluationError as exc:
        diagnostics.error(
            exc.message, kind=exc.kind, stage="evaluation", node=exc.node
        )
        return False, "Evaluation failed", diagnostics.get_messages()

    logger.info("%s evaluated to %s", source_name, format_value(value))
    if use_json:
        return True, json.dumps(value_to_json(value)), diagnostics.get_messages()
    return True, format_value(value), diagnostics.get_messages()


def setup_logging(level: str) -> None:
    """Setup logging configuration."""
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")
    logging.basicConfig(level=numeric_level, format="%(levelname)s: %(message)s")


@click.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path), required=False)
@click.option(
    "-i",
    "--input",
    "input_string",
    type=str,
    help="Evaluate a program given as a string instead of a file",
)
@click.option(
    "--emit",
    type=click.Choice(list(EMIT_TARGETS), case_sensitive=False),
    default="value",
    help="Stage whose output is printed (default: value)",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default="warning",
    help="Set the logging level",
)
@click.option("--json", is_flag=True, help="Print the stage output as JSON")
@click.option(
    "--min-operands",
    type=click.IntRange(min=1),
    default=DEFAULT_CONFIG.min_arithmetic_operands,
    help=(
        "Minimum operand count for arithmetic forms "
        f"(default: {DEFAULT_CONFIG.min_arithmetic_operands})"
    ),
)
def main(input_file, input_string, emit, log_level, json, min_operands):
    """Type check and evaluate s-expression programs."""
    setup_logging(log_level)

    # Validate input source
    if input_file and input_string:
        click.echo("Error: Cannot specify both input file and --input string", err=True)
        sys.exit(1)

    if not input_file and input_string is None:
        click.echo("Error: Must specify either an input file or --input string", err=True)
        sys.exit(1)

    # Read source code
    if input_string is not None:
        source_code = input_string
        source_name = "<string>"
    else:
        try:
            source_code = input_file.read_text(encoding="utf-8")
            source_name = str(input_file.resolve())
        except (OSError, UnicodeDecodeError) as e:
            click.echo(f"Failed to read input file: {e}", err=True)
            sys.exit(1)

    success, result, diagnostic_messages = run_source(
        source_code,
        source_name=source_name,
        emit=emit.lower(),
        use_json=json,
        config=CompilerConfig(min_arithmetic_operands=min_operands),
    )

    if not success:
        for message in diagnostic_messages:
            click.echo(message, err=True)
        click.echo(f"Error: {result}", err=True)
        sys.exit(1)

    click.echo(result)

    for message in diagnostic_messages:
        click.echo(message, err=True)

    if log_level.lower() in ["debug", "info"]:
        msg_count = len(diagnostic_messages)
        msg = (
            f"Finished with {msg_count} diagnostic(s)."
            if msg_count
            else "Finished successfully."
        )
        click.echo(msg, err=True)


if __name__ == "__main__":
    main()
