"""Shared constants across the compiler."""

from dataclasses import dataclass

# Integer range of the language's only numeric type
INT64_BITS = 64
INT64_MIN = -(1 << (INT64_BITS - 1))
INT64_MAX = (1 << (INT64_BITS - 1)) - 1

# Keyword heads
LET_KW = "let"
VAR_KW = "var"
SEQ_KW = "seq"
SET_KW = "set"
ARRAY_KW = "array"
ARRAY_TYPE_KW = "array-t"
ARRAY_GET_KW = "array-get"
ARRAY_SET_KW = "array-set"
ARITHMETIC_HEADS = ("+", "-", "*", "/", "%")

# The single identifier bound before the program starts
PRELUDE_INT64_NAME = "i64"

# Output channels understood by the pipeline driver
EMIT_TARGETS = ("tokens", "ast", "typed", "value")


@dataclass(frozen=True)
class CompilerConfig:
    """Tunable settings for the front end."""

    min_arithmetic_operands: int = 2

    def __post_init__(self) -> None:
        if self.min_arithmetic_operands < 1:
            raise ValueError(
                "min_arithmetic_operands must be at least 1, "
                f"got {self.min_arithmetic_operands}"
            )


DEFAULT_CONFIG = CompilerConfig()
