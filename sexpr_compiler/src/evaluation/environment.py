from contextlib import contextmanager
from typing import Iterator, List

from sexpr_compiler.src.ir.values import TypeValue, Value
from sexpr_compiler.src.semantic.type_system import Int64Type

from .exceptions import EvaluationError, UndeclaredVariableError

"""Index-addressed runtime scope."""


class Environment:
    """Stack of slot values.

    Slot ``n`` holds the ``n``-th live binding, matching the slot numbers the
    type checker assigned. Binding forms push exactly one slot and pop it on
    the way out.
    """

    def __init__(self) -> None:
        self.slots: List[Value] = []

    @classmethod
    def with_prelude(cls) -> "Environment":
        env = cls()
        env.slots.append(TypeValue(Int64Type()))
        return env

    def __len__(self) -> int:
        return len(self.slots)

    def load(self, slot: int, name: str = "?") -> Value:
        if not 0 <= slot < len(self.slots):
            raise UndeclaredVariableError(f"unknown variable '{name}'")
        return self.slots[slot]

    def store(self, slot: int, value: Value, name: str = "?") -> None:
        if not 0 <= slot < len(self.slots):
            raise UndeclaredVariableError(f"undeclared variable '{name}'")
        self.slots[slot] = value

    @contextmanager
    def push(self, slot: int, value: Value) -> Iterator[None]:
        """Bind ``slot`` for the duration of the ``with`` block."""
        if slot != len(self.slots):
            raise EvaluationError(
                f"slot {slot} bound out of order (depth {len(self.slots)})"
            )
        self.slots.append(value)
        try:
            yield
        finally:
            del self.slots[slot:]
