from __future__ import annotations
from abc import ABC
from typing import TYPE_CHECKING, List, Optional

from sexpr_compiler.src.ast.base import ASTNode
from sexpr_compiler.src.ast.expressions import ArithmeticOp

if TYPE_CHECKING:
    from sexpr_compiler.src.semantic.type_system import TypeInfo
    from .values import Value

"""Type-annotated tree produced by the type checker.

Every node pairs its static type with a fully resolved operation. Variable
references carry the slot index the type checker assigned to the binding.
"""


class IRNode(ABC):
    """Base class for all type-annotated nodes."""

    def __init__(self, value_type: TypeInfo, source_ast: Optional[ASTNode] = None) -> None:
        self.value_type = value_type
        self.source_ast = source_ast

    def __str__(self) -> str:  # pragma: no cover - debug helper
        return f"{self.__class__.__name__}: {self.value_type}"


class IR_Const(IRNode):
    """Literal value known at check time."""

    def __init__(
        self, value_type: TypeInfo, value: Value, source_ast: Optional[ASTNode] = None
    ) -> None:
        super().__init__(value_type, source_ast)
        self.value = value


class IR_Load(IRNode):
    """Read the variable in ``slot``."""

    def __init__(
        self,
        value_type: TypeInfo,
        slot: int,
        name: str,
        source_ast: Optional[ASTNode] = None,
    ) -> None:
        super().__init__(value_type, source_ast)
        self.slot = slot
        self.name = name


class IR_Store(IRNode):
    """Overwrite the variable in ``slot``; yields Unit."""

    def __init__(
        self,
        value_type: TypeInfo,
        slot: int,
        name: str,
        value: IRNode,
        source_ast: Optional[ASTNode] = None,
    ) -> None:
        super().__init__(value_type, source_ast)
        self.slot = slot
        self.name = name
        self.value = value


class IR_Let(IRNode):
    """Bind ``init`` to a new slot while evaluating ``body``."""

    def __init__(
        self,
        value_type: TypeInfo,
        slot: int,
        name: str,
        init: IRNode,
        body: IRNode,
        source_ast: Optional[ASTNode] = None,
    ) -> None:
        super().__init__(value_type, source_ast)
        self.slot = slot
        self.name = name
        self.init = init
        self.body = body


class IR_Var(IRNode):
    """Bind the zero value of the type ``type_expr`` evaluates to."""

    def __init__(
        self,
        value_type: TypeInfo,
        slot: int,
        name: str,
        type_expr: IRNode,
        body: IRNode,
        source_ast: Optional[ASTNode] = None,
    ) -> None:
        super().__init__(value_type, source_ast)
        self.slot = slot
        self.name = name
        self.type_expr = type_expr
        self.body = body


class IR_Seq(IRNode):
    """Evaluate items in order, yielding the last."""

    def __init__(
        self,
        value_type: TypeInfo,
        items: List[IRNode],
        source_ast: Optional[ASTNode] = None,
    ) -> None:
        super().__init__(value_type, source_ast)
        self.items = items


class IR_MakeArray(IRNode):
    """Build a fresh array from the element values."""

    def __init__(
        self,
        value_type: TypeInfo,
        elements: List[IRNode],
        source_ast: Optional[ASTNode] = None,
    ) -> None:
        super().__init__(value_type, source_ast)
        self.elements = elements


class IR_ArrayType(IRNode):
    """Wrap the element type value into an array type value."""

    def __init__(
        self, value_type: TypeInfo, inner: IRNode, source_ast: Optional[ASTNode] = None
    ) -> None:
        super().__init__(value_type, source_ast)
        self.inner = inner


class IR_Arith(IRNode):
    """Left fold of a 64-bit integer operator over the operands."""

    def __init__(
        self,
        value_type: TypeInfo,
        op: ArithmeticOp,
        operands: List[IRNode],
        source_ast: Optional[ASTNode] = None,
    ) -> None:
        super().__init__(value_type, source_ast)
        self.op = op
        self.operands = operands


class IR_ArrayGet(IRNode):
    """Element ``index`` of an array value."""

    def __init__(
        self,
        value_type: TypeInfo,
        index: IRNode,
        array: IRNode,
        source_ast: Optional[ASTNode] = None,
    ) -> None:
        super().__init__(value_type, source_ast)
        self.index = index
        self.array = array


class IR_ArraySet(IRNode):
    """Replace element ``index`` of the array held in ``slot``; yields Unit."""

    def __init__(
        self,
        value_type: TypeInfo,
        slot: int,
        name: str,
        index: IRNode,
        value: IRNode,
        source_ast: Optional[ASTNode] = None,
    ) -> None:
        super().__init__(value_type, source_ast)
        self.slot = slot
        self.name = name
        self.index = index
        self.value = value
