"""Expression and selector nodes of the syntax tree."""

from __future__ import annotations

from abc import abstractmethod
from enum import Enum
from typing import Generic, Optional, Sequence, TextIO, TypeVar

from oberon0.node import FilePos, IdentNode, Node, NodeType
from oberon0.types import TypeNode

T = TypeVar("T")


def _standard_integer() -> TypeNode:
    from oberon0.context import ASTContext

    return ASTContext.INTEGER


def _standard_boolean() -> TypeNode:
    from oberon0.context import ASTContext

    return ASTContext.BOOLEAN


def _to_int32(value: int) -> int:
    value = int(value) & 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


class UnaryOpType(Enum):
    """Prefix operators."""

    plus = "+"
    minus = "-"
    u_not = "~"

    def __str__(self) -> str:
        return self.value


class BinaryOpType(Enum):
    """Infix operators."""

    plus = "+"
    minus = "-"
    b_or = "OR"
    times = "*"
    div = "DIV"
    divide = "/"
    mod = "MOD"
    b_and = "AND"
    eq = "="
    neq = "#"
    lt = "<"
    leq = "<="
    gt = ">"
    geq = ">="

    def __str__(self) -> str:
        return self.value


class ExpressionNode(Node):
    """Base class of all expressions; ``type`` is the expression's type."""

    def __init__(
        self, node_type: NodeType, pos: FilePos, type_node: Optional[TypeNode]
    ) -> None:
        super().__init__(node_type, pos)
        self.type = type_node

    @abstractmethod
    def is_const(self) -> bool:
        """Whether the value is known without running the program."""


class SelectorNode(Node):
    """Base class of array index and record field selectors."""


class ArrayIndexNode(SelectorNode):
    """An array index selector ``[expression]``."""

    def __init__(self, pos: FilePos, expression: ExpressionNode) -> None:
        super().__init__(NodeType.array_selector, pos)
        self.expression = expression

    def print(self, stream: TextIO) -> None:
        stream.write("[")
        self.expression.print(stream)
        stream.write("]")


class RecordFieldNode(SelectorNode):
    """A record field selector ``.ident``."""

    def __init__(self, pos: FilePos, ident: IdentNode) -> None:
        super().__init__(NodeType.record_selector, pos)
        self.ident = ident

    def print(self, stream: TextIO) -> None:
        stream.write(".")
        self.ident.print(stream)


class UnaryExpressionNode(ExpressionNode):
    """A prefix operator applied to an expression."""

    def __init__(
        self,
        pos: FilePos,
        op: UnaryOpType,
        expression: Optional[ExpressionNode],
        type_node: Optional[TypeNode],
    ) -> None:
        super().__init__(NodeType.unary_expression, pos, type_node)
        self.op = op
        self.expression = expression

    def print(self, stream: TextIO) -> None:
        stream.write(str(self.op))
        self.expression.print(stream)
        stream.write(";")

    def is_const(self) -> bool:
        return self.expression is not None and self.expression.is_const()


class IdentExpressionNode(ExpressionNode):
    """A variable or parameter, possibly followed by selectors."""

    def __init__(
        self,
        pos: FilePos,
        ident: IdentNode,
        selectors: Sequence[SelectorNode],
        decl: Optional[Node],
        type_node: Optional[TypeNode],
        is_lvalue: bool,
    ) -> None:
        super().__init__(NodeType.ident_expression, pos, type_node)
        self.ident = ident
        self.selectors = list(selectors)
        self.decl = decl
        self.is_lvalue = is_lvalue

    def print(self, stream: TextIO) -> None:
        self.ident.print(stream)
        for selector in self.selectors:
            selector.print(stream)

    def is_const(self) -> bool:
        return False


class LiteralExpressionNode(ExpressionNode, Generic[T]):
    """A literal value."""

    def __init__(
        self,
        node_type: NodeType,
        pos: FilePos,
        value: T,
        type_node: Optional[TypeNode],
    ) -> None:
        super().__init__(node_type, pos, type_node)
        self.value = value

    def is_const(self) -> bool:
        return True


class NumberExpressionNode(LiteralExpressionNode[int]):
    """A 32-bit signed integer literal; its type defaults to INTEGER."""

    def __init__(
        self, pos: FilePos, value: int, type_node: Optional[TypeNode] = None
    ) -> None:
        if type_node is None:
            type_node = _standard_integer()
        super().__init__(NodeType.number, pos, _to_int32(value), type_node)

    def print(self, stream: TextIO) -> None:
        stream.write(str(self.value))


class BooleanExpressionNode(LiteralExpressionNode[bool]):
    """A boolean literal; its type defaults to BOOLEAN."""

    def __init__(
        self, pos: FilePos, value: bool, type_node: Optional[TypeNode] = None
    ) -> None:
        if type_node is None:
            type_node = _standard_boolean()
        super().__init__(NodeType.boolean, pos, bool(value), type_node)

    def print(self, stream: TextIO) -> None:
        stream.write(str(int(self.value)))


class BinaryExpressionNode(ExpressionNode):
    """An infix operator applied to two expressions."""

    def __init__(
        self,
        pos: FilePos,
        left_expression: Optional[ExpressionNode],
        op: BinaryOpType,
        right_expression: Optional[ExpressionNode],
        type_node: Optional[TypeNode],
    ) -> None:
        super().__init__(NodeType.binary_expression, pos, type_node)
        self.left_expression = left_expression
        self.op = op
        self.right_expression = right_expression

    def print(self, stream: TextIO) -> None:
        self.left_expression.print(stream)
        stream.write(f" {self.op} ")
        self.right_expression.print(stream)

    def is_const(self) -> bool:
        return (
            self.left_expression is not None
            and self.right_expression is not None
            and self.left_expression.is_const()
            and self.right_expression.is_const()
        )