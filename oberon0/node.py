"""Base classes of the syntax tree: source positions, node kinds, nodes and visitors."""

from __future__ import annotations

import io
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from functools import lru_cache
from typing import Any, TextIO


@dataclass(frozen=True)
class FilePos:
    """A position in a source file."""

    file_name: str = ""
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        where = f"{self.line}:{self.column}"
        return f"{self.file_name}:{where}" if self.file_name else where


EMPTY_POS = FilePos()


class NodeType(Enum):
    """The kind of a syntax tree node."""

    array_type = auto()
    assignment = auto()
    binary_expression = auto()
    boolean = auto()
    const_declaration = auto()
    declaration_sequence = auto()
    elsif_statement = auto()
    fp_section = auto()
    field = auto()
    ident = auto()
    ident_expression = auto()
    ident_type = auto()
    if_statement = auto()
    module = auto()
    number = auto()
    param_declaration = auto()
    procedure_body = auto()
    procedure_call = auto()
    procedure_declaration = auto()
    procedure_heading = auto()
    procedure_type = auto()
    record_type = auto()
    repeat_statement = auto()
    array_selector = auto()
    record_selector = auto()
    statement = auto()
    statement_sequence = auto()
    std_type = auto()
    type_declaration = auto()
    unary_expression = auto()
    var_declaration = auto()
    while_statement = auto()


class Node(ABC):
    """Base class of all syntax tree nodes."""

    def __init__(self, node_type: NodeType, pos: FilePos) -> None:
        self.node_type = node_type
        self.pos = pos

    def accept(self, visitor: NodeVisitor) -> Any:
        """Let ``visitor`` handle this node and return its result."""
        return visitor.visit(self)

    @abstractmethod
    def print(self, stream: TextIO) -> None:
        """Write the source form of this node to ``stream``."""

    def __str__(self) -> str:
        buffer = io.StringIO()
        self.print(buffer)
        return buffer.getvalue()


class IdentNode(Node):
    """An identifier."""

    def __init__(self, pos: FilePos, value: str) -> None:
        super().__init__(NodeType.ident, pos)
        self.value = value

    def print(self, stream: TextIO) -> None:
        stream.write(self.value)

    def __repr__(self) -> str:
        return f"IdentNode({self.value!r})"


_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


@lru_cache(maxsize=None)
def _handler_name(class_name: str) -> str:
    return "visit_" + _CAMEL_BOUNDARY.sub("_", class_name).lower()


class NodeVisitor:
    """Dispatches a node to the ``visit_<snake_case_class>`` method.

    The node's class hierarchy is searched from the most specific class
    upwards, so a handler for a base class also receives its subclasses.
    """

    def visit(self, node: Node) -> Any:
        for cls in type(node).__mro__:
            handler = getattr(self, _handler_name(cls.__name__), None)
            if handler is not None:
                return handler(node)
        raise TypeError(
            f"{type(self).__name__} cannot visit {type(node).__name__}"
        )