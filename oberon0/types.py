"""Type nodes of the syntax tree."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence, TextIO

from oberon0.diagnostics import FieldNotFoundError as _DiagnosticFieldNotFoundError
from oberon0.node import FilePos, IdentNode, Node, NodeType


class FieldNotFoundError(_DiagnosticFieldNotFoundError):
    """Raised when a record has no field of the requested name."""


class StdType(Enum):
    """Built-in types of the language."""

    BOOLEAN = "BOOLEAN"
    INTEGER = "INTEGER"


class TypeNode(Node):
    """Base class of all type nodes."""

    def is_primitive_type(self) -> bool:
        """Whether values of this type fit in a single scalar."""
        return False


class IdentTypeNode(TypeNode):
    """A type referred to by name."""

    def __init__(self, pos: FilePos, ident: IdentNode) -> None:
        super().__init__(NodeType.ident_type, pos)
        self.ident = ident

    def print(self, stream: TextIO) -> None:
        self.ident.print(stream)


class StdTypeNode(TypeNode):
    """One of the built-in types."""

    def __init__(self, pos: FilePos, ident: IdentNode, std_type: StdType) -> None:
        super().__init__(NodeType.std_type, pos)
        self.ident = ident
        self.std_type = std_type

    def is_primitive_type(self) -> bool:
        return True

    def print(self, stream: TextIO) -> None:
        self.ident.print(stream)


class ArrayTypeNode(TypeNode):
    """An array of a fixed length; ``expression`` is the length literal."""

    def __init__(self, pos: FilePos, expression: Node, type: TypeNode) -> None:
        super().__init__(NodeType.array_type, pos)
        self.expression = expression
        self.type = type

    def print(self, stream: TextIO) -> None:
        stream.write(f"ARRAY {self.expression.value} OF ")
        self.type.print(stream)

    def is_in_bounds(self, expr: Node) -> Optional[bool]:
        """Whether a literal index lies in the array; None if not a literal."""
        if expr.node_type is NodeType.number:
            return 0 <= expr.value < self.expression.value
        return None


class FieldNode(Node):
    """A named field of a given type."""

    def __init__(self, pos: FilePos, ident: IdentNode, type: TypeNode) -> None:
        super().__init__(NodeType.field, pos)
        self.ident = ident
        self.type = type

    def print(self, stream: TextIO) -> None:
        self.ident.print(stream)
        stream.write(" : ")
        self.type.print(stream)


class RecordTypeNode(TypeNode):
    """A record; each entry of ``field_lists`` has an ``ident`` and a ``type``."""

    def __init__(self, pos: FilePos, field_lists: Sequence[Node]) -> None:
        super().__init__(NodeType.record_type, pos)
        self.field_lists = list(field_lists)

    def print(self, stream: TextIO) -> None:
        stream.write("RECORD ")
        for index, field in enumerate(self.field_lists):
            if index:
                stream.write("; ")
            field.print(stream)
        stream.write(" END")

    def find_field(self, ident: IdentNode) -> Node:
        """Return the field named like ``ident``."""
        for field in self.field_lists:
            if field.ident.value == ident.value:
                return field
        raise FieldNotFoundError(ident)

    def find_field_index(self, ident: IdentNode) -> int:
        """Return the position of the field named like ``ident``."""
        for index, field in enumerate(self.field_lists):
            if field.ident.value == ident.value:
                return index
        raise FieldNotFoundError(ident)


class ProcedureTypeNode(TypeNode):
    """The signature of a procedure: its formal parameters."""

    def __init__(
        self, pos: FilePos, formal_parameters: Optional[Sequence[Node]] = None
    ) -> None:
        super().__init__(NodeType.procedure_type, pos)
        self.formal_parameters = list(formal_parameters or [])

    def print(self, stream: TextIO) -> None:
        stream.write("PROCEDURE")


__all__ = [
    "ArrayTypeNode",
    "FieldNode",
    "FieldNotFoundError",
    "IdentTypeNode",
    "ProcedureTypeNode",
    "RecordTypeNode",
    "StdType",
    "StdTypeNode",
    "TypeNode",
]