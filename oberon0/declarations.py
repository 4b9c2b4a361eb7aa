"""Declaration nodes of the syntax tree, declaration sequences and modules."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, TextIO

from oberon0.node import FilePos, IdentNode, Node, NodeType
from oberon0.types import ProcedureTypeNode, TypeNode

if TYPE_CHECKING:
    from oberon0.expressions import ExpressionNode
    from oberon0.statements import StatementSequenceNode


class DeclarationNode(Node):
    """Base class of all declarations: a name bound to a type."""

    def __init__(
        self,
        node_type: NodeType,
        pos: FilePos,
        ident: IdentNode,
        type_node: Optional[TypeNode],
    ) -> None:
        super().__init__(node_type, pos)
        self.ident = ident
        self.type = type_node


class ConstDeclarationNode(DeclarationNode):
    """A named constant with its value expression."""

    def __init__(
        self,
        pos: FilePos,
        ident: IdentNode,
        expression: ExpressionNode,
        type_node: Optional[TypeNode],
    ) -> None:
        super().__init__(NodeType.const_declaration, pos, ident, type_node)
        self.expression = expression

    def print(self, stream: TextIO) -> None:
        stream.write("CONST ")
        self.ident.print(stream)
        stream.write(" = ")
        self.expression.print(stream)


class TypeDeclarationNode(DeclarationNode):
    """A named type."""

    def __init__(
        self, pos: FilePos, ident: IdentNode, type_node: Optional[TypeNode]
    ) -> None:
        super().__init__(NodeType.type_declaration, pos, ident, type_node)

    def print(self, stream: TextIO) -> None:
        stream.write("TYPE ")
        self.ident.print(stream)
        stream.write(" : ")
        self.type.print(stream)


class VarDeclarationNode(DeclarationNode):
    """A variable, or a field of a record."""

    def __init__(
        self, pos: FilePos, ident: IdentNode, type_node: Optional[TypeNode]
    ) -> None:
        super().__init__(NodeType.var_declaration, pos, ident, type_node)

    def print(self, stream: TextIO) -> None:
        stream.write("VAR ")
        self.ident.print(stream)
        stream.write(" : ")
        self.type.print(stream)


class ParamDeclarationNode(DeclarationNode):
    """A formal parameter of a procedure, passed by value or by reference."""

    def __init__(
        self,
        pos: FilePos,
        ident: IdentNode,
        by_reference: bool,
        type_node: Optional[TypeNode],
    ) -> None:
        super().__init__(NodeType.param_declaration, pos, ident, type_node)
        self.by_reference = by_reference

    def print(self, stream: TextIO) -> None:
        if self.by_reference:
            stream.write("VAR ")
        self.ident.print(stream)
        stream.write(" : ")
        self.type.print(stream)


class DeclarationSequence:
    """The constants, types, variables and procedures declared in a block."""

    def __init__(self) -> None:
        self.consts: list[ConstDeclarationNode] = []
        self.types: list[TypeDeclarationNode] = []
        self.vars: list[VarDeclarationNode] = []
        self.procs: list[ProcedureDeclarationNode] = []

    def add_const(self, const_decl: ConstDeclarationNode) -> None:
        """Append a constant declaration."""
        self.consts.append(const_decl)

    def add_type(self, type_decl: TypeDeclarationNode) -> None:
        """Append a type declaration."""
        self.types.append(type_decl)

    def add_var(self, var_decl: VarDeclarationNode) -> None:
        """Append a variable declaration."""
        self.vars.append(var_decl)

    def add_procedure(self, proc_decl: ProcedureDeclarationNode) -> None:
        """Append a procedure declaration."""
        self.procs.append(proc_decl)


class ProcedureDeclarationNode(DeclarationNode, DeclarationSequence):
    """A procedure: its signature, local declarations and body."""

    def __init__(
        self,
        pos: FilePos,
        ident: IdentNode,
        type_node: Optional[ProcedureTypeNode],
    ) -> None:
        DeclarationNode.__init__(
            self, NodeType.procedure_declaration, pos, ident, type_node
        )
        DeclarationSequence.__init__(self)
        self.statements: Optional[StatementSequenceNode] = None

    def print(self, stream: TextIO) -> None:
        stream.write("PROCEDURE ")
        self.ident.print(stream)
        stream.write("\n")
        if self.statements is not None:
            self.statements.print(stream)
        stream.write("END ")
        self.ident.print(stream)


class ModuleNode(Node, DeclarationSequence):
    """A compilation unit: declarations and a main statement sequence."""

    def __init__(self, pos: FilePos, ident: IdentNode) -> None:
        Node.__init__(self, NodeType.module, pos)
        DeclarationSequence.__init__(self)
        self.ident = ident
        self.statements: Optional[StatementSequenceNode] = None

    def print(self, stream: TextIO) -> None:
        stream.write("MODULE ")
        self.ident.print(stream)
        stream.write("\n")
        if self.statements is not None:
            self.statements.print(stream)
        stream.write("END ")
        self.ident.print(stream)
        stream.write(";")