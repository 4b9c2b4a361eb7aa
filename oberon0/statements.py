"""Statement nodes of the syntax tree."""

from __future__ import annotations

from typing import Optional, Sequence, TextIO

from oberon0.expressions import ExpressionNode, IdentExpressionNode, SelectorNode
from oberon0.node import FilePos, IdentNode, Node, NodeType


class StatementNode(Node):
    """Base class of all statements."""


class StatementSequenceNode(Node):
    """A list of statements."""

    def __init__(self, pos: FilePos, stmts: Sequence[StatementNode]) -> None:
        super().__init__(NodeType.statement_sequence, pos)
        self.stmts = list(stmts)

    def print(self, stream: TextIO) -> None:
        for stmt in self.stmts[:-1]:
            stmt.print(stream)
            stream.write(";\n")
        if len(self.stmts) > 1:
            self.stmts[-1].print(stream)


class AssignmentNode(StatementNode):
    """An assignment of an expression to a variable."""

    def __init__(
        self,
        pos: FilePos,
        ident_expr: IdentExpressionNode,
        expression: Optional[ExpressionNode],
    ) -> None:
        super().__init__(NodeType.assignment, pos)
        self.ident_expr = ident_expr
        self.expression = expression

    def print(self, stream: TextIO) -> None:
        self.ident_expr.print(stream)
        stream.write(" = ")
        self.expression.print(stream)


class ElsIfStatementNode(StatementNode):
    """An ELSIF branch of an IF statement."""

    def __init__(
        self,
        pos: FilePos,
        condition: ExpressionNode,
        body: Optional[StatementSequenceNode],
    ) -> None:
        super().__init__(NodeType.elsif_statement, pos)
        self.condition = condition
        self.body = body

    def print(self, stream: TextIO) -> None:
        stream.write("ELSIF ")
        self.condition.print(stream)
        stream.write("\n")
        if self.body is not None:
            self.body.print(stream)
        stream.write("END")


class IfStatementNode(StatementNode):
    """An IF statement with optional ELSIF branches and ELSE part."""

    def __init__(
        self,
        pos: FilePos,
        condition: ExpressionNode,
        body: Optional[StatementSequenceNode],
        elsifs: Sequence[ElsIfStatementNode] = (),
        else_statement_sequence: Optional[StatementSequenceNode] = None,
    ) -> None:
        super().__init__(NodeType.if_statement, pos)
        self.condition = condition
        self.body = body
        self.elsifs = list(elsifs)
        self.else_statement_sequence = else_statement_sequence

    def print(self, stream: TextIO) -> None:
        stream.write("IF ")
        self.condition.print(stream)
        stream.write("\n")
        if self.body is not None:
            self.body.print(stream)
        stream.write("END")


class ProcedureCallNode(StatementNode):
    """A call of a procedure; ``ref`` is the called declaration."""

    def __init__(
        self,
        pos: FilePos,
        ident: IdentNode,
        selectors: Sequence[SelectorNode],
        actual_parameters: Sequence[ExpressionNode],
        ref: Optional[Node],
    ) -> None:
        super().__init__(NodeType.procedure_call, pos)
        self.ident = ident
        self.selectors = list(selectors)
        self.actual_parameters = list(actual_parameters)
        self.ref = ref

    def print(self, stream: TextIO) -> None:
        self.ident.print(stream)
        for selector in self.selectors:
            selector.print(stream)
        stream.write("(")
        for index, param in enumerate(self.actual_parameters):
            if index:
                stream.write(", ")
            param.print(stream)
        stream.write(")")


class WhileStatementNode(StatementNode):
    """A WHILE loop."""

    def __init__(
        self,
        pos: FilePos,
        condition: ExpressionNode,
        body: Optional[StatementSequenceNode],
    ) -> None:
        super().__init__(NodeType.while_statement, pos)
        self.condition = condition
        self.body = body

    def print(self, stream: TextIO) -> None:
        stream.write("WHILE ")
        self.condition.print(stream)
        stream.write("DO\n")
        if self.body is not None:
            self.body.print(stream)
        stream.write("\nEND")


class RepeatStatementNode(StatementNode):
    """A REPEAT ... UNTIL loop."""

    def __init__(
        self,
        pos: FilePos,
        condition: ExpressionNode,
        body: Optional[StatementSequenceNode],
    ) -> None:
        super().__init__(NodeType.repeat_statement, pos)
        self.condition = condition
        self.body = body

    def print(self, stream: TextIO) -> None:
        stream.write("REPEAT\n")
        if self.body is not None:
            self.body.print(stream)
        stream.write("\nUNTIL ")
        self.condition.print(stream)