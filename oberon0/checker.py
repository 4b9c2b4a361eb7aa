"""Semantic checks run while the parser builds the syntax tree."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from oberon0.context import ASTContext
from oberon0.declarations import (
    ConstDeclarationNode,
    DeclarationNode,
    ModuleNode,
    ParamDeclarationNode,
    ProcedureDeclarationNode,
    TypeDeclarationNode,
    VarDeclarationNode,
)
from oberon0.diagnostics import (
    Diagnostics,
    DuplicateFieldError,
    NegativeIntegerError,
    NonConstError,
    SemanticError,
    SymbolLookupError,
    UndeclaredArgumentError,
    WrongNodeTypeError,
)
from oberon0.expressions import (
    ArrayIndexNode,
    BinaryOpType,
    BooleanExpressionNode,
    ExpressionNode,
    IdentExpressionNode,
    NumberExpressionNode,
    SelectorNode,
    UnaryOpType,
)
from oberon0.folding import fold_binary, fold_unary
from oberon0.node import FilePos, IdentNode, NodeType
from oberon0.statements import AssignmentNode, ProcedureCallNode
from oberon0.symboltable import SymbolTable
from oberon0.types import ArrayTypeNode, ProcedureTypeNode, RecordTypeNode, TypeNode

_VARIABLE_KINDS = frozenset({NodeType.var_declaration, NodeType.param_declaration})


class SemanticChecker:
    """Builds checked syntax tree nodes from what the parser recognises."""

    def __init__(self, diagnostics: Optional[Diagnostics] = None) -> None:
        self.diagnostics = diagnostics or Diagnostics()
        self.symbol_table = SymbolTable(self.diagnostics)
        self.context = ASTContext()

    def _fail(self, pos: FilePos, message: str) -> SemanticError:
        self.diagnostics.error(pos, message)
        return SemanticError(message)

    @contextmanager
    def _scope(self) -> Iterator[None]:
        self.symbol_table.begin_scope()
        try:
            yield
        finally:
            self.symbol_table.end_scope()

    # modules

    def on_module_start(self, pos: FilePos, ident: IdentNode) -> ModuleNode:
        """Create the module node and open its scope."""
        module = ModuleNode(pos, ident)
        self.symbol_table.begin_scope()
        self.context.module = module
        return module

    def on_module_end(self, pos: FilePos, ident: IdentNode) -> None:
        """Check the closing name of the module and close its scope."""
        module = self.context.module
        if module is None or module.ident.value != ident.value:
            raise self._fail(pos, "End identifier does not match module identifier.")
        self.symbol_table.end_scope()

    # declarations

    def on_const(
        self, pos: FilePos, ident: IdentNode, expr: Optional[ExpressionNode]
    ) -> ConstDeclarationNode:
        """Declare a constant whose value must be known at compile time."""
        if expr is None:
            self.diagnostics.error(pos, f"Undefined constant value: {ident.value}")
            raise UndeclaredArgumentError(ident.value)
        if not expr.is_const():
            self.diagnostics.error(
                pos, f"Non-constant value in const declaration: {ident.value}"
            )
            raise NonConstError(expr)
        const_decl = ConstDeclarationNode(pos, ident, expr, expr.type)
        self.expect_unique(const_decl.ident, const_decl)
        return const_decl

    def on_vars(
        self,
        pos: FilePos,
        idents: Sequence[IdentNode],
        type_node: Optional[TypeNode],
    ) -> list[VarDeclarationNode]:
        """Declare variables that share one type."""
        if type_node is None:
            raise self._fail(pos, "Unspecified variable type.")
        var_decls = []
        for ident in idents:
            var_decl = VarDeclarationNode(pos, ident, type_node)
            self.expect_unique(var_decl.ident, var_decl)
            var_decls.append(var_decl)
        return var_decls

    def on_type_declaration(
        self, pos: FilePos, ident: IdentNode, type_node: Optional[TypeNode]
    ) -> TypeDeclarationNode:
        """Declare a named type."""
        type_decl = TypeDeclarationNode(pos, ident, type_node)
        self.expect_unique(type_decl.ident, type_decl)
        return type_decl

    # types

    def on_ident_type(self, pos: FilePos, ident: IdentNode) -> Optional[TypeNode]:
        """Resolve a type name; report an error and return None if it is not one."""
        std_type = ASTContext.std_types.get(ident.value)
        if std_type is not None:
            return std_type

        decl = self.symbol_table.lookup(ident)
        if decl is None:
            self.diagnostics.error(
                pos,
                f"Specified type '{ident.value}' is not declared in the current scope.",
            )
            return None
        if isinstance(decl, TypeDeclarationNode):
            return decl.type
        self.diagnostics.error(pos, f"'{ident}' is not a type.")
        return None

    def on_array_type(
        self,
        pos: FilePos,
        expr: Optional[ExpressionNode],
        type_node: Optional[TypeNode],
    ) -> ArrayTypeNode:
        """Create an array type whose length is a non-negative literal."""
        if expr is None:
            raise self._fail(pos, "Undefined array size.")
        if not isinstance(expr, NumberExpressionNode):
            self.diagnostics.error(pos, "Array size is not a constant number.")
            raise NonConstError(expr)
        if expr.value < 0:
            self.diagnostics.error(expr.pos, "Array size cannot be negative")
            raise NegativeIntegerError(expr)
        return self.context.add_type(ArrayTypeNode(pos, expr, type_node))

    def on_record_type(
        self,
        pos: FilePos,
        fields: Sequence[tuple[Sequence[IdentNode], Optional[TypeNode]]],
    ) -> RecordTypeNode:
        """Create a record type; field names must be unique within it."""
        field_decls = []
        with self._scope():
            for idents, type_node in fields:
                for ident in idents:
                    var_decl = VarDeclarationNode(pos, ident, type_node)
                    self.expect_unique_within_scope(var_decl.ident, var_decl)
                    field_decls.append(var_decl)
        return self.context.add_type(RecordTypeNode(pos, field_decls))

    def on_procedure_type(
        self,
        pos: FilePos,
        formal_parameters: Sequence[
            tuple[Sequence[IdentNode], bool, Optional[TypeNode]]
        ],
    ) -> ProcedureTypeNode:
        """Create a procedure signature; parameter names must be unique."""
        params = []
        with self._scope():
            for idents, by_reference, type_node in formal_parameters:
                for ident in idents:
                    param = ParamDeclarationNode(
                        ident.pos, ident, by_reference, type_node
                    )
                    self.expect_unique_within_scope(param.ident, param)
                    params.append(param)
        return self.context.add_type(ProcedureTypeNode(pos, params))

    # procedures

    def on_procedure_declaration(
        self, pos: FilePos, ident: IdentNode, type_node: ProcedureTypeNode
    ) -> ProcedureDeclarationNode:
        """Declare a procedure and open its scope holding the parameters."""
        proc_decl = ProcedureDeclarationNode(pos, ident, type_node)
        self.expect_unique(proc_decl.ident, proc_decl)
        self.symbol_table.begin_scope()
        for param in type_node.formal_parameters:
            self.symbol_table.insert(param.ident, param)
        return proc_decl

    def on_procedure_end(
        self,
        pos: FilePos,
        procedure: ProcedureDeclarationNode,
        ident: IdentNode,
    ) -> None:
        """Check the closing name of a procedure and close its scope."""
        if procedure.ident.value != ident.value:
            raise self._fail(
                pos, "End identifier does not match procedure identifier."
            )
        self.symbol_table.end_scope()

    def _lookup_procedure(
        self, pos: FilePos, ident: IdentNode
    ) -> ProcedureDeclarationNode:
        decl = self.symbol_table.lookup(ident)
        if decl is None:
            raise self._fail(pos, "Undeclared procedure identifier.")
        if decl.node_type is not NodeType.procedure_declaration:
            raise self._fail(
                pos, "Identifier is not associated with a procedure declaration."
            )
        return decl

    def on_procedure_call_start(
        self,
        pos: FilePos,
        ident: IdentNode,
        selectors: Sequence[SelectorNode],
    ) -> ProcedureTypeNode:
        """Return the signature of the procedure about to be called."""
        if selectors:
            raise self._fail(
                pos, "Cannot handle selectors in procedure calls as of now."
            )
        return self._lookup_procedure(pos, ident).type

    def on_procedure_call(
        self,
        pos: FilePos,
        ident: IdentNode,
        selectors: Sequence[SelectorNode],
        actual_params: Sequence[ExpressionNode],
    ) -> ProcedureCallNode:
        """Check actual parameters against the procedure's signature."""
        proc_decl = self._lookup_procedure(pos, ident)
        formal_params = proc_decl.type.formal_parameters

        if len(formal_params) != len(actual_params):
            raise self._fail(
                pos,
                "Number of given parameters does not match declared "
                "procedure parameters.",
            )

        for formal, actual in zip(formal_params, actual_params):
            if formal.type is not actual.type:
                raise self._fail(
                    actual.pos, "Parameter type does not match declared formal type."
                )
            if not formal.by_reference:
                continue
            if actual.node_type is not NodeType.ident_expression:
                raise self._fail(actual.pos, "Passed parameter is not a variable.")
            decl = self.symbol_table.lookup(actual.ident)
            if decl is None or decl.node_type is not NodeType.var_declaration:
                raise self._fail(
                    actual.pos,
                    "Identifier is not associated with a var declaration.",
                )

        return ProcedureCallNode(pos, ident, selectors, actual_params, proc_decl)

    # expressions

    def on_unary_expression(
        self, pos: FilePos, expr: Optional[ExpressionNode], op: UnaryOpType
    ) -> ExpressionNode:
        """Check a prefix operation, folding literals."""
        return fold_unary(pos, expr, op, self.diagnostics)

    def on_binary_expression(
        self,
        pos: FilePos,
        left_expr: Optional[ExpressionNode],
        op: BinaryOpType,
        right_expr: Optional[ExpressionNode],
    ) -> ExpressionNode:
        """Check an infix operation, folding literals."""
        return fold_binary(pos, left_expr, op, right_expr, self.diagnostics)

    def _resolve(
        self, ident: IdentNode, selectors: Sequence[SelectorNode]
    ) -> tuple[Optional[DeclarationNode], Optional[TypeNode], bool]:
        decl: Optional[DeclarationNode] = None
        type_node: Optional[TypeNode] = None
        try:
            type_node = self.symbol_table.lookup_type(ident, selectors)
            decl = self.symbol_table.lookup(ident)
        except SymbolLookupError as error:
            self.diagnostics.error(error.node.pos, str(error))
            return decl, type_node, False
        return decl, type_node, True

    def on_ident_expression(
        self,
        pos: FilePos,
        ident: IdentNode,
        selectors: Sequence[SelectorNode],
    ) -> ExpressionNode:
        """Resolve a name used as a value; constants become their literals."""
        decl, type_node, found = self._resolve(ident, selectors)
        if not found:
            return IdentExpressionNode(pos, ident, selectors, decl, type_node, False)
        if decl is None:
            raise self._fail(pos, "Undeclared identifier.")

        if decl.node_type is NodeType.const_declaration:
            literal = decl.expression
            if isinstance(literal, BooleanExpressionNode):
                return BooleanExpressionNode(literal.pos, literal.value)
            if isinstance(literal, NumberExpressionNode):
                return NumberExpressionNode(literal.pos, literal.value)
            raise self._fail(pos, "Constant of invalid node type.")
        if decl.node_type in _VARIABLE_KINDS:
            return IdentExpressionNode(pos, ident, selectors, decl, type_node, False)
        raise self._fail(pos, "Identifier is not a constant or variable.")

    def on_ident_expression_reference(
        self,
        pos: FilePos,
        ident: IdentNode,
        selectors: Sequence[SelectorNode],
    ) -> IdentExpressionNode:
        """Resolve a name used as a variable that may be written to."""
        decl, type_node, found = self._resolve(ident, selectors)
        if not found:
            return IdentExpressionNode(pos, ident, selectors, decl, type_node, True)
        if decl is None:
            raise self._fail(pos, "Undeclared identifier.")
        if decl.node_type in _VARIABLE_KINDS:
            return IdentExpressionNode(pos, ident, selectors, decl, type_node, True)
        raise self._fail(
            pos,
            "Identifier is not a variable or parameter. Cannot pass by reference.",
        )

    # statements

    def on_assign(
        self,
        pos: FilePos,
        ident: IdentNode,
        selectors: Sequence[SelectorNode],
        expr: Optional[ExpressionNode],
    ) -> AssignmentNode:
        """Check an assignment; type mismatches are reported, not raised."""
        lhs_type: Optional[TypeNode] = None
        decl: Optional[DeclarationNode] = None
        try:
            lhs_type = self.symbol_table.lookup_type(ident, selectors)
            found = self.symbol_table.lookup(ident)
            if found is not None:
                if found.node_type not in _VARIABLE_KINDS:
                    raise WrongNodeTypeError(
                        ident, "VarDeclarationNode / ParamDeclarationNode"
                    )
                decl = found
        except SymbolLookupError as error:
            self.diagnostics.error(error.node.pos, str(error))
            ident_expr = IdentExpressionNode(
                pos, ident, selectors, decl, lhs_type, True
            )
            return AssignmentNode(pos, ident_expr, expr)

        ident_expr = IdentExpressionNode(pos, ident, selectors, decl, lhs_type, True)
        if ident_expr.type is None:
            self.diagnostics.error(pos, f"'{ident_expr}' has no associated type")
        elif expr is None or expr.type is None:
            self.diagnostics.error(pos, f"'{expr}' has no associated type")
        elif ident_expr.type is not expr.type:
            self.diagnostics.error(
                pos,
                f"Can not assign '{expr}: {expr.type}' to "
                f"'{ident_expr}: {ident_expr.type}'",
            )
        return AssignmentNode(pos, ident_expr, expr)

    def on_array_index(self, pos: FilePos, expr: ExpressionNode) -> ArrayIndexNode:
        """Check an array index; problems are reported, not raised."""
        if expr.type is not ASTContext.INTEGER:
            self.diagnostics.error(pos, "Array index is not an INTEGER")
        if isinstance(expr, NumberExpressionNode) and expr.value < 0:
            self.diagnostics.error(pos, "Array index cannot be negative")
        return ArrayIndexNode(pos, expr)

    # utilities

    def expect_unique(
        self,
        ident: IdentNode,
        value: DeclarationNode,
        this_scope: bool = False,
    ) -> None:
        """Bind ``ident`` to ``value``; raise if the name is already visible."""
        decl = self.symbol_table.lookup(ident, this_scope)
        if decl is not None:
            self.diagnostics.error(
                ident.pos,
                f"Identifier already declared here: {decl.pos}:{decl.ident}",
            )
            raise DuplicateFieldError(ident)
        self.symbol_table.insert(ident, value)

    def expect_unique_within_scope(
        self, ident: IdentNode, value: DeclarationNode
    ) -> None:
        """Bind ``ident`` to ``value``; raise if the innermost scope has the name."""
        self.expect_unique(ident, value, True)