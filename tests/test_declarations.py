import io

from oberon0.context import ASTContext
from oberon0.declarations import (
    ConstDeclarationNode,
    DeclarationSequence,
    ModuleNode,
    ParamDeclarationNode,
    ProcedureDeclarationNode,
    TypeDeclarationNode,
    VarDeclarationNode,
)
from oberon0.expressions import IdentExpressionNode, NumberExpressionNode
from oberon0.node import EMPTY_POS, IdentNode, NodeType, NodeVisitor
from oberon0.statements import AssignmentNode, StatementSequenceNode
from oberon0.types import ArrayTypeNode, ProcedureTypeNode


def ident(name):
    return IdentNode(EMPTY_POS, name)


def assignment(name, value):
    decl = VarDeclarationNode(EMPTY_POS, ident(name), ASTContext.INTEGER)
    target = IdentExpressionNode(
        EMPTY_POS, ident(name), [], decl, ASTContext.INTEGER, True
    )
    return AssignmentNode(EMPTY_POS, target, NumberExpressionNode(EMPTY_POS, value))


def test_const_declaration_print():
    node = ConstDeclarationNode(
        EMPTY_POS, ident("c"), NumberExpressionNode(EMPTY_POS, 5), ASTContext.INTEGER
    )
    assert str(node) == "CONST c = 5"
    assert node.node_type is NodeType.const_declaration
    assert node.type is ASTContext.INTEGER


def test_var_declaration_print():
    node = VarDeclarationNode(EMPTY_POS, ident("x"), ASTContext.INTEGER)
    assert str(node) == "VAR x : INTEGER"
    assert node.node_type is NodeType.var_declaration


def test_type_declaration_print():
    array = ArrayTypeNode(
        EMPTY_POS, NumberExpressionNode(EMPTY_POS, 10), ASTContext.INTEGER
    )
    node = TypeDeclarationNode(EMPTY_POS, ident("T"), array)
    assert str(node) == "TYPE T : ARRAY 10 OF INTEGER"
    assert node.type is array


def test_param_declaration_print_by_value_and_reference():
    by_value = ParamDeclarationNode(EMPTY_POS, ident("p"), False, ASTContext.BOOLEAN)
    by_ref = ParamDeclarationNode(EMPTY_POS, ident("p"), True, ASTContext.BOOLEAN)
    assert str(by_value) == "p : BOOLEAN"
    assert str(by_ref) == "VAR p : BOOLEAN"
    assert by_ref.by_reference is True


def test_declaration_sequence_keeps_order():
    seq = DeclarationSequence()
    first = VarDeclarationNode(EMPTY_POS, ident("a"), ASTContext.INTEGER)
    second = VarDeclarationNode(EMPTY_POS, ident("b"), ASTContext.INTEGER)
    seq.add_var(first)
    seq.add_var(second)
    assert seq.vars == [first, second]
    assert seq.consts == [] and seq.types == [] and seq.procs == []


def test_declaration_sequence_separate_lists():
    seq = DeclarationSequence()
    const = ConstDeclarationNode(
        EMPTY_POS, ident("c"), NumberExpressionNode(EMPTY_POS, 1), ASTContext.INTEGER
    )
    type_decl = TypeDeclarationNode(EMPTY_POS, ident("T"), ASTContext.INTEGER)
    proc = ProcedureDeclarationNode(
        EMPTY_POS, ident("P"), ProcedureTypeNode(EMPTY_POS)
    )
    seq.add_const(const)
    seq.add_type(type_decl)
    seq.add_procedure(proc)
    assert seq.consts == [const]
    assert seq.types == [type_decl]
    assert seq.procs == [proc]
    assert seq.vars == []


def test_procedure_declaration_print_without_statements():
    proc = ProcedureDeclarationNode(
        EMPTY_POS, ident("P"), ProcedureTypeNode(EMPTY_POS)
    )
    assert str(proc) == "PROCEDURE P\nEND P"
    assert proc.statements is None
    assert proc.node_type is NodeType.procedure_declaration


def test_procedure_declaration_print_with_statements():
    proc = ProcedureDeclarationNode(
        EMPTY_POS, ident("P"), ProcedureTypeNode(EMPTY_POS)
    )
    proc.statements = StatementSequenceNode(
        EMPTY_POS, [assignment("x", 1), assignment("y", 2)]
    )
    assert str(proc) == "PROCEDURE P\nx = 1;\ny = 2END P"


def test_procedure_has_its_own_declarations():
    proc = ProcedureDeclarationNode(
        EMPTY_POS, ident("P"), ProcedureTypeNode(EMPTY_POS)
    )
    var = VarDeclarationNode(EMPTY_POS, ident("v"), ASTContext.INTEGER)
    proc.add_var(var)
    other = ProcedureDeclarationNode(
        EMPTY_POS, ident("Q"), ProcedureTypeNode(EMPTY_POS)
    )
    assert proc.vars == [var]
    assert other.vars == []


def test_module_print_without_statements():
    module = ModuleNode(EMPTY_POS, ident("M"))
    assert str(module) == "MODULE M\nEND M;"
    assert module.node_type is NodeType.module


def test_visitor_dispatches_to_declaration_handlers():
    class Collector(NodeVisitor):
        def visit_module_node(self, node):
            return ("module", node.ident.value)

        def visit_declaration_node(self, node):
            return ("decl", node.ident.value)

    visitor = Collector()
    assert ModuleNode(EMPTY_POS, ident("M")).accept(visitor) == ("module", "M")
    var = VarDeclarationNode(EMPTY_POS, ident("v"), ASTContext.INTEGER)
    assert var.accept(visitor) == ("decl", "v")