import pytest

from oberon0.context import ASTContext
from oberon0.declarations import VarDeclarationNode
from oberon0.diagnostics import (
    FieldNotFoundError,
    NotDeclaredError,
    OutOfRangeError,
    SymbolLookupError,
    WrongTypeError,
)
from oberon0.expressions import (
    ArrayIndexNode,
    IdentExpressionNode,
    NumberExpressionNode,
    RecordFieldNode,
)
from oberon0.node import EMPTY_POS, IdentNode
from oberon0.symboltable import SymbolTable
from oberon0.types import ArrayTypeNode, RecordTypeNode


def ident(name):
    return IdentNode(EMPTY_POS, name)


def var(name, type_node):
    return VarDeclarationNode(EMPTY_POS, ident(name), type_node)


def array_of(length, elem):
    return ArrayTypeNode(EMPTY_POS, NumberExpressionNode(EMPTY_POS, length), elem)


def index(value):
    return ArrayIndexNode(EMPTY_POS, NumberExpressionNode(EMPTY_POS, value))


def field(name):
    return RecordFieldNode(EMPTY_POS, ident(name))


def test_universe_holds_standard_procedures():
    table = SymbolTable()
    assert table.lookup(ident("WriteInt")) is ASTContext.WRITE_INT
    assert table.lookup(ident("WriteLn")) is ASTContext.WRITE_LN


def test_lookup_missing_returns_none():
    table = SymbolTable()
    assert table.lookup(ident("nothing")) is None


def test_insert_and_lookup():
    table = SymbolTable()
    table.begin_scope()
    decl = var("x", ASTContext.INTEGER)
    table.insert(decl.ident, decl)
    assert table.lookup(ident("x")) is decl


def test_insert_keeps_first_binding_in_scope():
    table = SymbolTable()
    table.begin_scope()
    first = var("x", ASTContext.INTEGER)
    second = var("x", ASTContext.BOOLEAN)
    table.insert(first.ident, first)
    table.insert(second.ident, second)
    assert table.lookup(ident("x")) is first


def test_inner_scope_shadows_outer():
    table = SymbolTable()
    table.begin_scope()
    outer = var("x", ASTContext.INTEGER)
    table.insert(outer.ident, outer)
    table.begin_scope()
    inner = var("x", ASTContext.BOOLEAN)
    table.insert(inner.ident, inner)
    assert table.lookup(ident("x")) is inner
    table.end_scope()
    assert table.lookup(ident("x")) is outer


def test_this_scope_only_searches_innermost():
    table = SymbolTable()
    table.begin_scope()
    outer = var("x", ASTContext.INTEGER)
    table.insert(outer.ident, outer)
    table.begin_scope()
    assert table.lookup(ident("x"), True) is None
    assert table.lookup(ident("x")) is outer


def test_end_scope_forgets_names():
    table = SymbolTable()
    table.begin_scope()
    decl = var("y", ASTContext.INTEGER)
    table.insert(decl.ident, decl)
    table.end_scope()
    assert table.lookup(ident("y")) is None


def test_lookup_type_plain_variable():
    table = SymbolTable()
    decl = var("x", ASTContext.INTEGER)
    table.insert(decl.ident, decl)
    assert table.lookup_type(ident("x"), []) is ASTContext.INTEGER


def test_lookup_type_undeclared():
    table = SymbolTable()
    with pytest.raises(NotDeclaredError) as info:
        table.lookup_type(ident("ghost"), [])
    assert str(info.value) == "ghost could not be found in symbol table"
    assert isinstance(info.value, SymbolLookupError)


def test_lookup_type_array_element():
    table = SymbolTable()
    decl = var("a", array_of(5, ASTContext.BOOLEAN))
    table.insert(decl.ident, decl)
    assert table.lookup_type(ident("a"), [index(0)]) is ASTContext.BOOLEAN
    assert table.lookup_type(ident("a"), [index(4)]) is ASTContext.BOOLEAN


@pytest.mark.parametrize("value", [5, -1, 100])
def test_lookup_type_array_out_of_range(value):
    table = SymbolTable()
    decl = var("a", array_of(5, ASTContext.INTEGER))
    table.insert(decl.ident, decl)
    selector = index(value)
    with pytest.raises(OutOfRangeError) as info:
        table.lookup_type(ident("a"), [selector])
    assert info.value.node is selector
    assert str(info.value) == "Index is out of bounds"


def test_lookup_type_non_literal_index_is_accepted():
    table = SymbolTable()
    decl = var("a", array_of(2, ASTContext.INTEGER))
    table.insert(decl.ident, decl)
    i_decl = var("i", ASTContext.INTEGER)
    index_expr = IdentExpressionNode(
        EMPTY_POS, ident("i"), [], i_decl, ASTContext.INTEGER, False
    )
    selector = ArrayIndexNode(EMPTY_POS, index_expr)
    assert table.lookup_type(ident("a"), [selector]) is ASTContext.INTEGER


def test_lookup_type_index_on_non_array_names_ident():
    table = SymbolTable()
    decl = var("x", ASTContext.INTEGER)
    table.insert(decl.ident, decl)
    name = ident("x")
    with pytest.raises(WrongTypeError) as info:
        table.lookup_type(name, [index(0)])
    assert info.value.node is name
    assert str(info.value) == "x is not a ARRAY type"


def test_lookup_type_record_field():
    table = SymbolTable()
    record = RecordTypeNode(
        EMPTY_POS, [var("n", ASTContext.INTEGER), var("b", ASTContext.BOOLEAN)]
    )
    decl = var("r", record)
    table.insert(decl.ident, decl)
    assert table.lookup_type(ident("r"), [field("b")]) is ASTContext.BOOLEAN
    assert table.lookup_type(ident("r"), [field("n")]) is ASTContext.INTEGER


def test_lookup_type_missing_field():
    table = SymbolTable()
    record = RecordTypeNode(EMPTY_POS, [var("n", ASTContext.INTEGER)])
    decl = var("r", record)
    table.insert(decl.ident, decl)
    with pytest.raises(FieldNotFoundError) as info:
        table.lookup_type(ident("r"), [field("zz")])
    assert info.value.field.value == "zz"


def test_lookup_type_field_on_non_record_names_previous_selector():
    table = SymbolTable()
    decl = var("a", array_of(3, ASTContext.INTEGER))
    table.insert(decl.ident, decl)
    first = index(1)
    with pytest.raises(WrongTypeError) as info:
        table.lookup_type(ident("a"), [first, field("f")])
    assert info.value.node is first
    assert info.value.required_type == "RECORD"


def test_lookup_type_nested_selectors():
    table = SymbolTable()
    inner = RecordTypeNode(EMPTY_POS, [var("vals", array_of(4, ASTContext.BOOLEAN))])
    decl = var("rs", array_of(2, inner))
    table.insert(decl.ident, decl)
    selectors = [index(1), field("vals"), index(3)]
    assert table.lookup_type(ident("rs"), selectors) is ASTContext.BOOLEAN
    assert table.lookup_type(ident("rs"), selectors[:2]).is_primitive_type() is False