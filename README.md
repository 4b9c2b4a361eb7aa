# oberon0

The front half of a compiler for Oberon-0, the small teaching language
derived from Oberon: a syntax tree, a scoped symbol table, constant folding
and a semantic checker that builds checked tree nodes.

## Modules

- `oberon0.node`: `FilePos` (file name, line, column), the `NodeType`
  enumeration, the abstract `Node` base class, `IdentNode` and
  `NodeVisitor`.
- `oberon0.types`: type nodes `StdTypeNode`, `IdentTypeNode`,
  `ArrayTypeNode` (with `is_in_bounds`), `RecordTypeNode` (with
  `find_field` and `find_field_index`), `ProcedureTypeNode`, `FieldNode`,
  the `StdType` enumeration and `FieldNotFoundError`.
- `oberon0.expressions`: `UnaryOpType`, `BinaryOpType`, selectors
  (`ArrayIndexNode`, `RecordFieldNode`) and expression nodes
  (`NumberExpressionNode`, `BooleanExpressionNode`, `IdentExpressionNode`,
  `UnaryExpressionNode`, `BinaryExpressionNode`). Number literals are kept
  as 32-bit signed integers.
- `oberon0.statements`: `AssignmentNode`, `IfStatementNode`,
  `ElsIfStatementNode`, `WhileStatementNode`, `RepeatStatementNode`,
  `ProcedureCallNode` and `StatementSequenceNode`.
- `oberon0.declarations`: `ConstDeclarationNode`, `TypeDeclarationNode`,
  `VarDeclarationNode`, `ParamDeclarationNode`,
  `ProcedureDeclarationNode`, `ModuleNode` and `DeclarationSequence`
  (the `consts`, `types`, `vars` and `procs` lists of a block).
- `oberon0.context`: `ASTContext`, which holds the standard types
  `ASTContext.INTEGER` and `ASTContext.BOOLEAN`, the built-in procedures
  `ASTContext.WRITE_INT` (`WriteInt(val: INTEGER)`) and
  `ASTContext.WRITE_LN` (`WriteLn()`), the current `module` and the
  anonymous types added with `add_type`; and the `StdProc` enumeration.
- `oberon0.symboltable`: `SymbolTable`, a stack of scopes whose outermost
  scope holds `WriteInt` and `WriteLn`. `lookup(ident, this_scope)` finds
  a declaration, innermost scope first; `lookup_type(ident, selectors)`
  follows array and record selectors to the resulting type.
- `oberon0.folding`: `fold_unary` and `fold_binary` check operand types
  and fold operations on literals; `expect_number` and `expect_bool`
  report a type error without raising.
- `oberon0.checker`: `SemanticChecker`, with one `on_...` callback per
  grammar construct (module start and end, constants, variables, types,
  arrays, records, procedures, procedure calls, expressions, assignments
  and array indices).
- `oberon0.diagnostics`: `Diagnostics`, which collects errors, warnings
  and debug messages and forwards them to the `oberon0` logger, and the
  errors the checker raises, all subclasses of `SemanticError`.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Usage

A parser calls `SemanticChecker` as it recognises each construct. The
checker builds the tree, keeps track of scopes and folds constant
expressions as they arrive:

```python
from oberon0.checker import SemanticChecker
from oberon0.diagnostics import Diagnostics
from oberon0.expressions import BinaryOpType, NumberExpressionNode
from oberon0.node import FilePos, IdentNode

diagnostics = Diagnostics()
checker = SemanticChecker(diagnostics)
pos = FilePos("example.mod", 1, 1)

checker.on_module_start(pos, IdentNode(pos, "Example"))

total = checker.on_binary_expression(
    pos,
    NumberExpressionNode(pos, 2),
    BinaryOpType.plus,
    NumberExpressionNode(pos, 3),
)
const = checker.on_const(pos, IdentNode(pos, "Five"), total)
print(const)  # CONST Five = 5

checker.on_module_end(pos, IdentNode(pos, "Example"))
```

Problems in the source program are reported to the `Diagnostics` object
passed to the checker; `diagnostics.messages`, `error_count`,
`warning_count` and `has_errors` tell what was found. Problems that stop
the check are raised as subclasses of `SemanticError`, such as
`DuplicateFieldError`, `NonConstError`, `NegativeIntegerError` or
`UndeclaredArgumentError`. Lookup failures (`NotDeclaredError`,
`WrongTypeError`, `OutOfRangeError`, `WrongNodeTypeError`) are raised by
`SymbolTable.lookup_type`; the checker reports them as errors and carries
on.

Every node can be printed as Oberon-0-like text with `str(node)` or
`node.print(stream)`. `node.accept(visitor)` calls `visitor.visit(node)`,
which `NodeVisitor` dispatches to a method named after the node's class in
snake case, for example `visit_number_expression_node`; a handler for a
base class also receives its subclasses.

## What this package does not do

There is no scanner or parser: nothing here reads Oberon-0 source text,
and the checker's callbacks must be driven by your own parser. There is no
code generation and no command-line tool, so the package does not produce
object files, assembly or executables.