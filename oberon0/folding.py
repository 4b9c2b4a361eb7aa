"""Type checks and constant folding of unary and binary expressions."""

from __future__ import annotations

import operator
from typing import Callable, Optional

from oberon0.context import ASTContext
from oberon0.diagnostics import Diagnostics, SemanticError
from oberon0.expressions import (
    BinaryExpressionNode,
    BinaryOpType,
    BooleanExpressionNode,
    ExpressionNode,
    NumberExpressionNode,
    UnaryExpressionNode,
    UnaryOpType,
)
from oberon0.node import FilePos, NodeType

_LOGICAL_OPS = frozenset({BinaryOpType.b_and, BinaryOpType.b_or})

_ARITHMETIC_OPS = frozenset(
    {
        BinaryOpType.plus,
        BinaryOpType.minus,
        BinaryOpType.times,
        BinaryOpType.div,
        BinaryOpType.divide,
        BinaryOpType.mod,
    }
)

_RELATIONS: dict[BinaryOpType, Callable[[object, object], bool]] = {
    BinaryOpType.eq: operator.eq,
    BinaryOpType.neq: operator.ne,
    BinaryOpType.lt: operator.lt,
    BinaryOpType.leq: operator.le,
    BinaryOpType.gt: operator.gt,
    BinaryOpType.geq: operator.ge,
}


def _expect_type(
    expr: ExpressionNode, expected: object, diagnostics: Diagnostics
) -> bool:
    if expr.type is expected:
        return True
    diagnostics.error(expr.pos, f"Expression should be of type {expected}.")
    return False


def expect_number(expr: ExpressionNode, diagnostics: Diagnostics) -> bool:
    """Report an error unless ``expr`` is an INTEGER; return whether it is."""
    return _expect_type(expr, ASTContext.INTEGER, diagnostics)


def expect_bool(expr: ExpressionNode, diagnostics: Diagnostics) -> bool:
    """Report an error unless ``expr`` is a BOOLEAN; return whether it is."""
    return _expect_type(expr, ASTContext.BOOLEAN, diagnostics)


def _is_number(expr: ExpressionNode) -> bool:
    return expr.node_type is NodeType.number


def _is_boolean(expr: ExpressionNode) -> bool:
    return expr.node_type is NodeType.boolean


def fold_unary(
    pos: FilePos,
    expr: Optional[ExpressionNode],
    op: UnaryOpType,
    diagnostics: Diagnostics,
) -> ExpressionNode:
    """Check a prefix operation and fold it when its operand is a literal."""
    if expr is None:
        diagnostics.error(pos, "Undefined expression.")
        raise SemanticError("Undefined expression.")

    if op is UnaryOpType.u_not:
        expect_bool(expr, diagnostics)
        if _is_boolean(expr):
            return BooleanExpressionNode(pos, not expr.value)
        type_node = ASTContext.BOOLEAN
    elif op in (UnaryOpType.plus, UnaryOpType.minus):
        expect_number(expr, diagnostics)
        if _is_number(expr):
            value = -expr.value if op is UnaryOpType.minus else expr.value
            return NumberExpressionNode(pos, value)
        type_node = ASTContext.INTEGER
    else:
        diagnostics.error(expr.pos, "Unknown operation")
        raise SemanticError("Unknown operation", expr)

    return UnaryExpressionNode(pos, op, expr, type_node)


def _fold_arithmetic(
    pos: FilePos, left: int, op: BinaryOpType, right: int, diagnostics: Diagnostics
) -> int:
    if op is BinaryOpType.plus:
        return left + right
    if op is BinaryOpType.minus:
        return left - right
    if op is BinaryOpType.times:
        return left * right
    if right == 0:
        diagnostics.error(pos, "Division by zero.")
        raise SemanticError("Division by zero.")
    if op in (BinaryOpType.div, BinaryOpType.divide):
        quotient = abs(left) // abs(right)
        return quotient if (left < 0) == (right < 0) else -quotient
    # MOD: left - right * floor(left / right), made non-negative
    value = left % right
    if value < 0:
        value -= right
    return value


def fold_binary(
    pos: FilePos,
    left_expr: Optional[ExpressionNode],
    op: BinaryOpType,
    right_expr: Optional[ExpressionNode],
    diagnostics: Diagnostics,
) -> ExpressionNode:
    """Check an infix operation and fold it when both operands are literals."""
    if left_expr is None or right_expr is None:
        diagnostics.error(pos, "Undefined expression.")
        raise SemanticError("Undefined expression.")

    if left_expr.type is not right_expr.type:
        diagnostics.error(right_expr.pos, "Expression types do not match.")
        raise SemanticError("Expression types do not match.", right_expr)

    if op in _LOGICAL_OPS:
        expect_bool(left_expr, diagnostics)
        expect_bool(right_expr, diagnostics)
        if _is_boolean(left_expr) and _is_boolean(right_expr):
            if op is BinaryOpType.b_and:
                value = left_expr.value and right_expr.value
            else:
                value = left_expr.value or right_expr.value
            return BooleanExpressionNode(pos, value)
        type_node = ASTContext.BOOLEAN
    elif op in _ARITHMETIC_OPS:
        expect_number(left_expr, diagnostics)
        expect_number(right_expr, diagnostics)
        if _is_number(left_expr) and _is_number(right_expr):
            value = _fold_arithmetic(
                pos, left_expr.value, op, right_expr.value, diagnostics
            )
            return NumberExpressionNode(pos, value)
        type_node = ASTContext.INTEGER
    elif op in _RELATIONS:
        compare = _RELATIONS[op]
        if (_is_number(left_expr) and _is_number(right_expr)) or (
            _is_boolean(left_expr) and _is_boolean(right_expr)
        ):
            return BooleanExpressionNode(
                pos, compare(left_expr.value, right_expr.value)
            )
        type_node = ASTContext.BOOLEAN
    else:
        diagnostics.error(pos, "INTERNAL ERROR")
        raise SemanticError("INTERNAL ERROR")

    return BinaryExpressionNode(pos, left_expr, op, right_expr, type_node)