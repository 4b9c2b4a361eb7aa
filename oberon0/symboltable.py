"""Nested scopes mapping names to their declarations."""

from __future__ import annotations

from typing import Optional, Sequence

from oberon0.context import ASTContext
from oberon0.declarations import DeclarationNode
from oberon0.diagnostics import (
    Diagnostics,
    NotDeclaredError,
    OutOfRangeError,
    WrongTypeError,
)
from oberon0.expressions import ArrayIndexNode, RecordFieldNode, SelectorNode
from oberon0.node import IdentNode, Node
from oberon0.types import ArrayTypeNode, RecordTypeNode, TypeNode


class SymbolTable:
    """A stack of scopes; the outermost one holds the standard procedures."""

    def __init__(self, diagnostics: Optional[Diagnostics] = None) -> None:
        self.diagnostics = diagnostics or Diagnostics()
        self._scopes: list[dict[str, DeclarationNode]] = []
        self.begin_scope()
        self.insert(ASTContext.WRITE_INT.ident, ASTContext.WRITE_INT)
        self.insert(ASTContext.WRITE_LN.ident, ASTContext.WRITE_LN)

    def begin_scope(self) -> None:
        """Open a new innermost scope."""
        self._scopes.append({})

    def end_scope(self) -> None:
        """Close the innermost scope, forgetting its names."""
        self._scopes.pop()

    def insert(self, ident: IdentNode, node: DeclarationNode) -> None:
        """Bind ``ident`` in the innermost scope unless it is already bound there."""
        self._scopes[-1].setdefault(ident.value, node)

    def lookup(
        self, ident: IdentNode, this_scope: bool = False
    ) -> Optional[DeclarationNode]:
        """Find the declaration of ``ident``, innermost scope first.

        With ``this_scope`` only the innermost scope is searched.
        """
        scopes = self._scopes[-1:] if this_scope else reversed(self._scopes)
        for scope in scopes:
            if ident.value in scope:
                return scope[ident.value]
        return None

    def lookup_type(
        self, ident: IdentNode, selectors: Sequence[SelectorNode]
    ) -> Optional[TypeNode]:
        """Return the type of ``ident`` after applying ``selectors`` in turn."""
        decl = self.lookup(ident)
        if decl is None:
            raise NotDeclaredError(ident)

        type_node = decl.type
        previous: Node = ident
        for selector in selectors:
            if isinstance(selector, ArrayIndexNode):
                if not isinstance(type_node, ArrayTypeNode):
                    raise WrongTypeError(previous, "ARRAY")
                if type_node.is_in_bounds(selector.expression) is False:
                    raise OutOfRangeError(selector)
                type_node = type_node.type
            elif isinstance(selector, RecordFieldNode):
                if not isinstance(type_node, RecordTypeNode):
                    raise WrongTypeError(previous, "RECORD")
                type_node = type_node.find_field(selector.ident).type
            else:
                raise TypeError(
                    f"unhandled selector node: {type(selector).__name__}"
                )
            previous = selector
        return type_node