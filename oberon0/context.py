"""The syntax tree context: standard types, standard procedures and owned types."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from oberon0.declarations import (
    ModuleNode,
    ParamDeclarationNode,
    ProcedureDeclarationNode,
)
from oberon0.node import EMPTY_POS, IdentNode
from oberon0.types import ProcedureTypeNode, StdType, StdTypeNode, TypeNode


class StdProc(Enum):
    """Procedures every program can call without declaring them."""

    WRITE_INT = "WriteInt"
    WRITE_LN = "WriteLn"


def _std_type(std_type: StdType) -> StdTypeNode:
    return StdTypeNode(EMPTY_POS, IdentNode(EMPTY_POS, std_type.value), std_type)


_STD_TYPES: Mapping[str, StdTypeNode] = MappingProxyType(
    {std_type.value: _std_type(std_type) for std_type in StdType}
)

_BOOLEAN = _STD_TYPES[StdType.BOOLEAN.value]
_INTEGER = _STD_TYPES[StdType.INTEGER.value]

_STD_PROCS: Mapping[StdProc, ProcedureDeclarationNode] = MappingProxyType(
    {
        StdProc.WRITE_INT: ProcedureDeclarationNode(
            EMPTY_POS,
            IdentNode(EMPTY_POS, StdProc.WRITE_INT.value),
            ProcedureTypeNode(
                EMPTY_POS,
                [
                    ParamDeclarationNode(
                        EMPTY_POS, IdentNode(EMPTY_POS, "val"), False, _INTEGER
                    )
                ],
            ),
        ),
        StdProc.WRITE_LN: ProcedureDeclarationNode(
            EMPTY_POS,
            IdentNode(EMPTY_POS, StdProc.WRITE_LN.value),
            ProcedureTypeNode(EMPTY_POS),
        ),
    }
)


class ASTContext:
    """Owns the compiled module and the anonymous types created while checking it."""

    std_types: Mapping[str, StdTypeNode] = _STD_TYPES
    BOOLEAN: StdTypeNode = _BOOLEAN
    INTEGER: StdTypeNode = _INTEGER

    std_procs: Mapping[StdProc, ProcedureDeclarationNode] = _STD_PROCS
    WRITE_INT: ProcedureDeclarationNode = _STD_PROCS[StdProc.WRITE_INT]
    WRITE_LN: ProcedureDeclarationNode = _STD_PROCS[StdProc.WRITE_LN]

    def __init__(self) -> None:
        self.types: list[TypeNode] = []
        self.module: Optional[ModuleNode] = None

    def add_type(self, type_node: TypeNode) -> TypeNode:
        """Keep ``type_node`` in this context and return it."""
        if not isinstance(type_node, TypeNode):
            raise TypeError(f"not a type node: {type(type_node).__name__}")
        self.types.append(type_node)
        return type_node