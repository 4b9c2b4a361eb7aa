"""Syntax tree, symbol table, constant folding and semantic checking for Oberon-0."""

__version__ = "0.0.1"

__all__ = [
    "checker",
    "context",
    "declarations",
    "diagnostics",
    "expressions",
    "folding",
    "node",
    "statements",
    "symboltable",
    "types",
]