"""Error reporting: a collecting diagnostics sink and semantic errors."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from oberon0.node import FilePos, Node


class Severity(Enum):
    """How serious a diagnostic is."""

    ERROR = "error"
    WARNING = "warning"
    DEBUG = "debug"


_LOG_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.DEBUG: logging.DEBUG,
}


@dataclass(frozen=True)
class Diagnostic:
    """One reported message."""

    severity: Severity
    pos: Optional[FilePos]
    message: str

    def __str__(self) -> str:
        prefix = f"{self.pos}: " if self.pos is not None else ""
        return f"{prefix}{self.severity.value}: {self.message}"


class Diagnostics:
    """Collects messages reported while compiling and forwards them to a logger."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger("oberon0")
        self.messages: list[Diagnostic] = []

    def _record(self, severity: Severity, pos: Optional[FilePos], message: str) -> None:
        diagnostic = Diagnostic(severity, pos, message)
        self.messages.append(diagnostic)
        self._logger.log(_LOG_LEVELS[severity], "%s", diagnostic)

    def error(self, pos: FilePos, message: str) -> None:
        """Report an error at ``pos``."""
        self._record(Severity.ERROR, pos, message)

    def warning(self, pos: FilePos, message: str) -> None:
        """Report a warning at ``pos``."""
        self._record(Severity.WARNING, pos, message)

    def debug(self, message: str) -> None:
        """Report an internal message without a position."""
        self._record(Severity.DEBUG, None, message)

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.messages if d.severity is Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.messages if d.severity is Severity.WARNING)

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.messages)

    def __len__(self) -> int:
        return len(self.messages)


class SemanticError(Exception):
    """Base of all errors found while checking a program."""

    def __init__(self, message: str, node: Optional[Node] = None) -> None:
        super().__init__(message)
        self.message = message
        self.node = node

    def __str__(self) -> str:
        return self.message


class SymbolLookupError(SemanticError):
    """A name or selector could not be resolved."""

    def __init__(self, node: Node, message: Optional[str] = None) -> None:
        if message is None:
            message = f"{node} could not be found in symbol table"
        super().__init__(message, node)


class WrongTypeError(SymbolLookupError):
    """A selector was applied to a value of the wrong kind of type."""

    def __init__(self, node: Node, required_type: str) -> None:
        super().__init__(node, f"{node} is not a {required_type} type")
        self.required_type = required_type


class NotDeclaredError(SymbolLookupError):
    """An identifier is not declared in any visible scope."""

    def __init__(self, node: Node) -> None:
        super().__init__(node)


class OutOfRangeError(SymbolLookupError):
    """A literal array index lies outside the array."""

    def __init__(self, node: Node) -> None:
        super().__init__(node, "Index is out of bounds")


class WrongNodeTypeError(SymbolLookupError):
    """An identifier names a declaration of the wrong kind."""

    def __init__(self, node: Node, required_type: str) -> None:
        super().__init__(node, f"{node} is not a {required_type} node type")
        self.required_type = required_type


class NonConstError(SemanticError):
    """A constant was required but the value is not constant."""

    def __init__(self, node: Node, message: Optional[str] = None) -> None:
        if message is None:
            message = f"Non-constant value in const declaration:{node}"
        super().__init__(message, node)


class NegativeIntegerError(SemanticError):
    """A non-negative integer was required."""

    def __init__(self, node: Node, message: Optional[str] = None) -> None:
        if message is None:
            message = f"Non-constant value in const declaration:{node}"
        super().__init__(message, node)


class UndeclaredArgumentError(SemanticError):
    """A declaration refers to a value that is not defined."""

    def __init__(self, name: str, message: Optional[str] = None) -> None:
        if message is None:
            message = f"Undeclared argument: {name}"
        super().__init__(message)
        self.name = name


class DuplicateFieldError(SemanticError):
    """An identifier is declared twice."""

    def __init__(self, node: Node, message: Optional[str] = None) -> None:
        if message is None:
            message = f"Duplicate field: {node}"
        super().__init__(message, node)


class FieldNotFoundError(SemanticError):
    """A record has no field of the requested name."""

    def __init__(self, ident: Node) -> None:
        super().__init__(f"Record does not have a field '{ident}'", ident)
        self.field = ident