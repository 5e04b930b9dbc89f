"""Diagnostics produced while lexing, parsing, validating and composing documents."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator, Optional


class Severity(enum.Enum):
    """How serious a diagnostic is."""

    ERROR = "error"
    WARNING = "warning"


class DiagnosticPhase(enum.Enum):
    """The compiler phase that produced a diagnostic."""

    SYNTAX = "syntax"
    SEMANTIC = "semantic"


@dataclass(frozen=True)
class Span:
    """A 1-based line and column position in a source document."""

    line: int
    column: int


@dataclass(frozen=True)
class Diagnostic:
    """A single error or warning, optionally located and coded."""

    phase: DiagnosticPhase
    severity: Severity
    message: str
    span: Optional[Span] = None
    code: Optional[str] = None

    @classmethod
    def syntax_error(cls, message: str, span: Optional[Span] = None) -> "Diagnostic":
        return cls(DiagnosticPhase.SYNTAX, Severity.ERROR, message, span)

    @classmethod
    def semantic_error(cls, message: str, span: Optional[Span] = None) -> "Diagnostic":
        return cls(DiagnosticPhase.SEMANTIC, Severity.ERROR, message, span)

    @classmethod
    def syntax_warning(cls, message: str, span: Optional[Span] = None) -> "Diagnostic":
        return cls(DiagnosticPhase.SYNTAX, Severity.WARNING, message, span)

    @classmethod
    def semantic_warning(cls, message: str, span: Optional[Span] = None) -> "Diagnostic":
        return cls(DiagnosticPhase.SEMANTIC, Severity.WARNING, message, span)

    def with_code(self, code: str) -> "Diagnostic":
        """Return a copy of this diagnostic carrying ``code``."""
        return replace(self, code=code)

    @property
    def label(self) -> str:
        return f"{self.phase.value} {self.severity.value}"

    def __str__(self) -> str:
        location = f" at {self.span.line}:{self.span.column}" if self.span else ""
        code = f"[{self.code}] " if self.code else ""
        return f"{self.label}{location}: {code}{self.message}"


@dataclass
class DiagnosticBag:
    """An ordered collection of diagnostics."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def push(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def syntax_error(self, message: str, span: Optional[Span] = None) -> None:
        self.push(Diagnostic.syntax_error(message, span))

    def semantic_error(self, message: str, span: Optional[Span] = None) -> None:
        self.push(Diagnostic.semantic_error(message, span))

    def syntax_warning(self, message: str, span: Optional[Span] = None) -> None:
        self.push(Diagnostic.syntax_warning(message, span))

    def semantic_warning(self, message: str, span: Optional[Span] = None) -> None:
        self.push(Diagnostic.semantic_warning(message, span))

    def extend(self, other: Iterable[Diagnostic]) -> None:
        """Append every diagnostic of ``other`` (a bag or any iterable)."""
        self.diagnostics.extend(other)

    def has_errors(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.diagnostics)

    def is_empty(self) -> bool:
        return not self.diagnostics

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)

    def __len__(self) -> int:
        return len(self.diagnostics)

    def __str__(self) -> str:
        return "\n".join(str(d) for d in self.diagnostics)


class DiagnosticError(Exception):
    """Raised when an operation fails with one or more diagnostics."""

    def __init__(self, diagnostics: DiagnosticBag) -> None:
        super().__init__(str(diagnostics))
        self.diagnostics = diagnostics

    def __str__(self) -> str:
        return str(self.diagnostics)