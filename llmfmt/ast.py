"""Syntax tree of a parsed document."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, fields
from typing import ClassVar, Optional, Union

from llmfmt.diagnostics import Span

_NO_SPAN = Span(0, 0)


class TopLevelKey(enum.Enum):
    """The keys allowed at the top level of a document, in canonical order."""

    AGENT = "agent"
    SYSTEM = "system"
    USER = "user"
    MEMORY = "memory"
    TOOLS = "tools"
    OUTPUT = "output"
    CONSTRAINTS = "constraints"
    VARS = "vars"

    @classmethod
    def from_keyword(cls, value: str) -> Optional["TopLevelKey"]:
        """Return the key spelled ``value``, or None if it is not a top-level key."""
        try:
            return cls(value)
        except ValueError:
            return None

    @classmethod
    def ordered(cls) -> list["TopLevelKey"]:
        return list(cls)

    def __str__(self) -> str:
        return self.value


class Node:
    """Base class of scalar, sequence and mapping nodes."""

    _kind: ClassVar[str] = "node"
    span: Span

    def kind_name(self) -> str:
        return self._kind


@dataclass
class Scalar(Node):
    value: str
    span: Span = field(default=_NO_SPAN, compare=False)

    _kind: ClassVar[str] = "scalar"


@dataclass
class Sequence(Node):
    values: list[Node] = field(default_factory=list)
    span: Span = field(default=_NO_SPAN, compare=False)

    _kind: ClassVar[str] = "sequence"


@dataclass
class MappingEntry:
    key: str
    value: Node
    span: Span = field(default=_NO_SPAN, compare=False)


@dataclass
class Mapping(Node):
    entries: list[MappingEntry] = field(default_factory=list)
    span: Span = field(default=_NO_SPAN, compare=False)

    _kind: ClassVar[str] = "mapping"

    def get(self, key: str) -> Optional[Node]:
        """Return the value of the first entry named ``key``, if any."""
        return next((entry.value for entry in self.entries if entry.key == key), None)


AnyNode = Union[Scalar, Sequence, Mapping]


@dataclass
class Document:
    """A parsed document; ``include`` is a composition directive, not output."""

    include: Optional[Node] = None
    agent: Optional[Node] = None
    system: Optional[Node] = None
    user: Optional[Node] = None
    memory: Optional[Node] = None
    tools: Optional[Node] = None
    output: Optional[Node] = None
    constraints: Optional[Node] = None
    vars: Optional[Node] = None

    def set(self, key: TopLevelKey, value: Node) -> Optional[Node]:
        """Store ``value`` under ``key`` and return the value it replaced."""
        previous = getattr(self, key.value)
        setattr(self, key.value, value)
        return previous

    def get(self, key: TopLevelKey) -> Optional[Node]:
        return getattr(self, key.value)

    def ordered_entries(self) -> list[tuple[TopLevelKey, Node]]:
        """Present top-level entries in canonical key order."""
        return [
            (key, value)
            for key in TopLevelKey.ordered()
            if (value := self.get(key)) is not None
        ]


assert {f.name for f in fields(Document)} >= {k.value for k in TopLevelKey}