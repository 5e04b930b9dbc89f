"""Canonical text rendering of documents."""

from __future__ import annotations

import re
from typing import Iterator

from llmfmt.ast import Document, Mapping, Node, Scalar, Sequence

_BARE_SCALAR = re.compile(r"[A-Za-z0-9_-]+")
_QUOTE_ESCAPES = str.maketrans(
    {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}
)


def format_document(document: Document) -> str:
    """Render ``document`` in canonical key order with two-space indentation."""
    return "\n".join(
        line
        for key, value in document.ordered_entries()
        for line in _render_entry(0, key.value, value)
    )


def format_scalar(value: str) -> str:
    """Return ``value`` bare if it is a simple word, otherwise double-quoted."""
    if _BARE_SCALAR.fullmatch(value):
        return value
    return '"' + value.translate(_QUOTE_ESCAPES) + '"'


def _render_entry(indent: int, key: str, value: Node) -> Iterator[str]:
    prefix = " " * indent
    if isinstance(value, Scalar):
        yield f"{prefix}{key}: {format_scalar(value.value)}"
        return
    yield f"{prefix}{key}:"
    yield from _render_children(indent + 2, value)


def _render_item(indent: int, value: Node) -> Iterator[str]:
    prefix = " " * indent
    if isinstance(value, Scalar):
        yield f"{prefix}- {format_scalar(value.value)}"
        return
    yield f"{prefix}-"
    yield from _render_children(indent + 2, value)


def _render_children(indent: int, node: Node) -> Iterator[str]:
    if isinstance(node, Mapping):
        for entry in node.entries:
            yield from _render_entry(indent, entry.key, entry.value)
    elif isinstance(node, Sequence):
        for item in node.values:
            yield from _render_item(indent, item)