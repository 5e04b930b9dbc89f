"""Line-oriented tokenizer for the indentation-based document syntax."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from llmfmt.diagnostics import Diagnostic, DiagnosticBag, DiagnosticError, Span

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*")
_ASCII_WHITESPACE = re.compile(r"[ \t\n\r\f]*")
_ESCAPES = {"\\": "\\", '"': '"', "'": "'", "n": "\n", "r": "\r", "t": "\t"}


@dataclass(frozen=True)
class IdentifierToken:
    value: str
    span: Span


@dataclass(frozen=True)
class ScalarToken:
    value: str
    span: Span


@dataclass(frozen=True)
class MappingLine:
    """A ``key:`` line, with an optional inline scalar value."""

    key: IdentifierToken
    colon: Span
    value: Optional[ScalarToken] = None


@dataclass(frozen=True)
class ListItemLine:
    """A ``-`` line, with an optional inline scalar value."""

    dash: Span
    value: Optional[ScalarToken] = None


LineKind = Union[MappingLine, ListItemLine]


@dataclass(frozen=True)
class LineToken:
    """One meaningful source line together with its indentation."""

    indent: int
    kind: LineKind

    def span(self) -> Span:
        if isinstance(self.kind, MappingLine):
            return self.kind.key.span
        return self.kind.dash


def tokenize_lines(source: str) -> list[LineToken]:
    """Split ``source`` into line tokens; raise DiagnosticError on syntax errors."""
    diagnostics = DiagnosticBag()
    tokens: list[LineToken] = []

    for line_number, raw_line in enumerate(_source_lines(source), start=1):
        trimmed = raw_line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue

        if "\t" in raw_line:
            diagnostics.push(
                Diagnostic.syntax_error(
                    "tabs are not supported; use two-space indentation",
                    Span(line_number, 1),
                ).with_code("E001")
            )
            continue

        indent = len(raw_line) - len(raw_line.lstrip(" "))
        if indent % 2:
            diagnostics.push(
                Diagnostic.syntax_error(
                    "indentation must use multiples of two spaces",
                    Span(line_number, 1),
                ).with_code("E002")
            )
            continue

        content = raw_line[indent:].rstrip()
        try:
            kind = _tokenize_content(content, line_number, indent + 1)
        except DiagnosticError as exc:
            diagnostics.extend(exc.diagnostics)
            continue
        tokens.append(LineToken(indent, kind))

    if diagnostics.has_errors():
        raise DiagnosticError(diagnostics)
    return tokens


def _source_lines(source: str) -> Iterator[str]:
    for part in source.split("\n"):
        yield part[:-1] if part.endswith("\r") else part


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _error(message: str, span: Span, code: str) -> DiagnosticError:
    bag = DiagnosticBag()
    bag.push(Diagnostic.syntax_error(message, span).with_code(code))
    return DiagnosticError(bag)


def _tokenize_content(content: str, line: int, column: int) -> LineKind:
    if content.startswith("-"):
        return _tokenize_list_item(content[1:], line, column)
    return _tokenize_mapping(content, line, column)


def _tokenize_list_item(remainder: str, line: int, column: int) -> ListItemLine:
    dash = Span(line, column)

    if remainder and not remainder.startswith(" "):
        raise _error("expected a space after `-` in a list item", dash, "E003")

    value_text = remainder.lstrip()
    value = None
    if value_text:
        offset = _byte_len(remainder) - _byte_len(value_text)
        value = _parse_scalar(value_text, Span(line, column + offset + 1))
    return ListItemLine(dash, value)


def _tokenize_mapping(content: str, line: int, column: int) -> MappingLine:
    if not content:
        raise _error("expected a mapping entry or list item", Span(line, column), "E004")

    match = _IDENTIFIER.match(content)
    if match is None:
        raise _error(
            "expected an identifier at the start of a mapping entry",
            Span(line, column),
            "E005",
        )

    key = match.group()
    key_end = match.end()
    after_key = content[key_end:]
    whitespace_len = _ASCII_WHITESPACE.match(after_key).end()
    after_whitespace = after_key[whitespace_len:]

    if not after_whitespace.startswith(":"):
        raise _error("expected `:` after mapping key", Span(line, column + key_end), "E006")

    after_colon = after_whitespace[1:]
    colon_column = column + key_end + whitespace_len
    value_text = after_colon.lstrip()
    value = None
    if value_text:
        offset = _byte_len(after_colon) - _byte_len(value_text)
        value = _parse_scalar(value_text, Span(line, colon_column + 1 + offset))

    return MappingLine(
        key=IdentifierToken(key, Span(line, column)),
        colon=Span(line, colon_column),
        value=value,
    )


def _parse_scalar(source: str, span: Span) -> ScalarToken:
    if not source:
        raise _error("expected a scalar value", span, "E007")
    if source[0] in "\"'":
        return _parse_quoted_scalar(source, span)
    return ScalarToken(source, span)


def _char_indices(text: str) -> Iterator[tuple[int, int, str]]:
    """Yield (character position, byte offset, character) for ``text``."""
    offset = 0
    for position, ch in enumerate(text):
        yield position, offset, ch
        offset += _byte_len(ch)


def _parse_quoted_scalar(source: str, span: Span) -> ScalarToken:
    quote = source[0]
    chars = _char_indices(source)
    next(chars)
    value: list[str] = []

    for position, offset, ch in chars:
        if ch == quote:
            if source[position + 1 :].strip():
                raise _error(
                    "unexpected trailing characters after quoted scalar",
                    Span(span.line, span.column + offset + _byte_len(ch)),
                    "E008",
                )
            return ScalarToken("".join(value), span)

        if ch == "\\":
            escape = next(chars, None)
            if escape is None:
                raise _error(
                    "unterminated escape sequence in quoted scalar",
                    Span(span.line, span.column + offset),
                    "E009",
                )
            _, escape_offset, escaped = escape
            if escaped not in _ESCAPES:
                raise _error(
                    f"unsupported escape sequence `\\{escaped}`",
                    Span(span.line, span.column + escape_offset),
                    "E010",
                )
            value.append(_ESCAPES[escaped])
            continue

        value.append(ch)

    raise _error("unterminated quoted scalar", span, "E011")