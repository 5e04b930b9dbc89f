"""Resolution of ``include`` paths and detection of circular includes."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional, Union

from llmfmt.ast import Document, Mapping, Scalar, Sequence
from llmfmt.diagnostics import Diagnostic, DiagnosticBag, DiagnosticError, Span

PathLike = Union[str, "os.PathLike[str]"]


def resolve_include_paths(document: Document, source_dir: PathLike) -> list[Path]:
    """Return the include paths of ``document`` joined onto ``source_dir``, in order.

    Empty and absolute paths, and mapping-valued includes, raise DiagnosticError.
    Files are not checked for existence here.
    """
    node = document.include
    if node is None:
        return []

    base = Path(source_dir)
    errors = DiagnosticBag()
    paths: list[Path] = []

    if isinstance(node, Mapping):
        errors.push(
            Diagnostic.semantic_error(
                "include must be a scalar path or a sequence of paths, not a mapping",
                node.span,
            ).with_code("E023")
        )
    else:
        if isinstance(node, Scalar):
            items = [node]
        elif isinstance(node, Sequence):
            items = [item for item in node.values if isinstance(item, Scalar)]
        else:
            items = []
        for item in items:
            try:
                paths.append(_resolve_one(item.value, base, item.span))
            except DiagnosticError as exc:
                errors.extend(exc.diagnostics)

    if errors.has_errors():
        raise DiagnosticError(errors)
    return paths


def _resolve_one(raw: str, source_dir: Path, span: Span) -> Path:
    trimmed = raw.strip()
    if not trimmed:
        raise _single(
            Diagnostic.semantic_error("include path must not be empty", span).with_code("E115")
        )

    path = Path(trimmed)
    if path.is_absolute():
        raise _single(
            Diagnostic.semantic_error(
                "include paths must be relative, not absolute", span
            ).with_code("E115")
        )
    return source_dir / path


def _single(diagnostic: Diagnostic) -> DiagnosticError:
    bag = DiagnosticBag()
    bag.push(diagnostic)
    return DiagnosticError(bag)


def _canonical(path: PathLike) -> Optional[Path]:
    try:
        return Path(path).resolve(strict=True)
    except (OSError, RuntimeError):
        return None


def check_circular(candidate: PathLike, chain: Iterable[PathLike]) -> Optional[Diagnostic]:
    """Return an E116 diagnostic if ``candidate`` is already in the inclusion chain.

    Paths that do not exist on disk never count as circular.
    """
    canonical = _canonical(candidate)
    if canonical is None:
        return None
    if any(_canonical(entry) == canonical for entry in chain):
        return Diagnostic.semantic_error(
            f"circular include detected: `{Path(candidate)}`"
        ).with_code("E116")
    return None