import pytest

from llmfmt.diagnostics import (
    Diagnostic,
    DiagnosticBag,
    DiagnosticError,
    DiagnosticPhase,
    Severity,
    Span,
)

UNKNOWN_KEY = "syntax error at 2:1: [E013] unknown top-level key `persona`"
VARS_ERROR = "semantic error at 2:1: [E109] `vars` must be a mapping of scalar values"


def _unknown_key():
    return Diagnostic.syntax_error("unknown top-level key `persona`", Span(2, 1)).with_code(
        "E013"
    )


def _vars_error():
    return Diagnostic.semantic_error(
        "`vars` must be a mapping of scalar values", Span(2, 1)
    ).with_code("E109")


def test_display_syntax_error_with_span_and_code():
    assert str(_unknown_key()) == UNKNOWN_KEY


def test_display_semantic_error_with_span_and_code():
    assert str(_vars_error()) == VARS_ERROR


def test_display_missing_system_key():
    diagnostic = Diagnostic.semantic_error(
        "missing required key: `system`", Span(1, 1)
    ).with_code("E101")
    assert str(diagnostic) == "semantic error at 1:1: [E101] missing required key: `system`"


def test_display_without_span_or_code():
    assert str(Diagnostic.syntax_warning("x")) == "syntax warning: x"


def test_display_code_without_span():
    assert str(Diagnostic.semantic_warning("m").with_code("W1")) == "semantic warning: [W1] m"


def test_display_span_without_code():
    assert str(Diagnostic.syntax_error("msg", Span(3, 4))) == "syntax error at 3:4: msg"


@pytest.mark.parametrize(
    "factory, phase, severity",
    [
        (Diagnostic.syntax_error, DiagnosticPhase.SYNTAX, Severity.ERROR),
        (Diagnostic.semantic_error, DiagnosticPhase.SEMANTIC, Severity.ERROR),
        (Diagnostic.syntax_warning, DiagnosticPhase.SYNTAX, Severity.WARNING),
        (Diagnostic.semantic_warning, DiagnosticPhase.SEMANTIC, Severity.WARNING),
    ],
)
def test_constructors_set_phase_and_severity(factory, phase, severity):
    diagnostic = factory("message", Span(1, 2))
    assert diagnostic.phase is phase
    assert diagnostic.severity is severity
    assert diagnostic.span == Span(1, 2)
    assert diagnostic.code is None


def test_with_code_leaves_original_untouched():
    original = Diagnostic.semantic_error("circular include detected")
    coded = original.with_code("E116")
    assert original.code is None
    assert coded.code == "E116"
    assert coded.message == original.message


def test_empty_bag():
    bag = DiagnosticBag()
    assert bag.is_empty()
    assert not bag.has_errors()
    assert str(bag) == ""


def test_warnings_only_bag_has_no_errors():
    bag = DiagnosticBag()
    bag.syntax_warning("a")
    bag.semantic_warning("b")
    assert not bag.is_empty()
    assert not bag.has_errors()
    assert len(bag) == 2


@pytest.mark.parametrize("method", ["syntax_error", "semantic_error"])
def test_bag_error_helpers_mark_errors(method):
    bag = DiagnosticBag()
    getattr(bag, method)("broken", None)
    assert bag.has_errors()
    assert [d.message for d in bag] == ["broken"]


def test_bag_display_joins_lines_in_order():
    bag = DiagnosticBag()
    bag.push(_unknown_key())
    bag.push(_vars_error())
    assert str(bag) == UNKNOWN_KEY + "\n" + VARS_ERROR


def test_bag_extend_preserves_order():
    first = DiagnosticBag()
    first.push(_unknown_key())
    second = DiagnosticBag()
    second.push(_vars_error())
    first.extend(second)
    assert list(first) == [_unknown_key(), _vars_error()]
    assert first.has_errors()


def test_diagnostic_error_carries_bag():
    bag = DiagnosticBag()
    bag.push(_unknown_key())
    with pytest.raises(DiagnosticError) as excinfo:
        raise DiagnosticError(bag)
    assert excinfo.value.diagnostics is bag
    assert str(excinfo.value) == UNKNOWN_KEY