import pytest

from llmfmt.ast import Document, Mapping, MappingEntry, Scalar, Sequence, TopLevelKey
from llmfmt.diagnostics import Span


def test_ordered_keys_follow_canonical_order():
    names = " ".join(key.value for key in TopLevelKey.ordered())
    assert names == "agent system user memory tools output constraints vars"


@pytest.mark.parametrize("key", list(TopLevelKey))
def test_from_keyword_round_trips(key):
    assert TopLevelKey.from_keyword(key.value) is key
    assert str(key) == key.value


@pytest.mark.parametrize("word", ["persona", "include", "Agent", ""])
def test_from_keyword_rejects_unknown(word):
    assert TopLevelKey.from_keyword(word) is None


def test_kind_names():
    assert Scalar("x").kind_name() == "scalar"
    assert Sequence([]).kind_name() == "sequence"
    assert Mapping([]).kind_name() == "mapping"


def test_node_equality_ignores_span():
    assert Scalar("a", Span(1, 1)) == Scalar("a", Span(9, 9))
    assert Sequence([Scalar("a", Span(2, 3))], Span(1, 1)) == Sequence([Scalar("a")])
    assert Scalar("a") != Scalar("b")


def test_nodes_of_different_kinds_are_unequal():
    assert Scalar("a") != Sequence([Scalar("a")])
    assert Sequence([]) != Mapping([])


def test_mapping_entry_equality_ignores_span():
    left = MappingEntry("role", Scalar("first"), Span(4, 3))
    right = MappingEntry("role", Scalar("first"), Span(5, 3))
    assert left == right
    assert left != MappingEntry("role", Scalar("second"))


def test_mapping_get_returns_first_match():
    mapping = Mapping(
        [
            MappingEntry("role", Scalar("first")),
            MappingEntry("role", Scalar("second")),
            MappingEntry("output", Scalar("json")),
        ]
    )
    assert mapping.get("role") == Scalar("first")
    assert mapping.get("output") == Scalar("json")
    assert mapping.get("missing") is None


def test_document_set_returns_previous_value():
    document = Document()
    assert document.set(TopLevelKey.AGENT, Scalar("first")) is None
    previous = document.set(TopLevelKey.AGENT, Scalar("second"))
    assert previous == Scalar("first")
    assert document.get(TopLevelKey.AGENT) == Scalar("second")
    assert document.agent == Scalar("second")


@pytest.mark.parametrize("key", list(TopLevelKey))
def test_document_set_and_get_every_key(key):
    document = Document()
    value = Scalar(key.value)
    document.set(key, value)
    assert document.get(key) == value
    assert document.ordered_entries() == [(key, value)]


def test_ordered_entries_only_present_keys_in_order():
    document = Document()
    document.set(TopLevelKey.MEMORY, Sequence([Scalar("item1"), Scalar("item2")]))
    document.set(TopLevelKey.AGENT, Scalar("SummaryTest"))
    document.set(TopLevelKey.SYSTEM, Scalar("handle requests"))
    keys = [key.value for key, _ in document.ordered_entries()]
    assert keys == ["agent", "system", "memory"]


def test_include_is_not_an_ordered_entry():
    document = Document(include=Scalar("base.llm"), agent=Scalar("X"))
    assert document.ordered_entries() == [(TopLevelKey.AGENT, Scalar("X"))]


def test_document_equality_ignores_spans():
    left = Document(agent=Scalar("X", Span(1, 8)))
    right = Document(agent=Scalar("X", Span(3, 8)))
    assert left == right
    assert Document() != left