"""Tests for EditSession.

Covers the VIEWING/EDITING state machine, display text resolution and its
fallbacks, save success and failure paths, post-save reselection through a
graph model, cancel, selection changes during an edit, invalid transitions,
and the reuse_last_good_document option.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

import pytest

from json_node_editor import (
    EditorConfig,
    EditSession,
    EditState,
    GraphNode,
    InMemoryDocumentStore,
    InvalidTransitionError,
    NodeGraph,
    NodeRow,
    RowType,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@dataclass
class FakeNode:
    path: list[Any]
    rows: list[Any] = field(default_factory=list)


class LookupOnlyGraph:
    """Graph model without set_graph: lookups only."""

    def __init__(self, nodes: list[Any]) -> None:
        self.nodes = nodes
        self.selected: Any = None

    def find_node_by_path(self, path: Any) -> Any:
        for node in self.nodes:
            if list(node.path) == list(path):
                return node
        return None

    def set_selected_node(self, node: Any) -> None:
        self.selected = node


class BrokenRebuildGraph(LookupOnlyGraph):
    def set_graph(self, text: str) -> None:
        raise ValueError("rebuild failed")


class CrashingRebuildGraph(LookupOnlyGraph):
    def set_graph(self, text: str) -> None:
        raise RuntimeError("graph backend unavailable")


class CrashingLookupGraph(LookupOnlyGraph):
    def find_node_by_path(self, path: Any) -> Any:
        raise KeyError(tuple(path))


def _make(text: str, **config: Any) -> tuple[InMemoryDocumentStore, NodeGraph, EditSession]:
    store = InMemoryDocumentStore(text)
    graph = NodeGraph.from_text(text)
    session = EditSession(store, graph, EditorConfig(**config))
    return store, graph, session


def _node(graph: NodeGraph, *path: Any) -> GraphNode:
    node = graph.find_node_by_path(path)
    assert node is not None
    return node


# ---------------------------------------------------------------------------
# Initial state and viewing
# ---------------------------------------------------------------------------


class TestViewing:
    def test_initial_state(self) -> None:
        session = EditSession(InMemoryDocumentStore('{"a": 1}'))
        assert session.state is EditState.VIEWING
        assert session.node is None
        assert session.edit_buffer is None
        assert session.error is None

    def test_no_selection_shows_whole_document(self) -> None:
        session = EditSession(InMemoryDocumentStore('{"a": 1}'))
        assert session.display_text == '{\n  "a": 1\n}'
        assert session.path_text == "$"

    def test_select_resolves_value(self) -> None:
        _, graph, session = _make('{"customer": {"name": "Ann", "tags": ["x"]}}')
        session.select(_node(graph, "customer"))
        assert session.display_text == '{\n  "name": "Ann",\n  "tags": [\n    "x"\n  ]\n}'
        assert session.path_text == '$["customer"]'

    def test_select_scalar_array_element(self) -> None:
        _, graph, session = _make('{"tags": ["gift"]}')
        session.select(_node(graph, "tags", 0))
        assert session.display_text == '"gift"'
        assert session.path_text == '$["tags"][0]'

    def test_unparseable_document_falls_back_to_rows(self) -> None:
        store = InMemoryDocumentStore("{broken")
        session = EditSession(store)
        session.select(FakeNode(["customer"], [NodeRow("name", "Ann", RowType.STRING)]))
        assert session.display_text == '{\n  "name": "Ann"\n}'

    def test_stale_path_falls_back_to_rows(self) -> None:
        session = EditSession(InMemoryDocumentStore('{"other": {}}'))
        rows = [{"key": "name", "value": "Ann", "type": "string"}]
        session.select(FakeNode(["customer"], rows))
        assert session.display_text == '{\n  "name": "Ann"\n}'

    def test_fallback_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        session = EditSession(InMemoryDocumentStore("{broken"))
        with caplog.at_level(logging.DEBUG, logger="json_node_editor"):
            session.select(FakeNode(["a"]))
        assert "expected_error" in caplog.text

    def test_overflowing_number_falls_back_to_rows(self) -> None:
        session = EditSession(InMemoryDocumentStore('{"a": 1e999}'))
        assert session.display_text == "{}"
        session.select(FakeNode(["a"], [NodeRow(None, 5, RowType.NUMBER)]))
        assert session.display_text == "5"

    def test_foreign_row_tags_in_fallback(self) -> None:
        session = EditSession(InMemoryDocumentStore("{broken"))
        rows = [{"key": "n", "value": 1, "type": "integer"}, {"key": "m", "value": 2}]
        session.select(FakeNode(["a"], rows))
        assert session.display_text == '{\n  "n": 1,\n  "m": 2\n}'

    def test_unencodable_rows_show_empty_text(self) -> None:
        session = EditSession(InMemoryDocumentStore("{broken"))
        session.select(FakeNode(["a"], [NodeRow("x", float("inf"), RowType.NUMBER)]))
        assert session.display_text == ""

    def test_tracks_live_document(self) -> None:
        store, graph, session = _make('{"a": {"b": 1}}')
        node = _node(graph, "a")
        store.set_document_text('{"a": {"b": 2}}', True)
        session.select(node)
        assert session.display_text == '{\n  "b": 2\n}'


# ---------------------------------------------------------------------------
# Editing
# ---------------------------------------------------------------------------


class TestStartEdit:
    def test_seeds_buffer_with_display_text(self) -> None:
        _, graph, session = _make('{"customer": {"name": "Ann"}}')
        session.select(_node(graph, "customer"))
        session.start_edit()
        assert session.state is EditState.EDITING
        assert session.edit_buffer == '{\n  "name": "Ann"\n}'
        assert session.display_text == session.edit_buffer

    def test_seeds_from_rows_when_document_broken(self) -> None:
        session = EditSession(InMemoryDocumentStore("{"))
        session.select(FakeNode([0], [NodeRow(None, 42, RowType.NUMBER)]))
        session.start_edit()
        assert session.edit_buffer == "42"

    def test_requires_selection(self) -> None:
        session = EditSession(InMemoryDocumentStore("{}"))
        with pytest.raises(InvalidTransitionError, match="No node selected"):
            session.start_edit()

    def test_cannot_start_twice(self) -> None:
        _, graph, session = _make("{}")
        session.select(_node(graph))
        session.start_edit()
        with pytest.raises(InvalidTransitionError):
            session.start_edit()

    def test_update_buffer(self) -> None:
        _, graph, session = _make("{}")
        session.select(_node(graph))
        session.start_edit()
        session.update_buffer("[1]")
        assert session.edit_buffer == "[1]"

    def test_update_buffer_requires_editing(self) -> None:
        session = EditSession(InMemoryDocumentStore("{}"))
        with pytest.raises(InvalidTransitionError):
            session.update_buffer("1")


# ---------------------------------------------------------------------------
# Save
# ---------------------------------------------------------------------------


class TestSave:
    def test_replaces_value_at_path(self) -> None:
        store = InMemoryDocumentStore('{"customer":{"name":"Ann"}}')
        session = EditSession(store)
        session.select(FakeNode(["customer", "name"]))
        session.start_edit()
        session.update_buffer('"Bob"')
        result = session.save()
        assert result.saved
        assert json.loads(store.text) == {"customer": {"name": "Bob"}}
        assert result.document_text == store.text

    def test_creates_intermediate_object(self) -> None:
        store = InMemoryDocumentStore("{}")
        session = EditSession(store)
        session.select(FakeNode(["a", "b"]))
        session.start_edit()
        session.update_buffer("1")
        session.save()
        assert json.loads(store.text) == {"a": {"b": 1}}

    def test_publishes_once_with_changed_flag(self) -> None:
        store, graph, session = _make('{"a": {"b": 1}}')
        session.select(_node(graph, "a"))
        session.start_edit()
        session.update_buffer('{"b": 2}')
        session.save()
        assert store.publish_count == 1
        assert store.has_changes is True

    def test_published_text_is_two_space_indented(self) -> None:
        store, graph, session = _make('{"a":{"b":1}}')
        session.select(_node(graph, "a"))
        session.start_edit()
        session.save()
        assert store.text == '{\n  "a": {\n    "b": 1\n  }\n}'

    def test_returns_to_viewing_with_new_value(self) -> None:
        _, graph, session = _make('{"a": {"b": 1}}')
        session.select(_node(graph, "a"))
        session.start_edit()
        session.update_buffer('{"b": 2, "c": 3}')
        session.save()
        assert session.state is EditState.VIEWING
        assert session.edit_buffer is None
        assert session.display_text == '{\n  "b": 2,\n  "c": 3\n}'

    def test_reselects_rebuilt_node(self) -> None:
        _, graph, session = _make('{"a": {"b": 1}}')
        old = _node(graph, "a")
        session.select(old)
        session.start_edit()
        session.update_buffer('{"b": 2}')
        result = session.save()
        assert result.reselected
        assert graph.selected_node is session.node
        assert session.node is not old
        assert session.node.rows == (NodeRow("b", 2, RowType.NUMBER),)

    def test_reselection_miss_keeps_selection(self) -> None:
        _, graph, session = _make('{"a": {"b": 1}}')
        node = _node(graph, "a")
        session.select(node)
        session.start_edit()
        session.update_buffer("5")  # "a" becomes a scalar: no node at ("a",)
        result = session.save()
        assert result.saved
        assert not result.reselected
        assert session.node is node
        assert session.display_text == "5"

    def test_graph_without_set_graph(self) -> None:
        store = InMemoryDocumentStore('{"a": {"b": 1}}')
        node = FakeNode(["a"])
        graph = LookupOnlyGraph([node])
        session = EditSession(store, graph)
        session.select(node)
        session.start_edit()
        result = session.save()
        assert result.reselected
        assert graph.selected is node

    def test_graph_rebuild_failure_does_not_undo_save(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        store = InMemoryDocumentStore('{"a": 1}')
        session = EditSession(store, BrokenRebuildGraph([]))
        session.select(FakeNode(["a"]))
        session.start_edit()
        session.update_buffer("2")
        with caplog.at_level(logging.WARNING, logger="json_node_editor.session"):
            result = session.save()
        assert result.saved
        assert json.loads(store.text) == {"a": 2}
        assert "graph rebuild after save failed" in caplog.text

    def test_any_rebuild_error_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        store = InMemoryDocumentStore('{"a": 1}')
        node = FakeNode(["a"])
        graph = CrashingRebuildGraph([node])
        session = EditSession(store, graph)
        session.select(node)
        session.start_edit()
        session.update_buffer("2")
        with caplog.at_level(logging.WARNING, logger="json_node_editor.session"):
            result = session.save()
        assert result.saved
        assert result.reselected
        assert json.loads(store.text) == {"a": 2}
        assert "graph backend unavailable" in caplog.text

    def test_lookup_error_after_save_keeps_save(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        store = InMemoryDocumentStore('{"a": 1}')
        session = EditSession(store, CrashingLookupGraph([]))
        session.select(FakeNode(["a"]))
        session.start_edit()
        session.update_buffer("3")
        with caplog.at_level(logging.WARNING, logger="json_node_editor.session"):
            result = session.save()
        assert result.saved
        assert not result.reselected
        assert session.state is EditState.VIEWING
        assert session.display_text == "3"
        assert store.publish_count == 1
        assert 'reselecting $["a"] after save failed' in caplog.text

    def test_save_logs_publish(self, caplog: pytest.LogCaptureFixture) -> None:
        session = EditSession(InMemoryDocumentStore("{}"))
        session.select(FakeNode(["k"]))
        session.start_edit()
        session.update_buffer("1")
        with caplog.at_level(logging.INFO, logger="json_node_editor.session"):
            session.save()
        assert 'published document after editing $["k"]' in caplog.text

    def test_root_save(self) -> None:
        store, graph, session = _make('{"a": 1}')
        session.select(_node(graph))
        session.start_edit()
        session.update_buffer('{"z": 26}')
        session.save()
        assert json.loads(store.text) == {"z": 26}

    def test_save_requires_editing(self) -> None:
        session = EditSession(InMemoryDocumentStore("{}"))
        with pytest.raises(InvalidTransitionError):
            session.save()


class TestSaveFailure:
    def test_invalid_buffer_keeps_editing(self) -> None:
        store = InMemoryDocumentStore('{"a": 1}')
        session = EditSession(store)
        session.select(FakeNode(["a"]))
        session.start_edit()
        session.update_buffer("{invalid")
        result = session.save()
        assert not result.saved
        assert result.document_text is None
        assert session.state is EditState.EDITING
        assert session.edit_buffer == "{invalid"
        assert store.text == '{"a": 1}'
        assert store.publish_count == 0

    def test_error_message_from_parser(self) -> None:
        session = EditSession(InMemoryDocumentStore("{}"))
        session.select(FakeNode(["a"]))
        session.start_edit()
        session.update_buffer("{invalid")
        result = session.save()
        assert result.error == session.error
        assert session.error is not None
        assert session.error.startswith("Expecting property name enclosed in double quotes")
        assert "line 1 column 2" in session.error

    def test_broken_live_document(self) -> None:
        store = InMemoryDocumentStore('{"a": 1}')
        session = EditSession(store)
        session.select(FakeNode(["a"]))
        session.start_edit()
        store.text = '{"a": '  # changed behind the session's back
        session.update_buffer("2")
        result = session.save()
        assert not result.saved
        assert session.is_editing
        assert session.error == "Expecting value: line 1 column 7 (char 6)"
        assert store.text == '{"a": '

    def test_retry_after_fix_succeeds(self) -> None:
        store = InMemoryDocumentStore('{"a": 1}')
        session = EditSession(store)
        session.select(FakeNode(["a"]))
        session.start_edit()
        session.update_buffer("[1,")
        session.save()
        session.update_buffer("[1]")
        result = session.save()
        assert result.saved
        assert session.error is None
        assert json.loads(store.text) == {"a": [1]}

    @pytest.mark.parametrize(
        "buffer",
        ["1e999", '{"n": -1E400}', "1" * 5000, "[" * 100_000],
        ids=["overflow", "nested-overflow", "digit-limit", "deep-nesting"],
    )
    def test_unrepresentable_buffer_keeps_editing(self, buffer: str) -> None:
        store = InMemoryDocumentStore('{"a": 1}')
        session = EditSession(store)
        session.select(FakeNode(["a"]))
        session.start_edit()
        session.update_buffer(buffer)
        result = session.save()
        assert not result.saved
        assert session.is_editing
        assert session.error
        assert result.error == session.error
        assert store.text == '{"a": 1}'
        assert store.publish_count == 0

    def test_overflow_error_names_the_number(self) -> None:
        session = EditSession(InMemoryDocumentStore("{}"))
        session.select(FakeNode(["a"]))
        session.start_edit()
        session.update_buffer("1e999")
        session.save()
        assert session.error == "Number out of range: 1e999"

    def test_graph_untouched_on_failure(self) -> None:
        _, graph, session = _make('{"a": {"b": 1}}')
        before = graph.nodes
        session.select(_node(graph, "a"))
        session.start_edit()
        session.update_buffer("nope")
        session.save()
        assert graph.nodes == before


# ---------------------------------------------------------------------------
# Cancel and selection changes
# ---------------------------------------------------------------------------


class TestCancelAndReselect:
    def test_cancel_discards_buffer(self) -> None:
        store, graph, session = _make('{"a": {"b": 1}}')
        session.select(_node(graph, "a"))
        session.start_edit()
        session.update_buffer("{invalid")
        session.save()
        session.cancel()
        assert session.state is EditState.VIEWING
        assert session.edit_buffer is None
        assert session.error is None
        assert session.display_text == '{\n  "b": 1\n}'
        assert store.publish_count == 0

    def test_cancel_requires_editing(self) -> None:
        session = EditSession(InMemoryDocumentStore("{}"))
        with pytest.raises(InvalidTransitionError):
            session.cancel()

    def test_selection_change_resets_edit(self) -> None:
        _, graph, session = _make('{"a": {"x": 1}, "b": {"y": 2}}')
        session.select(_node(graph, "a"))
        session.start_edit()
        session.update_buffer('{"x": 100}')
        session.select(_node(graph, "b"))
        assert session.state is EditState.VIEWING
        assert session.edit_buffer is None
        assert session.display_text == '{\n  "y": 2\n}'

    def test_close_clears_selection(self) -> None:
        _, graph, session = _make('{"a": {"x": 1}}')
        session.select(_node(graph, "a"))
        session.start_edit()
        session.close()
        assert session.node is None
        assert not session.is_editing


# ---------------------------------------------------------------------------
# reuse_last_good_document
# ---------------------------------------------------------------------------


class TestReuseLastGoodDocument:
    def _broken_after_view(self, reuse: bool) -> EditSession:
        store = InMemoryDocumentStore('{"a": {"b": 1}}')
        session = EditSession(store, config=EditorConfig(reuse_last_good_document=reuse))
        node = FakeNode(["a"], [NodeRow("b", 0, RowType.NUMBER)])
        session.select(node)
        store.text = "{broken"
        session.select(node)
        return session

    def test_disabled_uses_rows(self) -> None:
        session = self._broken_after_view(reuse=False)
        assert session.display_text == '{\n  "b": 0\n}'

    def test_enabled_uses_last_good_document(self) -> None:
        session = self._broken_after_view(reuse=True)
        assert session.display_text == '{\n  "b": 1\n}'

    def test_enabled_without_history_uses_rows(self) -> None:
        session = EditSession(
            InMemoryDocumentStore("{broken"),
            config=EditorConfig(reuse_last_good_document=True),
        )
        session.select(FakeNode(["a"], [NodeRow(None, 7, RowType.NUMBER)]))
        assert session.display_text == "7"

    def test_save_never_uses_last_good_document(self) -> None:
        session = self._broken_after_view(reuse=True)
        session.start_edit()
        result = session.save()
        assert not result.saved
        assert session.is_editing
