"""EditSession: view/edit/save orchestration for one selected node.

The session is a two-state machine scoped to the selected node:

    VIEWING --start_edit()--> EDITING --save() ok----> VIEWING
                                      --save() fails-> EDITING (error set)
                                      --cancel()-----> VIEWING
    any state --select(node)--> VIEWING for the new node

Its only externally visible side effect is publishing a whole replacement
document through the DocumentStore on a successful save. Everything else
(resolving, writing, formatting, normalizing) is delegated to the pure
functions in ``json_node_editor.api``.

Saves are synchronous and all-or-nothing: either one new document is
published, or nothing is and the live document is left as it was. With
several sessions over one store, publishing is last-writer-wins on the whole
document.
"""

from __future__ import annotations

import logging
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any

from json_node_editor.api import apply_edit, format_path, normalize_rows, render_node
from json_node_editor.cache import ParseCache
from json_node_editor.config import EditorConfig
from json_node_editor.exceptions import (
    DocumentEncodeError,
    DocumentParseError,
    InvalidTransitionError,
)
from json_node_editor.path.segments import ABSENT
from json_node_editor.result import SaveResult

if TYPE_CHECKING:
    from json_node_editor.protocols import DocumentStore, GraphModel, SelectableNode

_LOG = logging.getLogger(__name__)

__all__ = ["EditSession", "EditState"]


class EditState(StrEnum):
    """The two states of an EditSession.

    - VIEWING -> "viewing" : showing the node's current value
    - EDITING -> "editing" : an edit buffer is open for the node
    """

    VIEWING = auto()
    EDITING = auto()


class EditSession:
    """Ties node selection, editing and saving to a live document.

    Example::

        store = InMemoryDocumentStore('{"customer": {"name": "Ann"}}')
        graph = NodeGraph.from_text(store.get_document_text())
        session = EditSession(store, graph)

        session.select(graph.find_node_by_path(["customer"]))
        session.start_edit()
        session.update_buffer('{"name": "Bob"}')
        result = session.save()
        result.saved          # True
        store.text            # '{\\n  "customer": {\\n    "name": "Bob"\\n  }\\n}'
    """

    def __init__(
        self,
        store: DocumentStore,
        graph: GraphModel | None = None,
        config: EditorConfig | None = None,
    ) -> None:
        """Initialise the session with no node selected.

        Args:
            store:  Owner of the live document text.
            graph:  Optional graph model used to re-select the saved node
                    after a save. When it has a ``set_graph(text)`` method the
                    graph is rebuilt from the new document first.
            config: Serialization and session settings. Defaults to
                    ``EditorConfig()``.
        """
        self._config: EditorConfig = config if config is not None else EditorConfig()
        self._store = store
        self._graph = graph
        self._cache = ParseCache(max_size=self._config.parse_cache_size)
        self._last_good_text: str | None = None

        self._node: SelectableNode | None = None
        self._state = EditState.VIEWING
        self._display_text = ""
        self._edit_buffer: str | None = None
        self._error: str | None = None
        self._enter_viewing()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> EditState:
        return self._state

    @property
    def is_editing(self) -> bool:
        return self._state is EditState.EDITING

    @property
    def node(self) -> SelectableNode | None:
        """The selected node; None shows the whole document."""
        return self._node

    @property
    def path(self) -> tuple[int | str, ...]:
        if self._node is None:
            return ()
        return tuple(self._node.path or ())

    @property
    def path_text(self) -> str:
        """The selected node's path in ``$["key"][0]`` notation."""
        return format_path(self.path)

    @property
    def display_text(self) -> str:
        """Text shown for the node: the edit buffer while editing."""
        if self._edit_buffer is not None:
            return self._edit_buffer
        return self._display_text

    @property
    def edit_buffer(self) -> str | None:
        """The text being edited; None while viewing."""
        return self._edit_buffer

    @property
    def error(self) -> str | None:
        """Parser message from the last failed save, if any."""
        return self._error

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def select(self, node: SelectableNode | None) -> None:
        """Show ``node`` in VIEWING state, abandoning any open edit."""
        if self.is_editing:
            _LOG.debug("selection changed, discarding edit of %s", self.path_text)
        self._node = node
        self._enter_viewing()

    def close(self) -> None:
        """Drop the selection and any open edit."""
        self.select(None)

    def start_edit(self) -> None:
        """VIEWING -> EDITING, seeding the buffer with the node's current text.

        Raises:
            InvalidTransitionError: If already editing or no node is selected.
        """
        if self.is_editing:
            raise InvalidTransitionError("An edit is already in progress")
        if self._node is None:
            raise InvalidTransitionError("No node selected")
        self._edit_buffer = self._current_text()
        self._error = None
        self._state = EditState.EDITING

    def update_buffer(self, text: str) -> None:
        """Replace the edit buffer with ``text``.

        Raises:
            InvalidTransitionError: If not editing.
        """
        if not self.is_editing:
            raise InvalidTransitionError("Cannot update the buffer while viewing")
        self._edit_buffer = text

    def cancel(self) -> None:
        """EDITING -> VIEWING, discarding the buffer.

        Raises:
            InvalidTransitionError: If not editing.
        """
        if not self.is_editing:
            raise InvalidTransitionError("Nothing to cancel")
        self._enter_viewing()

    def save(self) -> SaveResult:
        """Write the edit buffer into the live document and publish it.

        On success the new document is published with its changed flag set,
        the session returns to VIEWING and, when a graph model is attached,
        the node at the saved path is selected again.

        On a parse failure of the buffer or of the live document nothing is
        published, the session stays in EDITING and ``error`` holds the
        parser's message. The same holds if the edited document cannot be
        written back as JSON.

        Raises:
            InvalidTransitionError: If not editing.
        """
        if not self.is_editing:
            raise InvalidTransitionError("Nothing to save")

        self._error = None
        try:
            result = apply_edit(
                self._store.get_document_text(),
                self.path,
                self._edit_buffer or "",
                self._config,
                parse=self._cache.parse,
            )
        except (DocumentParseError, DocumentEncodeError) as exc:
            _LOG.debug("expected_error", exc_info=exc)
            self._error = exc.message
            return SaveResult(saved=False, error=self._error)

        self._store.set_document_text(result.document_text, True)
        _LOG.info(
            "published document after editing %s (%d chars)",
            format_path(result.path),
            len(result.document_text),
        )

        self._enter_viewing()
        reselected = self._reselect(result.path, result.document_text)
        return SaveResult(
            saved=True,
            document_text=result.document_text,
            reselected=reselected,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _enter_viewing(self) -> None:
        self._state = EditState.VIEWING
        self._edit_buffer = None
        self._error = None
        self._display_text = self._current_text()

    def _current_text(self) -> str:
        rows: Any = self._node.rows if self._node is not None else None
        text = self._store.get_document_text()
        try:
            document = self._cache.parse(text)
        except DocumentParseError as exc:
            _LOG.debug("expected_error", exc_info=exc)
            document = self._last_good_document()
        else:
            self._last_good_text = text

        if document is not ABSENT:
            try:
                return render_node(document, self.path, rows, self._config)
            except DocumentEncodeError as exc:
                _LOG.debug("expected_error", exc_info=exc)
        return self._rows_text(rows)

    def _rows_text(self, rows: Any) -> str:
        try:
            return normalize_rows(rows, self._config)
        except DocumentEncodeError as exc:
            _LOG.debug("expected_error", exc_info=exc)
            return ""

    def _last_good_document(self) -> Any:
        if not self._config.reuse_last_good_document or self._last_good_text is None:
            return ABSENT
        _LOG.debug("live document does not parse, using last good document")
        return self._cache.parse(self._last_good_text)

    def _reselect(self, path: tuple[int | str, ...], document_text: str) -> bool:
        # The document is already published; graph model failures only cost
        # the reselection.
        if self._graph is None:
            return False

        set_graph = getattr(self._graph, "set_graph", None)
        if callable(set_graph):
            try:
                set_graph(document_text)
            except Exception as exc:
                _LOG.warning("graph rebuild after save failed: %s", exc)

        try:
            node = self._graph.find_node_by_path(path)
            if node is not None:
                self._graph.set_selected_node(node)
        except Exception as exc:
            _LOG.warning(
                "reselecting %s after save failed: %s", format_path(path), exc
            )
            return False

        if node is None:
            _LOG.debug("no node at %s after save, keeping selection", format_path(path))
            return False
        self.select(node)
        return True
