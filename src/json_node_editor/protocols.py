"""Structural protocols for the collaborators an EditSession talks to.

The document store, the graph model and the nodes it hands out belong to the
surrounding application. Any object with conformant methods passes
``isinstance`` checks; no inheritance is required.

Example::

    from json_node_editor.protocols import DocumentStore

    class FileStore:
        def __init__(self, path):
            self.path = path

        def get_document_text(self) -> str:
            return self.path.read_text()

        def set_document_text(self, text: str, changed: bool) -> None:
            self.path.write_text(text)

    assert isinstance(FileStore(p), DocumentStore)  # True
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Protocol, runtime_checkable

__all__ = ["DocumentStore", "GraphModel", "SelectableNode"]


@runtime_checkable
class SelectableNode(Protocol):
    """A graph node: the path that reaches it and its flattened rows.

    ``rows`` items are ``NodeRow`` instances or mappings with ``key``,
    ``value`` and ``type`` entries.
    """

    @property
    def path(self) -> Sequence[int | str]: ...

    @property
    def rows(self) -> Iterable[Any]: ...


@runtime_checkable
class DocumentStore(Protocol):
    """Owner of the live document text.

    ``set_document_text`` publishes a whole replacement document; ``changed``
    marks it as having unsaved changes.
    """

    def get_document_text(self) -> str: ...

    def set_document_text(self, text: str, changed: bool) -> None: ...


@runtime_checkable
class GraphModel(Protocol):
    """Node lookup and selection after a document change.

    A model may also expose ``set_graph(text: str) -> None``; when present,
    EditSession calls it after a save so the nodes reflect the new document
    before the saved path is re-selected.
    """

    def find_node_by_path(self, path: Sequence[int | str]) -> Any: ...

    def set_selected_node(self, node: Any) -> None: ...
