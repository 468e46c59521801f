"""InMemoryDocumentStore: a DocumentStore that keeps the text in memory."""

from __future__ import annotations

__all__ = ["InMemoryDocumentStore"]


class InMemoryDocumentStore:
    """Holds the live document text and a dirty flag.

    Satisfies the ``DocumentStore`` protocol structurally.

    Attributes:
        text:          Current document text.
        has_changes:   True once a changed document has been published.
        publish_count: Number of ``set_document_text`` calls so far.
    """

    def __init__(self, text: str = "{}") -> None:
        self.text = text
        self.has_changes = False
        self.publish_count = 0

    def get_document_text(self) -> str:
        return self.text

    def set_document_text(self, text: str, changed: bool) -> None:
        self.text = text
        self.has_changes = changed
        self.publish_count += 1
