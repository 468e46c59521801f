"""Result dataclasses for edit operations.

EditResult is returned by the stateless ``apply_edit`` function; SaveResult
is what ``EditSession.save`` reports back to the presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = ["EditResult", "SaveResult"]


@dataclass(frozen=True, slots=True)
class EditResult:
    """Outcome of writing an edited value back into a document.

    Attributes:
        document:       The updated document value.
        document_text:  ``document`` serialized for publishing.
        value:          The parsed edited value stored at ``path``.
        path:           Where the value was written; also the path to
                        re-select once the graph has been rebuilt.
    """

    document: Any
    document_text: str
    value: Any
    path: tuple[int | str, ...]


@dataclass(frozen=True, slots=True)
class SaveResult:
    """Outcome of ``EditSession.save``.

    Attributes:
        saved:          True when a new document was published.
        document_text:  The published text; None when nothing was published.
        error:          Parser message when the save failed; None otherwise.
        reselected:     True when the saved path was found in the rebuilt
                        graph and selected again.
    """

    saved: bool
    document_text: str | None = None
    error: str | None = None
    reselected: bool = False
