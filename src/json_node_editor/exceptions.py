"""Exception hierarchy for json-node-editor.

Resolution misses are not exceptions (see ``ABSENT``). Exceptions are reserved
for text that is not JSON, values that cannot be written as JSON, and
session actions taken in the wrong state.
"""

from __future__ import annotations

import json
from enum import StrEnum, auto

__all__ = [
    "DocumentEncodeError",
    "DocumentParseError",
    "InvalidTransitionError",
    "JsonNodeEditorError",
    "ParseSource",
]


class ParseSource(StrEnum):
    """Which text failed to parse.

    - EDIT_BUFFER -> "edit_buffer" : the value the user typed
    - DOCUMENT    -> "document"    : the full live document
    """

    EDIT_BUFFER = auto()
    DOCUMENT = auto()


class JsonNodeEditorError(Exception):
    """Base class for all json-node-editor errors."""


class DocumentParseError(JsonNodeEditorError, ValueError):
    """Text could not be parsed as JSON.

    Attributes:
        source:  Which text failed (edit buffer or live document).
        reason:  The parser's description, e.g. ``"Expecting value"``.
        lineno:  1-based line of the failure, or None if unknown.
        colno:   1-based column of the failure, or None if unknown.
        pos:     0-based character offset of the failure, or None if unknown.
    """

    def __init__(
        self,
        reason: str,
        *,
        source: ParseSource,
        lineno: int | None = None,
        colno: int | None = None,
        pos: int | None = None,
    ) -> None:
        self.reason = reason
        self.source = source
        self.lineno = lineno
        self.colno = colno
        self.pos = pos
        super().__init__(self.message)

    @classmethod
    def from_decode_error(
        cls, error: json.JSONDecodeError, source: ParseSource
    ) -> DocumentParseError:
        return cls(
            error.msg,
            source=source,
            lineno=error.lineno,
            colno=error.colno,
            pos=error.pos,
        )

    @property
    def message(self) -> str:
        """User-facing text, e.g. ``Expecting value: line 1 column 1 (char 0)``."""
        if self.lineno is None:
            return self.reason
        return f"{self.reason}: line {self.lineno} column {self.colno} (char {self.pos})"


class DocumentEncodeError(JsonNodeEditorError, ValueError):
    """A value could not be written as standard JSON text.

    Raised for non-finite floats, non-JSON types, circular references and
    nesting too deep for the encoder.

    Attributes:
        reason: The encoder's description.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)

    @property
    def message(self) -> str:
        """User-facing text; the encoder's description."""
        return self.reason


class InvalidTransitionError(JsonNodeEditorError, RuntimeError):
    """An EditSession action was called in a state that does not allow it."""
