"""EditorConfig: serialization and session settings.

EditorConfig is a frozen (immutable) dataclass. It governs how JSON text is
produced and how an EditSession treats the live document; it has no effect on
the pure path operations.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["EditorConfig"]


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Immutable configuration for JSON text handling and edit sessions.

    Attributes:
        indent: Spaces per indentation level in serialized output (>= 0).
        ensure_ascii: When True, non-ASCII characters are escaped as
            ``\\uXXXX``.  Default False, so text round-trips as typed.
        parse_cache_size: Number of parsed document texts an EditSession
            keeps in its LRU cache (>= 1).
        reuse_last_good_document: When True, an EditSession resolves display
            text against the last live document that parsed successfully if
            the current one does not parse.  Saves never use it.
    """

    indent: int = 2
    ensure_ascii: bool = False
    parse_cache_size: int = 8
    reuse_last_good_document: bool = False

    def __post_init__(self) -> None:
        if self.indent < 0:
            msg = f"indent must be >= 0, got {self.indent}"
            raise ValueError(msg)
        if self.parse_cache_size < 1:
            msg = f"parse_cache_size must be >= 1, got {self.parse_cache_size}"
            raise ValueError(msg)
