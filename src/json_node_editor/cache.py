"""ParseCache: LRU cache of parsed JSON document text.

An EditSession re-reads the live document on every selection change, cancel
and save. The document text rarely changes between those actions, so parsing
it once per distinct text avoids re-parsing a large document on every click.

Each ``ParseCache`` instance owns its own ``LRUCache``; there is no
class-level shared state. Failed parses are never cached, so a malformed text
raises ``DocumentParseError`` every time it is requested.

Cached values are shared between callers and must be treated as read-only.
The path operations in this package never mutate their inputs, so handing
them a cached document is safe.

Example::

    cache = ParseCache(max_size=4)
    doc = cache.parse('{"a": 1}')        # parsed
    same = cache.parse('{"a": 1}')       # served from memory
    assert doc is same
"""

from __future__ import annotations

from typing import Any

from cachetools import LRUCache

from json_node_editor.codec import parse_json
from json_node_editor.exceptions import ParseSource

__all__ = ["ParseCache"]


class ParseCache:
    """LRU-backed memo of ``parse_json`` results keyed by document text.

    Args:
        max_size: Maximum number of parsed documents to keep. When exceeded,
            the least-recently-used entry is silently evicted.
    """

    def __init__(self, max_size: int = 8) -> None:
        self._cache: LRUCache[str, Any] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(self, text: str, source: ParseSource = ParseSource.DOCUMENT) -> Any:
        """Return the parsed value of ``text``, parsing only on a cache miss.

        Raises:
            DocumentParseError: If ``text`` is not valid JSON.
        """
        try:
            return self._cache[text]
        except KeyError:
            pass
        value = parse_json(text, source)
        self._cache[text] = value
        return value

    def clear(self) -> None:
        """Drop every cached document."""
        self._cache.clear()
