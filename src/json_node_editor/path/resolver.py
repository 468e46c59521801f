"""PathResolver: reads the value at a path inside a JSON document.

A path that does not lead anywhere is a normal outcome, not an error: the
resolver returns ``ABSENT`` instead of raising. Only a malformed segment
(neither ``int`` nor ``str``) raises, because that is a caller bug.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from json_node_editor.path.segments import (
    ABSENT,
    Path,
    SegmentKind,
    as_path,
    segment_kind,
)

__all__ = ["PathResolver"]


@dataclass
class PathResolver:
    """Resolves a path to a sub-value of a JSON document.

    Lookup rules per segment:
        INDEX into a list  -> element if ``0 <= index < len``, else ABSENT
        KEY into a dict    -> member if present, else ABSENT
        anything else      -> ABSENT (key into list, index into dict,
                              any segment into a scalar, string or null)

    Example::

        resolver = PathResolver()
        resolver.resolve({"items": [10, 20]}, ["items", 1])   # 20
        resolver.resolve({"items": [10, 20]}, ["items", 5])   # ABSENT
    """

    def resolve(self, document: Any, path: Path | None) -> Any:
        """Return the value at ``path``, or ``ABSENT`` if there is none.

        Args:
            document: Any JSON value.
            path:     Sequence of int/str segments. Empty or None is the root.

        Returns:
            The sub-value (returned by reference, not copied), or ``ABSENT``.

        Raises:
            TypeError: If a segment is neither int nor str.
        """
        current = document
        for segment in as_path(path):
            current = self._step(current, segment)
            if current is ABSENT:
                return ABSENT
        return current

    def exists(self, document: Any, path: Path | None) -> bool:
        """Return True if ``path`` resolves, even to a JSON null."""
        return self.resolve(document, path) is not ABSENT

    def _step(self, current: Any, segment: int | str) -> Any:
        kind = segment_kind(segment)
        if kind is SegmentKind.INDEX:
            if isinstance(current, list) and 0 <= segment < len(current):  # type: ignore[operator]
                return current[segment]  # type: ignore[index]
            return ABSENT
        if isinstance(current, dict) and segment in current:
            return current[segment]
        return ABSENT
