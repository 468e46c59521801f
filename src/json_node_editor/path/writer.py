"""PathWriter: non-destructive update of the value at a path.

The writer rebuilds only the containers on the path from the root to the
target. Every container it touches is shallow-copied before the segment is
assigned, so the input document is never mutated and untouched siblings are
shared between the old and the new document.

Missing intermediate containers are created from the kind of the segment that
addresses them: a list when the segment is an index, a dict when it is a key.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from json_node_editor.path.formatter import PathFormatter
from json_node_editor.path.segments import (
    ABSENT,
    Path,
    Segment,
    SegmentKind,
    as_path,
    segment_kind,
)

_LOG = logging.getLogger(__name__)

__all__ = ["PathWriter"]


@dataclass
class PathWriter:
    """Returns a copy of a document with one location replaced.

    Container rules at each level:
        list addressed by INDEX  -> shallow copy of the list
        dict addressed by KEY    -> shallow copy of the dict
        missing value            -> new ``[]`` or ``{}`` for the segment kind
        anything else            -> replaced by a new ``[]`` or ``{}``

    An index past the end of a list pads the copy with ``None`` so the
    target position exists.

    Example::

        writer = PathWriter()
        writer.write({}, ["a", "b"], 1)          # {"a": {"b": 1}}
        writer.write({"xs": [1]}, ["xs", 2], 9)  # {"xs": [1, None, 9]}
    """

    def write(self, document: Any, path: Path | None, value: Any) -> Any:
        """Return a new document with ``value`` stored at ``path``.

        Args:
            document: Any JSON value. Not modified.
            path:     Sequence of int/str segments. Empty or None replaces
                      the whole document.
            value:    The new value, stored as given.

        Returns:
            The updated document. For an empty path this is ``value`` itself.

        Raises:
            TypeError:  If a segment is neither int nor str.
            ValueError: If an index segment is negative.
        """
        segments = as_path(path)
        for segment in segments:
            if segment_kind(segment) is SegmentKind.INDEX and segment < 0:  # type: ignore[operator]
                msg = f"Array index must be non-negative, got {segment}"
                raise ValueError(msg)
        return self._build(document, segments, 0, value)

    def _build(
        self, node: Any, segments: tuple[Segment, ...], depth: int, value: Any
    ) -> Any:
        if depth == len(segments):
            return value

        segment = segments[depth]
        if segment_kind(segment) is SegmentKind.INDEX:
            items = self._copy_list(node, segments[:depth])
            index: int = segment  # type: ignore[assignment]
            child = items[index] if index < len(items) else ABSENT
            if index >= len(items):
                items.extend([None] * (index - len(items) + 1))
            items[index] = self._build(child, segments, depth + 1, value)
            return items

        members = self._copy_dict(node, segments[:depth])
        child = members.get(segment, ABSENT)
        members[segment] = self._build(child, segments, depth + 1, value)
        return members

    def _copy_list(self, node: Any, prefix: tuple[Segment, ...]) -> list[Any]:
        if isinstance(node, list):
            return list(node)
        self._log_replaced(node, prefix, "array")
        return []

    def _copy_dict(self, node: Any, prefix: tuple[Segment, ...]) -> dict[str, Any]:
        if isinstance(node, dict):
            return dict(node)
        self._log_replaced(node, prefix, "object")
        return {}

    def _log_replaced(self, node: Any, prefix: tuple[Segment, ...], kind: str) -> None:
        if node is ABSENT:
            return
        _LOG.debug(
            "replacing %s at %s with a new %s",
            type(node).__name__,
            PathFormatter().format(prefix),
            kind,
        )
