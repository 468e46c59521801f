"""Path segment model shared by the resolver, writer and formatter.

A path is an ordered sequence of segments. Each segment is either an array
index (a non-negative ``int``) or an object key (a ``str``). Traversal code
never relies on Python's implicit indexing rules: every segment is first
classified into a ``SegmentKind`` and dispatched on that tag, so that a key
aimed at a list or an index aimed at a dict is an explicit mismatch rather
than an accidental lookup.

``ABSENT`` is the sentinel returned when a path does not resolve. It is
distinct from ``None``, which is a present JSON ``null``.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum, auto
from typing import Any, Final, TypeAlias

Segment: TypeAlias = int | str
Path: TypeAlias = Sequence[Segment]

__all__ = ["ABSENT", "Path", "Segment", "SegmentKind", "as_path", "segment_kind"]


class SegmentKind(StrEnum):
    """Tag for the two segment variants.

    - INDEX -> "index" : position in a JSON array
    - KEY   -> "key"   : member name in a JSON object
    """

    INDEX = auto()
    KEY = auto()


class _Absent:
    """Marker type for a path that does not resolve to a value."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT: Final = _Absent()


def segment_kind(segment: Any) -> SegmentKind:
    """Classify a path segment.

    Args:
        segment: A single path segment.

    Returns:
        ``SegmentKind.INDEX`` for ints, ``SegmentKind.KEY`` for strings.

    Raises:
        TypeError: If the segment is neither. ``bool`` is rejected explicitly
            because it subclasses ``int``.
    """
    # bool before int: isinstance(True, int) is True
    if isinstance(segment, bool):
        msg = f"Path segment must be int or str, got bool {segment!r}"
        raise TypeError(msg)
    if isinstance(segment, int):
        return SegmentKind.INDEX
    if isinstance(segment, str):
        return SegmentKind.KEY
    msg = f"Path segment must be int or str, got {type(segment).__name__} {segment!r}"
    raise TypeError(msg)


def as_path(path: Path | None) -> tuple[Segment, ...]:
    """Return ``path`` as a validated tuple; ``None`` means the root."""
    if isinstance(path, str):
        msg = f"Path must be a sequence of segments, not a string: {path!r}"
        raise TypeError(msg)
    if not path:
        return ()
    segments = tuple(path)
    for segment in segments:
        segment_kind(segment)
    return segments
