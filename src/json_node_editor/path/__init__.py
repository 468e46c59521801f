"""Path subpackage: addressing values inside a JSON document.

Re-exports the public API for the path module:
- PathResolver: reads the value at a path (or ABSENT)
- PathWriter: returns a copy of a document with one location replaced
- PathFormatter: renders a path as ``$["key"][0]``
- SegmentKind, ABSENT, segment_kind, as_path: the segment model
"""

from json_node_editor.path.formatter import PathFormatter
from json_node_editor.path.resolver import PathResolver
from json_node_editor.path.segments import (
    ABSENT,
    Path,
    Segment,
    SegmentKind,
    as_path,
    segment_kind,
)
from json_node_editor.path.writer import PathWriter

__all__ = [
    "ABSENT",
    "Path",
    "PathFormatter",
    "PathResolver",
    "PathWriter",
    "Segment",
    "SegmentKind",
    "as_path",
    "segment_kind",
]
