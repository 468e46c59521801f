"""PathFormatter: renders a path as a bracket-notation expression."""

from __future__ import annotations

from dataclasses import dataclass

from json_node_editor.path.segments import Path, SegmentKind, as_path, segment_kind

__all__ = ["PathFormatter"]


@dataclass
class PathFormatter:
    """Formats paths in the ``$["key"][0]`` display notation.

    The root is ``$``. Index segments render as ``[n]`` and key segments as
    ``["key"]``; keys are emitted verbatim, without escaping.

    Example::

        PathFormatter().format(["items", 0])   # '$["items"][0]'
    """

    def format(self, path: Path | None) -> str:
        parts = ["$"]
        for segment in as_path(path):
            if segment_kind(segment) is SegmentKind.INDEX:
                parts.append(f"[{segment}]")
            else:
                parts.append(f'["{segment}"]')
        return "".join(parts)
