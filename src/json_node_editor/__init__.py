"""JSON node editor - path-addressed viewing and editing of JSON documents."""

from __future__ import annotations

from json_node_editor.api import (
    apply_edit,
    display_text,
    format_path,
    normalize_rows,
    render_node,
    resolve,
    write,
)
from json_node_editor.config import EditorConfig
from json_node_editor.exceptions import (
    DocumentEncodeError,
    DocumentParseError,
    InvalidTransitionError,
    JsonNodeEditorError,
    ParseSource,
)
from json_node_editor.graph import GraphNode, NodeGraph, NodeRow, RowType
from json_node_editor.path import ABSENT, SegmentKind
from json_node_editor.result import EditResult, SaveResult
from json_node_editor.session import EditSession, EditState
from json_node_editor.store import InMemoryDocumentStore

__version__: str = "0.1.0"
__all__: list[str] = [
    "ABSENT",
    "DocumentEncodeError",
    "DocumentParseError",
    "EditResult",
    "EditSession",
    "EditState",
    "EditorConfig",
    "GraphNode",
    "InMemoryDocumentStore",
    "InvalidTransitionError",
    "JsonNodeEditorError",
    "NodeGraph",
    "NodeRow",
    "ParseSource",
    "RowType",
    "SaveResult",
    "SegmentKind",
    "apply_edit",
    "display_text",
    "format_path",
    "normalize_rows",
    "render_node",
    "resolve",
    "write",
]
