"""Public API functions for json-node-editor.

Plain values in, plain values out: none of these functions touch a document
store, a graph model or any other shared state. ``EditSession`` is the only
stateful layer and is built on top of them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from json_node_editor.codec import dump_json, parse_json
from json_node_editor.config import EditorConfig
from json_node_editor.exceptions import DocumentParseError, ParseSource
from json_node_editor.graph.normalizer import RowNormalizer
from json_node_editor.graph.rows import NodeRow
from json_node_editor.path.formatter import PathFormatter
from json_node_editor.path.resolver import PathResolver
from json_node_editor.path.segments import ABSENT, Path, as_path
from json_node_editor.path.writer import PathWriter
from json_node_editor.result import EditResult

_LOG = logging.getLogger(__name__)

# Stateless, safe to share across calls
_resolver = PathResolver()
_writer = PathWriter()
_formatter = PathFormatter()

Rows = Iterable[NodeRow | Mapping[str, Any]] | None
Parser = Callable[[str, ParseSource], Any]

__all__ = [
    "apply_edit",
    "display_text",
    "format_path",
    "normalize_rows",
    "render_node",
    "resolve",
    "write",
]


def resolve(document: Any, path: Path | None) -> Any:
    """Return the value at ``path`` in ``document``, or ``ABSENT``."""
    return _resolver.resolve(document, path)


def write(document: Any, path: Path | None, value: Any) -> Any:
    """Return a copy of ``document`` with ``value`` stored at ``path``.

    ``document`` is never mutated; missing containers along the path are
    created. See ``PathWriter`` for the full rules.
    """
    return _writer.write(document, path, value)


def format_path(path: Path | None) -> str:
    """Return the display form of ``path``, e.g. ``$["items"][0]``."""
    return _formatter.format(path)


def normalize_rows(rows: Rows, config: EditorConfig | None = None) -> str:
    """Return the JSON text for a node's rows (see ``RowNormalizer``)."""
    normalizer = RowNormalizer(config) if config is not None else RowNormalizer()
    return normalizer.normalize(rows)


def render_node(
    document: Any,
    path: Path | None,
    rows: Rows,
    config: EditorConfig | None = None,
) -> str:
    """Return the text shown for a node of an already-parsed document.

    The node's value is resolved from ``document``. When the path no longer
    resolves (a stale path after the document changed shape), the node's rows
    are normalized instead.
    """
    value = resolve(document, path)
    if value is ABSENT:
        _LOG.debug("%s did not resolve, showing node rows", format_path(path))
        return normalize_rows(rows, config)
    return dump_json(value, config)


def display_text(
    document_text: str,
    path: Path | None,
    rows: Rows,
    config: EditorConfig | None = None,
) -> str:
    """Return the text shown for a node, given the live document text.

    Falls back to the node's rows when the document does not parse or the
    path does not resolve. Never raises for either case.
    """
    try:
        document = parse_json(document_text)
    except DocumentParseError as exc:
        _LOG.debug("expected_error", exc_info=exc)
        return normalize_rows(rows, config)
    return render_node(document, path, rows, config)


def apply_edit(
    document_text: str,
    path: Path | None,
    edit_text: str,
    config: EditorConfig | None = None,
    *,
    parse: Parser = parse_json,
) -> EditResult:
    """Parse an edited value and write it into the document at ``path``.

    The edit text is parsed first, then the document text. Nothing is
    published: the caller decides what to do with the result.

    Args:
        document_text: The full live document as JSON text.
        path:          Where the edited value goes. Empty replaces the root.
        edit_text:     The edited value as JSON text.
        config:        Serialization settings. Defaults to ``EditorConfig()``.
        parse:         ``(text, source) -> value`` parser, e.g. a
                       ``ParseCache.parse`` bound method.

    Returns:
        An ``EditResult`` holding the new document, its text, the parsed
        value and the path to re-select.

    Raises:
        DocumentParseError: If either text is not valid JSON. ``source`` on
            the error says which one.
        DocumentEncodeError: If the updated document cannot be written as
            JSON text.
    """
    segments = as_path(path)
    value = parse(edit_text, ParseSource.EDIT_BUFFER)
    document = parse(document_text, ParseSource.DOCUMENT)
    updated = write(document, segments, value)
    return EditResult(
        document=updated,
        document_text=dump_json(updated, config),
        value=value,
        path=segments,
    )
