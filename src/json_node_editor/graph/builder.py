"""NodeGraph: converts a JSON document into path-addressed graph nodes.

Uses recursive dispatch over dicts, lists and scalar values. Each node records
the path that reaches it and the rows describing its immediate children, which
is exactly what an EditSession needs to resolve and display a selection.

Node layout:
- A dict is one node. Each entry is a row: scalars carry their value,
  containers are placeholders (type array/object, value = child count).
  Every container entry is then visited at ``path + (key,)``.
- A list has no node of its own. Each element is visited at
  ``path + (index,)``; a scalar element becomes a node with one keyless row.
- A scalar root is a single node at ``()`` with one keyless row.

Nodes are listed in document order (pre-order traversal).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from json_node_editor.codec import parse_json
from json_node_editor.graph.rows import NodeRow, RowType
from json_node_editor.path.segments import Path, Segment, as_path

__all__ = ["GraphNode", "NodeGraph"]


@dataclass(frozen=True, slots=True)
class GraphNode:
    """A selectable node of the document graph.

    Attributes:
        path: Segments from the document root to this node.
        rows: The node's immediate children, flattened.
    """

    path: tuple[Segment, ...]
    rows: tuple[NodeRow, ...]


class NodeGraph:
    """Graph of selectable nodes built from a JSON document.

    Satisfies the ``GraphModel`` protocol used by ``EditSession``:
    ``find_node_by_path``, ``set_selected_node`` and ``set_graph``.

    Example::

        graph = NodeGraph({"customer": {"name": "Ann"}, "tags": ["a"]})
        [n.path for n in graph.nodes]
        # [(), ("customer",), ("tags", 0)]
    """

    def __init__(self, document: Any = None) -> None:
        self._nodes: list[GraphNode] = []
        self._index: dict[tuple[Segment, ...], GraphNode] = {}
        self.selected_node: GraphNode | None = None
        self._rebuild(document)

    @classmethod
    def from_text(cls, text: str) -> NodeGraph:
        """Build a graph from JSON text.

        Raises:
            DocumentParseError: If ``text`` is not valid JSON.
        """
        return cls(parse_json(text))

    # ------------------------------------------------------------------
    # GraphModel protocol surface
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> list[GraphNode]:
        return list(self._nodes)

    def find_node_by_path(self, path: Path | None) -> GraphNode | None:
        """Return the node whose path equals ``path``, or None."""
        return self._index.get(as_path(path))

    def set_selected_node(self, node: GraphNode | None) -> None:
        self.selected_node = node

    def set_graph(self, text: str) -> None:
        """Rebuild all nodes from new document text.

        The previous selection is dropped; callers re-select by path.

        Raises:
            DocumentParseError: If ``text`` is not valid JSON. The existing
                nodes are left in place.
        """
        document = parse_json(text)
        self._rebuild(document)
        self.selected_node = None

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _rebuild(self, document: Any) -> None:
        nodes: list[GraphNode] = []
        self._visit(document, (), nodes)
        self._nodes = nodes
        self._index = {node.path: node for node in nodes}

    def _visit(
        self, value: Any, path: tuple[Segment, ...], out: list[GraphNode]
    ) -> None:
        if isinstance(value, dict):
            out.append(GraphNode(path=path, rows=self._object_rows(value)))
            for key, child in value.items():
                if isinstance(child, (dict, list)):
                    self._visit(child, (*path, key), out)
            return

        if isinstance(value, list):
            for idx, item in enumerate(value):
                self._visit(item, (*path, idx), out)
            return

        out.append(
            GraphNode(path=path, rows=(NodeRow(None, value, RowType.of(value)),))
        )

    @staticmethod
    def _object_rows(obj: dict[str, Any]) -> tuple[NodeRow, ...]:
        rows = []
        for key, child in obj.items():
            row_type = RowType.of(child)
            value = len(child) if row_type.is_container else child
            rows.append(NodeRow(key, value, row_type))
        return tuple(rows)
