"""Graph subpackage: node rows and their JSON normalization.

Re-exports the public API for the graph module:
- NodeRow: one flattened child entry of a node
- RowType: StrEnum of row kinds (string, number, boolean, null, array, object)
- RowNormalizer: converts a node's rows back into JSON text
- GraphNode / NodeGraph: path-addressed nodes built from a document
"""

from json_node_editor.graph.builder import GraphNode, NodeGraph
from json_node_editor.graph.normalizer import RowNormalizer
from json_node_editor.graph.rows import NodeRow, RowType

__all__ = ["GraphNode", "NodeGraph", "NodeRow", "RowNormalizer", "RowType"]
