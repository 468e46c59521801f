"""RowNormalizer: turns a node's row list back into JSON text.

The result shows the node's own scalar content only. Container placeholder
rows are dropped, since the containers are displayed by their own nodes.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from json_node_editor.codec import dump_json
from json_node_editor.config import EditorConfig
from json_node_editor.graph.rows import NodeRow

__all__ = ["RowNormalizer"]


@dataclass
class RowNormalizer:
    """Normalizes flattened node rows into canonical JSON text.

    Rules, in order:
    1. No rows                  -> ``"{}"``.
    2. One row without a key    -> that row's value as JSON text (a bare
                                   scalar node is not wrapped in an object).
    3. Otherwise                -> an object of keyed, non-container rows in
                                   row order, serialized with indentation.

    Example::

        RowNormalizer().normalize([NodeRow(None, 42, "number")])   # "42"
    """

    config: EditorConfig = field(default_factory=EditorConfig)

    def normalize(self, rows: Iterable[NodeRow | Mapping[str, Any]] | None) -> str:
        """Return JSON text for a node's rows.

        Args:
            rows: NodeRow instances or equivalent mappings. None is treated
                  as no rows.

        Returns:
            JSON text; deterministic for a given row order.
        """
        normalized = [self._coerce(row) for row in rows or ()]
        if not normalized:
            return "{}"
        if len(normalized) == 1 and normalized[0].key is None:
            return dump_json(normalized[0].value, self.config)

        members: dict[str, Any] = {}
        for row in normalized:
            if row.is_container or row.key is None:
                continue
            members[row.key] = row.value
        return dump_json(members, self.config)

    @staticmethod
    def _coerce(row: NodeRow | Mapping[str, Any]) -> NodeRow:
        if isinstance(row, NodeRow):
            return row
        return NodeRow.from_mapping(row)
