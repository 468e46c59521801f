"""NodeRow dataclass and RowType StrEnum for flattened node contents.

A graph node shows its immediate children as rows. Scalar children carry
their value; container children are placeholders whose type is ``array`` or
``object`` and whose value is the container's child count. Container contents
are never inlined into a row: they live in their own graph nodes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

__all__ = ["NodeRow", "RowType"]


class RowType(StrEnum):
    """Kind of value a row holds.

    StrEnum values are the lowercased member names:
    - STRING  -> "string"
    - NUMBER  -> "number"
    - BOOLEAN -> "boolean"
    - NULL    -> "null"
    - ARRAY   -> "array"   : container placeholder
    - OBJECT  -> "object"  : container placeholder
    """

    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    NULL = auto()
    ARRAY = auto()
    OBJECT = auto()

    @property
    def is_container(self) -> bool:
        return self in (RowType.ARRAY, RowType.OBJECT)

    @classmethod
    def of(cls, value: Any) -> RowType:
        """Classify a JSON value.

        Raises:
            TypeError: If ``value`` is not a JSON value.
        """
        # CRITICAL: bool before int, bool subclasses int
        if isinstance(value, bool):
            return cls.BOOLEAN
        if value is None:
            return cls.NULL
        if isinstance(value, (int, float)):
            return cls.NUMBER
        if isinstance(value, str):
            return cls.STRING
        if isinstance(value, list):
            return cls.ARRAY
        if isinstance(value, dict):
            return cls.OBJECT
        raise TypeError(f"Unsupported JSON value type: {type(value)!r}")


@dataclass(frozen=True, slots=True)
class NodeRow:
    """One child entry of a graph node.

    Attributes:
        key:   Member name for object children; None for array elements and
               for a node that is a bare scalar.
        value: The scalar value, or the child count for container placeholders.
        type:  The row's RowType. Plain strings naming a member are coerced on
               construction; any other tag (a graph model's own scalar kinds,
               e.g. ``"integer"``) is kept as a plain string and the row is
               treated as a scalar.
    """

    key: str | None
    value: Any
    type: RowType | str

    def __post_init__(self) -> None:
        if isinstance(self.type, RowType):
            return
        tag = str(self.type)
        # frozen dataclass: bypass __setattr__ for the coercion
        object.__setattr__(
            self, "type", RowType(tag) if tag in _ROW_TYPE_VALUES else tag
        )

    @property
    def is_container(self) -> bool:
        return isinstance(self.type, RowType) and self.type.is_container

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> NodeRow:
        """Build a row from a ``{"key": ..., "value": ..., "type": ...}`` mapping.

        A missing ``key`` entry means the row has no key. A missing ``type``
        entry leaves an empty tag, so the row counts as a scalar.
        """
        return cls(
            key=row.get("key"), value=row.get("value"), type=row.get("type") or ""
        )


_ROW_TYPE_VALUES = frozenset(t.value for t in RowType)
