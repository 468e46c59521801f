"""Strict JSON text codec.

Parsing accepts only standard JSON: the ``NaN``, ``Infinity`` and
``-Infinity`` literals that Python's ``json`` module tolerates by default are
rejected, and so are numbers that overflow to a non-finite float (``1e999``).
Every parser failure surfaces as ``DocumentParseError``, including integers
over the interpreter's digit limit and nesting deeper than the recursion
limit.

Serialization uses the configured indentation (2 spaces by default) and
raises ``DocumentEncodeError`` for anything it cannot write as standard JSON.
"""

from __future__ import annotations

import json
import math
from typing import Any, NoReturn

from json_node_editor.config import EditorConfig
from json_node_editor.exceptions import (
    DocumentEncodeError,
    DocumentParseError,
    ParseSource,
)

__all__ = ["dump_json", "parse_json"]

_DEFAULT_CONFIG = EditorConfig()


def parse_json(text: str, source: ParseSource = ParseSource.DOCUMENT) -> Any:
    """Parse ``text`` as standard JSON.

    Args:
        text:   The JSON text.
        source: Which text this is; carried on the raised error.

    Returns:
        The parsed JSON value.

    Raises:
        DocumentParseError: If ``text`` is not valid JSON, or holds a number
            or a nesting depth this interpreter cannot represent.
    """

    def _reject_constant(name: str) -> NoReturn:
        raise DocumentParseError(f"Unexpected token {name}", source=source)

    def _parse_float(literal: str) -> float:
        value = float(literal)
        if not math.isfinite(value):
            raise DocumentParseError(f"Number out of range: {literal}", source=source)
        return value

    try:
        return json.loads(
            text, parse_constant=_reject_constant, parse_float=_parse_float
        )
    except DocumentParseError:
        raise
    except json.JSONDecodeError as exc:
        raise DocumentParseError.from_decode_error(exc, source) from exc
    except (ValueError, RecursionError) as exc:
        # int digit limit, or nesting beyond the recursion limit
        raise DocumentParseError(str(exc), source=source) from exc


def dump_json(value: Any, config: EditorConfig | None = None) -> str:
    """Serialize a JSON value using ``config`` (defaults to 2-space indent).

    Raises:
        DocumentEncodeError: If ``value`` holds a non-finite float or a
            non-JSON type, is circular, or is nested too deeply to write.
    """
    cfg = config if config is not None else _DEFAULT_CONFIG
    try:
        return json.dumps(
            value,
            indent=cfg.indent,
            ensure_ascii=cfg.ensure_ascii,
            allow_nan=False,
        )
    except (TypeError, ValueError, RecursionError) as exc:
        raise DocumentEncodeError(str(exc)) from exc
