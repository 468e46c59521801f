"""pytest plugin for json-node-editor.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from json_node_editor import ABSENT, format_path, resolve


@pytest.fixture(scope="session")
def assert_path_value() -> Any:
    """Fixture that returns a callable asserting the value at a JSON path.

    The fixture is session-scoped because the returned callable is stateless.

    Usage in tests::

        def test_rename(assert_path_value):
            assert_path_value({"user": {"name": "Bob"}}, ["user", "name"], "Bob")

        def test_removed(assert_path_value):
            assert_path_value({"user": {}}, ["user", "name"], ABSENT)

    Returns:
        A callable ``_assert(document, path, expected) -> None`` that raises
        ``AssertionError`` when ``resolve(document, path) != expected``.
        Pass ``ABSENT`` as ``expected`` to assert that the path is missing.
    """

    def _assert(document: Any, path: Sequence[int | str], expected: Any) -> None:
        """Assert that ``document`` holds ``expected`` at ``path``.

        Raises:
            AssertionError: With the formatted path, the actual and the
                expected values.
        """
        actual = resolve(document, path)
        if expected is ABSENT or actual is ABSENT:
            matched = actual is expected
        else:
            matched = actual == expected and type(actual) is type(expected)
        if not matched:
            raise AssertionError(
                f"Unexpected value at {format_path(path)}\n"
                f"  actual:   {actual!r}\n"
                f"  expected: {expected!r}"
            )

    return _assert
