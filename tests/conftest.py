"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from alignment_sanity.models import AlignmentToken, TokenCategory

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------

TokenFactory = Callable[..., AlignmentToken]


@pytest.fixture
def make_token() -> TokenFactory:
    """Return a factory building tokens with neutral defaults for every bucket field."""

    def _make(
        line: int,
        column: int,
        text: str = ":",
        category: TokenCategory = TokenCategory.KEY_VALUE,
        *,
        indent: int = 0,
        parent_context: str = "pair",
        ordinal: int = 0,
        scope: str = "default_scope",
    ) -> AlignmentToken:
        return AlignmentToken(
            line=line,
            column=column,
            text=text,
            category=category,
            indent=indent,
            parent_context=parent_context,
            ordinal=ordinal,
            scope=scope,
        )

    return _make
