"""Global pytest fixtures and default marks for breachwatch."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

# pylint: disable=unused-argument

pytest_plugins = [
    "tests.fixtures.sqlite",
    "tests.fixtures.postgres",
    "tests.fixtures.datagen",
]

TESTS_ROOT = Path(__file__).parent.resolve()

# First directory under tests/ -> mark applied to everything collected there
DIRECTORY_MARKS = {
    "unit": pytest.mark.unit,
    "contract": pytest.mark.contract,
    "integration": pytest.mark.integration,
    "e2e": pytest.mark.e2e,
    "functional": pytest.mark.functional,
}


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark each item after the top-level test directory it lives in."""
    for item in items:
        try:
            relative = item.path.resolve().relative_to(TESTS_ROOT)
        except ValueError:
            continue
        mark = DIRECTORY_MARKS.get(relative.parts[0])
        if mark is None:
            continue
        if not any(m.name == mark.name for m in item.iter_markers()):
            item.add_marker(mark)


@pytest.fixture
def engine(request: pytest.FixtureRequest) -> Engine:
    """Indirection fixture to parametrize over engine-providing fixtures.

    Example:
        ```py
        @pytest.mark.parametrize("engine", ["postgres_engine", "sqlite_engine_file"], indirect=True)
        def test_something(engine): ...
        ```
    """
    return request.getfixturevalue(request.param)
