"""Fixtures for SubscriberStore contract tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from breachwatch.adapters.subscriber_store import (
    InMemorySubscriberStore,
    SqlAlchemySubscriberStore,
)
from breachwatch.interfaces.subscriber_store import SubscriberStore

# pylint: disable=redefined-outer-name

ENGINE_FIXTURES = {
    "sql_memory": "sqlite_engine_memory",
    "sql_file": "sqlite_engine_file",
    "postgres": "postgres_engine",
}


@pytest.fixture(params=["memory", "sql_memory", "sql_file", "postgres"])
def store(
    request: pytest.FixtureRequest, notifier, tokens, clock
) -> Iterator[SubscriberStore]:
    """Return a fresh SubscriberStore for the requested backend.

    Supported params:
      - `"memory"` → InMemorySubscriberStore
      - `"sql_memory"` → in-memory SQLite (tables from metadata)
      - `"sql_file"` → file-based SQLite migrated with Alembic
      - `"postgres"` → PostgreSQL via Testcontainers

    Engines are requested lazily so only the selected backend is built.
    """

    if request.param == "memory":
        yield InMemorySubscriberStore(notifier, token_generator=tokens, clock=clock)
        return
    if request.param not in ENGINE_FIXTURES:
        raise ValueError(f"unknown store type: {request.param}")

    engine = request.getfixturevalue(ENGINE_FIXTURES[request.param])
    with engine.connect() as conn:
        yield SqlAlchemySubscriberStore(
            conn, notifier, token_generator=tokens, clock=clock
        )
