"""UTCDateTime behaviour on the real ``subscribers`` columns.

Timestamps written with a non-UTC offset must read back as the same instant
in UTC, and comparisons in SQL (the purge of stale unverified subscribers
filters on ``created_at < cutoff``) must compare instants, not wall times.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import pytest
import sqlalchemy as sa

from breachwatch.adapters.subscriber_store.schema import subscribers
from breachwatch.domain.hashing import get_sha1

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

pytestmark = pytest.mark.parametrize(
    "engine",
    ["sqlite_engine_file", "postgres_engine"],
    indirect=True,
)

MOUNTAIN = timezone(timedelta(hours=-7))
TOKYO = timezone(timedelta(hours=9))

# 2024-01-01 12:00Z written three ways, then one row an hour later
CREATED = {
    "utc@test.com": datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
    "mountain@test.com": datetime(2024, 1, 1, 5, 0, tzinfo=MOUNTAIN),
    "tokyo@test.com": datetime(2024, 1, 1, 21, 0, tzinfo=TOKYO),
    "later@test.com": datetime(2024, 1, 1, 13, 0, tzinfo=timezone.utc),
}


@pytest.fixture
def seeded(engine: Engine) -> Engine:
    rows = [
        {
            "primary_email": email,
            "primary_sha1": get_sha1(email),
            "primary_verified": False,
            "primary_verification_token": f"tok-{get_sha1(email)[:30]}",
            "created_at": created,
            "updated_at": created,
            "breaches_last_shown": created,
        }
        for email, created in CREATED.items()
    ]
    with engine.begin() as conn:
        conn.execute(sa.insert(subscribers), rows)
    return engine


def test_offsets_read_back_as_utc(seeded: Engine):
    with seeded.connect() as conn:
        got = dict(
            conn.execute(
                sa.select(subscribers.c.primary_email, subscribers.c.created_at)
            ).all()
        )
    noon = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    for email in ("utc@test.com", "mountain@test.com", "tokyo@test.com"):
        assert got[email] == noon
        assert got[email].tzinfo is timezone.utc


@pytest.mark.parametrize(
    "cutoff, expected",
    [
        (datetime(2024, 1, 1, 12, 30, tzinfo=timezone.utc), 3),
        (datetime(2024, 1, 1, 5, 30, tzinfo=MOUNTAIN), 3),
        (datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc), 0),
        (datetime(2024, 1, 1, 23, 0, tzinfo=TOKYO), 4),
    ],
    ids=["utc", "mountain", "boundary-exclusive", "tokyo"],
)
def test_created_at_filters_compare_instants(seeded: Engine, cutoff, expected):
    with seeded.connect() as conn:
        count = conn.execute(
            sa.select(sa.func.count())  # pylint: disable=not-callable
            .select_from(subscribers)
            .where(subscribers.c.created_at < cutoff)
        ).scalar_one()
    assert count == expected


def test_ordering_by_created_at_uses_instants(seeded: Engine):
    with seeded.connect() as conn:
        emails = conn.execute(
            sa.select(subscribers.c.primary_email).order_by(
                subscribers.c.created_at, subscribers.c.id
            )
        ).scalars().all()
    assert emails[-1] == "later@test.com"
