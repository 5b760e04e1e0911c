"""SQLAlchemy-backed SubscriberStore adapter for breachwatch.

One SQLAlchemy Core code path serves both SQLite and PostgreSQL. The only
dialect-specific piece is the ``INSERT ... ON CONFLICT DO UPDATE`` used to
upsert primary subscribers.

Usage:
    Instantiate SqlAlchemySubscriberStore with a SQLAlchemy Connection; the
    caller (normally the unit of work) owns the transaction.

Exceptions:
    IntegrityError/DataError raised while writing an email address are mapped
    to CouldNotAddEmailError. Everything else propagates unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import timedelta
from typing import TYPE_CHECKING, NoReturn

from sqlalchemy import delete, insert, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import DataError, IntegrityError

from breachwatch.adapters.db.dialects import DialectName, UnsupportedDialect
from breachwatch.adapters.id_generators import UUIDv4Generator
from breachwatch.domain.hashing import get_sha1
from breachwatch.domain.records import EmailAddress, Subscriber
from breachwatch.interfaces.subscriber_store import (
    CouldNotAddEmailError,
    SubscriberNotFoundError,
    SubscriberStore,
    VerificationTokenNotFoundError,
)
from breachwatch.utils.clock import Clock, utc_now

from .schema import email_addresses, subscribers

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection
    from sqlalchemy.sql.dml import Insert

    from breachwatch.interfaces.breach_notifier import BreachNotifier
    from breachwatch.interfaces.id_generator import IdGenerator

logger = logging.getLogger(__name__)


class SqlAlchemySubscriberStore(SubscriberStore):
    """SubscriberStore implementation that supports both Postgres and SQLite."""

    def __init__(
        self,
        connection: Connection,
        notifier: BreachNotifier,
        *,
        token_generator: IdGenerator | None = None,
        clock: Clock = utc_now,
    ):
        self.connection = connection
        self.notifier = notifier
        self.token_generator = token_generator or UUIDv4Generator()
        self.clock = clock
        self.dialect = DialectName.from_sqlalchemy(connection)

    # --- subscriber lookups ---

    def get_subscriber_by_token(self, token: str) -> Subscriber | None:
        return self._one_subscriber(
            subscribers.c.primary_verification_token == token
        )

    def get_subscriber_by_email(self, email: str) -> Subscriber | None:
        return self._one_subscriber(subscribers.c.primary_email == email)

    def get_subscriber_by_id(self, subscriber_id: int) -> Subscriber | None:
        return self._one_subscriber(subscribers.c.id == subscriber_id)

    def get_subscribers_by_hashes(self, hashes: Iterable[str]) -> list[Subscriber]:
        if not (wanted := list(hashes)):
            return []
        stmt = (
            select(subscribers)
            .where(
                subscribers.c.primary_sha1.in_(wanted),
                subscribers.c.primary_verified.is_(True),
            )
            .order_by(subscribers.c.id.asc())
        )
        rows = self.connection.execute(stmt).mappings().all()
        return [Subscriber(**row) for row in rows]

    # --- secondary address lookups ---

    def get_email_by_token(self, token: str) -> EmailAddress | None:
        stmt = select(email_addresses).where(
            email_addresses.c.verification_token == token
        )
        if not (row := self.connection.execute(stmt).mappings().one_or_none()):
            return None
        return EmailAddress(**row)

    def get_email_addresses_by_hashes(
        self, hashes: Iterable[str]
    ) -> list[EmailAddress]:
        if not (wanted := list(hashes)):
            return []
        stmt = (
            select(email_addresses)
            .where(
                email_addresses.c.sha1.in_(wanted),
                email_addresses.c.verified.is_(True),
            )
            .order_by(email_addresses.c.id.asc())
        )
        rows = self.connection.execute(stmt).mappings().all()
        return [EmailAddress(**row) for row in rows]

    def get_email_addresses_by_subscriber(
        self, subscriber: Subscriber
    ) -> Sequence[EmailAddress]:
        stmt = (
            select(email_addresses)
            .where(email_addresses.c.subscriber_id == subscriber.id)
            .order_by(email_addresses.c.id.asc())
        )
        rows = self.connection.execute(stmt).mappings().all()
        return [EmailAddress(**row) for row in rows]

    # --- writes ---

    def add_subscriber(self, email: str) -> Subscriber:
        sha1 = get_sha1(email)
        now = self.clock()
        stmt = self._build_upsert(
            {
                "primary_email": email,
                "primary_sha1": sha1,
                "primary_verified": True,
                "primary_verification_token": self.token_generator.new_id(),
                "created_at": now,
                "updated_at": now,
                "breaches_last_shown": now,
            },
            on_conflict={"primary_verified": True, "updated_at": now},
        ).returning(subscribers)

        try:
            row = self.connection.execute(stmt).mappings().one()
        except (IntegrityError, DataError) as e:
            self._raise_could_not_add_email(sha1, e)

        self.notifier.subscribe_hash(sha1)
        logger.info("Added verified subscriber %s (id=%s)", sha1, row["id"])
        return Subscriber(**row)

    def add_unverified_subscriber(self, email: str) -> Subscriber:
        sha1 = get_sha1(email)
        now = self.clock()
        stmt = (
            insert(subscribers)
            .values(
                primary_email=email,
                primary_sha1=sha1,
                primary_verified=False,
                primary_verification_token=self.token_generator.new_id(),
                created_at=now,
                updated_at=now,
                breaches_last_shown=now,
            )
            .returning(subscribers)
        )
        try:
            row = self.connection.execute(stmt).mappings().one()
        except (IntegrityError, DataError) as e:
            self._raise_could_not_add_email(sha1, e)

        logger.info("Added unverified subscriber %s (id=%s)", sha1, row["id"])
        return Subscriber(**row)

    def add_subscriber_unverified_email_hash(
        self, subscriber: Subscriber, email: str
    ) -> EmailAddress:
        sha1 = get_sha1(email)
        now = self.clock()
        stmt = (
            insert(email_addresses)
            .values(
                subscriber_id=subscriber.id,
                email=email,
                sha1=sha1,
                verified=False,
                verification_token=self.token_generator.new_id(),
                created_at=now,
                updated_at=now,
            )
            .returning(email_addresses)
        )
        try:
            row = self.connection.execute(stmt).mappings().one()
        except (IntegrityError, DataError) as e:
            self._raise_could_not_add_email(sha1, e)

        logger.info(
            "Added unverified email %s for subscriber id=%s", sha1, subscriber.id
        )
        return EmailAddress(**row)

    def verify_email_hash(self, token: str) -> EmailAddress:
        if (unverified := self.get_email_by_token(token)) is None:
            raise VerificationTokenNotFoundError(token)
        if unverified.verified:
            logger.debug("Email %s already verified", unverified.sha1)
            return unverified

        self.notifier.subscribe_hash(unverified.sha1)
        stmt = (
            update(email_addresses)
            .where(email_addresses.c.id == unverified.id)
            .values(verified=True, updated_at=self.clock())
            .returning(email_addresses)
        )
        row = self.connection.execute(stmt).mappings().one()
        logger.info("Verified email %s", unverified.sha1)
        return EmailAddress(**row)

    def set_breaches_last_shown_now(self, subscriber: Subscriber) -> Subscriber:
        now = self.clock()
        return self._update_subscriber(
            subscriber.id, breaches_last_shown=now, updated_at=now
        )

    def set_all_emails_to_primary(
        self, subscriber: Subscriber, value: bool
    ) -> Subscriber:
        return self._update_subscriber(
            subscriber.id, all_emails_to_primary=value, updated_at=self.clock()
        )

    # --- deletes ---

    def remove_subscriber_by_email(self, email: str) -> None:
        result = self.connection.execute(
            delete(subscribers).where(subscribers.c.primary_email == email)
        )
        logger.info("Removed %d subscriber(s) %s", result.rowcount, get_sha1(email))

    def remove_one_secondary_email(self, email_id: int) -> None:
        self.connection.execute(
            delete(email_addresses).where(email_addresses.c.id == email_id)
        )
        logger.info("Removed secondary email id=%s", email_id)

    def delete_unverified_subscribers(self, older_than: timedelta) -> int:
        cutoff = self.clock() - older_than
        result = self.connection.execute(
            delete(subscribers).where(
                subscribers.c.primary_verified.is_(False),
                subscribers.c.created_at < cutoff,
            )
        )
        logger.info(
            "Deleted %d unverified subscriber(s) created before %s",
            result.rowcount,
            cutoff.isoformat(),
        )
        return result.rowcount

    # --- internals ---

    def _one_subscriber(self, criterion) -> Subscriber | None:
        stmt = select(subscribers).where(criterion)
        if not (row := self.connection.execute(stmt).mappings().one_or_none()):
            return None
        return Subscriber(**row)

    def _update_subscriber(self, subscriber_id: int, **values) -> Subscriber:
        stmt = (
            update(subscribers)
            .where(subscribers.c.id == subscriber_id)
            .values(**values)
            .returning(subscribers)
        )
        if not (row := self.connection.execute(stmt).mappings().one_or_none()):
            raise SubscriberNotFoundError(subscriber_id)
        return Subscriber(**row)

    def _build_upsert(self, values: dict, on_conflict: dict) -> Insert:
        """Build an insert that updates ``on_conflict`` columns for a known email."""
        if self.dialect is DialectName.POSTGRES:
            pg_stmt = pg_insert(subscribers).values(**values)
            return pg_stmt.on_conflict_do_update(
                index_elements=[subscribers.c.primary_email], set_=on_conflict
            )
        if self.dialect is DialectName.SQLITE:
            sqlite_stmt = sqlite_insert(subscribers).values(**values)
            return sqlite_stmt.on_conflict_do_update(
                index_elements=[subscribers.c.primary_email], set_=on_conflict
            )

        # DialectName.from_sqlalchemy already rejects anything else
        msg = f"Unsupported dialect: {self.dialect}"  # pragma: no cover
        raise UnsupportedDialect(msg)  # pragma: no cover

    @staticmethod
    def _raise_could_not_add_email(sha1: str, error: Exception) -> NoReturn:
        """Log the rejected write and raise CouldNotAddEmailError from ``error``."""
        logger.warning("Could not add email %s: %s", sha1, error)
        raise CouldNotAddEmailError(sha1) from error
