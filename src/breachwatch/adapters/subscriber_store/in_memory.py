"""In-memory SubscriberStore implementation for testing purposes."""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Sequence
from dataclasses import replace
from datetime import timedelta
from typing import TYPE_CHECKING

from breachwatch.adapters.id_generators import UUIDv4Generator
from breachwatch.domain.hashing import get_sha1
from breachwatch.domain.records import EmailAddress, Subscriber
from breachwatch.interfaces.subscriber_store import (
    MAX_EMAIL_LENGTH,
    CouldNotAddEmailError,
    SubscriberNotFoundError,
    SubscriberStore,
    VerificationTokenNotFoundError,
)
from breachwatch.utils.clock import Clock, utc_now

if TYPE_CHECKING:
    from breachwatch.interfaces.breach_notifier import BreachNotifier
    from breachwatch.interfaces.id_generator import IdGenerator


class InMemorySubscriberStore(SubscriberStore):
    """In-memory SubscriberStore implementation for testing purposes.

    Mirrors the constraints of the SQL schema: email length, unique primary
    email, and cascading deletes of secondary addresses.

    Note: This implementation is not thread-safe and is intended
    solely for use in single-threaded test scenarios
    """

    def __init__(
        self,
        notifier: BreachNotifier,
        *,
        token_generator: IdGenerator | None = None,
        clock: Clock = utc_now,
    ):
        self.notifier = notifier
        self.token_generator = token_generator or UUIDv4Generator()
        self.clock = clock
        self.subscribers: dict[int, Subscriber] = {}
        self.email_addresses: dict[int, EmailAddress] = {}
        self._subscriber_ids = itertools.count(1)
        self._email_ids = itertools.count(1)

    # --- subscriber lookups ---

    def get_subscriber_by_token(self, token: str) -> Subscriber | None:
        for subscriber in self.subscribers.values():
            if subscriber.primary_verification_token == token:
                return subscriber
        return None

    def get_subscriber_by_email(self, email: str) -> Subscriber | None:
        for subscriber in self.subscribers.values():
            if subscriber.primary_email == email:
                return subscriber
        return None

    def get_subscriber_by_id(self, subscriber_id: int) -> Subscriber | None:
        return self.subscribers.get(subscriber_id)

    def get_subscribers_by_hashes(self, hashes: Iterable[str]) -> list[Subscriber]:
        wanted = set(hashes)
        return [
            s
            for _, s in sorted(self.subscribers.items())
            if s.primary_verified and s.primary_sha1 in wanted
        ]

    # --- secondary address lookups ---

    def get_email_by_token(self, token: str) -> EmailAddress | None:
        for email_address in self.email_addresses.values():
            if email_address.verification_token == token:
                return email_address
        return None

    def get_email_addresses_by_hashes(
        self, hashes: Iterable[str]
    ) -> list[EmailAddress]:
        wanted = set(hashes)
        return [
            e
            for _, e in sorted(self.email_addresses.items())
            if e.verified and e.sha1 in wanted
        ]

    def get_email_addresses_by_subscriber(
        self, subscriber: Subscriber
    ) -> Sequence[EmailAddress]:
        return [
            e
            for _, e in sorted(self.email_addresses.items())
            if e.subscriber_id == subscriber.id
        ]

    # --- writes ---

    def add_subscriber(self, email: str) -> Subscriber:
        sha1 = get_sha1(email)
        self._check_length(email, sha1)
        now = self.clock()
        if (existing := self.get_subscriber_by_email(email)) is not None:
            subscriber = replace(existing, primary_verified=True, updated_at=now)
        else:
            subscriber = self._new_subscriber(email, sha1, verified=True)
        self.subscribers[subscriber.id] = subscriber
        self.notifier.subscribe_hash(sha1)
        return subscriber

    def add_unverified_subscriber(self, email: str) -> Subscriber:
        sha1 = get_sha1(email)
        self._check_length(email, sha1)
        if self.get_subscriber_by_email(email) is not None:
            raise CouldNotAddEmailError(sha1)
        subscriber = self._new_subscriber(email, sha1, verified=False)
        self.subscribers[subscriber.id] = subscriber
        return subscriber

    def add_subscriber_unverified_email_hash(
        self, subscriber: Subscriber, email: str
    ) -> EmailAddress:
        sha1 = get_sha1(email)
        self._check_length(email, sha1)
        if subscriber.id not in self.subscribers:
            raise CouldNotAddEmailError(sha1)
        now = self.clock()
        email_address = EmailAddress(
            id=next(self._email_ids),
            subscriber_id=subscriber.id,
            email=email,
            sha1=sha1,
            verified=False,
            verification_token=self.token_generator.new_id(),
            created_at=now,
            updated_at=now,
        )
        self.email_addresses[email_address.id] = email_address
        return email_address

    def verify_email_hash(self, token: str) -> EmailAddress:
        if (unverified := self.get_email_by_token(token)) is None:
            raise VerificationTokenNotFoundError(token)
        if unverified.verified:
            return unverified
        self.notifier.subscribe_hash(unverified.sha1)
        verified = replace(unverified, verified=True, updated_at=self.clock())
        self.email_addresses[verified.id] = verified
        return verified

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
        if (subscriber := self.get_subscriber_by_email(email)) is not None:
            self._delete_subscriber(subscriber.id)

    def remove_one_secondary_email(self, email_id: int) -> None:
        self.email_addresses.pop(email_id, None)

    def delete_unverified_subscribers(self, older_than: timedelta) -> int:
        cutoff = self.clock() - older_than
        stale = [
            s.id
            for s in self.subscribers.values()
            if not s.primary_verified and s.created_at < cutoff
        ]
        for subscriber_id in stale:
            self._delete_subscriber(subscriber_id)
        return len(stale)

    # --- internals ---

    def _new_subscriber(self, email: str, sha1: str, *, verified: bool) -> Subscriber:
        now = self.clock()
        return Subscriber(
            id=next(self._subscriber_ids),
            primary_email=email,
            primary_sha1=sha1,
            primary_verified=verified,
            primary_verification_token=self.token_generator.new_id(),
            all_emails_to_primary=False,
            created_at=now,
            updated_at=now,
            breaches_last_shown=now,
        )

    def _update_subscriber(self, subscriber_id: int, **values) -> Subscriber:
        if (existing := self.subscribers.get(subscriber_id)) is None:
            raise SubscriberNotFoundError(subscriber_id)
        updated = replace(existing, **values)
        self.subscribers[subscriber_id] = updated
        return updated

    def _delete_subscriber(self, subscriber_id: int) -> None:
        del self.subscribers[subscriber_id]
        for email_id in [
            e.id
            for e in self.email_addresses.values()
            if e.subscriber_id == subscriber_id
        ]:
            del self.email_addresses[email_id]

    @staticmethod
    def _check_length(email: str, sha1: str) -> None:
        if len(email) > MAX_EMAIL_LENGTH:
            raise CouldNotAddEmailError(sha1)
