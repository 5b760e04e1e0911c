"""Subscriber store port for breachwatch.

Defines the `SubscriberStore` ABC: persistence for primary subscribers and
their secondary email addresses, looked up by SHA-1 digest or by
verification token.

Layering & dependency rules:
- Lives under `breachwatch.interfaces`. Do NOT import from adapters or entrypoints.

Contract overview
-----------------
Writes:
- `add_subscriber` upserts on `primary_email`: a new row is created verified,
  an existing row is re-marked verified and its `updated_at` refreshed. The
  breach notifier is told about the digest either way.
- `add_subscriber_unverified_email_hash` always inserts a new secondary row
  with `verified=False` and a fresh verification token.
- `verify_email_hash` notifies the breach notifier **before** flipping
  `verified`, so a notifier failure leaves the row unverified.
- Every write refreshes `updated_at` from the store's clock.
- Rejected addresses raise `CouldNotAddEmailError` (`error-could-not-add-email`).

Reads:
- Lookups by token/email/id return `None` when nothing matches.
- Hash lookups return only verified rows, ordered by `id`.

Deletes:
- Removing a subscriber removes its secondary addresses.
- Deleting something that does not exist is a no-op.
"""

from __future__ import annotations

import abc
from collections.abc import Iterable, Sequence
from datetime import timedelta

from breachwatch.domain.records import EmailAddress, Subscriber

#: Longest email the store accepts, in characters (both tables).
MAX_EMAIL_LENGTH = 255


class SubscriberStore(abc.ABC):
    """Persistence for subscribers and their secondary email addresses."""

    # --- subscriber lookups ---

    @abc.abstractmethod
    def get_subscriber_by_token(self, token: str) -> Subscriber | None:
        """Return the subscriber whose primary verification token is ``token``.

        Matches whether or not the subscriber is already verified.
        """

    @abc.abstractmethod
    def get_subscriber_by_email(self, email: str) -> Subscriber | None:
        """Return the subscriber whose primary email is exactly ``email``."""

    @abc.abstractmethod
    def get_subscriber_by_id(self, subscriber_id: int) -> Subscriber | None:
        """Return the subscriber with primary key ``subscriber_id``."""

    @abc.abstractmethod
    def get_subscribers_by_hashes(self, hashes: Iterable[str]) -> list[Subscriber]:
        """Return verified subscribers whose ``primary_sha1`` is in ``hashes``.

        Args:
            hashes: SHA-1 digests to match. An empty iterable yields ``[]``.

        Returns:
            list[Subscriber]: Verified matches ordered by ``id``.
        """

    # --- secondary address lookups ---

    @abc.abstractmethod
    def get_email_by_token(self, token: str) -> EmailAddress | None:
        """Return the secondary address carrying verification ``token``."""

    @abc.abstractmethod
    def get_email_addresses_by_hashes(
        self, hashes: Iterable[str]
    ) -> list[EmailAddress]:
        """Return verified secondary addresses whose ``sha1`` is in ``hashes``.

        Args:
            hashes: SHA-1 digests to match. An empty iterable yields ``[]``.

        Returns:
            list[EmailAddress]: Verified matches ordered by ``id``.
        """

    @abc.abstractmethod
    def get_email_addresses_by_subscriber(
        self, subscriber: Subscriber
    ) -> Sequence[EmailAddress]:
        """Return every secondary address of ``subscriber``, verified or not."""

    # --- writes ---

    @abc.abstractmethod
    def add_subscriber(self, email: str) -> Subscriber:
        """Create or refresh a verified subscriber for ``email``.

        Args:
            email: Primary email address, stored as given.

        Returns:
            Subscriber: The inserted or updated row.

        Raises:
            CouldNotAddEmailError: If the store rejects the address.
        """

    @abc.abstractmethod
    def add_unverified_subscriber(self, email: str) -> Subscriber:
        """Create an unverified subscriber with a fresh verification token.

        Raises:
            CouldNotAddEmailError: If the store rejects the address, including
                when a subscriber with this email already exists.
        """

    @abc.abstractmethod
    def add_subscriber_unverified_email_hash(
        self, subscriber: Subscriber, email: str
    ) -> EmailAddress:
        """Attach an unverified secondary address to ``subscriber``.

        Args:
            subscriber: Owner of the new address.
            email: Secondary email address.

        Returns:
            EmailAddress: The new row, with ``verified=False`` and a UUID4
            ``verification_token``.

        Raises:
            CouldNotAddEmailError: If the store rejects the address.
        """

    @abc.abstractmethod
    def verify_email_hash(self, token: str) -> EmailAddress:
        """Verify the secondary address carrying ``token``.

        The digest is passed to the breach notifier first; the row is then
        marked verified. Verifying an already verified row returns it
        unchanged without notifying again.

        Returns:
            EmailAddress: The verified row.

        Raises:
            VerificationTokenNotFoundError: If no row carries ``token``.
        """

    @abc.abstractmethod
    def set_breaches_last_shown_now(self, subscriber: Subscriber) -> Subscriber:
        """Stamp ``breaches_last_shown`` with the current time.

        Raises:
            SubscriberNotFoundError: If the subscriber row no longer exists.
        """

    @abc.abstractmethod
    def set_all_emails_to_primary(
        self, subscriber: Subscriber, value: bool
    ) -> Subscriber:
        """Set whether alerts for secondary addresses go to the primary email.

        Raises:
            SubscriberNotFoundError: If the subscriber row no longer exists.
        """

    # --- deletes ---

    @abc.abstractmethod
    def remove_subscriber_by_email(self, email: str) -> None:
        """Delete the subscriber with primary email ``email`` and its secondaries."""

    @abc.abstractmethod
    def remove_one_secondary_email(self, email_id: int) -> None:
        """Delete a single secondary address by primary key."""

    @abc.abstractmethod
    def delete_unverified_subscribers(self, older_than: timedelta) -> int:
        """Delete unverified subscribers created more than ``older_than`` ago.

        Returns:
            int: Number of subscribers deleted.
        """
