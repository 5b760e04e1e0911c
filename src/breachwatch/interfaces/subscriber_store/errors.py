"""Exceptions for subscriber store operations."""

COULD_NOT_ADD_EMAIL = "error-could-not-add-email"
INVALID_VERIFICATION_TOKEN = "error-invalid-verification-token"


class SubscriberStoreError(Exception):
    """Base class for subscriber store errors."""


class CouldNotAddEmailError(SubscriberStoreError):
    """The store rejected an email address (too long, constraint violation).

    The message is the stable identifier ``error-could-not-add-email`` so
    callers can map it to a user-facing string; the underlying database error
    is chained as ``__cause__``.

    Attributes:
        sha1 (str): Digest of the rejected address.
    """

    def __init__(self, sha1: str):
        super().__init__(COULD_NOT_ADD_EMAIL)
        self.sha1 = sha1


class VerificationTokenNotFoundError(SubscriberStoreError):
    """No secondary email address carries the given verification token.

    Attributes:
        token (str): The token that was looked up.
    """

    def __init__(self, token: str):
        super().__init__(INVALID_VERIFICATION_TOKEN)
        self.token = token


class SubscriberNotFoundError(SubscriberStoreError):
    """An update targeted a subscriber that no longer exists.

    Attributes:
        subscriber_id (int): Primary key that was not found.
    """

    def __init__(self, subscriber_id: int):
        super().__init__(f"Subscriber {subscriber_id} does not exist.")
        self.subscriber_id = subscriber_id
