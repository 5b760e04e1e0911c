"""breachwatch Subscriber Store Interface Package"""

from .errors import (
    COULD_NOT_ADD_EMAIL,
    INVALID_VERIFICATION_TOKEN,
    CouldNotAddEmailError,
    SubscriberNotFoundError,
    SubscriberStoreError,
    VerificationTokenNotFoundError,
)
from .subscriber_store import MAX_EMAIL_LENGTH, SubscriberStore

__all__ = [
    "COULD_NOT_ADD_EMAIL",
    "INVALID_VERIFICATION_TOKEN",
    "MAX_EMAIL_LENGTH",
    "CouldNotAddEmailError",
    "SubscriberNotFoundError",
    "SubscriberStore",
    "SubscriberStoreError",
    "VerificationTokenNotFoundError",
]
