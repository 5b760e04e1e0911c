"""Breach notifier adapters.

The real breach-provider client is not part of this package. These adapters
cover local use: the logging notifier backs the CLI, and the in-memory one
backs the tests.
"""

import logging

from breachwatch.interfaces.breach_notifier import BreachNotifier

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods


class LoggingBreachNotifier(BreachNotifier):
    """Notifier that only records the subscription in the log."""

    def subscribe_hash(self, sha1: str) -> None:
        logger.info("Subscribed hash %s for breach notifications", sha1)


class InMemoryBreachNotifier(BreachNotifier):
    """Notifier that remembers every digest it was given.

    Set ``fail_with`` to an exception instance to make the next calls raise
    it, simulating an unavailable breach provider.
    """

    def __init__(self) -> None:
        self.subscribed: list[str] = []
        self.fail_with: Exception | None = None

    def subscribe_hash(self, sha1: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.subscribed.append(sha1)
