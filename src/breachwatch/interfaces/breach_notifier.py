"""Interface for the breach-provider subscription collaborator.

When an address is verified, its digest is registered with the breach data
provider so future breaches containing it trigger a notification. The
provider integration itself lives outside this package; only the port is
defined here.
"""

import abc

# pylint: disable=too-few-public-methods


class BreachNotifier(abc.ABC):
    """Contract for registering a verified digest with the breach provider."""

    @abc.abstractmethod
    def subscribe_hash(self, sha1: str) -> None:
        """Register ``sha1`` for breach notifications.

        Implementations must be idempotent: subscribing the same digest twice
        is not an error.

        Args:
            sha1: Lowercase hex SHA-1 digest of a verified email address.
        """
