"""Domain layer for breachwatch: records and hashing helpers."""

from .hashing import get_sha1
from .records import EmailAddress, Subscriber

__all__ = ["EmailAddress", "Subscriber", "get_sha1"]
