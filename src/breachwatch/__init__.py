"""breachwatch

Data-access layer for a breach-notification subscription service.
It stores subscribers and their secondary email addresses, keyed by SHA-1
digests so breach lookups never need the raw address.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
