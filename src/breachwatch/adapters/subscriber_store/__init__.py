"""Subscriber store adapters.

Provides the SQLAlchemy-backed store used in production and an in-memory
store used by tests.
"""

from .in_memory import InMemorySubscriberStore
from .sqlalchemy_store import SqlAlchemySubscriberStore

__all__ = [
    "InMemorySubscriberStore",
    "SqlAlchemySubscriberStore",
]
