"""SQLAlchemy-backed Unit of Work for breachwatch.

Provides a context-managed UnitOfWork using a SQLAlchemy Connection
and the SqlAlchemySubscriberStore.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from breachwatch.adapters.subscriber_store import SqlAlchemySubscriberStore
from breachwatch.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

    from breachwatch.interfaces.breach_notifier import BreachNotifier


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy-backed Unit of Work."""

    def __init__(self, engine: Engine, notifier: BreachNotifier):
        self.engine = engine
        self.notifier = notifier
        self.connection: Connection

    def __enter__(self):
        self.connection = self.engine.connect()
        self.subscribers = SqlAlchemySubscriberStore(self.connection, self.notifier)
        return super().__enter__()

    def __exit__(self, *args):
        super().__exit__(*args)
        self.connection.close()

    def commit(self):
        self.connection.commit()

    def rollback(self):
        self.connection.rollback()
