"""Database engine factory.

Use `make_engine` whenever an Engine is needed so every connection gets the
same backend-specific setup. For SQLite that means turning on foreign key
enforcement, which the ``email_addresses`` -> ``subscribers`` cascade relies
on, plus WAL journaling for the file-backed development database.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url

if TYPE_CHECKING:
    from sqlite3 import Connection as SQLiteConnection

    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

SQLITE_NAMES = {"sqlite", "sqlite+pysqlite"}


def is_sqlite(url: str | URL) -> bool:
    """Return True if the given SQLAlchemy URL or string corresponds to SQLite."""
    u = make_url(str(url))
    return u.get_backend_name() in SQLITE_NAMES


def make_engine(url: str | URL, *, echo: bool = False) -> Engine:
    """Create a SQLAlchemy Engine for the given URL.

    For SQLite the following PRAGMAs are applied on every new connection:
        - ``foreign_keys=ON`` (enforce referential integrity and cascades)
        - ``journal_mode=WAL`` (write-ahead logging)
        - ``synchronous=NORMAL`` (balanced durability)
        - ``temp_store=MEMORY`` (reduce temp file I/O)

    Args:
        url: Database connection URL (str or :class:`URL`).
        echo: If True, log SQL statements.

    Returns:
        Engine: Configured SQLAlchemy Engine.
    """

    engine = create_engine(url, echo=echo, future=True)
    logger.debug("Created engine for backend %s", engine.dialect.name)

    if is_sqlite(url):

        @event.listens_for(engine, "connect")
        def _sqlite_pragmas(dbapi_conn: SQLiteConnection, conn_record):  # type: ignore #pylint: disable=W0613
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON;")
            cur.execute("PRAGMA journal_mode=WAL;")
            cur.execute("PRAGMA synchronous=NORMAL;")
            cur.execute("PRAGMA temp_store=MEMORY;")
            cur.close()

    return engine
