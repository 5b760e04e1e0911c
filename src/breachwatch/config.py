"""Configuration utilities for breachwatch.

Small helpers and constants related to application configuration.
"""

import os
import sys
from importlib.resources import files
from typing import TextIO

from alembic.config import Config

DB_URL_ENV_VAR = "BREACHWATCH_DB_URL"  # pragma: no mutate
ALEMBIC_URL_KEY = "sqlalchemy.url"  # pragma: no mutate
ALEMBIC_SCRIPT_LOCATION_KEY = "script_location"  # pragma: no mutate

#: Unverified subscribers older than this many days are purged by default.
DELETE_UNVERIFIED_SUBSCRIBERS_DAYS = 14


class DatabaseUrlNotSetError(Exception):
    """Raised when the BREACHWATCH_DB_URL environment variable is not set."""


def get_db_url() -> str:
    """Get the database URL from the environment.

    Returns:
        The value of the `BREACHWATCH_DB_URL` environment variable.

    Raises:
        DatabaseUrlNotSetError: If `BREACHWATCH_DB_URL` is not set.
    """
    if not (url := os.environ.get(DB_URL_ENV_VAR)):
        raise DatabaseUrlNotSetError
    return url


def build_alembic_config(
    db_url: str | None = None, stdout: TextIO = sys.stdout
) -> Config:
    """Build an Alembic `Config` object for breachwatch's migrations.

    Sets only Alembic "main" options:
    - `sqlalchemy.url` → the database URL you pass
    - `script_location` → the packaged Alembic scripts

    Args:
        db_url: SQLAlchemy database URL (e.g., `sqlite:///breachwatch.db`).
            Can be `None` only where Alembic won't need to connect.
        stdout: Text stream Alembic will write status lines to.

    Returns:
        An `alembic.config.Config` pointing to breachwatch's migration scripts.
    """
    cfg = Config(stdout=stdout)
    if db_url is not None:
        cfg.set_main_option(ALEMBIC_URL_KEY, db_url)
    cfg.set_main_option(
        ALEMBIC_SCRIPT_LOCATION_KEY,
        str(files("breachwatch.adapters.db.alembic")),
    )
    return cfg
