"""Fixtures for end-to-end CLI tests.

``log-demo`` is a test-only command that logs one line per level on a
breachwatch logger and a few lines on a pretend third-party logger, so tests
can assert which records reach the console and the flight recorder. The
remaining fixtures provide a CliRunner, an isolated working directory and a
scratch SQLite database.
"""

import logging
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from breachwatch.config import DB_URL_ENV_VAR
from breachwatch.entrypoints.cli.main import breachwatch

# pylint: disable=redefined-outer-name

DEMO_LOGGER = "breachwatch.demo"
THIRD_PARTY_LOGGER = "some.thirdparty"

# (logger, level, message) in emission order
DEMO_RECORDS = [
    (DEMO_LOGGER, logging.DEBUG, "demo: looking up 3 digests"),
    (DEMO_LOGGER, logging.INFO, "demo: added subscriber id=1"),
    (DEMO_LOGGER, logging.WARNING, "demo: could not add email"),
    (DEMO_LOGGER, logging.ERROR, "demo: notifier unreachable"),
    (DEMO_LOGGER, logging.CRITICAL, "demo: database gone"),
    (THIRD_PARTY_LOGGER, logging.DEBUG, "vendor: pool checkout"),
    (THIRD_PARTY_LOGGER, logging.INFO, "vendor: connected"),
    (THIRD_PARTY_LOGGER, logging.WARNING, "vendor: slow query"),
    (DEMO_LOGGER, logging.DEBUG, "demo: trailing debug line"),
]


@click.command()
def log_demo():
    """Emit ``DEMO_RECORDS`` in order."""
    for name, level, message in DEMO_RECORDS:
        logging.getLogger(name).log(level, message)


@pytest.fixture
def registered_log_demo():
    """Attach ``log-demo`` to the top-level group for one test."""
    breachwatch.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        # cloup also files the command under a help section
        breachwatch.commands.pop("log-demo", None)
        sections = [getattr(breachwatch, "_default_section", None)]
        sections += getattr(breachwatch, "_sections", [])
        for section in filter(None, sections):
            section.commands.pop("log-demo", None)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside ``runner.isolated_filesystem()``."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def db_env(tmp_path: Path) -> dict[str, str]:
    """Environment pointing the CLI at an empty SQLite file under ``tmp_path``."""
    return {DB_URL_ENV_VAR: f"sqlite+pysqlite:///{tmp_path / 'breachwatch.db'}"}


@pytest.fixture
def cli(runner, db_env, tmp_path: Path):
    """Invoke ``breachwatch`` against the scratch database.

    The flight recorder writes into ``tmp_path`` so tests never touch the
    user's log directory.
    """

    def _invoke(*args: str, **kwargs):
        log_args = ["--log-path", str(tmp_path / "flight.log")]
        return runner.invoke(breachwatch, [*log_args, *args], env=db_env, **kwargs)

    return _invoke
