"""Unit tests for the ``-L/--logger-level`` option callback."""

import logging

import click
import pytest

from breachwatch.entrypoints.cli.helpers.log_level_parser import (
    DEFAULT_LIB_LEVELS,
    parse_log_level,
)


def parse(value):
    # the callback ignores ctx and param
    return parse_log_level(None, None, value)  # type: ignore[arg-type]


def test_no_overrides_keeps_library_defaults():
    assert parse(()) == DEFAULT_LIB_LEVELS
    assert parse(()) is not DEFAULT_LIB_LEVELS


@pytest.mark.parametrize(
    "value",
    [
        ("breachwatch.adapters=DEBUG", "sqlalchemy=error"),
        "breachwatch.adapters=DEBUG, sqlalchemy=error",
        "breachwatch.adapters=debug sqlalchemy=Error",
    ],
    ids=["repeated-flags", "env-commas", "env-spaces-mixed-case"],
)
def test_overrides_from_flags_or_env_string(value):
    assert parse(value) == {
        "sqlalchemy": logging.ERROR,
        "alembic": logging.WARNING,
        "breachwatch.adapters": logging.DEBUG,
    }


def test_last_setting_for_a_logger_wins():
    assert parse(("alembic=INFO", "alembic=CRITICAL"))["alembic"] == logging.CRITICAL


@pytest.mark.parametrize(
    "item, message",
    [("sqlalchemy", "Expected NAME=LEVEL"), ("sqlalchemy=LOUD", "Invalid log level")],
)
def test_bad_items_are_reported_to_click(item, message):
    with pytest.raises(click.BadParameter, match=message):
        parse((item,))
