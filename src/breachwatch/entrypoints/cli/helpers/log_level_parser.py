"""Parse ``NAME=LEVEL`` logger-level CLI options.

Values may be repeated or comma/space-separated; each item is converted to
the numeric logging level it names.
"""

import logging
import re

import click

DEFAULT_LIB_LEVELS = {"sqlalchemy": logging.WARNING, "alembic": logging.WARNING}


def _normalize_items(value: str | list[str] | tuple[str, ...]) -> list[str]:
    """Split a string or sequence of strings on commas/whitespace."""
    raw = value if isinstance(value, (tuple, list)) else [value]
    items: list[str] = []
    for v in raw:
        items.extend(s for s in re.split(r"[,\s]+", v) if s)
    return items


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...],
) -> dict[str, int]:
    """Click callback that parses NAME=LEVEL pairs into a name->level dict.

    Combines DEFAULT_LIB_LEVELS with any overrides supplied via the CLI.

    Raises:
        click.BadParameter: If an item is malformed (not NAME=LEVEL) or LEVEL is invalid.
    """

    levels = dict(DEFAULT_LIB_LEVELS)
    for item in _normalize_items(value):
        try:
            name, level_str = item.split("=", 1)
        except ValueError as e:
            raise click.BadParameter(f"Expected NAME=LEVEL, got {item!r}") from e
        lvl = logging.getLevelName(level_str.strip().upper())
        if not isinstance(lvl, int):
            raise click.BadParameter(f"Invalid log level: {level_str}")
        levels[name.strip()] = lvl
    return levels
