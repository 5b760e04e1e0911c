"""breachwatch CLI entry point.

Defines the top-level ``breachwatch`` command (via Click-Extra) and registers
its subcommand groups:

- ``breachwatch db``: forward-only database management.
- ``breachwatch subscribers``: operator commands over the subscriber store.

Examples
    $ breachwatch --version
    $ breachwatch db upgrade
    $ breachwatch -v subscribers add someone@example.com
"""

import logging
from functools import partial
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from breachwatch import __version__
from breachwatch.logging import (
    close_flight_recorder,
    config_console_handler,
    config_flight_recorder,
    log_startup,
)

from .db import db as db_group
from .helpers.log_level_parser import parse_log_level
from .subscribers import subscribers as subscribers_group

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """breachwatch command-line interface.

    Manage the subscriber database of the breach-notification service:
    migrate the schema, add and remove subscribers, and verify secondary
    email addresses.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Increase the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Decrease the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (file paths and timestamps in console logs).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to the flight-recorder log file.",
    default=Path(user_log_dir("breachwatch", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="BREACHWATCH_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep the last DEBUG-level log records in memory and write them to "
        "--log-path when a WARNING/ERROR occurs."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help=(
        "Also write the flight-recorder buffer to --log-path on clean exit. "
        "Normally the buffer is only written on WARNING/ERROR."
    ),
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). Repeatable "
        "(e.g. -L sqlalchemy=INFO -L alembic=WARNING)."
    ),
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def breachwatch(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """breachwatch command-line interface."""

    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    handlers: list[Handler] = []

    use_color = ctx.color is not False  # None or True => allow color
    handlers.append(
        config_console_handler(level=level, debug_mode=debug, color=use_color)
    )

    if flight_recorder:
        handlers.append(
            config_flight_recorder(
                path=log_path, flush_on_close=force_flush_flight_recorder
            )
        )

    logging.basicConfig(
        level=logging.DEBUG,  # capture all levels; handlers filter
        handlers=handlers,
        force=True,
    )

    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        force_flush_fr=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )

    # close callbacks run last-registered first
    ctx.call_on_close(logging.shutdown)
    for handler in handlers:
        if isinstance(handler, MemoryHandler):
            ctx.call_on_close(partial(close_flight_recorder, handler))


breachwatch.add_command(db_group)
breachwatch.add_command(subscribers_group)
