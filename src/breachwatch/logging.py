"""Logging helpers used by the breachwatch CLI.

Console output goes through Rich; an in-memory "flight recorder" keeps recent
DEBUG records and writes them to a file once something goes wrong. Both
sinks mask email addresses, so a stray address logged by any library shows
up as its digest.
"""

from __future__ import annotations

import logging
import os
import platform
import re
import sys
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import alembic
import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

from breachwatch.domain.hashing import get_sha1

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "breachwatch"

# local@domain.tld shapes, not an RFC 5322 validator
EMAIL_PATTERN = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")


class ThirdPartyPrefixFilter(logging.Filter):
    """Annotate third-party log records with a short prefix.

    Records from loggers outside ``breachwatch`` get ``record.prefix`` set to
    a bracketed token such as "[sqlalchemy]"; project records get an empty
    prefix. The filter never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not record.name.startswith(PROJECT_PREFIX):
            record.prefix = f"[{record.name.split('.')[0]}]"
        else:
            record.prefix = ""
        return True


class EmailMaskFilter(logging.Filter):
    """Replace email addresses in a record's message with ``<sha1:xxxxxxxx>``.

    The message is rendered with its args first, so addresses passed as
    ``%s`` arguments are caught too. The eight-character digest prefix is
    enough to correlate log lines with ``primary_sha1``/``sha1`` columns.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = EMAIL_PATTERN.sub(_mask_email, message)
        if masked != message:
            record.msg, record.args = masked, ()
        return True


def _mask_email(match: re.Match[str]) -> str:
    return f"<sha1:{get_sha1(match.group(0))[:8]}>"


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Configure and return a RichHandler writing to stderr.

    In debug mode the handler is set to DEBUG and shows source file/line
    information; otherwise third-party records get a short prefix.

    Args:
        level: Minimum level for console output (overridden to DEBUG in debug_mode).
        debug_mode: When True, enable debug formatting (show_path, timestamps).
        color: Enable color output when True.

    Returns:
        RichHandler: Configured handler suitable to attach to the root logger.
    """

    # Keep consistent with click-extra's --color / --no-color option
    ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]
    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    fmt = (
        "%(prefix)s %(message)s"
        if not debug_mode
        else "%(asctime)s %(name)s: %(message)s"
    )
    handler.setFormatter(logging.Formatter(fmt=fmt))

    if not debug_mode:
        handler.addFilter(ThirdPartyPrefixFilter())
    handler.addFilter(EmailMaskFilter())

    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Configure and return an in-memory flight recorder backed by a file.

    Buffers up to ``capacity`` records and flushes them to ``path`` when a
    record at ``flush_level`` or higher is emitted, or on close when
    ``flush_on_close`` is set.

    Args:
        path: Destination file path for flushed records.
        capacity: Number of records to buffer in memory.
        flush_level: Level at or above which the buffer will be flushed.
        flush_on_close: If True, flush the buffer when the handler is closed.

    Returns:
        MemoryHandler: A memory-backed handler with a FileHandler target.
    """

    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(process)d:%(threadName)s] %(levelname)s %(name)s:%(lineno)d: %(message)s"
        )
    )

    memory_handler = MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )
    memory_handler.addFilter(EmailMaskFilter())
    return memory_handler


def close_flight_recorder(handler: MemoryHandler) -> None:
    """Close the flight recorder, discarding its buffer unless ``flushOnClose``.

    ``logging.shutdown`` on Python 3.11 flushes every handler before closing
    it, which would write the buffer regardless of ``flushOnClose``. Running
    this first leaves nothing for that flush to write.
    """
    handler.acquire()
    try:
        if not handler.flushOnClose:
            handler.buffer.clear()
    finally:
        handler.release()
    handler.close()


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    log_path: Path | None,
    flight_recorder: bool,
    force_flush_fr: bool,
    logger_levels: dict[str, int],
) -> None:
    """Log a one-line startup summary plus DEBUG diagnostics.

    The DEBUG lines (interpreter, platform, library versions, handlers and
    logger overrides) normally only reach the flight recorder, which makes
    them available in the log file whenever a warning triggers a flush.

    Args:
        logger: Logger used to emit startup messages.
        app_version: Application version string to display.
        level: Effective console logging level (numeric).
        handlers: Active logging handlers attached to the root logger.
        log_path: Path to the flight-recorder output file, or None.
        flight_recorder: Whether the in-memory flight recorder is enabled.
        force_flush_fr: Whether the flight recorder flushes on close.
        logger_levels: Mapping of logger names to their configured numeric levels.
    """

    logger.info(
        "breachwatch %s: console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(level),
        "ON" if flight_recorder else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("Alembic: %s", alembic.__version__)
    logger.debug("SQLAlchemy: %s", sqlalchemy.__version__)
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    for handler in handlers:
        if isinstance(handler, MemoryHandler):
            logger.debug(
                "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
                str(log_path) if log_path else "<none>",
                handler.capacity,
                force_flush_fr,
            )
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()},
    )
