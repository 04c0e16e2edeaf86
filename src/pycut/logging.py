"""Diagnostics logging for the PYCUT command line.

Two sinks are configured from one `LoggingSettings` value:

- a Rich console handler on stderr, filtered by the ``-v``/``-q`` level;
- a "flight recorder": a `MemoryHandler` that keeps recent records at DEBUG
  and writes them to a file once something goes wrong.

The unit-test report is not logging. It goes to stdout through ``click.echo``
so that it never interleaves with these records.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError, version
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Handler, Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "pycut"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d: %(message)s"


def verbosity_level(verbose_count: int = 0, quiet_count: int = 0) -> int:
    """Console level for repeated ``-v`` / ``-q`` flags, starting at WARNING.

    The result is clamped to DEBUG..CRITICAL.
    """
    level = logging.WARNING - 10 * verbose_count + 10 * quiet_count
    return max(logging.DEBUG, min(logging.CRITICAL, level))


@dataclass(frozen=True)
class LoggingSettings:
    """What the ``pycut`` group options ask of logging."""

    level: int = logging.WARNING
    debug: bool = False
    color: bool = True
    log_path: Path | None = None
    flight_recorder: bool = True
    capacity: int = 2000
    force_flush: bool = False
    logger_levels: Mapping[str, int] = field(default_factory=dict)

    @property
    def console_level(self) -> int:
        """Debug mode always shows everything."""
        return logging.DEBUG if self.debug else self.level

    @property
    def records_to_file(self) -> bool:
        return self.flight_recorder and self.log_path is not None


class TestCodePrefixFilter(logging.Filter):
    """Tag console records that do not come from PYCUT itself.

    Records logged by the tests under run (or the code they exercise) get a
    ``[toplevel]`` prefix naming their root logger, so they stand out from
    the engine's own diagnostics.
    """

    __test__ = False  # not a pytest class

    def filter(self, record: logging.LogRecord) -> bool:
        """Set ``record.prefix``; never drops the record."""
        root = record.name.split(".")[0]
        record.prefix = "" if root == PROJECT_PREFIX else f"[{root}]"
        return True


def console_handler(settings: LoggingSettings) -> RichHandler:
    """Rich handler on stderr.

    Debug mode adds timestamps, logger names and source locations.
    """
    console = Console(color_system="auto" if settings.color else None, stderr=True)
    handler = RichHandler(
        level=settings.console_level,
        console=console,
        rich_tracebacks=True,
        show_time=settings.debug,
        show_path=settings.debug,
        enable_link_path=settings.debug,
    )
    if settings.debug:
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))
        handler.addFilter(TestCodePrefixFilter())
    return handler


def flight_recorder(
    settings: LoggingSettings, flush_level: int = logging.WARNING
) -> MemoryHandler:
    """In-memory buffer of the last ``settings.capacity`` records.

    The buffer goes to ``settings.log_path`` (truncated at start-up) when a
    record at ``flush_level`` or above arrives, and on close when
    ``settings.force_flush`` is set. A failed run logs a WARNING, so its
    trace always reaches the file.

    Raises:
        ValueError: If the settings carry no log path.
    """
    if settings.log_path is None:
        raise ValueError("The flight recorder needs a log path")
    settings.log_path.parent.mkdir(parents=True, exist_ok=True)
    target = logging.FileHandler(settings.log_path, mode="w", encoding="utf-8")
    target.setLevel(logging.DEBUG)
    target.setFormatter(logging.Formatter(FILE_FORMAT))
    return MemoryHandler(
        capacity=settings.capacity,
        flushLevel=flush_level,
        target=target,
        flushOnClose=settings.force_flush,
    )


def configure_logging(settings: LoggingSettings) -> list[Handler]:
    """Install the handlers on the root logger and apply per-logger levels.

    The root logger is opened to DEBUG; each handler filters for itself.

    Returns:
        list[Handler]: The installed handlers, console first.
    """
    handlers: list[Handler] = [console_handler(settings)]
    if settings.records_to_file:
        handlers.append(flight_recorder(settings))
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, lvl in settings.logger_levels.items():
        logging.getLogger(name).setLevel(lvl)
    return handlers


def _dist_version(name: str) -> str:
    try:
        return version(name)
    except PackageNotFoundError:
        return "<not installed>"


def log_startup(
    logger: Logger,
    settings: LoggingSettings,
    handlers: list[Handler],
    app_version: str,
) -> None:
    """Record how this process was set up.

    One INFO line for the console, then DEBUG details that normally only
    reach the flight recorder.
    """
    logger.info(
        "PYCUT %s: console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(settings.console_level),
        "ON" if settings.records_to_file else "OFF",
    )
    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    for dist in ("click", "click-extra", "rich"):
        logger.debug("%s: %s", dist, _dist_version(dist))
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if settings.records_to_file:
        logger.debug(
            "Flight recorder: path=%s, capacity=%d, flush_on_close=%s",
            settings.log_path,
            settings.capacity,
            settings.force_flush,
        )
    levels = {
        name: logging.getLevelName(lvl) for name, lvl in settings.logger_levels.items()
    }
    logger.debug("Per-logger overrides: %s", levels or "<none>")
