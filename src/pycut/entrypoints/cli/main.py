"""The ``pycut`` command group.

The group owns diagnostics logging: console verbosity, the flight recorder
and per-logger levels. Everything about the unit tests themselves (filters,
progress output, interaction) is decided by the unit-test options given to
``pycut run`` after TARGET.

Examples
    $ pycut --version
    $ pycut -v run tests.battery:TESTS -- --stop-on-error
    $ pycut --no-flight-recorder run tests.battery:make_tests --group 2
"""

import logging
from pathlib import Path

import click
import click_extra as clickx

from pycut import __version__, config
from pycut.logging import LoggingSettings, configure_logging, log_startup, verbosity_level

from .helpers.log_level_parser import parse_log_level
from .run import run as run_command

logger = logging.getLogger(__name__)


HELP = """Run batteries of PYCUT unit tests.

    Tests run in registration order, one at a time. Each test reports
    pass, fail or skip for itself and its sub-tests, and the run ends with
    the number of the first failing test. Group, case and sub-test filters
    select part of a battery; interactive tests ask whoever runs them.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "-v",
    "--verbose",
    "verbose_count",
    count=True,
    default=0,
    help="Show more engine diagnostics: -v for INFO, -vv for DEBUG.",
)
@click.option(
    "-q",
    "--quiet",
    "quiet_count",
    count=True,
    default=0,
    help="Show fewer engine diagnostics: -q for ERROR, -qq for CRITICAL.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Log everything to the console, with logger names and source lines.",
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=config.default_log_path,
    envvar="PYCUT_LOG_PATH",
    show_default=True,
    show_envvar=True,
    help="File the flight recorder writes to.",
)
@click.option(
    "--flight-recorder-capacity",
    "capacity",
    type=click.IntRange(min=1),
    default=2000,
    hidden=True,
    envvar="PYCUT_FLIGHT_RECORDER_CAPACITY",
    help="Number of log records the flight recorder keeps.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    default=True,
    envvar="PYCUT_FLIGHT_RECORDER",
    show_envvar=True,
    help=(
        "Keep recent DEBUG records in memory and write them to --log-path "
        "when a WARNING or worse is logged, e.g. when the run fails."
    ),
)
@click.option(
    "--force-flush/--no-force-flush",
    default=False,
    envvar="PYCUT_FORCE_FLUSH",
    show_envvar=True,
    help="Write the flight recorder to --log-path on exit even after a clean run.",
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    envvar="PYCUT_LOGGER_LEVELS",
    show_envvar=True,
    help=(
        "Minimum level for one logger, as NAME=LEVEL; repeatable. Quiets "
        "chatty code under test on the console and in the flight recorder."
    ),
)
@clickx.pass_context
def pycut(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    capacity: int,
    flight_recorder: bool,
    force_flush: bool,
    logger_levels: dict[str, int],
) -> None:
    """Run batteries of PYCUT unit tests."""
    settings = LoggingSettings(
        level=verbosity_level(verbose_count, quiet_count),
        debug=debug,
        color=ctx.color is not False,
        log_path=log_path,
        flight_recorder=flight_recorder,
        capacity=capacity,
        force_flush=force_flush,
        logger_levels=logger_levels,
    )
    handlers = configure_logging(settings)
    log_startup(logger, settings, handlers, __version__)
    ctx.call_on_close(logging.shutdown)


pycut.add_command(run_command)
