"""``pycut run``: load a battery of tests from a module and run it.

TARGET names what to run as ``module:attribute``. The attribute is an
iterable of tests, a zero-argument callable returning one, or a single test.
Tests are plain callables taking the options and returning a `TestStatus`,
or `UnitTestCase` instances; one battery holds only one kind.

Everything after TARGET is parsed as unit-test options (see
``pycut run TARGET -- --help``).

Exit status
- 0 when every test passed or was skipped, or after ``--help``/``--version``.
- 1 when a test failed, nothing was loaded, or a test could not be registered.
- 2 when the unit-test options are invalid.

Examples
    $ pycut run tests.battery:TESTS --stop-on-error
    $ pycut run tests.battery:make_tests -- --group 2 --verbose
"""

from __future__ import annotations

import importlib
import inspect
import logging
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import click

from pycut.adapters.prompters import ConsolePrompter
from pycut.domain.options import Options
from pycut.interfaces.unit_test import UnitTestCase
from pycut.service_layer.battery import Battery
from pycut.service_layer.runner import TestRunner

from .helpers import error, success, warn
from .options_parser import parse_options

if TYPE_CHECKING:
    from pycut.interfaces.prompter import Prompter
    from pycut.interfaces.unit_test import TestFunction

logger = logging.getLogger(__name__)

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_BAD_OPTIONS = 2


def _is_test_function(obj: object) -> bool:
    """A callable with a required positional parameter takes the options."""
    if not callable(obj) or isinstance(obj, Iterable):
        return False
    try:
        params = inspect.signature(obj).parameters.values()
    except (TypeError, ValueError):
        return False
    return any(
        p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
        for p in params
    )


def load_tests(target: str) -> list[TestFunction | UnitTestCase]:
    """Import the tests named by ``module:attribute``.

    A single test function or `UnitTestCase` is loaded as a battery of one.

    Raises:
        click.BadParameter: If the target is malformed, cannot be imported, or
            does not yield an iterable of tests.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise click.BadParameter(
            f"Expected MODULE:ATTRIBUTE, got {target!r}", param_hint="TARGET"
        )
    try:
        obj = importlib.import_module(module_name)
    except ImportError as exc:
        raise click.BadParameter(
            f"Cannot import {module_name!r}: {exc}", param_hint="TARGET"
        ) from exc
    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as exc:
            raise click.BadParameter(
                f"{module_name!r} has no attribute {attr_path!r}", param_hint="TARGET"
            ) from exc

    if isinstance(obj, UnitTestCase) or _is_test_function(obj):
        logger.debug("Loaded a single test from %s", target)
        return [obj]
    if callable(obj) and not isinstance(obj, Iterable):
        try:
            obj = obj()
        except TypeError as exc:
            raise click.BadParameter(
                f"Cannot call {target!r} without arguments: {exc}", param_hint="TARGET"
            ) from exc
    if isinstance(obj, (str, bytes)) or not isinstance(obj, Iterable):
        raise click.BadParameter(
            f"{target!r} is not an iterable of tests", param_hint="TARGET"
        )
    tests = list(obj)
    logger.debug("Loaded %d tests from %s", len(tests), target)
    return tests


def _run_battery(options: Options, tests: Iterable[TestFunction | UnitTestCase]) -> int:
    battery = Battery(options)
    rejected = [test for test in tests if not battery.register(test)]
    if rejected:
        logger.error("%d tests could not be registered", len(rejected))
        return EXIT_FAILED
    return EXIT_PASSED if TestRunner(battery).run() else EXIT_FAILED


def _exit_for_invalid(options: Options) -> int:
    if options.help_requested or options.version_requested:
        return EXIT_PASSED
    return EXIT_BAD_OPTIONS


def run_tests(
    tests: Iterable[TestFunction | UnitTestCase],
    args: Sequence[str] | None = None,
    *,
    app_name: str = "pycut",
    app_version: str = "",
    additional_help: str = "",
    prompter: Prompter | None = None,
) -> int:
    """Parse ``args``, run ``tests`` as one battery, and return an exit status.

    This is the programmatic counterpart of ``pycut run``; a test program can
    end with ``sys.exit(run_tests(TESTS, sys.argv[1:], app_name="demo"))``.

    Args:
        tests: The tests, in the order they should run.
        args: Unit-test options, without the program name.
        app_name: Short name shown in the banner.
        app_version: Version shown in the banner.
        additional_help: Text appended to the ``--help`` output.
        prompter: Terminal for interactive tests; a console prompter if None.

    Returns:
        int: 0 if every test passed, 1 on failure, 2 for invalid options.
    """
    options = parse_options(
        list(args) if args is not None else [],
        app_name,
        app_version=app_version,
        additional_help=additional_help,
        prompter=prompter if prompter is not None else ConsolePrompter(),
    )
    if not options.is_valid():
        return _exit_for_invalid(options)
    return _run_battery(options, tests)


@click.command(context_settings={"ignore_unknown_options": True})
@click.option(
    "--app-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory added to the import path before TARGET is imported.",
)
@click.option(
    "--name",
    "app_name",
    help="Application name shown in the banner (default: the TARGET module).",
)
@click.argument("target")
@click.argument("test_args", nargs=-1, type=click.UNPROCESSED)
def run(
    app_dir: Path, app_name: str | None, target: str, test_args: tuple[str, ...]
) -> None:
    """Run the battery of tests named by TARGET (MODULE:ATTRIBUTE)."""
    app_dir_str = str(app_dir.resolve())
    if app_dir_str not in sys.path:
        sys.path.insert(0, app_dir_str)
    tests = load_tests(target)
    if not tests:
        warn(f"{target} holds no tests.")

    name = app_name or target.partition(":")[0]
    options = parse_options(list(test_args), name, prompter=ConsolePrompter())
    if not options.is_valid():
        status = _exit_for_invalid(options)
        if status == EXIT_BAD_OPTIONS:
            error(f"{name}: invalid unit-test options; see the log for details.")
        sys.exit(status)

    status = _run_battery(options, tests)
    if status == EXIT_PASSED:
        success(f"{name}: all unit-tests succeeded or were skipped.")
    else:
        error(f"{name}: the unit-test suite did not pass.")
    sys.exit(status)
