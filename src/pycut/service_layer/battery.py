"""The battery: the ordered registry of tests plus its run-wide aggregates.

The battery owns:

- the registered tests, in registration order, all of one calling convention;
- the cursor over them, which starts before the first test;
- the aggregates merged from each finished `TestStatus`: total failing tests,
  sub-tests encountered, and the coordinates of the first failure.

It never runs a test itself; `pycut.service_layer.runner.TestRunner` drives it.
"""

from __future__ import annotations

import logging

import click

from pycut import config
from pycut.domain.errors import InvalidTestError, MixedConventionError, RegistryError
from pycut.domain.options import Options
from pycut.domain.status import TestStatus
from pycut.domain.timer import Timer, ms_sleep
from pycut.domain.value_objects import CallingConvention, Disposition
from pycut.interfaces.unit_test import TestFunction, UnitTestCase

logger = logging.getLogger(__name__)

# pylint: disable=too-many-instance-attributes

RULE_WIDE = "=" * 63
RULE_THIN = "-" * 63


def convention_of(test: object) -> CallingConvention:
    """Classify ``test`` by how the battery would invoke it.

    Raises:
        InvalidTestError: If ``test`` is None or cannot be invoked.
    """
    if isinstance(test, UnitTestCase):
        return CallingConvention.CASE
    if test is None or not callable(test):
        raise InvalidTestError(test)
    return CallingConvention.FUNCTION


class Battery:
    """An ordered collection of tests and the results of running them.

    Args:
        options: The shared options record, read but never modified.
    """

    def __init__(self, options: Options) -> None:
        self._options = options
        self._tests: list[TestFunction | UnitTestCase] = []
        self._allocation = 0
        self._convention: CallingConvention | None = None
        self._current = config.NO_CURRENT_TEST
        self._total_errors = 0
        self._subtest_count = 0
        self._first_failed_test = config.NO_CURRENT_TEST
        self._first_failed_group = 0
        self._first_failed_case = 0
        self._first_failed_subtest = 0
        self._timer = Timer()

    @property
    def options(self) -> Options:
        return self._options

    # --- Registration ---

    def register(self, test: TestFunction | UnitTestCase) -> bool:
        """Append ``test`` to the battery.

        The first test fixes the calling convention of the battery.

        Args:
            test: A callable taking the options and returning a status, or a
                `UnitTestCase` instance.

        Returns:
            bool: False if ``test`` is not a test, or uses the other calling
            convention than the tests already registered.
        """
        try:
            convention = convention_of(test)
            if self._convention is not None and convention is not self._convention:
                raise MixedConventionError(
                    self._convention.value, convention.value
                )
        except RegistryError as exc:
            logger.error("Cannot register test: %s", exc)
            return False

        if len(self._tests) + 1 > self._allocation:
            self._allocation += config.CASE_ALLOCATION
            logger.debug("Test list grown to %d entries", self._allocation)
        self._convention = convention
        self._tests.append(test)
        return True

    def calling_convention(self) -> CallingConvention | None:
        """The convention of the registered tests, None while empty."""
        return self._convention

    def count(self) -> int:
        """Number of registered tests."""
        return len(self._tests)

    def allocation_count(self) -> int:
        """Capacity of the test list; grows in `config.CASE_ALLOCATION` chunks."""
        return self._allocation

    def test_at(self, index: int) -> TestFunction | UnitTestCase:
        """The registered test at ``index``.

        Raises:
            IndexError: If ``index`` is not a registered position.
        """
        if not 0 <= index < len(self._tests):
            raise IndexError(f"no unit test at index {index}")
        return self._tests[index]

    # --- Running ---

    def run_init(self) -> int:
        """Prepare a run: reset the cursor and aggregates, start the clock.

        Returns:
            int: The number of registered tests. Zero means there is nothing
            to run, which the caller treats as a failed run.
        """
        count = len(self._tests)
        if count == 0:
            logger.error("no unit tests loaded")
            return 0

        self._current = config.NO_CURRENT_TEST
        self._total_errors = 0
        self._subtest_count = 0
        self._first_failed_test = config.NO_CURRENT_TEST
        self._first_failed_group = 0
        self._first_failed_case = 0
        self._first_failed_subtest = 0
        if self._options.show_progress():
            click.echo(RULE_WIDE)
            click.echo(f"{self._options.app_name} {self._options.app_version}")
            click.echo(RULE_THIN)
        self._timer.start()
        logger.info("Starting %d unit tests of %s", count, self._options.app_name)
        return count

    def next_test(self) -> int:
        """Advance the cursor.

        Returns:
            int: The index of the next test, or -1 once past the last one.
        """
        self._current += 1
        if self._current < len(self._tests):
            return self._current
        return config.NO_CURRENT_TEST

    def number(self) -> int:
        """The cursor: index of the current test, -1 before the first."""
        return self._current

    def check_subtests(self, status: TestStatus) -> int:
        """Add the sub-tests of ``status`` to the run total.

        Returns:
            int: The sub-tests the test declared, or -1 if sub-tests are
            required and a test that was not skipped declared none.
        """
        count = status.subtest()
        if (
            self._options.need_subtests()
            and count == 0
            and status.disposition() is not Disposition.DID_NOT_TEST
        ):
            logger.error(
                "PROGRAMMER--no sub-tests encountered in test %d", self._current + 1
            )
            return -1
        self._subtest_count += count
        return count

    def dispose_of_test(self, status: TestStatus) -> bool:
        """Merge a finished test into the aggregates.

        The status is only read. A test fails if any check failed or its
        disposition is FAILED or ABORTED.

        Args:
            status: The status returned by the test.

        Returns:
            bool: True if the run should stop here: the user quit, or the test
            did not pass and stop-on-error is set.
        """
        options = self._options
        disposition = status.disposition()
        quit_requested = disposition is Disposition.QUITTED
        passed = status.passed() and disposition not in (
            Disposition.FAILED,
            Disposition.ABORTED,
        )

        stop = False
        if passed:
            sleep_ms = options.test_sleep_time()
            if sleep_ms > 0:
                if options.show_progress():
                    click.echo(f"  Sleeping {sleep_ms} milliseconds")
                ms_sleep(sleep_ms)
        else:
            self._total_errors += 1
            if self._first_failed_test == config.NO_CURRENT_TEST:
                self._first_failed_test = self._current
                self._first_failed_group = status.group()
                self._first_failed_case = status.case()
                self._first_failed_subtest = status.failed_subtest()
            if options.stop_on_error():
                if not options.is_silent():
                    click.echo(
                        f"  Stop-on-error enabled; failure in TEST {self._current + 1}"
                    )
                stop = True

        if options.show_progress() and options.is_verbose():
            if disposition is Disposition.DID_NOT_TEST:
                click.echo("  Skipped")
        if quit_requested:
            if options.show_progress():
                click.echo("  User requested an end to testing")
            stop = True
        if stop and options.is_verbose():
            click.echo("Quitting the tests early")
        return stop

    def finish(self) -> float:
        """Record the end of the run.

        Returns:
            float: The run duration in milliseconds, 0.0 if the run never
            started.
        """
        if not self._timer.is_started():
            return 0.0
        return self._timer.time_delta()

    # --- Aggregates ---

    def failures(self) -> int:
        """Number of tests that did not pass."""
        return self._total_errors

    def subtest_count(self) -> int:
        """Sub-tests encountered so far in the run."""
        return self._subtest_count

    def first_failed_test(self) -> int:
        """Index of the first failing test, -1 if none failed."""
        return self._first_failed_test

    def first_failed_group(self) -> int:
        return self._first_failed_group

    def first_failed_case(self) -> int:
        return self._first_failed_case

    def first_failed_subtest(self) -> int:
        return self._first_failed_subtest

    def duration_ms(self) -> float:
        """Duration of the last run, as measured by `finish()`."""
        return self._timer.duration_ms()
