"""The per-invocation record of a unit test.

A `TestStatus` is created at the top of each test function, threaded through
its body via `next_subtest()`, `pass_()`, `check()` and the prompt helpers, then
returned to the runner, which only reads it.

The disposition state machine:

    CONTINUE      initial; further sub-tests allowed
    DID_NOT_TEST  skipped by a filter, a prompt, or a non-interactive run
    FAILED        the user (or test) declared a failure; sub-tests allowed
    QUITTED       the user asked to stop the run; this test counts as passed
    ABORTED       the user aborted the test; it counts as failed
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from pycut.domain.errors import InvalidResponseError
from pycut.domain.timer import Timer
from pycut.domain.value_objects import (
    AFTER_HELP,
    AFTER_RESPONSES,
    BEFORE_HELP,
    BEFORE_RESPONSES,
    HELP_RESPONSES,
    NO_RESPONSE,
    Disposition,
    parse_response,
)

if TYPE_CHECKING:
    from pycut.domain.options import Options

logger = logging.getLogger(__name__)

# pylint: disable=too-many-instance-attributes,too-many-public-methods

UNNAMED = "unnamed"
BEFORE_PROMPT = "For this test [(c)ontinue, (s)kip, (f)ail, (q)uit, (a)bort, (h)elp]"
AFTER_PROMPT = "Disposition [(p)ass, (f)ail, (q)uit, (a)bort, (h)elp]"


class TestStatus:
    """Status of one unit-test invocation.

    Args:
        options: The shared, read-only options record.
        group: Group number, 1 or greater.
        case: Case number within the group, 1 or greater.
        group_name: Short description of the group.
        case_name: Short description of the case.

    A status built with a group or case below 1, a missing name, or no
    options is invalid: it reports DID_NOT_TEST with a passing result, so
    the test degrades to a forced skip instead of crashing the run.
    """

    __test__ = False  # not a pytest class

    def __init__(
        self,
        options: Options | None,
        group: int,
        case: int,
        group_name: str | None,
        case_name: str | None,
    ) -> None:
        self._options = options
        self._group = group
        self._case = case
        self._group_name = group_name or ""
        self._case_name = case_name or ""
        self._subtest = 0
        self._subtest_name = ""
        self._error_count = 0
        self._failed_subtest = 0
        self._test_result = True
        self._disposition = Disposition.CONTINUE
        self._abort_recorded = False
        self._timer = Timer()

        self._valid = (
            options is not None
            and group > 0
            and case > 0
            and group_name is not None
            and case_name is not None
        )
        if not self._valid:
            logger.error(
                "Invalid unit-test status: group %r, case %r, group name %r, "
                "case name %r",
                group,
                case,
                group_name,
                case_name,
            )
            self._disposition = Disposition.DID_NOT_TEST
        elif self._selected():
            self._announce()
        else:
            self._disposition = Disposition.DID_NOT_TEST
            if options.is_verbose():
                click.echo(
                    f"  Group {group} '{group_name}', "
                    f"Case {case} '{case_name}' skipped"
                )
        self._timer.start()

    @classmethod
    def failed_run(
        cls, options: Options | None, name: str, reason: str
    ) -> TestStatus:
        """Build the failed status of a test that could not report one.

        Used by the runner when a test raises, or returns something other
        than a status.

        Args:
            options: The shared options record.
            name: Name of the offending test.
            reason: Why the test is considered failed.

        Returns:
            TestStatus: A status with disposition FAILED and one error.
        """
        status = cls(options, 1, 1, name, reason)
        status._disposition = Disposition.FAILED
        status.pass_(False)
        return status

    def _selected(self) -> bool:
        """Apply the group and case filters; a number filter wins over a name."""
        options = self._options
        if options.single_group():
            if self._group != options.single_group():
                return False
        elif options.named_group() and options.named_group() != self._group_name:
            return False
        if options.single_case():
            return self._case == options.single_case()
        if options.named_case():
            return options.named_case() == self._case_name
        return True

    def _announce(self) -> None:
        options = self._options
        if options.show_progress():
            tag = "Simulated TEST" if options.is_simulated() else "TEST"
            click.echo(f"\n{tag} {options.current_test() + 1:3d}:  ")
        if options.is_summary():
            if not options.is_silent():
                click.echo(
                    f"  Group {self._group} '{self._group_name}', "
                    f"Case {self._case} '{self._case_name}'"
                )
        elif options.is_verbose():
            click.echo(
                f"\n  Unit test({self._group}, {self._case}) "
                f"[{self._group_name or UNNAMED} ({self._case_name or 'none given'})]"
            )

    def _quiet(self) -> bool:
        return self._options is None or self._options.is_silent()

    # --- Identity and counters ---

    def is_valid(self) -> bool:
        """True if the status was built with a legal group, case and names."""
        return self._valid

    def options(self) -> Options | None:
        return self._options

    def group(self) -> int:
        return self._group

    def case(self) -> int:
        return self._case

    def group_name(self) -> str:
        return self._group_name

    def case_name(self) -> str:
        return self._case_name

    def subtest(self) -> int:
        """The number of the current sub-test, 0 before the first one."""
        return self._subtest

    def subtest_name(self) -> str:
        return self._subtest_name

    def error_count(self) -> int:
        """Failed checks recorded in this test so far."""
        return self._error_count

    def failed_subtest(self) -> int:
        """The sub-test of the first failure, 0 if nothing failed."""
        return self._failed_subtest

    def disposition(self) -> Disposition:
        return self._disposition

    def test_result(self) -> bool:
        """The result of the most recent check."""
        return self._test_result

    # --- Timing ---

    def start_timer(self) -> None:
        """Re-capture the start time of the test."""
        self._timer.start()

    def time_delta(self, reset: bool = False) -> float:
        """Milliseconds elapsed since the start time; see `Timer.time_delta`."""
        return self._timer.time_delta(reset)

    def duration_ms(self) -> float:
        """The last measured duration, in milliseconds."""
        return self._timer.duration_ms()

    # --- Checks ---

    def pass_(self, flag: bool = True) -> None:
        """Record the result of a check.

        A failing check increments the error count, and the first failure
        also records the current sub-test number.

        Args:
            flag: The result of the check.
        """
        self._test_result = flag
        if flag:
            return
        self._error_count += 1
        if self._failed_subtest == 0:
            self._failed_subtest = self._subtest
        if (
            self._options is not None
            and self._options.show_progress()
            and not self._quiet()
        ):
            tag = (
                "FAILURE in simulated sub-test"
                if self._options.is_simulated()
                else "FAILURE in sub-test"
            )
            click.echo(f"! {tag} {self._subtest}: {self._subtest_name}")

    def fail(self) -> None:
        """Record a failing check."""
        self.pass_(False)

    def fail_deliberately(self) -> None:
        """Record a failing check that the test author intends.

        Used by tests of the engine itself, and by ``ignore()`` on an aborted
        test. The failure can be taken back with
        `pycut.domain.self_test.decrement_error_count`.
        """
        self.pass_(False)
        if self._options is not None and self._options.show_progress():
            click.echo("! This FAILURE is deliberate.")

    def check(self, expected: object, actual: object) -> bool:
        """Record whether ``actual`` equals ``expected``.

        Returns:
            bool: True if the values are equal.
        """
        result = expected == actual
        self.pass_(result)
        if not result and not self._quiet():
            click.echo(f"? {expected!r} expected, {actual!r} actual")
        return result

    def passed(self) -> bool:
        """True if no check has failed in this test."""
        return self._error_count == 0

    def failed(self) -> bool:
        return not self.passed()

    # --- Sub-tests ---

    def next_subtest(self, name: str | None = None) -> bool:
        """Advance to the next sub-test.

        The counter always advances by one so that sub-test numbers line up
        with the ``--sub-test`` filter whether or not the body runs.

        Args:
            name: Short description of the sub-test; empty becomes "unnamed".

        Returns:
            bool: True if the sub-test body should run. Always False in
            summarize mode and for a skipped test.
        """
        options = self._options
        if not name:
            name = UNNAMED
            if options is not None and options.show_progress():
                click.echo("! empty tag: next_subtest()\n")

        if options is not None and options.is_summary():
            self._subtest += 1
            self._subtest_name = name
            if not options.is_silent():
                click.echo(f"  Sub-test {self._subtest}: '{name}'")
            return False

        if options is None or self._disposition is Disposition.DID_NOT_TEST:
            self._subtest += 1
            self._subtest_name = name
            return False

        result = True
        if options.single_subtest():
            result = self._subtest + 1 == options.single_subtest()
        elif options.named_subtest():
            result = options.named_subtest() == name

        self._subtest += 1
        self._subtest_name = name
        if result:
            if options.show_step_numbers():
                if self._subtest == 1:
                    click.echo()
                click.echo(f"  Sub-test {self._subtest}: {name}")
        elif options.is_verbose():
            click.echo(f"  Sub-test {self._subtest} ({name}) skipped")
        return result

    # --- Disposition ---

    def can_proceed(self) -> bool:
        """False if the test is aborted or is to be skipped."""
        result = self._disposition not in (
            Disposition.ABORTED,
            Disposition.DID_NOT_TEST,
        )
        if not result:
            logger.info("Test is aborted or is to be skipped")
        return result

    def ignore(self) -> bool:
        """Decide whether the rest of the test should be ignored.

        A skipped or quitted test is recorded as a pass; an aborted test is
        recorded as a deliberate failure, once.

        Returns:
            bool: True if the test author should stop the test here.
        """
        if self._disposition in (Disposition.DID_NOT_TEST, Disposition.QUITTED):
            self.pass_(True)
            return True
        if self._disposition is Disposition.ABORTED:
            if not self._abort_recorded:
                self._abort_recorded = True
                self.fail_deliberately()
            return True
        return False

    def is_okay(self) -> bool:
        """True for CONTINUE and DID_NOT_TEST only."""
        return self._disposition in (Disposition.CONTINUE, Disposition.DID_NOT_TEST)

    def is_skipped(self) -> bool:
        return self._disposition is Disposition.DID_NOT_TEST

    def is_quitted(self) -> bool:
        return self._disposition is Disposition.QUITTED

    def is_aborted(self) -> bool:
        return self._disposition is Disposition.ABORTED

    def is_failed(self) -> bool:
        return self._disposition is Disposition.FAILED

    def reset(self) -> None:
        """Set the disposition back to CONTINUE."""
        self._disposition = Disposition.CONTINUE
        self._abort_recorded = False

    # --- Interactive prompts ---

    def prompt(self, message: str = "") -> bool:
        """Ask the user whether to perform the upcoming interactive check.

        Args:
            message: What the user is about to be asked to verify.

        Returns:
            bool: True if the user chose to continue. Otherwise the test is
            recorded as passed, unless the answer was fail or abort.
        """
        return self._interact(
            message,
            BEFORE_PROMPT,
            BEFORE_RESPONSES,
            BEFORE_HELP,
            self._options.prompt_before() if self._options else NO_RESPONSE,
        )

    def response(self, message: str = "") -> bool:
        """Ask the user for the outcome of an interactive check.

        Args:
            message: What the user should have observed.

        Returns:
            bool: True if the user declared a pass. Otherwise the test is
            recorded as passed, unless the answer was fail or abort.
        """
        return self._interact(
            message,
            AFTER_PROMPT,
            AFTER_RESPONSES,
            AFTER_HELP,
            self._options.prompt_after() if self._options else NO_RESPONSE,
        )

    def _interact(
        self,
        message: str,
        prompt_string: str,
        table: dict[str, Disposition],
        help_lines: tuple[str, ...],
        automatic: str,
    ) -> bool:
        options = self._options
        if options is not None and options.is_interactive():
            disposition = self._ask(message, prompt_string, table, help_lines, automatic)
        else:
            disposition = Disposition.DID_NOT_TEST
        self._disposition = disposition

        if disposition is Disposition.CONTINUE:
            logger.info("User indicates test succeeded")
            return True
        ok = disposition not in (Disposition.FAILED, Disposition.ABORTED)
        if ok:
            logger.info("User skips or quits, but passes this test")
        elif disposition is Disposition.ABORTED:
            logger.info("User indicates test aborted")
        else:
            logger.info("User indicates test failed")
        self.pass_(ok)
        return False

    def _ask(
        self,
        message: str,
        prompt_string: str,
        table: dict[str, Disposition],
        help_lines: tuple[str, ...],
        automatic: str,
    ) -> Disposition:
        options = self._options
        prompter = options.prompter
        if prompter is not None and options.do_beep():
            prompter.beep()
        text = f"\n{message}:\n{prompt_string}" if message else f"\n{prompt_string}"
        while True:
            if automatic:
                response = automatic
                if options.show_progress():
                    click.echo(f"\n(Responding automatically with {response})")
            elif prompter is None or options.batch_mode():
                response = NO_RESPONSE
            else:
                response = prompter.get_response(text)

            if response and response[0].lower() in HELP_RESPONSES:
                click.echo("\n".join(help_lines))
                continue
            try:
                return parse_response(response, table)
            except InvalidResponseError as exc:
                if options.batch_mode():
                    return Disposition.CONTINUE
                logger.warning("%s", exc)

    # --- Debugging ---

    def show(self) -> str:
        """Render the status fields, one per line."""
        lines = [
            f"Group:           {self._group} '{self._group_name}'",
            f"Case:            {self._case} '{self._case_name}'",
            f"Sub-test:        {self._subtest} '{self._subtest_name}'",
            f"Error count:     {self._error_count}",
            f"Failed sub-test: {self._failed_subtest}",
            f"Disposition:     {self._disposition.value}",
            f"Test result:     {self._test_result}",
            f"Duration (ms):   {self.duration_ms():.3f}",
            f"Valid:           {self._valid}",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"TestStatus(group={self._group}, case={self._case}, "
            f"subtest={self._subtest}, errors={self._error_count}, "
            f"disposition={self._disposition.name})"
        )
