"""The execution loop that runs a battery of tests."""

import logging

import click

from pycut.domain.status import TestStatus
from pycut.domain.value_objects import CallingConvention
from pycut.interfaces.unit_test import TestFunction, UnitTestCase
from pycut.service_layer.battery import Battery

logger = logging.getLogger(__name__)

RULE = "-" * 60
RULE_WIDE = "=" * 60


def _test_name(test: TestFunction | UnitTestCase) -> str:
    if isinstance(test, UnitTestCase):
        return test.name
    return getattr(test, "__qualname__", None) or repr(test)


class TestRunner:
    """Runs every test of a battery, in order, and reports the outcome.

    The loop is strictly sequential: each test is invoked with the shared
    options, its status is merged into the battery, and the run stops early
    only when the battery says so. Every registered test is invoked; filters
    act inside the tests through their status.

    Args:
        battery: The loaded battery.
    """

    __test__ = False  # not a pytest class

    def __init__(self, battery: Battery) -> None:
        self.battery = battery
        self.options = battery.options

    def run(self) -> bool:
        """Run the battery.

        Returns:
            bool: True if no test failed. An empty battery, or a test that
            declared no sub-tests while sub-tests are required, fails the run.
        """
        battery = self.battery
        registry_error = False
        result = battery.run_init() > 0
        if result:
            while (index := battery.next_test()) >= 0:
                self.options.set_current_test(index)
                status = self.run_a_test(battery.test_at(index))
                if battery.check_subtests(status) < 0:
                    registry_error = True
                    break
                if battery.dispose_of_test(status):
                    break
            result = battery.failures() == 0 and not registry_error
        battery.finish()
        self.post_loop(result)
        logger.log(
            logging.INFO if result else logging.WARNING,
            "Run of %s finished: %s (%d of %d tests failed)",
            self.options.app_name,
            "passed" if result else "failed",
            battery.failures(),
            battery.count(),
        )
        return result

    def invoke(self, test: TestFunction | UnitTestCase) -> TestStatus:
        """Call ``test`` by the battery's calling convention.

        A test that raises, or returns something other than a `TestStatus`,
        yields a failed status instead.
        """
        name = _test_name(test)
        try:
            if self.battery.calling_convention() is CallingConvention.CASE:
                status = test.run(self.options)
            else:
                status = test(self.options)
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Unit test %s raised an exception", name)
            return TestStatus.failed_run(
                self.options, name, f"raised {type(exc).__name__}"
            )
        if not isinstance(status, TestStatus):
            logger.error(
                "Unit test %s returned %s, not a TestStatus",
                name,
                type(status).__name__,
            )
            return TestStatus.failed_run(self.options, name, "returned no status")
        return status

    def run_a_test(self, test: TestFunction | UnitTestCase) -> TestStatus:
        """Invoke one test, time it, and show its result line.

        Returns:
            TestStatus: The status reported by the test.
        """
        options = self.options
        status = self.invoke(test)
        status.time_delta()
        if status.is_skipped() or options.is_summary():
            if status.is_skipped() and options.is_verbose():
                click.echo("  This test was skipped.")
            return status

        if options.show_progress():
            click.echo(self._result_line(status))
        if options.is_pause() and options.prompter is not None:
            options.prompter.pause(
                "press Enter to continue testing or Ctrl-C to end testing."
            )
        return status

    @staticmethod
    def _result_line(status: TestStatus) -> str:
        verdict = "PASSED" if status.passed() else "FAILED"
        duration = status.duration_ms()
        timing = (
            f" ({duration:4.3f} ms)" if duration >= 0.001 else " (less than 0.001 ms)"
        )
        line = (
            f"  {'Group':>12} {status.group():2d} '{status.group_name()}'\n"
            f"  {'Case':>12} {status.case():2d} '{status.case_name()}'\n"
            f"  {'Subtests':>12} {status.subtest():2d} and below:\n"
            f"  {verdict}{timing}"
        )
        if status.error_count() > 1:
            line += (
                f"\n  {status.error_count()} subtests failed. "
                f"First failed sub-test: {status.failed_subtest()}"
            )
        elif status.failed():
            line += f" at sub-test {status.failed_subtest()}"
        return line

    def post_loop(self, result: bool) -> None:
        """Show the summary of the run."""
        options = self.options
        battery = self.battery
        if options.is_summary():
            click.echo(
                f"\n{battery.subtest_count()} sub-tests encountered.\n"
                "Tests summarized, not performed."
            )
            return

        if options.show_progress():
            click.echo(f"\n{RULE}")
        if result:
            if options.show_progress():
                click.echo(
                    f"{battery.count()} unit-tests completed; "
                    "all succeeded or were skipped.\n"
                    f"{battery.subtest_count()} sub-tests encountered."
                )
        elif not options.is_silent():
            click.echo(
                f"{battery.count()} tests completed "
                f"({battery.subtest_count()} sub-tests encountered). "
                f"{battery.failures()} failed.\n"
                f"  First failed unit-test number: {battery.first_failed_test() + 1} "
                f"(Group {battery.first_failed_group()}, "
                f"Case {battery.first_failed_case()}, "
                f"Sub-test {battery.first_failed_subtest()})"
            )
        if options.show_progress():
            click.echo(f"Full test duration: {battery.duration_ms():4.3f} ms")
            click.echo(RULE_WIDE)
