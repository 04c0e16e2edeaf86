"""Options consumed read-only by the unit-test engine.

An `Options` record is built once at startup (usually by
`pycut.entrypoints.cli.options_parser.parse_options`) and then only read by
the battery, the runner and every test status.

Some flags switch other flags off. These side effects live in the `CASCADES`
table and are applied by `Options.apply_cascade`, so they are visible and
testable rather than hidden in a setter's body:

    change                 also switched off
    ---------------------  ---------------------------------------------------
    show_progress -> off   show_step_numbers, show_values, verbose
    batch_mode    -> on    show_progress, show_step_numbers, show_values, verbose
                           (and switches interactive on, answering c then p)
    silent        -> on    show_progress, show_step_numbers, show_values, verbose
    summarize     -> on    interactive, case_pause

Turning a flag back the other way never restores what it switched off.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pycut import config
from pycut.domain.errors import OptionValueError
from pycut.domain.value_objects import AFTER_RESPONSES, BEFORE_RESPONSES, NO_RESPONSE

if TYPE_CHECKING:
    from pycut.interfaces.prompter import Prompter

logger = logging.getLogger(__name__)

# pylint: disable=too-many-instance-attributes,too-many-public-methods

BATCH_RESPONSE_BEFORE = "c"
BATCH_RESPONSE_AFTER = "p"

CASCADES: dict[tuple[str, bool], tuple[str, ...]] = {
    ("show_progress", False): ("show_step_numbers", "show_values", "verbose"),
    ("batch_mode", True): (
        "show_progress",
        "show_step_numbers",
        "show_values",
        "verbose",
    ),
    ("silent", True): ("show_progress", "show_step_numbers", "show_values", "verbose"),
    ("summarize", True): ("interactive", "case_pause"),
}
"""Maps (flag, new value) to the flags that change switches off."""


def _check_range(option: str, value: int, maximum: int) -> int:
    if value < 0:
        raise OptionValueError(option, value, "negative value")
    if value > maximum:
        raise OptionValueError(option, value, f"value > {maximum}")
    return value


def _check_response(option: str, value: str, accepted: str) -> str:
    if value == NO_RESPONSE:
        return value
    if value[0].lower() not in accepted:
        raise OptionValueError(
            option, value, f"expected one of {', '.join(accepted)}"
        )
    return value[0]


class Options:
    """The configuration record of a unit-test application.

    Accessors are methods so that a test reads ``options.single_group()``
    the same way whatever produced the record.

    Args:
        app_name: Short name of the unit-test application.
        app_version: Version string shown in the banner.
        additional_help: Extra text appended to the ``--help`` output.
        prompter: Terminal used by interactive tests; None means no terminal,
            in which case every prompt gets the empty (continue) response.
    """

    def __init__(
        self,
        app_name: str = "Unit Test",
        app_version: str = "",
        additional_help: str = "",
        prompter: Prompter | None = None,
    ) -> None:
        self.app_name = app_name
        self.app_version = app_version
        self.additional_help = additional_help
        self.prompter = prompter
        self.help_requested = False
        self.version_requested = False
        self._valid = True

        self._flags: dict[str, bool] = {
            "verbose": False,
            "show_values": False,
            "show_step_numbers": False,
            "show_progress": True,
            "silent": False,
            "stop_on_error": False,
            "batch_mode": False,
            "interactive": False,
            "beep": True,
            "summarize": False,
            "case_pause": False,
            "need_subtests": False,
            "force_failure": False,
            "simulated": False,
        }
        self._single_group = config.NO_SINGLE_GROUP
        self._named_group: str | None = None
        self._single_case = config.NO_SINGLE_CASE
        self._named_case: str | None = None
        self._single_subtest = config.NO_SINGLE_SUBTEST
        self._named_subtest: str | None = None
        self._sleep_time_ms = 0
        self._prompt_before = NO_RESPONSE
        self._prompt_after = NO_RESPONSE
        self._current_test = config.NO_CURRENT_TEST

    # --- Validity ---

    def is_valid(self) -> bool:
        """False when parsing failed, or when --help/--version was requested."""
        return self._valid

    def invalidate(self) -> None:
        """Mark the record unusable for a test run."""
        self._valid = False

    # --- Cascading flags ---

    def apply_cascade(self, name: str, value: bool) -> tuple[str, ...]:
        """Set flag ``name`` and apply its entry in `CASCADES`.

        Args:
            name: Flag name (a key of the internal flag table).
            value: New value of the flag.

        Returns:
            tuple[str, ...]: The flags that were switched off as a side effect.
        """
        if name not in self._flags:
            raise KeyError(name)
        self._flags[name] = value
        affected = CASCADES.get((name, value), ())
        for other in affected:
            self._flags[other] = False
        if affected:
            logger.debug("%s=%s also disabled %s", name, value, ", ".join(affected))
        return affected

    def _set_flag(self, name: str, value: bool, message: str | None = None) -> None:
        self.apply_cascade(name, value)
        if message and value:
            logger.info(message)

    # --- Plain flags ---

    def is_verbose(self) -> bool:
        """Show supplemental commentary messages."""
        return self._flags["verbose"]

    def set_verbose(self, f: bool) -> None:
        """Set the verbose flag."""
        self._set_flag("verbose", f, "verbose enabled")

    def show_values(self) -> bool:
        """Show resultant values where the test author asks for them."""
        return self._flags["show_values"]

    def set_show_values(self, f: bool) -> None:
        """Set the show-values flag."""
        self._set_flag("show_values", f, "show-values enabled")

    def show_step_numbers(self) -> bool:
        """Show each sub-test number as it runs."""
        return self._flags["show_step_numbers"]

    def set_show_step_numbers(self, f: bool) -> None:
        """Set the show-step-numbers flag."""
        self._set_flag("show_step_numbers", f, "show-step-numbers enabled")

    def show_progress(self) -> bool:
        """Show progress output; always False while silent."""
        return self._flags["show_progress"] and not self._flags["silent"]

    def set_show_progress(self, f: bool) -> None:
        """Set show-progress; switching it off also switches off step numbers,
        values and verbose."""
        self._set_flag("show_progress", f, "show-progress enabled")

    def is_silent(self) -> bool:
        """Suppress all output, including failure lines."""
        return self._flags["silent"]

    def set_silent(self, f: bool) -> None:
        """Set silent; switching it on also switches off show-progress and
        the flags that depend on it."""
        self._set_flag("silent", f)

    def stop_on_error(self) -> bool:
        """Stop the run after the first failing test."""
        return self._flags["stop_on_error"]

    def set_stop_on_error(self, f: bool) -> None:
        """Set the stop-on-error flag."""
        self._set_flag("stop_on_error", f, "stop-on-error enabled")

    def batch_mode(self) -> bool:
        """Do not show prompts; assume continue/pass responses."""
        return self._flags["batch_mode"]

    def set_batch_mode(self, f: bool) -> None:
        """Set batch mode.

        Switching it on also switches off show-progress and the flags that
        depend on it. Interactive tests still run: interactive is switched on
        and every prompt is answered automatically, continue before the check
        and pass after it.
        """
        self._set_flag("batch_mode", f)
        if f:
            self._set_flag("interactive", True)
            self.set_prompt_before(BATCH_RESPONSE_BEFORE)
            self.set_prompt_after(BATCH_RESPONSE_AFTER)

    def is_interactive(self) -> bool:
        """Perform interactive tests (prompts) instead of skipping them."""
        return self._flags["interactive"]

    def set_interactive(self, f: bool) -> None:
        """Set the interactive flag."""
        self._set_flag("interactive", f)
        if not f:
            logger.info("interactive tests disabled")

    def do_beep(self) -> bool:
        """Beep before a prompt."""
        return self._flags["beep"]

    def set_beep(self, f: bool) -> None:
        """Set the beep-on-prompt flag."""
        self._set_flag("beep", f)

    def is_summary(self) -> bool:
        """List the tests and sub-tests instead of running them."""
        return self._flags["summarize"]

    def set_summarize(self, f: bool) -> None:
        """Set summarize mode; switching it on also switches off interactive
        and case-pause."""
        self._set_flag("summarize", f, "summary of tests enabled")

    def is_pause(self) -> bool:
        """Pause after each test case."""
        return self._flags["case_pause"]

    def set_case_pause(self, f: bool) -> None:
        """Set the case-pause flag."""
        self._set_flag("case_pause", f, "case-pausing enabled")

    def need_subtests(self) -> bool:
        """Treat a test that declares no sub-tests as a programming error."""
        return self._flags["need_subtests"]

    def set_need_subtests(self, f: bool) -> None:
        """Set the require-sub-tests flag."""
        self._set_flag("need_subtests", f, "requiring sub-tests enabled")

    def force_failure(self) -> bool:
        """Ask tests that support it to fail deliberately."""
        return self._flags["force_failure"]

    def set_force_failure(self, f: bool) -> None:
        """Set the force-failure flag."""
        self._set_flag("force_failure", f, "forcing test-failure enabled")

    def is_simulated(self) -> bool:
        """The run is a simulation (used when testing the engine itself)."""
        return self._flags["simulated"]

    def set_simulated(self, f: bool) -> None:
        """Set the simulated flag."""
        self._set_flag("simulated", f, "simulated testing enabled")

    # --- Filters ---

    def single_group(self) -> int:
        """The only group number allowed to run, 0 for all."""
        return self._single_group

    def set_single_group(self, v: int) -> None:
        """Select a single group by number.

        Raises:
            OptionValueError: If ``v`` is negative or above the group limit;
                the filter is cleared first.
        """
        self._single_group = config.NO_SINGLE_GROUP
        self._single_group = _check_range("--group", v, config.TESTGROUP_MAX)
        if v:
            logger.info("Running only group #%d", v)

    def named_group(self) -> str | None:
        """The only group name allowed to run, None for all."""
        return self._named_group

    def set_named_group(self, name: str | None) -> None:
        """Select a single group by name; an empty name clears the filter."""
        self._named_group = name or None

    def single_case(self) -> int:
        """The only case number allowed to run, 0 for all."""
        return self._single_case

    def set_single_case(self, v: int) -> None:
        """Select a single case by number.

        Raises:
            OptionValueError: If ``v`` is negative or above the case limit.
        """
        self._single_case = config.NO_SINGLE_CASE
        self._single_case = _check_range("--case", v, config.TESTCASE_MAX)
        if v:
            logger.info("Running only case #%d", v)

    def named_case(self) -> str | None:
        """The only case name allowed to run, None for all."""
        return self._named_case

    def set_named_case(self, name: str | None) -> None:
        """Select a single case by name; an empty name clears the filter."""
        self._named_case = name or None

    def single_subtest(self) -> int:
        """The only sub-test number allowed to run, 0 for all."""
        return self._single_subtest

    def set_single_subtest(self, v: int) -> None:
        """Select a single sub-test by number.

        Raises:
            OptionValueError: If ``v`` is negative or above the sub-test limit.
        """
        self._single_subtest = config.NO_SINGLE_SUBTEST
        self._single_subtest = _check_range("--sub-test", v, config.SUBTEST_MAX)
        if v:
            logger.info("Running only sub-test #%d", v)

    def named_subtest(self) -> str | None:
        """The only sub-test name allowed to run, None for all."""
        return self._named_subtest

    def set_named_subtest(self, name: str | None) -> None:
        """Select a single sub-test by name; an empty name clears the filter."""
        self._named_subtest = name or None

    def is_partial_test(self) -> bool:
        """True if any group, case or sub-test filter is active.

        Tests whose checks depend on a full run (e.g. counting everything the
        previous sub-tests produced) use this to skip those checks.
        """
        return bool(
            self._single_group
            or self._single_case
            or self._single_subtest
            or self._named_group
            or self._named_case
            or self._named_subtest
        )

    # --- Values ---

    def test_sleep_time(self) -> int:
        """Milliseconds to sleep after each passing test."""
        return self._sleep_time_ms

    def set_test_sleep_time(self, v: int) -> None:
        """Set the sleep time between tests.

        Raises:
            OptionValueError: If ``v`` is negative or above one hour.
        """
        self._sleep_time_ms = 0
        self._sleep_time_ms = _check_range("--sleep-time", v, config.SLEEPTIME_MAX_MS)
        logger.info("sleep-time (ms) between tests: %d", v)

    def prompt_before(self) -> str:
        """Automatic response to "before" prompts, "" to ask the user."""
        return self._prompt_before

    def set_prompt_before(self, v: str) -> None:
        """Set the automatic "before" response.

        Raises:
            OptionValueError: If the character is not a "before" response.
        """
        self._prompt_before = _check_response(
            "--response-before", v, "".join(BEFORE_RESPONSES)
        )
        logger.info("Automating the response-before with %r", self._prompt_before)

    def prompt_after(self) -> str:
        """Automatic response to "after" prompts, "" to ask the user."""
        return self._prompt_after

    def set_prompt_after(self, v: str) -> None:
        """Set the automatic "after" response.

        Raises:
            OptionValueError: If the character is not an "after" response.
        """
        self._prompt_after = _check_response(
            "--response-after", v, "".join(AFTER_RESPONSES)
        )
        logger.info("Automating the response-after with %r", self._prompt_after)

    def current_test(self) -> int:
        """Index of the test being run, -1 outside a run."""
        return self._current_test

    def set_current_test(self, v: int) -> None:
        """Publish the index of the test being run.

        Raises:
            OptionValueError: If ``v`` is negative.
        """
        if v < 0:
            raise OptionValueError("current test", v, "negative test numbers are illegal")
        self._current_test = v

    def __repr__(self) -> str:
        flags = ", ".join(f"{k}={v}" for k, v in self._flags.items() if v)
        return f"Options(app_name={self.app_name!r}, {flags})"
