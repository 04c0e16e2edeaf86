"""Build an `Options` record from an argument vector.

The parser is a Click command whose option callbacks apply each setting to
the record. Click hands a repeated option to its callback only once, so the
argument vector is split into one chunk per option occurrence and each chunk
goes through the command in turn. The cascading side effects of
``--no-show-progress``, ``--batch-mode``, ``--silent`` and ``--summarize``
therefore play out in command-line order: in ``--no-show-progress --verbose``
the later ``--verbose`` wins, in ``--verbose --no-show-progress`` verbose ends
up off, and in ``--verbose --no-show-progress --verbose`` it is back on.

Only options actually given on the command line are applied; defaults come
from `Options` itself. Unknown arguments are ignored, since the same argv is
often shared with the application under test.

Example:
    >>> options = parse_options(["--group", "1", "--verbose"], "demo")
    >>> options.single_group(), options.is_verbose()
    (1, True)
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import click
from click.core import ParameterSource

from pycut import config
from pycut.domain.errors import OptionValueError
from pycut.domain.options import Options

if TYPE_CHECKING:
    from pycut.interfaces.prompter import Prompter

logger = logging.getLogger(__name__)

# (option declarations, Options setter, help)
FLAG_OPTIONS: tuple[tuple[tuple[str, ...], str, str], ...] = (
    (("--verbose/--no-verbose",), "set_verbose", "Show extra commentary."),
    (
        ("--show-progress/--no-show-progress",),
        "set_show_progress",
        "Show the test titles and results. Off also turns off --verbose, "
        "--show-values and --show-step-numbers.",
    ),
    (
        ("--silent/--no-silent",),
        "set_silent",
        "Show nothing, not even failures. Also turns off --show-progress.",
    ),
    (("--show-values/--no-show-values",), "set_show_values", "Show result values."),
    (
        ("--show-step-numbers/--no-show-step-numbers",),
        "set_show_step_numbers",
        "Show each sub-test number as it runs.",
    ),
    (
        ("--stop-on-error/--no-stop-on-error",),
        "set_stop_on_error",
        "Stop after the first failing test.",
    ),
    (
        ("--batch-mode/--no-batch-mode",),
        "set_batch_mode",
        "Never prompt; assume continue or pass. Also turns off --show-progress.",
    ),
    (
        ("--interactive/--no-interactive",),
        "set_interactive",
        "Perform interactive tests instead of skipping them.",
    ),
    (("--beeps/--no-beeps",), "set_beep", "Beep before each prompt."),
    (
        ("--summarize/--no-summarize", "--summary/--no-summary"),
        "set_summarize",
        "List the tests and sub-tests without running them. Also turns off "
        "--interactive and --case-pause.",
    ),
    (("--case-pause/--no-case-pause",), "set_case_pause", "Pause after each test."),
    (
        ("--require-sub-tests/--no-require-sub-tests",),
        "set_need_subtests",
        "Treat a test without sub-tests as an error.",
    ),
    (
        ("--force-failure/--no-force-failure",),
        "set_force_failure",
        "Ask tests to fail deliberately.",
    ),
    (("--simulated/--no-simulated",), "set_simulated", "Mark the run as simulated."),
)

# (option declarations, Options setter for a number, setter for a name, help)
FILTER_OPTIONS: tuple[tuple[tuple[str, ...], str, str, str], ...] = (
    (
        ("--group",),
        "set_single_group",
        "set_named_group",
        f"Run only this group, by number (1-{config.TESTGROUP_MAX}) or name.",
    ),
    (
        ("--case",),
        "set_single_case",
        "set_named_case",
        f"Run only this case, by number (1-{config.TESTCASE_MAX}) or name.",
    ),
    (
        ("--sub-test", "--subtest"),
        "set_single_subtest",
        "set_named_subtest",
        f"Run only this sub-test, by number (1-{config.SUBTEST_MAX}) or name.",
    ),
)


def _given(ctx: click.Context, param: click.Parameter) -> bool:
    return ctx.get_parameter_source(param.name) is ParameterSource.COMMANDLINE


def _flag_callback(setter: str):
    def callback(ctx: click.Context, param: click.Parameter, value: bool) -> None:
        if _given(ctx, param):
            getattr(ctx.obj, setter)(value)

    return callback


def _filter_callback(number_setter: str, name_setter: str):
    def callback(ctx: click.Context, param: click.Parameter, value: str) -> None:
        if not _given(ctx, param):
            return
        try:
            number = int(value)
        except ValueError:
            getattr(ctx.obj, name_setter)(value)
        else:
            getattr(ctx.obj, number_setter)(number)

    return callback


def _sleep_callback(ctx: click.Context, param: click.Parameter, value: int) -> None:
    if _given(ctx, param):
        ctx.obj.set_test_sleep_time(value)


def _response_callback(setter: str):
    def callback(ctx: click.Context, param: click.Parameter, value: str) -> None:
        if _given(ctx, param):
            getattr(ctx.obj, setter)(value)

    return callback


def _help_callback(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if not (value and _given(ctx, param)):
        return
    options: Options = ctx.obj
    click.echo(ctx.get_help())
    if options.additional_help:
        click.echo(f"\n{options.additional_help}")
    options.help_requested = True
    options.invalidate()


def _version_callback(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if not (value and _given(ctx, param)):
        return
    options: Options = ctx.obj
    click.echo(f"{options.app_name} {options.app_version}".rstrip())
    options.version_requested = True
    options.invalidate()


def build_command(app_name: str) -> click.Command:
    """Build the Click command that parses unit-test options for ``app_name``."""
    params: list[click.Parameter] = []
    for decls, setter, text in FLAG_OPTIONS:
        params.append(
            click.Option(
                decls,
                default=False,
                expose_value=False,
                callback=_flag_callback(setter),
                help=text,
            )
        )
    for decls, number_setter, name_setter, text in FILTER_OPTIONS:
        params.append(
            click.Option(
                decls,
                type=str,
                metavar="N|NAME",
                expose_value=False,
                callback=_filter_callback(number_setter, name_setter),
                help=text,
            )
        )
    params.extend(
        [
            click.Option(
                ("--sleep-time",),
                type=int,
                metavar="MS",
                expose_value=False,
                callback=_sleep_callback,
                help=f"Sleep this many milliseconds after each passing test "
                f"(0-{config.SLEEPTIME_MAX_MS}).",
            ),
            click.Option(
                ("--response-before", "--rb"),
                type=str,
                metavar="C",
                expose_value=False,
                callback=_response_callback("set_prompt_before"),
                help="Answer every 'before' prompt with C: c(ontinue), s(kip), "
                "f(ail), q(uit) or a(bort).",
            ),
            click.Option(
                ("--response-after", "--ra"),
                type=str,
                metavar="C",
                expose_value=False,
                callback=_response_callback("set_prompt_after"),
                help="Answer every 'after' prompt with C: p(ass), c(ontinue), "
                "f(ail), q(uit) or a(bort).",
            ),
            click.Option(
                ("--version",),
                is_flag=True,
                expose_value=False,
                callback=_version_callback,
                help="Show the version and stop.",
            ),
            click.Option(
                ("--help",),
                is_flag=True,
                expose_value=False,
                callback=_help_callback,
                help="Show this message and stop.",
            ),
        ]
    )
    return click.Command(
        app_name,
        params=params,
        add_help_option=False,
        help=f"Unit-test options for {app_name}.",
        context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
    )


def split_occurrences(command: click.Command, argv: Sequence[str]) -> list[list[str]]:
    """Split ``argv`` into one chunk per occurrence of a known option.

    A value option takes the following token as its value unless it is given
    as ``--name=value``. Tokens the command does not know are dropped, and a
    ``--`` ends the options.
    """
    takes_value = {
        name: not param.is_flag
        for param in command.params
        if isinstance(param, click.Option)
        for name in (*param.opts, *param.secondary_opts)
    }
    chunks = []
    tokens = iter(argv)
    for token in tokens:
        if token == "--":
            break
        name, sep, _ = token.partition("=")
        if name not in takes_value:
            continue
        chunk = [token]
        if takes_value[name] and not sep:
            chunk.extend(itertools.islice(tokens, 1))
        chunks.append(chunk)
    return chunks


def parse_options(
    args: Sequence[str] | None,
    app_name: str | None,
    app_version: str = "",
    additional_help: str = "",
    prompter: Prompter | None = None,
    **extra: Any,
) -> Options:
    """Parse unit-test options.

    Arguments from the `PYCUT_OPTIONS` environment variable are parsed
    first, so the command line can override them.

    Args:
        args: The argument vector, without the program name.
        app_name: Short name of the unit-test application; required.
        app_version: Version shown in the banner and by ``--version``.
        additional_help: Text appended to the ``--help`` output.
        prompter: Terminal used by interactive tests.
        **extra: Passed to `click.Command.make_context`.

    Returns:
        Options: The parsed record. It is invalid (``is_valid()`` is False) if
        ``args`` or ``app_name`` is missing, any value is bad, or ``--help``
        or ``--version`` was given.
    """
    options = Options(
        app_name=app_name or "",
        app_version=app_version,
        additional_help=additional_help,
        prompter=prompter,
    )
    if args is None or not app_name:
        logger.error("Options need an argument vector and an application name")
        options.invalidate()
        return options

    argv = [*config.get_env_args(), *args]
    command = build_command(app_name)
    for chunk in split_occurrences(command, argv):
        try:
            command.make_context(app_name, chunk, obj=options, **extra)
        except click.ClickException as exc:
            logger.error("Bad unit-test option: %s", exc.format_message())
            options.invalidate()
        except OptionValueError as exc:
            logger.error("%s", exc)
            options.invalidate()
        if not options.is_valid():
            return options
    logger.debug("Parsed unit-test options %r from %s", options, argv)
    return options
