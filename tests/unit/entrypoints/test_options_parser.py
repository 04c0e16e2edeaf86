"""Unit tests for parse_options."""

import pytest

from pycut.adapters.prompters import ScriptedPrompter
from pycut.entrypoints.cli.options_parser import parse_options


def test_numeric_values():
    """Group, case, sub-test and sleep time are parsed as numbers."""
    options = parse_options(
        ["--group", "1", "--case", "2", "--sub-test", "3", "--sleep-time", "4"],
        "scenario",
    )
    assert options.is_valid()
    assert options.single_group() == 1
    assert options.single_case() == 2
    assert options.single_subtest() == 3
    assert options.test_sleep_time() == 4


def test_named_filters():
    """Non-numeric filter values select by name."""
    options = parse_options(
        ["--group", "io", "--case", "read", "--subtest", "empty file"], "names"
    )
    assert options.named_group() == "io"
    assert options.named_case() == "read"
    assert options.named_subtest() == "empty file"
    assert options.single_group() == 0
    assert options.is_partial_test()


def test_empty_args_is_valid():
    """No options at all gives the defaults."""
    options = parse_options([], "defaults")
    assert options.is_valid()
    assert options.show_progress()
    assert options.app_name == "defaults"


@pytest.mark.parametrize("args, app_name", [(None, "app"), ([], ""), ([], None)])
def test_missing_inputs_make_invalid_options(args, app_name, caplog):
    """An argument vector and an application name are required."""
    options = parse_options(args, app_name)
    assert not options.is_valid()
    assert "need an argument vector" in caplog.text


@pytest.mark.parametrize(
    "args",
    [
        ["--group"],
        ["--group", "101"],
        ["--case", "-3"],
        ["--sub-test", "1001"],
        ["--sleep-time", "soon"],
        ["--sleep-time", "3600001"],
        ["--response-before", "p"],
        ["--ra", "s"],
    ],
)
def test_bad_values_make_invalid_options(args, caplog):
    """Any bad value invalidates the record and is logged."""
    options = parse_options(args, "bad")
    assert not options.is_valid()
    assert any(rec.levelname == "ERROR" for rec in caplog.records)


def test_flags_and_negations():
    """Each flag has a --no- form."""
    options = parse_options(
        [
            "--verbose",
            "--stop-on-error",
            "--interactive",
            "--no-beeps",
            "--require-sub-tests",
            "--force-failure",
            "--simulated",
            "--case-pause",
            "--show-values",
            "--show-step-numbers",
        ],
        "flags",
    )
    assert options.is_verbose()
    assert options.stop_on_error()
    assert options.is_interactive()
    assert not options.do_beep()
    assert options.need_subtests()
    assert options.force_failure()
    assert options.is_simulated()
    assert options.is_pause()
    assert options.show_values()
    assert options.show_step_numbers()

    options = parse_options(["--verbose", "--no-verbose"], "flags")
    assert not options.is_verbose()


def test_response_aliases():
    """--rb and --ra are short forms of the response options."""
    options = parse_options(["--rb", "s", "--ra", "Pass"], "responses")
    assert options.prompt_before() == "s"
    assert options.prompt_after() == "P"


def test_later_flag_wins_over_earlier_cascade():
    """--no-show-progress then --verbose: verbose stays on."""
    options = parse_options(["--no-show-progress", "--verbose"], "order")
    assert options.is_verbose()
    assert not options.show_progress()


def test_later_cascade_wins_over_earlier_flag():
    """--verbose then --no-show-progress: verbose is switched off."""
    options = parse_options(["--verbose", "--no-show-progress"], "order")
    assert not options.is_verbose()


def test_repeated_flag_applies_at_each_position():
    """--verbose, --no-show-progress, --verbose: the second --verbose wins."""
    options = parse_options(["--verbose", "--no-show-progress", "--verbose"], "order")
    assert options.is_verbose()
    assert not options.show_progress()


def test_repeated_value_option_last_wins():
    """A repeated filter takes its last value, written either way."""
    options = parse_options(["--group", "2", "--verbose", "--group=5"], "order")
    assert options.single_group() == 5
    assert options.is_verbose()


def test_options_stop_at_double_dash():
    """Everything after -- belongs to the application under test."""
    options = parse_options(["--group", "2", "--", "--group", "7"], "order")
    assert options.is_valid()
    assert options.single_group() == 2


@pytest.mark.parametrize("flag", ["--batch-mode", "--silent"])
def test_batch_and_silent_cascade(flag):
    """Batch mode and silent switch off progress output."""
    options = parse_options(["--show-values", flag], "cascade")
    assert not options.show_progress()
    assert not options.show_values()


@pytest.mark.parametrize("flag", ["--summarize", "--summary"])
def test_summarize_cascade(flag):
    """Summarize switches off interactive and case-pause."""
    options = parse_options(["--interactive", "--case-pause", flag], "cascade")
    assert options.is_summary()
    assert not options.is_interactive()
    assert not options.is_pause()


def test_unknown_arguments_are_ignored():
    """Arguments meant for the application under test pass through."""
    options = parse_options(
        ["--frobnicate", "data.txt", "-x", "--group", "2"], "shared"
    )
    assert options.is_valid()
    assert options.single_group() == 2


def test_help(capsys):
    """--help prints the options and the extra help, then invalidates."""
    options = parse_options(
        ["--help"], "helpful", additional_help="Needs a serial port."
    )
    out = capsys.readouterr().out
    assert not options.is_valid()
    assert options.help_requested
    assert "--stop-on-error" in out
    assert "Needs a serial port." in out


def test_version(capsys):
    """--version prints the application version, then invalidates."""
    options = parse_options(["--version"], "versioned", app_version="1.2.3")
    assert not options.is_valid()
    assert options.version_requested
    assert "versioned 1.2.3" in capsys.readouterr().out


def test_environment_options_come_first(monkeypatch):
    """PYCUT_OPTIONS is parsed before the command line."""
    monkeypatch.setenv("PYCUT_OPTIONS", "--group 3 --verbose")
    options = parse_options(["--group", "4"], "env")
    assert options.single_group() == 4
    assert options.is_verbose()


def test_prompter_is_kept():
    """The prompter is handed to the record."""
    prompter = ScriptedPrompter()
    options = parse_options([], "prompter", prompter=prompter)
    assert options.prompter is prompter
