"""Unit tests for the prompters."""

import click
import pytest

from pycut.adapters import prompters
from pycut.adapters.prompters import ConsolePrompter, ScriptedPrompter


def test_scripted_prompter_replays_then_empties():
    """Canned answers are returned in order, then the empty answer."""
    prompter = ScriptedPrompter(["continue", "f"])
    assert prompter.get_response("one?") == "c"
    assert prompter.get_response("two?") == "f"
    assert prompter.get_response("three?") == ""
    assert prompter.prompts == ["one?", "two?", "three?"]


def test_scripted_prompter_records_beeps_and_pauses():
    """Beeps are counted and pause messages kept."""
    prompter = ScriptedPrompter()
    prompter.beep()
    prompter.pause("wait")
    assert prompter.beeps == 1
    assert prompter.pauses == ["wait"]


def test_console_prompter_keeps_first_character(monkeypatch):
    """The console answer is trimmed to its first character."""
    monkeypatch.setattr(prompters.click, "prompt", lambda *a, **k: "  quit ")
    assert ConsolePrompter().get_response("?") == "q"


def test_console_prompter_end_of_input(monkeypatch):
    """End of input is the empty answer."""

    def abort(*args, **kwargs):
        raise click.Abort()

    monkeypatch.setattr(prompters.click, "prompt", abort)
    assert ConsolePrompter().get_response("?") == ""


@pytest.mark.parametrize("answer", ["", "   "])
def test_console_prompter_blank_answer(monkeypatch, answer):
    """A blank line is the empty answer."""
    monkeypatch.setattr(prompters.click, "prompt", lambda *a, **k: answer)
    assert ConsolePrompter().get_response("?") == ""


def test_console_prompter_beep(capsys):
    """The beep is the terminal bell."""
    ConsolePrompter().beep()
    assert capsys.readouterr().out == "\a"
