"""Unit tests for the CLI helpers: logger-level parsing and verdict lines."""

import logging

import click
import pytest

from pycut.entrypoints.cli.helpers import log_level_parser, messages
from pycut.entrypoints.cli.helpers.log_level_parser import parse_log_level, split_items

# ============================================================================
#                               Logger levels
# ============================================================================


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, []),
        ("", []),
        ("a=INFO", ["a=INFO"]),
        ("a=INFO, b=DEBUG c=ERROR", ["a=INFO", "b=DEBUG", "c=ERROR"]),
        (("a=INFO", "b=DEBUG,c=ERROR"), ["a=INFO", "b=DEBUG", "c=ERROR"]),
    ],
)
def test_split_items(value, expected):
    """Items are split on commas and whitespace, empties dropped."""
    assert split_items(value) == expected


def test_parse_log_level():
    """Names map to numeric levels; later items win."""
    levels = parse_log_level(None, None, ("pycut=info", "tests=DEBUG", "pycut=ERROR"))
    assert levels == {"pycut": logging.ERROR, "tests": logging.DEBUG}


def test_parse_log_level_keeps_defaults(monkeypatch):
    """Defaults apply unless overridden."""
    monkeypatch.setattr(log_level_parser, "DEFAULT_LIB_LEVELS", {"noisy": logging.WARNING})
    assert parse_log_level(None, None, ()) == {"noisy": logging.WARNING}


@pytest.mark.parametrize("item", ["pycut", "=INFO", "pycut=LOUD"])
def test_parse_log_level_rejects(item):
    """Malformed items and unknown levels are bad parameters."""
    with pytest.raises(click.BadParameter):
        parse_log_level(None, None, (item,))


# ============================================================================
#                               Verdict lines
# ============================================================================


@pytest.mark.parametrize(
    "emit, kind", [(messages.warn, "caution"), (messages.success, "success"), (messages.error, "error")]
)
def test_messages_go_to_stderr(capsys, emit, kind):
    """Verdicts are written to stderr with the marker for their kind."""
    emit("the verdict")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "the verdict" in captured.err
    assert any(mark in captured.err for mark in messages.GLYPHS[kind])


def test_glyph_falls_back_to_ascii(monkeypatch):
    """Terminals that cannot encode the emoji get the ASCII marker."""
    monkeypatch.setattr(messages, "_can_encode", lambda text: False)
    assert messages.glyph("success") == "[OK]"
    assert messages.glyph("error") == "[X]"


def test_unknown_glyph():
    """Only the known message kinds have markers."""
    with pytest.raises(KeyError):
        messages.glyph("shrug")
