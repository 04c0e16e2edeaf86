"""Verdict lines for the PYCUT command line.

The unit-test report itself goes to stdout; these one-line verdicts go to
stderr, with an emoji marker when the terminal can encode it and an ASCII
marker otherwise.
"""

import click

GLYPHS: dict[str, tuple[str, str]] = {
    "caution": ("⚠️", "[!]"),
    "success": ("✅", "[OK]"),
    "error": ("❌", "[X]"),
}
"""Marker per message kind: (emoji, ASCII fallback)."""


def _can_encode(text: str) -> bool:
    encoding = getattr(click.get_text_stream("stderr"), "encoding", None) or "ascii"
    try:
        text.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def glyph(kind: str) -> str:
    """The marker for ``kind`` ("caution", "success" or "error").

    Raises:
        KeyError: If ``kind`` is not a known message kind.
    """
    emoji, fallback = GLYPHS[kind]
    return emoji if _can_encode(emoji) else fallback


def _emit(kind: str, msg: str, color: str) -> None:
    click.secho(f"{glyph(kind)}  {msg}", fg=color, bold=True, err=True)


def warn(msg: str) -> None:
    """Yellow warning line on stderr, e.g. ``⚠️  No tests selected.``"""
    _emit("caution", msg, "yellow")


def success(msg: str) -> None:
    """Green success line on stderr."""
    _emit("success", msg, "green")


def error(msg: str) -> None:
    """Red error line on stderr."""
    _emit("error", msg, "red")
