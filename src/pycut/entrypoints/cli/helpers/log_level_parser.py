"""Parsing of the ``-L NAME=LEVEL`` logger-level option.

Values may be repeated (``-L a=INFO -L b=DEBUG``) or packed into one string
separated by commas or whitespace (``PYCUT_LOGGER_LEVELS="a=INFO, b=DEBUG"``).
"""

import logging
import re

import click

DEFAULT_LIB_LEVELS: dict[str, int] = {}
"""Logger levels applied before any ``-L`` override."""

_SEPARATORS = re.compile(r"[,\s]+")


def split_items(value: str | list[str] | tuple[str, ...] | None) -> list[str]:
    """Flatten an option value into its non-empty NAME=LEVEL items.

    Args:
        value: A single string, or the tuple Click builds for a repeatable option.

    Returns:
        list[str]: The items, in the order given.
    """
    if not value:
        return []
    chunks = [value] if isinstance(value, str) else list(value)
    return [item for chunk in chunks for item in _SEPARATORS.split(chunk) if item]


def level_from_name(text: str) -> int:
    """Convert a level name such as ``debug`` or ``WARNING`` to its number.

    Raises:
        click.BadParameter: If ``text`` does not name a logging level.
    """
    lvl = logging.getLevelName(text.strip().upper())
    if not isinstance(lvl, int):
        raise click.BadParameter(f"Invalid log level: {text}")
    return lvl


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...] | None,
) -> dict[str, int]:
    """Click callback turning NAME=LEVEL items into a name -> level mapping.

    Later items override earlier ones and `DEFAULT_LIB_LEVELS`.

    Raises:
        click.BadParameter: If an item is not NAME=LEVEL, or LEVEL is unknown.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for item in split_items(value):
        name, sep, level_text = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected NAME=LEVEL, got {item!r}")
        levels[name.strip()] = level_from_name(level_text)
    return levels
