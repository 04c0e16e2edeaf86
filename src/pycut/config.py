"""Configuration utilities for PYCUT.

This module centralizes the limits and defaults of the unit-test options and
the small helpers that read configuration from the environment.
"""

import os
import shlex
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "pycut"  # pragma: no mutate

# --- Option limits ---

TESTGROUP_MAX = 100
TESTCASE_MAX = 100
SUBTEST_MAX = 1000
SLEEPTIME_MAX_MS = 3_600_000

# --- Sentinels ---

NO_SINGLE_GROUP = 0
NO_SINGLE_CASE = 0
NO_SINGLE_SUBTEST = 0
NO_CURRENT_TEST = -1

# --- Battery ---

CASE_ALLOCATION = 100
"""Number of test slots added each time the battery runs out of room."""

OPTIONS_ENV_VAR = "PYCUT_OPTIONS"  # pragma: no mutate


def get_env_args() -> list[str]:
    """Get extra unit-test arguments from the environment.

    Returns:
        The shell-split value of the `PYCUT_OPTIONS` environment variable, or
        an empty list when it is unset or empty.
    """
    if not (value := os.environ.get(OPTIONS_ENV_VAR)):
        return []
    return shlex.split(value)


def default_log_path() -> Path:
    """Return the default flight-recorder path in the user's log directory."""
    return Path(user_log_dir(APP_NAME, appauthor=False, ensure_exists=True)) / "latest.log"
