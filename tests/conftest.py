"""Global pytest fixtures for PYCUT."""

from __future__ import annotations

from pathlib import Path

import pytest

from pycut.adapters.prompters import ScriptedPrompter
from pycut.domain.options import Options

# pylint: disable=redefined-outer-name, unused-argument

TESTS_ROOT = Path(__file__).parent.resolve()
DIRECTORY_MARKS = {"unit": pytest.mark.unit, "e2e": pytest.mark.e2e}
"""Mark added to every test under tests/<directory>/."""


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark each test after its top-level directory, e.g. tests/unit -> unit."""
    for item in items:
        try:
            top = item.path.resolve().relative_to(TESTS_ROOT).parts[0]
        except ValueError:
            continue
        mark = DIRECTORY_MARKS.get(top)
        if mark is not None and item.get_closest_marker(mark.name) is None:
            item.add_marker(mark)


@pytest.fixture(autouse=True)
def no_env_options(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's PYCUT_OPTIONS out of the tests."""
    monkeypatch.delenv("PYCUT_OPTIONS", raising=False)


@pytest.fixture
def prompter() -> ScriptedPrompter:
    """A prompter with no canned answers (every prompt gets "")."""
    return ScriptedPrompter()


@pytest.fixture
def options(prompter: ScriptedPrompter) -> Options:
    """Default options for a test application named "unit".

    Progress output stays on (the default) so output assertions can see it.
    """
    return Options(app_name="unit", app_version="0.0", prompter=prompter)


@pytest.fixture
def quiet_options(options: Options) -> Options:
    """Options with all progress output off."""
    options.set_silent(True)
    return options
