"""Fixtures for end-to-end CLI tests."""

import pytest
from click.testing import CliRunner

# pylint: disable=redefined-outer-name


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated working directory.

    The flight-recorder log and any ``--app-dir`` modules land there.
    """
    with runner.isolated_filesystem():
        yield
