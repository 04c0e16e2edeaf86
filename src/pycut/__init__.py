"""PYCUT

A small unit-test execution engine. Test callables are registered in a
battery, run in order subject to group/case/sub-test filters, and each run
returns a status whose disposition decides whether testing continues, skips,
stops successfully, or aborts.
"""

__version__ = "0.1.0"

# pylint: disable=wrong-import-position

from pycut.domain.options import Options
from pycut.domain.status import TestStatus
from pycut.domain.value_objects import Disposition
from pycut.entrypoints.cli.options_parser import parse_options
from pycut.entrypoints.cli.run import run_tests
from pycut.interfaces.unit_test import UnitTestCase
from pycut.service_layer.battery import Battery
from pycut.service_layer.runner import TestRunner

__all__ = [
    "__version__",
    "Battery",
    "Disposition",
    "Options",
    "TestRunner",
    "TestStatus",
    "UnitTestCase",
    "parse_options",
    "run_tests",
]
