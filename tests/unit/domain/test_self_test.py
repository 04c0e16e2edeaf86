"""Unit tests for the self-test hooks on TestStatus."""

from pycut.domain.self_test import decrement_error_count, set_failed_subtest
from pycut.domain.status import TestStatus


def test_deliberate_failure_round_trip(quiet_options):
    """fail_deliberately() then the decrement hook leaves a passing status."""
    status = TestStatus(quiet_options, 1, 1, "self", "round trip")
    status.next_subtest("deliberate")
    status.fail_deliberately()
    assert status.error_count() == 1
    assert status.failed_subtest() == 1

    assert decrement_error_count(status)
    assert status.error_count() == 0
    assert status.failed_subtest() == 0
    assert status.passed()


def test_decrement_below_zero_refused(quiet_options, caplog):
    """There is nothing to take back from a clean status."""
    status = TestStatus(quiet_options, 1, 1, "self", "zero")
    assert not decrement_error_count(status)
    assert status.error_count() == 0
    assert "already zero" in caplog.text


def test_set_failed_subtest(quiet_options):
    """The failed sub-test can be planted, but not made negative."""
    status = TestStatus(quiet_options, 1, 1, "self", "plant")
    assert set_failed_subtest(status, 7)
    assert status.failed_subtest() == 7
    assert not set_failed_subtest(status, -1)
    assert status.failed_subtest() == 7


def test_hooks_are_not_public_status_api():
    """The hooks live outside the TestStatus class."""
    assert not hasattr(TestStatus, "decrement_error_count")
    assert not hasattr(TestStatus, "set_failed_subtest")
