"""Millisecond-resolution timing used by test statuses and the battery."""

import logging
import time

logger = logging.getLogger(__name__)


def ms_sleep(ms: int) -> None:
    """Sleep for ``ms`` milliseconds; non-positive values return at once."""
    if ms > 0:
        time.sleep(ms / 1000.0)


class Timer:
    """A start/measure stopwatch.

    The start time is captured from a monotonic clock by `start()`.
    `time_delta()` measures the milliseconds elapsed since then and keeps the
    value as the last duration. No correction is made for scheduler jitter.
    """

    def __init__(self) -> None:
        self._start: float | None = None
        self._end: float | None = None
        self._duration_ms: float = 0.0

    def start(self) -> None:
        """Capture the start time and clear the end time."""
        self._end = None
        self._start = time.perf_counter()

    def is_started(self) -> bool:
        """True once `start()` has been called."""
        return self._start is not None

    def time_delta(self, reset: bool = False) -> float:
        """Return the elapsed milliseconds since the start time.

        Args:
            reset: When True, the start time is re-captured so the next call
                measures a new interval.

        Returns:
            float: Elapsed milliseconds, or -1.0 if the timer was never started.
        """
        if self._start is None:
            logger.error("Logged unit-test start time was never set")
            return -1.0
        self._end = time.perf_counter()
        result = (self._end - self._start) * 1000.0
        if result >= 0.0:
            self._duration_ms = result
        else:  # pragma: no cover - perf_counter is monotonic
            logger.error("Time difference < 0.0, left unassigned")
        if reset:
            self._start = time.perf_counter()
            logger.debug("Unit-test start time reset")
        return result

    def duration_ms(self) -> float:
        """The last measured interval, in milliseconds."""
        return self._duration_ms
