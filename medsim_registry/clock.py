"""
Time sources for the registries.

Every store reads time through a zero-argument callable returning epoch
milliseconds. Operations also accept an explicit ``now`` override.
"""

import time
from typing import Callable

Clock = Callable[[], int]


def system_clock() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


class ManualClock:
    """
    Advance-only clock for simulation replays and tests.

    Never moves backwards, so instants read from it are non-decreasing.
    """

    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError("start must be non-negative")
        self._now = start

    def __call__(self) -> int:
        return self._now

    def advance(self, ms: int) -> int:
        if ms < 0:
            raise ValueError("ManualClock cannot move backwards")
        self._now += ms
        return self._now

    def set(self, instant: int) -> int:
        if instant < self._now:
            raise ValueError(
                f"ManualClock cannot move backwards ({instant} < {self._now})"
            )
        self._now = instant
        return self._now
