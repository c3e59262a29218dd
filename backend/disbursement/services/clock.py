"""Time sources for vesting calculations.

Schedules never read the wall clock directly. They ask an injected clock,
so tests (and the manual-clock API mode) can move time forward on demand.
"""
import threading
import time
from typing import Optional, Protocol


class Clock(Protocol):
    def now(self) -> int:
        """Current unix timestamp in seconds"""
        ...


class SystemClock:
    """Wall-clock time"""

    def now(self) -> int:
        return int(time.time())

    def __repr__(self):
        return "<SystemClock>"


class ManualClock:
    """Clock that only moves when told to.

    Time is monotonic: ``advance`` and ``set`` refuse to move it backwards.
    """

    def __init__(self, start: Optional[int] = None):
        self._now = int(time.time()) if start is None else start
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            return self._now

    def advance(self, seconds: int) -> int:
        """Move time forward and return the new timestamp"""
        if seconds < 0:
            raise ValueError("Cannot advance the clock by a negative amount")
        with self._lock:
            self._now += seconds
            return self._now

    def set(self, timestamp: int) -> None:
        with self._lock:
            if timestamp < self._now:
                raise ValueError("Clock cannot move backwards")
            self._now = timestamp

    def __repr__(self):
        return f"<ManualClock now={self._now}>"
