"""
Time Sources

A session measures taps against a monotonic timeline. The clock is injected
so that tests and replays can drive a session with synthetic timestamps.
"""

import math
import time
from collections.abc import Iterable
from typing import Protocol


class Clock(Protocol):
    """Anything that can report the current instant in seconds."""

    def now(self) -> float: ...


class MonotonicClock:
    """Wall-independent system clock backed by ``time.monotonic``."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    """
    Clock that only moves when told to.

    Useful for deterministic tests and for embedding a session in a host
    that has its own notion of time.
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        """
        Move the clock forward.

        Args:
            seconds: Non-negative duration to add

        Returns:
            The new current instant
        """
        if seconds < 0:
            raise ValueError(f"Cannot advance clock by a negative amount: {seconds}")
        self._now += float(seconds)
        return self._now

    def set(self, instant: float) -> None:
        if instant < self._now:
            raise ValueError(
                f"Monotonic clock cannot move backwards ({instant} < {self._now})"
            )
        self._now = float(instant)


class ReplayClock:
    """Clock that hands out pre-recorded timestamps, one per reading."""

    def __init__(self, timestamps: Iterable[float]):
        values = [float(t) for t in timestamps]
        for value in values:
            if not math.isfinite(value):
                raise ValueError(f"Timestamps must be finite, got {value}")
        for previous, current in zip(values, values[1:]):
            if current < previous:
                raise ValueError(
                    f"Timestamps must be non-decreasing ({current} follows {previous})"
                )
        self._values = values
        self._index = 0

    @property
    def remaining(self) -> int:
        return len(self._values) - self._index

    def now(self) -> float:
        if self._index >= len(self._values):
            raise ValueError("Replay clock exhausted")
        value = self._values[self._index]
        self._index += 1
        return value
