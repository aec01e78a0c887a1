"""
Tap Session

Owns the chronological log of taps for one tempo measurement and keeps the
latest BPM estimate up to date after every tap.
"""

from loguru import logger

from .clock import Clock, MonotonicClock
from .statistics import (
    IntervalSummary,
    TapStats,
    compute_tap_stats,
    intervals_from_taps,
    summarize_intervals,
)


class TapSession:
    """
    Incremental tap-tempo estimator.

    Each tap is stored as the elapsed time since the first tap of the
    session. Statistics are recomputed once two or more taps exist.

    A session is meant to be driven by a single control thread (an event
    loop or a text loop). It holds no global state, so independent sessions
    can coexist freely.
    """

    def __init__(self, clock: Clock | None = None):
        """
        Initialize an empty session.

        Args:
            clock: Time source (uses the system monotonic clock if None)
        """
        self.clock = clock or MonotonicClock()
        self._taps: list[float] = []
        self._start_reference: float | None = None
        self._stats = TapStats()

    @property
    def stats(self) -> TapStats:
        """Latest estimate; unchanged until the next tap or reset."""
        return self._stats

    @property
    def taps(self) -> tuple[float, ...]:
        return tuple(self._taps)

    @property
    def start_reference(self) -> float | None:
        return self._start_reference

    @property
    def tap_count(self) -> int:
        return len(self._taps)

    @property
    def is_empty(self) -> bool:
        return not self._taps

    @property
    def intervals(self) -> tuple[float, ...]:
        return tuple(float(x) for x in intervals_from_taps(self._taps))

    def summary(self) -> IntervalSummary | None:
        """Interval moments, or None before the second tap."""
        if len(self._taps) < 2:
            return None
        return summarize_intervals(intervals_from_taps(self._taps))

    def register_tap(self) -> TapStats:
        """
        Record one tap at the current instant.

        Returns:
            The updated TapStats
        """
        now = self.clock.now()

        if self._start_reference is None:
            self._start_reference = now
            elapsed = 0.0
        else:
            elapsed = now - self._start_reference

        self._taps.append(elapsed)

        if len(self._taps) >= 2:
            self._stats = compute_tap_stats(self._taps)

        logger.debug(
            f"Tap {len(self._taps)} at {elapsed:.4f}s -> bpm={self._stats.bpm}"
        )
        return self._stats

    def reset(self) -> None:
        """Discard all taps and statistics."""
        logger.info(f"Resetting tap session after {len(self._taps)} taps")
        self._taps = []
        self._start_reference = None
        self._stats = TapStats()
