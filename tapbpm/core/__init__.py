"""Core tap timing and tempo statistics."""

from .clock import Clock, ManualClock, MonotonicClock, ReplayClock
from .session import TapSession
from .statistics import (
    IntervalSummary,
    TapStats,
    compute_tap_stats,
    intervals_from_taps,
    summarize_intervals,
)

__all__ = [
    # Session
    "TapSession",
    # Clocks
    "Clock",
    "MonotonicClock",
    "ManualClock",
    "ReplayClock",
    # Statistics
    "TapStats",
    "IntervalSummary",
    "compute_tap_stats",
    "intervals_from_taps",
    "summarize_intervals",
]
