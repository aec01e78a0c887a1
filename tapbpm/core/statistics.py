"""
Tap Interval Statistics

Turns a sequence of tap timestamps into a BPM point estimate and a 95%
confidence interval. The interval is first built on the mean inter-tap
period and then inverted into the BPM domain.
"""

from collections.abc import Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

SECONDS_PER_MINUTE = 60.0

# Large-sample normal approximation; no t-distribution correction.
Z_95 = 1.96


class TapStats(BaseModel):
    """Latest tempo estimate for a tap session."""

    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")

    bpm: float | None = Field(default=None, description="Beats per minute")
    ci_low: float | None = Field(default=None, description="Lower 95% bound (BPM)")
    ci_high: float | None = Field(default=None, description="Upper 95% bound (BPM)")

    @property
    def has_bpm(self) -> bool:
        return self.bpm is not None

    @property
    def has_confidence_interval(self) -> bool:
        return self.ci_low is not None and self.ci_high is not None


class IntervalSummary(BaseModel):
    """Moments of the inter-tap intervals."""

    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")

    count: int = Field(ge=1, description="Number of intervals")
    mean: float = Field(description="Mean interval in seconds")
    std: float = Field(description="Sample standard deviation in seconds")
    standard_error: float | None = Field(
        default=None, description="Standard error of the mean (needs 2+ intervals)"
    )


def intervals_from_taps(taps: Sequence[float]) -> np.ndarray:
    """Durations between consecutive taps, in seconds."""
    return np.diff(np.asarray(taps, dtype=np.float64))


def summarize_intervals(intervals: Sequence[float]) -> IntervalSummary:
    """
    Compute mean, sample standard deviation and standard error.

    The variance divides by ``max(n - 1, 1)``: Bessel's correction for two or
    more intervals, and a plain divide-by-one for a single interval (whose
    deviation from its own mean is always zero).

    Args:
        intervals: Inter-tap intervals in seconds

    Returns:
        IntervalSummary

    Raises:
        ValueError: If no intervals are given
    """
    values = np.asarray(intervals, dtype=np.float64)
    n = len(values)
    if n == 0:
        raise ValueError("Need at least one interval (two taps) to summarize")

    # Non-finite taps propagate as inf/nan moments rather than raising.
    with np.errstate(invalid="ignore", over="ignore"):
        mean = float(np.sum(values) / n)
        var = float(np.sum((values - mean) ** 2) / max(n - 1, 1))
        std = float(np.sqrt(var))

    return IntervalSummary(
        count=n,
        mean=mean,
        std=std,
        standard_error=std / float(np.sqrt(n)) if n >= 2 else None,
    )


def _per_minute(period: float) -> float:
    # A zero period comes out as inf instead of raising ZeroDivisionError.
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(SECONDS_PER_MINUTE) / np.float64(period))


def stats_from_summary(summary: IntervalSummary) -> TapStats:
    """Convert interval moments into a BPM estimate and confidence band."""
    bpm = _per_minute(summary.mean)

    if summary.standard_error is None:
        return TapStats(bpm=bpm)

    margin = Z_95 * summary.standard_error
    # Longer period means slower tempo: the upper period bound is the lower BPM bound.
    return TapStats(
        bpm=bpm,
        ci_low=_per_minute(summary.mean + margin),
        ci_high=_per_minute(summary.mean - margin),
    )


def compute_tap_stats(taps: Sequence[float]) -> TapStats:
    """
    Estimate tempo from tap timestamps.

    Args:
        taps: Tap times in seconds, in chronological order

    Returns:
        TapStats; every field is None with fewer than two taps, and the
        confidence bounds stay None with fewer than three
    """
    if len(taps) < 2:
        return TapStats()
    return stats_from_summary(summarize_intervals(intervals_from_taps(taps)))
