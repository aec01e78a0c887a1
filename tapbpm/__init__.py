"""Tap BPM - Tap Tempo Estimation.

Measures tapping cadence and reports a beats-per-minute estimate with a 95%
confidence interval, updated after every tap. Ships a line-based text shell
and a terminal UI on top of the core session.
"""

__version__ = "0.1.0"
