#!/usr/bin/env python3
"""Tap BPM - CLI Entry Point.

Command-line interface for tap tempo estimation.
Supports an interactive text shell, replay of recorded timestamps,
and the terminal UI.
"""

import argparse
import math
import sys
from collections.abc import Callable, Iterable
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from tapbpm import __version__
from tapbpm.config import DEFAULT_PRESET, PRESETS, DisplayConfig, format_stats, get_preset
from tapbpm.core.clock import ReplayClock
from tapbpm.core.session import TapSession
from tapbpm.core.statistics import IntervalSummary, TapStats

TAP_COMMANDS = {"", "t", "tap"}
RESET_COMMANDS = {"r", "reset"}
QUIT_COMMANDS = {"q", "quit", "exit"}

SHELL_HELP = "Enter (or 't') = tap, 'r' = reset, 'q' = quit"


# --- Pydantic Models for CLI Output ---


class ReplayReport(BaseModel):
    """Tempo estimate for a recorded tap sequence."""

    model_config = ConfigDict(ser_json_inf_nan="constants")

    tap_count: int = Field(description="Number of taps replayed")
    taps: list[float] = Field(
        default_factory=list, description="Elapsed seconds since the first tap"
    )
    summary: IntervalSummary | None = None
    stats: TapStats = Field(default_factory=TapStats)


def setup_logging(verbose: bool = False):
    """Configure logging."""
    logger.remove()

    log_file = Path.cwd() / "logs" / "tapbpm.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_file,
        rotation="10 MB",
        retention="7 days",
        level="DEBUG" if verbose else "INFO",
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} - {message}",
    )

    if verbose:
        logger.add(sys.stderr, level="DEBUG")


def run_text_shell(
    session: TapSession,
    lines: Iterable[str],
    write: Callable[[str], None] = print,
    config: DisplayConfig | None = None,
) -> int:
    """
    Drive a session from line-based input.

    Each line is one event. After every tap or reset the three tempo
    lines are written out.

    Args:
        session: Session receiving the taps
        lines: Input lines (e.g. sys.stdin)
        write: Output callback for rendered lines
        config: Display preset (classic if None)

    Returns:
        Number of taps registered
    """
    taps = 0

    for raw in lines:
        command = raw.strip().lower()

        if command in QUIT_COMMANDS:
            break
        if command in TAP_COMMANDS:
            stats = session.register_tap()
            taps += 1
        elif command in RESET_COMMANDS:
            session.reset()
            stats = session.stats
        else:
            logger.warning(f"Unknown shell command: {command!r}")
            write(SHELL_HELP)
            continue

        for line in format_stats(stats, config):
            write(line)

    logger.info(f"Text shell finished after {taps} taps")
    return taps


def parse_timestamps(values: Iterable[str]) -> list[float]:
    """
    Parse timestamps from text, skipping blank entries.

    Raises:
        ValueError: If an entry is not a finite number
    """
    timestamps = []
    for value in values:
        value = value.strip()
        if not value:
            continue
        try:
            timestamp = float(value)
        except ValueError:
            raise ValueError(f"Invalid timestamp: {value!r}") from None
        if not math.isfinite(timestamp):
            raise ValueError(f"Invalid timestamp: {value!r}")
        timestamps.append(timestamp)
    return timestamps


def replay_taps(timestamps: list[float]) -> ReplayReport:
    """
    Feed recorded timestamps through a session.

    Args:
        timestamps: Tap times in seconds (non-decreasing)

    Returns:
        ReplayReport with the final estimate

    Raises:
        ValueError: If fewer than two timestamps are given or they decrease
    """
    if len(timestamps) < 2:
        raise ValueError("Need at least two taps to estimate tempo")

    clock = ReplayClock(timestamps)
    session = TapSession(clock=clock)
    while clock.remaining:
        session.register_tap()

    return ReplayReport(
        tap_count=session.tap_count,
        taps=list(session.taps),
        summary=session.summary(),
        stats=session.stats,
    )


def print_report(report: ReplayReport, config: DisplayConfig) -> None:
    """Print a human-readable replay report."""
    print("TAP TEMPO REPORT")
    print("================")
    print(f"Taps             : {report.tap_count}")
    if report.summary is not None:
        print(f"Intervals        : {report.summary.count}")
        print(f"Mean interval    : {report.summary.mean:.6f} s")
        print(f"Std deviation    : {report.summary.std:.6f} s")
    for line in format_stats(report.stats, config):
        print(line)


def run_replay(values: list[str], as_json: bool, config: DisplayConfig) -> int:
    """Run the replay command and print its output."""
    try:
        if not values:
            values = sys.stdin.read().splitlines()
        timestamps = parse_timestamps(values)
        logger.info(f"Replaying {len(timestamps)} timestamps")
        report = replay_taps(timestamps)
    except ValueError as e:
        logger.error(f"Replay failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if as_json:
        print(report.model_dump_json(indent=2))
    else:
        print_report(report, config)
    return 0


def run_shell(config: DisplayConfig) -> int:
    """Run the interactive text shell on stdin."""
    session = TapSession()
    print(SHELL_HELP)
    try:
        run_text_shell(session, sys.stdin, config=config)
    except KeyboardInterrupt:
        logger.info("Text shell interrupted")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Tap BPM - Estimate tempo from taps with a 95% confidence interval",
    )

    parser.add_argument("--version", action="version", version=f"tapbpm {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument(
        "--display",
        choices=sorted(PRESETS),
        default=DEFAULT_PRESET,
        help=f"Display preset (default: {DEFAULT_PRESET})",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    shell_parser = subparsers.add_parser(
        "shell", help="Tap in a line-based text shell (default)"
    )
    shell_parser.add_argument(
        "--display",
        choices=sorted(PRESETS),
        default=argparse.SUPPRESS,
        help="Display preset (overrides the global --display)",
    )

    replay_parser = subparsers.add_parser(
        "replay", help="Estimate tempo from recorded timestamps"
    )
    replay_parser.add_argument(
        "timestamps",
        nargs="*",
        help="Tap timestamps in seconds. Leave empty to read from STDIN.",
    )
    replay_parser.add_argument(
        "--json", action="store_true", help="Print the report as JSON"
    )

    subparsers.add_parser("ui", help="Start the terminal UI")

    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)
    config = get_preset(args.display)

    if args.command == "replay":
        return run_replay(args.timestamps, args.json, config)
    elif args.command == "ui":
        from tapbpm.ui.app import TapBpmApp

        TapBpmApp(display=config).run()
        return 0
    else:
        return run_shell(config)


if __name__ == "__main__":
    sys.exit(main())
