"""Display Presets for Tap BPM Front Ends.

Pre-defined formatting configurations for rendering a TapStats triple.
"""

from dataclasses import dataclass
from typing import Any

from tapbpm.core.statistics import TapStats


@dataclass(frozen=True)
class DisplayConfig:
    """How a front end renders the three tempo numbers."""

    precision: int = 2
    placeholder: str = "0.00"
    bpm_label: str = "BPM"
    low_label: str = "Lower 95% CI"
    high_label: str = "Upper 95% CI"

    def format_value(self, value: float | None) -> str:
        if value is None:
            return self.placeholder
        return f"{value:.{self.precision}f}"


PRESETS: dict[str, DisplayConfig] = {
    # Unset values shown as zero
    "classic": DisplayConfig(),
    # Unset values shown as a dash
    "blank": DisplayConfig(placeholder="--"),
    # Extra decimals for checking timing consistency
    "precise": DisplayConfig(precision=4, placeholder="--"),
}

DEFAULT_PRESET = "classic"


def get_preset(name: str) -> DisplayConfig:
    """Get a display preset by name.

    Args:
        name: Preset name.

    Returns:
        DisplayConfig for the preset.

    Raises:
        KeyError: If preset name is not found.
    """
    if name in PRESETS:
        return PRESETS[name]

    available = ", ".join(PRESETS.keys())
    raise KeyError(f"Unknown display preset '{name}'. Available: {available}")


def list_presets() -> dict[str, dict[str, Any]]:
    """List all display presets with their parameters."""
    return {
        name: {"precision": config.precision, "placeholder": config.placeholder}
        for name, config in PRESETS.items()
    }


def format_stats(stats: TapStats, config: DisplayConfig | None = None) -> list[str]:
    """Render stats as display lines: lower bound, BPM, upper bound."""
    config = config or PRESETS[DEFAULT_PRESET]
    return [
        f"{config.low_label}: {config.format_value(stats.ci_low)}",
        f"{config.bpm_label}: {config.format_value(stats.bpm)}",
        f"{config.high_label}: {config.format_value(stats.ci_high)}",
    ]
