"""Tap screen showing the live tempo estimate."""

from loguru import logger

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import Screen
from textual.widgets import Button, Label, Static

from tapbpm.config import format_stats


class TapScreen(Screen):
    """Screen for tapping out a tempo."""

    CSS = """
    TapScreen {
        align: center middle;
    }

    #tap-container {
        width: 50;
        height: auto;
        border: solid $primary;
        padding: 1 2;
        background: $panel;
    }

    .tap-title {
        text-align: center;
        text-style: bold;
        color: $accent;
        margin-bottom: 1;
    }

    .metric {
        margin: 0 2;
        color: $text-muted;
    }

    #bpm {
        color: $text;
        text-style: bold;
    }

    Button {
        margin: 1 0;
    }
    """

    BINDINGS = [
        Binding("space", "tap", "Tap", priority=True),
        Binding("r", "reset", "Reset"),
    ]

    def __init__(self):
        super().__init__()
        self.rendered_lines: list[str] = []

    def compose(self) -> ComposeResult:
        """Compose the tap UI."""
        with Container(id="tap-container"):
            yield Label("Tap BPM", classes="tap-title")
            yield Button("Reset", variant="default", id="reset")
            with Vertical():
                yield Static("", id="ci-low", classes="metric")
                yield Static("", id="bpm", classes="metric")
                yield Static("", id="ci-high", classes="metric")
            yield Static("Press space to tap", classes="metric")

    def on_mount(self) -> None:
        self.refresh_stats()

    def action_tap(self) -> None:
        self.app.tap_session.register_tap()
        self.refresh_stats()

    def action_reset(self) -> None:
        self.app.tap_session.reset()
        self.refresh_stats()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "reset":
            self.action_reset()

    def refresh_stats(self) -> None:
        """Re-render the three tempo lines from the session."""
        stats = self.app.tap_session.stats
        self.rendered_lines = format_stats(stats, self.app.display_config)
        for widget_id, line in zip(("#ci-low", "#bpm", "#ci-high"), self.rendered_lines):
            self.query_one(widget_id, Static).update(line)
        logger.debug(f"Rendered stats: {self.rendered_lines}")
