"""
Tap BPM - Main Textual Application

A small TUI for tapping out a tempo with the space bar.
"""

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Footer, Header

from tapbpm.config import DEFAULT_PRESET, PRESETS, DisplayConfig
from tapbpm.core.session import TapSession

from .screens.tap import TapScreen


class TapBpmApp(App):
    """
    Main Tap BPM application.

    Owns one tap session and renders its latest estimate:
    - Space registers a tap
    - r (or the Reset button) starts over
    - q quits
    """

    CSS = """
    Screen {
        background: $surface;
    }

    Header {
        background: $primary;
    }

    Footer {
        background: $panel;
    }
    """

    TITLE = "Tap BPM"
    SUB_TITLE = "Tap tempo with a 95% confidence interval"

    BINDINGS = [
        Binding("q", "quit", "Quit", priority=True),
    ]

    SCREENS = {
        "tap": TapScreen,
    }

    def __init__(
        self,
        session: TapSession | None = None,
        display: DisplayConfig | None = None,
    ):
        super().__init__()
        self.tap_session = session or TapSession()
        self.display_config = display or PRESETS[DEFAULT_PRESET]

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.push_screen("tap")

    def compose(self) -> ComposeResult:
        """Compose the main UI layout."""
        yield Header()
        yield Container()
        yield Footer()


def main():
    """Main entry point for the application."""
    app = TapBpmApp()
    app.run()


if __name__ == "__main__":
    main()
