"""UI screens for the tap tempo application."""

from .tap import TapScreen

__all__ = ["TapScreen"]
