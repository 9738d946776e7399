"""Desktop simulator for the reel."""

from .window import ReelWindow

__all__ = ["ReelWindow"]
