"""reeldraw - weighted prize reel with an animated spin."""

from reeldraw.core.diagnostics import SpinError
from reeldraw.core.state import SpinState
from reeldraw.draw.prize import Prize
from reeldraw.session.slot import Slot
from reeldraw.session.store import SpinConfiguration
from reeldraw.surface.memory import MemorySurface
from reeldraw.surface.registry import SurfaceRegistry

__version__ = "0.1.0"

__all__ = [
    "Prize",
    "Slot",
    "SpinConfiguration",
    "SpinError",
    "SpinState",
    "MemorySurface",
    "SurfaceRegistry",
]
