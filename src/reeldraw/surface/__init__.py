"""Display surfaces the reel renders into."""

from .base import DisplaySurface, ReelItem, DEFAULT_ITEM_HEIGHT
from .memory import MemorySurface
from .registry import SurfaceRegistry

__all__ = [
    "DisplaySurface",
    "ReelItem",
    "DEFAULT_ITEM_HEIGHT",
    "MemorySurface",
    "SurfaceRegistry",
]
