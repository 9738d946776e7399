"""
Abstract base class for reel display surfaces.

A display surface holds an ordered list of child items (one per reel row),
applies a vertical transform while spinning, and hands out animation
controllers bound to itself. Both the headless surface and the pygame
simulator follow this contract.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable
import asyncio

from reeldraw.animation.controller import AnimationController, SleepFunc, TimelineAnimation
from reeldraw.animation.timeline import Timeline

# 7.5rem at 16px per rem
DEFAULT_ITEM_HEIGHT = 7.5 * 16


@dataclass(frozen=True)
class ReelItem:
    """A single row rendered on the reel."""

    text: str


class DisplaySurface(ABC):
    """Abstract base class for reel containers."""

    def __init__(
        self,
        item_height: float = DEFAULT_ITEM_HEIGHT,
        frame_ms: float = 16.0,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        if item_height <= 0:
            raise ValueError(f"item_height must be positive, got {item_height}")
        self._item_height = float(item_height)
        self._frame_ms = frame_ms
        self._sleep = sleep
        self._offset = 0.0
        self._blur = 0.0

    @property
    def item_height(self) -> float:
        """Height of one reel row in pixels."""
        return self._item_height

    @property
    def offset(self) -> float:
        """Current vertical translation (negative scrolls up)."""
        return self._offset

    @property
    def blur(self) -> float:
        """Current blur radius in pixels."""
        return self._blur

    @property
    @abstractmethod
    def children(self) -> tuple[ReelItem, ...]:
        """Current child items, top to bottom."""
        ...

    @abstractmethod
    def append_items(self, texts: Iterable[str]) -> None:
        """Append one child item per text, in order."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove every child item."""
        ...

    def set_transform(self, offset: float, blur: float = 0.0) -> None:
        """Apply the vertical offset and blur for the current frame."""
        self._offset = float(offset)
        self._blur = float(blur)

    def animate(self, timeline: Timeline) -> AnimationController:
        """Create a controller that plays ``timeline`` on this surface.

        The controller is returned idle; call ``play()`` to start it.
        """
        return TimelineAnimation(
            timeline,
            on_frame=self._apply_frame,
            frame_ms=self._frame_ms,
            sleep=self._sleep,
        )

    def _apply_frame(self, values: Dict[str, Any]) -> None:
        self.set_transform(values.get("offset", 0.0), values.get("blur", 0.0))
