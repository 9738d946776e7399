"""
Headless display surface.

Keeps the reel in memory and records every mutation so hosts (and tests)
can see exactly what a spin did to the container.
"""

from typing import Iterable
import logging

from reeldraw.surface.base import DisplaySurface, ReelItem

logger = logging.getLogger(__name__)


class MemorySurface(DisplaySurface):
    """
    In-memory reel container.

    Attributes:
        mutations: ("append", count) and ("clear", removed) entries in order
        transforms: every (offset, blur) pair applied
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._children: list[ReelItem] = []
        self.mutations: list[tuple[str, int]] = []
        self.transforms: list[tuple[float, float]] = []

    @property
    def children(self) -> tuple[ReelItem, ...]:
        return tuple(self._children)

    @property
    def texts(self) -> list[str]:
        """Child texts, top to bottom."""
        return [item.text for item in self._children]

    def append_items(self, texts: Iterable[str]) -> None:
        items = [ReelItem(str(text)) for text in texts]
        self._children.extend(items)
        self.mutations.append(("append", len(items)))

    def clear(self) -> None:
        removed = len(self._children)
        self._children.clear()
        self.mutations.append(("clear", removed))

    def set_transform(self, offset: float, blur: float = 0.0) -> None:
        super().set_transform(offset, blur)
        self.transforms.append((self.offset, self.blur))

    @property
    def max_scroll(self) -> float:
        """Largest upward scroll reached so far (positive pixels)."""
        if not self.transforms:
            return 0.0
        return max(-offset for offset, _ in self.transforms)

    def reset_log(self) -> None:
        """Forget recorded mutations and transforms."""
        self.mutations.clear()
        self.transforms.clear()
