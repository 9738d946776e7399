"""Locates display surfaces by selector string."""

from typing import Optional
import logging

from reeldraw.surface.base import DisplaySurface

logger = logging.getLogger(__name__)


class SurfaceRegistry:
    """Maps selectors (e.g. ``"#reel"``) to display surfaces."""

    def __init__(self) -> None:
        self._surfaces: dict[str, DisplaySurface] = {}

    def bind(self, selector: str, surface: DisplaySurface) -> None:
        """Register ``surface`` under ``selector``, replacing any previous one."""
        key = selector.strip()
        if not key:
            raise ValueError("Selector must not be empty")
        if key in self._surfaces:
            logger.warning(f"Rebinding display surface for selector {key!r}")
        self._surfaces[key] = surface
        logger.debug(f"Display surface bound: {key}")

    def unbind(self, selector: str) -> bool:
        """Remove the surface for ``selector``. Returns True if one was bound."""
        return self._surfaces.pop(selector.strip(), None) is not None

    def query(self, selector: str) -> Optional[DisplaySurface]:
        """Return the surface for ``selector``, or None if nothing is bound."""
        surface = self._surfaces.get(selector.strip())
        if surface is None:
            logger.debug(f"No display surface for selector {selector!r}")
        return surface

    def __contains__(self, selector: str) -> bool:
        return selector.strip() in self._surfaces
