"""Host-facing reel facade.

Usage:
    registry = SurfaceRegistry()
    registry.bind("#reel", MemorySurface())
    slot = Slot(SpinConfiguration(prizes=pool, reel_container_selector="#reel"), registry)
    slot.names = ["Ada", "Grace"]
    won = await slot.spin()
"""

from typing import Iterable, Optional, Sequence
import asyncio
import logging
import random

from reeldraw.animation.controller import AnimationController, SleepFunc
from reeldraw.animation.timeline import Timeline
from reeldraw.config.settings import ReelSettings, Settings
from reeldraw.core.diagnostics import DiagnosticReporter
from reeldraw.core.events import Event, EventBus, EventType
from reeldraw.core.state import SpinState
from reeldraw.draw.prize import Prize
from reeldraw.draw.weighted import UniformDraw
from reeldraw.session.spin import SpinOutcome, SpinSession
from reeldraw.session.store import Callback, ConfigurationStore, SpinConfiguration
from reeldraw.surface.base import DisplaySurface
from reeldraw.surface.registry import SurfaceRegistry

logger = logging.getLogger(__name__)


class Slot:
    """A weighted prize reel bound to one display surface.

    The surface is looked up once, by ``config.reel_container_selector``.
    If it is not bound the slot is still created, and every spin fails with
    ``MISSING_DISPLAY_SURFACE``. The reel animation is built once here and
    left idle until the first spin.
    """

    def __init__(
        self,
        config: SpinConfiguration,
        registry: SurfaceRegistry,
        *,
        names: Iterable[str] = (),
        reporter: Optional[DiagnosticReporter] = None,
        event_bus: Optional[EventBus] = None,
        draw: UniformDraw = random.random,
        sleep: SleepFunc = asyncio.sleep,
        reel: Optional[ReelSettings] = None,
    ) -> None:
        self._reel = reel or ReelSettings(
            max_reel_items=config.max_reel_items,
            remove_winner=config.remove_winner,
        )
        self._store = ConfigurationStore(config, names)
        self._event_bus = event_bus or EventBus()

        self._surface = registry.query(config.reel_container_selector)
        self._animation: Optional[AnimationController] = None
        if self._surface is None:
            logger.warning(f"No display surface bound to {config.reel_container_selector!r}")
        else:
            self._animation = self._surface.animate(self._build_timeline())
            self._animation.cancel()

        self._session = SpinSession(
            self._store,
            self._surface,
            self._animation,
            reporter=reporter,
            event_bus=self._event_bus,
            draw=draw,
            sleep=sleep,
            filler_length=self._reel.filler_length,
            grace_ms=self._reel.grace_ms,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        prizes: Sequence[Prize],
        registry: SurfaceRegistry,
        *,
        on_spin_start: Optional[Callback] = None,
        on_spin_end: Optional[Callback] = None,
        on_name_list_changed: Optional[Callback] = None,
        **kwargs,
    ) -> "Slot":
        """Create a slot with options taken from ``Settings``."""
        config = SpinConfiguration(
            prizes=prizes,
            reel_container_selector=settings.reel_container_selector,
            max_reel_items=settings.reel.max_reel_items,
            remove_winner=settings.reel.remove_winner,
            on_spin_start=on_spin_start,
            on_spin_end=on_spin_end,
            on_name_list_changed=on_name_list_changed,
        )
        return cls(config, registry, reel=settings.reel, **kwargs)

    def _build_timeline(self) -> Timeline:
        items = self._store.max_reel_items
        return Timeline.reel_scroll(
            distance=(items - 1) * self._surface.item_height,
            duration=self._reel.duration_ms(items),
            easing=self._reel.easing,
            peak_blur=self._reel.peak_blur,
        )

    @property
    def names(self) -> tuple[str, ...]:
        """Candidate names (read-only view)."""
        return self._store.names

    @names.setter
    def names(self, names: Iterable[str]) -> None:
        replaced = self._store.name_list.replace(names)
        if self._surface is not None:
            self._surface.clear()
        callback = self._store.on_name_list_changed
        if callback is not None:
            callback()
        self._event_bus.emit(Event(
            EventType.NAME_LIST_CHANGED,
            data={"count": len(replaced)},
            source="slot",
        ))

    @property
    def should_remove_winner_from_name_list(self) -> bool:
        return self._store.remove_winner

    @should_remove_winner_from_name_list.setter
    def should_remove_winner_from_name_list(self, value: bool) -> None:
        self._store.remove_winner = value

    async def spin(self) -> bool:
        """Draw a winner and play the reel. False if the spin failed."""
        return await self._session.spin()

    @property
    def state(self) -> SpinState:
        return self._session.state

    @property
    def is_spinning(self) -> bool:
        return self._session.is_spinning

    @property
    def last_outcome(self) -> Optional[SpinOutcome]:
        return self._session.last_outcome

    @property
    def prizes(self) -> tuple[Prize, ...]:
        return self._store.prizes

    @property
    def surface(self) -> Optional[DisplaySurface]:
        return self._surface

    @property
    def animation(self) -> Optional[AnimationController]:
        return self._animation

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus
