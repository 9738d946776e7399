"""Configuration and name list held for the lifetime of a slot."""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence
import logging

from reeldraw.config.settings import Settings
from reeldraw.draw.prize import Prize, PrizePool, as_pool

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


@dataclass
class SpinConfiguration:
    """Construction-time options for a slot.

    Attributes:
        prizes: Weighted draw source
        reel_container_selector: Selector of the display surface to bind
        max_reel_items: Rows scrolled per spin; duration is 100ms per row
        remove_winner: Declared flag, does not change the draw
        on_spin_start: Called after a prize is selected, before the reel moves
        on_spin_end: Called after the winner is revealed
        on_name_list_changed: Called after the name list is replaced
    """

    prizes: Sequence[Prize]
    reel_container_selector: str
    max_reel_items: int = 30
    remove_winner: bool = True
    on_spin_start: Optional[Callback] = None
    on_spin_end: Optional[Callback] = None
    on_name_list_changed: Optional[Callback] = None

    def __post_init__(self):
        if isinstance(self.max_reel_items, bool) or not isinstance(self.max_reel_items, int):
            raise TypeError("max_reel_items must be an integer")
        if self.max_reel_items < 1:
            raise ValueError(f"max_reel_items must be positive, got {self.max_reel_items}")
        if not isinstance(self.reel_container_selector, str) or not self.reel_container_selector.strip():
            raise ValueError("reel_container_selector is required")
        for name in ("on_spin_start", "on_spin_end", "on_name_list_changed"):
            callback = getattr(self, name)
            if callback is not None and not callable(callback):
                raise TypeError(f"{name} must be callable")
        self.prizes = as_pool(self.prizes)


class NameListStore:
    """Candidate names, replaced wholesale and exposed read-only."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: tuple[str, ...] = self._snapshot(names)

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def replace(self, names: Iterable[str]) -> tuple[str, ...]:
        """Swap in a new list and return it."""
        self._names = self._snapshot(names)
        logger.debug(f"Name list replaced ({len(self._names)} names)")
        return self._names

    def __len__(self) -> int:
        return len(self._names)

    @staticmethod
    def _snapshot(names: Iterable[str]) -> tuple[str, ...]:
        if isinstance(names, str):
            raise TypeError("names must be a sequence of strings, not a single string")
        snapshot = tuple(names)
        for name in snapshot:
            if not isinstance(name, str):
                raise TypeError(f"Names must be strings, got {type(name).__name__}")
        return snapshot


class ConfigurationStore:
    """Everything the spin session reads: prizes, flags, callbacks, names."""

    def __init__(self, config: SpinConfiguration, names: Iterable[str] = ()) -> None:
        self._config = config
        self.name_list = NameListStore(names)
        logger.info(f"Loaded prizes: {[(p.name, p.probability) for p in config.prizes]}")

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        prizes: Sequence[Prize],
        **callbacks: Optional[Callback],
    ) -> "ConfigurationStore":
        """Build a store from environment settings plus a prize pool."""
        config = SpinConfiguration(
            prizes=prizes,
            reel_container_selector=settings.reel_container_selector,
            max_reel_items=settings.reel.max_reel_items,
            remove_winner=settings.reel.remove_winner,
            **callbacks,
        )
        return cls(config)

    @property
    def config(self) -> SpinConfiguration:
        return self._config

    @property
    def prizes(self) -> PrizePool:
        return self._config.prizes

    @property
    def max_reel_items(self) -> int:
        return self._config.max_reel_items

    @property
    def reel_container_selector(self) -> str:
        return self._config.reel_container_selector

    @property
    def remove_winner(self) -> bool:
        return self._config.remove_winner

    @remove_winner.setter
    def remove_winner(self, value: bool) -> None:
        self._config.remove_winner = bool(value)

    @property
    def names(self) -> tuple[str, ...]:
        return self.name_list.names

    @property
    def on_spin_start(self) -> Optional[Callback]:
        return self._config.on_spin_start

    @property
    def on_spin_end(self) -> Optional[Callback]:
        return self._config.on_spin_end

    @property
    def on_name_list_changed(self) -> Optional[Callback]:
        return self._config.on_name_list_changed
