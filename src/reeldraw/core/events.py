"""
Lifecycle events for the reel.

The spin session publishes an event next to every lifecycle callback so
hosts can observe spins without wiring callbacks through the configuration.
"""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Awaitable, Callable, Optional, Union
import asyncio
import inspect
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Events published by the slot and its spin session."""
    # Spin lifecycle
    STATE_CHANGED = auto()
    SPIN_STARTED = auto()
    SPIN_ENDED = auto()
    SPIN_FAILED = auto()

    # Host input
    NAME_LIST_CHANGED = auto()

    # Reel animation
    ANIMATION_START = auto()
    ANIMATION_END = auto()


EventKey = Union[EventType, str]


@dataclass
class Event:
    """
    One published event.

    Attributes:
        type: EventType member, or a string for host-defined events
        data: Payload, e.g. ``{"winner": "Sticker"}``
        source: Name of the publisher
        timestamp: Wall-clock time of creation
    """
    type: EventKey
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Event], Optional[Awaitable[None]]]

# Subscription key for handlers that receive every event
_ANY = None


class EventBus:
    """
    Publish/subscribe hub with a bounded history.

    ``emit`` runs plain handlers only and is safe to call from synchronous
    code; ``emit_async`` also awaits coroutine handlers. A failing handler is
    logged and never affects the publisher or the other handlers.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._subscriptions: dict[Optional[EventKey], list[Handler]] = {}
        self._history: deque[Event] = deque(maxlen=history_limit)

    def subscribe(self, event_type: EventKey, handler: Handler) -> Callable[[], None]:
        """
        Register ``handler`` for one event type.

        Returns:
            A function that removes the subscription again
        """
        return self._add(event_type, handler)

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Register ``handler`` for every event type."""
        return self._add(_ANY, handler)

    def _add(self, key: Optional[EventKey], handler: Handler) -> Callable[[], None]:
        handlers = self._subscriptions.setdefault(key, [])
        handlers.append(handler)
        logger.debug(f"Subscribed {getattr(handler, '__name__', handler)!r} to {key}")

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def _targets(self, event: Event) -> list[Handler]:
        return [
            *self._subscriptions.get(event.type, ()),
            *self._subscriptions.get(_ANY, ()),
        ]

    def emit(self, event: Event) -> None:
        """Publish ``event`` to plain handlers; coroutine handlers are skipped."""
        self._history.append(event)
        for handler in self._targets(event):
            if not inspect.iscoroutinefunction(handler):
                self._call(handler, event)

    async def emit_async(self, event: Event) -> None:
        """Publish ``event`` to every handler, awaiting coroutine handlers together."""
        self._history.append(event)
        pending = []
        for handler in self._targets(event):
            if inspect.iscoroutinefunction(handler):
                pending.append(handler(event))
            else:
                self._call(handler, event)

        for outcome in await asyncio.gather(*pending, return_exceptions=True):
            if isinstance(outcome, Exception):
                logger.error(f"Async handler failed for {event.type}: {outcome}")

    @staticmethod
    def _call(handler: Handler, event: Event) -> None:
        try:
            handler(event)
        except Exception as e:
            logger.error(f"Handler failed for {event.type}: {e}")

    def get_history(self, event_type: Optional[EventKey] = None, limit: int = 10) -> list[Event]:
        """Most recent events, oldest first, optionally of one type."""
        events = [e for e in self._history if event_type is None or e.type == event_type]
        return events[-limit:] if limit > 0 else []

    def clear_history(self) -> None:
        self._history.clear()
