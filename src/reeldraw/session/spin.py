"""Spin session: one draw, one animated reveal.

Flow of ``spin()``:
    1. SELECTING - check the name list, run the weighted draw
    2. on_spin_start, then ANIMATING - render the filler reel and scroll it
    3. grace pause, then REVEALING - swap the filler for the winner
    4. on_spin_end, COMPLETED

Guarded failures end in FAILED, are reported through the diagnostic
reporter and the event bus, and make ``spin()`` return False. Errors raised
by the surface or the animation are reported as ``SURFACE_ERROR``, and filler
rows left behind by a failed spin are cleared. The state is IDLE before and
after every call.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional
import asyncio
import logging
import random

from reeldraw.animation.controller import AnimationController, SleepFunc
from reeldraw.core.diagnostics import DiagnosticReporter, LoggingReporter, SpinError, SpinFailure
from reeldraw.core.events import Event, EventBus, EventType
from reeldraw.core.state import SpinContext, SpinState, SpinStateMachine
from reeldraw.draw.filler import FILLER_LENGTH, build_filler_sequence
from reeldraw.draw.prize import Prize
from reeldraw.draw.weighted import UniformDraw, select_prize
from reeldraw.session.store import Callback, ConfigurationStore
from reeldraw.surface.base import DisplaySurface

logger = logging.getLogger(__name__)

GRACE_MS = 100.0


@dataclass(frozen=True)
class SpinOutcome:
    """Result of the most recent spin."""

    success: bool
    final_state: SpinState
    winner: Optional[Prize] = None
    error: Optional[SpinError] = None
    message: Optional[str] = None


class SpinSession:
    """Runs spins against a configuration store and a display surface.

    Only one spin may run at a time: a call made while another spin is in
    progress is rejected with ``SpinError.SPIN_IN_PROGRESS``.

    Args:
        store: Prizes, names, flags and callbacks
        surface: Reel container, or None if it could not be located
        animation: Reel scroll handle bound to ``surface``, or None
        reporter: Diagnostic channel for failures
        event_bus: Receives lifecycle events
        draw: Uniform [0, 1) source for the weighted draw
        sleep: Awaitable used for the grace pause (seconds)
        filler_length: Rows rendered while spinning
        grace_ms: Pause between animation end and reveal
    """

    source = "spin_session"

    def __init__(
        self,
        store: ConfigurationStore,
        surface: Optional[DisplaySurface],
        animation: Optional[AnimationController],
        *,
        reporter: Optional[DiagnosticReporter] = None,
        event_bus: Optional[EventBus] = None,
        draw: UniformDraw = random.random,
        sleep: SleepFunc = asyncio.sleep,
        filler_length: int = FILLER_LENGTH,
        grace_ms: float = GRACE_MS,
    ) -> None:
        self._store = store
        self._surface = surface
        self._animation = animation
        self._reporter = reporter or LoggingReporter()
        self._event_bus = event_bus or EventBus()
        self._draw = draw
        self._sleep = sleep
        self._filler_length = filler_length
        self._grace_ms = grace_ms

        self._machine = SpinStateMachine()
        self._machine.add_listener(self._on_state_changed)
        self._active = False
        self._filler_shown = False
        self.last_outcome: Optional[SpinOutcome] = None

    @property
    def state(self) -> SpinState:
        return self._machine.state

    @property
    def is_spinning(self) -> bool:
        return self._active

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    async def spin(self) -> bool:
        """Run one spin. Returns True once the winner is revealed."""
        if self._active:
            self._report(SpinFailure(
                SpinError.SPIN_IN_PROGRESS,
                "A spin is already in progress. Wait for it to finish.",
            ))
            return False

        self._active = True
        self._filler_shown = False
        self._machine.reset()
        try:
            winner = await self._run()
        except SpinFailure as failure:
            self._machine.fail(failure.kind, failure.message)
            self._discard_filler()
            self._report(failure)
            self.last_outcome = SpinOutcome(
                success=False,
                final_state=SpinState.FAILED,
                error=failure.kind,
                message=failure.message,
            )
            return False
        else:
            self.last_outcome = SpinOutcome(
                success=True,
                final_state=SpinState.COMPLETED,
                winner=winner,
            )
            return True
        finally:
            self._machine.reset()
            self._active = False

    async def _run(self) -> Prize:
        self._machine.transition(SpinState.SELECTING)

        if not self._store.names:
            raise SpinFailure(
                SpinError.EMPTY_NAME_LIST,
                "Name list is empty. Cannot start spinning.",
            )

        prizes = self._store.prizes
        winner = select_prize(prizes, self._draw)
        if winner is None:
            raise SpinFailure(
                SpinError.NO_SELECTION,
                "No prize selected. The prize pool is empty or every weight is zero.",
                prizes=len(prizes),
            )

        self._invoke(self._store.on_spin_start, "on_spin_start")
        self._emit(EventType.SPIN_STARTED, {"winner": winner.name})

        surface, animation = self._surface, self._animation
        if surface is None or animation is None:
            raise SpinFailure(
                SpinError.MISSING_DISPLAY_SURFACE,
                f"No display surface for {self._store.reel_container_selector!r}",
                selector=self._store.reel_container_selector,
            )

        self._machine.transition(SpinState.ANIMATING, winner=winner)
        filler = build_filler_sequence(prizes, self._filler_length)
        self._filler_shown = True
        with self._display_step("render"):
            surface.append_items(prize.name for prize in filler)

        with self._display_step("play"):
            animation.play()
        self._emit(EventType.ANIMATION_START, {"duration_ms": animation.duration_ms})
        with self._display_step("animate"):
            completed = await animation.finished
        self._emit(EventType.ANIMATION_END, {"completed": completed})
        if not completed:
            raise SpinFailure(
                SpinError.ANIMATION_CANCELLED,
                "Reel animation was cancelled before it finished.",
            )

        # Short pause before swapping in the winner
        await self._sleep(self._grace_ms / 1000.0)

        self._machine.transition(SpinState.REVEALING)
        with self._display_step("reveal"):
            surface.clear()
            self._filler_shown = False
            surface.append_items([winner.name])
        logger.info(f"WINNER: {winner.name}")

        self._invoke(self._store.on_spin_end, "on_spin_end")
        self._machine.transition(SpinState.COMPLETED)
        self._emit(EventType.SPIN_ENDED, {"winner": winner.name})
        return winner

    def _invoke(self, callback: Optional[Callback], name: str) -> None:
        if callback is None:
            return
        try:
            callback()
        except Exception as exc:
            logger.exception(f"{name} callback raised")
            raise SpinFailure(
                SpinError.CALLBACK_ERROR,
                f"{name} callback raised {type(exc).__name__}: {exc}",
                callback=name,
            ) from exc

    @contextmanager
    def _display_step(self, step: str) -> Iterator[None]:
        try:
            yield
        except SpinFailure:
            raise
        except Exception as exc:
            logger.exception(f"Reel display failed during {step}")
            raise SpinFailure(
                SpinError.SURFACE_ERROR,
                f"Reel display failed during {step}: {type(exc).__name__}: {exc}",
                step=step,
            ) from exc

    def _discard_filler(self) -> None:
        """Stop the reel and drop filler rows left by a failed spin."""
        if not self._filler_shown or self._surface is None:
            return
        self._filler_shown = False
        try:
            if self._animation is not None and self._animation.is_playing:
                self._animation.cancel()
            self._surface.clear()
        except Exception:
            logger.exception("Could not clear the reel after a failed spin")

    def _report(self, failure: SpinFailure) -> None:
        self._reporter.report(failure)
        self._emit(
            EventType.SPIN_FAILED,
            {"error": failure.kind.value, "message": failure.message, **failure.details},
        )

    def _emit(self, event_type: EventType, data: dict) -> None:
        self._event_bus.emit(Event(event_type, data=data, source=self.source))

    def _on_state_changed(self, old: SpinState, new: SpinState, context: SpinContext) -> None:
        self._emit(EventType.STATE_CHANGED, {"from": old.name, "to": new.name})
