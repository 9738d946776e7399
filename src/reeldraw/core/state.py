"""
State machine for a single reel spin.

States:
    IDLE: No spin in progress
    SELECTING: Guards checked, weighted draw running
    ANIMATING: Filler reel rendered, scroll animation playing
    REVEALING: Filler removed, winner being rendered
    COMPLETED: Winner revealed, end callback fired
    FAILED: A guarded precondition failed (see diagnostics)
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable, Any
import logging

logger = logging.getLogger(__name__)


class SpinState(Enum):
    """Spin lifecycle states."""
    IDLE = auto()
    SELECTING = auto()
    ANIMATING = auto()
    REVEALING = auto()
    COMPLETED = auto()
    FAILED = auto()


@dataclass
class SpinContext:
    """Context data carried through one spin."""
    winner: Any = None
    error: Any = None
    error_message: str | None = None


class SpinStateMachine:
    """
    Tracks the state of the current spin.

    Transitions are strictly sequential within a spin; listeners are
    notified after every successful transition.
    """

    # Valid state transitions
    VALID_TRANSITIONS: list[tuple[SpinState, SpinState]] = [
        # From IDLE
        (SpinState.IDLE, SpinState.SELECTING),

        # From SELECTING
        (SpinState.SELECTING, SpinState.ANIMATING),
        (SpinState.SELECTING, SpinState.FAILED),

        # From ANIMATING
        (SpinState.ANIMATING, SpinState.REVEALING),
        (SpinState.ANIMATING, SpinState.FAILED),

        # From REVEALING
        (SpinState.REVEALING, SpinState.COMPLETED),
        (SpinState.REVEALING, SpinState.FAILED),

        # Terminal states settle back to IDLE
        (SpinState.COMPLETED, SpinState.IDLE),
        (SpinState.FAILED, SpinState.IDLE),
    ]

    def __init__(self, initial_state: SpinState = SpinState.IDLE) -> None:
        self._state = initial_state
        self._context = SpinContext()
        self._listeners: list[Callable[[SpinState, SpinState, SpinContext], None]] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"SpinStateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> SpinState:
        """Get current state."""
        return self._state

    @property
    def context(self) -> SpinContext:
        """Get current context."""
        return self._context

    def can_transition(self, to_state: SpinState) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: SpinState, **context_updates: Any) -> bool:
        """
        Attempt to transition to a new state.

        Args:
            to_state: Target state
            **context_updates: Updates to apply to context

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state

        for key, value in context_updates.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

        logger.debug(f"Spin transition: {old_state.name} -> {to_state.name}")
        self._notify(old_state, to_state)
        return True

    def add_listener(
        self,
        callback: Callable[[SpinState, SpinState, SpinContext], None]
    ) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(
        self,
        callback: Callable[[SpinState, SpinState, SpinContext], None]
    ) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def reset(self) -> None:
        """Return to IDLE with a fresh context."""
        old_state = self._state
        self._state = SpinState.IDLE
        self._context = SpinContext()

        if old_state != SpinState.IDLE:
            self._notify(old_state, SpinState.IDLE)

    def fail(self, error: Any, message: str) -> bool:
        """Convenience method to enter the FAILED state."""
        return self.transition(SpinState.FAILED, error=error, error_message=message)

    def _notify(self, old_state: SpinState, new_state: SpinState) -> None:
        for listener in self._listeners:
            try:
                listener(old_state, new_state, self._context)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")
