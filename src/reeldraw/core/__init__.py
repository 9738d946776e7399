"""Core framework components for reeldraw."""

from .state import SpinState, SpinStateMachine, SpinContext
from .events import EventBus, Event, EventType
from .diagnostics import (
    SpinError,
    SpinFailure,
    DiagnosticReporter,
    LoggingReporter,
    CollectingReporter,
)

__all__ = [
    "SpinState",
    "SpinStateMachine",
    "SpinContext",
    "EventBus",
    "Event",
    "EventType",
    "SpinError",
    "SpinFailure",
    "DiagnosticReporter",
    "LoggingReporter",
    "CollectingReporter",
]
