"""Failure kinds and the diagnostic channel for spin failures.

Spin failures never escape ``Slot.spin()``; they are reported here and the
caller only sees ``False``.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any
import logging

logger = logging.getLogger(__name__)


class SpinError(Enum):
    """Reasons a spin can fail."""

    EMPTY_NAME_LIST = "empty_name_list"
    NO_SELECTION = "no_selection"
    MISSING_DISPLAY_SURFACE = "missing_display_surface"
    SPIN_IN_PROGRESS = "spin_in_progress"
    ANIMATION_CANCELLED = "animation_cancelled"
    CALLBACK_ERROR = "callback_error"
    SURFACE_ERROR = "surface_error"


class SpinFailure(Exception):
    """Raised inside a spin to abort it with a reportable reason."""

    def __init__(self, kind: SpinError, message: str, **details: Any) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details


class DiagnosticReporter(ABC):
    """Receives spin failures."""

    @abstractmethod
    def report(self, failure: SpinFailure) -> None:
        ...


class LoggingReporter(DiagnosticReporter):
    """Default reporter: writes failures to the ``logging`` module."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def report(self, failure: SpinFailure) -> None:
        self._log.error(
            f"Spin failed [{failure.kind.value}]: {failure.message}",
            extra={"spin_error": failure.kind.value, "details": failure.details},
        )


class CollectingReporter(DiagnosticReporter):
    """Keeps failures in memory, forwarding to another reporter if given."""

    def __init__(self, forward: DiagnosticReporter | None = None) -> None:
        self.failures: list[SpinFailure] = []
        self._forward = forward

    def report(self, failure: SpinFailure) -> None:
        self.failures.append(failure)
        if self._forward is not None:
            self._forward.report(failure)

    @property
    def kinds(self) -> list[SpinError]:
        return [failure.kind for failure in self.failures]
