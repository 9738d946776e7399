"""Spin lifecycle: configuration, session and the Slot facade."""

from .store import Callback, ConfigurationStore, NameListStore, SpinConfiguration
from .spin import SpinOutcome, SpinSession
from .slot import Slot

__all__ = [
    "Callback",
    "ConfigurationStore",
    "NameListStore",
    "SpinConfiguration",
    "SpinOutcome",
    "SpinSession",
    "Slot",
]
