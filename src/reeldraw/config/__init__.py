"""Configuration: environment settings and prize files."""

from .settings import Settings, ReelSettings, SimulatorSettings, get_settings
from .prizes import PrizeEntry, PrizeFileError, load_prizes, parse_prizes

__all__ = [
    "Settings",
    "ReelSettings",
    "SimulatorSettings",
    "get_settings",
    "PrizeEntry",
    "PrizeFileError",
    "load_prizes",
    "parse_prizes",
]
