"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support,
e.g. ``REELDRAW_REEL__MAX_REEL_ITEMS=10``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReelSettings(BaseModel):
    """Reel timing and geometry."""

    max_reel_items: int = Field(default=30, ge=1)
    remove_winner: bool = True

    # One row is 7.5rem at 16px
    item_height: float = Field(default=120.0, gt=0)
    filler_length: int = Field(default=40, ge=1)

    # Timing (milliseconds)
    ms_per_item: float = Field(default=100.0, gt=0)
    grace_ms: float = Field(default=100.0, ge=0)
    frame_ms: float = Field(default=16.0, gt=0)

    easing: str = "ease_in_out"
    peak_blur: float = Field(default=1.0, ge=0)

    def duration_ms(self, max_reel_items: int | None = None) -> float:
        """Spin duration for ``max_reel_items`` rows."""
        items = self.max_reel_items if max_reel_items is None else max_reel_items
        return items * self.ms_per_item

    def scroll_distance(self, max_reel_items: int | None = None) -> float:
        """Upward scroll in pixels for ``max_reel_items`` rows."""
        items = self.max_reel_items if max_reel_items is None else max_reel_items
        return (items - 1) * self.item_height


class SimulatorSettings(BaseModel):
    """Pygame reel window settings."""

    window_width: int = 480
    window_height: int = 360
    fps: int = 60
    title: str = "reeldraw"
    fullscreen: bool = False


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="REELDRAW_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Environment
    env: Literal["headless", "simulator"] = "headless"
    debug: bool = False

    # Reel binding
    reel_container_selector: str = "#reel"
    prizes_file: Path | None = None

    # Nested settings
    reel: ReelSettings = Field(default_factory=ReelSettings)
    simulator: SimulatorSettings = Field(default_factory=SimulatorSettings)

    @property
    def is_simulator(self) -> bool:
        """Check if running with the pygame window."""
        return self.env == "simulator"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
