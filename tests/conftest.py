from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest

# Ensure "src" is on sys.path for imports in tests
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from reeldraw.config.settings import get_settings  # noqa: E402
from reeldraw.draw.prize import Prize  # noqa: E402


async def _instant_sleep(_seconds: float) -> None:
    await asyncio.sleep(0)


@pytest.fixture
def instant_sleep():
    """Virtual-time sleep: yields to the loop without waiting."""
    return _instant_sleep


@pytest.fixture
def pool() -> tuple[Prize, ...]:
    return (Prize("A", 50), Prize("B", 50))


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
