"""Prize pool files.

A prize file is a JSON array of objects::

    [
        {"name": "Grand prize", "probability": 1},
        {"name": "Sticker", "probability": 49.5}
    ]
"""

from pathlib import Path
from typing import Any
import logging

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from reeldraw.draw.prize import Prize, PrizePool

logger = logging.getLogger(__name__)


class PrizeFileError(ValueError):
    """Raised when a prize file cannot be read or validated."""


class PrizeEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    probability: float = Field(ge=0, allow_inf_nan=False)

    def to_prize(self) -> Prize:
        return Prize(name=self.name, probability=self.probability)


_ENTRIES = TypeAdapter(list[PrizeEntry])


def parse_prizes(data: Any) -> PrizePool:
    """Validate already-decoded prize data into a pool."""
    try:
        entries = _ENTRIES.validate_python(data)
    except ValidationError as exc:
        raise PrizeFileError(f"Invalid prize data: {exc}") from exc
    return tuple(entry.to_prize() for entry in entries)


def load_prizes(path: Path | str) -> PrizePool:
    """Read and validate a prize file.

    Raises:
        PrizeFileError: If the file is missing, not JSON, or fails validation
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise PrizeFileError(f"Cannot read prize file {path}: {exc}") from exc

    try:
        entries = _ENTRIES.validate_json(raw)
    except ValidationError as exc:
        raise PrizeFileError(f"Invalid prize file {path}: {exc}") from exc

    pool = tuple(entry.to_prize() for entry in entries)
    logger.info(f"Loaded {len(pool)} prizes from {path}")
    return pool
