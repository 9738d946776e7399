"""Prize model shared by the draw functions and the session."""

from dataclasses import dataclass
from typing import Iterable
import math


@dataclass(frozen=True)
class Prize:
    """A named prize with a relative weight.

    Attributes:
        name: Text shown on the reel
        probability: Relative weight; selection chance is weight / total weight
    """

    name: str
    probability: float

    def __post_init__(self):
        if not isinstance(self.probability, (int, float)) or isinstance(self.probability, bool):
            raise TypeError(f"Prize {self.name!r}: probability must be a number")
        if math.isnan(self.probability) or self.probability < 0:
            raise ValueError(
                f"Prize {self.name!r}: probability must be non-negative, got {self.probability}"
            )


PrizePool = tuple[Prize, ...]


def as_pool(prizes: Iterable[Prize]) -> PrizePool:
    """Snapshot an iterable of prizes as an immutable pool."""
    pool = tuple(prizes)
    for prize in pool:
        if not isinstance(prize, Prize):
            raise TypeError(f"Expected Prize, got {type(prize).__name__}")
    return pool


def total_weight(prizes: Iterable[Prize]) -> float:
    """Sum of all prize weights, added left to right like the selection walk."""
    total = 0.0
    for prize in prizes:
        total += prize.probability
    return total
