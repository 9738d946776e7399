"""Empirical check of the weighted draw.

Runs the real selection function many times against a seeded numpy
generator and compares observed shares with weight / total.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from reeldraw.draw.prize import Prize, as_pool
from reeldraw.draw.weighted import select_prize


@dataclass(frozen=True)
class FrequencyReport:
    """Observed vs expected selection shares, indexed like the pool."""

    prizes: tuple[Prize, ...]
    draws: int
    counts: np.ndarray
    misses: int

    @property
    def shares(self) -> np.ndarray:
        if self.draws == 0:
            return np.zeros(len(self.prizes))
        return self.counts / self.draws

    @property
    def expected(self) -> np.ndarray:
        return expected_shares(self.prizes)

    @property
    def max_deviation(self) -> float:
        """Largest absolute gap between observed and expected share."""
        if not self.prizes:
            return 0.0
        return float(np.max(np.abs(self.shares - self.expected)))

    def rows(self) -> list[tuple[str, int, float, float]]:
        """(name, count, observed share, expected share) per prize."""
        return [
            (prize.name, int(count), float(share), float(expected))
            for prize, count, share, expected in zip(
                self.prizes, self.counts, self.shares, self.expected
            )
        ]


def expected_shares(prizes: Sequence[Prize]) -> np.ndarray:
    """weight / total for each prize; all zeros if nothing can be selected."""
    weights = np.asarray([prize.probability for prize in prizes], dtype=float)
    total = weights.sum()
    if total <= 0:
        return np.zeros(len(weights))
    return weights / total


def simulate_draws(
    prizes: Sequence[Prize],
    draws: int = 100_000,
    seed: Optional[int] = None,
) -> FrequencyReport:
    """Run ``draws`` selections and count how often each prize wins.

    Args:
        prizes: Prize pool to draw from
        draws: Number of selections
        seed: Seed for ``np.random.default_rng``; None for fresh entropy

    Returns:
        FrequencyReport; ``misses`` counts draws that selected nothing
    """
    if draws < 0:
        raise ValueError(f"draws must be non-negative, got {draws}")

    pool = as_pool(prizes)
    rng = np.random.default_rng(seed)
    values = iter(rng.random(draws).tolist())
    index: dict[int, int] = {}
    for i, prize in enumerate(pool):
        index.setdefault(id(prize), i)

    counts = np.zeros(len(pool), dtype=np.int64)
    misses = 0
    for _ in range(draws):
        winner = select_prize(pool, lambda: next(values))
        if winner is None:
            misses += 1
        else:
            counts[index[id(winner)]] += 1

    return FrequencyReport(prizes=pool, draws=draws, counts=counts, misses=misses)
