"""Weighted prize selection.

The draw walks the pool in order, accumulating weights, and picks the first
prize whose running total is strictly greater than ``draw() * total``. Strict
comparison means zero-weight prizes are never picked and a draw landing exactly
on a boundary goes to the next prize.
"""

from itertools import accumulate
from typing import Callable, Sequence
import random

from reeldraw.draw.prize import Prize

# Uniform generator over [0, 1)
UniformDraw = Callable[[], float]


def select_prize(
    prizes: Sequence[Prize],
    draw: UniformDraw = random.random,
) -> Prize | None:
    """Pick one prize according to the relative weights.

    Args:
        prizes: Ordered prize pool
        draw: Uniform random source over [0, 1)

    Returns:
        The selected prize, or None when nothing can be selected
        (empty pool or all weights zero)
    """
    # The total is the last running sum, so the walk can always reach it
    running = list(accumulate(prize.probability for prize in prizes))
    total = running[-1] if running else 0.0
    value = draw() * total

    for prize, accumulated in zip(prizes, running):
        if value < accumulated:
            return prize

    return None
