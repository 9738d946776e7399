"""Filler sequence for the spinning reel.

Purely visual: the filler never influences which prize wins.
"""

from typing import Sequence

from reeldraw.draw.prize import Prize

FILLER_LENGTH = 40


def build_filler_sequence(
    prizes: Sequence[Prize],
    length: int = FILLER_LENGTH,
) -> list[Prize]:
    """Repeat the pool from the start until ``length`` items, then truncate.

    The result is always a prefix of the infinite cyclic repetition of
    ``prizes``.

    Raises:
        ValueError: If the pool is empty or length is not positive
    """
    if not prizes:
        raise ValueError("Cannot build a filler sequence from an empty prize pool")
    if length <= 0:
        raise ValueError(f"Filler length must be positive, got {length}")

    sequence = list(prizes)
    while len(sequence) < length:
        sequence.extend(prizes)

    del sequence[length:]
    return sequence
