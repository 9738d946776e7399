"""Pure draw functions: weighted selection and reel filler."""

from reeldraw.draw.prize import Prize, PrizePool, as_pool, total_weight
from reeldraw.draw.weighted import select_prize, UniformDraw
from reeldraw.draw.filler import build_filler_sequence, FILLER_LENGTH

__all__ = [
    "Prize",
    "PrizePool",
    "as_pool",
    "total_weight",
    "select_prize",
    "UniformDraw",
    "build_filler_sequence",
    "FILLER_LENGTH",
]
