"""Easing curves for reel animations.

Every curve maps normalized time t (0.0 to 1.0) to normalized progress. The
CSS timing keywords (``ease``, ``ease-in``, ``ease-out``, ``ease-in-out``)
are cubic-bezier curves so the reel paces the same way a browser transition
would. Power and sine families are derived from their ease-in form.
"""

from enum import Enum, auto
from typing import Callable
import math


class Easing(Enum):
    LINEAR = auto()

    # CSS timing keywords
    EASE = auto()
    EASE_IN = auto()
    EASE_OUT = auto()
    EASE_IN_OUT = auto()

    EASE_IN_QUAD = auto()
    EASE_OUT_QUAD = auto()
    EASE_IN_OUT_QUAD = auto()

    EASE_IN_CUBIC = auto()
    EASE_OUT_CUBIC = auto()
    EASE_IN_OUT_CUBIC = auto()

    EASE_IN_SINE = auto()
    EASE_OUT_SINE = auto()
    EASE_IN_OUT_SINE = auto()


EasingFunc = Callable[[float], float]


def linear(t: float) -> float:
    return t


def cubic_bezier(x1: float, y1: float, x2: float, y2: float) -> EasingFunc:
    """Build a CSS-style cubic-bezier timing function.

    The curve runs from (0, 0) to (1, 1) with control points (x1, y1) and
    (x2, y2). For a given time x the curve parameter is found with Newton
    iterations, falling back to bisection when the slope is too flat.

    Args:
        x1, y1: First control point (x1 in [0, 1])
        x2, y2: Second control point (x2 in [0, 1])

    Returns:
        Easing function mapping time to progress
    """
    if not (0.0 <= x1 <= 1.0 and 0.0 <= x2 <= 1.0):
        raise ValueError("cubic-bezier x values must be within [0, 1]")

    cx = 3.0 * x1
    bx = 3.0 * (x2 - x1) - cx
    ax = 1.0 - cx - bx
    cy = 3.0 * y1
    by = 3.0 * (y2 - y1) - cy
    ay = 1.0 - cy - by

    def sample_x(s: float) -> float:
        return ((ax * s + bx) * s + cx) * s

    def sample_y(s: float) -> float:
        return ((ay * s + by) * s + cy) * s

    def slope_x(s: float) -> float:
        return (3.0 * ax * s + 2.0 * bx) * s + cx

    def solve(x: float) -> float:
        s = x
        for _ in range(8):
            error = sample_x(s) - x
            if abs(error) < 1e-7:
                return s
            slope = slope_x(s)
            if abs(slope) < 1e-6:
                break
            s -= error / slope

        lo, hi = 0.0, 1.0
        s = x
        while lo < hi:
            value = sample_x(s)
            if abs(value - x) < 1e-7:
                return s
            if x > value:
                lo = s
            else:
                hi = s
            s = (lo + hi) / 2
            if hi - lo < 1e-9:
                break
        return s

    def ease(t: float) -> float:
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        return sample_y(solve(t))

    return ease


css_ease = cubic_bezier(0.25, 0.1, 0.25, 1.0)
css_ease_in = cubic_bezier(0.42, 0.0, 1.0, 1.0)
css_ease_out = cubic_bezier(0.0, 0.0, 0.58, 1.0)
css_ease_in_out = cubic_bezier(0.42, 0.0, 0.58, 1.0)


def _ease_out(ease_in: EasingFunc) -> EasingFunc:
    """Time-reversed copy of an ease-in curve."""
    return lambda t: 1 - ease_in(1 - t)


def _ease_in_out(ease_in: EasingFunc) -> EasingFunc:
    """Ease-in for the first half, its mirror for the second."""
    return lambda t: ease_in(2 * t) / 2 if t < 0.5 else 1 - ease_in(2 - 2 * t) / 2


def _power(exponent: int) -> EasingFunc:
    return lambda t: t ** exponent


def _sine(t: float) -> float:
    return 1 - math.cos(t * math.pi / 2)


_EASING_FUNCTIONS: dict[Easing, EasingFunc] = {
    Easing.LINEAR: linear,
    Easing.EASE: css_ease,
    Easing.EASE_IN: css_ease_in,
    Easing.EASE_OUT: css_ease_out,
    Easing.EASE_IN_OUT: css_ease_in_out,
}

for _suffix, _base in (("QUAD", _power(2)), ("CUBIC", _power(3)), ("SINE", _sine)):
    _EASING_FUNCTIONS[Easing[f"EASE_IN_{_suffix}"]] = _base
    _EASING_FUNCTIONS[Easing[f"EASE_OUT_{_suffix}"]] = _ease_out(_base)
    _EASING_FUNCTIONS[Easing[f"EASE_IN_OUT_{_suffix}"]] = _ease_in_out(_base)


def get_easing(easing: Easing | str) -> EasingFunc:
    """Look up a curve by enum member or name.

    Names are case-insensitive and accept CSS spelling, so
    ``"ease-in-out"`` and ``"ease_in_out"`` are the same curve.

    Raises:
        ValueError: For an unknown name
    """
    if isinstance(easing, str):
        key = easing.strip().upper().replace("-", "_")
        if key not in Easing.__members__:
            raise ValueError(f"Unknown easing: {easing!r}")
        easing = Easing[key]
    return _EASING_FUNCTIONS[easing]


def interpolate(start: float, end: float, t: float, easing: Easing | str = Easing.LINEAR) -> float:
    """Value between ``start`` and ``end`` at time ``t`` (clamped to 0..1)."""
    return start + (end - start) * get_easing(easing)(min(1.0, max(0.0, t)))
