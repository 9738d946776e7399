"""Animation module for reeldraw."""

from reeldraw.animation.easing import Easing, get_easing, interpolate, cubic_bezier
from reeldraw.animation.timeline import Timeline, Track, Keyframe, PlayState
from reeldraw.animation.controller import AnimationController, TimelineAnimation

__all__ = [
    # Easing
    "Easing",
    "get_easing",
    "interpolate",
    "cubic_bezier",
    # Timeline
    "Timeline",
    "Track",
    "Keyframe",
    "PlayState",
    # Controllers
    "AnimationController",
    "TimelineAnimation",
]
