"""Keyframe timelines for the reel.

A timeline mirrors a keyframe effect: tracks hold keyframes at normalized
offsets, and an optional timeline-level easing shapes overall pacing the way
an effect's timing function does.
"""

from bisect import bisect_right
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional

from reeldraw.animation.easing import Easing, get_easing


class PlayState(Enum):
    STOPPED = auto()
    PLAYING = auto()
    FINISHED = auto()


@dataclass
class Keyframe:
    """Value of a track at a normalized offset.

    ``easing`` shapes the segment that starts at this keyframe.
    Offsets outside 0..1 are clamped.
    """

    time: float
    value: Any
    easing: Easing | str = Easing.LINEAR

    def __post_init__(self):
        self.time = min(1.0, max(0.0, self.time))


def _blend(start: Any, end: Any, fraction: float) -> Any:
    """Mix two keyframe values; numbers and equal-length tuples blend, others step."""
    if isinstance(start, (int, float)) and isinstance(end, (int, float)):
        return start + (end - start) * fraction
    if isinstance(start, tuple) and isinstance(end, tuple) and len(start) == len(end):
        return tuple(_blend(a, b, fraction) for a, b in zip(start, end))
    return end if fraction >= 0.5 else start


@dataclass
class Track:
    """Keyframes for one animated property, kept ordered by offset."""

    name: str
    keyframes: List[Keyframe] = field(default_factory=list)

    def __post_init__(self):
        self.keyframes.sort(key=lambda kf: kf.time)

    def add_keyframe(
        self,
        time: float,
        value: Any,
        easing: Easing | str = Easing.LINEAR,
    ) -> "Track":
        """Insert a keyframe; returns the track so calls can be chained."""
        keyframe = Keyframe(time, value, easing)
        offsets = [kf.time for kf in self.keyframes]
        self.keyframes.insert(bisect_right(offsets, keyframe.time), keyframe)
        return self

    def get_value_at(self, t: float) -> Any:
        """Value at normalized offset ``t``, or None for an empty track."""
        frames = self.keyframes
        if not frames:
            return None

        t = min(1.0, max(0.0, t))
        if t <= frames[0].time:
            return frames[0].value
        if t >= frames[-1].time:
            return frames[-1].value

        index = bisect_right([kf.time for kf in frames], t)
        before, after = frames[index - 1], frames[index]
        span = after.time - before.time
        if span <= 0:
            return before.value

        fraction = get_easing(before.easing)((t - before.time) / span)
        return _blend(before.value, after.value, fraction)


@dataclass
class Timeline:
    """Named set of tracks played over ``duration`` milliseconds.

    Attributes:
        name: Identifier used in logs
        duration: Length of one iteration in milliseconds
        easing: Pacing applied to overall progress before track lookup
        iterations: Repeat count before the timeline finishes
        tracks: Tracks keyed by property name
        on_complete: Called with the timeline when it finishes
    """

    name: str
    duration: float = 1000.0
    easing: Easing | str = Easing.LINEAR
    iterations: int = 1
    tracks: Dict[str, Track] = field(default_factory=dict)
    on_complete: Optional[Callable[["Timeline"], None]] = None

    _state: PlayState = field(default=PlayState.STOPPED, repr=False)
    _elapsed: float = field(default=0.0, repr=False)

    def __post_init__(self):
        if self.duration < 0:
            raise ValueError(f"Timeline duration must be non-negative, got {self.duration}")
        if self.iterations < 1:
            raise ValueError(f"Timeline iterations must be at least 1, got {self.iterations}")

    def add_track(self, name: str) -> Track:
        self.tracks[name] = track = Track(name)
        return track

    def get_track(self, name: str) -> Optional[Track]:
        return self.tracks.get(name)

    def play(self, from_start: bool = False) -> "Timeline":
        """Begin playing; a finished timeline always rewinds first."""
        if from_start or self._state is PlayState.FINISHED:
            self._elapsed = 0.0
        self._state = PlayState.PLAYING
        return self

    def stop(self) -> "Timeline":
        """Halt and rewind to the start."""
        self._state = PlayState.STOPPED
        self._elapsed = 0.0
        return self

    @property
    def total_duration(self) -> float:
        """Milliseconds across all iterations."""
        return self.duration * self.iterations

    @property
    def state(self) -> PlayState:
        return self._state

    @property
    def current_time(self) -> float:
        """Elapsed milliseconds since the start."""
        return self._elapsed

    @property
    def progress(self) -> float:
        """Position inside the current iteration, 0.0 to 1.0."""
        if self.duration <= 0:
            return 1.0 if self._state is PlayState.FINISHED else 0.0
        if self._elapsed >= self.total_duration:
            return 1.0
        return (self._elapsed % self.duration) / self.duration

    @property
    def is_playing(self) -> bool:
        return self._state is PlayState.PLAYING

    @property
    def is_finished(self) -> bool:
        return self._state is PlayState.FINISHED

    def update(self, delta_ms: float) -> Dict[str, Any]:
        """Advance by ``delta_ms`` while playing and return every track's value.

        Elapsed time is clamped at the total duration; reaching it marks the
        timeline finished and fires ``on_complete`` once.
        """
        if self._state is PlayState.PLAYING:
            self._elapsed = min(self._elapsed + delta_ms, self.total_duration)
            if self._elapsed >= self.total_duration:
                self._state = PlayState.FINISHED
                if self.on_complete is not None:
                    self.on_complete(self)
        return self.values_at(self.progress)

    def values_at(self, t: float) -> Dict[str, Any]:
        """Track values at a normalized time, after timeline easing."""
        eased = get_easing(self.easing)(min(1.0, max(0.0, t)))
        return {name: track.get_value_at(eased) for name, track in self.tracks.items()}

    def rest_values(self) -> Dict[str, Any]:
        """Values at the start of the timeline (the resting pose)."""
        return self.values_at(0.0)

    def get_value(self, track_name: str) -> Any:
        return self.values_at(self.progress).get(track_name)

    @classmethod
    def reel_scroll(
        cls,
        distance: float,
        duration: float,
        easing: Easing | str = Easing.EASE_IN_OUT,
        peak_blur: float = 1.0,
        name: str = "reel_scroll",
    ) -> "Timeline":
        """Create the reel spin: scroll up by ``distance`` with a blur peak midway.

        Tracks:
            offset: vertical offset, 0 -> -distance
            blur: 0 -> peak_blur (at 0.5) -> 0
        """
        timeline = cls(name=name, duration=duration, easing=easing, iterations=1)
        timeline.add_track("offset").add_keyframe(0.0, 0.0).add_keyframe(1.0, -distance)
        (
            timeline.add_track("blur")
            .add_keyframe(0.0, 0.0)
            .add_keyframe(0.5, peak_blur)
            .add_keyframe(1.0, 0.0)
        )
        return timeline
