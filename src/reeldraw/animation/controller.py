"""Animation handles that the spin session can suspend on.

An ``AnimationController`` exposes ``play()``, ``cancel()`` and a ``finished``
future. ``finished`` resolves to True when the animation runs to its end and
to False when it is cancelled first. If a frame fails, the future carries
that exception instead. Each ``play()`` restarts from the beginning with a
fresh future.
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, Optional
import asyncio
import logging

from reeldraw.animation.timeline import Timeline

logger = logging.getLogger(__name__)

FrameCallback = Callable[[Dict[str, Any]], None]
SleepFunc = Callable[[float], Awaitable[Any]]


class AnimationController(ABC):
    """Handle for one animation bound to a display surface."""

    @property
    @abstractmethod
    def duration_ms(self) -> float:
        """Total play time in milliseconds."""
        ...

    @property
    @abstractmethod
    def is_playing(self) -> bool:
        ...

    @property
    @abstractmethod
    def finished(self) -> "asyncio.Future[bool]":
        """Future for the current (or most recent) playback."""
        ...

    @abstractmethod
    def play(self) -> None:
        """Start playback from the beginning."""
        ...

    @abstractmethod
    def cancel(self) -> None:
        """Stop playback and return to the resting pose."""
        ...


class TimelineAnimation(AnimationController):
    """Plays a Timeline on the running event loop in fixed frame steps.

    Every frame the timeline advances by ``frame_ms`` and the values are
    pushed to ``on_frame``. When playback ends (finished or cancelled) the
    resting values are pushed again, so nothing persists after the animation.

    Args:
        timeline: Keyframes and timing to play
        on_frame: Receives track values each frame
        frame_ms: Timeline time advanced per frame
        sleep: Awaitable used between frames (seconds)
    """

    def __init__(
        self,
        timeline: Timeline,
        on_frame: FrameCallback,
        frame_ms: float = 16.0,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        if frame_ms <= 0:
            raise ValueError(f"frame_ms must be positive, got {frame_ms}")
        self.timeline = timeline
        self._on_frame = on_frame
        self._frame_ms = frame_ms
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None
        self._finished: Optional[asyncio.Future] = None
        self.frames_played = 0

    @property
    def duration_ms(self) -> float:
        return self.timeline.total_duration

    @property
    def is_playing(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def finished(self) -> "asyncio.Future[bool]":
        if self._finished is None:
            raise RuntimeError(f"Animation '{self.timeline.name}' has not been played")
        return self._finished

    def play(self) -> None:
        loop = asyncio.get_running_loop()
        if self.is_playing:
            self.cancel()

        self._finished = loop.create_future()
        self.frames_played = 0
        self.timeline.play(from_start=True)
        self._task = loop.create_task(self._run(self._finished))
        logger.debug(
            f"Animation started: {self.timeline.name} ({self.timeline.total_duration:.0f}ms)"
        )

    def cancel(self) -> None:
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()

        self.timeline.stop()
        self._on_frame(self.timeline.rest_values())

        if self._finished is not None and not self._finished.done():
            self._finished.set_result(False)
            logger.debug(f"Animation cancelled: {self.timeline.name}")

    async def _run(self, finished: "asyncio.Future[bool]") -> None:
        try:
            while not self.timeline.is_finished:
                await self._sleep(self._frame_ms / 1000.0)
                values = self.timeline.update(self._frame_ms)
                self.frames_played += 1
                self._on_frame(values)

            # No fill: drop back to the resting pose once finished
            self._on_frame(self.timeline.rest_values())
        except Exception as exc:
            logger.exception(f"Animation failed: {self.timeline.name} at frame {self.frames_played}")
            self.timeline.stop()
            if not finished.done():
                finished.set_exception(exc)
        else:
            if not finished.done():
                finished.set_result(True)
            logger.debug(
                f"Animation completed: {self.timeline.name} after {self.frames_played} frames"
            )
        finally:
            if self._task is asyncio.current_task():
                self._task = None
