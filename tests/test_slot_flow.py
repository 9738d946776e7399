from __future__ import annotations

import asyncio

import pytest

from reeldraw.core.diagnostics import CollectingReporter, SpinError
from reeldraw.core.events import EventBus, EventType
from reeldraw.core.state import SpinState
from reeldraw.draw.prize import Prize
from reeldraw.session.slot import Slot
from reeldraw.session.store import SpinConfiguration
from reeldraw.surface.memory import MemorySurface
from reeldraw.surface.registry import SurfaceRegistry


class DetachedSurface(MemorySurface):
    """Container that disappeared from the page."""

    def append_items(self, texts) -> None:
        raise RuntimeError("surface gone")


class DroppingFrameSurface(MemorySurface):
    """Rejects every transform away from the resting pose while ``broken``."""

    broken = True

    def set_transform(self, offset: float, blur: float = 0.0) -> None:
        if self.broken and offset != 0:
            raise RuntimeError("frame dropped")
        super().set_transform(offset, blur)


class Harness:
    def __init__(
        self,
        instant_sleep,
        *,
        bind: bool = True,
        draw: float = 0.3,
        surface_cls: type[MemorySurface] = MemorySurface,
        **options,
    ) -> None:
        self.calls: list[str] = []
        self.grace: list[float] = []
        self.surface = surface_cls(sleep=instant_sleep)
        self.registry = SurfaceRegistry()
        if bind:
            self.registry.bind("#reel", self.surface)
        self.reporter = CollectingReporter()
        self.bus = EventBus(history_limit=500)

        options.setdefault("prizes", (Prize("A", 50), Prize("B", 50)))
        options.setdefault("on_spin_start", lambda: self.calls.append("start"))
        options.setdefault("on_spin_end", lambda: self.calls.append("end"))
        options.setdefault("on_name_list_changed", lambda: self.calls.append("names"))
        self.config = SpinConfiguration(reel_container_selector="#reel", **options)

        async def grace(seconds: float) -> None:
            self.grace.append(seconds)

        self.slot = Slot(
            self.config,
            self.registry,
            reporter=self.reporter,
            event_bus=self.bus,
            draw=lambda: draw,
            sleep=grace,
        )

    def spin(self) -> bool:
        return asyncio.run(self.slot.spin())


@pytest.fixture
def harness(instant_sleep):
    def build(**options) -> Harness:
        return Harness(instant_sleep, **options)

    return build


def test_spin_reveals_selected_winner(harness) -> None:
    h = harness(draw=0.6)
    h.slot.names = ["Ada", "Grace"]
    h.surface.reset_log()

    assert h.spin() is True

    assert h.surface.texts == ["B"]
    assert h.slot.last_outcome.winner == Prize("B", 50)
    assert h.slot.state is SpinState.IDLE
    assert h.reporter.failures == []


def test_spin_renders_forty_filler_rows_then_reveal(harness) -> None:
    h = harness(prizes=(Prize("A", 1), Prize("B", 1), Prize("C", 1)))
    h.slot.names = ["Ada"]
    h.surface.reset_log()

    h.spin()

    assert h.surface.mutations == [("append", 40), ("clear", 40), ("append", 1)]


def test_callbacks_fire_in_order_around_surface_mutations(harness) -> None:
    h = harness()
    seen: dict[str, object] = {}
    h.config.on_spin_start = lambda: seen.setdefault("start", list(h.surface.mutations))
    h.config.on_spin_end = lambda: seen.setdefault("end", list(h.surface.texts))
    h.slot.names = ["Ada"]
    h.surface.reset_log()

    assert h.spin()

    assert seen["start"] == []
    assert seen["end"] == ["A"]


def test_empty_name_list_fails_before_anything_happens(harness) -> None:
    h = harness()

    assert h.spin() is False

    assert h.reporter.kinds == [SpinError.EMPTY_NAME_LIST]
    assert h.surface.mutations == []
    assert h.calls == []
    assert h.slot.state is SpinState.IDLE
    assert h.slot.last_outcome.final_state is SpinState.FAILED


@pytest.mark.parametrize("prizes", [(), (Prize("A", 0), Prize("B", 0))])
def test_nothing_selectable_fails_without_callbacks(harness, prizes) -> None:
    h = harness(prizes=prizes)
    h.slot.names = ["Ada"]
    h.calls.clear()
    h.surface.reset_log()

    assert h.spin() is False

    assert h.reporter.kinds == [SpinError.NO_SELECTION]
    assert h.surface.mutations == []
    assert h.calls == []


def test_missing_surface_fails_after_start_callback(harness) -> None:
    h = harness(bind=False)
    h.slot.names = ["Ada"]

    assert h.slot.surface is None
    assert h.spin() is False

    assert h.reporter.kinds == [SpinError.MISSING_DISPLAY_SURFACE]
    assert h.calls == ["names", "start"]


def test_duration_and_scroll_follow_max_reel_items(harness) -> None:
    h = harness(max_reel_items=10)
    h.slot.names = ["Ada"]

    assert h.slot.animation.duration_ms == 1000

    h.spin()

    assert h.surface.max_scroll == pytest.approx(9 * 120)
    assert max(blur for _, blur in h.surface.transforms) == pytest.approx(1.0, abs=0.05)
    # No fill: the reel settles back at rest
    assert h.surface.offset == 0.0
    assert h.surface.blur == 0.0


def test_default_reel_is_three_seconds(harness) -> None:
    h = harness()
    assert h.slot.animation.duration_ms == 3000
    assert not h.slot.animation.is_playing


def test_grace_pause_precedes_reveal(harness) -> None:
    h = harness()
    h.slot.names = ["Ada"]

    h.spin()

    assert h.grace == [pytest.approx(0.1)]


def test_names_setter_clears_children_and_notifies_once(harness) -> None:
    h = harness()
    h.slot.names = ["Ada"]
    h.spin()
    assert h.surface.children

    h.calls.clear()
    h.slot.names = ["Grace", "Linus"]

    assert h.surface.children == ()
    assert h.calls == ["names"]
    assert h.slot.names == ("Grace", "Linus")
    assert len(h.bus.get_history(EventType.NAME_LIST_CHANGED)) == 2


def test_names_setter_clears_filler_while_spinning(harness) -> None:
    h = harness()
    h.slot.names = ["Ada"]

    async def scenario() -> bool:
        spin = asyncio.create_task(h.slot.spin())
        await asyncio.sleep(0)
        assert h.slot.is_spinning
        assert len(h.surface.children) == 40

        h.slot.names = ["Grace"]
        assert h.surface.children == ()
        return await spin

    assert asyncio.run(scenario()) is True
    assert h.surface.texts == ["A"]
    assert h.calls == ["names", "start", "names", "end"]


def test_names_are_read_only_snapshot(harness) -> None:
    h = harness()
    source = ["Ada"]
    h.slot.names = source
    source.append("Grace")

    assert h.slot.names == ("Ada",)
    with pytest.raises(TypeError):
        h.slot.names = "Ada"


def test_remove_winner_flag_is_inert(harness) -> None:
    h = harness(remove_winner=True)
    h.slot.names = ["Ada"]
    assert h.slot.should_remove_winner_from_name_list is True

    h.spin()
    assert h.slot.names == ("Ada",)

    h.slot.should_remove_winner_from_name_list = False
    assert h.slot.should_remove_winner_from_name_list is False
    assert h.spin() is True


def test_concurrent_spin_is_rejected(harness) -> None:
    h = harness()
    h.slot.names = ["Ada"]

    async def scenario() -> tuple[bool, bool, list[str]]:
        first = asyncio.create_task(h.slot.spin())
        await asyncio.sleep(0)
        assert h.slot.is_spinning
        mutations = list(h.surface.mutations)
        second = await h.slot.spin()
        assert h.surface.mutations == mutations
        return await first, second, list(h.calls)

    first, second, calls = asyncio.run(scenario())

    assert first is True
    assert second is False
    assert h.reporter.kinds == [SpinError.SPIN_IN_PROGRESS]
    assert calls == ["names", "start", "end"]


def test_callback_error_fails_the_spin(harness) -> None:
    def explode() -> None:
        raise RuntimeError("host bug")

    h = harness(on_spin_end=explode)
    h.slot.names = ["Ada"]

    assert h.spin() is False

    assert h.reporter.kinds == [SpinError.CALLBACK_ERROR]
    assert h.slot.state is SpinState.IDLE
    assert not h.slot.is_spinning


def test_slot_can_spin_again_after_failure(harness) -> None:
    h = harness()
    assert h.spin() is False
    h.slot.names = ["Ada"]
    assert h.spin() is True
    assert h.spin() is True
    assert h.surface.texts == ["A"]


def test_surface_error_fails_the_spin(harness) -> None:
    h = harness(surface_cls=DetachedSurface)
    h.slot.names = ["Ada"]

    assert h.spin() is False

    assert h.reporter.kinds == [SpinError.SURFACE_ERROR]
    assert h.reporter.failures[0].details == {"step": "render"}
    assert h.slot.last_outcome.error is SpinError.SURFACE_ERROR
    assert h.calls == ["names", "start"]
    assert h.slot.state is SpinState.IDLE
    assert not h.slot.is_spinning


def test_frame_error_fails_the_spin_instead_of_hanging(harness) -> None:
    h = harness(surface_cls=DroppingFrameSurface)
    h.slot.names = ["Ada"]

    async def scenario() -> bool:
        return await asyncio.wait_for(h.slot.spin(), timeout=5)

    assert asyncio.run(scenario()) is False
    assert h.reporter.kinds == [SpinError.SURFACE_ERROR]
    assert h.reporter.failures[0].details == {"step": "animate"}
    assert h.surface.children == ()
    assert not h.slot.animation.is_playing
    assert not h.slot.is_spinning

    h.surface.broken = False
    assert h.spin() is True
    assert h.reporter.kinds == [SpinError.SURFACE_ERROR]
    assert h.surface.texts == ["A"]


def test_cancelled_animation_leaves_no_filler(harness) -> None:
    h = harness()
    h.slot.names = ["Ada"]
    h.surface.reset_log()

    async def scenario() -> bool:
        spin = asyncio.create_task(h.slot.spin())
        await asyncio.sleep(0)
        h.slot.animation.cancel()
        return await spin

    assert asyncio.run(scenario()) is False
    assert h.reporter.kinds == [SpinError.ANIMATION_CANCELLED]
    assert h.surface.children == ()
    assert h.surface.mutations == [("append", 40), ("clear", 40)]
    assert h.calls == ["names", "start"]


def test_lifecycle_events_are_published(harness) -> None:
    h = harness()
    h.slot.names = ["Ada"]
    h.bus.clear_history()

    h.spin()

    types = [event.type for event in h.bus.get_history(limit=100)]
    assert types.index(EventType.SPIN_STARTED) < types.index(EventType.ANIMATION_START)
    assert types.index(EventType.ANIMATION_END) < types.index(EventType.SPIN_ENDED)
    states = [
        event.data["to"]
        for event in h.bus.get_history(EventType.STATE_CHANGED, limit=100)
    ]
    assert states == ["SELECTING", "ANIMATING", "REVEALING", "COMPLETED", "IDLE"]


def test_failure_event_carries_error_kind(harness) -> None:
    h = harness()

    h.spin()

    failed = h.bus.get_history(EventType.SPIN_FAILED)
    assert [event.data["error"] for event in failed] == ["empty_name_list"]


def test_configuration_validation() -> None:
    with pytest.raises(ValueError):
        SpinConfiguration(prizes=(), reel_container_selector="#reel", max_reel_items=0)
    with pytest.raises(TypeError):
        SpinConfiguration(prizes=(), reel_container_selector="#reel", max_reel_items=True)
    with pytest.raises(ValueError):
        SpinConfiguration(prizes=(), reel_container_selector="  ")
    with pytest.raises(TypeError):
        SpinConfiguration(prizes=(), reel_container_selector="#reel", on_spin_end="nope")
