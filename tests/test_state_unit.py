from __future__ import annotations

from reeldraw.core.diagnostics import SpinError
from reeldraw.core.state import SpinState, SpinStateMachine


def test_happy_path_transitions() -> None:
    machine = SpinStateMachine()
    seen: list[tuple[SpinState, SpinState]] = []
    machine.add_listener(lambda old, new, ctx: seen.append((old, new)))

    for state in (SpinState.SELECTING, SpinState.ANIMATING, SpinState.REVEALING, SpinState.COMPLETED):
        assert machine.transition(state)
    machine.reset()

    assert [new for _, new in seen] == [
        SpinState.SELECTING,
        SpinState.ANIMATING,
        SpinState.REVEALING,
        SpinState.COMPLETED,
        SpinState.IDLE,
    ]
    assert machine.state is SpinState.IDLE


def test_invalid_transition_is_refused() -> None:
    machine = SpinStateMachine()
    assert not machine.transition(SpinState.REVEALING)
    assert not machine.can_transition(SpinState.FAILED)
    assert machine.state is SpinState.IDLE


def test_fail_records_error_in_context() -> None:
    machine = SpinStateMachine()
    machine.transition(SpinState.SELECTING)

    assert machine.fail(SpinError.NO_SELECTION, "nothing")

    assert machine.state is SpinState.FAILED
    assert machine.context.error is SpinError.NO_SELECTION
    assert machine.context.error_message == "nothing"


def test_reset_clears_context_and_skips_notify_when_idle() -> None:
    machine = SpinStateMachine()
    calls: list[SpinState] = []
    machine.add_listener(lambda old, new, ctx: calls.append(new))

    machine.reset()
    assert calls == []

    machine.transition(SpinState.SELECTING, winner="A")
    assert machine.context.winner == "A"
    machine.fail(SpinError.EMPTY_NAME_LIST, "empty")
    machine.reset()
    assert machine.context.winner is None
    assert calls[-1] is SpinState.IDLE


def test_listener_errors_do_not_break_transitions() -> None:
    machine = SpinStateMachine()

    def broken(old, new, ctx):
        raise RuntimeError("listener failure")

    machine.add_listener(broken)
    assert machine.transition(SpinState.SELECTING)
    machine.remove_listener(broken)
    assert machine.transition(SpinState.ANIMATING)
