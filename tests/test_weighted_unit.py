from __future__ import annotations

import itertools

import pytest

from reeldraw.draw.prize import Prize, as_pool, total_weight
from reeldraw.draw.weighted import select_prize


def test_low_draw_selects_first_prize(pool) -> None:
    assert select_prize(pool, lambda: 0.3) == Prize("A", 50)


def test_high_draw_selects_second_prize(pool) -> None:
    assert select_prize(pool, lambda: 0.6) == Prize("B", 50)


def test_empty_pool_selects_nothing() -> None:
    assert select_prize((), lambda: 0.5) is None


def test_all_zero_weights_select_nothing() -> None:
    prizes = (Prize("A", 0), Prize("B", 0))
    for draw in (0.0, 0.5, 0.999):
        assert select_prize(prizes, lambda: draw) is None


def test_single_positive_prize_always_wins() -> None:
    prizes = (Prize("only", 3),)
    for draw in (0.0, 0.25, 0.999999):
        assert select_prize(prizes, lambda: draw).name == "only"


def test_zero_weight_prize_is_never_selected() -> None:
    prizes = (Prize("none", 0), Prize("A", 1), Prize("gap", 0), Prize("B", 1))
    picked = {select_prize(prizes, lambda: d / 100).name for d in range(100)}
    assert picked == {"A", "B"}


def test_boundary_draw_goes_to_next_prize(pool) -> None:
    # 0.5 * 100 == 50 is not < 50, so A's range ends just before it
    assert select_prize(pool, lambda: 0.5).name == "B"
    assert select_prize(pool, lambda: 0.0).name == "A"


def test_draw_just_below_one_reaches_last_prize() -> None:
    # Ten 0.1 weights add up to slightly less than 1.0 one at a time
    prizes = tuple(Prize(f"p{i}", 0.1) for i in range(10))
    assert select_prize(prizes, lambda: 1 - 2**-53) is prizes[-1]
    assert total_weight(prizes) == 0.1 + 0.1 + 0.1 + 0.1 + 0.1 + 0.1 + 0.1 + 0.1 + 0.1 + 0.1


def test_weights_are_relative_not_percentages() -> None:
    prizes = (Prize("small", 1), Prize("big", 3))
    assert select_prize(prizes, lambda: 0.24).name == "small"
    assert select_prize(prizes, lambda: 0.26).name == "big"


def test_draw_is_called_once_per_selection(pool) -> None:
    counter = itertools.count()

    def draw() -> float:
        next(counter)
        return 0.1

    select_prize(pool, draw)
    assert next(counter) == 1


def test_prize_rejects_negative_and_nan_weights() -> None:
    with pytest.raises(ValueError):
        Prize("bad", -1)
    with pytest.raises(ValueError):
        Prize("bad", float("nan"))
    with pytest.raises(TypeError):
        Prize("bad", "10")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        Prize("bad", True)  # type: ignore[arg-type]


def test_as_pool_snapshots_and_type_checks() -> None:
    source = [Prize("A", 1)]
    snapshot = as_pool(source)
    source.append(Prize("B", 2))

    assert snapshot == (Prize("A", 1),)
    assert total_weight(source) == 3
    with pytest.raises(TypeError):
        as_pool([("A", 1)])  # type: ignore[list-item]
