from __future__ import annotations

import random
import sys
from pathlib import Path

import pytest

PROJECT_BASE = Path(__file__).resolve().parents[1]
if str(PROJECT_BASE) not in sys.path:
    sys.path.insert(0, str(PROJECT_BASE))

from conftest import ScriptedRandom

from grand_dao.models.world import Rarity
from grand_dao.rng import (
    percent_chance,
    random_float,
    random_int,
    random_pick,
    roll_luck,
    roll_rarity,
    shuffled,
    weighted_choice,
    weighted_choice_by_weights,
)


@pytest.mark.parametrize("draw", [0.0, 0.25, 0.5, 0.999])
def test_zero_weight_entry_is_never_selected(draw: float) -> None:
    items = [("a", 1.0), ("b", 0.0)]
    picked = weighted_choice_by_weights(ScriptedRandom([draw]), items, lambda item: item[1])
    assert picked[0] == "a"


def test_all_zero_weights_select_first_entry() -> None:
    items = ["first", "second"]
    assert weighted_choice_by_weights(ScriptedRandom([0.7]), items, lambda _: 0.0) == "first"


def test_weighted_helpers_reject_empty_input() -> None:
    with pytest.raises(ValueError):
        weighted_choice_by_weights(ScriptedRandom(), [], lambda _: 1.0)
    with pytest.raises(ValueError):
        weighted_choice(ScriptedRandom(), [], lambda _: 1.0)
    with pytest.raises(ValueError):
        random_pick(ScriptedRandom(), [])


def test_weighted_choice_falls_back_to_last_item() -> None:
    items = ["a", "b", "c"]
    assert weighted_choice(ScriptedRandom([0.95]), items, lambda _: 0.1) == "c"
    assert weighted_choice(ScriptedRandom([0.15]), items, lambda _: 0.1) == "b"


def test_roll_luck_is_clamped() -> None:
    assert roll_luck(ScriptedRandom([0.0])) == pytest.approx(0.1)
    assert roll_luck(ScriptedRandom([1.0])) == pytest.approx(1.0)
    assert 0.1 <= roll_luck(ScriptedRandom([0.6])) <= 1.0


def test_random_int_is_inclusive() -> None:
    assert random_int(ScriptedRandom([0.0]), 1, 3) == 1
    assert random_int(ScriptedRandom([0.9999]), 1, 3) == 3
    assert random_int(ScriptedRandom([0.5]), 3, 1) == 2


def test_percent_chance_uses_hundred_scale() -> None:
    assert percent_chance(ScriptedRandom([0.49]), 50)
    assert not percent_chance(ScriptedRandom([0.51]), 50)


def test_roll_rarity_buckets_and_luck() -> None:
    assert roll_rarity(ScriptedRandom([0.00005]), 0.0) is Rarity.MYTHIC
    assert roll_rarity(ScriptedRandom([0.5]), 1.0) is Rarity.COMMON
    # Luck widens the uncommon band from 0.20 to 0.30.
    assert roll_rarity(ScriptedRandom([0.25]), 0.0) is Rarity.COMMON
    assert roll_rarity(ScriptedRandom([0.25]), 1.0) is Rarity.UNCOMMON


def test_random_float_spans_the_range() -> None:
    assert random_float(ScriptedRandom([0.0]), 2.0, 4.0) == 2.0
    assert random_float(ScriptedRandom([0.5]), 2.0, 4.0) == 3.0


def test_shuffled_leaves_input_alone() -> None:
    items = (1, 2, 3, 4, 5)
    result = shuffled(random.Random(3), items)
    assert sorted(result) == list(items)
    assert items == (1, 2, 3, 4, 5)
