from __future__ import annotations

import random
import sys
from pathlib import Path
from typing import Callable

import pytest

PROJECT_BASE = Path(__file__).resolve().parents[1]
if str(PROJECT_BASE) not in sys.path:
    sys.path.insert(0, str(PROJECT_BASE))

from grand_dao.constants import MAX_LOG_MESSAGES
from grand_dao.context import GameContext
from grand_dao.creation import reroll_cost, roll_character
from grand_dao.models._validation import ModelValidationError
from grand_dao.models.character import BACKGROUNDS, Character, describe_background
from grand_dao.models.state import GamePhase, GameState, LogEntry


def test_reroll_cost_grows_tenfold() -> None:
    assert [reroll_cost(count) for count in range(4)] == [0, 10, 100, 1000]


def test_rolled_character_is_valid() -> None:
    rng = random.Random(7)
    for _ in range(50):
        character = roll_character(rng, "  ")
        assert character.name == "Nameless"
        assert 0.1 <= character.luck <= 1.0
        assert character.background.key in BACKGROUNDS


def test_initial_state(state: GameState, context: GameContext) -> None:
    assert state.game_phase is GamePhase.PLAYING
    assert state.location == "peaceful_village"
    assert set(state.discovered_regions) == {"peaceful_village", "forest_path", "river_delta"}
    assert list(state.path_progress) == ["martial"]
    assert state.active_path == "martial"
    assert state.last_save_timestamp == context.now()
    assert state.event_log[-1].text == "Your journey on the Grand Dao begins..."


def test_backgrounds_shape_the_start(make_state: Callable[..., GameState]) -> None:
    noble = make_state("fallen_noble")
    assert noble.spirit_stones == 50
    assert noble.location == "small_city"

    amnesiac = make_state("mysterious_amnesiac")
    assert amnesiac.has_item("basic_scripture")
    assert amnesiac.is_unlocked("spirit")


def test_log_keeps_newest_fifty(state: GameState, context: GameContext) -> None:
    for number in range(80):
        context.add_log(state, f"entry {number}")
    assert len(state.event_log) == MAX_LOG_MESSAGES
    assert state.event_log[0].text == "entry 79"
    ids = [entry.id for entry in state.event_log]
    assert ids == sorted(ids, reverse=True)


def test_log_ids_resume_after_load(state: GameState) -> None:
    state.push_log(LogEntry(41, "old"))
    context = GameContext()
    context.resume_log_ids(state)
    assert context.add_log(state, "new").id == 42


def test_copy_is_independent(state: GameState) -> None:
    clone = state.copy()
    clone.path_progress["martial"].xp = 50
    clone.discovered_regions.append("merchant_hub")
    clone.character.karma = 10
    assert state.path_progress["martial"].xp == 0
    assert "merchant_hub" not in state.discovered_regions
    assert state.character.karma == 0


def test_assign_from_keeps_identity(state: GameState, make_state: Callable[..., GameState]) -> None:
    other = make_state("fallen_noble")
    original = state
    state.assign_from(other)
    assert original is state
    assert state.location == "small_city"


def test_mapping_validation_reports_every_problem(state: GameState) -> None:
    payload = state.to_mapping()
    payload["game_phase"] = "ascended"
    payload["spirit_stones"] = "lots"
    with pytest.raises(ModelValidationError) as excinfo:
        GameState.from_mapping(payload)
    assert len(excinfo.value.errors) == 2


def test_unknown_character_trait_is_rejected(state: GameState) -> None:
    payload = state.to_mapping()
    payload["character"]["spirit_root"] = "Moon Root"
    with pytest.raises(ValueError):
        GameState.from_mapping(payload)


def test_character_clamps_luck_and_karma(make_character: Callable[..., Character]) -> None:
    character = make_character(luck=4.0, karma=5000)
    assert character.luck == 1.0
    assert character.karma == 1000
    character.adjust_karma(-3000)
    assert character.karma == -1000


def test_background_summary() -> None:
    assert describe_background(BACKGROUNDS["merchants_child"]) == (
        "Merchant's Child (shop prices -10%)"
    )
    assert describe_background(None) == "Unknown"
