from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_BASE = Path(__file__).resolve().parents[1]
if str(PROJECT_BASE) not in sys.path:
    sys.path.insert(0, str(PROJECT_BASE))

from grand_dao.breakthrough import BreakthroughOutcome, attempt_breakthrough, success_chance
from grand_dao.context import GameContext
from grand_dao.models.progression import xp_required
from grand_dao.models.state import GameState


def _ready(state: GameState, level: int = 1) -> None:
    progress = state.path_progress["martial"]
    progress.set_level(level)
    progress.add_xp(progress.xp_required)


def test_success_chance_is_clamped(state: GameState) -> None:
    assert success_chance(state, pill_bonus=1.0) == pytest.approx(0.95)
    assert success_chance(state, pill_bonus=-5.0) == pytest.approx(0.70 + 0.5 * 0.05)
    state.path_progress["martial"].set_level(12)
    assert 0.0 <= success_chance(state) <= 0.95
    state.active_path = None
    assert success_chance(state) == 0.0


def test_success_advances_level(state: GameState, context: GameContext, rng) -> None:
    _ready(state)
    rng.queue(0.0)
    result = attempt_breakthrough(state, context)
    progress = state.path_progress["martial"]
    assert result.success and result.outcome is BreakthroughOutcome.SUCCESS
    assert progress.level == 2
    assert progress.xp == 0
    assert not progress.breakthrough_available
    assert state.highest_path_level == 2


def test_death_leaves_path_untouched(state: GameState, context: GameContext, rng) -> None:
    _ready(state)
    rng.queue(0.99, 0.01)
    result = attempt_breakthrough(state, context)
    progress = state.path_progress["martial"]
    assert result.is_death
    assert progress.level == 1
    assert progress.breakthrough_available


def test_crippling_injury_drops_a_level(state: GameState, context: GameContext, rng) -> None:
    _ready(state, level=3)
    rng.queue(0.99, 0.10)
    result = attempt_breakthrough(state, context)
    progress = state.path_progress["martial"]
    assert result.outcome is BreakthroughOutcome.CRIPPLING_INJURY
    assert progress.level == 2
    assert progress.xp == pytest.approx(xp_required(2) * 0.5)


def test_qi_deviation_wipes_xp(state: GameState, context: GameContext, rng) -> None:
    _ready(state)
    rng.queue(0.99, 0.30)
    result = attempt_breakthrough(state, context)
    assert result.outcome is BreakthroughOutcome.QI_DEVIATION
    assert state.path_progress["martial"].xp == 0
    assert state.qi_deviation.active
    assert state.qi_deviation.remaining_seconds == 1800


def test_minor_setback_keeps_seventy_percent(state: GameState, context: GameContext, rng) -> None:
    _ready(state)
    rng.queue(0.99, 0.90)
    result = attempt_breakthrough(state, context)
    progress = state.path_progress["martial"]
    assert result.outcome is BreakthroughOutcome.MINOR_SETBACK
    assert progress.xp == pytest.approx(progress.xp_required * 0.7)
    assert not progress.breakthrough_available


def test_not_ready_is_a_no_op(state: GameState, context: GameContext) -> None:
    before = state.to_mapping()
    result = attempt_breakthrough(state, context)
    assert result.outcome is BreakthroughOutcome.NOT_READY
    assert state.to_mapping() == before


def test_max_level_cannot_break_through(state: GameState, context: GameContext) -> None:
    progress = state.path_progress["martial"]
    progress.set_level(12)
    progress.add_xp(progress.xp_required)
    result = attempt_breakthrough(state, context)
    assert result.outcome is BreakthroughOutcome.NOT_READY
    assert progress.level == 12
