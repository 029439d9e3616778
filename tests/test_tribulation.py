from __future__ import annotations

import sys
from pathlib import Path

PROJECT_BASE = Path(__file__).resolve().parents[1]
if str(PROJECT_BASE) not in sys.path:
    sys.path.insert(0, str(PROJECT_BASE))

from grand_dao.context import GameContext
from grand_dao.game import add_item
from grand_dao.models.state import GameState
from grand_dao.tribulation import (
    StrikeOutcome,
    TribulationPhase,
    abandon_tribulation,
    current_tribulation,
    fail_strike,
    open_strike,
    resist_strike,
    start_tribulation,
)


def _ready_at(state: GameState, level: int) -> None:
    progress = state.path_progress["martial"]
    progress.set_level(level)
    progress.add_xp(progress.xp_required)


def test_tier_one_tribulation_parameters(state: GameState, context: GameContext) -> None:
    _ready_at(state, 4)
    tribulation = start_tribulation(state, context)
    assert tribulation is not None
    assert tribulation.strikes == 3
    assert tribulation.window == 3.0
    # floor(4 * 10 + 1.2 * 20)
    assert tribulation.max_hp == tribulation.hp == 64
    assert tribulation.phase is TribulationPhase.PREPARING


def test_tier_two_and_devil_mark(state: GameState, context: GameContext) -> None:
    _ready_at(state, 8)
    state.character.devil_mark = True
    tribulation = start_tribulation(state, context)
    assert tribulation is not None
    assert tribulation.strikes == 12
    assert tribulation.window == 2.0


def test_tribulation_pill_raises_hp(state: GameState, context: GameContext) -> None:
    _ready_at(state, 4)
    add_item(state, "tribulation_pill")
    tribulation = start_tribulation(state, context)
    assert tribulation is not None
    assert tribulation.max_hp == 83


def test_only_tier_boundaries_start_a_tribulation(state: GameState, context: GameContext) -> None:
    _ready_at(state, 3)
    assert start_tribulation(state, context) is None
    assert state.tribulation is None


def test_resisting_every_strike_forces_breakthrough(state: GameState, context: GameContext) -> None:
    _ready_at(state, 4)
    tribulation = start_tribulation(state, context)
    assert tribulation is not None
    for _ in range(3):
        assert open_strike(state, tribulation.id)
        result = resist_strike(state, context, tribulation.id)
    assert result.outcome is StrikeOutcome.SURVIVED
    assert result.breakthrough is not None and result.breakthrough.success
    assert state.path_progress["martial"].level == 5
    assert state.tribulation is None


def test_missed_strike_damages_and_still_counts(state: GameState, context: GameContext) -> None:
    _ready_at(state, 4)
    tribulation = start_tribulation(state, context)
    assert tribulation is not None
    open_strike(state)
    result = fail_strike(state, context, tribulation.id, 0)
    assert result.outcome is StrikeOutcome.STRUCK
    assert tribulation.hp == 64 - 19
    assert tribulation.current_strike == 1
    assert tribulation.phase is TribulationPhase.PREPARING


def test_stale_strike_reports_are_ignored(state: GameState, context: GameContext) -> None:
    _ready_at(state, 4)
    tribulation = start_tribulation(state, context)
    assert tribulation is not None
    # nothing is striking yet
    assert fail_strike(state, context).outcome is StrikeOutcome.IGNORED
    open_strike(state)
    assert fail_strike(state, context, tribulation.id + 1).outcome is StrikeOutcome.IGNORED
    assert fail_strike(state, context, tribulation.id, 2).outcome is StrikeOutcome.IGNORED
    assert tribulation.hp == tribulation.max_hp


def test_destroyed_body_is_reborn(state: GameState, context: GameContext) -> None:
    _ready_at(state, 4)
    state.highest_path_level = 4
    tribulation = start_tribulation(state, context)
    assert tribulation is not None
    tribulation.hp = 10
    open_strike(state)
    result = fail_strike(state, context)
    assert result.outcome is StrikeOutcome.FAILED
    assert state.character.rebirth_count == 1
    assert state.character.legacy_bonus > 0
    assert state.total_deaths == 1
    assert state.tribulation is None
    assert state.path_progress["martial"].level == 1


def test_abandon_leaves_path_ready(state: GameState, context: GameContext) -> None:
    _ready_at(state, 4)
    tribulation = start_tribulation(state, context)
    assert tribulation is not None
    assert abandon_tribulation(state, context)
    progress = state.path_progress["martial"]
    assert progress.level == 4
    assert progress.breakthrough_available
    assert state.tribulation is None
    assert not open_strike(state, tribulation.id)
    assert not abandon_tribulation(state, context)


def test_current_tribulation_ignores_finished_runs(state: GameState, context: GameContext) -> None:
    assert current_tribulation(state) is None
    _ready_at(state, 4)
    tribulation = start_tribulation(state, context)
    assert tribulation is not None
    assert current_tribulation(state) is tribulation
    tribulation.phase = TribulationPhase.FAILED
    assert current_tribulation(state) is None
    tribulation.phase = TribulationPhase.PREPARING
    assert abandon_tribulation(state, context)
    assert current_tribulation(state) is None
