from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_BASE = Path(__file__).resolve().parents[1]
if str(PROJECT_BASE) not in sys.path:
    sys.path.insert(0, str(PROJECT_BASE))

from grand_dao.context import GameContext
from grand_dao.models.progression import ActionType
from grand_dao.models.state import ActiveBuff, GameState
from grand_dao.offline import catch_up


def test_short_absence_changes_nothing(state: GameState, context: GameContext) -> None:
    now = context.now()
    state.last_save_timestamp = now - 4
    before = state.to_mapping()
    report = catch_up(state, context, now)
    assert not report.applied
    assert state.to_mapping() == before


def test_idle_hour_pays_only_stones(state: GameState, context: GameContext) -> None:
    now = context.now()
    state.last_save_timestamp = now - 3600
    stones = state.spirit_stones
    xp_before = {key: progress.xp for key, progress in state.path_progress.items()}

    report = catch_up(state, context, now)

    assert report.elapsed == 3600
    assert report.xp_gained == 0
    assert state.spirit_stones == stones + 6
    assert {key: p.xp for key, p in state.path_progress.items()} == xp_before
    assert state.total_play_time == 3600
    assert state.last_save_timestamp == now


def test_training_absence_grants_base_rate_xp(state: GameState, context: GameContext) -> None:
    now = context.now()
    state.current_action = ActionType.TRAIN
    state.buffs.append(ActiveBuff("boost", 5.0, 30))
    state.last_save_timestamp = now - 100
    report = catch_up(state, context, now)
    # buffs do not apply while away and have run out by now
    assert report.xp_gained == pytest.approx(120)
    assert state.buffs == []


def test_absence_is_capped_at_eight_hours(state: GameState, context: GameContext) -> None:
    now = context.now()
    state.last_save_timestamp = now - 100_000
    report = catch_up(state, context, now)
    assert report.elapsed == 8 * 3600
    assert report.stones_gained == 48


def test_journey_completes_while_away(state: GameState, context: GameContext) -> None:
    now = context.now()
    state.travel.begin("forest_path", 90)
    state.last_save_timestamp = now - 120
    catch_up(state, context, now)
    assert not state.travel.traveling
    assert state.location == "forest_path"


def test_deviation_heals_while_away(state: GameState, context: GameContext) -> None:
    now = context.now()
    state.qi_deviation.start(60)
    state.last_save_timestamp = now - 120
    catch_up(state, context, now)
    assert not state.qi_deviation.active
