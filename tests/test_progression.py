from __future__ import annotations

import sys
from pathlib import Path

PROJECT_BASE = Path(__file__).resolve().parents[1]
if str(PROJECT_BASE) not in sys.path:
    sys.path.insert(0, str(PROJECT_BASE))

from grand_dao.constants import MAX_PATH_LEVEL
from grand_dao.models.progression import (
    PATHS,
    ActionType,
    breakthrough_rate,
    is_max_level,
    is_tier_transition,
    karma_label,
    luck_descriptor,
    tier_for_level,
    xp_required,
)
from grand_dao.models.state import PathProgress
from grand_dao.paths import SPEED_MODIFIERS, UNLOCK_PREDICATES


def test_xp_curve_is_strictly_increasing() -> None:
    assert xp_required(1) == 220
    values = [xp_required(level) for level in range(1, MAX_PATH_LEVEL + 1)]
    assert all(later > earlier for earlier, later in zip(values, values[1:]))


def test_tiers_and_transitions() -> None:
    assert [tier_for_level(level) for level in (1, 4, 5, 8, 9, 12)] == [1, 1, 2, 2, 3, 3]
    assert is_tier_transition(4) and is_tier_transition(8)
    assert not is_tier_transition(5)
    assert is_max_level(12) and not is_max_level(11)


def test_breakthrough_rates_fall_back_to_default() -> None:
    assert breakthrough_rate(1) == 0.70
    assert breakthrough_rate(5) == 0.50
    assert breakthrough_rate(12) == 0.10


def test_every_path_has_twelve_levels_and_behaviour() -> None:
    assert len(PATHS) == 15
    for key, path in PATHS.items():
        assert len(path.levels) == MAX_PATH_LEVEL
        assert key in SPEED_MODIFIERS
        assert key in UNLOCK_PREDICATES


def test_explore_and_idle_never_accrue_xp() -> None:
    assert not ActionType.EXPLORE.accrues_xp
    assert not ActionType.IDLE.accrues_xp
    assert ActionType.CULTIVATE.accrues_xp
    assert ActionType.from_value("nonsense") is ActionType.IDLE


def test_karma_and_luck_labels() -> None:
    assert karma_label(500) == "Saint"
    assert karma_label(100) == "Righteous"
    assert karma_label(-99) == "Neutral"
    assert karma_label(-100) == "Wicked"
    assert karma_label(-500) == "Abomination"
    assert luck_descriptor(0.2) == "Abysmal"
    assert luck_descriptor(0.6) == "Average"
    assert luck_descriptor(0.95) == "Heaven-Blessed"


def test_path_progress_caps_xp_and_flags_ready() -> None:
    progress = PathProgress("martial")
    assert not progress.add_xp(100)
    assert progress.add_xp(10_000)
    assert progress.xp == progress.xp_required
    assert progress.breakthrough_available
    assert not progress.add_xp(5)

    restored = PathProgress("martial", level=2, xp=10_000)
    assert restored.xp == restored.xp_required
    assert restored.breakthrough_available

    flagged = PathProgress("martial", xp=3, breakthrough_available=True)
    assert flagged.xp == flagged.xp_required
