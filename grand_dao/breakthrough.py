"""Breakthrough resolution for a ready path."""

from __future__ import annotations

import logging
from enum import Enum
from typing import NamedTuple

from .constants import (
    CRIPPLED_XP_FRACTION,
    CRIPPLING_THRESHOLD,
    DEATH_THRESHOLD,
    DEVIATION_THRESHOLD,
    LUCK_BREAKTHROUGH_WEIGHT,
    MAX_BREAKTHROUGH_CHANCE,
    QI_DEVIATION_DURATION,
    SETBACK_XP_FRACTION,
)
from .context import GameContext
from .game import record_highest_level
from .models.progression import breakthrough_rate, get_path, is_max_level, is_tier_transition
from .models.state import GameState, LogKind, PathProgress

log = logging.getLogger(__name__)


class BreakthroughOutcome(str, Enum):
    SUCCESS = "success"
    MINOR_SETBACK = "minor_setback"
    QI_DEVIATION = "qi_deviation"
    CRIPPLING_INJURY = "crippling_injury"
    DEATH = "death"
    NOT_READY = "not_ready"


class BreakthroughResult(NamedTuple):
    success: bool
    outcome: BreakthroughOutcome
    message: str

    @property
    def is_death(self) -> bool:
        return self.outcome is BreakthroughOutcome.DEATH


def success_chance(state: GameState, pill_bonus: float = 0.0) -> float:
    """Probability that an attempt on the active path succeeds, in ``[0, 0.95]``."""

    progress = state.active_progress()
    if progress is None:
        return 0.0
    chance = (
        breakthrough_rate(progress.level)
        + max(0.0, pill_bonus)
        + state.character.luck * LUCK_BREAKTHROUGH_WEIGHT
    )
    return max(0.0, min(MAX_BREAKTHROUGH_CHANCE, chance))


def ready_progress(state: GameState) -> PathProgress | None:
    progress = state.active_progress()
    if progress is None or not progress.unlocked or not progress.breakthrough_available:
        return None
    if is_max_level(progress.level):
        return None
    return progress


def needs_tribulation(state: GameState) -> bool:
    progress = ready_progress(state)
    return progress is not None and is_tier_transition(progress.level)


def advance_level(state: GameState, context: GameContext, progress: PathProgress) -> BreakthroughResult:
    """Apply a successful breakthrough to ``progress``."""

    progress.set_level(progress.level + 1)
    record_highest_level(state)
    path = get_path(progress.path_key)
    level_name = path.level_name(progress.level) if path else f"Level {progress.level}"
    context.add_log(
        state, f"BREAKTHROUGH SUCCESS! Advanced to {level_name}!", LogKind.LEGENDARY
    )
    if is_max_level(progress.level) and path is not None:
        context.add_log(
            state,
            f"You have reached the pinnacle of {path.name}! You are a true immortal!",
            LogKind.LEGENDARY,
        )
    log.info("Breakthrough on %s to level %d", progress.path_key, progress.level)
    return BreakthroughResult(True, BreakthroughOutcome.SUCCESS, f"Advanced to {level_name}!")


def _resolve_failure(
    state: GameState, context: GameContext, progress: PathProgress
) -> BreakthroughResult:
    roll = context.rng.random()
    if roll < DEATH_THRESHOLD:
        context.add_log(
            state,
            "CATASTROPHIC FAILURE! Your body shatters... Death claims you.",
            LogKind.DANGER,
        )
        log.info("Breakthrough on %s ended in death", progress.path_key)
        return BreakthroughResult(
            False,
            BreakthroughOutcome.DEATH,
            "Your cultivation backfired fatally. Death claims you.",
        )
    if roll < CRIPPLING_THRESHOLD:
        new_level = max(1, progress.level - 1)
        progress.set_level(new_level)
        progress.xp = progress.xp_required * CRIPPLED_XP_FRACTION
        context.add_log(
            state, f"CRIPPLING INJURY! Dropped back to Level {new_level}!", LogKind.DANGER
        )
        return BreakthroughResult(
            False,
            BreakthroughOutcome.CRIPPLING_INJURY,
            "A crippling injury sends you back a level!",
        )
    if roll < DEVIATION_THRESHOLD:
        progress.xp = 0.0
        progress.breakthrough_available = False
        state.qi_deviation.start(QI_DEVIATION_DURATION)
        context.add_log(
            state,
            "QI DEVIATION! All progress lost and speed halved for 30 minutes!",
            LogKind.DANGER,
        )
        return BreakthroughResult(
            False,
            BreakthroughOutcome.QI_DEVIATION,
            "Qi Deviation! All XP lost and speed halved for 30 minutes!",
        )
    progress.xp = progress.xp_required * SETBACK_XP_FRACTION
    progress.breakthrough_available = False
    context.add_log(state, "Minor Setback. Lost 30% XP progress.", LogKind.WARNING)
    return BreakthroughResult(
        False,
        BreakthroughOutcome.MINOR_SETBACK,
        "Minor setback. Lost 30% of your XP progress.",
    )


def attempt_breakthrough(
    state: GameState, context: GameContext, pill_bonus: float = 0.0
) -> BreakthroughResult:
    """Roll a breakthrough on the active path.

    A path that is missing, not ready or already at the final level yields a
    ``NOT_READY`` result and the state is left untouched.  On ``DEATH`` the
    path is not modified; the caller is expected to run a rebirth.
    """

    progress = ready_progress(state)
    if progress is None:
        return BreakthroughResult(
            False, BreakthroughOutcome.NOT_READY, "Not ready for breakthrough."
        )
    if context.rng.random() < success_chance(state, pill_bonus):
        return advance_level(state, context, progress)
    return _resolve_failure(state, context, progress)


__all__ = [
    "BreakthroughOutcome",
    "BreakthroughResult",
    "advance_level",
    "attempt_breakthrough",
    "needs_tribulation",
    "ready_progress",
    "success_chance",
]
