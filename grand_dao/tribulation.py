"""Heavenly tribulation: the timed strike sequence guarding tier transitions.

The sequence itself is pure state.  Timing lives with the caller: it opens a
strike with :func:`open_strike`, waits for the strike window, and reports a
missed window through :func:`fail_strike`.  Every timed call carries the
tribulation id and strike index it was scheduled for, so a stale timer is
ignored instead of striking a newer sequence.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional

from .breakthrough import BreakthroughResult, advance_level, needs_tribulation, ready_progress
from .constants import (
    TRIBULATION_BODY_HP,
    TRIBULATION_DAMAGE_FRACTION,
    TRIBULATION_LEVEL_HP,
    TRIBULATION_STRIKES,
    TRIBULATION_WINDOWS,
)
from .context import GameContext
from .game import tribulation_hp_bonus
from .models.state import GameState, LogKind
from .rebirth import rebirth

log = logging.getLogger(__name__)


class TribulationPhase(str, Enum):
    PREPARING = "preparing"
    STRIKING = "striking"
    SURVIVED = "survived"
    FAILED = "failed"
    ABANDONED = "abandoned"

    @property
    def finished(self) -> bool:
        return self in (
            TribulationPhase.SURVIVED,
            TribulationPhase.FAILED,
            TribulationPhase.ABANDONED,
        )


class StrikeOutcome(str, Enum):
    RESISTED = "resisted"
    STRUCK = "struck"
    SURVIVED = "survived"
    FAILED = "failed"
    IGNORED = "ignored"


@dataclass(slots=True)
class Tribulation:
    id: int
    path_key: str
    level: int
    strikes: int
    max_hp: int
    hp: int
    window: float
    current_strike: int = 0
    phase: TribulationPhase = TribulationPhase.PREPARING

    @property
    def tier(self) -> int:
        return 1 if self.level <= 4 else 2

    @property
    def active(self) -> bool:
        return not self.phase.finished

    @property
    def strikes_remaining(self) -> int:
        return max(0, self.strikes - self.current_strike)

    def matches(self, tribulation_id: Optional[int], strike: Optional[int]) -> bool:
        if tribulation_id is not None and tribulation_id != self.id:
            return False
        return strike is None or strike == self.current_strike


class StrikeResult(NamedTuple):
    outcome: StrikeOutcome
    message: str
    breakthrough: Optional[BreakthroughResult] = None

    @property
    def finished(self) -> bool:
        return self.outcome in (StrikeOutcome.SURVIVED, StrikeOutcome.FAILED)


def tribulation_max_hp(state: GameState, level: int) -> int:
    power = level * TRIBULATION_LEVEL_HP + state.character.body_multiplier * TRIBULATION_BODY_HP
    return math.floor(power * (1 + tribulation_hp_bonus(state)))


def start_tribulation(state: GameState, context: GameContext) -> Optional[Tribulation]:
    """Begin a tribulation for the ready path, or return ``None`` if none is due."""

    if state.tribulation is not None and state.tribulation.active:
        return None
    progress = ready_progress(state)
    if progress is None or not needs_tribulation(state):
        return None
    tier = 1 if progress.level <= 4 else 2
    strikes = TRIBULATION_STRIKES[tier] * (2 if state.character.devil_mark else 1)
    max_hp = tribulation_max_hp(state, progress.level)
    tribulation = Tribulation(
        id=context.next_tribulation_id(),
        path_key=progress.path_key,
        level=progress.level,
        strikes=strikes,
        max_hp=max_hp,
        hp=max_hp,
        window=TRIBULATION_WINDOWS[tier],
    )
    state.tribulation = tribulation
    context.add_log(state, "HEAVENLY TRIBULATION BEGINS!", LogKind.DANGER)
    log.info(
        "Tribulation %d started on %s level %d (%d strikes, %d HP)",
        tribulation.id,
        progress.path_key,
        progress.level,
        strikes,
        max_hp,
    )
    return tribulation


def current_tribulation(state: GameState) -> Optional[Tribulation]:
    tribulation = state.tribulation
    if tribulation is not None and tribulation.active:
        return tribulation
    return None


def open_strike(state: GameState, tribulation_id: Optional[int] = None) -> bool:
    tribulation = current_tribulation(state)
    if tribulation is None or tribulation.phase is not TribulationPhase.PREPARING:
        return False
    if not tribulation.matches(tribulation_id, None):
        return False
    tribulation.phase = TribulationPhase.STRIKING
    return True


def _survive(state: GameState, context: GameContext, tribulation: Tribulation) -> StrikeResult:
    tribulation.phase = TribulationPhase.SURVIVED
    state.tribulation = None
    context.add_log(state, "You have survived the Heavenly Tribulation!", LogKind.LEGENDARY)
    progress = state.path_progress.get(tribulation.path_key)
    result = None
    if progress is not None and progress.breakthrough_available:
        result = advance_level(state, context, progress)
    log.info("Tribulation %d survived", tribulation.id)
    return StrikeResult(StrikeOutcome.SURVIVED, "The heavens relent. You ascend!", result)


def _after_strike(
    state: GameState,
    context: GameContext,
    tribulation: Tribulation,
    outcome: StrikeOutcome,
    message: str,
) -> StrikeResult:
    tribulation.current_strike += 1
    if tribulation.current_strike >= tribulation.strikes:
        return _survive(state, context, tribulation)
    tribulation.phase = TribulationPhase.PREPARING
    return StrikeResult(outcome, message)


def resist_strike(
    state: GameState,
    context: GameContext,
    tribulation_id: Optional[int] = None,
) -> StrikeResult:
    tribulation = current_tribulation(state)
    if (
        tribulation is None
        or tribulation.phase is not TribulationPhase.STRIKING
        or not tribulation.matches(tribulation_id, None)
    ):
        return StrikeResult(StrikeOutcome.IGNORED, "There is no strike to resist.")
    return _after_strike(
        state, context, tribulation, StrikeOutcome.RESISTED, "You endure the lightning!"
    )


def fail_strike(
    state: GameState,
    context: GameContext,
    tribulation_id: Optional[int] = None,
    strike: Optional[int] = None,
) -> StrikeResult:
    """Apply a strike that was not resisted in time.

    Damage is a fixed share of maximum HP.  At zero HP the body is destroyed
    and ``state`` is replaced by the next life.  A strike that is survived
    still counts towards the total.
    """

    tribulation = current_tribulation(state)
    if (
        tribulation is None
        or tribulation.phase is not TribulationPhase.STRIKING
        or not tribulation.matches(tribulation_id, strike)
    ):
        return StrikeResult(StrikeOutcome.IGNORED, "There is no strike to take.")

    damage = math.floor(tribulation.max_hp * TRIBULATION_DAMAGE_FRACTION)
    tribulation.hp = max(0, tribulation.hp - damage)
    if tribulation.hp <= 0:
        tribulation.phase = TribulationPhase.FAILED
        context.add_log(
            state, "TRIBULATION FAILED! Your body is destroyed...", LogKind.DANGER
        )
        log.info("Tribulation %d failed", tribulation.id)
        state.assign_from(rebirth(state, context))
        return StrikeResult(StrikeOutcome.FAILED, "The lightning reduces you to ash.")
    return _after_strike(
        state,
        context,
        tribulation,
        StrikeOutcome.STRUCK,
        f"The lightning tears through you for {damage} damage!",
    )


def abandon_tribulation(state: GameState, context: GameContext) -> bool:
    """Cancel the running sequence; the path stays ready and untouched."""

    tribulation = current_tribulation(state)
    if tribulation is None:
        return False
    tribulation.phase = TribulationPhase.ABANDONED
    state.tribulation = None
    context.add_log(state, "You flee from the Heavenly Tribulation.", LogKind.WARNING)
    log.info("Tribulation %d abandoned", tribulation.id)
    return True


__all__ = [
    "StrikeOutcome",
    "StrikeResult",
    "Tribulation",
    "TribulationPhase",
    "abandon_tribulation",
    "current_tribulation",
    "fail_strike",
    "open_strike",
    "resist_strike",
    "start_tribulation",
    "tribulation_max_hp",
]
