"""Closed-form catch-up for time spent away from the game."""

from __future__ import annotations

import logging
from typing import NamedTuple

from .constants import OFFLINE_CAP_SECONDS, OFFLINE_MINIMUM_SECONDS, OFFLINE_STONE_INTERVAL
from .context import GameContext
from .engine import advance_travel
from .game import base_xp_rate, expire_buffs
from .models.state import GameState, LogKind
from .utils import format_number, format_time

log = logging.getLogger(__name__)


class OfflineReport(NamedTuple):
    elapsed: int
    xp_gained: float
    stones_gained: int

    @property
    def applied(self) -> bool:
        return self.elapsed > 0


def elapsed_offline(state: GameState, now: float) -> int:
    return int(min(max(0.0, now - state.last_save_timestamp), OFFLINE_CAP_SECONDS))


def catch_up(state: GameState, context: GameContext, now: float | None = None) -> OfflineReport:
    """Apply the effect of the seconds since ``state.last_save_timestamp``.

    Spans shorter than five seconds leave the state untouched.  Buffs and
    click boosts do not apply while away; the XP integral uses the rate the
    active path had when the game was saved.
    """

    now = context.now() if now is None else now
    elapsed = elapsed_offline(state, now)
    if elapsed < OFFLINE_MINIMUM_SECONDS:
        return OfflineReport(0, 0.0, 0)

    xp_gained = 0.0
    rate = base_xp_rate(state)
    progress = state.active_progress()
    if rate > 0 and progress is not None:
        before = progress.xp
        progress.add_xp(rate * elapsed)
        xp_gained = progress.xp - before

    state.qi_deviation.elapse(elapsed)
    expire_buffs(state, None, elapsed)
    if state.travel.traveling:
        advance_travel(state, context, elapsed)

    if xp_gained > 0:
        context.add_log(
            state,
            f"Offline progress: {format_time(elapsed)} - gained {format_number(xp_gained)} XP",
            LogKind.SYSTEM,
        )

    stones = elapsed // OFFLINE_STONE_INTERVAL
    if stones > 0:
        state.spirit_stones += stones
        context.add_log(state, f"Found {stones} Spirit Stones while away", LogKind.SYSTEM)

    state.last_save_timestamp = now
    state.total_play_time += elapsed
    log.info(
        "Offline catch-up applied: %ds, %.1f XP, %d stones", elapsed, xp_gained, stones
    )
    return OfflineReport(elapsed, xp_gained, stones)


__all__ = ["OfflineReport", "catch_up", "elapsed_offline"]
