"""The one-second state transition that drives the whole simulation."""

from __future__ import annotations

import logging

from .constants import (
    BEAST_TAMER_CHANCE,
    BEAST_TAMER_REGION,
    CLICK_BOOST_MULTIPLIER,
    DEVIL_KARMA_THRESHOLD,
    DREAM_UNLOCK_CHANCE,
    KARMA_VISIBILITY_LEVEL,
)
from .context import GameContext
from .exploration import process_exploration
from .game import announce_ready, expire_buffs, record_highest_level, xp_per_second
from .models.map import discovery_set
from .models.progression import ActionType
from .models.state import GameState, LogKind
from .models.world import get_region
from .paths import check_path_unlocks, unlock_path
from .rng import rate_chance

log = logging.getLogger(__name__)


def arrive(state: GameState, context: GameContext) -> None:
    """Finish a journey: move to the destination and reveal its neighbours."""

    destination = state.travel.destination
    state.travel.clear()
    if destination is None:
        return
    state.location = destination
    state.discover(discovery_set(destination) or (destination,))
    region = get_region(destination)
    if region is not None:
        context.add_log(state, f"Arrived at {region.name}", LogKind.SUCCESS)
    log.debug("Arrived at %s", destination)


def advance_travel(state: GameState, context: GameContext, seconds: float) -> bool:
    """Count the journey down by ``seconds``; returns ``True`` on arrival."""

    state.travel.remaining_seconds -= seconds
    if state.travel.remaining_seconds <= 0:
        arrive(state, context)
        return True
    return False


def _accrue_xp(state: GameState, context: GameContext, click_boosted: bool) -> None:
    rate = xp_per_second(state)
    if rate <= 0:
        return
    if click_boosted:
        rate *= CLICK_BOOST_MULTIPLIER
    progress = state.active_progress()
    if progress is not None and progress.add_xp(rate):
        announce_ready(state, context, progress.path_key)


def _reveal_karma(state: GameState, context: GameContext) -> None:
    if state.karma_visible:
        return
    if any(progress.level >= KARMA_VISIBILITY_LEVEL for progress in state.path_progress.values()):
        state.karma_visible = True
        context.add_log(
            state, "Your karma becomes visible to your inner eye...", LogKind.LEGENDARY
        )


def apply_devil_mark(state: GameState, context: GameContext) -> None:
    """Open both corruption paths and brand the character once karma sinks low enough."""

    if state.character.karma > DEVIL_KARMA_THRESHOLD:
        return
    if unlock_path(
        state,
        context,
        "devil_soul",
        "Soul Corruption path unlocked! You are marked as a Devil Cultivator!",
    ):
        log.info("Devil mark applied to %s", state.character.name)
    unlock_path(state, context, "devil_body", "Body Corruption path unlocked!")
    state.character.devil_mark = True


def check_special_unlocks(state: GameState, context: GameContext) -> None:
    rng = context.rng
    if (
        state.current_action is ActionType.EXPLORE
        and state.location == BEAST_TAMER_REGION
        and not state.is_unlocked("beast_tamer")
        and rate_chance(rng, BEAST_TAMER_CHANCE * state.character.luck)
    ):
        unlock_path(
            state,
            context,
            "beast_tamer",
            "A spirit beast approaches! The Resonance Path is unlocked!",
        )

    if (
        state.current_action is ActionType.CULTIVATE
        and not state.is_unlocked("dream")
        and rate_chance(rng, DREAM_UNLOCK_CHANCE)
    ):
        unlock_path(
            state,
            context,
            "dream",
            "A lucid dream overtakes you... The Illusion Path is unlocked!",
        )

    if state.character.rogue_status and not state.is_unlocked("rogue"):
        unlock_path(state, context, "rogue", "The Wild Path opens before you!")

    apply_devil_mark(state, context)


def tick(state: GameState, context: GameContext, click_boosted: bool = False) -> GameState:
    """Advance ``state`` by one second of game time, in place.

    A tick that completes a journey does nothing else.  While still
    travelling, buffs, XP and exploration are all suspended.
    """

    state.tick_count += 1
    state.total_play_time += 1

    if state.travel.traveling:
        advance_travel(state, context, 1)
        return state

    expire_buffs(state, context, 1)

    if state.qi_deviation.elapse(1):
        context.add_log(
            state, "Qi Deviation has cleared. Your mind is calm again.", LogKind.SUCCESS
        )

    _accrue_xp(state, context, click_boosted)

    if state.current_action is ActionType.EXPLORE:
        process_exploration(state, context)

    _reveal_karma(state, context)
    record_highest_level(state)
    check_path_unlocks(state, context)
    check_special_unlocks(state, context)
    return state


__all__ = [
    "advance_travel",
    "apply_devil_mark",
    "arrive",
    "check_special_unlocks",
    "tick",
]
