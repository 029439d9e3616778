"""Death, rebirth and the legacy carried between lives."""

from __future__ import annotations

import logging
from dataclasses import replace

from .constants import LEGACY_RATE
from .context import GameContext
from .creation import create_initial_state, roll_character
from .models.state import GameState, InventoryEntry, LogKind

log = logging.getLogger(__name__)

FATE_ANCHOR = "fate_anchor"
DIMENSIONAL_RING = "dimensional_ring"


def legacy_gain(state: GameState) -> float:
    return state.highest_path_level * LEGACY_RATE


def rebirth(state: GameState, context: GameContext) -> GameState:
    """Build the next life from ``state``.

    The returned state is fresh; ``state`` itself is left as it was at death.
    A fate anchor keeps the rolled traits, a dimensional ring keeps the rest
    of the inventory.
    """

    old = state.character
    rebirth_count = old.rebirth_count + 1
    legacy_bonus = old.legacy_bonus + legacy_gain(state)

    if state.has_item(FATE_ANCHOR):
        character = replace(
            old,
            karma=0,
            rogue_status=False,
            redeemed_devil=False,
            rebirth_count=rebirth_count,
            legacy_bonus=legacy_bonus,
        )
    else:
        character = roll_character(context.rng, old.name)
        character.rebirth_count = rebirth_count
        character.legacy_bonus = legacy_bonus
        character.devil_mark = old.devil_mark

    preserved: list[InventoryEntry] = []
    if state.has_item(DIMENSIONAL_RING):
        preserved = [
            replace(entry) for entry in state.inventory if entry.item_key != DIMENSIONAL_RING
        ]

    reborn = create_initial_state(character, context)
    reborn.inventory = preserved
    reborn.total_deaths = state.total_deaths + 1
    reborn.achievements = list(state.achievements)
    context.add_log(
        reborn,
        f"REBIRTH #{rebirth_count}! Legacy Bonus: +{legacy_bonus * 100:.1f}% XP",
        LogKind.DANGER,
    )
    log.info(
        "Rebirth %d for %s (legacy %.2f, preserved %d items)",
        rebirth_count,
        character.name,
        legacy_bonus,
        len(preserved),
    )
    return reborn


__all__ = ["DIMENSIONAL_RING", "FATE_ANCHOR", "legacy_gain", "rebirth"]
