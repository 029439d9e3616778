"""Exploration rolls: stone trickle, loot discovery and narrative events."""

from __future__ import annotations

import logging
from typing import Optional

from .constants import (
    BASE_DISCOVERY_RATE,
    EVENT_CHECK_INTERVAL,
    FATED_ENCOUNTER_BASE_CHANCE,
    FATED_LUCK_WEIGHT,
    LUCK_DISCOVERY_WEIGHT,
    ROGUE_DISCOVERY_BONUS,
    STONE_TRICKLE_CHANCE,
    STONE_TRICKLE_LOG_CHANCE,
)
from .context import GameContext
from .game import add_item
from .models.events import FATED_EVENTS, GameEvent, get_event
from .models.state import GameState, LogKind
from .models.world import ITEMS, Item, LootEntry, Rarity, Region, get_region
from .paths import check_path_unlocks
from .rng import random_int, random_pick, rate_chance, weighted_choice_by_weights

log = logging.getLogger(__name__)

_RARITY_LOG_KIND = {
    Rarity.MYTHIC: LogKind.LEGENDARY,
    Rarity.LEGENDARY: LogKind.LEGENDARY,
    Rarity.EPIC: LogKind.SUCCESS,
    Rarity.RARE: LogKind.SUCCESS,
}


def discovery_chance(state: GameState) -> float:
    character = state.character
    chance = BASE_DISCOVERY_RATE + character.luck * LUCK_DISCOVERY_WEIGHT
    chance += character.background.bonus.exploration_bonus
    if character.rogue_status:
        chance += ROGUE_DISCOVERY_BONUS
    return chance


def fated_chance(state: GameState) -> float:
    return FATED_ENCOUNTER_BASE_CHANCE * (1 + state.character.luck * FATED_LUCK_WEIGHT)


def pick_loot(context: GameContext, region: Region) -> Optional[LootEntry]:
    eligible = region.eligible_loot()
    if not eligible:
        return None
    return weighted_choice_by_weights(context.rng, eligible, lambda entry: entry.weight)


def grant_item(state: GameState, context: GameContext, item: Item) -> None:
    """Give ``item`` to the player; pouches pay out stones instead of taking a slot."""

    if item.stone_range is not None:
        low, high = item.stone_range
        amount = random_int(context.rng, low, high)
        state.spirit_stones += amount
        kind = LogKind.LEGENDARY if item.rarity is not Rarity.COMMON else LogKind.SUCCESS
        context.add_log(state, f"Found {amount} Spirit Stones!", kind)
        return
    add_item(state, item.key)
    context.add_log(state, f"Found: {item.name}", _RARITY_LOG_KIND.get(item.rarity, LogKind.INFO))
    check_path_unlocks(state, context)


def _stone_trickle(state: GameState, context: GameContext) -> None:
    if not rate_chance(context.rng, STONE_TRICKLE_CHANCE):
        return
    amount = random_int(context.rng, 1, 3)
    state.spirit_stones += amount
    if rate_chance(context.rng, STONE_TRICKLE_LOG_CHANCE):
        plural = "s" if amount > 1 else ""
        context.add_log(state, f"Found {amount} Spirit Stone{plural} while exploring.")


def _fated_encounter(state: GameState, context: GameContext, region: Region) -> Optional[GameEvent]:
    if not rate_chance(context.rng, fated_chance(state)):
        return None
    local = tuple(event for event in FATED_EVENTS if event.key in region.event_pool)
    pool = local or FATED_EVENTS
    if not pool:
        return None
    return random_pick(context.rng, pool)


def _scheduled_event(state: GameState, context: GameContext, region: Region) -> Optional[GameEvent]:
    if state.tick_count % EVENT_CHECK_INTERVAL != 0 or not region.event_pool:
        return None
    event = get_event(random_pick(context.rng, region.event_pool))
    if event is None or event.fated:
        return None
    return event


def process_exploration(state: GameState, context: GameContext) -> None:
    """Run one tick of exploration in the current region.

    The trickle, loot and fated rolls are drawn in that order every tick.  A
    pending event blocks any further event from being queued.
    """

    region = get_region(state.location)
    if region is None:
        return

    _stone_trickle(state, context)

    if rate_chance(context.rng, discovery_chance(state)):
        entry = pick_loot(context, region)
        item = ITEMS.get(entry.item_key) if entry else None
        if item is not None:
            grant_item(state, context, item)

    fated = _fated_encounter(state, context, region)
    if fated is not None and state.pending_event is None:
        state.pending_event = fated.key
        log.info("Fated encounter %s queued in %s", fated.key, region.key)

    if state.pending_event is None:
        event = _scheduled_event(state, context, region)
        if event is not None:
            state.pending_event = event.key
            log.debug("Event %s queued in %s", event.key, region.key)


__all__ = [
    "discovery_chance",
    "fated_chance",
    "grant_item",
    "pick_loot",
    "process_exploration",
]
