"""State helpers shared by the tick engine, commands and catch-up code."""

from __future__ import annotations

import math
from typing import Iterable, Optional

from .constants import BASE_XP_PER_SECOND, DEVIATION_XP_FACTOR
from .context import GameContext
from .models.progression import ActionType, get_path
from .models.state import ActiveBuff, GameState, InventoryEntry, LogKind
from .models.world import ITEMS, Item
from .paths import path_speed


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------


def add_item(state: GameState, item_key: str, quantity: int = 1) -> InventoryEntry:
    """Add ``quantity`` of ``item_key``; stackable items merge into one entry."""

    item = ITEMS[item_key]
    if item.stackable:
        existing = state.inventory_entry(item_key)
        if existing is not None:
            existing.quantity += quantity
            return existing
    entry = InventoryEntry(item_key, quantity)
    state.inventory.append(entry)
    return entry


def remove_item(state: GameState, item_key: str, quantity: int = 1) -> bool:
    entry = state.inventory_entry(item_key)
    if entry is None:
        return False
    entry.quantity -= quantity
    if entry.quantity <= 0:
        state.inventory.remove(entry)
    return True


def held_items(state: GameState) -> Iterable[Item]:
    return (entry.item for entry in state.inventory)


def tribulation_hp_bonus(state: GameState) -> float:
    return sum(item.effects.tribulation_hp_bonus for item in held_items(state))


def breakthrough_pill_bonus(state: GameState) -> float:
    """Total breakthrough bonus carried across every held pill."""

    return sum(
        entry.item.effects.breakthrough_bonus * entry.quantity
        for entry in state.inventory
        if entry.item.effects.breakthrough_bonus > 0
    )


def consume_breakthrough_pills(state: GameState) -> float:
    bonus = breakthrough_pill_bonus(state)
    state.inventory = [
        entry for entry in state.inventory if entry.item.effects.breakthrough_bonus <= 0
    ]
    return bonus


# ---------------------------------------------------------------------------
# Buffs
# ---------------------------------------------------------------------------


def buff_multiplier(state: GameState) -> float:
    return math.prod(buff.multiplier for buff in state.buffs)


def expire_buffs(state: GameState, context: Optional[GameContext], seconds: float) -> list[ActiveBuff]:
    """Count every buff down by ``seconds`` and drop those that run out."""

    expired: list[ActiveBuff] = []
    remaining: list[ActiveBuff] = []
    for buff in state.buffs:
        buff.remaining_seconds -= seconds
        if buff.remaining_seconds <= 0:
            expired.append(buff)
        else:
            remaining.append(buff)
    state.buffs = remaining
    if context is not None:
        for buff in expired:
            context.add_log(state, f"{buff.label or buff.key} has expired.")
    return expired


def count_buffs(state: GameState, key: str) -> int:
    return sum(1 for buff in state.buffs if buff.key == key)


# ---------------------------------------------------------------------------
# Experience
# ---------------------------------------------------------------------------


def action_feeds_path(action: ActionType, path_key: str) -> bool:
    path = get_path(path_key)
    if path is None or not action.accrues_xp:
        return False
    return path.action is action


def scripture_multiplier(state: GameState) -> float:
    if state.current_action is not ActionType.CULTIVATE or state.equipped_scripture is None:
        return 1.0
    scripture = ITEMS.get(state.equipped_scripture)
    if scripture is None or not scripture.effects.xp_multiplier:
        return 1.0
    return scripture.effects.xp_multiplier


def base_xp_rate(state: GameState) -> float:
    """Per-second XP before buffs, scripture and click boost.

    Zero whenever the current action cannot feed the active path.
    """

    progress = state.active_progress()
    if progress is None or not progress.accepts_xp:
        return 0.0
    if not action_feeds_path(state.current_action, progress.path_key):
        return 0.0
    deviation = DEVIATION_XP_FACTOR if state.qi_deviation.active else 1.0
    legacy = 1 + state.character.legacy_bonus
    return BASE_XP_PER_SECOND * path_speed(state, progress.path_key) * deviation * legacy


def xp_per_second(state: GameState) -> float:
    return base_xp_rate(state) * buff_multiplier(state) * scripture_multiplier(state)


def record_highest_level(state: GameState) -> int:
    levels = [progress.level for progress in state.unlocked_paths()]
    state.highest_path_level = max([state.highest_path_level, *levels])
    return state.highest_path_level


def announce_ready(state: GameState, context: GameContext, path_key: str) -> None:
    progress = state.path_progress[path_key]
    path = get_path(path_key)
    name = path.level_name(progress.level) if path else f"Level {progress.level}"
    context.add_log(state, f"{name} XP maxed! Attempt Breakthrough!", LogKind.WARNING)


__all__ = [
    "action_feeds_path",
    "add_item",
    "announce_ready",
    "base_xp_rate",
    "breakthrough_pill_bonus",
    "buff_multiplier",
    "consume_breakthrough_pills",
    "count_buffs",
    "expire_buffs",
    "held_items",
    "record_highest_level",
    "remove_item",
    "scripture_multiplier",
    "tribulation_hp_bonus",
    "xp_per_second",
]
