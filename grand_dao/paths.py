"""Behaviour attached to path definitions.

Path definitions in :mod:`grand_dao.models.progression` are plain data.  The
speed modifier and unlock predicate for each path live here in dispatch tables
keyed by path id, so both can be exercised against a bare :class:`GameState`.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Callable, Mapping

from .context import GameContext
from .models.character import Character
from .models.map import touches_realm
from .models.progression import PATHS
from .models.state import GameState, LogKind, PathProgress
from .models.world import ItemCategory, Realm

log = logging.getLogger(__name__)

SpeedModifier = Callable[[GameState], float]
UnlockPredicate = Callable[[GameState], bool]

# Paths that only open through chance rolls or flags evaluated in the tick.
SPECIAL_UNLOCK_PATHS: frozenset[str] = frozenset(
    {"beast_tamer", "dream", "rogue", "devil_soul", "devil_body"}
)


def _qi(character: Character) -> float:
    return character.qi_multiplier + character.qi_bonus


def _holds(state: GameState, *item_keys: str) -> bool:
    return all(state.has_item(key) for key in item_keys)


SPEED_MODIFIERS: Mapping[str, SpeedModifier] = MappingProxyType(
    {
        "spirit": lambda s: _qi(s.character),
        "martial": lambda s: s.character.body_multiplier,
        "rogue": lambda s: _qi(s.character) * 0.8,
        "devil_soul": lambda s: _qi(s.character) * 1.2,
        "devil_body": lambda s: s.character.body_multiplier * 1.2,
        "alchemy": lambda s: s.character.qi_multiplier * 0.5 + 0.5,
        "formations": lambda s: s.character.qi_multiplier * 0.5 + 0.5,
        "beast_tamer": lambda s: (s.character.qi_multiplier + s.character.body_multiplier) * 0.5,
        "artificer": lambda s: s.character.body_multiplier * 0.5 + 0.5,
        "oracle": lambda s: s.character.qi_multiplier * 0.7 + s.character.luck * 0.5,
        "harmonic": lambda s: s.character.qi_multiplier * 0.8,
        "scholar": lambda s: s.character.qi_multiplier * 0.6 + 0.4,
        "bloodline": lambda s: s.character.body_multiplier * 0.6,
        "dream": lambda s: s.character.qi_multiplier * 0.7,
        "necromancy": lambda s: s.character.qi_multiplier * 0.9,
    }
)


UNLOCK_PREDICATES: Mapping[str, UnlockPredicate] = MappingProxyType(
    {
        "spirit": lambda s: s.equipped_scripture is not None
        or any(entry.item.category is ItemCategory.SCRIPTURE for entry in s.inventory),
        "martial": lambda s: True,
        "rogue": lambda s: s.character.rogue_status,
        "devil_soul": lambda s: s.character.karma <= -100,
        "devil_body": lambda s: s.character.karma <= -100,
        "alchemy": lambda s: _holds(s, "alchemy_manual"),
        "formations": lambda s: _holds(s, "formation_blueprint"),
        "beast_tamer": lambda s: False,
        "artificer": lambda s: _holds(s, "artificer_blueprint"),
        "oracle": lambda s: s.karma_visible and _holds(s, "divination_manual"),
        "harmonic": lambda s: _holds(s, "harmonic_scripture", "musical_instrument"),
        "scholar": lambda s: _holds(s, "ancient_text"),
        "bloodline": lambda s: s.character.body_multiplier >= 1.5
        or _holds(s, "bloodline_elixir"),
        "dream": lambda s: False,
        "necromancy": lambda s: touches_realm(s.discovered_regions, Realm.UNDERWORLD)
        or _holds(s, "book_of_the_dead"),
    }
)


def path_speed(state: GameState, path_key: str) -> float:
    return SPEED_MODIFIERS[path_key](state)


def can_unlock(state: GameState, path_key: str) -> bool:
    return UNLOCK_PREDICATES[path_key](state)


def unlock_path(
    state: GameState,
    context: GameContext,
    path_key: str,
    message: str | None = None,
) -> bool:
    """Open ``path_key`` at level one; returns ``False`` if it was already open."""

    if state.is_unlocked(path_key):
        return False
    path = PATHS[path_key]
    state.path_progress[path_key] = PathProgress(path_key)
    context.add_log(
        state, message or f"New Path Unlocked: {path.name}!", LogKind.LEGENDARY
    )
    log.info("Path %s unlocked", path_key)
    return True


def check_path_unlocks(state: GameState, context: GameContext) -> list[str]:
    """Evaluate every ordinary unlock predicate and open the paths that pass."""

    unlocked: list[str] = []
    for key in PATHS:
        if key in SPECIAL_UNLOCK_PATHS or state.is_unlocked(key):
            continue
        if can_unlock(state, key) and unlock_path(state, context, key):
            unlocked.append(key)
    return unlocked


__all__ = [
    "SPECIAL_UNLOCK_PATHS",
    "SPEED_MODIFIERS",
    "UNLOCK_PREDICATES",
    "can_unlock",
    "check_path_unlocks",
    "path_speed",
    "unlock_path",
]
