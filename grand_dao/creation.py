"""Character rolling and construction of a fresh game state."""

from __future__ import annotations

import random

from .context import GameContext
from .models.character import BACKGROUNDS, BODY_TYPES, SPIRIT_ROOTS, Character
from .models.map import discovery_set
from .models.state import GamePhase, GameState, InventoryEntry, LogKind, PathProgress
from .models.progression import ActionType
from .rng import random_pick, roll_luck, weighted_choice

STARTING_SCRIPTURE = "basic_scripture"


def roll_character(rng: random.Random, name: str) -> Character:
    """Roll spirit root, body, background and luck for a new cultivator.

    Background luck bonuses are folded into the rolled luck here, so a
    character carried through rebirth unchanged is not boosted twice.
    """

    root = weighted_choice(rng, SPIRIT_ROOTS, lambda option: option.probability)
    body = weighted_choice(rng, BODY_TYPES, lambda option: option.probability)
    background = random_pick(rng, tuple(BACKGROUNDS.values()))
    luck = roll_luck(rng) + background.bonus.hidden_luck + background.bonus.luck_bonus
    return Character(
        name=name.strip() or "Nameless",
        spirit_root=root,
        body_type=body,
        background=background,
        luck=min(1.0, luck),
    )


def reroll_cost(reroll_count: int) -> int:
    """Spirit stones needed for the next reroll; the first one is free."""

    if reroll_count <= 0:
        return 0
    return 10**reroll_count


def create_initial_state(character: Character, context: GameContext) -> GameState:
    background = character.background
    bonus = background.bonus
    state = GameState(
        character=character,
        path_progress={"martial": PathProgress("martial")},
        current_action=ActionType.IDLE,
        active_path="martial",
        spirit_stones=bonus.spirit_stones,
        location=background.start_location,
        discovered_regions=list(discovery_set(background.start_location)),
        last_save_timestamp=context.now(),
        game_phase=GamePhase.PLAYING,
    )
    if bonus.random_scripture:
        state.inventory.append(InventoryEntry(STARTING_SCRIPTURE))
        state.path_progress["spirit"] = PathProgress("spirit")

    context.add_log(state, "Your journey on the Grand Dao begins...", LogKind.SYSTEM)
    context.add_log(
        state,
        f"Spirit Root: {character.spirit_root.name} ({character.qi_multiplier}x)",
    )
    context.add_log(
        state,
        f"Body Type: {character.body_type.name} ({character.body_multiplier}x)",
    )
    context.add_log(state, f"Background: {background.name}")
    context.add_log(
        state,
        "Train to strengthen your body. Explore to find Scriptures and unlock Cultivation!",
        LogKind.SYSTEM,
    )
    return state


__all__ = [
    "STARTING_SCRIPTURE",
    "create_initial_state",
    "reroll_cost",
    "roll_character",
]
