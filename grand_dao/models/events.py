"""Narrative events surfaced while exploring."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True, slots=True)
class EventChoice:
    text: str
    karma_change: int = 0
    stones_reward: int = 0
    stones_loss: int = 0
    item_rewards: tuple[str, ...] = ()
    time_penalty: int = 0


@dataclass(frozen=True, slots=True)
class GameEvent:
    key: str
    title: str
    description: str
    choices: tuple[EventChoice, ...]
    fated: bool = False

    def choice(self, index: int) -> EventChoice | None:
        if 0 <= index < len(self.choices):
            return self.choices[index]
        return None


_EVENT_LIST: tuple[GameEvent, ...] = (
    GameEvent(
        "traveler",
        "Fellow Traveler",
        "A fellow traveler asks for directions to the nearest town.",
        (
            EventChoice("Help them", karma_change=2, stones_reward=5),
            EventChoice("Ignore them"),
            EventChoice("Rob them", karma_change=-5, stones_reward=20),
        ),
    ),
    GameEvent(
        "herb_garden",
        "Wild Herb Garden",
        "You stumble upon a patch of wild spiritual herbs in a hidden glade.",
        (
            EventChoice("Gather herbs carefully", item_rewards=("common_herb", "common_herb")),
            EventChoice("Search for rare specimens", item_rewards=("uncommon_herb",)),
        ),
    ),
    GameEvent(
        "beast_encounter",
        "Beast Blocks the Path!",
        "A fierce spirit beast blocks your way, snarling with hostility.",
        (
            EventChoice("Fight!", stones_reward=10, item_rewards=("beast_fang",)),
            EventChoice("Flee!", time_penalty=30),
        ),
    ),
    GameEvent(
        "merchant_cart",
        "Broken Merchant Cart",
        "A merchant's cart has broken down on the road. They look desperate.",
        (
            EventChoice("Help repair it", karma_change=3, stones_reward=10),
            EventChoice(
                "Loot the cart",
                karma_change=-10,
                stones_reward=40,
                item_rewards=("uncommon_herb",),
            ),
        ),
    ),
    GameEvent(
        "strange_resonance",
        "Strange Resonance",
        "You feel a strange vibration underground. Something calls to you.",
        (
            EventChoice("Investigate carefully", stones_reward=20, item_rewards=("iron_ore",)),
            EventChoice("Leave it alone"),
        ),
    ),
    GameEvent(
        "dying_immortal",
        "Dying Immortal's Legacy",
        "A dying immortal appears before you, offering their life's technique!",
        (
            EventChoice(
                "Accept the technique reverently",
                karma_change=10,
                stones_reward=100,
                item_rewards=("epic_scripture",),
            ),
        ),
        fated=True,
    ),
    GameEvent(
        "secret_realm",
        "Secret Realm Entrance",
        "You discover a hidden entrance to an ancient secret realm!",
        (
            EventChoice(
                "Enter and explore",
                stones_reward=200,
                item_rewards=("legendary_treasure",),
            ),
        ),
        fated=True,
    ),
    GameEvent(
        "voice_offers_power",
        "Voice in the Darkness",
        'A sinister voice echoes: "I can grant you power beyond imagination... for a price."',
        (
            EventChoice("Accept the power", karma_change=-200, stones_reward=500),
            EventChoice("Refuse", karma_change=50, stones_reward=25),
        ),
        fated=True,
    ),
    GameEvent(
        "stars_align",
        "Stars Align",
        "The stars align and cosmic energy floods your meridians!",
        (EventChoice("Embrace the cosmic energy", stones_reward=150),),
        fated=True,
    ),
)

GAME_EVENTS: Mapping[str, GameEvent] = MappingProxyType(
    {event.key: event for event in _EVENT_LIST}
)

FATED_EVENTS: tuple[GameEvent, ...] = tuple(event for event in _EVENT_LIST if event.fated)


def get_event(key: str | None) -> GameEvent | None:
    if key is None:
        return None
    return GAME_EVENTS.get(key)


__all__ = [
    "EventChoice",
    "FATED_EVENTS",
    "GAME_EVENTS",
    "GameEvent",
    "get_event",
]
