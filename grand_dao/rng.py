"""Random draws and weighted selection helpers.

Every helper takes an explicit :class:`random.Random` so callers can seed or
script the stream.  Nothing here touches the module-level generator.
"""

from __future__ import annotations

import random
from typing import Callable, Sequence, TypeVar

from .models.world import Rarity

T = TypeVar("T")

LUCK_FLOOR = 0.1
LUCK_CEILING = 1.0
LUCK_SKEW = 2.5

# Base chance for each rarity bucket and how strongly luck inflates it,
# ordered from rarest to most common.
RARITY_THRESHOLDS: tuple[tuple[Rarity, float, float], ...] = (
    (Rarity.MYTHIC, 0.0001, 10.0),
    (Rarity.LEGENDARY, 0.001, 5.0),
    (Rarity.EPIC, 0.01, 3.0),
    (Rarity.RARE, 0.05, 2.0),
    (Rarity.UNCOMMON, 0.20, 1.0),
)


def weighted_choice(
    rng: random.Random, items: Sequence[T], probability_of: Callable[[T], float]
) -> T:
    """Pick from ``items`` whose probabilities sum to roughly one.

    The last item absorbs any rounding slack so a pick is always made.
    """

    if not items:
        raise ValueError("Cannot choose from an empty sequence")
    roll = rng.random()
    cumulative = 0.0
    for item in items:
        cumulative += probability_of(item)
        if roll <= cumulative:
            return item
    return items[-1]


def weighted_choice_by_weights(
    rng: random.Random, items: Sequence[T], weight_of: Callable[[T], float]
) -> T:
    """Pick from ``items`` using relative, non-negative weights.

    A uniform value in ``[0, total)`` is reduced by each weight in list order
    until it drops to zero or below.  Earlier entries win ties and the first
    entry is returned when every weight is zero.
    """

    if not items:
        raise ValueError("Cannot choose from an empty sequence")
    total = sum(max(0.0, weight_of(item)) for item in items)
    roll = rng.random() * total
    for item in items:
        roll -= max(0.0, weight_of(item))
        if roll <= 0:
            return item
    return items[0]


def roll_luck(rng: random.Random) -> float:
    value = rng.random() ** LUCK_SKEW
    return max(LUCK_FLOOR, min(LUCK_CEILING, value))


def random_int(rng: random.Random, low: int, high: int) -> int:
    """Return an integer in ``[low, high]`` inclusive."""

    if high < low:
        low, high = high, low
    return low + int(rng.random() * (high - low + 1))


def random_float(rng: random.Random, low: float, high: float) -> float:
    return low + rng.random() * (high - low)


def percent_chance(rng: random.Random, percent: float) -> bool:
    return rng.random() * 100 < percent


def rate_chance(rng: random.Random, rate: float) -> bool:
    return rng.random() < rate


def random_pick(rng: random.Random, items: Sequence[T]) -> T:
    if not items:
        raise ValueError("Cannot pick from an empty sequence")
    return items[int(rng.random() * len(items))]


def shuffled(rng: random.Random, items: Sequence[T]) -> list[T]:
    result = list(items)
    rng.shuffle(result)
    return result


def roll_rarity(rng: random.Random, luck: float) -> Rarity:
    """Bucket a single uniform draw into a rarity tier scaled by ``luck``."""

    luck_mod = luck * 0.5
    roll = rng.random()
    for rarity, base, scale in RARITY_THRESHOLDS:
        if roll < base * (1 + luck_mod * scale):
            return rarity
    return Rarity.COMMON


__all__ = [
    "random_float",
    "random_int",
    "random_pick",
    "percent_chance",
    "rate_chance",
    "roll_luck",
    "roll_rarity",
    "shuffled",
    "weighted_choice",
    "weighted_choice_by_weights",
]
