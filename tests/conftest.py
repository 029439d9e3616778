from __future__ import annotations

import random
import sys
from pathlib import Path
from typing import Callable, Iterable

import pytest

PROJECT_BASE = Path(__file__).resolve().parents[1]
if str(PROJECT_BASE) not in sys.path:
    sys.path.insert(0, str(PROJECT_BASE))

from grand_dao.context import GameContext
from grand_dao.creation import create_initial_state
from grand_dao.models.character import BACKGROUNDS, Character, body_type, spirit_root
from grand_dao.models.state import GameState


class ScriptedRandom(random.Random):
    """Returns queued values from ``random()`` and ``default`` once they run out."""

    def __init__(self, values: Iterable[float] = (), default: float = 0.99) -> None:
        super().__init__(0)
        self.values = list(values)
        self.default = default

    def queue(self, *values: float) -> None:
        self.values.extend(values)

    def random(self) -> float:
        if self.values:
            return self.values.pop(0)
        return self.default


class FakeClock:
    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rng() -> ScriptedRandom:
    return ScriptedRandom()


@pytest.fixture
def context(rng: ScriptedRandom, clock: FakeClock) -> GameContext:
    return GameContext(rng=rng, clock=clock)


@pytest.fixture
def make_character() -> Callable[..., Character]:
    def _make(
        background: str = "village_orphan",
        *,
        root: str = "Earth Root",
        body: str = "Vajra Body",
        luck: float = 0.5,
        **overrides: object,
    ) -> Character:
        return Character(
            name="Tester",
            spirit_root=spirit_root(root),
            body_type=body_type(body),
            background=BACKGROUNDS[background],
            luck=luck,
            **overrides,  # type: ignore[arg-type]
        )

    return _make


@pytest.fixture
def make_state(
    context: GameContext, make_character: Callable[..., Character]
) -> Callable[..., GameState]:
    def _make(background: str = "village_orphan", **character_overrides: object) -> GameState:
        return create_initial_state(make_character(background, **character_overrides), context)

    return _make


@pytest.fixture
def state(make_state: Callable[..., GameState]) -> GameState:
    return make_state()
