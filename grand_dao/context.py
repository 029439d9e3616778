"""Per-session collaborators passed into every simulation function."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from itertools import count
from typing import Callable, Iterator, Optional

from .models.state import GameState, LogEntry, LogKind

DEFAULT_SAVE_KEY = "incremental_cultivation_save"


def _wall_clock() -> float:
    return time.time()


@dataclass(slots=True)
class GameContext:
    """Randomness, time and narration bookkeeping for one play session.

    ``clock`` returns seconds since the epoch.  Log ids come from a counter
    owned by the context so two sessions never share numbering.
    """

    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], float] = _wall_clock
    save_key: str = DEFAULT_SAVE_KEY
    _log_ids: Iterator[int] = field(default_factory=lambda: count(1), repr=False)
    _tribulation_ids: Iterator[int] = field(default_factory=lambda: count(1), repr=False)

    @classmethod
    def seeded(cls, seed: Optional[int], **kwargs) -> "GameContext":
        return cls(rng=random.Random(seed), **kwargs)

    def now(self) -> float:
        return self.clock()

    def next_log_id(self) -> int:
        return next(self._log_ids)

    def next_tribulation_id(self) -> int:
        return next(self._tribulation_ids)

    def resume_log_ids(self, state: GameState) -> None:
        """Continue numbering after the newest entry already in ``state``."""

        highest = max((entry.id for entry in state.event_log), default=0)
        self._log_ids = count(highest + 1)

    def add_log(self, state: GameState, text: str, kind: LogKind = LogKind.INFO) -> LogEntry:
        entry = LogEntry(self.next_log_id(), text, kind, self.now())
        state.push_log(entry)
        return entry


__all__ = ["DEFAULT_SAVE_KEY", "GameContext"]
