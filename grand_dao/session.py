"""Cooperative scheduler that owns a live :class:`GameState`.

Ticks, autosaves, player commands and tribulation strike timers all run on
one event loop and take the same lock before touching the state, so no
mutation ever interleaves with another.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, Callable, Optional

from .commands import CommandResult
from .config import GameConfig
from .context import GameContext
from .creation import create_initial_state, roll_character
from .engine import tick
from .models.state import GamePhase, GameState
from .offline import OfflineReport, catch_up
from .storage import SaveStore
from .tribulation import TribulationPhase, current_tribulation, fail_strike, open_strike

log = logging.getLogger(__name__)

FIRST_STRIKE_DELAY = 1.0

Command = Callable[..., CommandResult]


class GameSession:
    def __init__(
        self,
        state: GameState,
        context: GameContext,
        store: SaveStore,
        config: GameConfig | None = None,
    ) -> None:
        self.state = state
        self.context = context
        self.store = store
        self.config = config or GameConfig()
        self.offline_report: Optional[OfflineReport] = None
        self._lock = asyncio.Lock()
        self._strike_event = asyncio.Event()
        self._loops: list[asyncio.Task[None]] = []
        self._strike_task: Optional[asyncio.Task[None]] = None
        self._click_pending = False
        self._caught_up = False

    @classmethod
    def open(
        cls,
        store: SaveStore,
        config: GameConfig | None = None,
        *,
        name: str = "",
        context: GameContext | None = None,
    ) -> "GameSession":
        """Resume the stored save, or roll a new cultivator if there is none."""

        config = config or GameConfig()
        context = context or GameContext.seeded(config.seed, save_key=store.save_key)
        state = store.load()
        if state is None:
            character = roll_character(context.rng, name)
            state = create_initial_state(character, context)
            state.last_save_timestamp = context.now()
            log.info("Created a new cultivator: %s", character.name)
        return cls(state, context, store, config)

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._loops)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> Optional[OfflineReport]:
        if self.running:
            return self.offline_report
        async with self._lock:
            self.context.resume_log_ids(self.state)
            if not self._caught_up:
                self.offline_report = catch_up(self.state, self.context)
                self._caught_up = True
            self.state.game_phase = GamePhase.PLAYING
        self._loops = [
            asyncio.create_task(self._tick_loop(), name="grand-dao-tick"),
            asyncio.create_task(self._autosave_loop(), name="grand-dao-autosave"),
        ]
        log.info("Session started for %s", self.state.character.name)
        return self.offline_report

    async def stop(self) -> bool:
        tasks = [task for task in self._loops if not task.done()]
        if self._strike_task is not None and not self._strike_task.done():
            tasks.append(self._strike_task)
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._loops = []
        self._strike_task = None
        saved = await self.save()
        log.info("Session stopped for %s", self.state.character.name)
        return saved

    async def save(self) -> bool:
        async with self._lock:
            snapshot = self.state.copy()
        saved = await self.store.save_async(snapshot)
        if saved:
            self.state.last_save_timestamp = snapshot.last_save_timestamp
        return saved

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    async def snapshot(self) -> GameState:
        async with self._lock:
            return self.state.copy()

    def click(self) -> None:
        """Double the XP of the next tick."""

        self._click_pending = True

    async def run_command(self, command: Command, *args: Any, **kwargs: Any) -> CommandResult:
        async with self._lock:
            result = command(self.state, self.context, *args, **kwargs)
            self._sync_strikes()
        return result

    async def tick_once(self) -> None:
        async with self._lock:
            if self.state.game_phase is not GamePhase.PLAYING:
                return
            boosted, self._click_pending = self._click_pending, False
            tick(self.state, self.context, click_boosted=boosted)

    # ------------------------------------------------------------------
    # Loops
    # ------------------------------------------------------------------

    async def _tick_loop(self) -> None:
        while True:
            await asyncio.sleep(self.config.tick_interval)
            await self.tick_once()

    async def _autosave_loop(self) -> None:
        while True:
            await asyncio.sleep(self.config.autosave_interval)
            await self.save()

    # ------------------------------------------------------------------
    # Tribulation strikes
    # ------------------------------------------------------------------

    def _sync_strikes(self) -> None:
        """Start or cancel the strike timer to match the state; lock must be held."""

        tribulation = current_tribulation(self.state)
        task = self._strike_task
        if tribulation is None:
            if task is not None and not task.done():
                task.cancel()
            self._strike_task = None
        elif task is None or task.done():
            self._strike_task = asyncio.create_task(
                self._run_strikes(tribulation.id), name=f"grand-dao-tribulation-{tribulation.id}"
            )
        self._strike_event.set()

    def _strike_open(self, tribulation_id: int, strike: int) -> bool:
        tribulation = current_tribulation(self.state)
        return (
            tribulation is not None
            and tribulation.matches(tribulation_id, strike)
            and tribulation.phase is TribulationPhase.STRIKING
        )

    async def _await_window(self, tribulation_id: int, strike: int, window: float) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + window
        while True:
            remaining = deadline - loop.time()
            if remaining <= 0:
                return
            self._strike_event.clear()
            try:
                await asyncio.wait_for(self._strike_event.wait(), remaining)
            except asyncio.TimeoutError:
                return
            async with self._lock:
                if not self._strike_open(tribulation_id, strike):
                    return

    async def _run_strikes(self, tribulation_id: int) -> None:
        delay = FIRST_STRIKE_DELAY
        while True:
            await asyncio.sleep(delay)
            async with self._lock:
                tribulation = current_tribulation(self.state)
                if tribulation is None or tribulation.id != tribulation_id:
                    return
                if not open_strike(self.state, tribulation_id):
                    return
                strike = tribulation.current_strike
                window = tribulation.window

            await self._await_window(tribulation_id, strike, window)

            async with self._lock:
                result = fail_strike(self.state, self.context, tribulation_id, strike)
                log.debug("Strike %d of tribulation %d: %s", strike, tribulation_id, result.outcome.value)
                if current_tribulation(self.state) is None:
                    self._strike_task = None
                    return
            delay = self.config.strike_delay


__all__ = ["FIRST_STRIKE_DELAY", "GameSession"]
