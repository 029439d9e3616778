"""Environment driven configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .constants import AUTO_SAVE_INTERVAL
from .context import DEFAULT_SAVE_KEY


def env(name: str, default: str | None = None) -> str:
    value = os.getenv(name, default)
    if value is None:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from exc


def _float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(slots=True)
class GameConfig:
    tick_interval: float = 1.0
    autosave_interval: float = float(AUTO_SAVE_INTERVAL)
    strike_delay: float = 0.8
    data_root: Optional[Path] = None
    save_key: str = DEFAULT_SAVE_KEY
    seed: Optional[int] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "GameConfig":
        tick_interval = _float("GRAND_DAO_TICK_INTERVAL", 1.0)
        autosave_interval = _float("GRAND_DAO_AUTOSAVE_INTERVAL", float(AUTO_SAVE_INTERVAL))
        strike_delay = _float("GRAND_DAO_STRIKE_DELAY", 0.8)
        data_root = os.getenv("GRAND_DAO_DATA_ROOT")
        if tick_interval <= 0:
            raise RuntimeError("GRAND_DAO_TICK_INTERVAL must be positive")
        autosave_interval = max(tick_interval, autosave_interval)
        strike_delay = max(0.0, strike_delay)

        return cls(
            tick_interval=tick_interval,
            autosave_interval=autosave_interval,
            strike_delay=strike_delay,
            data_root=Path(data_root).expanduser() if data_root else None,
            save_key=env("GRAND_DAO_SAVE_KEY", DEFAULT_SAVE_KEY),
            seed=_optional_int("GRAND_DAO_SEED"),
            log_level=os.getenv("GRAND_DAO_LOG_LEVEL", "INFO").upper(),
        )


@dataclass(slots=True)
class BotConfig:
    token: str
    owner_id: Optional[int] = None

    @classmethod
    def from_env(cls) -> "BotConfig":
        return cls(token=env("DISCORD_TOKEN"), owner_id=_optional_int("GRAND_DAO_OWNER_ID"))


__all__ = ["BotConfig", "GameConfig", "env"]
