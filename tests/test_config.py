from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_BASE = Path(__file__).resolve().parents[1]
if str(PROJECT_BASE) not in sys.path:
    sys.path.insert(0, str(PROJECT_BASE))

from grand_dao.config import BotConfig, GameConfig
from grand_dao.context import DEFAULT_SAVE_KEY

_VARIABLES = (
    "GRAND_DAO_TICK_INTERVAL",
    "GRAND_DAO_AUTOSAVE_INTERVAL",
    "GRAND_DAO_STRIKE_DELAY",
    "GRAND_DAO_DATA_ROOT",
    "GRAND_DAO_SAVE_KEY",
    "GRAND_DAO_SEED",
    "GRAND_DAO_LOG_LEVEL",
    "GRAND_DAO_OWNER_ID",
    "DISCORD_TOKEN",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARIABLES:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = GameConfig.from_env()
    assert config.tick_interval == 1.0
    assert config.autosave_interval == 30.0
    assert config.save_key == DEFAULT_SAVE_KEY
    assert config.seed is None
    assert config.data_root is None
    assert config.log_level == "INFO"


def test_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GRAND_DAO_TICK_INTERVAL", "0.5")
    monkeypatch.setenv("GRAND_DAO_AUTOSAVE_INTERVAL", "0.1")
    monkeypatch.setenv("GRAND_DAO_STRIKE_DELAY", "-3")
    monkeypatch.setenv("GRAND_DAO_DATA_ROOT", str(tmp_path))
    monkeypatch.setenv("GRAND_DAO_SAVE_KEY", "second_life")
    monkeypatch.setenv("GRAND_DAO_SEED", "42")
    monkeypatch.setenv("GRAND_DAO_LOG_LEVEL", "debug")

    config = GameConfig.from_env()

    assert config.tick_interval == 0.5
    # autosaves never run more often than ticks
    assert config.autosave_interval == 0.5
    assert config.strike_delay == 0.0
    assert config.data_root == tmp_path
    assert config.save_key == "second_life"
    assert config.seed == 42
    assert config.log_level == "DEBUG"


def test_rejects_non_positive_tick(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GRAND_DAO_TICK_INTERVAL", "0")
    with pytest.raises(RuntimeError):
        GameConfig.from_env()


def test_rejects_bad_seed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GRAND_DAO_SEED", "lucky")
    with pytest.raises(RuntimeError):
        GameConfig.from_env()


@pytest.mark.parametrize(
    "name",
    ["GRAND_DAO_TICK_INTERVAL", "GRAND_DAO_AUTOSAVE_INTERVAL", "GRAND_DAO_STRIKE_DELAY"],
)
def test_rejects_non_numeric_intervals(monkeypatch: pytest.MonkeyPatch, name: str) -> None:
    monkeypatch.setenv(name, "fast")
    with pytest.raises(RuntimeError, match=name):
        GameConfig.from_env()


def test_bot_requires_token(monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(RuntimeError):
        BotConfig.from_env()
    monkeypatch.setenv("DISCORD_TOKEN", "abc")
    monkeypatch.setenv("GRAND_DAO_OWNER_ID", "1234")
    config = BotConfig.from_env()
    assert config.token == "abc"
    assert config.owner_id == 1234
