from __future__ import annotations

import asyncio
import base64
import json
import sys
from pathlib import Path

import pytest

PROJECT_BASE = Path(__file__).resolve().parents[1]
if str(PROJECT_BASE) not in sys.path:
    sys.path.insert(0, str(PROJECT_BASE))

from grand_dao.game import add_item
from grand_dao.models.state import ActiveBuff, GameState
from grand_dao.storage import SaveStore, _write_toml, resolve_storage_root


def _store(tmp_path: Path) -> SaveStore:
    return SaveStore(tmp_path, "slot", clock=lambda: 123.0)


def test_save_and_load_round_trip(tmp_path: Path, state: GameState) -> None:
    add_item(state, "basic_pill", 3)
    state.buffs.append(ActiveBuff("ss_boost", 5.0, 42.5, "Spirit Stone Boost"))
    state.character.name = 'Li "Quiet" Wei'
    state.pending_event = "traveler"
    store = _store(tmp_path)

    assert store.save(state)
    assert state.last_save_timestamp == 123.0
    assert store.path == tmp_path / "slot.toml"

    loaded = store.load()
    assert loaded is not None
    assert loaded.to_mapping() == state.to_mapping()
    assert loaded.tribulation is None


def test_write_toml_preserves_original_on_replace_failure(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    target = tmp_path / "slot.toml"
    _write_toml(target, {"spirit_stones": 1})
    original_contents = target.read_text(encoding="utf8")

    def _boom(src: Path, dst: Path) -> None:
        raise RuntimeError("simulated failure")

    monkeypatch.setattr("grand_dao.storage.os.replace", _boom)

    with pytest.raises(RuntimeError):
        _write_toml(target, {"spirit_stones": 2})

    assert target.read_text(encoding="utf8") == original_contents
    leftovers = [p for p in target.parent.iterdir() if p.name != "slot.toml"]
    assert leftovers == []


def test_missing_and_corrupt_saves_load_as_none(tmp_path: Path) -> None:
    store = _store(tmp_path)
    assert store.load() is None
    store.path.write_text("this is = = not toml", encoding="utf8")
    assert store.load() is None
    store.path.write_text('game_phase = "playing"\n', encoding="utf8")
    assert store.load() is None


def test_delete_is_idempotent(tmp_path: Path, state: GameState) -> None:
    store = _store(tmp_path)
    store.save(state)
    store.delete()
    assert not store.exists()
    store.delete()


def test_export_import_round_trip(tmp_path: Path, state: GameState) -> None:
    store = _store(tmp_path)
    state.spirit_stones = 77
    text = store.export_text(state)
    imported = store.import_text(text)
    assert imported is not None
    assert imported.spirit_stones == 77
    assert imported.character.name == state.character.name
    assert imported.last_save_timestamp == 123.0


@pytest.mark.parametrize("text", ["not base64 at all!", base64.b64encode(b"{oops").decode()])
def test_import_rejects_garbage(tmp_path: Path, text: str) -> None:
    assert _store(tmp_path).import_text(text) is None


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("travel", 5),
        ("qi_deviation", "calm"),
        ("active_path", ["martial"]),
        ("equipped_scripture", 3),
        ("group_membership", {"key": "azure_cloud_sect"}),
        ("pending_event", 1.5),
    ],
)
def test_import_rejects_mistyped_fields(
    tmp_path: Path, state: GameState, field: str, value: object
) -> None:
    payload = state.to_mapping()
    payload[field] = value
    text = base64.b64encode(json.dumps(payload).encode("utf8")).decode("ascii")
    assert _store(tmp_path).import_text(text) is None


def test_load_rejects_scalar_travel_table(tmp_path: Path, state: GameState) -> None:
    store = _store(tmp_path)
    payload = state.to_mapping()
    payload["travel"] = "oops"
    _write_toml(store.path, payload)
    assert store.load() is None


def test_import_requires_game_phase(tmp_path: Path, state: GameState) -> None:
    payload = state.to_mapping()
    del payload["game_phase"]
    text = base64.b64encode(json.dumps(payload).encode("utf8")).decode("ascii")
    assert _store(tmp_path).import_text(text) is None


def test_import_drops_unknown_items(tmp_path: Path, state: GameState) -> None:
    payload = state.to_mapping()
    payload["inventory"] = [
        {"item_key": "basic_pill", "quantity": 2},
        {"item_key": "moon_cake", "quantity": 1},
    ]
    text = base64.b64encode(json.dumps(payload).encode("utf8")).decode("ascii")
    imported = _store(tmp_path).import_text(text)
    assert imported is not None
    assert [entry.item_key for entry in imported.inventory] == ["basic_pill"]


def test_save_async_updates_timestamp(tmp_path: Path, state: GameState) -> None:
    store = _store(tmp_path)
    state.last_save_timestamp = 0.0
    assert asyncio.run(store.save_async(state))
    assert state.last_save_timestamp == 123.0
    loaded = asyncio.run(store.load_async())
    assert loaded is not None
    assert loaded.character.name == state.character.name


def test_resolve_storage_root_prefers_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    override = tmp_path / "custom"
    monkeypatch.setenv("GRAND_DAO_DATA_ROOT", str(override))

    result = resolve_storage_root(Path("/ignored/base"))

    assert result == override.resolve()


def test_resolve_storage_root_handles_site_packages(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("GRAND_DAO_DATA_ROOT", raising=False)
    package_root = tmp_path / "lib" / "python3.12" / "site-packages" / "grand_dao"
    package_root.mkdir(parents=True)

    working_dir = tmp_path / "runtime"
    working_dir.mkdir()
    monkeypatch.chdir(working_dir)

    result = resolve_storage_root(package_root)

    assert result == working_dir.resolve()


def test_resolve_storage_root_defaults_beside_sources(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("GRAND_DAO_DATA_ROOT", raising=False)
    package_root = tmp_path / "grand_dao"
    package_root.mkdir()

    result = resolve_storage_root(package_root)

    assert result == package_root / "saves"
