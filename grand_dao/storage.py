"""Save persistence for a single cultivator.

Saves live as TOML documents under the storage root, one file per save key.
Writes go through a temporary file and ``os.replace`` so an interrupted write
never leaves a truncated save behind.  The text export is a base64 wrapped
JSON document that can be pasted between machines.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import json
import logging
import math
import os
import tempfile
import time
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

import tomllib

from .context import DEFAULT_SAVE_KEY
from .models._validation import ModelValidationError
from .models.state import GameState

log = logging.getLogger(__name__)

_SAVE_LOCK = asyncio.Lock()


def _is_site_packages(path: Path) -> bool:
    """Return ``True`` if ``path`` is inside a site/dist-packages directory."""

    normalized = {part.lower() for part in path.parts}
    return "site-packages" in normalized or "dist-packages" in normalized


def resolve_storage_root(package_root: Path) -> Path:
    """Determine where save files should be written.

    ``GRAND_DAO_DATA_ROOT`` wins when set.  An installed package, or one
    that cannot be written to, saves into the current working directory.
    Otherwise saves sit in ``saves/`` beside the source tree.
    """

    override = os.getenv("GRAND_DAO_DATA_ROOT")
    if override:
        return Path(override).expanduser().resolve()

    if _is_site_packages(package_root) or not os.access(package_root, os.W_OK):
        return Path.cwd().resolve()

    return package_root / "saves"


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------


def _normalize_for_toml(value: Any) -> Any:
    if isinstance(value, MappingProxyType):
        value = dict(value)
    if isinstance(value, Mapping):
        normalized: Dict[str, Any] = {}
        for key, item in value.items():
            if item is None:
                continue
            normalized[str(key)] = _normalize_for_toml(item)
        return normalized
    if isinstance(value, (set, frozenset)):
        return sorted(_normalize_for_toml(item) for item in value if item is not None)
    if isinstance(value, (list, tuple)):
        return [_normalize_for_toml(item) for item in value if item is not None]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0.0
        return value
    if isinstance(value, (str, int, bool)):
        return value
    return str(value)


def _quote_string(value: str) -> str:
    replacements = {
        "\\": "\\\\",
        '"': '\\"',
        "\b": "\\b",
        "\t": "\\t",
        "\n": "\\n",
        "\f": "\\f",
        "\r": "\\r",
    }

    def _escape_char(char: str) -> str:
        if char in replacements:
            return replacements[char]
        code = ord(char)
        if 0x20 <= code <= 0x7E:
            return char
        if code > 0xFFFF:
            return f"\\U{code:08x}"
        return f"\\u{code:04x}"

    return '"' + "".join(_escape_char(char) for char in value) + '"'


def _format_key(key: str) -> str:
    if key and all(char.isalnum() or char in "_-" for char in key) and key.isascii():
        return key
    return _quote_string(key)


def _format_toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        # Keep a decimal point so floats survive the round trip as floats.
        text = repr(value)
        if "e" not in text and "." not in text:
            text += ".0"
        return text
    if isinstance(value, str):
        return _quote_string(value)
    if isinstance(value, list):
        return "[" + ", ".join(_format_toml_value(item) for item in value) + "]"
    if isinstance(value, Mapping):
        return (
            "{"
            + ", ".join(
                f"{_format_key(key)} = {_format_toml_value(item)}" for key, item in value.items()
            )
            + "}"
        )
    return _quote_string(str(value))


def _serialize_table(
    data: Mapping[str, Any],
    *,
    parent: tuple[str, ...] = (),
    output: list[str],
) -> None:
    simple_items: list[tuple[str, Any]] = []
    tables: list[tuple[str, Mapping[str, Any]]] = []
    array_tables: list[tuple[str, list[Mapping[str, Any]]]] = []

    for key, value in data.items():
        if isinstance(value, Mapping):
            tables.append((key, value))
        elif isinstance(value, list) and value and all(
            isinstance(item, Mapping) for item in value
        ):
            array_tables.append((key, value))
        else:
            simple_items.append((key, value))

    for key, value in sorted(simple_items, key=lambda item: item[0]):
        output.append(f"{_format_key(key)} = {_format_toml_value(value)}")

    for key, value in sorted(tables, key=lambda item: item[0]):
        header = ".".join(_format_key(part) for part in (*parent, key))
        if output and output[-1] != "":
            output.append("")
        output.append(f"[{header}]")
        _serialize_table(value, parent=(*parent, key), output=output)

    for key, items in sorted(array_tables, key=lambda item: item[0]):
        header = ".".join(_format_key(part) for part in (*parent, key))
        for item in items:
            if output and output[-1] != "":
                output.append("")
            output.append(f"[[{header}]]")
            # Nested tables inside an array entry are written inline.
            for name, value in sorted(item.items(), key=lambda entry: entry[0]):
                output.append(f"{_format_key(name)} = {_format_toml_value(value)}")


def _toml_dumps(data: Mapping[str, Any]) -> str:
    normalized = _normalize_for_toml(data)
    if not isinstance(normalized, Mapping):
        raise TypeError("Top level TOML document must be a mapping")
    output: list[str] = []
    _serialize_table(normalized, output=output)
    return "\n".join(output) + "\n"


def _read_toml(path: Path) -> Any:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (FileNotFoundError, tomllib.TOMLDecodeError, OSError):
        return None


def _write_toml(path: Path, payload: Mapping[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path: Path | None = None
    data = _toml_dumps(payload)
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf8", dir=path.parent, delete=False
        ) as handle:
            temp_path = Path(handle.name)
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_path, path)
        temp_path = None
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink()
            except FileNotFoundError:
                pass


def _rebuild(payload: Any, source: str) -> Optional[GameState]:
    try:
        return GameState.from_mapping(payload)
    except ModelValidationError as exc:
        log.warning("Rejected %s: %s", source, exc)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        log.warning("Rejected %s: malformed payload (%s)", source, exc)
    return None


# ---------------------------------------------------------------------------
# Save store
# ---------------------------------------------------------------------------


class SaveStore:
    """Load, save, export and import a single save slot."""

    def __init__(
        self,
        root: Path | None = None,
        save_key: str = DEFAULT_SAVE_KEY,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        package_root = Path(__file__).resolve().parent.parent
        self.root = Path(root) if root is not None else resolve_storage_root(package_root)
        self.save_key = save_key
        self._clock = clock

    @property
    def path(self) -> Path:
        return self.root / f"{self.save_key}.toml"

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, state: GameState) -> bool:
        state.last_save_timestamp = self._clock()
        try:
            _write_toml(self.path, state.to_mapping())
        except OSError as exc:
            log.error("Failed to write save %s: %s", self.path, exc)
            return False
        log.debug("Saved %s", self.path)
        return True

    def load(self) -> Optional[GameState]:
        payload = _read_toml(self.path)
        if payload is None:
            if self.exists():
                log.warning("Save %s could not be decoded", self.path)
            return None
        state = _rebuild(payload, f"save {self.path}")
        if state is not None:
            log.info("Loaded save for %s", state.character.name)
        return state

    def delete(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            return
        log.info("Deleted save %s", self.path)

    def export_text(self, state: GameState) -> str:
        state.last_save_timestamp = self._clock()
        document = json.dumps(state.to_mapping(), ensure_ascii=False, separators=(",", ":"))
        return base64.b64encode(document.encode("utf8")).decode("ascii")

    def import_text(self, text: str) -> Optional[GameState]:
        try:
            raw = base64.b64decode(text.strip().encode("ascii"), validate=True)
            payload = json.loads(raw.decode("utf8"))
        except (binascii.Error, UnicodeError, ValueError) as exc:
            log.warning("Rejected imported save: %s", exc)
            return None
        state = _rebuild(payload, "imported save")
        if state is not None:
            state.last_save_timestamp = self._clock()
        return state

    # Async wrappers used by the session so disk writes never interleave.

    async def save_async(self, state: GameState) -> bool:
        payload_state = state.copy()
        async with _SAVE_LOCK:
            saved = await asyncio.to_thread(self.save, payload_state)
        state.last_save_timestamp = payload_state.last_save_timestamp
        return saved

    async def load_async(self) -> Optional[GameState]:
        async with _SAVE_LOCK:
            return await asyncio.to_thread(self.load)

    async def delete_async(self) -> None:
        async with _SAVE_LOCK:
            await asyncio.to_thread(self.delete)


__all__ = ["SaveStore", "resolve_storage_root"]
