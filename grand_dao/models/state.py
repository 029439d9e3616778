"""Aggregate game state and the records it owns."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Mapping, Optional

from ..constants import MAX_LOG_MESSAGES, MAX_PATH_LEVEL
from ._validation import FieldSpec, MappingSpec, ModelValidator, SequenceSpec, is_non_empty_str
from .character import Character
from .progression import ActionType, xp_required
from .world import ITEMS, Item

if TYPE_CHECKING:
    from ..tribulation import Tribulation


class GamePhase(str, Enum):
    CHARACTER_CREATION = "character_creation"
    PLAYING = "playing"

    @classmethod
    def from_value(cls, value: "GamePhase | str | None") -> "GamePhase":
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


class LogKind(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"
    LEGENDARY = "legendary"
    SYSTEM = "system"

    @classmethod
    def from_value(cls, value: "LogKind | str | None") -> "LogKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.INFO


def _coerce_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _coerce_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(slots=True)
class PathProgress:
    """Progress along a single unlocked path.

    ``xp`` never exceeds ``xp_required``; reaching it flips
    ``breakthrough_available`` and halts accrual until an attempt is made.
    """

    path_key: str
    level: int = 1
    xp: float = 0.0
    breakthrough_available: bool = False
    unlocked: bool = True
    xp_required: int = field(init=False)

    def __post_init__(self) -> None:
        self.level = max(1, min(MAX_PATH_LEVEL, _coerce_int(self.level, 1)))
        self.xp_required = xp_required(self.level)
        self.xp = max(0.0, min(_coerce_float(self.xp), float(self.xp_required)))
        if self.xp >= self.xp_required:
            self.breakthrough_available = True
        elif self.breakthrough_available:
            self.xp = float(self.xp_required)

    @property
    def accepts_xp(self) -> bool:
        return self.unlocked and not self.breakthrough_available

    def add_xp(self, amount: float) -> bool:
        """Accumulate ``amount`` and return ``True`` if the path just became ready."""

        if not self.accepts_xp or amount <= 0:
            return False
        self.xp += amount
        if self.xp >= self.xp_required:
            self.xp = float(self.xp_required)
            self.breakthrough_available = True
            return True
        return False

    def set_level(self, level: int, *, xp: float = 0.0) -> None:
        self.level = max(1, min(MAX_PATH_LEVEL, level))
        self.xp_required = xp_required(self.level)
        self.xp = max(0.0, min(xp, float(self.xp_required)))
        self.breakthrough_available = False

    def to_mapping(self) -> dict[str, Any]:
        return {
            "path_key": self.path_key,
            "level": self.level,
            "xp": self.xp,
            "breakthrough_available": self.breakthrough_available,
            "unlocked": self.unlocked,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PathProgress":
        return cls(
            path_key=str(data["path_key"]),
            level=data.get("level", 1),
            xp=data.get("xp", 0.0),
            breakthrough_available=bool(data.get("breakthrough_available", False)),
            unlocked=bool(data.get("unlocked", True)),
        )


@dataclass(slots=True)
class InventoryEntry:
    item_key: str
    quantity: int = 1

    @property
    def item(self) -> Item:
        return ITEMS[self.item_key]

    def to_mapping(self) -> dict[str, Any]:
        return {"item_key": self.item_key, "quantity": self.quantity}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "InventoryEntry":
        return cls(str(data["item_key"]), max(1, _coerce_int(data.get("quantity"), 1)))


@dataclass(slots=True)
class ActiveBuff:
    key: str
    multiplier: float
    remaining_seconds: float
    label: str = ""

    def to_mapping(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "multiplier": self.multiplier,
            "remaining_seconds": self.remaining_seconds,
            "label": self.label,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ActiveBuff":
        return cls(
            key=str(data["key"]),
            multiplier=_coerce_float(data.get("multiplier"), 1.0),
            remaining_seconds=_coerce_float(data.get("remaining_seconds")),
            label=str(data.get("label", "")),
        )


@dataclass(slots=True)
class QiDeviation:
    active: bool = False
    remaining_seconds: float = 0.0

    def start(self, seconds: float) -> None:
        self.active = True
        self.remaining_seconds = float(seconds)

    def clear(self) -> None:
        self.active = False
        self.remaining_seconds = 0.0

    def elapse(self, seconds: float) -> bool:
        """Advance the countdown; return ``True`` when the deviation just cleared."""

        if not self.active:
            return False
        self.remaining_seconds = max(0.0, self.remaining_seconds - seconds)
        if self.remaining_seconds <= 0:
            self.clear()
            return True
        return False


@dataclass(slots=True)
class TravelState:
    traveling: bool = False
    destination: Optional[str] = None
    remaining_seconds: float = 0.0

    def begin(self, destination: str, seconds: float) -> None:
        self.traveling = True
        self.destination = destination
        self.remaining_seconds = float(seconds)

    def clear(self) -> None:
        self.traveling = False
        self.destination = None
        self.remaining_seconds = 0.0


@dataclass(slots=True)
class LogEntry:
    id: int
    text: str
    kind: LogKind = LogKind.INFO
    timestamp: float = 0.0

    def to_mapping(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "kind": self.kind.value,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LogEntry":
        return cls(
            id=_coerce_int(data.get("id")),
            text=str(data.get("text", "")),
            kind=LogKind.from_value(data.get("kind")),
            timestamp=_coerce_float(data.get("timestamp")),
        )


@dataclass(slots=True)
class GameState:
    """The single mutable root of a play session."""

    character: Character
    path_progress: Dict[str, PathProgress] = field(default_factory=dict)
    current_action: ActionType = ActionType.IDLE
    active_path: Optional[str] = None
    spirit_stones: int = 0
    inventory: List[InventoryEntry] = field(default_factory=list)
    location: str = "peaceful_village"
    discovered_regions: List[str] = field(default_factory=list)
    travel: TravelState = field(default_factory=TravelState)
    buffs: List[ActiveBuff] = field(default_factory=list)
    qi_deviation: QiDeviation = field(default_factory=QiDeviation)
    group_membership: Optional[str] = None
    group_contribution: int = 0
    completed_missions: List[str] = field(default_factory=list)
    event_log: List[LogEntry] = field(default_factory=list)
    total_play_time: int = 0
    last_save_timestamp: float = 0.0
    karma_visible: bool = False
    game_phase: GamePhase = GamePhase.PLAYING
    reroll_count: int = 0
    tick_count: int = 0
    highest_path_level: int = 1
    equipped_scripture: Optional[str] = None
    total_deaths: int = 0
    achievements: List[str] = field(default_factory=list)
    pending_event: Optional[str] = None
    # Live tribulation sequence; never persisted.
    tribulation: Optional["Tribulation"] = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def unlocked_paths(self) -> Iterator[PathProgress]:
        return (progress for progress in self.path_progress.values() if progress.unlocked)

    def is_unlocked(self, path_key: str) -> bool:
        progress = self.path_progress.get(path_key)
        return progress is not None and progress.unlocked

    def active_progress(self) -> PathProgress | None:
        if self.active_path is None:
            return None
        return self.path_progress.get(self.active_path)

    def inventory_entry(self, item_key: str) -> InventoryEntry | None:
        return next((entry for entry in self.inventory if entry.item_key == item_key), None)

    def has_item(self, item_key: str) -> bool:
        return self.inventory_entry(item_key) is not None

    def item_quantity(self, item_key: str) -> int:
        entry = self.inventory_entry(item_key)
        return entry.quantity if entry else 0

    def discover(self, region_keys: Any) -> None:
        for key in region_keys:
            if key not in self.discovered_regions:
                self.discovered_regions.append(key)

    def push_log(self, entry: LogEntry) -> None:
        self.event_log.insert(0, entry)
        del self.event_log[MAX_LOG_MESSAGES:]

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def to_mapping(self) -> dict[str, Any]:
        return {
            "character": self.character.to_mapping(),
            "path_progress": {
                key: progress.to_mapping() for key, progress in self.path_progress.items()
            },
            "current_action": self.current_action.value,
            "active_path": self.active_path,
            "spirit_stones": self.spirit_stones,
            "inventory": [entry.to_mapping() for entry in self.inventory],
            "location": self.location,
            "discovered_regions": list(self.discovered_regions),
            "travel": {
                "traveling": self.travel.traveling,
                "destination": self.travel.destination,
                "remaining_seconds": self.travel.remaining_seconds,
            },
            "buffs": [buff.to_mapping() for buff in self.buffs],
            "qi_deviation": {
                "active": self.qi_deviation.active,
                "remaining_seconds": self.qi_deviation.remaining_seconds,
            },
            "group_membership": self.group_membership,
            "group_contribution": self.group_contribution,
            "completed_missions": list(self.completed_missions),
            "event_log": [entry.to_mapping() for entry in self.event_log],
            "total_play_time": self.total_play_time,
            "last_save_timestamp": self.last_save_timestamp,
            "karma_visible": self.karma_visible,
            "game_phase": self.game_phase.value,
            "reroll_count": self.reroll_count,
            "tick_count": self.tick_count,
            "highest_path_level": self.highest_path_level,
            "equipped_scripture": self.equipped_scripture,
            "total_deaths": self.total_deaths,
            "achievements": list(self.achievements),
            "pending_event": self.pending_event,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GameState":
        payload = GameStateValidator.validate(data)
        travel_raw = payload.get("travel") or {}
        deviation_raw = payload.get("qi_deviation") or {}
        travel = TravelState(
            traveling=bool(travel_raw.get("traveling", False)),
            destination=travel_raw.get("destination"),
            remaining_seconds=_coerce_float(travel_raw.get("remaining_seconds")),
        )
        deviation = QiDeviation(
            active=bool(deviation_raw.get("active", False)),
            remaining_seconds=_coerce_float(deviation_raw.get("remaining_seconds")),
        )
        return cls(
            character=Character.from_mapping(payload["character"]),
            path_progress={
                str(key): PathProgress.from_mapping({"path_key": key, **value})
                for key, value in payload["path_progress"].items()
            },
            current_action=ActionType.from_value(payload.get("current_action")),
            active_path=payload.get("active_path"),
            spirit_stones=max(0, _coerce_int(payload.get("spirit_stones"))),
            inventory=[
                InventoryEntry.from_mapping(entry)
                for entry in payload.get("inventory", [])
                if entry.get("item_key") in ITEMS
            ],
            location=str(payload.get("location", "peaceful_village")),
            discovered_regions=[str(key) for key in payload.get("discovered_regions", [])],
            travel=travel,
            buffs=[ActiveBuff.from_mapping(entry) for entry in payload.get("buffs", [])],
            qi_deviation=deviation,
            group_membership=payload.get("group_membership"),
            group_contribution=_coerce_int(payload.get("group_contribution")),
            completed_missions=[str(key) for key in payload.get("completed_missions", [])],
            event_log=[LogEntry.from_mapping(entry) for entry in payload.get("event_log", [])],
            total_play_time=_coerce_int(payload.get("total_play_time")),
            last_save_timestamp=_coerce_float(payload.get("last_save_timestamp")),
            karma_visible=bool(payload.get("karma_visible", False)),
            game_phase=GamePhase.from_value(payload["game_phase"]),
            reroll_count=_coerce_int(payload.get("reroll_count")),
            tick_count=_coerce_int(payload.get("tick_count")),
            highest_path_level=max(1, _coerce_int(payload.get("highest_path_level"), 1)),
            equipped_scripture=payload.get("equipped_scripture"),
            total_deaths=_coerce_int(payload.get("total_deaths")),
            achievements=[str(entry) for entry in payload.get("achievements", [])],
            pending_event=payload.get("pending_event"),
        )

    def assign_from(self, other: "GameState") -> None:
        """Overwrite every field in place so existing references see ``other``."""

        for spec in fields(self):
            setattr(self, spec.name, getattr(other, spec.name))

    def copy(self) -> "GameState":
        """Return an independent copy suitable for snapshots and comparisons."""

        return replace(
            self,
            character=self.character.copy(),
            path_progress={key: replace(value) for key, value in self.path_progress.items()},
            inventory=[replace(entry) for entry in self.inventory],
            discovered_regions=list(self.discovered_regions),
            travel=replace(self.travel),
            buffs=[replace(buff) for buff in self.buffs],
            qi_deviation=replace(self.qi_deviation),
            completed_missions=list(self.completed_missions),
            event_log=list(self.event_log),
            achievements=list(self.achievements),
            tribulation=None,
        )


class GameStateValidator(ModelValidator):
    model = GameState
    fields = {
        "character": FieldSpec(MappingSpec(str, object), "a character mapping"),
        "path_progress": FieldSpec(
            MappingSpec(str, MappingSpec(str, object)), "a mapping of path progress"
        ),
        "game_phase": FieldSpec(
            lambda value: value in {phase.value for phase in GamePhase}, "a game phase"
        ),
        "location": FieldSpec(is_non_empty_str, "a region key", required=False),
        "inventory": FieldSpec(
            SequenceSpec(MappingSpec(str, object)), "a list of inventory entries", required=False
        ),
        "event_log": FieldSpec(
            SequenceSpec(MappingSpec(str, object)), "a list of log entries", required=False
        ),
        "buffs": FieldSpec(
            SequenceSpec(MappingSpec(str, object)), "a list of buffs", required=False
        ),
        "discovered_regions": FieldSpec(
            SequenceSpec(str), "a list of region keys", required=False
        ),
        "spirit_stones": FieldSpec(int, "an integer stone balance", required=False),
        "travel": FieldSpec(MappingSpec(str, object), "a travel mapping", required=False),
        "qi_deviation": FieldSpec(
            MappingSpec(str, object), "a qi deviation mapping", required=False
        ),
        "active_path": FieldSpec(str, "a path key", required=False, allow_none=True),
        "equipped_scripture": FieldSpec(
            str, "a scripture item key", required=False, allow_none=True
        ),
        "group_membership": FieldSpec(str, "a group key", required=False, allow_none=True),
        "pending_event": FieldSpec(str, "an event key", required=False, allow_none=True),
    }


GameState.validator = GameStateValidator  # type: ignore[attr-defined]


__all__ = [
    "ActiveBuff",
    "GamePhase",
    "GameState",
    "GameStateValidator",
    "InventoryEntry",
    "LogEntry",
    "LogKind",
    "PathProgress",
    "QiDeviation",
    "TravelState",
]
