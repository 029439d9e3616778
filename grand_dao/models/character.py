"""Character traits rolled at creation and carried between lives."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..constants import KARMA_MAX, KARMA_MIN
from ._validation import FieldSpec, ModelValidator, is_non_empty_str


@dataclass(frozen=True, slots=True)
class SpiritRoot:
    name: str
    qi_multiplier: float
    probability: float
    description: str = ""


@dataclass(frozen=True, slots=True)
class BodyType:
    name: str
    body_multiplier: float
    probability: float
    qi_bonus_multiplier: float = 0.0
    description: str = ""


@dataclass(frozen=True, slots=True)
class BackgroundBonus:
    exploration_bonus: float = 0.0
    spirit_stones: int = 0
    luck_bonus: float = 0.0
    sect_access: bool = False
    shop_discount: float = 0.0
    hidden_luck: float = 0.0
    random_scripture: bool = False


@dataclass(frozen=True, slots=True)
class Background:
    key: str
    name: str
    start_location: str
    bonus: BackgroundBonus = field(default_factory=BackgroundBonus)
    description: str = ""


SPIRIT_ROOTS: tuple[SpiritRoot, ...] = (
    SpiritRoot("Trash Root", 0.3, 0.30, "Barely able to sense Qi."),
    SpiritRoot("Mortal Root", 0.6, 0.35, "Average spiritual talent."),
    SpiritRoot("Earth Root", 1.0, 0.20, "Solid foundation."),
    SpiritRoot("Heaven Root", 1.5, 0.12, "Blessed by the heavens."),
    SpiritRoot("God-Slayer Root", 2.5, 0.03, "A root seen once in ten thousand years."),
)

BODY_TYPES: tuple[BodyType, ...] = (
    BodyType("Common Mortal Frame", 0.5, 0.35, description="An unremarkable body."),
    BodyType("Tempered Physique", 0.8, 0.30, description="A body honed by labor."),
    BodyType("Vajra Body", 1.2, 0.18, description="Skin like bronze, bones like steel."),
    BodyType("Nine Yin Meridians", 1.5, 0.10, 0.3, "Amplifies both body and spirit."),
    BodyType("Ancient Chaos Body", 2.5, 0.05, description="Born from primordial chaos."),
    BodyType("Primordial Divine Frame", 3.0, 0.02, 0.5, "Defies mortal limits."),
)

BACKGROUNDS: Mapping[str, Background] = MappingProxyType(
    {
        "village_orphan": Background(
            "village_orphan",
            "Village Orphan",
            "peaceful_village",
            BackgroundBonus(exploration_bonus=0.10),
            "Raised in a remote village, surviving by scavenging the wilds.",
        ),
        "fallen_noble": Background(
            "fallen_noble",
            "Fallen Noble",
            "small_city",
            BackgroundBonus(spirit_stones=50),
            "Only memories and a small fortune remain.",
        ),
        "wandering_beggar": Background(
            "wandering_beggar",
            "Wandering Beggar",
            "forest_path",
            BackgroundBonus(luck_bonus=0.05),
            "Hardship has sharpened your instincts.",
        ),
        "sect_reject": Background(
            "sect_reject",
            "Sect Reject",
            "mystic_mountain_base",
            BackgroundBonus(sect_access=True),
            "Turned away at the gates, you vowed to prove them wrong.",
        ),
        "merchants_child": Background(
            "merchants_child",
            "Merchant's Child",
            "merchant_hub",
            BackgroundBonus(shop_discount=0.10),
            "You know the value of everything.",
        ),
        "mysterious_amnesiac": Background(
            "mysterious_amnesiac",
            "Mysterious Amnesiac",
            "cursed_swamp",
            BackgroundBonus(hidden_luck=0.1, random_scripture=True),
            "You awoke with only a strange scripture and a sense of destiny.",
        ),
    }
)


def _lookup(options: tuple[Any, ...], name: str) -> Any:
    for option in options:
        if option.name == name:
            return option
    raise KeyError(name)


def spirit_root(name: str) -> SpiritRoot:
    return _lookup(SPIRIT_ROOTS, name)


def body_type(name: str) -> BodyType:
    return _lookup(BODY_TYPES, name)


def clamp_karma(value: float) -> int:
    return int(max(KARMA_MIN, min(KARMA_MAX, value)))


@dataclass(slots=True)
class Character:
    """A cultivator's rolled traits plus the progression flags that follow them."""

    name: str
    spirit_root: SpiritRoot
    body_type: BodyType
    background: Background
    luck: float
    karma: int = 0
    rogue_status: bool = False
    rebirth_count: int = 0
    legacy_bonus: float = 0.0
    devil_mark: bool = False
    redeemed_devil: bool = False

    def __post_init__(self) -> None:
        try:
            self.luck = float(self.luck)
        except (TypeError, ValueError):
            self.luck = 0.1
        self.luck = max(0.1, min(1.0, self.luck))
        try:
            self.karma = clamp_karma(self.karma)
        except (TypeError, ValueError):
            self.karma = 0
        self.rebirth_count = max(0, int(self.rebirth_count))
        self.legacy_bonus = max(0.0, float(self.legacy_bonus))

    @property
    def qi_multiplier(self) -> float:
        return self.spirit_root.qi_multiplier

    @property
    def qi_bonus(self) -> float:
        return self.body_type.qi_bonus_multiplier

    @property
    def body_multiplier(self) -> float:
        return self.body_type.body_multiplier

    def adjust_karma(self, delta: float) -> None:
        self.karma = clamp_karma(self.karma + delta)

    def copy(self) -> "Character":
        return replace(self)

    def to_mapping(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "spirit_root": self.spirit_root.name,
            "body_type": self.body_type.name,
            "background": self.background.key,
            "luck": self.luck,
            "karma": self.karma,
            "rogue_status": self.rogue_status,
            "rebirth_count": self.rebirth_count,
            "legacy_bonus": self.legacy_bonus,
            "devil_mark": self.devil_mark,
            "redeemed_devil": self.redeemed_devil,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Character":
        payload = CharacterValidator.validate(data)
        try:
            root = spirit_root(payload["spirit_root"])
            body = body_type(payload["body_type"])
            background = BACKGROUNDS[payload["background"]]
        except KeyError as exc:
            raise ValueError(f"Unknown character trait: {exc.args[0]}") from exc
        return cls(
            name=payload["name"],
            spirit_root=root,
            body_type=body,
            background=background,
            luck=payload["luck"],
            karma=payload.get("karma", 0),
            rogue_status=bool(payload.get("rogue_status", False)),
            rebirth_count=payload.get("rebirth_count", 0),
            legacy_bonus=payload.get("legacy_bonus", 0.0),
            devil_mark=bool(payload.get("devil_mark", False)),
            redeemed_devil=bool(payload.get("redeemed_devil", False)),
        )


class CharacterValidator(ModelValidator):
    model = Character
    fields = {
        "name": FieldSpec(str, "a character name"),
        "spirit_root": FieldSpec(is_non_empty_str, "a spirit root name"),
        "body_type": FieldSpec(is_non_empty_str, "a body type name"),
        "background": FieldSpec(is_non_empty_str, "a background key"),
        "luck": FieldSpec(float, "a numeric luck value"),
        "karma": FieldSpec(int, "an integer karma value", required=False),
        "rogue_status": FieldSpec(bool, "a rogue flag", required=False),
        "rebirth_count": FieldSpec(int, "an integer rebirth count", required=False),
        "legacy_bonus": FieldSpec(float, "a numeric legacy bonus", required=False),
        "devil_mark": FieldSpec(bool, "a devil mark flag", required=False),
        "redeemed_devil": FieldSpec(bool, "a redemption flag", required=False),
    }


Character.validator = CharacterValidator  # type: ignore[attr-defined]


def describe_background(background: Optional[Background]) -> str:
    if background is None:
        return "Unknown"
    bonus = background.bonus
    parts: list[str] = []
    if bonus.exploration_bonus:
        parts.append(f"+{bonus.exploration_bonus:.0%} exploration find rate")
    if bonus.spirit_stones:
        parts.append(f"start with {bonus.spirit_stones} spirit stones")
    if bonus.luck_bonus:
        parts.append(f"+{bonus.luck_bonus:.2f} luck")
    if bonus.sect_access:
        parts.append("may join a sect immediately")
    if bonus.shop_discount:
        parts.append(f"shop prices -{bonus.shop_discount:.0%}")
    if bonus.random_scripture:
        parts.append("carries a mysterious scripture")
    summary = ", ".join(parts) if parts else "no bonus"
    return f"{background.name} ({summary})"


__all__ = [
    "BACKGROUNDS",
    "BODY_TYPES",
    "Background",
    "BackgroundBonus",
    "BodyType",
    "Character",
    "CharacterValidator",
    "SPIRIT_ROOTS",
    "SpiritRoot",
    "body_type",
    "clamp_karma",
    "describe_background",
    "spirit_root",
]
