"""Progression-related domain models."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Sequence

from ..constants import BASE_XP, MAX_PATH_LEVEL, SCALE_FACTOR, TIER_MULTIPLIERS


class ActionType(str, Enum):
    """What the cultivator is currently spending their seconds on."""

    IDLE = "idle"
    CULTIVATE = "cultivate"
    TRAIN = "train"
    EXPLORE = "explore"
    REFINE = "refine"
    INSCRIBE = "inscribe"
    FORGE = "forge"
    STUDY = "study"
    SLEEP = "sleep"

    @classmethod
    def from_value(cls, value: "ActionType | str | None") -> "ActionType":
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            return cls.IDLE

    @property
    def accrues_xp(self) -> bool:
        # Exploring never grants path XP, even for paths that declare it.
        return self not in (ActionType.IDLE, ActionType.EXPLORE)


TIER_NAMES: Mapping[int, str] = MappingProxyType(
    {1: "Mortal", 2: "Transcendent", 3: "Divine"}
)

BREAKTHROUGH_RATES: Mapping[int, float] = MappingProxyType(
    {
        1: 0.70,
        2: 0.55,
        3: 0.40,
        4: 0.25,
        5: 0.50,
        6: 0.35,
        7: 0.25,
        8: 0.15,
        9: 0.30,
        10: 0.20,
        11: 0.10,
    }
)
DEFAULT_BREAKTHROUGH_RATE = 0.10

TIER_TRANSITION_LEVELS: frozenset[int] = frozenset({4, 8})


def tier_for_level(level: int) -> int:
    if level <= 4:
        return 1
    if level <= 8:
        return 2
    return 3


def tier_name(tier: int) -> str:
    return TIER_NAMES.get(tier, "Unknown")


def xp_required(level: int) -> int:
    """XP needed to fill ``level``; strictly increasing with level."""

    multiplier = TIER_MULTIPLIERS[tier_for_level(level)]
    return math.floor(BASE_XP * SCALE_FACTOR**level * multiplier)


def breakthrough_rate(level: int) -> float:
    return BREAKTHROUGH_RATES.get(level, DEFAULT_BREAKTHROUGH_RATE)


def is_tier_transition(level: int) -> bool:
    return level in TIER_TRANSITION_LEVELS


def is_max_level(level: int) -> bool:
    return level >= MAX_PATH_LEVEL


@dataclass(frozen=True, slots=True)
class PathLevel:
    level: int
    name: str

    @property
    def tier(self) -> int:
        return tier_for_level(self.level)

    @property
    def tier_name(self) -> str:
        return tier_name(self.tier)


@dataclass(frozen=True, slots=True)
class PathDefinition:
    """Static description of a path.  Behaviour lives in :mod:`grand_dao.paths`."""

    key: str
    name: str
    subtitle: str
    action: ActionType
    unlock_condition: str
    levels: tuple[PathLevel, ...]

    def level(self, number: int) -> PathLevel:
        index = max(1, min(number, len(self.levels))) - 1
        return self.levels[index]

    def level_name(self, number: int) -> str:
        if 1 <= number <= len(self.levels):
            return self.levels[number - 1].name
        return f"Level {number}"


def _levels(names: Sequence[str]) -> tuple[PathLevel, ...]:
    if len(names) != MAX_PATH_LEVEL:
        raise ValueError(f"Expected {MAX_PATH_LEVEL} level names, received {len(names)}")
    return tuple(PathLevel(index + 1, name) for index, name in enumerate(names))


def _path(
    key: str,
    name: str,
    subtitle: str,
    action: ActionType,
    unlock_condition: str,
    names: Sequence[str],
) -> PathDefinition:
    return PathDefinition(key, name, subtitle, action, unlock_condition, _levels(names))


_PATH_LIST: tuple[PathDefinition, ...] = (
    _path(
        "spirit", "Path of the Spirit", "Orthodox Qi Cultivation", ActionType.CULTIVATE,
        "Find any cultivation scripture",
        ("Qi Condensation", "Foundation Establishment", "Golden Core", "Nascent Soul",
         "Spirit Transformation", "Void Refinement", "Dao Domain",
         "Tribulation Transcendence", "Empyrean Sovereign", "Eternal Ascendant",
         "Cosmic Singularity", "Zenith Origin"),
    ),
    _path(
        "martial", "Path of the Carnal", "Orthodox Body Cultivation", ActionType.TRAIN,
        "Available from the start",
        ("Skin Refinement", "Bone Tempering", "Organ Forging", "Blood Transmutation",
         "Marrow Sanctification", "Sovereign Physique", "Vajra Transcendence",
         "Aura Incarnation", "Star-Crushing Might", "Nirvana Flesh", "World-Pillar Form",
         "Primordial Titan"),
    ),
    _path(
        "rogue", "The Wild Path", "Unorthodox Rogue Cultivation", ActionType.CULTIVATE,
        "Walk the path as a rogue",
        ("Qi-Gatherer", "Sea-Builder", "Core-Loomer", "Soul-Shatterer", "Spirit-Walker",
         "Rift-Runner", "Domain-Master", "Fate-Survivor", "Sky-Ruler", "Time-Drifter",
         "Star-Born", "Boundless"),
    ),
    _path(
        "devil_soul", "Soul Corruption", "Devil Qi Cultivation", ActionType.CULTIVATE,
        "Karma at or below -100",
        ("Malice Gathering", "Blood-Sea Foundation", "Black Core", "Vile Infant",
         "Demon-Soul Aspect", "Abyssal Anchor", "Hell-Realm Domain", "Calamity Ascension",
         "Arch-Devil King", "Sorrow Eternal", "Void Eater", "Primordial Nightmare"),
    ),
    _path(
        "devil_body", "Body Corruption", "Devil Body Cultivation", ActionType.TRAIN,
        "Karma at or below -100",
        ("Rotten Skin", "Obscene Bone", "Corrupted Vitals", "Demon-Blood Surge",
         "Monstrous Metamorphosis", "Abyssal Shell", "Unholy Titan", "Carnal Desecration",
         "World-Ender Physique", "Indestructible Fiend", "Chaos Avatar", "The End-Bringer"),
    ),
    _path(
        "alchemy", "The Pill Path", "Alchemy & Refinement", ActionType.REFINE,
        "Find an alchemy manual",
        ("Apprentice", "Journeyman", "Master", "Grandmaster", "Spirit Alchemist",
         "Void Alchemist", "Earth-Vein Alchemist", "Heaven-Limit Alchemist",
         "Sovereign Pill-God", "Life-Creator", "Galaxy Refiner", "The Eternal Apothecary"),
    ),
    _path(
        "formations", "The Array Path", "Formations & Arrays", ActionType.INSCRIBE,
        "Find a formation blueprint",
        ("Script-Tracer", "Array-Planter", "Node-Master", "Spirit-Weaver",
         "Domain-Architect", "Spatial-Arrayist", "World-Loomer", "Constellation-Binder",
         "Heavenly Array-Lord", "Reality-Stitcher", "Dimensional-Mason",
         "The Great Architect"),
    ),
    _path(
        "beast_tamer", "The Resonance Path", "Soul-Beast Taming", ActionType.EXPLORE,
        "Encounter a tameable beast while exploring",
        ("Beast-Linker", "Contract Initiate", "Shared Vitality", "Symbiotic Growth",
         "Chimera-Fusion", "Pack-Mind Sovereign", "Monstrous Domain", "Primal Awakening",
         "Beast-God Avatar", "Calamity Breeder", "Star-Devourer Lord", "The Great Ancestor"),
    ),
    _path(
        "artificer", "The Mechanical Path", "Puppetry & Artifice", ActionType.FORGE,
        "Find an artificer's handbook",
        ("Tool-Tinker", "Clockwork-Adept", "Core-Engineer", "Armor-Smith Paragon",
         "Sentience-Infuser", "Legion-Commander", "Living Fortress", "Iron-Body Transfer",
         "God-Machine Architect", "Void-Steel Crafter", "Dimensional Weaver",
         "The Celestial Craftsman"),
    ),
    _path(
        "oracle", "The Oracle Path", "Fate & Divination", ActionType.CULTIVATE,
        "See your karma and find a divination manual",
        ("Luck-Seeker", "Omen-Reader", "Thread-Watcher", "Probability-Shifter",
         "Timeline-Peeker", "Causality-Manipulator", "Karma-Judge", "Destiny-Weaver",
         "Aeon-Sage", "Fate-Eater", "Universal Eye", "The Weaver of Reality"),
    ),
    _path(
        "harmonic", "The Harmonic Path", "Sound Cultivation", ActionType.CULTIVATE,
        "Hold a harmonic scripture and a musical instrument",
        ("Tone-Caster", "Rhythm-Locker", "Resonance-Striker", "Sonic-Shielding",
         "Emotional-Conductor", "Vacuum-Scream", "World-Song Lyricist",
         "Shatter-Point Maestro", "Celestial Orchestrator", "Echo-Eternal",
         "Frequency-God", "The Primordial Silence"),
    ),
    _path(
        "scholar", "The Literary Path", "Knowledge & Wisdom", ActionType.STUDY,
        "Find an ancient text",
        ("Ink-Dabbler", "Verse-Caster", "Scroll-Guardian", "Calligraphy-Blade",
         "Historian's Weight", "Manifest Truth", "Edict-Bearer", "World-Author",
         "Sovereign of Wisdom", "Living Scripture", "Truth-Defier", "The Eternal Author"),
    ),
    _path(
        "bloodline", "The Genetic Path", "Bloodline Awakening", ActionType.CULTIVATE,
        "A potent body or a bloodline elixir",
        ("Dormant Spark", "Pulse-Awakening", "Ichor-Thickening", "Partial-Shift",
         "Ancestral Visage", "Blood-Memory", "Total Metamorphosis", "Genetic Domain",
         "Primarch Sovereign", "Origin-Source", "Galaxy-Span Blood", "The Progenitor"),
    ),
    _path(
        "dream", "The Illusion Path", "Dream Walking", ActionType.SLEEP,
        "A lucid dream during cultivation",
        ("Sleep-Stalker", "Fog-Weaver", "Nightmare-Feeder", "Phantasm-Realization",
         "Dream-Prisoner", "The Silver-Veil", "Collective Unconscious", "Lucid-God",
         "Reality-Blur", "Ethereal-Ego", "World-Dreamer", "The Great Awakener"),
    ),
    _path(
        "necromancy", "The Death Path", "Necromancy & Spirits", ActionType.CULTIVATE,
        "Reach the underworld or find the Book of the Dead",
        ("Bone-Whisperer", "Soul-Tether", "Grave-Miasma", "Lich-Seed",
         "Underworld-Gatekeeper", "Death-Knight Commander", "Soul-Reaper", "Plague-Lord",
         "Yama-Sovereign", "Deathless-Will", "Abyssal-Void", "The Silent End"),
    ),
)

PATHS: Mapping[str, PathDefinition] = MappingProxyType(
    {path.key: path for path in _PATH_LIST}
)


def get_path(key: str | None) -> PathDefinition | None:
    if key is None:
        return None
    return PATHS.get(key)


KARMA_LABELS: tuple[tuple[float, str], ...] = (
    (500, "Saint"),
    (100, "Righteous"),
)


def karma_label(karma: float) -> str:
    for threshold, label in KARMA_LABELS:
        if karma >= threshold:
            return label
    if karma > -100:
        return "Neutral"
    if karma > -500:
        return "Wicked"
    return "Abomination"


LUCK_DESCRIPTORS: tuple[tuple[float, str], ...] = (
    (0.2, "Abysmal"),
    (0.35, "Terrible"),
    (0.5, "Poor"),
    (0.65, "Average"),
    (0.8, "Good"),
    (0.9, "Excellent"),
    (1.0, "Heaven-Blessed"),
)


def luck_descriptor(luck: float) -> str:
    for ceiling, label in LUCK_DESCRIPTORS:
        if luck <= ceiling:
            return label
    return "Heaven-Blessed"


__all__ = [
    "ActionType",
    "BREAKTHROUGH_RATES",
    "DEFAULT_BREAKTHROUGH_RATE",
    "PATHS",
    "PathDefinition",
    "PathLevel",
    "TIER_TRANSITION_LEVELS",
    "breakthrough_rate",
    "get_path",
    "is_max_level",
    "is_tier_transition",
    "karma_label",
    "luck_descriptor",
    "tier_for_level",
    "tier_name",
    "xp_required",
]
