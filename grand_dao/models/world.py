"""World and content related domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class Rarity(str, Enum):
    """Item rarity tiers from most to least common."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"
    MYTHIC = "mythic"

    @classmethod
    def from_value(cls, value: "Rarity | str | None") -> "Rarity":
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            return cls.COMMON


class ItemCategory(str, Enum):
    MATERIAL = "material"
    PILL = "pill"
    SCRIPTURE = "scripture"
    TREASURE = "treasure"
    SPECIAL = "special"

    @classmethod
    def from_value(cls, value: "ItemCategory | str | None") -> "ItemCategory":
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            return cls.MATERIAL


class Realm(str, Enum):
    MORTAL = "mortal"
    HEAVEN = "heaven"
    UNDERWORLD = "underworld"


@dataclass(frozen=True, slots=True)
class ItemEffects:
    """Effect payload carried by an item definition."""

    xp_multiplier: Optional[float] = None
    xp_multiplier_duration: Optional[int] = None
    breakthrough_bonus: float = 0.0
    heal_qi_deviation: bool = False
    tribulation_hp_bonus: float = 0.0
    preserve_inventory: bool = False
    preserve_rolls: bool = False


@dataclass(frozen=True, slots=True)
class Item:
    key: str
    name: str
    category: ItemCategory
    rarity: Rarity
    description: str = ""
    sell_value: int = 0
    stackable: bool = True
    effects: ItemEffects = field(default_factory=ItemEffects)
    # Pouches pay out a spirit stone range instead of occupying a slot.
    stone_range: Optional[tuple[int, int]] = None

    @property
    def is_pouch(self) -> bool:
        return self.stone_range is not None


@dataclass(frozen=True, slots=True)
class LootEntry:
    item_key: str
    weight: float
    min_danger: int = 1


@dataclass(frozen=True, slots=True)
class Region:
    key: str
    name: str
    realm: Realm
    danger_level: int
    connections: tuple[str, ...]
    loot_table: tuple[LootEntry, ...] = ()
    event_pool: tuple[str, ...] = ()
    terrain: str = "plains"
    has_shop: bool = False
    is_city: bool = False
    description: str = ""

    def eligible_loot(self) -> tuple[LootEntry, ...]:
        return tuple(
            entry for entry in self.loot_table if entry.min_danger <= self.danger_level
        )

    @property
    def has_market(self) -> bool:
        return self.has_shop or self.is_city


@dataclass(frozen=True, slots=True)
class MissionOption:
    reward: int
    karma_change: int
    description: str


@dataclass(frozen=True, slots=True)
class Mission:
    key: str
    name: str
    description: str
    help_option: MissionOption
    exploit_option: MissionOption
    duration: int = 0


@dataclass(frozen=True, slots=True)
class Group:
    key: str
    name: str
    kind: str
    karma_min: int
    karma_max: int
    home_region: str
    description: str = ""
    missions: tuple[Mission, ...] = ()

    def accepts_karma(self, karma: float) -> bool:
        return self.karma_min <= karma <= self.karma_max

    def mission(self, key: str) -> Mission | None:
        return next((mission for mission in self.missions if mission.key == key), None)


def _item(
    key: str,
    name: str,
    category: ItemCategory,
    rarity: Rarity,
    sell_value: int,
    *,
    stackable: bool = True,
    description: str = "",
    stone_range: tuple[int, int] | None = None,
    **effects: object,
) -> Item:
    return Item(
        key=key,
        name=name,
        category=category,
        rarity=rarity,
        description=description,
        sell_value=sell_value,
        stackable=stackable,
        effects=ItemEffects(**effects),  # type: ignore[arg-type]
        stone_range=stone_range,
    )


_M = ItemCategory.MATERIAL
_P = ItemCategory.PILL
_S = ItemCategory.SCRIPTURE
_T = ItemCategory.TREASURE
_X = ItemCategory.SPECIAL

_ITEM_LIST: tuple[Item, ...] = (
    # Materials
    _item("common_herb", "Common Spirit Herb", _M, Rarity.COMMON, 2,
          description="A basic herb with faint spiritual energy."),
    _item("uncommon_herb", "Jade-Root Herb", _M, Rarity.UNCOMMON, 8,
          description="A herb with moderate spiritual energy. Used in alchemy."),
    _item("rare_herb", "Thousand-Year Ginseng", _M, Rarity.RARE, 50,
          description="An ancient herb brimming with spiritual energy."),
    _item("iron_ore", "Iron Ore", _M, Rarity.COMMON, 1, description="Basic metal ore."),
    _item("silver_ore", "Silver Spirit Ore", _M, Rarity.UNCOMMON, 10,
          description="Ore infused with spiritual energy."),
    _item("mithril_ore", "Mithril Ore", _M, Rarity.RARE, 100,
          description="Legendary metal from the Heaven Realm."),
    _item("beast_fang", "Beast Fang", _M, Rarity.COMMON, 3,
          description="A fang from a spirit beast."),
    _item("rare_beast_core", "Spirit Beast Core", _M, Rarity.RARE, 80,
          description="The crystallized essence of a powerful spirit beast."),
    _item("fish_essence", "Fish Essence", _M, Rarity.COMMON, 2,
          description="Essence from spiritual fish."),
    _item("bandit_loot", "Bandit's Plunder", _M, Rarity.UNCOMMON, 15,
          description="Stolen goods recovered from bandits."),
    _item("soul_fragment", "Soul Fragment", _M, Rarity.RARE, 30,
          description="A fragment of a departed soul. Used in dark arts."),
    _item("bone_dust", "Ancient Bone Dust", _M, Rarity.UNCOMMON, 12,
          description="Dust from ancient bones. Death Qi emanates from it."),
    _item("memory_crystal", "Memory Crystal", _M, Rarity.EPIC, 200,
          description="A crystal containing memories of the dead."),
    _item("lightning_essence", "Lightning Essence", _M, Rarity.RARE, 60,
          description="Captured essence of tribulation lightning."),
    _item("star_fragment", "Star Fragment", _M, Rarity.EPIC, 300,
          description="A fragment of a fallen star. Immense power within."),
    _item("void_essence", "Void Essence", _M, Rarity.LEGENDARY, 1000,
          description="The essence of the void itself."),
    # Pouches
    _item("spirit_stone_pouch_small", "Small Spirit Stone Pouch", _M, Rarity.COMMON, 0,
          description="Contains 5-15 Spirit Stones.", stone_range=(5, 15)),
    _item("spirit_stone_pouch_large", "Large Spirit Stone Pouch", _M, Rarity.UNCOMMON, 0,
          description="Contains 30-80 Spirit Stones.", stone_range=(30, 80)),
    # Pills
    _item("basic_pill", "Qi Gathering Pill", _P, Rarity.COMMON, 10,
          description="A basic pill that temporarily boosts cultivation speed.",
          xp_multiplier=1.5, xp_multiplier_duration=300),
    _item("breakthrough_pill", "Breakthrough Pill", _P, Rarity.UNCOMMON, 25,
          description="Increases breakthrough success rate by 5%.",
          breakthrough_bonus=0.05),
    _item("deviation_cure", "Mind-Clearing Pill", _P, Rarity.UNCOMMON, 30,
          description="Cures Qi Deviation immediately.", heal_qi_deviation=True),
    _item("epic_pill", "Heaven-Grade Spirit Pill", _P, Rarity.EPIC, 200,
          description="Powerful pill that greatly boosts cultivation.",
          xp_multiplier=3.0, xp_multiplier_duration=600),
    _item("tribulation_pill", "Tribulation Resistance Pill", _P, Rarity.RARE, 80,
          description="Boosts tribulation HP by 30%.", tribulation_hp_bonus=0.30),
    _item("bloodline_elixir", "Bloodline Awakening Elixir", _P, Rarity.EPIC, 300,
          stackable=False, description="An elixir that awakens dormant bloodline power."),
    # Scriptures
    _item("basic_scripture", "Basic Qi Gathering Manual", _S, Rarity.COMMON, 15,
          stackable=False, xp_multiplier=1.1,
          description="A simple cultivation method. Opens the path of the spirit."),
    _item("epic_scripture", "Celestial Dragon Scripture", _S, Rarity.EPIC, 500,
          stackable=False, xp_multiplier=1.8,
          description="A powerful cultivation method left by an ancient dragon."),
    _item("alchemy_manual", "Beginner's Alchemy Manual", _S, Rarity.UNCOMMON, 20,
          stackable=False,
          description="A manual detailing the fundamentals of pill refinement."),
    _item("formation_blueprint", "Basic Formation Blueprint", _S, Rarity.UNCOMMON, 20,
          stackable=False, description="Blueprints for simple spiritual formations."),
    _item("artificer_blueprint", "Artificer's Handbook", _S, Rarity.RARE, 50,
          stackable=False, description="A handbook on building spiritual constructs."),
    _item("ancient_text", "Ancient Scholarly Text", _S, Rarity.RARE, 50,
          stackable=False, description="A text from a bygone era, full of wisdom."),
    _item("divination_manual", "Oracle's Divination Manual", _S, Rarity.RARE, 50,
          stackable=False, description="A manual on reading the threads of fate."),
    _item("harmonic_scripture", "Harmonic Scripture", _S, Rarity.RARE, 50,
          stackable=False, description="A scripture that teaches cultivation through music."),
    _item("book_of_the_dead", "Book of the Dead", _S, Rarity.EPIC, 400,
          stackable=False, description="A forbidden text detailing the arts of necromancy."),
    # Treasures
    _item("musical_instrument", "Spirit Guqin", _T, Rarity.RARE, 60, stackable=False,
          description="A stringed instrument that resonates with Qi."),
    _item("taming_bell", "Soul-Binding Bell", _T, Rarity.RARE, 70, stackable=False,
          description="A bell used to form contracts with spirit beasts."),
    _item("legendary_treasure", "Ancient Immortal's Relic", _T, Rarity.LEGENDARY, 2000,
          stackable=False, xp_multiplier=2.0,
          description="A relic of immense power left by a fallen immortal."),
    _item("mythic_treasure", "Primordial Origin Stone", _T, Rarity.MYTHIC, 10000,
          stackable=False, xp_multiplier=5.0,
          description="A stone from before creation itself."),
    _item("tribulation_stone", "Tribulation Stone", _M, Rarity.RARE, 75,
          description="A stone forged by tribulation lightning.",
          tribulation_hp_bonus=0.20),
    # Relics that survive death
    _item("dimensional_ring", "Dimensional Ring", _X, Rarity.LEGENDARY, 0,
          stackable=False, preserve_inventory=True,
          description="A spatial ring that preserves its contents through death and rebirth."),
    _item("fate_anchor", "Fate Anchor", _X, Rarity.LEGENDARY, 0, stackable=False,
          preserve_rolls=True,
          description="Preserves your Spirit Root, Body Type, and Luck through rebirth."),
)

ITEMS: Mapping[str, Item] = MappingProxyType({item.key: item for item in _ITEM_LIST})


def _loot(*entries: tuple[str, float, int]) -> tuple[LootEntry, ...]:
    return tuple(LootEntry(key, weight, min_danger) for key, weight, min_danger in entries)


_REGION_LIST: tuple[Region, ...] = (
    # Mortal realm
    Region(
        "peaceful_village", "Peaceful Village", Realm.MORTAL, 1,
        ("forest_path", "river_delta"),
        _loot(("common_herb", 30, 1), ("iron_ore", 15, 1), ("spirit_stone_pouch_small", 5, 1)),
        ("traveler", "herb_garden"), terrain="plains", has_shop=True,
        description="A quiet village nestled in green hills.",
    ),
    Region(
        "forest_path", "Forest Path", Realm.MORTAL, 2,
        ("peaceful_village", "mining_town", "bandit_wastes", "cursed_swamp"),
        _loot(("common_herb", 25, 1), ("uncommon_herb", 10, 2), ("beast_fang", 15, 1),
              ("basic_scripture", 3, 1)),
        ("traveler", "beast_encounter", "herb_garden", "strange_resonance"),
        terrain="forest", description="A winding path through ancient woods.",
    ),
    Region(
        "river_delta", "River Delta", Realm.MORTAL, 1,
        ("peaceful_village", "small_city", "merchant_hub"),
        _loot(("common_herb", 20, 1), ("spirit_stone_pouch_small", 10, 1),
              ("fish_essence", 15, 1)),
        ("traveler", "merchant_cart"), terrain="water", has_shop=True,
        description="Where the great river meets the sea.",
    ),
    Region(
        "mining_town", "Mining Town", Realm.MORTAL, 2,
        ("forest_path", "mystic_mountain_base"),
        _loot(("iron_ore", 35, 1), ("silver_ore", 10, 2), ("spirit_stone_pouch_small", 8, 1)),
        ("strange_resonance", "traveler"), terrain="mountain", has_shop=True,
        description="A rough settlement built around mineral-rich caves.",
    ),
    Region(
        "small_city", "Skyreach City", Realm.MORTAL, 1,
        ("river_delta", "merchant_hub", "bandit_wastes"),
        _loot(("spirit_stone_pouch_small", 15, 1), ("basic_pill", 8, 1)),
        ("traveler", "merchant_cart"), terrain="city", has_shop=True, is_city=True,
        description="A bustling city with markets, taverns, and a cultivation academy.",
    ),
    Region(
        "bandit_wastes", "Bandit Wastes", Realm.MORTAL, 3,
        ("forest_path", "small_city", "cursed_swamp"),
        _loot(("iron_ore", 15, 1), ("beast_fang", 20, 2), ("bandit_loot", 12, 2),
              ("uncommon_herb", 8, 2)),
        ("beast_encounter", "traveler", "strange_resonance"), terrain="wasteland",
        description="A lawless expanse where bandits and rogues roam.",
    ),
    Region(
        "cursed_swamp", "Cursed Swamp", Realm.MORTAL, 4,
        ("forest_path", "bandit_wastes", "bone_fields"),
        _loot(("uncommon_herb", 20, 2), ("rare_herb", 5, 3), ("soul_fragment", 3, 3),
              ("alchemy_manual", 1, 3)),
        ("beast_encounter", "strange_resonance", "voice_offers_power"), terrain="swamp",
        description="A miasmic bog shrouded in dark energy.",
    ),
    Region(
        "mystic_mountain_base", "Mystic Mountain Base", Realm.MORTAL, 3,
        ("mining_town", "celestial_peaks"),
        _loot(("common_herb", 20, 1), ("uncommon_herb", 12, 2), ("basic_scripture", 5, 2),
              ("formation_blueprint", 1, 3)),
        ("traveler", "herb_garden", "dying_immortal"), terrain="mountain", has_shop=True,
        description="The foot of a sacred mountain.",
    ),
    Region(
        "merchant_hub", "Golden Bazaar", Realm.MORTAL, 1,
        ("river_delta", "small_city", "floating_islands"),
        _loot(("spirit_stone_pouch_small", 20, 1), ("basic_pill", 10, 1),
              ("basic_scripture", 3, 1)),
        ("merchant_cart", "traveler"), terrain="city", has_shop=True, is_city=True,
        description="The largest trading hub in the mortal realm.",
    ),
    Region(
        "ancient_battlefield", "Ancient Battlefield", Realm.MORTAL, 4,
        ("bandit_wastes", "lightning_plains"),
        _loot(("beast_fang", 15, 2), ("soul_fragment", 8, 3), ("ancient_text", 2, 3),
              ("artificer_blueprint", 1, 4)),
        ("beast_encounter", "strange_resonance", "dying_immortal"), terrain="wasteland",
        description="Echoes of a long-forgotten war.",
    ),
    # Heaven realm
    Region(
        "floating_islands", "Floating Islands", Realm.HEAVEN, 5,
        ("merchant_hub", "celestial_peaks", "spirit_beast_territory"),
        _loot(("rare_herb", 20, 4), ("mithril_ore", 15, 5), ("spirit_stone_pouch_large", 10, 5)),
        ("beast_encounter", "strange_resonance", "secret_realm"), terrain="sky",
        description="Islands suspended in the sky by ancient formations.",
    ),
    Region(
        "celestial_peaks", "Celestial Peaks", Realm.HEAVEN, 6,
        ("mystic_mountain_base", "floating_islands", "jade_palace_city"),
        _loot(("rare_herb", 18, 5), ("epic_scripture", 3, 6),
              ("spirit_stone_pouch_large", 12, 5)),
        ("dying_immortal", "strange_resonance", "secret_realm"), terrain="mountain",
        has_shop=True, description="Mountain peaks that pierce the clouds.",
    ),
    Region(
        "spirit_beast_territory", "Spirit Beast Territory", Realm.HEAVEN, 6,
        ("floating_islands", "ancient_sect_ruins"),
        _loot(("beast_fang", 30, 4), ("rare_beast_core", 8, 5), ("taming_bell", 2, 5)),
        ("beast_encounter", "beast_encounter", "strange_resonance"), terrain="forest",
        description="A vast wilderness ruled by powerful spirit beasts.",
    ),
    Region(
        "ancient_sect_ruins", "Ancient Sect Ruins", Realm.HEAVEN, 7,
        ("spirit_beast_territory", "starfall_lake"),
        _loot(("epic_scripture", 5, 6), ("formation_blueprint", 8, 6), ("ancient_text", 5, 6),
              ("legendary_treasure", 1, 7)),
        ("strange_resonance", "secret_realm", "dying_immortal"), terrain="ruins",
        description="The crumbling remains of a once-great sect.",
    ),
    Region(
        "lightning_plains", "Lightning Plains", Realm.HEAVEN, 7,
        ("ancient_battlefield", "starfall_lake"),
        _loot(("lightning_essence", 20, 6), ("rare_herb", 12, 5), ("tribulation_stone", 3, 7)),
        ("beast_encounter", "strange_resonance"), terrain="plains",
        description="Endless plains struck by perpetual lightning.",
    ),
    Region(
        "starfall_lake", "Starfall Lake", Realm.HEAVEN, 8,
        ("ancient_sect_ruins", "lightning_plains", "jade_palace_city"),
        _loot(("star_fragment", 10, 7), ("epic_scripture", 4, 7), ("legendary_treasure", 1, 8)),
        ("strange_resonance", "secret_realm", "stars_align"), terrain="water",
        description="A serene lake where fallen stars rest beneath the surface.",
    ),
    Region(
        "jade_palace_city", "Jade Palace City", Realm.HEAVEN, 5,
        ("celestial_peaks", "starfall_lake"),
        _loot(("spirit_stone_pouch_large", 15, 5), ("epic_pill", 5, 5)),
        ("merchant_cart", "traveler"), terrain="city", has_shop=True, is_city=True,
        description="The greatest city in the Heaven Realm.",
    ),
    # Underworld
    Region(
        "bone_fields", "Bone Fields", Realm.UNDERWORLD, 5,
        ("cursed_swamp", "river_of_souls", "ghost_city"),
        _loot(("soul_fragment", 25, 4), ("bone_dust", 20, 4), ("book_of_the_dead", 1, 5)),
        ("beast_encounter", "strange_resonance", "voice_offers_power"), terrain="wasteland",
        description="Endless plains of ancient bones.",
    ),
    Region(
        "river_of_souls", "River of Souls", Realm.UNDERWORLD, 7,
        ("bone_fields", "yamas_court"),
        _loot(("soul_fragment", 30, 5), ("memory_crystal", 8, 6), ("divination_manual", 2, 6)),
        ("strange_resonance", "voice_offers_power"), terrain="water",
        description="A ghostly river carrying the memories of the dead.",
    ),
    Region(
        "yamas_court", "Yama's Court", Realm.UNDERWORLD, 10,
        ("river_of_souls", "abyssal_chasm"),
        _loot(("soul_fragment", 20, 7), ("legendary_treasure", 3, 9), ("dimensional_ring", 1, 10)),
        ("voice_offers_power", "dying_immortal"), terrain="ruins", has_shop=True, is_city=True,
        description="The court of the death god.",
    ),
    Region(
        "abyssal_chasm", "Abyssal Chasm", Realm.UNDERWORLD, 12,
        ("yamas_court",),
        _loot(("mythic_treasure", 1, 11), ("legendary_treasure", 3, 10), ("void_essence", 10, 10)),
        ("voice_offers_power", "secret_realm"), terrain="void",
        description="A bottomless chasm at the heart of the underworld.",
    ),
    Region(
        "ghost_city", "Ghost City", Realm.UNDERWORLD, 6,
        ("bone_fields", "netherworld_market"),
        _loot(("soul_fragment", 20, 5), ("spirit_stone_pouch_large", 10, 5)),
        ("merchant_cart", "voice_offers_power"), terrain="city", has_shop=True, is_city=True,
        description="A spectral metropolis of the dead.",
    ),
    Region(
        "netherworld_market", "Netherworld Market", Realm.UNDERWORLD, 6,
        ("ghost_city", "river_of_souls"),
        _loot(("spirit_stone_pouch_large", 15, 5), ("bloodline_elixir", 1, 6)),
        ("merchant_cart",), terrain="city", has_shop=True, is_city=True,
        description="A black market where anything can be traded.",
    ),
)

REGIONS: Mapping[str, Region] = MappingProxyType(
    {region.key: region for region in _REGION_LIST}
)


SHOP_ITEMS_BY_REALM: Mapping[Realm, tuple[str, ...]] = MappingProxyType(
    {
        Realm.MORTAL: (
            "basic_pill",
            "breakthrough_pill",
            "deviation_cure",
            "basic_scripture",
            "common_herb",
            "iron_ore",
        ),
        Realm.HEAVEN: (
            "epic_pill",
            "tribulation_pill",
            "breakthrough_pill",
            "deviation_cure",
            "epic_scripture",
            "rare_herb",
        ),
        Realm.UNDERWORLD: (
            "deviation_cure",
            "soul_fragment",
            "bone_dust",
            "tribulation_pill",
        ),
    }
)

SHOP_PRICE_MULTIPLIER: Mapping[Realm, int] = MappingProxyType(
    {Realm.MORTAL: 1, Realm.HEAVEN: 3, Realm.UNDERWORLD: 2}
)


GROUPS: Mapping[str, Group] = MappingProxyType(
    {
        "azure_cloud_sect": Group(
            key="azure_cloud_sect",
            name="Azure Cloud Sect",
            kind="sect",
            karma_min=0,
            karma_max=1000,
            home_region="mystic_mountain_base",
            description="An orthodox sect focused on righteous cultivation.",
            missions=(
                Mission(
                    "patrol_1",
                    "Mountain Patrol",
                    "Patrol the mountain for intruders.",
                    MissionOption(20, 3, "Help escort lost travelers"),
                    MissionOption(40, -5, "Shake down travelers for tolls"),
                    duration=300,
                ),
                Mission(
                    "herb_gather",
                    "Herb Gathering Mission",
                    "Gather herbs for the sect's alchemists.",
                    MissionOption(15, 1, "Deliver fairly"),
                    MissionOption(30, -3, "Skim some for yourself"),
                    duration=180,
                ),
            ),
        ),
        "blood_lotus_cult": Group(
            key="blood_lotus_cult",
            name="Blood Lotus Cult",
            kind="cult",
            karma_min=-1000,
            karma_max=-50,
            home_region="cursed_swamp",
            description="A dark cult practicing forbidden blood arts.",
            missions=(
                Mission(
                    "sacrifice_1",
                    "Blood Offering",
                    "Perform a dark ritual.",
                    MissionOption(30, -10, "Perform the ritual"),
                    MissionOption(60, -25, "Use extra sacrifices for power"),
                    duration=300,
                ),
            ),
        ),
        "jade_merchant_assoc": Group(
            key="jade_merchant_assoc",
            name="Jade Merchant Association",
            kind="association",
            karma_min=-500,
            karma_max=1000,
            home_region="merchant_hub",
            description="A merchant guild offering trade bonuses.",
            missions=(
                Mission(
                    "trade_1",
                    "Trade Route Guard",
                    "Guard a merchant caravan.",
                    MissionOption(25, 2, "Protect honestly"),
                    MissionOption(50, -8, "Steal from the cargo"),
                    duration=240,
                ),
            ),
        ),
    }
)


def get_item(key: str | None) -> Item | None:
    if key is None:
        return None
    return ITEMS.get(key)


def get_region(key: str | None) -> Region | None:
    if key is None:
        return None
    return REGIONS.get(key)


__all__ = [
    "GROUPS",
    "Group",
    "ITEMS",
    "Item",
    "ItemCategory",
    "ItemEffects",
    "LootEntry",
    "Mission",
    "MissionOption",
    "REGIONS",
    "Rarity",
    "Realm",
    "Region",
    "SHOP_ITEMS_BY_REALM",
    "SHOP_PRICE_MULTIPLIER",
    "get_item",
    "get_region",
]
