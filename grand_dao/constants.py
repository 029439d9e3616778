"""Shared tuning constants for the cultivation simulation."""

from __future__ import annotations

from types import MappingProxyType

# XP curve: floor(BASE_XP * SCALE_FACTOR ** level * tier multiplier).
BASE_XP = 100
SCALE_FACTOR = 2.2
TIER_MULTIPLIERS = MappingProxyType({1: 1, 2: 5, 3: 25})
MAX_PATH_LEVEL = 12

# XP granted per second before any modifiers.
BASE_XP_PER_SECOND = 1.0
CLICK_BOOST_MULTIPLIER = 2.0

# Cadences, expressed in seconds of game time.
AUTO_SAVE_INTERVAL = 30
OFFLINE_CAP_SECONDS = 8 * 60 * 60
OFFLINE_MINIMUM_SECONDS = 5
OFFLINE_STONE_INTERVAL = 600
EVENT_CHECK_INTERVAL = 60

MAX_LOG_MESSAGES = 50

KARMA_MIN = -1000
KARMA_MAX = 1000
DEVIL_KARMA_THRESHOLD = -100
KARMA_VISIBILITY_LEVEL = 5

# Breakthrough failure bands, cumulative over a second uniform draw.
DEATH_THRESHOLD = 0.05
CRIPPLING_THRESHOLD = 0.15
DEVIATION_THRESHOLD = 0.50
MAX_BREAKTHROUGH_CHANCE = 0.95
LUCK_BREAKTHROUGH_WEIGHT = 0.05
QI_DEVIATION_DURATION = 1800
DEVIATION_XP_FACTOR = 0.5
CRIPPLED_XP_FRACTION = 0.5
SETBACK_XP_FRACTION = 0.7

# Exploration odds per tick.
BASE_DISCOVERY_RATE = 0.005
LUCK_DISCOVERY_WEIGHT = 0.025
ROGUE_DISCOVERY_BONUS = 0.005
STONE_TRICKLE_CHANCE = 0.033
STONE_TRICKLE_LOG_CHANCE = 0.3
FATED_ENCOUNTER_BASE_CHANCE = 0.0001
FATED_LUCK_WEIGHT = 5

# Special unlock odds per tick.
BEAST_TAMER_REGION = "spirit_beast_territory"
BEAST_TAMER_CHANCE = 0.005
DREAM_UNLOCK_CHANCE = 0.0002

# Tribulation tuning.
TRIBULATION_STRIKES = MappingProxyType({1: 3, 2: 6})
TRIBULATION_WINDOWS = MappingProxyType({1: 3.0, 2: 2.0})
TRIBULATION_DAMAGE_FRACTION = 0.3
TRIBULATION_LEVEL_HP = 10
TRIBULATION_BODY_HP = 20

# Rebirth carry-over.
LEGACY_RATE = 0.01

# Spirit stone boost.
BOOST_BASE_COST = 10
BOOST_COST_STEP = 10
BOOST_MULTIPLIER = 5.0
BOOST_DURATION = 600

TRAVEL_BASE_SECONDS = 30
TRAVEL_DANGER_SECONDS = 30

SHOP_MARKUP = 3
