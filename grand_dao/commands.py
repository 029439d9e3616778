"""Player commands applied to a :class:`GameState`.

Each command validates its arguments against the static tables and the
current state first.  A rejected command returns a failed
:class:`CommandResult` and leaves the state untouched.
"""

from __future__ import annotations

import logging
import math
from typing import Any, NamedTuple, Optional

from .breakthrough import BreakthroughOutcome, needs_tribulation, ready_progress
from .breakthrough import attempt_breakthrough as roll_breakthrough
from .constants import BOOST_BASE_COST, BOOST_COST_STEP, BOOST_DURATION, BOOST_MULTIPLIER, SHOP_MARKUP
from .context import GameContext
from .engine import apply_devil_mark
from .exploration import grant_item
from .game import add_item, consume_breakthrough_pills, count_buffs, remove_item
from .models.events import get_event
from .models.map import is_adjacent, travel_seconds
from .models.progression import ActionType, get_path
from .models.state import ActiveBuff, GameState, LogKind
from .models.world import (
    GROUPS,
    ITEMS,
    SHOP_ITEMS_BY_REALM,
    SHOP_PRICE_MULTIPLIER,
    Item,
    ItemCategory,
    Region,
    get_region,
)
from .paths import check_path_unlocks
from .rebirth import rebirth
from .tribulation import (
    StrikeOutcome,
    StrikeResult,
    abandon_tribulation as cancel_tribulation,
    current_tribulation,
    fail_strike as take_strike,
    resist_strike as endure_strike,
    start_tribulation,
)
from .utils import format_time

log = logging.getLogger(__name__)

BOOST_KEY = "ss_boost"

# Paths selected automatically when an action is chosen, first unlocked wins.
ACTION_PATH_PRIORITY = {
    ActionType.CULTIVATE: (
        "spirit",
        "rogue",
        "devil_soul",
        "oracle",
        "harmonic",
        "bloodline",
        "dream",
        "necromancy",
    ),
    ActionType.TRAIN: ("martial", "devil_body"),
}


class CommandResult(NamedTuple):
    success: bool
    message: str
    data: Any = None


def _fail(message: str) -> CommandResult:
    return CommandResult(False, message)


# ---------------------------------------------------------------------------
# Actions and paths
# ---------------------------------------------------------------------------


def set_action(state: GameState, context: GameContext, action: str) -> CommandResult:
    """Switch the current action; choosing the running action again idles."""

    valid = {member.value for member in ActionType}
    if isinstance(action, ActionType):
        chosen = action
    elif str(action).strip().lower() in valid:
        chosen = ActionType(str(action).strip().lower())
    else:
        return _fail(f"Unknown action: {action}")

    if chosen is state.current_action:
        state.current_action = ActionType.IDLE
        return CommandResult(True, "You rest.", ActionType.IDLE)

    state.current_action = chosen
    priority = ACTION_PATH_PRIORITY.get(chosen, ())
    selected = next((key for key in priority if state.is_unlocked(key)), None)
    if selected is not None:
        state.active_path = selected
    elif chosen is ActionType.CULTIVATE:
        context.add_log(
            state,
            "You need a Cultivation Scripture to cultivate the Spirit. "
            "Try Exploring or Training first!",
            LogKind.WARNING,
        )
    return CommandResult(True, f"You begin to {chosen.value}.", chosen)


def set_active_path(state: GameState, context: GameContext, path_key: str) -> CommandResult:
    path = get_path(path_key)
    if path is None:
        return _fail(f"Unknown path: {path_key}")
    if not state.is_unlocked(path_key):
        return _fail(f"{path.name} is still sealed to you.")
    state.active_path = path_key
    return CommandResult(True, f"Focusing on {path.name}.", path_key)


def equip_scripture(state: GameState, context: GameContext, item_key: str) -> CommandResult:
    item = ITEMS.get(item_key)
    if item is None or item.category is not ItemCategory.SCRIPTURE:
        return _fail("That is not a scripture.")
    if not state.has_item(item_key):
        return _fail(f"You do not carry {item.name}.")
    state.equipped_scripture = item_key
    context.add_log(state, f"Equipped: {item.name}", LogKind.SUCCESS)
    check_path_unlocks(state, context)
    return CommandResult(True, f"Equipped {item.name}.", item_key)


# ---------------------------------------------------------------------------
# Buffs and items
# ---------------------------------------------------------------------------


def boost_cost(state: GameState) -> int:
    return BOOST_BASE_COST + BOOST_COST_STEP * count_buffs(state, BOOST_KEY)


def buy_boost(state: GameState, context: GameContext) -> CommandResult:
    cost = boost_cost(state)
    if state.spirit_stones < cost:
        return _fail(f"You need {cost} Spirit Stones.")
    state.spirit_stones -= cost
    state.buffs.append(
        ActiveBuff(BOOST_KEY, BOOST_MULTIPLIER, BOOST_DURATION, "Spirit Stone Boost")
    )
    context.add_log(
        state,
        f"Activated 5x speed boost for 10 minutes! (Cost: {cost} SS)",
        LogKind.SUCCESS,
    )
    return CommandResult(True, f"Boost active for {format_time(BOOST_DURATION)}.", cost)


def use_item(state: GameState, context: GameContext, item_key: str) -> CommandResult:
    entry = state.inventory_entry(item_key)
    if entry is None:
        return _fail("You do not have that item.")
    item = entry.item
    if item.category is not ItemCategory.PILL:
        return _fail(f"{item.name} cannot be consumed.")

    effects = item.effects
    if effects.heal_qi_deviation and state.qi_deviation.active:
        state.qi_deviation.clear()
        context.add_log(state, "Qi Deviation cured!", LogKind.SUCCESS)

    if effects.xp_multiplier and effects.xp_multiplier_duration:
        state.buffs.append(
            ActiveBuff(
                f"pill_{item_key}_{int(context.now())}",
                effects.xp_multiplier,
                effects.xp_multiplier_duration,
                item.name,
            )
        )
        context.add_log(
            state,
            f"{item.name} consumed! {effects.xp_multiplier:g}x XP for "
            f"{format_time(effects.xp_multiplier_duration)}",
            LogKind.SUCCESS,
        )

    remove_item(state, item_key)
    return CommandResult(True, f"Consumed {item.name}.", item_key)


# ---------------------------------------------------------------------------
# Breakthrough and tribulation
# ---------------------------------------------------------------------------


def attempt_breakthrough(
    state: GameState, context: GameContext, use_pills: bool = True
) -> CommandResult:
    """Attempt the active path's breakthrough.

    At a tier boundary a tribulation starts instead and is returned in
    ``data``.  Otherwise ``data`` holds the :class:`BreakthroughResult`; a
    fatal attempt has already rebuilt ``state`` as the next life.
    """

    if current_tribulation(state) is not None:
        return _fail("The heavens are already striking.")
    if ready_progress(state) is None:
        return _fail("Not ready for breakthrough.")

    if needs_tribulation(state):
        tribulation = start_tribulation(state, context)
        return CommandResult(True, "The heavens darken above you...", tribulation)

    pill_bonus = consume_breakthrough_pills(state) if use_pills else 0.0
    result = roll_breakthrough(state, context, pill_bonus)
    if result.outcome is BreakthroughOutcome.DEATH:
        state.assign_from(rebirth(state, context))
    return CommandResult(result.success, result.message, result)


def _strike_result(result: StrikeResult) -> CommandResult:
    return CommandResult(result.outcome is not StrikeOutcome.IGNORED, result.message, result)


def resist_strike(state: GameState, context: GameContext) -> CommandResult:
    return _strike_result(endure_strike(state, context))


def fail_strike(
    state: GameState,
    context: GameContext,
    tribulation_id: Optional[int] = None,
    strike: Optional[int] = None,
) -> CommandResult:
    return _strike_result(take_strike(state, context, tribulation_id, strike))


def abandon_tribulation(state: GameState, context: GameContext) -> CommandResult:
    if not cancel_tribulation(state, context):
        return _fail("There is no tribulation to flee.")
    return CommandResult(True, "You flee from the heavens.")


# ---------------------------------------------------------------------------
# Travel and events
# ---------------------------------------------------------------------------


def travel_to(state: GameState, context: GameContext, region_key: str) -> CommandResult:
    target = get_region(region_key)
    if target is None:
        return _fail(f"Unknown region: {region_key}")
    if state.travel.traveling:
        return _fail("You are already on the road.")
    if region_key == state.location:
        return _fail(f"You are already in {target.name}.")
    if not is_adjacent(state.location, region_key):
        return _fail(f"{target.name} cannot be reached from here.")

    seconds = travel_seconds(region_key)
    state.travel.begin(region_key, seconds)
    context.add_log(state, f"Traveling to {target.name}... ({format_time(seconds)})")
    return CommandResult(True, f"Setting out for {target.name}.", seconds)


def choose_event_option(state: GameState, context: GameContext, index: int) -> CommandResult:
    event = get_event(state.pending_event)
    if event is None:
        return _fail("Nothing awaits your decision.")
    choice = event.choice(index)
    if choice is None:
        return _fail("That is not one of the choices.")

    if choice.karma_change:
        state.character.adjust_karma(choice.karma_change)
    if choice.stones_reward:
        state.spirit_stones += choice.stones_reward
    if choice.stones_loss:
        state.spirit_stones = max(0, state.spirit_stones - choice.stones_loss)
    for item_key in choice.item_rewards:
        item = ITEMS.get(item_key)
        if item is not None:
            grant_item(state, context, item)
    if choice.time_penalty:
        context.add_log(
            state, f"You lose {format_time(choice.time_penalty)} to the detour.", LogKind.WARNING
        )

    context.add_log(state, f"{event.title}: {choice.text}")
    check_path_unlocks(state, context)
    apply_devil_mark(state, context)
    state.pending_event = None
    log.debug("Event %s resolved with option %d", event.key, index)
    return CommandResult(True, choice.text, choice)


def dismiss_event(state: GameState, context: GameContext) -> CommandResult:
    if state.pending_event is None:
        return _fail("Nothing awaits your decision.")
    state.pending_event = None
    return CommandResult(True, "You walk on.")


# ---------------------------------------------------------------------------
# Shops
# ---------------------------------------------------------------------------


def _market(state: GameState) -> Optional[Region]:
    region = get_region(state.location)
    if region is None or state.travel.traveling or not region.has_market:
        return None
    return region


def shop_price(state: GameState, region: Region, item: Item) -> int:
    discount = state.character.background.bonus.shop_discount
    multiplier = SHOP_PRICE_MULTIPLIER.get(region.realm, 1)
    return math.floor(item.sell_value * SHOP_MARKUP * multiplier * (1 - discount))


def shop_stock(state: GameState) -> list[tuple[Item, int]]:
    region = _market(state)
    if region is None:
        return []
    items = (ITEMS[key] for key in SHOP_ITEMS_BY_REALM.get(region.realm, ()) if key in ITEMS)
    return [(item, shop_price(state, region, item)) for item in items]


def buy_item(state: GameState, context: GameContext, item_key: str) -> CommandResult:
    region = _market(state)
    if region is None:
        return _fail("Travel to a city or town to access shops.")
    item = ITEMS.get(item_key)
    if item is None or item_key not in SHOP_ITEMS_BY_REALM.get(region.realm, ()):
        return _fail("The merchants here do not sell that.")
    price = shop_price(state, region, item)
    if state.spirit_stones < price:
        return _fail(f"You need {price} Spirit Stones.")
    state.spirit_stones -= price
    add_item(state, item_key)
    context.add_log(state, f"Bought {item.name} for {price} SS")
    return CommandResult(True, f"Bought {item.name}.", price)


def sell_item(state: GameState, context: GameContext, item_key: str) -> CommandResult:
    if _market(state) is None:
        return _fail("Travel to a city or town to access shops.")
    entry = state.inventory_entry(item_key)
    if entry is None:
        return _fail("You do not have that item.")
    item = entry.item
    if item.sell_value <= 0:
        return _fail(f"No merchant will buy {item.name}.")
    state.spirit_stones += item.sell_value
    remove_item(state, item_key)
    if state.equipped_scripture == item_key and not state.has_item(item_key):
        state.equipped_scripture = None
    context.add_log(state, f"Sold {item.name} for {item.sell_value} SS")
    return CommandResult(True, f"Sold {item.name}.", item.sell_value)


# ---------------------------------------------------------------------------
# Groups
# ---------------------------------------------------------------------------


def available_groups(state: GameState) -> list[str]:
    character = state.character
    if character.rogue_status:
        return []
    return [
        key
        for key, group in GROUPS.items()
        if group.accepts_karma(character.karma)
        and (
            group.home_region in state.discovered_regions
            or character.background.bonus.sect_access
        )
    ]


def join_group(state: GameState, context: GameContext, group_key: str) -> CommandResult:
    group = GROUPS.get(group_key)
    if group is None:
        return _fail(f"Unknown group: {group_key}")
    if state.group_membership is not None:
        return _fail("You already belong to a group.")
    if group_key not in available_groups(state):
        return _fail(f"{group.name} will not accept you.")
    state.group_membership = group_key
    state.group_contribution = 0
    context.add_log(state, f"Joined {group.name}!", LogKind.SUCCESS)
    return CommandResult(True, f"Joined {group.name}.", group_key)


def leave_group(state: GameState, context: GameContext) -> CommandResult:
    group = GROUPS.get(state.group_membership or "")
    if group is None:
        return _fail("You belong to no group.")
    state.group_membership = None
    state.group_contribution = 0
    context.add_log(state, f"You left {group.name}.", LogKind.WARNING)
    return CommandResult(True, f"Left {group.name}.")


def complete_mission(
    state: GameState, context: GameContext, mission_key: str, help: bool = True
) -> CommandResult:
    group = GROUPS.get(state.group_membership or "")
    if group is None:
        return _fail("You belong to no group.")
    mission = group.mission(mission_key)
    if mission is None:
        return _fail(f"{group.name} offers no such mission.")
    if mission_key in state.completed_missions:
        return _fail(f"{mission.name} is already complete.")

    option = mission.help_option if help else mission.exploit_option
    state.spirit_stones += option.reward
    state.character.adjust_karma(option.karma_change)
    state.group_contribution += option.reward
    state.completed_missions.append(mission_key)
    context.add_log(
        state,
        f"Mission complete: {mission.name} - +{option.reward} SS, "
        f"{option.karma_change:+d} Karma",
        LogKind.SUCCESS if option.karma_change >= 0 else LogKind.WARNING,
    )
    check_path_unlocks(state, context)
    return CommandResult(True, option.description, option)


def set_rogue_status(state: GameState, context: GameContext, rogue: bool) -> CommandResult:
    rogue = bool(rogue)
    if state.character.rogue_status == rogue:
        return _fail("Nothing changes.")
    state.character.rogue_status = rogue
    if rogue:
        state.group_membership = None
        state.group_contribution = 0
        context.add_log(state, "You walk the path alone...", LogKind.WARNING)
    else:
        context.add_log(state, "You rejoin society.")
    return CommandResult(True, "You go rogue." if rogue else "You rejoin society.", rogue)


__all__ = [
    "ACTION_PATH_PRIORITY",
    "BOOST_KEY",
    "CommandResult",
    "abandon_tribulation",
    "attempt_breakthrough",
    "available_groups",
    "boost_cost",
    "buy_boost",
    "buy_item",
    "choose_event_option",
    "complete_mission",
    "dismiss_event",
    "equip_scripture",
    "fail_strike",
    "join_group",
    "leave_group",
    "resist_strike",
    "sell_item",
    "set_action",
    "set_active_path",
    "set_rogue_status",
    "shop_price",
    "shop_stock",
    "travel_to",
    "use_item",
]
