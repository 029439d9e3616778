from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

PROJECT_BASE = Path(__file__).resolve().parents[1]
if str(PROJECT_BASE) not in sys.path:
    sys.path.insert(0, str(PROJECT_BASE))

from grand_dao import commands
from grand_dao.context import GameContext
from grand_dao.game import add_item
from grand_dao.models.progression import ActionType
from grand_dao.models.state import GameState, PathProgress
from grand_dao.tribulation import Tribulation


def _ready(state: GameState, level: int = 1) -> None:
    progress = state.path_progress["martial"]
    progress.set_level(level)
    progress.add_xp(progress.xp_required)


# ---------------------------------------------------------------------------
# Actions and paths
# ---------------------------------------------------------------------------


def test_unknown_action_is_rejected(state: GameState, context: GameContext) -> None:
    before = state.to_mapping()
    result = commands.set_action(state, context, "dance")
    assert not result.success
    assert state.to_mapping() == before


def test_action_selects_matching_path_and_toggles(state: GameState, context: GameContext) -> None:
    state.path_progress["spirit"] = PathProgress("spirit")
    state.active_path = "martial"

    assert commands.set_action(state, context, "cultivate").success
    assert state.current_action is ActionType.CULTIVATE
    assert state.active_path == "spirit"

    assert commands.set_action(state, context, "train").success
    assert state.active_path == "martial"

    result = commands.set_action(state, context, ActionType.TRAIN)
    assert result.data is ActionType.IDLE
    assert state.current_action is ActionType.IDLE


def test_cultivating_without_scripture_warns(state: GameState, context: GameContext) -> None:
    commands.set_action(state, context, "cultivate")
    assert state.active_path == "martial"
    assert "Cultivation Scripture" in state.event_log[0].text


def test_sealed_path_cannot_be_focused(state: GameState, context: GameContext) -> None:
    assert not commands.set_active_path(state, context, "spirit").success
    assert not commands.set_active_path(state, context, "nonsense").success
    assert state.active_path == "martial"


def test_equipping_scripture_opens_spirit_path(state: GameState, context: GameContext) -> None:
    assert not commands.equip_scripture(state, context, "basic_scripture").success
    add_item(state, "basic_scripture")
    assert commands.equip_scripture(state, context, "basic_scripture").success
    assert state.equipped_scripture == "basic_scripture"
    assert state.is_unlocked("spirit")


# ---------------------------------------------------------------------------
# Boosts and items
# ---------------------------------------------------------------------------


def test_boost_cost_rises_with_each_stack(state: GameState, context: GameContext) -> None:
    state.spirit_stones = 35
    assert commands.buy_boost(state, context).data == 10
    assert commands.buy_boost(state, context).data == 20
    assert state.spirit_stones == 5
    assert not commands.buy_boost(state, context).success
    assert len(state.buffs) == 2
    assert all(buff.multiplier == 5.0 for buff in state.buffs)


def test_pill_grants_timed_buff(state: GameState, context: GameContext) -> None:
    add_item(state, "basic_pill", 2)
    assert commands.use_item(state, context, "basic_pill").success
    assert state.item_quantity("basic_pill") == 1
    buff = state.buffs[0]
    assert buff.key == f"pill_basic_pill_{int(context.now())}"
    assert buff.multiplier == 1.5
    assert buff.remaining_seconds == 300


def test_cure_clears_deviation(state: GameState, context: GameContext) -> None:
    add_item(state, "deviation_cure")
    state.qi_deviation.start(1800)
    assert commands.use_item(state, context, "deviation_cure").success
    assert not state.qi_deviation.active
    assert not state.has_item("deviation_cure")


def test_only_pills_are_consumed(state: GameState, context: GameContext) -> None:
    add_item(state, "iron_ore")
    assert not commands.use_item(state, context, "iron_ore").success
    assert not commands.use_item(state, context, "basic_pill").success
    assert state.has_item("iron_ore")


# ---------------------------------------------------------------------------
# Breakthrough
# ---------------------------------------------------------------------------


def test_breakthrough_requires_full_xp(state: GameState, context: GameContext) -> None:
    assert not commands.attempt_breakthrough(state, context).success


def test_breakthrough_spends_every_pill(state: GameState, context: GameContext, rng) -> None:
    _ready(state)
    add_item(state, "breakthrough_pill", 2)
    rng.queue(0.0)
    result = commands.attempt_breakthrough(state, context)
    assert result.success
    assert not state.has_item("breakthrough_pill")
    assert state.path_progress["martial"].level == 2


def test_breakthrough_can_keep_pills(state: GameState, context: GameContext, rng) -> None:
    _ready(state)
    add_item(state, "breakthrough_pill")
    rng.queue(0.0)
    commands.attempt_breakthrough(state, context, use_pills=False)
    assert state.has_item("breakthrough_pill")


def test_fatal_breakthrough_rebirths_in_place(state: GameState, context: GameContext, rng) -> None:
    _ready(state, 2)
    state.highest_path_level = 2
    original = state
    rng.queue(0.99, 0.01)
    result = commands.attempt_breakthrough(state, context)
    assert not result.success
    assert result.data.is_death
    assert original is state
    assert state.character.rebirth_count == 1
    assert state.total_deaths == 1
    assert state.path_progress["martial"].level == 1


def test_tier_boundary_starts_tribulation(state: GameState, context: GameContext) -> None:
    _ready(state, 4)
    result = commands.attempt_breakthrough(state, context)
    assert result.success
    assert isinstance(result.data, Tribulation)
    assert not commands.attempt_breakthrough(state, context).success
    assert commands.abandon_tribulation(state, context).success
    assert not commands.abandon_tribulation(state, context).success
    assert not commands.resist_strike(state, context).success


# ---------------------------------------------------------------------------
# Travel and events
# ---------------------------------------------------------------------------


def test_travel_to_neighbour(state: GameState, context: GameContext) -> None:
    result = commands.travel_to(state, context, "forest_path")
    assert result.success
    assert result.data == 90
    assert state.travel.traveling
    assert state.travel.destination == "forest_path"


@pytest.mark.parametrize(
    "destination",
    ["atlantis", "peaceful_village", "merchant_hub"],
)
def test_travel_rejections(state: GameState, context: GameContext, destination: str) -> None:
    assert not commands.travel_to(state, context, destination).success
    assert not state.travel.traveling


def test_no_second_journey_while_traveling(state: GameState, context: GameContext) -> None:
    commands.travel_to(state, context, "river_delta")
    assert not commands.travel_to(state, context, "forest_path").success
    assert state.travel.destination == "river_delta"


def test_looting_the_cart(state: GameState, context: GameContext) -> None:
    state.pending_event = "merchant_cart"
    result = commands.choose_event_option(state, context, 1)
    assert result.success
    assert state.character.karma == -10
    assert state.spirit_stones == 40
    assert state.has_item("uncommon_herb")
    assert state.pending_event is None


def test_accepting_dark_power_marks_a_devil(state: GameState, context: GameContext) -> None:
    state.pending_event = "voice_offers_power"
    commands.choose_event_option(state, context, 0)
    assert state.character.karma == -200
    assert state.spirit_stones == 500
    assert state.character.devil_mark
    assert state.is_unlocked("devil_soul")


def test_event_choice_validation(state: GameState, context: GameContext) -> None:
    assert not commands.choose_event_option(state, context, 0).success
    state.pending_event = "merchant_cart"
    assert not commands.choose_event_option(state, context, 5).success
    assert state.pending_event == "merchant_cart"
    assert commands.dismiss_event(state, context).success
    assert state.pending_event is None
    assert not commands.dismiss_event(state, context).success


# ---------------------------------------------------------------------------
# Shops
# ---------------------------------------------------------------------------


def test_village_prices(state: GameState, context: GameContext) -> None:
    stock = dict((item.key, price) for item, price in commands.shop_stock(state))
    assert stock["basic_pill"] == 30
    state.spirit_stones = 35
    assert commands.buy_item(state, context, "basic_pill").success
    assert state.spirit_stones == 5
    assert state.has_item("basic_pill")
    assert not commands.buy_item(state, context, "basic_pill").success


def test_merchant_discount(make_state: Callable[..., GameState], context: GameContext) -> None:
    state = make_state("merchants_child")
    stock = dict((item.key, price) for item, price in commands.shop_stock(state))
    assert stock["basic_pill"] == 27


def test_no_market_in_the_forest(state: GameState, context: GameContext) -> None:
    state.location = "forest_path"
    state.spirit_stones = 1000
    assert commands.shop_stock(state) == []
    assert not commands.buy_item(state, context, "basic_pill").success


def test_unsold_wares_are_rejected(state: GameState, context: GameContext) -> None:
    state.spirit_stones = 1000
    assert not commands.buy_item(state, context, "fate_anchor").success


def test_selling(state: GameState, context: GameContext) -> None:
    add_item(state, "dimensional_ring")
    add_item(state, "basic_pill")
    assert not commands.sell_item(state, context, "dimensional_ring").success
    assert commands.sell_item(state, context, "basic_pill").data == 10
    assert state.spirit_stones == 10
    assert not state.has_item("basic_pill")


def test_selling_equipped_scripture_unequips(state: GameState, context: GameContext) -> None:
    add_item(state, "basic_scripture")
    commands.equip_scripture(state, context, "basic_scripture")
    assert commands.sell_item(state, context, "basic_scripture").data == 15
    assert state.equipped_scripture is None


# ---------------------------------------------------------------------------
# Groups
# ---------------------------------------------------------------------------


def test_groups_require_a_known_home(state: GameState, context: GameContext) -> None:
    assert commands.available_groups(state) == []
    assert not commands.join_group(state, context, "azure_cloud_sect").success
    state.discovered_regions.append("mystic_mountain_base")
    assert commands.join_group(state, context, "azure_cloud_sect").success


def test_sect_reject_is_welcomed(make_state: Callable[..., GameState]) -> None:
    state = make_state("sect_reject")
    groups = commands.available_groups(state)
    assert "azure_cloud_sect" in groups
    assert "blood_lotus_cult" not in groups


def test_mission_completes_once(make_state: Callable[..., GameState], context: GameContext) -> None:
    state = make_state("sect_reject")
    assert commands.join_group(state, context, "azure_cloud_sect").success
    assert not commands.join_group(state, context, "jade_merchant_assoc").success

    result = commands.complete_mission(state, context, "patrol_1")
    assert result.success
    assert state.spirit_stones == 20
    assert state.character.karma == 3
    assert state.group_contribution == 20
    assert "Mission complete: Mountain Patrol" in state.event_log[0].text

    assert not commands.complete_mission(state, context, "patrol_1").success
    assert not commands.complete_mission(state, context, "trade_1").success


def test_exploit_option(make_state: Callable[..., GameState], context: GameContext) -> None:
    state = make_state("sect_reject")
    commands.join_group(state, context, "azure_cloud_sect")
    commands.complete_mission(state, context, "herb_gather", help=False)
    assert state.spirit_stones == 30
    assert state.character.karma == -3


def test_going_rogue_leaves_the_group(
    make_state: Callable[..., GameState], context: GameContext
) -> None:
    state = make_state("sect_reject")
    commands.join_group(state, context, "azure_cloud_sect")
    assert commands.set_rogue_status(state, context, True).success
    assert state.group_membership is None
    assert state.character.rogue_status
    assert commands.available_groups(state) == []
    assert not commands.set_rogue_status(state, context, True).success
    assert commands.set_rogue_status(state, context, False).success
    assert state.event_log[0].text == "You rejoin society."


def test_leaving_a_group(make_state: Callable[..., GameState], context: GameContext) -> None:
    state = make_state("sect_reject")
    assert not commands.leave_group(state, context).success
    commands.join_group(state, context, "azure_cloud_sect")
    assert commands.leave_group(state, context).success
    assert state.group_membership is None
