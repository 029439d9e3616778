from __future__ import annotations

import io
from typing import Any, Optional

import discord
from discord import app_commands
from discord.ext import commands

from .. import commands as game_commands
from ..commands import CommandResult
from ..game import xp_per_second
from ..models.character import describe_background
from ..models.events import get_event
from ..models.map import neighbours
from ..models.progression import ActionType, get_path, karma_label, luck_descriptor
from ..models.state import GameState
from ..models.world import GROUPS, get_region
from ..session import GameSession
from ..tribulation import current_tribulation
from ..utils import format_number, format_percent, format_time, progress_bar

ACTION_CHOICES = [
    app_commands.Choice(name=action.value.title(), value=action.value) for action in ActionType
]


def build_status_embed(state: GameState) -> discord.Embed:
    character = state.character
    embed = discord.Embed(
        title=f"{character.name} - {character.spirit_root.name}",
        colour=discord.Colour.from_str("#c9a44a"),
    )
    embed.description = (
        f"{character.body_type.name} · {describe_background(character.background)}\n"
        f"Luck: {luck_descriptor(character.luck)}"
    )
    if state.karma_visible:
        embed.description += f" · Karma: {character.karma} ({karma_label(character.karma)})"

    region = get_region(state.location)
    where = region.name if region else state.location
    if state.travel.traveling:
        destination = get_region(state.travel.destination)
        where = (
            f"Traveling to {destination.name if destination else state.travel.destination} "
            f"(ETA {format_time(state.travel.remaining_seconds)})"
        )
    embed.add_field(name="Location", value=where, inline=False)
    embed.add_field(name="Action", value=state.current_action.value.title(), inline=True)
    embed.add_field(
        name="Spirit Stones", value=format_number(state.spirit_stones), inline=True
    )

    progress = state.active_progress()
    path = get_path(state.active_path)
    if progress is not None and path is not None:
        if progress.breakthrough_available:
            rate = "BREAKTHROUGH READY"
        else:
            rate = f"{xp_per_second(state):.2f} XP/s"
        embed.add_field(
            name=f"{path.name}: {path.level_name(progress.level)}",
            value=(
                f"{progress_bar(progress.xp, progress.xp_required)} "
                f"{format_number(progress.xp)}/{format_number(progress.xp_required)}\n{rate}"
            ),
            inline=False,
        )

    if state.buffs:
        embed.add_field(
            name="Buffs",
            value="\n".join(
                f"{buff.label or buff.key} x{buff.multiplier:g} ({format_time(buff.remaining_seconds)})"
                for buff in state.buffs
            ),
            inline=False,
        )
    if state.qi_deviation.active:
        embed.add_field(
            name="Qi Deviation",
            value=f"Speed halved for {format_time(state.qi_deviation.remaining_seconds)}",
            inline=False,
        )
    tribulation = current_tribulation(state)
    if tribulation is not None:
        embed.add_field(
            name="Heavenly Tribulation",
            value=(
                f"HP {tribulation.hp}/{tribulation.max_hp} · "
                f"strike {tribulation.current_strike + 1}/{tribulation.strikes}"
            ),
            inline=False,
        )
    if character.rebirth_count:
        embed.set_footer(
            text=f"Rebirth #{character.rebirth_count} · Legacy +{format_percent(character.legacy_bonus)} XP"
        )
    return embed


def build_log_embed(state: GameState, limit: int = 10) -> discord.Embed:
    lines = [entry.text for entry in state.event_log[:limit]]
    return discord.Embed(
        title="Chronicle",
        description="\n".join(lines) or "Nothing has happened yet.",
        colour=discord.Colour.dark_gold(),
    )


class CultivationCog(commands.Cog):
    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @property
    def session(self) -> GameSession:
        return self.bot.session  # type: ignore[attr-defined]

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        owner_id = getattr(self.bot.config, "owner_id", None)  # type: ignore[attr-defined]
        if owner_id is None or interaction.user.id == owner_id:
            return True
        await interaction.response.send_message(
            "Only the cultivator's owner may act.", ephemeral=True
        )
        return False

    async def _run(
        self,
        interaction: discord.Interaction,
        command: Any,
        *args: Any,
        **kwargs: Any,
    ) -> CommandResult:
        result = await self.session.run_command(command, *args, **kwargs)
        await interaction.response.send_message(result.message, ephemeral=not result.success)
        return result

    @app_commands.command(name="status", description="Show your cultivator")
    async def status(self, interaction: discord.Interaction) -> None:
        state = await self.session.snapshot()
        await interaction.response.send_message(embed=build_status_embed(state))

    @app_commands.command(name="chronicle", description="Show the most recent events")
    async def chronicle(self, interaction: discord.Interaction) -> None:
        state = await self.session.snapshot()
        await interaction.response.send_message(embed=build_log_embed(state), ephemeral=True)

    @app_commands.command(name="action", description="Choose how to spend your time")
    @app_commands.choices(action=ACTION_CHOICES)
    async def action(
        self, interaction: discord.Interaction, action: app_commands.Choice[str]
    ) -> None:
        await self._run(interaction, game_commands.set_action, action.value)

    @app_commands.command(name="path", description="Focus on an unlocked path")
    @app_commands.describe(path_key="Key of the path, e.g. spirit or martial")
    async def path(self, interaction: discord.Interaction, path_key: str) -> None:
        await self._run(interaction, game_commands.set_active_path, path_key)

    @app_commands.command(name="meditate", description="Focus hard: doubles the next second of XP")
    async def meditate(self, interaction: discord.Interaction) -> None:
        self.session.click()
        await interaction.response.send_message("You focus your breathing.", ephemeral=True)

    @app_commands.command(name="breakthrough", description="Attempt a breakthrough")
    @app_commands.describe(use_pills="Consume breakthrough pills for a better chance")
    async def breakthrough(self, interaction: discord.Interaction, use_pills: bool = True) -> None:
        await self._run(interaction, game_commands.attempt_breakthrough, use_pills)

    @app_commands.command(name="resist", description="Endure the current lightning strike")
    async def resist(self, interaction: discord.Interaction) -> None:
        await self._run(interaction, game_commands.resist_strike)

    @app_commands.command(name="flee", description="Abandon the Heavenly Tribulation")
    async def flee(self, interaction: discord.Interaction) -> None:
        await self._run(interaction, game_commands.abandon_tribulation)

    @app_commands.command(name="boost", description="Spend Spirit Stones on a 5x speed boost")
    async def boost(self, interaction: discord.Interaction) -> None:
        await self._run(interaction, game_commands.buy_boost)

    @app_commands.command(name="use", description="Consume a pill")
    async def use(self, interaction: discord.Interaction, item_key: str) -> None:
        await self._run(interaction, game_commands.use_item, item_key)

    @app_commands.command(name="equip", description="Equip a scripture")
    async def equip(self, interaction: discord.Interaction, item_key: str) -> None:
        await self._run(interaction, game_commands.equip_scripture, item_key)

    @app_commands.command(name="travel", description="Travel to a neighbouring region")
    async def travel(self, interaction: discord.Interaction, region_key: str) -> None:
        await self._run(interaction, game_commands.travel_to, region_key)

    @travel.autocomplete("region_key")
    async def travel_autocomplete(
        self, interaction: discord.Interaction, current: str
    ) -> list[app_commands.Choice[str]]:
        choices = []
        for key in neighbours(self.session.state.location):
            region = get_region(key)
            if region is None or current.lower() not in region.name.lower():
                continue
            choices.append(app_commands.Choice(name=region.name, value=key))
        return choices[:25]

    @app_commands.command(name="event", description="Answer the event in front of you")
    @app_commands.describe(choice="Option number, leave empty to see the options")
    async def event(self, interaction: discord.Interaction, choice: Optional[int] = None) -> None:
        if choice is None:
            event = get_event(self.session.state.pending_event)
            if event is None:
                await interaction.response.send_message("Nothing awaits you.", ephemeral=True)
                return
            options = "\n".join(
                f"{index + 1}. {option.text}" for index, option in enumerate(event.choices)
            )
            embed = discord.Embed(
                title=event.title,
                description=f"{event.description}\n\n{options}",
                colour=discord.Colour.purple(),
            )
            await interaction.response.send_message(embed=embed, ephemeral=True)
            return
        if choice == 0:
            await self._run(interaction, game_commands.dismiss_event)
            return
        await self._run(interaction, game_commands.choose_event_option, choice - 1)

    @app_commands.command(name="shop", description="Browse the local market")
    async def shop(self, interaction: discord.Interaction) -> None:
        state = await self.session.snapshot()
        stock = game_commands.shop_stock(state)
        if not stock:
            await interaction.response.send_message(
                "Travel to a city or town to access shops.", ephemeral=True
            )
            return
        embed = discord.Embed(title="Market", colour=discord.Colour.green())
        for item, price in stock:
            embed.add_field(
                name=f"{item.name} ({item.key})",
                value=f"{format_number(price)} SS",
                inline=True,
            )
        await interaction.response.send_message(embed=embed, ephemeral=True)

    @app_commands.command(name="buy", description="Buy an item from the local market")
    async def buy(self, interaction: discord.Interaction, item_key: str) -> None:
        await self._run(interaction, game_commands.buy_item, item_key)

    @app_commands.command(name="sell", description="Sell an item at the local market")
    async def sell(self, interaction: discord.Interaction, item_key: str) -> None:
        await self._run(interaction, game_commands.sell_item, item_key)

    @app_commands.command(name="join", description="Join a sect, cult or association")
    async def join(self, interaction: discord.Interaction, group_key: str) -> None:
        await self._run(interaction, game_commands.join_group, group_key)

    @join.autocomplete("group_key")
    async def join_autocomplete(
        self, interaction: discord.Interaction, current: str
    ) -> list[app_commands.Choice[str]]:
        return [
            app_commands.Choice(name=GROUPS[key].name, value=key)
            for key in game_commands.available_groups(self.session.state)
            if current.lower() in GROUPS[key].name.lower()
        ]

    @app_commands.command(name="leave", description="Leave your group")
    async def leave(self, interaction: discord.Interaction) -> None:
        await self._run(interaction, game_commands.leave_group)

    @app_commands.command(name="mission", description="Complete a mission for your group")
    @app_commands.describe(honest="Help honestly instead of exploiting the mission")
    async def mission(
        self, interaction: discord.Interaction, mission_key: str, honest: bool = True
    ) -> None:
        await self._run(interaction, game_commands.complete_mission, mission_key, honest)

    @app_commands.command(name="rogue", description="Walk the path alone, or rejoin society")
    async def rogue(self, interaction: discord.Interaction, enabled: bool) -> None:
        await self._run(interaction, game_commands.set_rogue_status, enabled)

    @app_commands.command(name="save", description="Save your progress now")
    async def save(self, interaction: discord.Interaction) -> None:
        saved = await self.session.save()
        message = "Progress saved." if saved else "The save could not be written."
        await interaction.response.send_message(message, ephemeral=True)

    @app_commands.command(name="export", description="Export your save as text")
    async def export(self, interaction: discord.Interaction) -> None:
        state = await self.session.snapshot()
        text = self.session.store.export_text(state)
        await interaction.response.send_message(
            file=discord.File(io.BytesIO(text.encode("utf8")), filename="grand_dao_save.txt"),
            ephemeral=True,
        )


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(CultivationCog(bot))
