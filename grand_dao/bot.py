"""Entry point for the Grand Dao Discord presentation layer."""

from __future__ import annotations

import asyncio
import logging

import discord
from discord.ext import commands

from .config import BotConfig, GameConfig
from .session import GameSession
from .storage import SaveStore

log = logging.getLogger(__name__)


class GrandDao(commands.Bot):
    def __init__(self, config: BotConfig, game_config: GameConfig):
        intents = discord.Intents.default()
        super().__init__(command_prefix="!", intents=intents)
        self.config = config
        self.game_config = game_config
        self.store = SaveStore(game_config.data_root, game_config.save_key)
        self.session = GameSession.open(self.store, game_config)
        self._synced = False

    async def setup_hook(self) -> None:
        report = await self.session.start()
        if report is not None and report.applied:
            log.info("Applied %ds of offline progress", report.elapsed)
        await self.load_extension("grand_dao.cogs.cultivation")

    async def on_ready(self) -> None:
        if not self._synced:
            await self.tree.sync()
            self._synced = True
            log.info("Application commands synced")
        if self.user:
            log.info("Connected as %s (%s)", self.user, self.user.id)

    async def close(self) -> None:
        await self.session.stop()
        await super().close()


async def main() -> None:
    game_config = GameConfig.from_env()
    logging.basicConfig(
        level=getattr(logging, game_config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = BotConfig.from_env()
    bot = GrandDao(config, game_config)
    async with bot:
        await bot.start(config.token)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
