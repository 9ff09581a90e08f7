"""Discord runtime that wires the futebol feature into a client."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import discord
from discord import app_commands

from bots import futebol
from bots.config import RosterConfig, env_bool, env_int, read_roster_config
from team_bot.balancer import RANDOM_SEARCH_SAMPLES

log = logging.getLogger("futebol-bot")

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass(slots=True)
class EnvironmentConfig:
    discord_token: str
    roster: RosterConfig
    search_samples: int
    guild_id: int | None
    debug: bool

    @classmethod
    def load(cls) -> "EnvironmentConfig":
        missing: list[str] = []

        def need(name: str) -> str:
            value = os.getenv(name)
            if not value:
                missing.append(name)
                return ""
            return value

        discord_token = need("DISCORD_TOKEN")

        if missing:
            raise RuntimeError("Missing env vars: " + ", ".join(sorted(set(missing))))

        search_samples = env_int(
            "FUTEBOL_SEARCH_SAMPLES", default=RANDOM_SEARCH_SAMPLES
        )
        if search_samples is None or search_samples < 1:
            search_samples = RANDOM_SEARCH_SAMPLES

        return cls(
            discord_token=discord_token,
            roster=read_roster_config(),
            search_samples=search_samples,
            guild_id=env_int("FUTEBOL_GUILD_ID"),
            debug=env_bool("FUTEBOL_DEBUG"),
        )


class FutebolRuntime:
    def __init__(self, config: EnvironmentConfig) -> None:
        intents = discord.Intents.default()
        intents.guilds = True

        self.config = config
        self.bot = discord.Client(intents=intents)
        self.tree = app_commands.CommandTree(self.bot)
        self._synced = False
        self.bot.event(self.on_ready)

    def configure_features(self) -> None:
        futebol.configure_runtime(
            client=self.bot,
            command_tree=self.tree,
            roster_config=self.config.roster,
            samples=self.config.search_samples,
        )

    async def sync_commands(self) -> None:
        if self.config.guild_id is not None:
            guild = discord.Object(id=self.config.guild_id)
            self.tree.copy_global_to(guild=guild)
            commands = await self.tree.sync(guild=guild)
        else:
            # Global commands can take a few minutes to appear in clients.
            commands = await self.tree.sync()
        log.info("Synced %d application commands", len(commands))

    async def on_ready(self) -> None:
        if not self._synced:
            await self.sync_commands()
            self._synced = True
        log.info(
            "Bot ready as %s with %d players on the roster",
            self.bot.user,
            len(self.config.roster.roster),
        )

    async def run(self) -> None:
        self.configure_features()
        async with self.bot:
            await self.bot.start(self.config.discord_token)

    @classmethod
    def create(cls) -> "FutebolRuntime":
        config = EnvironmentConfig.load()
        return cls(config)


async def main() -> None:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    runtime = FutebolRuntime.create()
    if runtime.config.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    await runtime.run()


__all__ = ["EnvironmentConfig", "FutebolRuntime", "main"]
