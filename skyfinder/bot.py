from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from skyfinder.commands import register_all_commands
from skyfinder.services.city_search_service import SearchSession, SearchSessionRegistry

if TYPE_CHECKING:
    from skyfinder.config import Config
    from skyfinder.services.city_search_service import CitySearchService
    from skyfinder.services.weather_service import WeatherService

logger = logging.getLogger(__name__)


class SkyFinderBot(commands.Bot):
    def __init__(
        self,
        *,
        config: "Config",
        city_search_service: "CitySearchService",
        weather_service: "WeatherService",
    ):
        intents = discord.Intents.default()
        super().__init__(command_prefix="!", intents=intents)

        self.config = config
        self.city_search_service = city_search_service
        self.weather_service = weather_service
        self._search_sessions = SearchSessionRegistry(city_search_service)

        register_all_commands(self)

    def search_session_for(self, user_id: str) -> SearchSession:
        return self._search_sessions.get(user_id)

    async def setup_hook(self) -> None:
        if not self.config.has_api_key:
            logger.warning("OPENWEATHER_API_KEY is not set; searches will report a configuration error")

        if self.config.discord_guild_id:
            guild = discord.Object(id=self.config.discord_guild_id)
            self.tree.copy_global_to(guild=guild)
            synced = await self.tree.sync(guild=guild)
            logger.info("Synced %d commands to guild %s", len(synced), self.config.discord_guild_id)
        else:
            synced = await self.tree.sync()
            logger.info("Synced %d global commands", len(synced))

    async def on_ready(self) -> None:
        if self.user:
            logger.info("Logged in as %s (%s)", self.user, self.user.id)


def create_bot(
    *,
    config: "Config",
    city_search_service: "CitySearchService",
    weather_service: "WeatherService",
) -> SkyFinderBot:
    return SkyFinderBot(
        config=config,
        city_search_service=city_search_service,
        weather_service=weather_service,
    )
