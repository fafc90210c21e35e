from __future__ import annotations

import logging

import discord
from discord import app_commands

from skyfinder.utils.formatters import format_search_results

logger = logging.getLogger(__name__)


def register(bot) -> None:
    @bot.tree.command(name="search", description="Search for a city by name")
    @app_commands.describe(query="City name (e.g. Mumbai, Delhi, Bangalore)")
    async def search_command(interaction: discord.Interaction, query: str) -> None:
        user_id = str(interaction.user.id)
        session = bot.search_session_for(user_id)
        text = query.strip()
        if not text:
            session.clear()
            await interaction.response.send_message("❌ Please enter a city name.")
            return

        await interaction.response.defer(thinking=True)

        try:
            result = await session.submit(text)
        except Exception:
            logger.exception("/search failed user=%s query=%s", user_id, text)
            await interaction.followup.send("❌ An unexpected error occurred. Please try again later.")
            return

        if result is None:
            # A newer search from the same user already owns the response.
            await interaction.followup.send("↪️ Superseded by a newer search.")
            return

        await interaction.followup.send(format_search_results(result))
