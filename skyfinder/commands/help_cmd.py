from __future__ import annotations

import discord

from skyfinder.utils.formatters import format_help_message


def register(bot) -> None:
    @bot.tree.command(name="help", description="List the available commands")
    async def help_command(interaction: discord.Interaction) -> None:
        await interaction.response.send_message(format_help_message())
