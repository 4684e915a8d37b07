"""
Channel insight commands: /summarize and /status.
"""

from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands

from helpers.discord_reply import send_command_response
from services.dispatcher import CommandContext


class InfoCog(commands.Cog):
    """Summaries and status lookups over recent channel history."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    @app_commands.command(
        name="summarize", description="Summarize the recent messages in this channel."
    )
    async def summarize(self, interaction: discord.Interaction) -> None:
        ctx = CommandContext.from_interaction(interaction, "summarize")
        response = await self.bot.services.dispatcher.dispatch(ctx)
        await send_command_response(interaction, response)

    @app_commands.command(
        name="status", description="Show the latest flagged status word in this channel."
    )
    async def status(self, interaction: discord.Interaction) -> None:
        ctx = CommandContext.from_interaction(interaction, "status")
        response = await self.bot.services.dispatcher.dispatch(ctx)
        await send_command_response(interaction, response)


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(InfoCog(bot))
