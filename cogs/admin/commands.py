"""
Admin commands: /commandlogs.
"""

from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands

from helpers.discord_reply import send_command_response
from services.dispatcher import CommandContext


class AdminCog(commands.Cog):
    """Audit trail of command usage."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    @app_commands.command(
        name="commandlogs", description="Show the most recent command invocations."
    )
    @app_commands.describe(user="Only show commands run by this user")
    async def commandlogs(
        self, interaction: discord.Interaction, user: discord.User | None = None
    ) -> None:
        ctx = CommandContext.from_interaction(interaction, "commandlogs", user=user)
        response = await self.bot.services.dispatcher.dispatch(ctx)
        await send_command_response(interaction, response)


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(AdminCog(bot))
