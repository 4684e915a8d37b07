"""
Training commands: /trainingresults.
"""

from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands

from helpers.discord_reply import send_command_response
from services.dispatcher import CommandContext


class TrainingCog(commands.Cog):
    """Start the training result wizard for a trainee."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    @app_commands.command(
        name="trainingresults", description="Send training results to a trainee."
    )
    @app_commands.describe(user="The trainee who took the training")
    async def trainingresults(
        self, interaction: discord.Interaction, user: discord.User
    ) -> None:
        """
        Opens a status select; picking a status opens a notes modal, and
        submitting the modal posts the result and DMs the trainee.
        """
        ctx = CommandContext.from_interaction(interaction, "trainingresults", user=user)
        response = await self.bot.services.dispatcher.dispatch(ctx)
        await send_command_response(interaction, response)


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(TrainingCog(bot))
