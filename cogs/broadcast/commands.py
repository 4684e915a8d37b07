"""
Broadcast commands: /say and /stoprepeat.
"""

from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands

from helpers.discord_reply import send_command_response
from services.dispatcher import CommandContext


class BroadcastCog(commands.Cog):
    """Send announcements to the current channel, optionally on a timer."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    @app_commands.command(
        name="say", description="Send a message to this channel, optionally repeating it."
    )
    @app_commands.describe(
        message="The message to send (role mentions will ping)",
        repeat="Repeat the message on a timer",
        interval="Minutes between repeats",
    )
    async def say(
        self,
        interaction: discord.Interaction,
        message: str,
        repeat: bool = False,
        interval: app_commands.Range[int, 1] | None = None,
    ) -> None:
        ctx = CommandContext.from_interaction(
            interaction, "say", message=message, repeat=repeat, interval=interval
        )
        response = await self.bot.services.dispatcher.dispatch(ctx)
        await send_command_response(interaction, response)

    @app_commands.command(name="stoprepeat", description="Stop a repeating message.")
    @app_commands.describe(id="The repeat ID, e.g. repeat_1")
    async def stoprepeat(self, interaction: discord.Interaction, id: str) -> None:
        ctx = CommandContext.from_interaction(interaction, "stoprepeat", id=id)
        response = await self.bot.services.dispatcher.dispatch(ctx)
        await send_command_response(interaction, response)


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(BroadcastCog(bot))
