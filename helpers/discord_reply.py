"""
Centralized Discord reply helpers for consistent message delivery.

All cogs and views should use these helpers instead of calling
interaction.response.send_message() or interaction.followup.send()
directly, so expired interactions and HTTP failures are handled the same
way everywhere.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import discord

from utils.logging import get_logger

if TYPE_CHECKING:
    from discord import Embed, Interaction, Message

    from services.dispatcher import CommandResponse

logger = get_logger(__name__)


async def respond(
    interaction: Interaction,
    content: str | None = None,
    *,
    embed: Embed | None = None,
    ephemeral: bool = True,
    view: discord.ui.View | None = None,
) -> Message | None:
    """
    Unified response helper that handles all interaction response patterns.

    Uses the initial response when it is still available and falls back to a
    followup once the interaction has been responded to or deferred.

    Returns:
        The sent followup message, or None
    """
    try:
        kwargs: dict = {"ephemeral": ephemeral}
        if content:
            kwargs["content"] = content
        if embed:
            kwargs["embed"] = embed
        if view:
            kwargs["view"] = view

        if interaction.response.is_done():
            return await interaction.followup.send(**kwargs)
        await interaction.response.send_message(**kwargs)
        return None

    except discord.NotFound:
        logger.warning("Interaction expired before response could be sent")
        return None
    except discord.HTTPException as e:
        logger.exception(f"Failed to send response: {e}")
        return None


async def send_command_response(
    interaction: Interaction, response: CommandResponse
) -> None:
    """Deliver a dispatcher response, then each of its followups."""
    await respond(
        interaction,
        response.content,
        embed=response.embed,
        view=response.view,
        ephemeral=response.ephemeral,
    )
    for text in response.followups:
        await respond(interaction, text, ephemeral=response.ephemeral)
