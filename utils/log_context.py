"""
Utilities for building structured logging context from Discord objects.

Provides helper functions to extract guild_id, user_id, channel_id, etc.
from discord.py objects for consistent logging across the bot.
"""

from typing import Any

import discord


def get_context_extra(
    interaction: discord.Interaction | None = None,
    user: discord.abc.User | None = None,
    channel: discord.abc.Messageable | None = None,
    **additional: Any,
) -> dict[str, Any]:
    """
    Build a structured logging extra dict from Discord objects.

    Args:
        interaction: Interaction (extracts guild, user, channel, command)
        user: User or Member object (overrides interaction.user if provided)
        channel: Channel object (overrides interaction.channel if provided)
        **additional: Any additional key-value pairs to include

    Returns:
        Dict with guild_id, user_id, channel_id, and any additional fields

    Examples:
        logger.info("Button clicked", extra=get_context_extra(interaction, confirm_token=token))
        logger.info("Repeat fired", extra=get_context_extra(channel=channel, repeat_id=entry.id))
    """
    extra: dict[str, Any] = {}
    guild = None

    if interaction is not None:
        guild = getattr(interaction, "guild", None)
        user = user or getattr(interaction, "user", None)
        channel = channel or getattr(interaction, "channel", None)

        command = getattr(interaction, "command", None)
        if command is not None and getattr(command, "name", None):
            extra["command_name"] = command.name

    if guild is not None:
        extra["guild_id"] = str(guild.id)
    if user is not None:
        extra["user_id"] = str(user.id)
    if channel is not None and getattr(channel, "id", None) is not None:
        extra["channel_id"] = str(channel.id)

    extra.update(additional)

    return extra


def get_interaction_extra(
    interaction: discord.Interaction, **additional: Any
) -> dict[str, Any]:
    """
    Convenience wrapper for get_context_extra specifically for interactions.
    """
    return get_context_extra(interaction=interaction, **additional)
