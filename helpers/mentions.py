"""
Role mention helpers for broadcasts.

A broadcast may only ping the roles written into its own text; users,
@everyone and replies are never pinged.
"""

import re

import discord

from utils.logging import get_logger

logger = get_logger(__name__)

ROLE_MENTION_RE = re.compile(r"<@&(\d+)>")


def extract_role_mentions(text: str | None) -> list[str]:
    """
    Return the role ids mentioned in ``text`` in order of appearance.

    Duplicates are kept: the length of the result is the ping count used by
    the confirmation gate.

    Example:
        >>> extract_role_mentions("<@&1> hello <@&2> <@&1>")
        ['1', '2', '1']
    """
    if not text:
        return []
    return ROLE_MENTION_RE.findall(text)


def build_allowed_mentions(text: str | None) -> discord.AllowedMentions:
    """AllowedMentions that permit exactly the roles mentioned in ``text``."""
    role_ids = list(dict.fromkeys(extract_role_mentions(text)))
    return discord.AllowedMentions(
        everyone=False,
        users=False,
        roles=[discord.Object(id=int(role_id)) for role_id in role_ids],
        replied_user=False,
    )


async def send_broadcast(channel: discord.abc.Messageable, text: str) -> None:
    """Send ``text`` to ``channel`` with role pings limited to its own mentions."""
    await channel.send(content=text, allowed_mentions=build_allowed_mentions(text))
    logger.debug(
        "Broadcast sent",
        extra={"channel_id": str(getattr(channel, "id", ""))},
    )
