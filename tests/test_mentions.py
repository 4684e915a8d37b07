import discord
import pytest

from helpers.mentions import (
    build_allowed_mentions,
    extract_role_mentions,
    send_broadcast,
)
from tests.factories import FakeChannel


def test_extract_in_order_with_duplicates() -> None:
    assert extract_role_mentions("<@&1> hello <@&2> <@&1>") == ["1", "2", "1"]


@pytest.mark.parametrize(
    "text",
    [None, "", "no pings here", "<@123> is a user", "<#55> is a channel", "@everyone", "<@&abc>"],
)
def test_extract_ignores_non_role_mentions(text) -> None:
    assert extract_role_mentions(text) == []


def test_allowed_mentions_only_permit_listed_roles() -> None:
    allowed = build_allowed_mentions("<@&10> <@&20> <@&10> @everyone <@99>")

    assert allowed.everyone is False
    assert allowed.users is False
    assert allowed.replied_user is False
    assert [role.id for role in allowed.roles] == [10, 20]


def test_allowed_mentions_without_roles() -> None:
    allowed = build_allowed_mentions("plain text")
    assert allowed.roles == []
    assert allowed.everyone is False


@pytest.mark.asyncio
async def test_send_broadcast_passes_text_and_allowed_mentions() -> None:
    channel = FakeChannel()
    await send_broadcast(channel, "Heads up <@&7>")

    assert channel.sent == ["Heads up <@&7>"]
    allowed = channel._sent_messages[0]["allowed_mentions"]
    assert isinstance(allowed, discord.AllowedMentions)
    assert [role.id for role in allowed.roles] == [7]
