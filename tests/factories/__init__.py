"""
Test Factories Module

Centralized factory functions and fixtures for creating test objects.
Provides DRY utilities for Discord mocks and config fixtures.
"""

from .config_factories import (
    make_config,
    make_env,
    temp_config_file,
)
from .discord_factories import (
    FakeBot,
    FakeChannel,
    FakeGuild,
    FakeInteraction,
    FakeMember,
    FakeMessage,
    FakeRole,
    FakeUser,
    make_bot,
    make_channel,
    make_interaction,
    make_member,
    make_messages,
    make_role,
    make_user,
)

__all__ = [
    "FakeBot",
    "FakeChannel",
    "FakeGuild",
    "FakeInteraction",
    "FakeMember",
    "FakeMessage",
    "FakeRole",
    "FakeUser",
    "make_bot",
    "make_channel",
    "make_config",
    "make_env",
    "make_interaction",
    "make_member",
    "make_messages",
    "make_role",
    "make_user",
    "temp_config_file",
]
