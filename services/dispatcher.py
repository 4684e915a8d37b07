"""
Command dispatcher.

Cogs turn each slash-command interaction into a CommandContext and hand it
to ``CommandDispatcher.dispatch``. The dispatcher records the invocation in
the command log, applies the access policy, and routes to the handler
registered under the command's name.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import discord

from helpers.permissions_helper import (
    PERMISSION_DENIED_MESSAGE,
    AccessPolicy,
    member_role_ids,
)
from services.command_log import CommandLog
from utils.logging import get_logger

logger = get_logger(__name__)

UNKNOWN_COMMAND_MESSAGE = "Unknown command."


@dataclass
class CommandContext:
    """Everything a handler may look at for one invocation."""

    command: str
    user_id: int
    user_tag: str
    role_ids: frozenset[int] = frozenset()
    interaction_id: int | str = 0
    channel: Any = None
    options: Mapping[str, Any] = field(default_factory=dict)
    defer: Callable[[], Awaitable[None]] | None = None

    @classmethod
    def from_interaction(
        cls, interaction: discord.Interaction, command: str, **options: Any
    ) -> CommandContext:
        """Build a context from a slash-command interaction and its options."""

        async def _defer() -> None:
            if not interaction.response.is_done():
                await interaction.response.defer(ephemeral=True, thinking=True)

        user = interaction.user
        return cls(
            command=command,
            user_id=user.id,
            user_tag=str(user),
            role_ids=frozenset(member_role_ids(user)),
            interaction_id=interaction.id,
            channel=interaction.channel,
            options=options,
            defer=_defer,
        )

    def option(self, name: str, default: Any = None) -> Any:
        value = self.options.get(name, default)
        return default if value is None else value

    @property
    def log_extra(self) -> dict[str, str]:
        extra = {"user_id": str(self.user_id), "command_name": self.command}
        if self.channel is not None and getattr(self.channel, "id", None) is not None:
            extra["channel_id"] = str(self.channel.id)
        return extra


@dataclass
class CommandResponse:
    """What the cog should send back to the invoking user."""

    content: str | None = None
    embed: discord.Embed | None = None
    view: discord.ui.View | None = None
    ephemeral: bool = True
    followups: list[str] = field(default_factory=list)


class CommandHandler(ABC):
    """A single slash command's business logic."""

    name: str = ""

    @abstractmethod
    async def handle(self, ctx: CommandContext) -> CommandResponse:
        raise NotImplementedError


class CommandDispatcher:
    """Registry of handlers keyed by command name."""

    def __init__(self, command_log: CommandLog, policy: AccessPolicy) -> None:
        self.command_log = command_log
        self.policy = policy
        self._handlers: dict[str, CommandHandler] = {}

    def register(self, handler: CommandHandler) -> None:
        if not handler.name:
            raise ValueError(f"{type(handler).__name__} has no command name")
        if handler.name in self._handlers:
            raise ValueError(f"Handler for '{handler.name}' already registered")
        self._handlers[handler.name] = handler

    def handlers(self) -> dict[str, CommandHandler]:
        return dict(self._handlers)

    def get(self, name: str) -> CommandHandler | None:
        return self._handlers.get(name)

    async def dispatch(self, ctx: CommandContext) -> CommandResponse:
        self.command_log.record(ctx.command, ctx.user_tag, ctx.user_id)

        if not self.policy.has_full_access(ctx.user_id, ctx.role_ids):
            logger.info("Permission denied", extra=ctx.log_extra)
            return CommandResponse(content=PERMISSION_DENIED_MESSAGE)

        handler = self._handlers.get(ctx.command)
        if handler is None:
            logger.warning("No handler registered", extra=ctx.log_extra)
            return CommandResponse(content=UNKNOWN_COMMAND_MESSAGE)

        logger.debug("Dispatching command", extra=ctx.log_extra)
        return await handler.handle(ctx)
