"""Access policy for privileged bot commands.

A caller has full access when their user id is on the privileged-user
allow-list, or when any of their roles is on the privileged-role allow-list.
Both lists come from configuration; nothing here talks to Discord or disk.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

import discord

from config.settings import Settings, parse_id_list

logger = logging.getLogger(__name__)

PERMISSION_DENIED_MESSAGE = "You do not have permission to use this command."


@dataclass(frozen=True)
class AccessPolicy:
    """Identity-or-role allow-list union."""

    privileged_user_ids: frozenset[int] = frozenset()
    privileged_role_ids: frozenset[int] = frozenset()

    @classmethod
    def from_ids(
        cls, user_ids: Iterable[int | str], role_ids: Iterable[int | str]
    ) -> AccessPolicy:
        return cls(
            privileged_user_ids=frozenset(parse_id_list(list(user_ids), source="user_ids")),
            privileged_role_ids=frozenset(parse_id_list(list(role_ids), source="role_ids")),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> AccessPolicy:
        if not settings.privileged_user_ids and not settings.privileged_role_ids:
            logger.warning(
                "No privileged users or roles configured; every privileged command will be denied"
            )
        return cls(
            privileged_user_ids=settings.privileged_user_ids,
            privileged_role_ids=settings.privileged_role_ids,
        )

    def has_full_access(
        self, caller_id: int | str, caller_role_ids: Iterable[int | str]
    ) -> bool:
        """Return True iff the caller id or any caller role is privileged."""
        try:
            if int(caller_id) in self.privileged_user_ids:
                return True
        except (TypeError, ValueError):
            return False

        roles = set(parse_id_list(list(caller_role_ids), source="caller roles"))
        return not roles.isdisjoint(self.privileged_role_ids)


def member_role_ids(user: discord.abc.User) -> set[int]:
    """Role ids of a guild member; empty for plain users (e.g. in DMs)."""
    return {role.id for role in getattr(user, "roles", None) or []}


__all__ = [
    "PERMISSION_DENIED_MESSAGE",
    "AccessPolicy",
    "member_role_ids",
]
