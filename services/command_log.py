"""
Append-only command usage log.

Every slash command invocation is recorded here before any permission or
business check runs, and the whole log is written to disk after each append.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from services.store import JsonStore, Resource
from utils.logging import get_logger

logger = get_logger(__name__)

TIME_FORMAT = "%m/%d/%Y, %I:%M:%S %p"


@dataclass(frozen=True)
class CommandLogEntry:
    command: str
    user_tag: str
    user_id: str
    timestamp: str

    def to_record(self) -> dict[str, str]:
        return {
            "command": self.command,
            "user": self.user_tag,
            "id": self.user_id,
            "time": self.timestamp,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> CommandLogEntry:
        return cls(
            command=str(record.get("command", "")),
            user_tag=str(record.get("user", "")),
            user_id=str(record.get("id", "")),
            timestamp=str(record.get("time", "")),
        )

    def format_line(self) -> str:
        return f"{self.timestamp} — {self.user_tag} — `{self.command}`"


class CommandLog:
    """Owns the in-memory command log and its persisted copy."""

    def __init__(self, store: JsonStore, clock=datetime.now) -> None:
        self._store = store
        self._clock = clock
        raw = store.load(Resource.COMMAND_LOGS, [])
        if not isinstance(raw, list):
            logger.warning("Command log document is not a list; starting fresh")
            raw = []
        self._entries: list[CommandLogEntry] = [
            CommandLogEntry.from_record(item) for item in raw if isinstance(item, dict)
        ]

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, command: str, user_tag: str, user_id: int | str) -> CommandLogEntry:
        """Append one invocation and persist the full log."""
        entry = CommandLogEntry(
            command=command,
            user_tag=user_tag,
            user_id=str(user_id),
            timestamp=self._clock().strftime(TIME_FORMAT),
        )
        self._entries.append(entry)
        self._store.save(
            Resource.COMMAND_LOGS, [item.to_record() for item in self._entries]
        )
        return entry

    def recent(self, user_id: int | str | None = None, limit: int = 10) -> list[CommandLogEntry]:
        """Last ``limit`` entries, optionally only those of one user, oldest first."""
        entries = self._entries
        if user_id is not None:
            entries = [entry for entry in entries if entry.user_id == str(user_id)]
        if limit <= 0:
            return []
        return entries[-limit:]
