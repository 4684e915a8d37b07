"""
Repeating broadcast scheduler.

Owns every RepeatEntry and its live asyncio task. Only the persistable part
of an entry (id, message, interval, channel) is written to the store; live
tasks are rebuilt on startup through ``restore_all``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from helpers.mentions import send_broadcast
from services.store import JsonStore, Resource
from utils.logging import get_logger
from utils.tasks import spawn

logger = get_logger(__name__)

REPEAT_ID_PREFIX = "repeat_"

ChannelResolver = Callable[[int], Any]
Sender = Callable[[Any, str], Awaitable[None]]


def parse_repeat_suffix(repeat_id: str) -> int | None:
    """Numeric suffix of ``repeat_<n>``, or None for ids in another format."""
    prefix, sep, suffix = str(repeat_id).partition("_")
    if not sep or f"{prefix}_" != REPEAT_ID_PREFIX:
        return None
    try:
        return int(suffix)
    except ValueError:
        return None


@dataclass
class RepeatEntry:
    id: str
    message: str
    interval_minutes: int
    channel_id: int
    task: asyncio.Task | None = field(default=None, repr=False, compare=False)

    @property
    def is_running(self) -> bool:
        return self.task is not None and not self.task.done()

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "message": self.message,
            "interval": self.interval_minutes,
            "channelId": str(self.channel_id),
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> RepeatEntry:
        return cls(
            id=str(record["id"]),
            message=str(record["message"]),
            interval_minutes=int(record["interval"]),
            channel_id=int(record["channelId"]),
        )


class RepeatScheduler:
    """Create, restore and cancel repeating broadcasts."""

    def __init__(
        self,
        store: JsonStore,
        resolve_channel: ChannelResolver,
        sender: Sender = send_broadcast,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._store = store
        self._resolve_channel = resolve_channel
        self._sender = sender
        self._sleep = sleep
        self._entries: dict[str, RepeatEntry] = {}

        raw = store.load(Resource.REPEATS, [])
        if not isinstance(raw, list):
            logger.warning("Repeats document is not a list; starting fresh")
            raw = []
        for record in raw:
            try:
                entry = RepeatEntry.from_record(record)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed repeat record {record!r}: {e}")
                continue
            self._entries[entry.id] = entry

        suffixes = [
            n for n in (parse_repeat_suffix(rid) for rid in self._entries) if n is not None
        ]
        self._next_id = max(suffixes) + 1 if suffixes else 1

    # ---------- Queries ----------

    def entries(self) -> list[RepeatEntry]:
        return list(self._entries.values())

    def get(self, repeat_id: str) -> RepeatEntry | None:
        return self._entries.get(repeat_id)

    @property
    def next_id(self) -> int:
        return self._next_id

    # ---------- Mutations ----------

    def create(self, message: str, interval_minutes: int, channel_id: int) -> RepeatEntry:
        """Allocate an id, persist the entry set, then start the periodic task.

        A failed save forgets the entry again and re-raises; no task is started.
        """
        repeat_id = f"{REPEAT_ID_PREFIX}{self._next_id}"
        self._next_id += 1

        entry = RepeatEntry(
            id=repeat_id,
            message=message,
            interval_minutes=interval_minutes,
            channel_id=int(channel_id),
        )
        self._entries[repeat_id] = entry
        try:
            self._persist()
        except Exception:
            del self._entries[repeat_id]
            raise
        self._start(entry)

        logger.info(
            f"Created repeat every {interval_minutes} min",
            extra={"repeat_id": repeat_id, "channel_id": str(channel_id)},
        )
        return entry

    def cancel(self, repeat_id: str) -> bool:
        """Stop and forget ``repeat_id``; False when it is unknown."""
        entry = self._entries.pop(repeat_id, None)
        if entry is None:
            return False

        if entry.task is not None:
            entry.task.cancel()
            entry.task = None
        self._persist()

        logger.info("Cancelled repeat", extra={"repeat_id": repeat_id})
        return True

    def restore_all(self) -> int:
        """Start tasks for persisted entries whose channel still resolves.

        Entries with an unresolvable channel stay in storage untouched and
        are not retried.
        """
        restored = 0
        for entry in self._entries.values():
            if entry.is_running:
                continue
            if self._resolve_channel(entry.channel_id) is None:
                logger.info(
                    "Channel for repeat not found; skipping restore",
                    extra={"repeat_id": entry.id, "channel_id": str(entry.channel_id)},
                )
                continue
            self._start(entry)
            restored += 1

        logger.info(f"Restored {restored} of {len(self._entries)} repeating broadcasts")
        return restored

    def shutdown(self) -> None:
        """Cancel every live task; storage is left as is."""
        for entry in self._entries.values():
            if entry.task is not None:
                entry.task.cancel()
                entry.task = None

    async def fire(self, repeat_id: str) -> bool:
        """Send one occurrence of ``repeat_id`` now. Returns True if sent."""
        entry = self._entries.get(repeat_id)
        if entry is None:
            return False

        channel = self._resolve_channel(entry.channel_id)
        if channel is None:
            logger.warning(
                "Channel for repeat vanished; skipping this send",
                extra={"repeat_id": entry.id, "channel_id": str(entry.channel_id)},
            )
            return False

        try:
            await self._sender(channel, entry.message)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(
                f"Repeat send failed: {e}",
                extra={"repeat_id": entry.id, "channel_id": str(entry.channel_id)},
            )
            return False
        return True

    # ---------- Internals ----------

    def _start(self, entry: RepeatEntry) -> None:
        entry.task = spawn(self._run(entry.id, entry.interval_minutes * 60), name=entry.id)

    async def _run(self, repeat_id: str, period_seconds: float) -> None:
        while repeat_id in self._entries:
            await self._sleep(period_seconds)
            if repeat_id not in self._entries:
                return
            await self.fire(repeat_id)

    def _persist(self) -> None:
        self._store.save(
            Resource.REPEATS, [entry.to_record() for entry in self._entries.values()]
        )
