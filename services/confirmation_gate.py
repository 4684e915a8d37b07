"""
Confirmation gate for broadcasts that ping many roles.

A ``/say`` whose text mentions CONFIRMATION_THRESHOLD or more roles is parked
here as a pending confirmation. Only the user who requested it may confirm
or cancel. Pending confirmations live in memory only and are lost on restart.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from helpers.mentions import extract_role_mentions, send_broadcast
from services.repeat_scheduler import RepeatEntry, RepeatScheduler
from utils.logging import get_logger

logger = get_logger(__name__)

CONFIRMATION_THRESHOLD = 5
CONFIRM_PREFIX = "confirmSay_"
CANCEL_PREFIX = "cancelSay_"


class ConfirmationState(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELED = "canceled"
    EXPIRED = "expired"


class GateResult(str, Enum):
    CONFIRMED = "confirmed"
    CANCELED = "canceled"
    REJECTED = "rejected"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"


def requires_confirmation(text: str | None) -> bool:
    """True when ``text`` mentions at least CONFIRMATION_THRESHOLD roles (duplicates count)."""
    return len(extract_role_mentions(text)) >= CONFIRMATION_THRESHOLD


def wants_repeat(repeat: bool | None, interval: int | None) -> bool:
    """A repeat is scheduled only when requested with a positive interval."""
    return bool(repeat) and interval is not None and interval > 0


def make_token(interaction_id: int | str, created_ms: int) -> str:
    return f"{interaction_id}_{created_ms}"


@dataclass
class PendingConfirmation:
    token: str
    user_id: int
    message: str
    repeat: bool
    interval: int | None
    channel: Any
    created_at: float = field(default_factory=time.time)
    state: ConfirmationState = ConfirmationState.PENDING


@dataclass(frozen=True)
class GateOutcome:
    result: GateResult
    pending: PendingConfirmation | None = None
    repeat: RepeatEntry | None = None


class ConfirmationGate:
    """Keyed PENDING -> CONFIRMED | CANCELED | EXPIRED state machine."""

    def __init__(
        self,
        scheduler: RepeatScheduler,
        sender: Callable[[Any, str], Awaitable[None]] = send_broadcast,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._scheduler = scheduler
        self._sender = sender
        self._ttl = ttl_seconds
        self._clock = clock
        self._pending: dict[str, PendingConfirmation] = {}

    def __contains__(self, token: str) -> bool:
        return token in self._pending

    def __len__(self) -> int:
        return len(self._pending)

    def get(self, token: str) -> PendingConfirmation | None:
        return self._pending.get(token)

    def open(
        self,
        interaction_id: int | str,
        user_id: int,
        message: str,
        repeat: bool | None,
        interval: int | None,
        channel: Any,
    ) -> PendingConfirmation:
        """Park a broadcast until its requester confirms or cancels it."""
        now = self._clock()
        token = make_token(interaction_id, int(now * 1000))
        pending = PendingConfirmation(
            token=token,
            user_id=int(user_id),
            message=message,
            repeat=bool(repeat),
            interval=interval,
            channel=channel,
            created_at=now,
        )
        self._pending[token] = pending
        logger.info(
            "Broadcast awaiting confirmation",
            extra={"confirm_token": token, "user_id": str(user_id)},
        )
        return pending

    async def confirm(self, token: str, user_id: int) -> GateOutcome:
        """Send the parked broadcast if ``user_id`` is its requester."""
        pending, failure = self._lookup(token, user_id)
        if failure is not None:
            return failure

        # Consumed up front: one confirm sends at most once
        del self._pending[token]
        pending.state = ConfirmationState.CONFIRMED

        await self._sender(pending.channel, pending.message)

        repeat_entry = None
        if wants_repeat(pending.repeat, pending.interval):
            repeat_entry = self._scheduler.create(
                pending.message, pending.interval, pending.channel.id
            )

        logger.info(
            "Broadcast confirmed",
            extra={"confirm_token": token, "user_id": str(user_id)},
        )
        return GateOutcome(GateResult.CONFIRMED, pending, repeat_entry)

    def cancel(self, token: str, user_id: int) -> GateOutcome:
        """Drop the parked broadcast if ``user_id`` is its requester."""
        pending, failure = self._lookup(token, user_id)
        if failure is not None:
            return failure

        pending.state = ConfirmationState.CANCELED
        del self._pending[token]
        logger.info(
            "Broadcast canceled",
            extra={"confirm_token": token, "user_id": str(user_id)},
        )
        return GateOutcome(GateResult.CANCELED, pending)

    def _lookup(
        self, token: str, user_id: int
    ) -> tuple[PendingConfirmation | None, GateOutcome | None]:
        pending = self._pending.get(token)
        if pending is None:
            return None, GateOutcome(GateResult.NOT_FOUND)

        if self._ttl is not None and self._clock() - pending.created_at > self._ttl:
            pending.state = ConfirmationState.EXPIRED
            del self._pending[token]
            return None, GateOutcome(GateResult.EXPIRED, pending)

        if int(user_id) != pending.user_id:
            logger.warning(
                "Rejected confirmation action from another user",
                extra={"confirm_token": token, "user_id": str(user_id)},
            )
            return None, GateOutcome(GateResult.REJECTED, pending)

        return pending, None
