"""
Slash command handlers registered with the CommandDispatcher.

Each handler owns one command's business logic and returns a
CommandResponse; the cogs only translate interactions in and responses out.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from helpers.mentions import send_broadcast
from helpers.views import LARGE_PING_WARNING, ConfirmBroadcastView, TrainingStatusView
from services.command_log import CommandLog
from services.confirmation_gate import (
    ConfirmationGate,
    requires_confirmation,
    wants_repeat,
)
from services.dispatcher import CommandContext, CommandHandler, CommandResponse
from services.repeat_scheduler import RepeatScheduler
from services.summarizer import (
    SummarizerClient,
    combine_message_text,
    fetch_recent_messages,
    find_latest_flagged_word,
)
from services.training_results import TrainingResultFlow
from utils.errors import SummarizationError
from utils.logging import get_logger

logger = get_logger(__name__)

Sender = Callable[[Any, str], Awaitable[None]]


class SayHandler(CommandHandler):
    """``/say message [repeat] [interval]``"""

    name = "say"

    def __init__(
        self,
        gate: ConfirmationGate,
        scheduler: RepeatScheduler,
        sender: Sender = send_broadcast,
    ) -> None:
        self.gate = gate
        self.scheduler = scheduler
        self.sender = sender

    async def handle(self, ctx: CommandContext) -> CommandResponse:
        message: str = ctx.option("message", "")
        repeat: bool = bool(ctx.option("repeat", False))
        interval: int | None = ctx.option("interval")

        if requires_confirmation(message):
            pending = self.gate.open(
                interaction_id=ctx.interaction_id,
                user_id=ctx.user_id,
                message=message,
                repeat=repeat,
                interval=interval,
                channel=ctx.channel,
            )
            return CommandResponse(
                content=LARGE_PING_WARNING,
                view=ConfirmBroadcastView(self.gate, pending.token),
            )

        await self.sender(ctx.channel, message)
        response = CommandResponse(content="Message sent!")

        if wants_repeat(repeat, interval):
            entry = self.scheduler.create(message, interval, ctx.channel.id)
            response.followups.append(
                f"Repeating every {interval} minutes.\nRepeat ID: {entry.id}"
            )
        elif repeat:
            response.followups.append(
                "Repeat needs an interval of at least 1 minute; the message was sent once."
            )
        return response


class StopRepeatHandler(CommandHandler):
    """``/stoprepeat id``"""

    name = "stoprepeat"

    def __init__(self, scheduler: RepeatScheduler) -> None:
        self.scheduler = scheduler

    async def handle(self, ctx: CommandContext) -> CommandResponse:
        repeat_id = str(ctx.option("id", "")).strip()
        if not self.scheduler.cancel(repeat_id):
            return CommandResponse(
                content=f"No repeating message found with ID `{repeat_id}`."
            )
        return CommandResponse(content=f"Stopped repeating message with ID `{repeat_id}`.")


class CommandLogsHandler(CommandHandler):
    """``/commandlogs [user]``"""

    name = "commandlogs"

    def __init__(self, command_log: CommandLog, page_size: int = 10) -> None:
        self.command_log = command_log
        self.page_size = page_size

    async def handle(self, ctx: CommandContext) -> CommandResponse:
        user = ctx.option("user")
        user_id = getattr(user, "id", user)
        entries = self.command_log.recent(user_id=user_id, limit=self.page_size)

        if not entries:
            return CommandResponse(content="No command logs found for that user.")

        lines = "\n".join(entry.format_line() for entry in entries)
        return CommandResponse(content=f"Recent command logs:\n{lines}")


class TrainingResultsHandler(CommandHandler):
    """``/trainingresults user``"""

    name = "trainingresults"

    def __init__(self, flow: TrainingResultFlow) -> None:
        self.flow = flow

    async def handle(self, ctx: CommandContext) -> CommandResponse:
        trainee = ctx.option("user")
        if trainee is None:
            return CommandResponse(content="Pick the trainee to send results to.")

        self.flow.begin(ctx.user_id, trainee.id)
        return CommandResponse(
            content=f"Select the training result for {trainee.mention}:",
            view=TrainingStatusView(self.flow, ctx.user_id, trainee),
        )


class SummarizeHandler(CommandHandler):
    """``/summarize``"""

    name = "summarize"

    def __init__(self, client: SummarizerClient, history_limit: int = 50) -> None:
        self.client = client
        self.history_limit = history_limit

    async def handle(self, ctx: CommandContext) -> CommandResponse:
        try:
            messages = await fetch_recent_messages(ctx.channel, self.history_limit)
            combined = combine_message_text(messages)
            if not combined.strip():
                return CommandResponse(content="No text found to summarize.")

            if ctx.defer is not None:
                await ctx.defer()
            summary = await self.client.summarize(combined)
            return CommandResponse(content=summary)
        except SummarizationError as e:
            logger.warning(f"Summarize failed: {e}", extra=ctx.log_extra)
            return CommandResponse(content=f"Error summarizing messages: {e}")
        except Exception as e:
            logger.exception("Summarize failed", extra=ctx.log_extra)
            return CommandResponse(content=f"Error summarizing messages: {e}")


class StatusHandler(CommandHandler):
    """``/status``"""

    name = "status"

    def __init__(self, flagged_words: Sequence[str], history_limit: int = 50) -> None:
        self.flagged_words = list(flagged_words)
        self.history_limit = history_limit

    async def handle(self, ctx: CommandContext) -> CommandResponse:
        try:
            messages = await fetch_recent_messages(ctx.channel, self.history_limit)
        except Exception as e:
            logger.exception("Status lookup failed", extra=ctx.log_extra)
            return CommandResponse(content=f"Error checking status: {e}")

        found = find_latest_flagged_word(messages, self.flagged_words)
        if not found:
            return CommandResponse(content="No flagged status word found recently.")
        return CommandResponse(content=f"Latest flagged status: **{found}**")
