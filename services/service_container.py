"""
Service Container

Central registry for all bot services: builds them in dependency order from
Settings, wires the command handlers into the dispatcher, and tears
everything down on shutdown.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from config.settings import Settings
from helpers.permissions_helper import AccessPolicy
from utils.logging import get_logger

from .command_log import CommandLog
from .confirmation_gate import ConfirmationGate
from .dispatcher import CommandDispatcher
from .handlers import (
    CommandLogsHandler,
    SayHandler,
    StatusHandler,
    StopRepeatHandler,
    SummarizeHandler,
    TrainingResultsHandler,
)
from .keepalive import KeepAliveServer
from .repeat_scheduler import RepeatScheduler
from .store import JsonStore
from .summarizer import SummarizerClient
from .training_results import TrainingResultFlow


class ServiceContainer:
    """
    Central container for managing all bot services.

    Provides a single access point for services throughout the bot and
    handles initialization order and shutdown.
    """

    def __init__(
        self,
        settings: Settings,
        resolve_channel: Callable[[int], Any],
    ) -> None:
        self.logger = get_logger("services.container")
        self.settings = settings
        self._resolve_channel = resolve_channel

        self.store: JsonStore | None = None
        self.command_log: CommandLog | None = None
        self.policy: AccessPolicy | None = None
        self.scheduler: RepeatScheduler | None = None
        self.gate: ConfirmationGate | None = None
        self.training: TrainingResultFlow | None = None
        self.summarizer: SummarizerClient | None = None
        self.dispatcher: CommandDispatcher | None = None
        self.keepalive: KeepAliveServer | None = None
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Build all services in dependency order and register command handlers."""
        if self._initialized:
            self.logger.warning("ServiceContainer already initialized")
            return

        settings = self.settings
        self.logger.info("Initializing services")

        self.store = JsonStore(settings.data_dir)
        self.command_log = CommandLog(self.store)
        self.policy = AccessPolicy.from_settings(settings)
        self.scheduler = RepeatScheduler(self.store, self._resolve_channel)
        self.gate = ConfirmationGate(
            self.scheduler, ttl_seconds=settings.confirmation_ttl_seconds
        )
        self.training = TrainingResultFlow(self.store)
        self.summarizer = SummarizerClient(
            settings.huggingface_api_key,
            url=settings.summarize_url,
            timeout=settings.summarize_timeout,
        )

        self.dispatcher = CommandDispatcher(self.command_log, self.policy)
        for handler in (
            SayHandler(self.gate, self.scheduler),
            StopRepeatHandler(self.scheduler),
            CommandLogsHandler(self.command_log, settings.command_log_page_size),
            TrainingResultsHandler(self.training),
            SummarizeHandler(self.summarizer, settings.history_limit),
            StatusHandler(settings.flagged_words, settings.history_limit),
        ):
            self.dispatcher.register(handler)

        if settings.keepalive_enabled:
            self.keepalive = KeepAliveServer(settings.keepalive_host, settings.keepalive_port)

        self._initialized = True
        self.logger.info(
            f"Services initialized with {len(self.scheduler.entries())} stored repeats"
        )

    async def cleanup(self) -> None:
        """Clean up all services in reverse dependency order."""
        if not self._initialized:
            return

        self.logger.info("Cleaning up services")

        if self.keepalive:
            await self.keepalive.stop()
        if self.summarizer:
            await self.summarizer.close()
        if self.scheduler:
            self.scheduler.shutdown()

        self._initialized = False
        self.logger.info("Services cleaned up")
