import os

import discord
from discord import app_commands
from discord.ext import commands
from dotenv import load_dotenv

from config.config_loader import ConfigLoader
from config.settings import Settings
from helpers.discord_reply import respond
from utils.errors import ConfigError
from utils.log_context import get_interaction_extra
from utils.logging import get_logger

# Initialize logger
logger = get_logger(__name__)

# Load environment variables
load_dotenv()

# Load configuration using ConfigLoader
config = ConfigLoader.load_config()
settings = Settings.from_env(config=config)

if not settings.token:
    logger.critical("DISCORD_TOKEN (or TOKEN) not found in environment variables.")
    raise ConfigError("DISCORD_TOKEN not set.")

# message_content is privileged; /summarize and /status read history text
intents = discord.Intents.none()
intents.guilds = True
intents.guild_messages = True
intents.message_content = True

# List of initial extensions to load
initial_extensions = [
    "cogs.broadcast.commands",
    "cogs.admin.commands",
    "cogs.training.commands",
    "cogs.info.commands",
]

GENERIC_ERROR_MESSAGE = "❌ Something went wrong running that command."


class FBIBot(commands.Bot):
    """Bot with project-specific attributes and helpers."""

    def __init__(self, *args, settings: Settings, **kwargs) -> None:
        super().__init__(*args, **kwargs)

        self.config = config
        self.settings = settings
        self.services = None
        self._repeats_restored = False

        self.tree.on_error = self.on_app_command_error

    async def setup_hook(self) -> None:
        """Initialize services, load cogs, and sync commands."""
        from services.service_container import ServiceContainer

        self.services = ServiceContainer(self.settings, self.get_channel)
        self.services.initialize()
        logger.info("ServiceContainer initialized")

        for ext in initial_extensions:
            try:
                await self.load_extension(ext)
                logger.info(f"Loaded extension: {ext}")
            except commands.ExtensionError as e:
                logger.exception(f"Failed to load extension {ext}", exc_info=e)
                raise

        if self.services.keepalive is not None:
            # Don't fail bot startup if the keep-alive server can't bind
            try:
                await self.services.keepalive.start()
            except OSError:
                logger.warning("Keep-alive server disabled for this run")
                self.services.keepalive = None

        # Sync the command tree after loading all cogs
        try:
            await self.tree.sync()
            logger.info("All commands synced globally.")
        except discord.HTTPException as e:
            logger.exception("Failed to sync commands", exc_info=e)

        logger.info("Registered commands: ")
        for command in self.tree.walk_commands():
            logger.info(
                f"- Command: {command.name}, Description: {command.description}"
            )

    async def on_ready(self) -> None:
        """Called when the bot is ready; restarts stored repeats once."""
        if not self.user:
            logger.warning("Bot user is not initialized")
            return
        logger.info(f"Logged in as {self.user} (ID: {self.user.id})")

        # on_ready fires again after reconnects
        if not self._repeats_restored and self.services is not None:
            self._repeats_restored = True
            restored = self.services.scheduler.restore_all()
            logger.info(f"Restored {restored} repeating messages")

        logger.info("Bot is ready and online!")

    async def on_app_command_error(
        self,
        interaction: discord.Interaction,
        error: app_commands.AppCommandError,
    ) -> None:
        original = getattr(error, "original", error)
        logger.error(
            f"Slash command failed: {original}",
            exc_info=original,
            extra=get_interaction_extra(interaction),
        )
        await respond(interaction, GENERIC_ERROR_MESSAGE, ephemeral=True)

    async def close(self) -> None:
        """
        Closes the bot and cleans up all resources.
        """
        logger.info("Shutting down the bot.")

        if self.services is not None:
            try:
                await self.services.cleanup()
            except Exception as e:
                logger.exception("Error cleaning up services", exc_info=e)

        await super().close()


bot = FBIBot(
    command_prefix=commands.when_mentioned,
    intents=intents,
    settings=settings,
    application_id=settings.application_id,
)

# Only auto-run if not in explicit dry-run context (FBI_DRY_RUN)
if os.getenv("FBI_DRY_RUN") != "1":
    bot.run(settings.token, log_handler=None)
