"""
Utilities Package

Common utilities and helper functions for the FBI bot.
"""

from .errors import (
    BotError,
    ConfigError,
    ServiceError,
    StorageAccessError,
    SummarizationError,
)
from .logging import get_logger, setup_logging
from .tasks import spawn

__all__ = [
    "BotError",
    "ConfigError",
    "ServiceError",
    "StorageAccessError",
    "SummarizationError",
    "get_logger",
    "setup_logging",
    "spawn",
]
