"""
Custom exception classes for the FBI bot.

These provide a hierarchy of typed exceptions for better error handling.
"""


class BotError(Exception):
    """Base exception for bot-related errors."""

    pass


class ConfigError(BotError):
    """Exception raised for configuration-related errors."""

    pass


class StorageAccessError(BotError):
    """Raised when a caller asks the store for a file outside its allow-list."""

    def __init__(self, resource: object) -> None:
        super().__init__("Access to this file is not allowed.")
        self.resource = resource


class ServiceError(BotError):
    """Exception raised for service-related errors."""

    pass


class SummarizationError(ServiceError):
    """Raised when the external summarization API fails or is not configured."""

    pass
