"""
Runtime settings assembled from environment variables and config.yaml.

Secrets and identities (bot token, privileged ids, API keys) come from the
environment, usually via a .env file; tunables come from config.yaml.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .config_loader import ConfigLoader

logger = logging.getLogger(__name__)

PRIVILEGED_USER_ENV_VARS = ("ALLOWED_USER_ID", "ALLOWED_USER_ID_2")
PRIVILEGED_ROLE_ENV_VARS = (
    "FBI_COMMAND_ROLE",
    "FBI_SUPERVISOR_ROLE",
    "MANAGEMENT_ROLE_ID",
)

DEFAULT_FLAGGED_WORDS = ("accepted", "denied", "on hold", "waiting for hr")
DEFAULT_SUMMARIZE_URL = (
    "https://api-inference.huggingface.co/models/facebook/bart-large-cnn"
)


def parse_id_list(values: Any, *, source: str = "config") -> list[int]:
    """Coerce ids from env strings, ints or nested lists into unique ints.

    Comma-separated strings are split. Invalid or negative entries are
    dropped with a warning; first-seen order is preserved.
    """

    def _iter_values(item: Any) -> Iterable[Any]:
        if item is None:
            return []
        if isinstance(item, str):
            return [part for part in item.split(",") if part.strip()]
        if isinstance(item, Iterable):
            flattened: list[Any] = []
            for value in item:
                flattened.extend(_iter_values(value))
            return flattened
        return [item]

    result: list[int] = []
    for raw in _iter_values(values):
        try:
            parsed = int(str(raw).strip())
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid id %r from %s", raw, source)
            continue
        if parsed < 0:
            logger.warning("Ignoring negative id %r from %s", raw, source)
            continue
        if parsed not in result:
            result.append(parsed)
    return result


def _env_ids(env: Mapping[str, str], names: Iterable[str]) -> list[int]:
    collected: list[int] = []
    for name in names:
        for value in parse_id_list(env.get(name), source=name):
            if value not in collected:
                collected.append(value)
    return collected


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one bot process."""

    token: str | None = None
    application_id: int | None = None
    privileged_user_ids: frozenset[int] = frozenset()
    privileged_role_ids: frozenset[int] = frozenset()
    data_dir: Path = field(default_factory=Path.cwd)
    confirmation_ttl_seconds: float | None = None
    command_log_page_size: int = 10
    huggingface_api_key: str | None = None
    summarize_url: str = DEFAULT_SUMMARIZE_URL
    summarize_timeout: int = 30
    history_limit: int = 50
    flagged_words: tuple[str, ...] = DEFAULT_FLAGGED_WORDS
    keepalive_enabled: bool = False
    keepalive_host: str = "0.0.0.0"  # noqa: S104
    keepalive_port: int = 3000

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        config: Mapping[str, Any] | None = None,
    ) -> Settings:
        """Build settings from an environment mapping and a loaded config dict.

        Args:
            env: Environment mapping; defaults to os.environ.
            config: Parsed config.yaml; defaults to ConfigLoader.load_config().
        """
        env = os.environ if env is None else env
        config = ConfigLoader.load_config() if config is None else config

        def section(name: str) -> Mapping[str, Any]:
            value = config.get(name)
            return value if isinstance(value, Mapping) else {}

        access = section("access")
        storage = section("storage")
        broadcast = section("broadcast")
        command_logs = section("command_logs")
        summarize = section("summarize")
        status = section("status")
        keepalive = section("keepalive")

        user_ids = _env_ids(env, PRIVILEGED_USER_ENV_VARS)
        for value in parse_id_list(access.get("user_ids"), source="access.user_ids"):
            if value not in user_ids:
                user_ids.append(value)

        role_ids = _env_ids(env, PRIVILEGED_ROLE_ENV_VARS)
        for value in parse_id_list(access.get("role_ids"), source="access.role_ids"):
            if value not in role_ids:
                role_ids.append(value)

        app_ids = parse_id_list(env.get("CLIENT_ID"), source="CLIENT_ID")

        ttl = broadcast.get("confirmation_ttl_seconds")
        flagged = status.get("flagged_words") or DEFAULT_FLAGGED_WORDS

        return cls(
            token=env.get("DISCORD_TOKEN") or env.get("TOKEN"),
            application_id=app_ids[0] if app_ids else None,
            privileged_user_ids=frozenset(user_ids),
            privileged_role_ids=frozenset(role_ids),
            data_dir=Path(storage.get("data_dir") or Path.cwd()),
            confirmation_ttl_seconds=float(ttl) if ttl else None,
            command_log_page_size=int(command_logs.get("page_size", 10)),
            huggingface_api_key=env.get("HUGGINGFACE_API_KEY") or None,
            summarize_url=str(summarize.get("url") or DEFAULT_SUMMARIZE_URL),
            summarize_timeout=int(summarize.get("timeout_seconds", 30)),
            history_limit=int(status.get("history_limit", 50)),
            flagged_words=tuple(str(word) for word in flagged),
            keepalive_enabled=env.get("STATE", "").upper() == "DEVELOPMENT",
            keepalive_host=str(keepalive.get("host", "0.0.0.0")),  # noqa: S104
            keepalive_port=int(env.get("PORT") or keepalive.get("port", 3000)),
        )
