"""
Channel insight helpers: text summarization and status-word lookup.

Summaries come from the Hugging Face inference API; the status lookup is a
plain scan over recent channel history.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import aiohttp
import discord

from config.settings import DEFAULT_SUMMARIZE_URL
from utils.errors import SummarizationError
from utils.logging import get_logger

logger = get_logger(__name__)

NO_SUMMARY_TEXT = "No summary generated."


async def fetch_recent_messages(
    channel: discord.abc.Messageable, limit: int = 50
) -> list[discord.Message]:
    """Return the last ``limit`` messages of ``channel`` ordered oldest to newest."""
    messages = [message async for message in channel.history(limit=limit)]
    messages.sort(key=lambda message: message.created_at)
    return messages


def combine_message_text(messages: Iterable[Any]) -> str:
    """Join the non-empty contents of ``messages`` with newlines."""
    return "\n".join(
        content for content in (getattr(m, "content", "") or "" for m in messages) if content
    )


def find_latest_flagged_word(
    messages: Sequence[Any], flagged_words: Sequence[str]
) -> str | None:
    """
    Scan from the newest message back and return the first flagged word found.

    Within one message, words are checked in ``flagged_words`` order.
    Matching is case-insensitive substring matching.
    """
    for message in reversed(messages):
        content = (getattr(message, "content", "") or "").lower()
        for word in flagged_words:
            if word.lower() in content:
                return word
    return None


class SummarizerClient:
    """
    Minimal client for the Hugging Face summarization endpoint.

    The aiohttp session is created lazily and must be closed with ``close``.
    """

    def __init__(
        self,
        api_key: str | None,
        url: str = DEFAULT_SUMMARIZE_URL,
        timeout: int = 30,
    ) -> None:
        self._api_key = api_key
        self._url = url
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _post(self, text: str) -> Any:
        session = await self._get_session()
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        async with session.post(self._url, json={"inputs": text}, headers=headers) as resp:
            if resp.status != 200:
                raise SummarizationError(f"HF API error: {resp.reason}")
            return await resp.json(content_type=None)

    async def summarize(self, text: str) -> str:
        """Summarize ``text``; raises SummarizationError on any failure."""
        if not self.configured:
            raise SummarizationError("Hugging Face API key missing")

        try:
            data = await self._post(text)
        except aiohttp.ClientError as e:
            logger.warning(f"Summarization request failed: {e}")
            raise SummarizationError(str(e)) from e

        if isinstance(data, dict) and data.get("error"):
            raise SummarizationError(str(data["error"]))

        if isinstance(data, list) and data and isinstance(data[0], dict):
            return data[0].get("summary_text") or NO_SUMMARY_TEXT
        return NO_SUMMARY_TEXT
