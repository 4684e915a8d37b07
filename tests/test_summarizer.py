from unittest.mock import AsyncMock

import aiohttp
import pytest

from services.summarizer import (
    NO_SUMMARY_TEXT,
    SummarizerClient,
    combine_message_text,
    fetch_recent_messages,
    find_latest_flagged_word,
)
from tests.factories import FakeChannel, make_messages
from utils.errors import SummarizationError

WORDS = ("accepted", "denied", "on hold", "waiting for hr")


@pytest.mark.asyncio
async def test_fetch_recent_messages_oldest_first_and_limited() -> None:
    channel = FakeChannel(history=make_messages("one", "two", "three", "four"))

    messages = await fetch_recent_messages(channel, limit=3)

    assert [m.content for m in messages] == ["two", "three", "four"]


def test_combine_skips_empty_contents() -> None:
    assert combine_message_text(make_messages("a", "", "b")) == "a\nb"
    assert combine_message_text([]) == ""


def test_flagged_word_newest_match_wins() -> None:
    messages = make_messages("Application accepted", "chatter", "Now DENIED sorry", "ok")
    assert find_latest_flagged_word(messages, WORDS) == "denied"


def test_flagged_word_list_order_within_one_message() -> None:
    messages = make_messages("denied then accepted")
    assert find_latest_flagged_word(messages, WORDS) == "accepted"


def test_flagged_word_multiword_and_none() -> None:
    assert find_latest_flagged_word(make_messages("Waiting For HR review"), WORDS) == "waiting for hr"
    assert find_latest_flagged_word(make_messages("nothing here"), WORDS) is None


@pytest.mark.asyncio
async def test_summarize_requires_api_key() -> None:
    client = SummarizerClient(None)
    assert not client.configured
    with pytest.raises(SummarizationError):
        await client.summarize("text")


@pytest.mark.asyncio
async def test_summarize_returns_summary_text(monkeypatch) -> None:
    client = SummarizerClient("key")
    monkeypatch.setattr(client, "_post", AsyncMock(return_value=[{"summary_text": "Short."}]))

    assert await client.summarize("long text") == "Short."
    client._post.assert_awaited_once_with("long text")


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [[], [{}], {"unexpected": 1}, [{"summary_text": ""}]])
async def test_summarize_without_summary_text(monkeypatch, payload) -> None:
    client = SummarizerClient("key")
    monkeypatch.setattr(client, "_post", AsyncMock(return_value=payload))

    assert await client.summarize("text") == NO_SUMMARY_TEXT


@pytest.mark.asyncio
async def test_summarize_api_error_field(monkeypatch) -> None:
    client = SummarizerClient("key")
    monkeypatch.setattr(
        client, "_post", AsyncMock(return_value={"error": "Model is loading"})
    )

    with pytest.raises(SummarizationError, match="Model is loading"):
        await client.summarize("text")


@pytest.mark.asyncio
async def test_summarize_client_error_is_wrapped(monkeypatch) -> None:
    client = SummarizerClient("key")
    monkeypatch.setattr(
        client, "_post", AsyncMock(side_effect=aiohttp.ClientConnectionError("down"))
    )

    with pytest.raises(SummarizationError, match="down"):
        await client.summarize("text")


@pytest.mark.asyncio
async def test_close_without_session_is_noop() -> None:
    client = SummarizerClient("key")
    await client.close()
    await client.close()
