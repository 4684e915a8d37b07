import asyncio
import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Ensure project root is on sys.path for CI environments where
# Python might not automatically include it (e.g., some GitHub
# Actions runners invoking pytest differently).
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config.config_loader import ConfigLoader
from services.repeat_scheduler import RepeatScheduler
from services.store import JsonStore
from tests.factories import FakeBot, FakeChannel


@pytest.fixture
def store(tmp_path) -> JsonStore:
    """A JsonStore rooted in a per-test temporary directory."""
    return JsonStore(tmp_path)


@pytest.fixture
def channel() -> FakeChannel:
    return FakeChannel(channel_id=4242, name="announcements")


@pytest.fixture
def fake_bot(channel) -> FakeBot:
    return FakeBot(channels=[channel])


class ManualSleep:
    """Injectable sleep that parks repeat tasks until a test releases them."""

    def __init__(self) -> None:
        self.calls: list[float] = []
        self._release = asyncio.Event()

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        await self._release.wait()
        self._release.clear()

    async def tick(self) -> None:
        """Let every parked task wake once and run until it parks again."""
        self._release.set()
        for _ in range(5):
            await asyncio.sleep(0)


@pytest.fixture
def manual_sleep() -> ManualSleep:
    return ManualSleep()


@pytest_asyncio.fixture
async def scheduler(store, fake_bot, manual_sleep):
    """RepeatScheduler whose tasks only fire when the test ticks the clock."""
    sched = RepeatScheduler(store, fake_bot.get_channel, sleep=manual_sleep)
    yield sched
    sched.shutdown()
    await asyncio.sleep(0)


@pytest.fixture
def fresh_config_loader():
    """Reset the ConfigLoader singleton around a test."""
    ConfigLoader.reset()
    yield ConfigLoader
    ConfigLoader.reset()
