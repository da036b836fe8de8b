"""
Shared fixtures for provider tests.
"""

from datetime import timedelta
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from infrastructure.cache.memory_cache import MemoryCacheService
from infrastructure.notifications.discord import DiscordNotifier


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return MemoryCacheService(ttl=timedelta(minutes=1), clock=clock)


@pytest.fixture
def notifier():
    return Mock(spec=DiscordNotifier)


@pytest.fixture
def make_client():
    def factory(payload):
        mock_client = AsyncMock(spec=httpx.AsyncClient)
        mock_response = Mock()
        mock_response.json.return_value = payload
        mock_response.raise_for_status = Mock()
        mock_client.get.return_value = mock_response
        return mock_client

    return factory
