import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from decimal import Decimal, InvalidOperation
from typing import Any, TypeVar

import httpx

from domain.exceptions.currency import UpstreamFetchError
from domain.models.currency import RateTable
from infrastructure.cache.base import RateCache
from infrastructure.notifications.discord import DiscordNotifier

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseRateProvider(ABC):
    """Cache-or-fetch client for a single upstream resource.

    The upstream URL doubles as the cache key. Concurrent misses are
    serialised behind one lock so they share a single outbound call; a failed
    fetch is reported to the notifier and never cached.
    """

    URL: str

    def __init__(
        self,
        cache: RateCache,
        notifier: DiscordNotifier | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10,
    ):
        self.cache = cache
        self.notifier = notifier
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._lock = asyncio.Lock()

    @property
    @abstractmethod
    def name(self) -> str: ...

    def _error(self, message: str) -> UpstreamFetchError:
        return UpstreamFetchError(self.name, f"{self.name}: {message}")

    async def _request(self) -> Any:
        try:
            response = await self._client.get(self.URL)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise self._error(
                f"HTTP error {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.RequestError as e:
            raise self._error(f"request failed: {e.__class__.__name__}") from e
        except ValueError as e:
            raise self._error(f"response parsing error: {e}") from e

    def _to_decimal(self, value: Any, field: str) -> Decimal:
        try:
            rate = Decimal(str(value))
        except (InvalidOperation, TypeError, ValueError) as e:
            raise self._error(f"invalid {field} {value!r}") from e
        if not rate.is_finite() or rate < 0:
            raise self._error(f"invalid {field} {value!r}")
        return rate

    async def _get_or_fetch(
        self,
        load: Callable[[str], Awaitable[T | None]],
        store: Callable[[str, T], Awaitable[None]],
        parse: Callable[[Any], T],
    ) -> T:
        cached = await load(self.URL)
        if cached is not None:
            return cached

        async with self._lock:
            cached = await load(self.URL)
            if cached is not None:
                return cached

            logger.info(f"Recaching {self.name}")
            try:
                value = parse(await self._request())
            except UpstreamFetchError as e:
                logger.error(f"Upstream fetch failed: {e}")
                if self.notifier is not None:
                    self.notifier.notify(e)
                raise

            await store(self.URL, value)
            return value

    async def close(self) -> None:
        await self._client.aclose()

    def __repr__(self):
        return f"<{self.__class__.__name__}(name={self.name})>"


class ScalarRateProvider(BaseRateProvider):
    """Provider whose upstream yields a single rate."""

    async def fetch_rate(self) -> Decimal:
        return await self._get_or_fetch(self.cache.get_rate, self.cache.set_rate, self._parse)

    @abstractmethod
    def _parse(self, data: Any) -> Decimal: ...


class RateTableProvider(BaseRateProvider):
    """Provider whose upstream yields a currency code to rate mapping."""

    async def fetch_rates(self) -> RateTable:
        return await self._get_or_fetch(
            self.cache.get_rate_table, self.cache.set_rate_table, self._parse
        )

    @abstractmethod
    def _parse(self, data: Any) -> RateTable: ...
