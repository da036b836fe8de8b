import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import Generic, TypeVar

from domain.models.currency import RateTable
from infrastructure.cache.base import DEFAULT_TTL, RateCache

T = TypeVar('T')


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    expires_at: float


class MemoryCacheService(RateCache):
    def __init__(self, ttl: timedelta = DEFAULT_TTL, clock: Callable[[], float] = time.monotonic):
        super().__init__(ttl)
        self._clock = clock
        self._rates: dict[str, CacheEntry[Decimal]] = {}
        self._tables: dict[str, CacheEntry[RateTable]] = {}

    def _get(self, store: dict[str, CacheEntry[T]], key: str) -> T | None:
        entry = store.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            store.pop(key, None)
            return None
        return entry.value

    def _expiry(self) -> float:
        return self._clock() + self.ttl.total_seconds()

    async def get_rate(self, key: str) -> Decimal | None:
        return self._get(self._rates, key)

    async def set_rate(self, key: str, rate: Decimal) -> None:
        self._rates[key] = CacheEntry(rate, self._expiry())

    async def get_rate_table(self, key: str) -> RateTable | None:
        rates = self._get(self._tables, key)
        return dict(rates) if rates is not None else None

    async def set_rate_table(self, key: str, rates: RateTable) -> None:
        self._tables[key] = CacheEntry(dict(rates), self._expiry())

    def __len__(self) -> int:
        return len(self._rates) + len(self._tables)
