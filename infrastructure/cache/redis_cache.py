import json
from datetime import timedelta
from decimal import Decimal, InvalidOperation

from redis import asyncio as redis

from domain.exceptions.currency import CacheError
from domain.models.currency import RateTable
from infrastructure.cache.base import DEFAULT_TTL, RateCache


class RedisCacheService(RateCache):
    def __init__(self, redis_client: redis.Redis, ttl: timedelta = DEFAULT_TTL):
        super().__init__(ttl)
        self.redis = redis_client

    def _make_rate_key(self, key: str) -> str:
        return f"rate:{key}"

    def _make_table_key(self, key: str) -> str:
        return f"rates:{key}"

    async def _load(self, key: str):
        data = await self.redis.get(key)
        if not data:
            return None
        try:
            return json.loads(data)
        except json.JSONDecodeError as e:
            raise CacheError(f"Invalid json data in cache for {key}") from e

    async def get_rate(self, key: str) -> Decimal | None:
        data = await self._load(self._make_rate_key(key))
        if data is None:
            return None
        try:
            return Decimal(data["rate"])
        except (KeyError, TypeError, InvalidOperation) as e:
            raise CacheError(f"Malformed cached rate for {key}") from e

    async def set_rate(self, key: str, rate: Decimal) -> None:
        await self.redis.setex(
            self._make_rate_key(key), self.ttl, json.dumps({"rate": str(rate)})
        )

    async def get_rate_table(self, key: str) -> RateTable | None:
        data = await self._load(self._make_table_key(key))
        if data is None:
            return None
        try:
            return {code: Decimal(rate) for code, rate in data["rates"].items()}
        except (KeyError, TypeError, AttributeError, InvalidOperation) as e:
            raise CacheError(f"Malformed cached rate table for {key}") from e

    async def set_rate_table(self, key: str, rates: RateTable) -> None:
        payload = {"rates": {code: str(rate) for code, rate in rates.items()}}
        await self.redis.setex(self._make_table_key(key), self.ttl, json.dumps(payload))

    async def close(self) -> None:
        await self.redis.aclose()
