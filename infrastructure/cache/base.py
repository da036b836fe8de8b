from abc import ABC, abstractmethod
from datetime import timedelta
from decimal import Decimal

from domain.models.currency import RateTable

DEFAULT_TTL = timedelta(minutes=1)


class RateCache(ABC):
    """Time-bounded store for upstream results, keyed by resource URL.

    Scalar rates and rate tables are kept apart so a read never has to guess
    which shape it got back. Entries expire ``ttl`` after they are written and
    are only ever replaced whole.
    """

    def __init__(self, ttl: timedelta = DEFAULT_TTL):
        self.ttl = ttl

    @abstractmethod
    async def get_rate(self, key: str) -> Decimal | None: ...

    @abstractmethod
    async def set_rate(self, key: str, rate: Decimal) -> None: ...

    @abstractmethod
    async def get_rate_table(self, key: str) -> RateTable | None: ...

    @abstractmethod
    async def set_rate_table(self, key: str, rates: RateTable) -> None: ...

    async def close(self) -> None:
        pass
