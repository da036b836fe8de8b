from decimal import Decimal
from typing import Any

from infrastructure.providers.base import ScalarRateProvider


class PoloniexProvider(ScalarRateProvider):
    """Mean DASH/BTC rate over the recent trades Poloniex returns.

    The endpoint decides how many trades come back; all of them are averaged.
    """

    URL = "https://poloniex.com/public?command=returnTradeHistory&currencyPair=BTC_DASH"

    @property
    def name(self) -> str:
        return "poloniex"

    def _parse(self, data: Any) -> Decimal:
        if not isinstance(data, list):
            raise self._error("expected a list of trades")
        if not data:
            raise self._error("no trades returned")

        try:
            rates = [self._to_decimal(trade["rate"], "trade rate") for trade in data]
        except (KeyError, TypeError) as e:
            raise self._error("trade without a rate") from e

        return sum(rates) / len(rates)
