from decimal import Decimal
from typing import Any

from domain.models.currency import RateTable
from infrastructure.providers.base import RateTableProvider, ScalarRateProvider

BASE_ASSET_PREFIX_LENGTH = len("BTC")


class BitcoinAverageTickerProvider(ScalarRateProvider):
    """Current DASH/BTC ticker."""

    URL = "https://apiv2.bitcoinaverage.com/indices/crypto/ticker/DASHBTC"

    @property
    def name(self) -> str:
        return "bitcoinaverage"

    def _parse(self, data: Any) -> Decimal:
        try:
            last = data["last"]
        except (KeyError, TypeError) as e:
            raise self._error("missing last in response") from e
        return self._to_decimal(last, "last")


class BitcoinAverageRatesProvider(RateTableProvider):
    """Price of one BTC in every currency BitcoinAverage tracks.

    The global ticker is keyed by symbol (``BTCUSD``, ``BTCEUR``, ...); the
    currency code is whatever follows the base asset prefix.
    """

    URL = "https://apiv2.bitcoinaverage.com/indices/global/ticker/short?crypto=BTC"

    @property
    def name(self) -> str:
        return "bitcoinaverage-global"

    def _parse(self, data: Any) -> RateTable:
        if not isinstance(data, dict):
            raise self._error("expected an object keyed by symbol")

        rates: RateTable = {}
        for symbol, ticker in data.items():
            code = symbol[BASE_ASSET_PREFIX_LENGTH:]
            if not code:
                continue
            try:
                rates[code] = self._to_decimal(ticker["last"], f"last for {symbol}")
            except (KeyError, TypeError) as e:
                raise self._error(f"missing last for {symbol}") from e

        if not rates:
            raise self._error("no rates found in response")
        return rates
