import re
from decimal import Decimal
from typing import Any

from infrastructure.providers.base import ScalarRateProvider

# Leading currency symbol, e.g. "Ƀ 0.01234".
_SYMBOL_PREFIX = re.compile(r"^[^\d.+-]+")


class CryptoCompareProvider(ScalarRateProvider):
    """Cross-exchange DASH/BTC average."""

    URL = (
        "https://min-api.cryptocompare.com/data/generateAvg"
        "?fsym=DASH&tsym=BTC&e=Binance,Kraken,Poloniex,Bitfinex"
    )

    @property
    def name(self) -> str:
        return "cryptocompare"

    def _parse(self, data: Any) -> Decimal:
        try:
            price = str(data["RAW"]["PRICE"])
        except (KeyError, TypeError) as e:
            raise self._error("missing RAW.PRICE in response") from e
        return self._to_decimal(_SYMBOL_PREFIX.sub("", price.strip()), "RAW.PRICE")
