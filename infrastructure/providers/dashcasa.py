from decimal import Decimal
from typing import Any

from infrastructure.providers.base import ScalarRateProvider


class DashCasaProvider(ScalarRateProvider):
    """DASH priced directly in VES; the BTC table has no usable VES quote."""

    URL = "http://dash.casa/api/?cur=VES"

    @property
    def name(self) -> str:
        return "dashcasa"

    def _parse(self, data: Any) -> Decimal:
        try:
            rate = data["dashrate"]
        except (KeyError, TypeError) as e:
            raise self._error("missing dashrate in response") from e
        return self._to_decimal(rate, "dashrate")
