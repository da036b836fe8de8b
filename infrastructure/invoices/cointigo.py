import logging

import httpx

from domain.exceptions.currency import UpstreamFetchError
from infrastructure.notifications.discord import DiscordNotifier

logger = logging.getLogger(__name__)


class CoinTigoInvoiceClient:
    URL = "https://ctgoapi.ngrok.io/cointigo"

    def __init__(
        self,
        notifier: DiscordNotifier | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10,
    ):
        self.notifier = notifier
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def name(self) -> str:
        return "cointigo"

    async def _request(self, payload: dict) -> dict:
        try:
            response = await self._client.post(self.URL, json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamFetchError(
                self.name,
                f"CoinTigo HTTP error {e.response.status_code}: {e.response.text[:200]}",
            ) from e
        except httpx.RequestError as e:
            raise UpstreamFetchError(
                self.name, f"CoinTigo request failed: {e.__class__.__name__}"
            ) from e
        except ValueError as e:
            raise UpstreamFetchError(self.name, f"CoinTigo response parsing error: {e}") from e

    async def create_invoice(self, address: str, amount: int) -> str:
        payload = {
            "coin": "DASH",
            "user": "DaSh.OrG",
            "method": "create_invoice",
            "address": address,
            "amount": amount,
        }
        try:
            data = await self._request(payload)
            invoice = data.get("invoice") if isinstance(data, dict) else None
            if not invoice:
                raise UpstreamFetchError(self.name, "CoinTigo response has no invoice")
        except UpstreamFetchError as e:
            logger.error(f"Invoice creation failed: {e}")
            if self.notifier is not None:
                self.notifier.notify(e)
            raise

        return str(invoice)

    async def close(self) -> None:
        await self._client.aclose()
