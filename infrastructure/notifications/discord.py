import asyncio
import logging

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

logger = logging.getLogger(__name__)

ERROR_COLOR = 15340307


class DiscordNotifier:
    """Posts upstream failures to a Discord webhook without blocking the caller.

    With no webhook URL configured every notification is dropped.
    """

    def __init__(
        self,
        webhook_url: str,
        username: str = "Dash Rates API",
        client: httpx.AsyncClient | None = None,
        timeout: float = 10,
    ):
        self.webhook_url = webhook_url
        self.username = username
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._pending: set[asyncio.Task] = set()

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    def build_payload(self, error: Exception) -> dict:
        return {
            "username": self.username,
            "embeds": [
                {
                    "title": "ERROR",
                    "description": str(error),
                    "color": ERROR_COLOR,
                }
            ],
        }

    def notify(self, error: Exception) -> None:
        if not self.enabled:
            return
        task = asyncio.create_task(self._send(self.build_payload(error)))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    async def _post(self, payload: dict) -> None:
        response = await self._client.post(self.webhook_url, json=payload)
        response.raise_for_status()

    async def _send(self, payload: dict) -> None:
        try:
            await self._post(payload)
        except httpx.HTTPError as e:
            logger.warning(f"Failed to deliver failure notification: {e.__class__.__name__}: {e}")

    async def drain(self) -> None:
        """Wait for notifications still in flight."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def close(self) -> None:
        await self.drain()
        await self._client.aclose()
