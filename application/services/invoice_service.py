import logging
import re

from domain.exceptions.currency import InvalidAmountError
from infrastructure.invoices.cointigo import CoinTigoInvoiceClient

logger = logging.getLogger(__name__)

# Signed base-10 integer, no whitespace or digit separators.
AMOUNT_PATTERN = re.compile(r'[+-]?[0-9]+')
AMOUNT_MIN = -(2**63)
AMOUNT_MAX = 2**63 - 1


class InvoiceService:
	def __init__(self, client: CoinTigoInvoiceClient):
		self.client = client

	@staticmethod
	def parse_amount(raw: str | None) -> int:
		"""Parse a non-zero signed 64-bit integer amount."""
		if not raw or not AMOUNT_PATTERN.fullmatch(raw):
			raise InvalidAmountError('Amount param is invalid')
		amount = int(raw)
		if amount == 0 or not AMOUNT_MIN <= amount <= AMOUNT_MAX:
			raise InvalidAmountError('Amount param is invalid')
		return amount

	async def create_invoice(self, address: str, raw_amount: str | None, remote_ip: str | None = None) -> str:
		amount = self.parse_amount(raw_amount)
		invoice = await self.client.create_invoice(address, amount)
		logger.info(
			'invoice',
			extra={'extra_data': {'remote_ip': remote_ip, 'address': address, 'amount': amount}},
		)
		return invoice
