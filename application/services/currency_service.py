import logging
import re
from bisect import bisect_left
from collections.abc import Iterable

from domain.exceptions.currency import InvalidCurrencyError
from domain.models.currency import LIST_SENTINEL, SUPPORTED_CURRENCIES

logger = logging.getLogger(__name__)

SELECTION_PATTERN = re.compile(r'(/?[A-Z]{3})+')


class CurrencyService:
	def __init__(self, supported_currencies: Iterable[str] = SUPPORTED_CURRENCIES):
		# Sorted for the binary search in is_supported.
		self.supported_currencies: tuple[str, ...] = tuple(sorted(supported_currencies))

	def is_supported(self, code: str) -> bool:
		i = bisect_left(self.supported_currencies, code)
		return i < len(self.supported_currencies) and self.supported_currencies[i] == code

	def parse_selection(self, path: str) -> list[str]:
		"""Turn a request path such as ``/usd/eur`` into the requested codes.

		``/LIST`` selects every supported currency.
		"""
		selection = path.removeprefix('/').removesuffix('/').upper()

		if selection == LIST_SENTINEL:
			return list(self.supported_currencies)

		if not SELECTION_PATTERN.fullmatch(selection):
			raise InvalidCurrencyError('Malformed currency selection in url')

		currencies = selection.split('/')
		for code in currencies:
			if not self.is_supported(code):
				logger.info(f'Rejected unsupported currency {code!r}')
				raise InvalidCurrencyError('Unsupported currency selection in url')

		return currencies
