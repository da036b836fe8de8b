import asyncio
import logging
from collections.abc import Mapping
from decimal import Decimal

from domain.exceptions.currency import UpstreamFetchError
from domain.models.currency import RateTable
from infrastructure.providers.base import RateTableProvider, ScalarRateProvider

logger = logging.getLogger(__name__)


class RateService:
	"""Prices one DASH in the requested currencies.

	Prices are derived by chaining two BTC quotes: the price of one BTC in each
	currency and the price of one DASH in BTC. Currencies listed in
	``direct_providers`` are quoted in DASH by their own provider instead.
	"""

	def __init__(
		self,
		btc_rates_provider: RateTableProvider,
		primary_provider: ScalarRateProvider,
		fallback_provider: ScalarRateProvider,
		direct_providers: Mapping[str, ScalarRateProvider] | None = None,
		providers: Mapping[str, ScalarRateProvider] | None = None,
	):
		self.btc_rates_provider = btc_rates_provider
		self.primary_provider = primary_provider
		self.fallback_provider = fallback_provider
		self.direct_providers = dict(direct_providers or {})
		self.providers = dict(providers or {})

	async def get_provider_rate(self, name: str) -> Decimal:
		try:
			provider = self.providers[name]
		except KeyError as e:
			raise ValueError(f'Unknown provider {name}') from e
		return await provider.fetch_rate()

	async def get_asset_btc_rate(self) -> Decimal:
		primary = self.primary_provider.name
		fallback = self.fallback_provider.name

		try:
			rate = await self.primary_provider.fetch_rate()
		except UpstreamFetchError as e:
			logger.warning(f'{primary} failed, falling back to {fallback}: {e}')
		else:
			if rate > 0:
				return rate
			logger.warning(f'{primary} quoted no DASH/BTC rate, falling back to {fallback}')

		rate = await self.fallback_provider.fetch_rate()
		if rate <= 0:
			raise UpstreamFetchError(fallback, f'No DASH/BTC rate available from {primary} or {fallback}')
		return rate

	async def get_rates(self, currencies: list[str]) -> dict[str, Decimal]:
		btc_rates, asset_rate = await asyncio.gather(
			self.btc_rates_provider.fetch_rates(),
			self.get_asset_btc_rate(),
		)

		rates: dict[str, Decimal] = {}
		for code in currencies:
			direct = self.direct_providers.get(code)
			if direct is not None:
				rates[code] = await direct.fetch_rate()
			else:
				rates[code] = self._derive(code, btc_rates, asset_rate)

		return rates

	def _derive(self, code: str, btc_rates: RateTable, asset_rate: Decimal) -> Decimal:
		try:
			btc_rate = btc_rates[code]
		except KeyError as e:
			provider = self.btc_rates_provider.name
			raise UpstreamFetchError(provider, f'{provider} has no BTC rate for {code}') from e
		return btc_rate * asset_rate
