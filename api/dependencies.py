import logging
from datetime import timedelta

from redis.asyncio import Redis

from application.services import CurrencyService, InvoiceService, RateService
from config.settings import Settings, get_settings
from domain.models.currency import VES
from infrastructure.cache.base import RateCache
from infrastructure.cache.memory_cache import MemoryCacheService
from infrastructure.cache.redis_cache import RedisCacheService
from infrastructure.invoices.cointigo import CoinTigoInvoiceClient
from infrastructure.notifications.discord import DiscordNotifier
from infrastructure.providers import (
	BaseRateProvider,
	BitcoinAverageRatesProvider,
	BitcoinAverageTickerProvider,
	CryptoCompareProvider,
	DashCasaProvider,
	PoloniexProvider,
)

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	cache: RateCache | None = None
	notifier: DiscordNotifier | None = None
	providers: dict[str, BaseRateProvider] | None = None
	invoice_client: CoinTigoInvoiceClient | None = None
	currency_service: CurrencyService | None = None
	rate_service: RateService | None = None


deps = AppDependencies()


def build_cache(settings: Settings) -> RateCache:
	ttl = timedelta(seconds=settings.CACHE_TTL_SECONDS)
	if settings.REDIS_URL:
		logger.info('Using Redis rate cache')
		return RedisCacheService(Redis.from_url(settings.REDIS_URL, decode_responses=True), ttl=ttl)
	logger.info('Using in-memory rate cache')
	return MemoryCacheService(ttl=ttl)


def init_dependencies(settings: Settings | None = None) -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = settings or get_settings()

	deps.cache = build_cache(settings)
	deps.notifier = DiscordNotifier(
		settings.DISCORD_WEBHOOK_URL,
		username=settings.NOTIFIER_USERNAME,
		timeout=settings.HTTP_TIMEOUT,
	)
	if not deps.notifier.enabled:
		logger.info('DISCORD_WEBHOOK_URL not set, failure notifications disabled')

	def provider_kwargs() -> dict:
		return {'cache': deps.cache, 'notifier': deps.notifier, 'timeout': settings.HTTP_TIMEOUT}

	cryptocompare = CryptoCompareProvider(**provider_kwargs())
	poloniex = PoloniexProvider(**provider_kwargs())
	bitcoinaverage = BitcoinAverageTickerProvider(**provider_kwargs())
	btc_rates = BitcoinAverageRatesProvider(**provider_kwargs())
	dashcasa = DashCasaProvider(**provider_kwargs())

	deps.providers = {
		provider.name: provider
		for provider in (cryptocompare, poloniex, bitcoinaverage, btc_rates, dashcasa)
	}
	deps.invoice_client = CoinTigoInvoiceClient(notifier=deps.notifier, timeout=settings.HTTP_TIMEOUT)

	deps.currency_service = CurrencyService()
	deps.rate_service = RateService(
		btc_rates_provider=btc_rates,
		primary_provider=cryptocompare,
		fallback_provider=bitcoinaverage,
		direct_providers={VES: dashcasa},
		providers={p.name: p for p in (cryptocompare, poloniex, bitcoinaverage)},
	)
	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.providers:
		for provider in deps.providers.values():
			await provider.close()
	if deps.invoice_client:
		await deps.invoice_client.close()
	if deps.notifier:
		await deps.notifier.close()
	if deps.cache:
		await deps.cache.close()

	logger.info('Cleanup complete')


def get_currency_service() -> CurrencyService:
	if deps.currency_service is None:
		raise RuntimeError('Currency service not initialized')
	return deps.currency_service


def get_rate_service() -> RateService:
	if deps.rate_service is None:
		raise RuntimeError('Rate service not initialized')
	return deps.rate_service


def get_invoice_service() -> InvoiceService:
	if deps.invoice_client is None:
		raise RuntimeError('Invoice client not initialized')
	return InvoiceService(client=deps.invoice_client)
