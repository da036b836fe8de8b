from .base import BaseRateProvider, RateTableProvider, ScalarRateProvider
from .bitcoinaverage import BitcoinAverageRatesProvider, BitcoinAverageTickerProvider
from .cryptocompare import CryptoCompareProvider
from .dashcasa import DashCasaProvider
from .poloniex import PoloniexProvider

__all__ = [
    'BaseRateProvider',
    'RateTableProvider',
    'ScalarRateProvider',
    'BitcoinAverageRatesProvider',
    'BitcoinAverageTickerProvider',
    'CryptoCompareProvider',
    'DashCasaProvider',
    'PoloniexProvider',
]
