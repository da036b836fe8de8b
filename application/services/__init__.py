from .currency_service import CurrencyService
from .invoice_service import InvoiceService
from .rate_service import RateService

__all__ = ['CurrencyService', 'InvoiceService', 'RateService']
