class CurrencyException(Exception):
    pass


class ValidationError(CurrencyException):
    pass


class InvalidCurrencyError(ValidationError):
    pass


class InvalidAmountError(ValidationError):
    pass


class UpstreamFetchError(CurrencyException):
    def __init__(self, provider: str, message: str):
        super().__init__(message)
        self.provider = provider


class CacheError(CurrencyException):
    pass
