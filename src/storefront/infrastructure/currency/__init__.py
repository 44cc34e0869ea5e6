# 💱 storefront/infrastructure/currency/__init__.py
"""💱 Інфраструктура валютного курсу: upstream-джерела та провайдер з кешем."""

from .exchange_rate_provider import ExchangeRateProvider, utc_now
from .rate_sources import DEFAULT_URL, AwesomeApiRateSource

__all__ = ["ExchangeRateProvider", "AwesomeApiRateSource", "DEFAULT_URL", "utc_now"]
