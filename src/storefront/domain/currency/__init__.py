# 💱 storefront/domain/currency/__init__.py
"""
💱 Пакет `domain.currency` публікує DTO та контракти валютного курсу.

🔹 `interfaces.py`: `RateSource`, `ExchangeRate`, `IUpstreamRateSource`, `IExchangeRateProvider`.
"""

from .interfaces import (
    ExchangeRate,                # 💱 Знімок курсу
    IExchangeRateProvider,       # 🏦 Провайдер з кешем
    IUpstreamRateSource,         # 🌐 Upstream-джерело
    RateSource,                  # 🔖 fresh / cached / manual
)

__all__ = ["ExchangeRate", "IExchangeRateProvider", "IUpstreamRateSource", "RateSource"]
