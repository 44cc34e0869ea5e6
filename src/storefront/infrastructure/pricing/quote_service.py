# 🧾 storefront/infrastructure/pricing/quote_service.py
"""
🧾 QuoteService: склеює курс, налаштування і чистий калькулятор.

Курс запитується лише тоді, коли собівартість задана в іноземній валюті.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from typing import Optional

# 🧩 Внутрішні модулі проєкту
from storefront.domain.currency import ExchangeRate, IExchangeRateProvider
from storefront.domain.pricing import IPriceCalculator, PriceBreakdown, PriceCalculator
from storefront.domain.pricing.rounding import Number
from storefront.infrastructure.settings import PricingSettingsStore
from storefront.shared.errors import InvalidInput
from storefront.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.infrastructure.pricing.quote")


class QuoteService:
    """🧾 Авторитетний розрахунок ціни для адмінки та вітрини."""

    def __init__(
        self,
        rates: IExchangeRateProvider,
        settings: PricingSettingsStore,
        calculator: Optional[IPriceCalculator] = None,
    ) -> None:
        self._rates = rates
        self._settings = settings
        self._calculator = calculator or PriceCalculator()

    async def quote(
        self,
        *,
        cost: Optional[Number] = None,
        cost_in_foreign: Optional[Number] = None,
        discount_percent: Number = 0,
        margin_percent: Optional[Number] = None,
        max_installments: Optional[int] = None,
    ) -> PriceBreakdown:
        if (cost is None) == (cost_in_foreign is None):
            raise InvalidInput("Exactly one of cost / cost_in_foreign must be supplied.", field="cost")

        rate: Optional[ExchangeRate] = None
        if cost_in_foreign is not None:
            rate = await self._rates.get()                          # 🚫 RateUnavailable прокидається далі
            logger.debug("💱 Quote uses %s rate %s", rate.source.value, rate.rate)

        return self._calculator.calculate(
            cost=cost,
            cost_in_foreign=cost_in_foreign,
            rate=rate,
            settings=self._settings.get(),
            discount_percent=discount_percent,
            margin_percent=margin_percent,
            max_installments=max_installments,
        )


__all__ = ["QuoteService"]
