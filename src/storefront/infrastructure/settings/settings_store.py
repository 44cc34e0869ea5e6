# ⚙️ storefront/infrastructure/settings/settings_store.py
"""
⚙️ Thread-safe сховище налаштувань ціноутворення.

🔹 Читачі отримують незмінний знімок `PricingSettings`.
🔹 Оновлення часткове: невідомі ключі та невалідні значення → `InvalidInput`, стан не змінюється.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from threading import RLock                                         # 🔒 Потокобезпечність
from typing import Any, Dict, Mapping, Optional

# 🧩 Внутрішні модулі проєкту
from storefront.domain.currency import ExchangeRate
from storefront.domain.pricing import PricingSettings
from storefront.shared.errors import InvalidInput
from storefront.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.infrastructure.settings")

# camelCase (API) → snake_case (домен)
_API_ALIASES: Dict[str, str] = {
    "taxRate": "tax_rate",
    "processorRate": "processor_rate",
    "processorFixedFee": "processor_fixed_fee",
    "defaultProfitMargin": "default_profit_margin",
    "maxInstallments": "max_installments",
    "noFeeInstallments": "no_fee_installments",
    "minInstallmentValue": "min_installment_value",
    "installmentInterestRate": "installment_interest_rate",
    "installmentInterestMode": "installment_interest_mode",
    "companyName": "company_name",
}


class PricingSettingsStore:
    """⚙️ Тримає поточні налаштування магазину."""

    def __init__(self, initial: Optional[PricingSettings] = None) -> None:
        self._settings = initial or PricingSettings()
        self._lock = RLock()

    def get(self) -> PricingSettings:
        with self._lock:
            return self._settings

    def update(self, patch: Mapping[str, Any]) -> PricingSettings:
        """🔁 Часткове оновлення; приймає snake_case або camelCase ключі."""
        changes = {_API_ALIASES.get(key, key): value for key, value in (patch or {}).items() if value is not None}
        if not changes:
            raise InvalidInput("Nothing to update.", field="settings")
        with self._lock:
            updated = self._settings.updated(**changes)
            self._settings = updated
        logger.info("⚙️ Pricing settings updated: %s", sorted(changes))
        return updated

    def public_view(self, last_rate: Optional[ExchangeRate] = None) -> Dict[str, Any]:
        """🌍 Публічний набір налаштувань для вітрини + останній відомий курс."""
        settings = self.get()
        return {
            "companyName": settings.company_name,
            "taxRate": str(settings.tax_rate),
            "processorRate": str(settings.processor_rate),
            "processorFixedFee": str(settings.processor_fixed_fee),
            "defaultProfitMargin": str(settings.default_profit_margin),
            "maxInstallments": settings.max_installments,
            "noFeeInstallments": settings.no_fee_installments,
            "minInstallmentValue": str(settings.min_installment_value),
            "installmentInterestRate": str(settings.installment_interest_rate),
            "installmentInterestMode": settings.installment_interest_mode.value,
            "lastDollarRate": None if last_rate is None else str(last_rate.rate),
            "lastDollarRateAt": None if last_rate is None else last_rate.observed_at.isoformat(),
        }


__all__ = ["PricingSettingsStore"]
