# 🧩 storefront/domain/pricing/interfaces.py
"""
🧩 DTO та контракти доменних сервісів ціноутворення.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from abc import ABC, abstractmethod                                 # 🧱 Контракти
from dataclasses import dataclass, field                            # 🧱 Immutable DTO
from decimal import Decimal                                         # 💵 Гроші
from typing import Any, Dict, Optional, Tuple                       # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.domain.currency.interfaces import ExchangeRate      # 💱 Курс для іноземної собівартості
from .rounding import Number                                        # 🔢 Вхідні числа
from .settings import PricingSettings                               # ⚙️ Налаштування магазину


# ================================
# 🏛️ СТРУКТУРИ ДАНИХ (DTO)
# ================================
@dataclass(frozen=True)
class InstallmentOption:
    """💳 Один варіант розстрочки."""

    count: int                                                      # 🔢 Кількість платежів
    value: Decimal                                                  # 🪙 Сума одного платежу
    no_fee: bool                                                    # 🆓 Без відсотків
    total: Decimal                                                  # 🧾 Разом за всі платежі

    def to_dict(self) -> Dict[str, Any]:
        return {
            "installments": self.count,
            "value": str(self.value),
            "noFee": self.no_fee,
            "total": str(self.total),
        }


@dataclass(frozen=True)
class PriceBreakdown:
    """🧾 Повна розкладка ціни; створюється лише на запит і ніколи не зберігається."""

    cost: Decimal                                                   # 💲 Собівартість у локальній валюті
    cost_in_foreign: Optional[Decimal]                              # 💵 Собівартість в іноземній валюті (якщо була)
    exchange_rate: Optional[Decimal]                                # 💱 Використаний курс
    margin_percent: Decimal                                         # 📈 Бажана маржа, %
    tax_rate: Decimal                                               # 🧾 Податок, %
    processor_rate: Decimal                                         # 💳 Комісія процесингу, %
    processor_fixed_fee: Decimal                                    # 💳 Фіксована комісія
    discount_percent: Decimal                                       # 🎁 Знижка, %
    margin_amount: Decimal                                          # 📈 Сума бажаної маржі
    tax_amount: Decimal                                             # 🧾 Сума податку
    processor_amount: Decimal                                       # 💳 Сума комісії процесингу
    total_fees: Decimal                                             # 🧮 Податок + комісія
    discount_amount: Decimal                                        # 🎁 ideal − device
    ideal_value: Decimal                                            # 🏷️ Ціна до знижки
    device_value: Decimal                                           # 💸 Фактична ціна продажу
    real_value: Decimal                                             # 💰 Що отримує магазин після податку/комісій
    profit: Decimal                                                 # 💰 real − cost
    profit_margin: Decimal                                          # 📊 profit / real, %
    degenerate_margin: bool = False                                 # ⚠️ real == 0 → маржа показується як 0
    installments: Tuple[InstallmentOption, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """📤 Серіалізація для API/прев'ю форми (Decimal → str)."""

        def _s(value: Optional[Decimal]) -> Optional[str]:
            return None if value is None else str(value)

        return {
            "costPrice": _s(self.cost),
            "costInForeign": _s(self.cost_in_foreign),
            "dollarRate": _s(self.exchange_rate),
            "desiredProfitMargin": _s(self.margin_percent),
            "taxRate": _s(self.tax_rate),
            "processorRate": _s(self.processor_rate),
            "processorFixedFee": _s(self.processor_fixed_fee),
            "discountPercent": _s(self.discount_percent),
            "marginAmount": _s(self.margin_amount),
            "taxAmount": _s(self.tax_amount),
            "processorAmount": _s(self.processor_amount),
            "totalFees": _s(self.total_fees),
            "discountAmount": _s(self.discount_amount),
            "idealValue": _s(self.ideal_value),
            "deviceValue": _s(self.device_value),
            "realValue": _s(self.real_value),
            "profit": _s(self.profit),
            "profitMargin": _s(self.profit_margin),
            "degenerateMargin": self.degenerate_margin,
            "installments": [option.to_dict() for option in self.installments],
        }


# ================================
# 💰 КОНТРАКТИ СЕРВІСІВ
# ================================
class IInstallmentPlanner(ABC):
    @abstractmethod
    def plan(self, device_value: Number, settings: PricingSettings) -> Tuple[InstallmentOption, ...]:
        """Будує впорядкований список варіантів розстрочки."""


class IPriceCalculator(ABC):
    @abstractmethod
    def calculate(
        self,
        *,
        cost: Optional[Number],
        cost_in_foreign: Optional[Number],
        rate: Optional[ExchangeRate],
        settings: PricingSettings,
        discount_percent: Number = 0,
        margin_percent: Optional[Number] = None,
        max_installments: Optional[int] = None,
    ) -> PriceBreakdown:
        """Розраховує повну розкладку ціни без побічних ефектів."""


__all__ = ["InstallmentOption", "PriceBreakdown", "IInstallmentPlanner", "IPriceCalculator"]
