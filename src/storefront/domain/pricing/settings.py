# ⚙️ storefront/domain/pricing/settings.py
"""
⚙️ PricingSettings: загальномагазинні параметри ціноутворення як незмінний value-object.

🔹 Передається у чисті функції явно (жодного глобального стану).
🔹 Валідує інваріанти при створенні: відсотки в межах, `no_fee ≤ max`.
🔹 Оновлення: лише через `updated()`, що створює новий валідований екземпляр.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування валідації
from dataclasses import asdict, dataclass, fields, replace          # 🧱 Immutable-конфіг
from decimal import Decimal                                         # 💵 Точні гроші
from enum import Enum                                               # 🔖 Політика відсотків розстрочки
from typing import Any, Dict, Mapping                               # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.shared.errors import InvalidInput                   # 🚨 Помилка валідації
from storefront.shared.utils.logger import LOG_NAME                 # 🏷️ Базове імʼя логера
from .rounding import HUNDRED, ZERO, Number, q2, to_decimal  # ➗ Decimal-утиліти

logger = logging.getLogger(f"{LOG_NAME}.domain.pricing.settings")


class InstallmentInterestMode(str, Enum):
    """🔖 Як нараховується відсоток на розстрочку понад безвідсоткову межу."""

    COMPOUND = "compound"                                           # 📈 device·(1+r)^n / n
    AMORTIZED = "amortized"                                         # 🧾 Таблиця Price: device·r / (1−(1+r)^−n)

    def __str__(self) -> str:
        return self.value


# ================================
# 🧰 ВАЛІДАТОРИ
# ================================
def _percent_in_range(name: str, value: Number) -> Decimal:
    """Відсоток у закритому діапазоні [0, 100]."""
    result = to_decimal(value, field=name)
    if result < ZERO or result > HUNDRED:
        raise InvalidInput(f"{name} must be within [0, 100], got {result}.", field=name)
    return result


def _non_negative(name: str, value: Number) -> Decimal:
    result = to_decimal(value, field=name)
    if result < ZERO:
        raise InvalidInput(f"{name} must be >= 0, got {result}.", field=name)
    return result


def _whole(name: str, value: Any) -> int:
    """Ціле число; bool та дробові значення відкидаються."""
    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be an integer.", field=name)
    if isinstance(value, int):
        return value
    number = to_decimal(value, field=name)
    if number != number.to_integral_value():
        raise InvalidInput(f"{name} must be an integer, got {number}.", field=name)
    return int(number)


# ================================
# 🏛️ VALUE OBJECT
# ================================
@dataclass(frozen=True)
class PricingSettings:
    """⚙️ Налаштування магазину, що впливають на ціну та розстрочку."""

    tax_rate: Decimal = Decimal("15")                               # 🧾 Податок, %
    processor_rate: Decimal = Decimal("3.99")                       # 💳 Комісія процесингу, %
    processor_fixed_fee: Decimal = Decimal("0.39")                  # 💳 Фіксована комісія за транзакцію
    default_profit_margin: Decimal = Decimal("30")                  # 📈 Бажана маржа, % (може бути > 100)
    max_installments: int = 12                                      # 🔢 Максимум платежів
    no_fee_installments: int = 3                                    # 🆓 Скільки платежів без відсотків
    min_installment_value: Decimal = Decimal("50")                  # 🪙 Мінімальний платіж
    installment_interest_rate: Decimal = Decimal("0")               # 📈 Ставка за платіж понад no-fee, %
    installment_interest_mode: InstallmentInterestMode = InstallmentInterestMode.COMPOUND
    company_name: str = ""                                          # 🏷️ Назва магазину для вітрини

    def __post_init__(self) -> None:
        normalized = {
            "tax_rate": _percent_in_range("tax_rate", self.tax_rate),
            "processor_rate": _percent_in_range("processor_rate", self.processor_rate),
            "processor_fixed_fee": _non_negative("processor_fixed_fee", self.processor_fixed_fee),
            "default_profit_margin": _non_negative("default_profit_margin", self.default_profit_margin),
            "max_installments": _whole("max_installments", self.max_installments),
            "no_fee_installments": _whole("no_fee_installments", self.no_fee_installments),
            "min_installment_value": q2(_non_negative("min_installment_value", self.min_installment_value)),  # 📏 Платежі теж у центах
            "installment_interest_rate": _percent_in_range("installment_interest_rate", self.installment_interest_rate),
            "company_name": str(self.company_name or "").strip(),
        }
        try:
            normalized["installment_interest_mode"] = InstallmentInterestMode(self.installment_interest_mode)
        except ValueError as exc:
            raise InvalidInput(
                f"installment_interest_mode must be one of {[m.value for m in InstallmentInterestMode]}.",
                field="installment_interest_mode",
            ) from exc

        if normalized["max_installments"] < 1:
            raise InvalidInput("max_installments must be >= 1.", field="max_installments")
        if not 0 <= normalized["no_fee_installments"] <= normalized["max_installments"]:
            raise InvalidInput(
                "no_fee_installments must be within [0, max_installments].",
                field="no_fee_installments",
            )

        for key, value in normalized.items():
            object.__setattr__(self, key, value)                    # 🔐 Фіксуємо нормалізовані значення

    # ================================
    # 🔁 ПОБУДОВА / ОНОВЛЕННЯ
    # ================================
    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "PricingSettings":
        """📥 Створює налаштування зі словника (наприклад, розділ `pricing` конфігу); невідомі ключі ігноруються."""
        known = {f.name for f in fields(cls)}
        payload = {k: v for k, v in (data or {}).items() if k in known and v is not None}
        ignored = sorted(set(data or {}) - known)
        if ignored:
            logger.debug("ℹ️ PricingSettings.from_mapping: ігноруємо ключі %s", ignored)
        return cls(**payload)

    def updated(self, **changes: Any) -> "PricingSettings":
        """🔁 Повертає нову валідовану копію зі змінами."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise InvalidInput(f"Unknown settings: {', '.join(unknown)}.", field=unknown[0])
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        """📤 Серіалізація: Decimal → str, enum → значення."""
        raw = asdict(self)
        return {
            key: (str(value) if isinstance(value, (Decimal, Enum)) else value)
            for key, value in raw.items()
        }


__all__ = ["InstallmentInterestMode", "PricingSettings"]
