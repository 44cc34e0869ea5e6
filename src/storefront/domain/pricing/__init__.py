# 💸 storefront/domain/pricing/__init__.py
"""
💸 Пакет `domain.pricing` публікує контракти, DTO, утиліти та чисті сервіси ціноутворення.

🔹 `interfaces.py`: InstallmentOption/PriceBreakdown, IPriceCalculator, IInstallmentPlanner.
🔹 `rounding.py`: утиліти `q2`, `percent`, `to_decimal` для роботи з Decimal.
🔹 `settings.py`: `PricingSettings` (незмінні налаштування магазину).
🔹 `calculator.py` / `installments.py`: чисті реалізації.
"""

# 🧩 Внутрішні модулі проєкту
from .calculator import PriceCalculator, calculate                  # 💼 Чистий сервіс розрахунку
from .installments import InstallmentPlanner, plan                  # 💳 Розстрочка
from .interfaces import (                                           # 🧱 DTO та контракти
    IInstallmentPlanner,
    InstallmentOption,
    IPriceCalculator,
    PriceBreakdown,
)
from .rounding import percent, q2, to_decimal                       # ➗ Утиліти округлення та відсотків
from .settings import InstallmentInterestMode, PricingSettings      # ⚙️ Налаштування


# ================================
# 📤 ПУБЛІЧНИЙ API ПАКЕТА
# ================================
__all__ = [
    # DTO / типи
    "InstallmentOption",
    "PriceBreakdown",
    "PricingSettings",
    "InstallmentInterestMode",
    # Контракти
    "IPriceCalculator",
    "IInstallmentPlanner",
    # Сервіси
    "PriceCalculator",
    "InstallmentPlanner",
    "calculate",
    "plan",
    # Утиліти
    "q2",
    "percent",
    "to_decimal",
]
