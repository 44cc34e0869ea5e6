# ➗ storefront/domain/pricing/rounding.py
"""
➗ Утиліти точної грошової арифметики на Decimal.

🔹 `to_decimal`: безпечне приведення вхідних значень (без float-артефактів).
🔹 `q2`: округлення ROUND_HALF_UP до 2 знаків; застосовується лише на етапі подання результату.
🔹 `percent`: частка від суми без проміжного округлення.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування невдалих конверсій
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation        # 💰 Точна арифметика
from typing import Optional, Union                                  # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.shared.errors import InvalidInput                   # 🚨 Помилка валідації
from storefront.shared.utils.logger import LOG_NAME                 # 🏷️ Базове імʼя логера

logger = logging.getLogger(f"{LOG_NAME}.domain.pricing.rounding")

Number = Union[Decimal, int, float, str]                            # 🔢 Що приймаємо на вході

CENT = Decimal("0.01")                                              # 📏 Квант подання грошей
HUNDRED = Decimal("100")
ZERO = Decimal("0")
ONE = Decimal("1")


def to_decimal(value: Number, *, field: Optional[str] = None) -> Decimal:
    """
    🔢 Приводить число до Decimal через рядкове представлення.

    Рядки з комою («42,50») теж приймаються. NaN/Infinity і нечислові значення
    відхиляються як `InvalidInput`.
    """
    if isinstance(value, bool):                                     # 🚫 bool є підкласом int, але не грошима
        raise InvalidInput(f"Expected a number, got {value!r}.", field=field)
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))                                # 🧼 Без двійкових хвостів float
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip().replace(",", "."))
        except InvalidOperation as exc:
            logger.debug("❌ to_decimal: %r не число", value)
            raise InvalidInput(f"Expected a number, got {value!r}.", field=field) from exc
    else:
        raise InvalidInput(f"Unsupported numeric type: {type(value).__name__}.", field=field)

    if not result.is_finite():
        raise InvalidInput(f"Expected a finite number, got {value!r}.", field=field)
    return result


def q2(value: Decimal) -> Decimal:
    """📏 Округлює до центів за правилом half-up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def percent(amount: Decimal, rate_percent: Decimal) -> Decimal:
    """📊 `amount * rate / 100` без округлення."""
    return amount * rate_percent / HUNDRED


__all__ = ["Number", "CENT", "HUNDRED", "ZERO", "ONE", "to_decimal", "q2", "percent"]
