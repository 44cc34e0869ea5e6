# 💳 storefront/domain/pricing/installments.py
"""
💳 Чистий планувальник розстрочки.

🔹 Один варіант на кожну кількість платежів 1..max_installments.
🔹 До межі `no_fee_installments` без відсотків, далі за ставкою магазину.
🔹 Варіанти з платежем нижче мінімального відкидаються; порожній план не є помилкою.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування плану
from decimal import Decimal                                         # 💵 Точні гроші
from typing import List, Tuple                                      # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.shared.errors import InvalidInput                   # 🚨 Валідація
from storefront.shared.utils.logger import LOG_NAME                 # 🏷️ Базове імʼя логера
from .interfaces import IInstallmentPlanner, InstallmentOption      # 🧩 Контракт і DTO
from .rounding import HUNDRED, ONE, ZERO, Number, q2, to_decimal    # ➗ Decimal-утиліти
from .settings import InstallmentInterestMode, PricingSettings      # ⚙️ Налаштування

logger = logging.getLogger(f"{LOG_NAME}.domain.pricing.installments")


class InstallmentPlanner(IInstallmentPlanner):
    """💳 Будує таблицю розстрочки для фінальної ціни."""

    def plan(self, device_value: Number, settings: PricingSettings) -> Tuple[InstallmentOption, ...]:
        """
        📋 Повертає варіанти у зростаючому порядку кількості платежів.

        Args:
            device_value: Фінальна ціна продажу.
            settings: Налаштування магазину (межі, мінімальний платіж, ставка).
        """
        price = to_decimal(device_value, field="device_value")
        if price < ZERO:
            raise InvalidInput("device_value must be >= 0.", field="device_value")

        rate = settings.installment_interest_rate / HUNDRED          # 📈 Ставка за один платіж (частка)
        options: List[InstallmentOption] = []
        for count in range(1, settings.max_installments + 1):
            no_fee = count == 1 or count <= settings.no_fee_installments  # 🆓 Оплата одним платежем завжди без відсотків
            if no_fee:
                value = price / count
                total = price
            else:
                value = self._with_interest(price, count, rate, settings.installment_interest_mode)
                total = value * count

            if value < settings.min_installment_value:
                logger.debug("✂️ %sx відкинуто: %s < min %s", count, value, settings.min_installment_value)
                continue

            options.append(
                InstallmentOption(count=count, value=q2(value), no_fee=no_fee, total=q2(total))
            )

        logger.debug(
            "💳 Installment plan | device=%s max=%s no_fee=%s min=%s → counts=%s",
            price,
            settings.max_installments,
            settings.no_fee_installments,
            settings.min_installment_value,
            [o.count for o in options],
        )
        return tuple(options)

    @staticmethod
    def _with_interest(price: Decimal, count: int, rate: Decimal, mode: InstallmentInterestMode) -> Decimal:
        """📈 Сума одного платежу з відсотками за обраною політикою."""
        if rate == ZERO:
            return price / count
        if mode is InstallmentInterestMode.AMORTIZED:
            return price * rate / (ONE - (ONE + rate) ** -count)
        return price * (ONE + rate) ** count / count


def plan(device_value: Number, settings: PricingSettings) -> Tuple[InstallmentOption, ...]:
    """🧰 Функціональний фасад над `InstallmentPlanner`."""
    return InstallmentPlanner().plan(device_value, settings)


__all__ = ["InstallmentPlanner", "plan"]
