# 📦 storefront/domain/pricing/calculator.py
"""
📦 Чистий калькулятор ціни продажу.

🔹 Від собівартості (локальної або іноземної) до ціни, що покриває маржу, податок і процесинг.
🔹 Жодних побічних ефектів: однакові входи → ідентичний `PriceBreakdown`.
🔹 Округлення лише при пакуванні результату; проміжні значення мають повну точність Decimal.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🪵 Логування кроків розрахунку
from decimal import Decimal                                         # 💵 Точні гроші
from typing import Optional                                         # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.domain.currency.interfaces import ExchangeRate      # 💱 Курс для іноземної собівартості
from storefront.shared.errors import InvalidInput                   # 🚨 Валідація вхідних даних
from storefront.shared.utils.logger import LOG_NAME                 # 🏷️ Базове імʼя логера
from .installments import InstallmentPlanner                        # 💳 Планувальник розстрочки
from .interfaces import IInstallmentPlanner, IPriceCalculator, PriceBreakdown
from .rounding import HUNDRED, ONE, ZERO, Number, percent, q2, to_decimal
from .settings import PricingSettings                               # ⚙️ Налаштування магазину

logger = logging.getLogger(f"{LOG_NAME}.domain.pricing")            # 🧾 Іменований логер сервісу


# ================================
# 🏛️ ГОЛОВНИЙ ДОМЕННИЙ СЕРВІС
# ================================
class PriceCalculator(IPriceCalculator):
    """💸 Виконує **чистий** конвеєр розрахунку ціни."""

    def __init__(self, planner: Optional[IInstallmentPlanner] = None) -> None:
        self._planner = planner or InstallmentPlanner()              # 💳 Планувальник без стану

    # ================================
    # 🔢 ПУБЛІЧНИЙ API РОЗРАХУНКУ
    # ================================
    def calculate(
        self,
        *,
        cost: Optional[Number] = None,
        cost_in_foreign: Optional[Number] = None,
        rate: Optional[ExchangeRate] = None,
        settings: PricingSettings,
        discount_percent: Number = 0,
        margin_percent: Optional[Number] = None,
        max_installments: Optional[int] = None,
    ) -> PriceBreakdown:
        """
        🚀 Розраховує повну розкладку ціни.

        Args:
            cost: Собівартість у локальній валюті.
            cost_in_foreign: Собівартість в іноземній валюті (тоді потрібен `rate`).
            rate: Курс для перерахунку іноземної собівартості.
            settings: Налаштування магазину.
            discount_percent: Промо-знижка, % у межах [0, 100].
            margin_percent: Власна маржа замість `settings.default_profit_margin`.
            max_installments: Власна межа розстрочки лише для цього розрахунку.

        Returns:
            PriceBreakdown: Незмінна розкладка з розстрочкою.
        """
        # --- 🛂 Крок 0: валідація до будь-яких обчислень ---
        if (cost is None) == (cost_in_foreign is None):
            raise InvalidInput("Exactly one of cost / cost_in_foreign must be supplied.", field="cost")

        foreign: Optional[Decimal] = None
        used_rate: Optional[Decimal] = None
        if cost_in_foreign is not None:
            foreign = to_decimal(cost_in_foreign, field="cost_in_foreign")
            if foreign < ZERO:
                raise InvalidInput("cost_in_foreign must be >= 0.", field="cost_in_foreign")
            if rate is None:
                raise InvalidInput("An exchange rate is required for a foreign cost.", field="rate")
            used_rate = rate.rate
            base_cost = foreign * used_rate                          # 💱 Перерахунок у локальну валюту
        else:
            base_cost = to_decimal(cost, field="cost")               # type: ignore[arg-type]
            if base_cost < ZERO:
                raise InvalidInput("cost must be >= 0.", field="cost")

        margin = settings.default_profit_margin if margin_percent is None else to_decimal(margin_percent, field="margin_percent")
        if margin < ZERO:
            raise InvalidInput("margin_percent must be >= 0.", field="margin_percent")
        discount = to_decimal(discount_percent, field="discount_percent")
        if discount < ZERO or discount > HUNDRED:
            raise InvalidInput("discount_percent must be within [0, 100].", field="discount_percent")

        plan_settings = settings
        if max_installments is not None:
            if isinstance(max_installments, bool) or not isinstance(max_installments, int) or max_installments < 1:
                raise InvalidInput("max_installments must be an integer >= 1.", field="max_installments")
            plan_settings = settings.updated(
                max_installments=max_installments,
                no_fee_installments=min(settings.no_fee_installments, max_installments),
            )

        tax_rate = settings.tax_rate
        processor_rate = settings.processor_rate
        fixed_fee = settings.processor_fixed_fee

        # --- 📈 Крок 1: бажана маржа ---
        margin_amount = percent(base_cost, margin)
        running = base_cost + margin_amount

        # --- 🧾 Крок 2: податок від бази з маржею ---
        tax_amount = percent(running, tax_rate)
        running += tax_amount

        # --- 💳 Крок 3: процесинг від бази з податком ---
        processor_amount = percent(running, processor_rate) + fixed_fee
        ideal_value = running + processor_amount

        # --- 🎁 Крок 4: знижка ---
        device_value = ideal_value * (ONE - discount / HUNDRED)

        # --- 💰 Крок 5–6: що лишається магазину ---
        # Комісії рахуються від бази до знижки й після знижки не перераховуються.
        real_value = device_value - tax_amount - processor_amount
        profit = real_value - base_cost
        degenerate = real_value == ZERO
        profit_margin = ZERO if degenerate else profit / real_value * HUNDRED
        if degenerate:
            logger.warning("⚠️ Degenerate margin | real_value=0 cost=%s discount=%s%%", base_cost, discount)

        device_rounded = q2(device_value)
        installments = self._planner.plan(device_rounded, plan_settings)

        result = PriceBreakdown(
            cost=q2(base_cost),
            cost_in_foreign=None if foreign is None else q2(foreign),
            exchange_rate=used_rate,
            margin_percent=margin,
            tax_rate=tax_rate,
            processor_rate=processor_rate,
            processor_fixed_fee=fixed_fee,
            discount_percent=discount,
            margin_amount=q2(margin_amount),
            tax_amount=q2(tax_amount),
            processor_amount=q2(processor_amount),
            total_fees=q2(tax_amount + processor_amount),
            discount_amount=q2(ideal_value - device_value),
            ideal_value=q2(ideal_value),
            device_value=device_rounded,
            real_value=q2(real_value),
            profit=q2(profit),
            profit_margin=q2(profit_margin),
            degenerate_margin=degenerate,
            installments=installments,
        )
        logger.info(
            "✅ Pricing completed | cost=%s margin=%s%% tax=%s processor=%s ideal=%s device=%s real=%s profit=%s (%s%%)",
            result.cost,
            margin,
            result.tax_amount,
            result.processor_amount,
            result.ideal_value,
            result.device_value,
            result.real_value,
            result.profit,
            result.profit_margin,
        )
        return result


def calculate(
    *,
    cost: Optional[Number] = None,
    cost_in_foreign: Optional[Number] = None,
    rate: Optional[ExchangeRate] = None,
    settings: PricingSettings,
    discount_percent: Number = 0,
    margin_percent: Optional[Number] = None,
    max_installments: Optional[int] = None,
) -> PriceBreakdown:
    """🧰 Функціональний фасад над `PriceCalculator`."""
    return PriceCalculator().calculate(
        cost=cost,
        cost_in_foreign=cost_in_foreign,
        rate=rate,
        settings=settings,
        discount_percent=discount_percent,
        margin_percent=margin_percent,
        max_installments=max_installments,
    )


__all__ = ["PriceCalculator", "calculate"]
