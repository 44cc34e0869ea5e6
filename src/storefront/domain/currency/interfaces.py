# 💱 storefront/domain/currency/interfaces.py
"""
💱 Контракти та DTO для валютного курсу.

🔹 `ExchangeRate`: незмінний знімок курсу з джерелом і часом спостереження.
🔹 `IUpstreamRateSource`: асинхронне upstream-джерело «сирого» курсу.
🔹 `IExchangeRateProvider`: провайдер з кешем, ручним курсом та примусовим оновленням.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from abc import ABC, abstractmethod                                 # 🧱 Абстрактні контракти
from dataclasses import dataclass                                   # 🧱 DTO
from datetime import datetime, timedelta                            # 🕒 Час спостереження, TTL
from decimal import Decimal                                         # 💰 Точний курс
from enum import Enum                                               # 🔖 Джерело курсу
from typing import Any, Dict, Optional, Protocol                    # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.shared.errors import InvalidInput                   # 🚨 Порушення інваріанта


class RateSource(str, Enum):
    """🔖 Звідки взято курс."""

    FRESH = "fresh"                                                 # 🟢 У межах TTL від observed_at
    CACHED = "cached"                                               # 🟡 TTL минув, оновлення не вдалося
    MANUAL = "manual"                                               # ✍️ Ручний курс адміністратора

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ExchangeRate:
    """💱 Курс «1 одиниця іноземної валюти → N локальної»."""

    rate: Decimal                                                   # 💱 Ефективний курс (зі спредом)
    source: RateSource                                              # 🔖 Походження значення
    observed_at: datetime                                           # 🕒 Коли курс отримано/встановлено
    base_rate: Optional[Decimal] = None                             # 🌐 Сирий upstream-курс (без спреду)
    spread_percent: Decimal = Decimal("0")                          # ➕ Застосований спред, %

    def __post_init__(self) -> None:
        if not isinstance(self.rate, Decimal) or not self.rate.is_finite() or self.rate <= 0:
            raise InvalidInput(f"Exchange rate must be > 0, got {self.rate!r}.", field="rate")

    def is_fresh(self, now: datetime, ttl: timedelta) -> bool:
        """✅ True, якщо з моменту спостереження минуло менше за TTL."""
        return (now - self.observed_at) < ttl

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rate": str(self.rate),
            "source": self.source.value,
            "updatedAt": self.observed_at.isoformat(),
            "baseRate": None if self.base_rate is None else str(self.base_rate),
            "spreadPercent": str(self.spread_percent),
        }


class IUpstreamRateSource(Protocol):
    """🌐 Upstream-джерело курсу (HTTP API тощо)."""

    async def fetch_rate(self) -> Decimal:
        """Повертає сирий курс або кидає `RateSourceError`."""
        ...

    async def close(self) -> None:
        ...


class IExchangeRateProvider(ABC):
    """🏦 Контракт провайдера курсу з кешем."""

    @abstractmethod
    async def get(self) -> ExchangeRate:
        """Ручний → свіжий кеш → живий запит → застарілий кеш → `RateUnavailable`."""

    @abstractmethod
    async def refresh(self) -> ExchangeRate:
        """Примусовий запит; збій → `RateRefreshFailed`, кеш не змінюється."""

    @abstractmethod
    def peek(self) -> Optional[ExchangeRate]:
        """Поточне значення кешу без I/O."""


__all__ = ["RateSource", "ExchangeRate", "IUpstreamRateSource", "IExchangeRateProvider"]
