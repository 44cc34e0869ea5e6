# 💵 storefront/infrastructure/currency/exchange_rate_provider.py
"""
💵 ExchangeRateProvider: інфраструктурний сервіс життєвого циклу курсу валют.

🎯 Призначення:
    • ручний курс адміністратора завжди має пріоритет, якщо увімкнений;
    • інакше повертає кешований курс у межах TTL, або ходить в upstream;
    • при збої upstream віддає останній відомий курс (`source=cached`);
    • зберігає слот кешу на диск, щоб після рестарту був резервний курс.

⚙️ Нотатки:
    • одночасні виклики, яким потрібен запит, ділять одну in-flight задачу;
    • живий запит обмежений таймаутом (`asyncio.wait_for`);
    • спред застосовується лише до upstream-курсу, ніколи до ручного;
    • квант ефективного курсу: 4 знаки після коми.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import aiofiles                                                     # 💽 Асинхронна робота з файлами

# 🔠 Системні імпорти
import asyncio                                                      # 🔁 Локи, single-flight задача
import json                                                         # 📄 Серіалізація слоту кешу
import logging                                                      # 🧾 Логи сервісу
from dataclasses import dataclass                                   # 🧱 Слот кешу
from datetime import datetime, timedelta, timezone                  # 🕒 TTL і мітки часу
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation        # 💰 Курс як Decimal
from pathlib import Path                                            # 📂 Шлях до файлу кешу
from typing import Any, Callable, Dict, Optional, Union

# 🧩 Внутрішні модулі проєкту
from storefront.domain.currency import ExchangeRate, IExchangeRateProvider, IUpstreamRateSource, RateSource
from storefront.domain.pricing.rounding import HUNDRED, ONE, ZERO, Number, to_decimal
from storefront.shared.errors import InvalidInput, RateRefreshFailed, RateSourceError, RateUnavailable
from storefront.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.infrastructure.currency.provider")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class _CacheSlot:
    """💾 Останній успішний upstream-курс (без спреду)."""

    base_rate: Decimal
    observed_at: datetime


class ExchangeRateProvider(IExchangeRateProvider):
    """
    🏦 Провайдер курсу «1 USD → N локальної валюти» з кешем, ручним курсом і резервом.
    """

    _RATE_QUANTUM = Decimal("0.0001")                               # 📏 Квант ефективного курсу

    def __init__(
        self,
        source: IUpstreamRateSource,
        *,
        ttl: Union[timedelta, int, float] = timedelta(hours=1),
        fetch_timeout_sec: float = 5.0,
        spread_percent: Number = 0,
        cache_file: Optional[str] = None,
        manual_rate: Optional[Number] = None,
        use_manual: bool = False,
        clock: Optional[Clock] = None,
    ) -> None:
        self._source = source                                       # 🌐 Upstream
        self._ttl = ttl if isinstance(ttl, timedelta) else timedelta(seconds=float(ttl))
        self._fetch_timeout = max(0.1, float(fetch_timeout_sec))
        self._spread = to_decimal(spread_percent, field="spread_percent")
        if self._spread < ZERO:
            raise InvalidInput("spread_percent must be >= 0.", field="spread_percent")
        self._cache_file = Path(cache_file) if cache_file else None
        self._clock: Clock = clock or utc_now

        # ── Стан ────────────────────────────────────────────────────────────
        self._slot: Optional[_CacheSlot] = None                     # 💾 Кеш upstream-курсу
        self._manual_rate: Optional[Decimal] = self._positive_or_none(manual_rate)
        self._manual_enabled: bool = bool(use_manual)
        self._manual_at: datetime = self._clock()
        self._lock = asyncio.Lock()                                 # 🔐 Запис у слот і файл
        self._init_lock = asyncio.Lock()                            # 🔐 Одноразове завантаження файлу
        self._loaded = self._cache_file is None
        self._inflight: Optional[asyncio.Future] = None             # 🛫 Спільний запит до upstream
        logger.debug(
            "⚙️ ExchangeRateProvider: ttl=%s timeout=%ss spread=%s%% file=%s manual=%s(%s)",
            self._ttl,
            self._fetch_timeout,
            self._spread,
            self._cache_file,
            self._manual_rate,
            "on" if self._manual_enabled else "off",
        )

    # ================================
    # 🔓 ПУБЛІЧНИЙ ІНТЕРФЕЙС
    # ================================
    async def get(self) -> ExchangeRate:
        """
        💱 Поточний курс.

        Порядок: ручний (якщо увімкнено) → свіжий кеш → живий запит →
        останній кеш з `source=cached` → `RateUnavailable`.
        """
        await self._ensure_loaded()
        manual = self._manual_snapshot()
        if manual is not None:
            return manual

        slot = self._slot
        if slot is not None and self._is_fresh(slot):
            logger.debug("⏱️ Курс свіжий (TTL), запит пропущено.")
            return self._present(slot, RateSource.FRESH)

        try:
            slot = await self._fetch_shared()
        except (RateSourceError, asyncio.TimeoutError) as exc:
            fallback = self._slot
            if fallback is None:
                logger.error("🚫 Курс недоступний і кеш порожній: %s", exc)
                raise RateUnavailable("Exchange rate is unavailable and no cached value exists.") from exc
            logger.warning("⚠️ Upstream недоступний (%s) → віддаємо кеш від %s", exc, fallback.observed_at)
            return self._present(fallback, RateSource.CACHED)
        return self._present(slot, RateSource.FRESH)

    async def refresh(self) -> ExchangeRate:
        """🔄 Примусовий запит; збій → `RateRefreshFailed`, кеш не змінюється."""
        await self._ensure_loaded()
        try:
            slot = await self._fetch_shared()
        except (RateSourceError, asyncio.TimeoutError) as exc:
            logger.error("❌ Примусове оновлення курсу не вдалося: %s", exc)
            raise RateRefreshFailed("Exchange rate refresh failed; cached value kept.") from exc
        return self._present(slot, RateSource.FRESH)

    def peek(self) -> Optional[ExchangeRate]:
        """👀 Кешований upstream-курс без жодного I/O."""
        slot = self._slot
        if slot is None:
            return None
        return self._present(slot, RateSource.FRESH if self._is_fresh(slot) else RateSource.CACHED)

    async def set_manual_rate(self, rate: Number, *, enabled: bool = True) -> Optional[ExchangeRate]:
        """✍️ Встановлює ручний курс (> 0) і вмикає/вимикає його."""
        value = to_decimal(rate, field="rate")
        if value <= ZERO:
            logger.error("🚫 Спроба встановити невалідний ручний курс: %r", rate)
            raise InvalidInput("Manual rate must be > 0.", field="rate")
        await self._ensure_loaded()
        async with self._lock:
            self._manual_rate = value
            self._manual_enabled = bool(enabled)
            self._manual_at = self._clock()
            await self._save()
        logger.info("✍️ Ручний курс встановлено: %s (%s)", value, "on" if enabled else "off")
        return self._manual_snapshot()

    async def disable_manual_rate(self) -> None:
        await self._ensure_loaded()
        async with self._lock:
            self._manual_enabled = False
            await self._save()
        logger.info("🔕 Ручний курс вимкнено; використовується upstream.")

    @property
    def manual_enabled(self) -> bool:
        return self._manual_enabled and self._manual_rate is not None

    @property
    def manual_rate(self) -> Optional[Decimal]:
        return self._manual_rate

    async def close(self) -> None:
        await self._source.close()

    # ================================
    # 🛫 SINGLE-FLIGHT ЗАПИТ
    # ================================
    async def _fetch_shared(self) -> _CacheSlot:
        task = self._inflight
        if task is None or task.done():
            task = asyncio.ensure_future(self._fetch_and_store())
            self._inflight = task
            task.add_done_callback(self._on_fetch_done)
        else:
            logger.debug("🛫 Приєднуємося до запиту, що вже виконується.")
        # shield: скасування одного очікувача не скасовує спільний запит
        return await asyncio.shield(task)

    def _on_fetch_done(self, task: asyncio.Future) -> None:
        if self._inflight is task:
            self._inflight = None
        if not task.cancelled():
            task.exception()                                        # 🧹 Позначаємо виняток як отриманий

    async def _fetch_and_store(self) -> _CacheSlot:
        raw = await asyncio.wait_for(self._source.fetch_rate(), timeout=self._fetch_timeout)
        if not isinstance(raw, Decimal) or not self._usable_rate(raw):
            raise RateSourceError(f"Upstream returned an invalid rate: {raw!r}.")
        slot = _CacheSlot(base_rate=raw, observed_at=self._clock())
        async with self._lock:
            self._slot = slot
            await self._save()
        logger.info("🕒 Курс оновлено: %s (spread=%s%%)", raw, self._spread)
        return slot

    # ================================
    # 🔒 ВНУТРІШНЯ ЛОГІКА
    # ================================
    def _is_fresh(self, slot: _CacheSlot) -> bool:
        return (self._clock() - slot.observed_at) < self._ttl

    def _effective_rate(self, base_rate: Decimal) -> Decimal:
        """➕ Курс зі спредом, квантований до 4 знаків."""
        effective = base_rate * (ONE + self._spread / HUNDRED)
        return effective.quantize(self._RATE_QUANTUM, rounding=ROUND_HALF_UP)

    def _usable_rate(self, base_rate: Decimal) -> bool:
        """✅ Скінченний додатний курс, що не зникає після квантування."""
        return base_rate.is_finite() and base_rate > ZERO and self._effective_rate(base_rate) > ZERO

    def _present(self, slot: _CacheSlot, source: RateSource) -> ExchangeRate:
        return ExchangeRate(
            rate=self._effective_rate(slot.base_rate),
            source=source,
            observed_at=slot.observed_at,
            base_rate=slot.base_rate,
            spread_percent=self._spread,
        )

    def _manual_snapshot(self) -> Optional[ExchangeRate]:
        if not self._manual_enabled or self._manual_rate is None:
            return None
        return ExchangeRate(
            rate=self._manual_rate,
            source=RateSource.MANUAL,
            observed_at=self._manual_at,
            base_rate=self._manual_rate,
        )

    @staticmethod
    def _positive_or_none(value: Optional[Number]) -> Optional[Decimal]:
        if value is None or value == "":
            return None
        result = to_decimal(value, field="manual_rate")
        if result <= ZERO:
            raise InvalidInput("manual_rate must be > 0.", field="manual_rate")
        return result

    # ================================
    # 💽 ПЕРСИСТЕНТНІСТЬ
    # ================================
    async def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        async with self._init_lock:
            if self._loaded:
                return
            await self._load()
            self._loaded = True

    async def _load(self) -> None:
        """📖 Читає слот кешу з файлу; будь-яка проблема → старт без кешу."""
        assert self._cache_file is not None
        try:
            async with aiofiles.open(self._cache_file, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError:
            logger.info("ℹ️ Файл кешу курсу %s ще не існує.", self._cache_file)
            return
        except OSError as exc:
            logger.warning("⚠️ Не вдалося прочитати файл кешу курсу (%s).", exc)
            return

        try:
            payload: Dict[str, Any] = json.loads(content)
            if not isinstance(payload, dict):
                raise ValueError("Очікувався обʼєкт (dict) у файлі кешу курсу.")
            if payload.get("rate") is not None:
                base_rate = Decimal(str(payload["rate"]))
                observed_at = datetime.fromisoformat(payload["observedAt"])
                if not self._usable_rate(base_rate):
                    raise ValueError(f"rate {base_rate!r} не дає додатного курсу")
                if observed_at.tzinfo is None:
                    raise ValueError(f"observedAt {payload['observedAt']!r} без часової зони")
                self._slot = _CacheSlot(base_rate=base_rate, observed_at=observed_at)
            if payload.get("manualRate") is not None:
                self._manual_rate = self._positive_or_none(payload["manualRate"])
                self._manual_enabled = bool(payload.get("manualEnabled", False))
        except (ValueError, KeyError, TypeError, InvalidOperation, InvalidInput) as exc:
            logger.warning("⚠️ Файл кешу курсу пошкоджено (%s); стартуємо без кешу.", exc)
            self._slot = None
            return
        logger.info("📖 Завантажено кешований курс: %s", self._slot)

    async def _save(self) -> None:
        """💾 Пише слот кешу і стан ручного курсу; збій запису лише логується."""
        if self._cache_file is None:
            return
        payload = {
            "rate": None if self._slot is None else str(self._slot.base_rate),
            "observedAt": None if self._slot is None else self._slot.observed_at.isoformat(),
            "manualRate": None if self._manual_rate is None else str(self._manual_rate),
            "manualEnabled": self._manual_enabled,
        }
        try:
            self._cache_file.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(self._cache_file, "w", encoding="utf-8") as f:
                await f.write(json.dumps(payload, indent=2, ensure_ascii=False))
            logger.debug("💾 Кеш курсу збережено: %s", payload)
        except OSError as exc:
            logger.error("❌ Помилка під час збереження кешу курсу: %s", exc)


__all__ = ["ExchangeRateProvider", "utc_now"]
