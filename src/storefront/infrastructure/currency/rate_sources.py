# 🌐 storefront/infrastructure/currency/rate_sources.py
"""
🌐 Upstream-джерела курсу валют.

🔹 `AwesomeApiRateSource`: публічний API котирувань (`/last/USD-BRL` → `USDBRL.bid`).
🔹 Кілька спроб із паузою; будь-яка невдача → `RateSourceError`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx                                                        # 🌐 Асинхронний HTTP-клієнт

# 🔠 Системні імпорти
import asyncio                                                      # 💤 Пауза між спробами
import logging                                                      # 🧾 Логи запитів
from decimal import Decimal, InvalidOperation                       # 💰 Курс як Decimal
from typing import Any, Optional

# 🧩 Внутрішні модулі проєкту
from storefront.shared.errors import RateSourceError
from storefront.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.infrastructure.currency.source")

DEFAULT_URL = "https://economia.awesomeapi.com.br/last/USD-BRL"     # 🌐 Котирування USD → BRL


class AwesomeApiRateSource:
    """🌐 Отримує останню котировку пари валют і повертає ціну `bid`."""

    def __init__(
        self,
        *,
        url: str = DEFAULT_URL,
        pair: str = "USDBRL",
        timeout_sec: float = 5.0,
        retry_attempts: int = 2,
        retry_delay_sec: float = 1.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not url:
            raise ValueError("Config 'exchange_rate.url' is required.")
        self._url = url
        self._pair = pair.replace("-", "").upper()                   # 🔑 Ключ у відповіді: "USDBRL"
        self._timeout = float(timeout_sec)
        self._retries = max(1, int(retry_attempts))
        self._retry_delay = max(0.0, float(retry_delay_sec))
        self._client = client
        self._owns_client = client is None

    async def fetch_rate(self) -> Decimal:
        """
        📥 Повертає «сирий» курс без спреду.

        Raises:
            RateSourceError: мережа, не-2xx статус, або відповідь без очікуваного поля.
        """
        client = self._ensure_client()
        last_error: Optional[RateSourceError] = None
        for attempt in range(self._retries):
            try:
                response = await client.get(self._url)
                response.raise_for_status()
                rate = self._parse(response.json())
                logger.info("✅ Upstream rate %s=%s", self._pair, rate)
                return rate
            except httpx.HTTPStatusError as exc:
                last_error = RateSourceError(
                    f"Upstream responded with {exc.response.status_code}.",
                    url=self._url,
                    status_code=exc.response.status_code,
                )
            except httpx.RequestError as exc:
                last_error = RateSourceError(f"Upstream request failed: {exc}", url=self._url)
            except ValueError as exc:                               # 🧾 Невалідний JSON
                last_error = RateSourceError(f"Upstream returned invalid JSON: {exc}", url=self._url)
            except RateSourceError as exc:
                last_error = exc

            logger.error("❌ Спроба %s/%s: %s", attempt + 1, self._retries, last_error)
            if attempt < self._retries - 1:
                await asyncio.sleep(self._retry_delay)

        assert last_error is not None
        raise last_error

    def _parse(self, payload: Any) -> Decimal:
        entry = payload.get(self._pair) if isinstance(payload, dict) else None
        raw = entry.get("bid") if isinstance(entry, dict) else None
        if raw is None:
            raise RateSourceError(f"Upstream payload has no {self._pair}.bid field.", url=self._url)
        try:
            rate = Decimal(str(raw).strip().replace(",", "."))
        except InvalidOperation as exc:
            raise RateSourceError(f"Upstream rate {raw!r} is not a number.", url=self._url) from exc
        if not rate.is_finite() or rate <= 0:
            raise RateSourceError(f"Upstream rate {raw!r} must be > 0.", url=self._url)
        return rate

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout)
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.info("🔌 HTTP-клієнт джерела курсу закрито.")


__all__ = ["AwesomeApiRateSource", "DEFAULT_URL"]
