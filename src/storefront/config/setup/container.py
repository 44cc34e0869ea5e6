# 📦 storefront/config/setup/container.py
"""
📦 Контейнер залежностей сервісу ціноутворення та складу.

🔹 Створює сервіси в правильному порядку DI
🔹 Інкапсулює конфігурацію upstream-джерела курсу
🔹 Дає єдину точку доступу до сервісів для HTTP-шару
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                           # 🧾 Базові засоби логування
from datetime import timedelta                                           # 🕒 TTL курсу
from typing import TYPE_CHECKING, Any, Optional                          # 🧮 Допоміжні типи

# 🧩 Внутрішні модулі проєкту
from storefront.domain.catalog import StockAggregator                    # 📊 Інваріанти залишків
from storefront.domain.currency import IUpstreamRateSource               # 🌐 Контракт upstream-джерела
from storefront.domain.pricing import InstallmentPlanner, PriceCalculator, PricingSettings
from storefront.infrastructure.catalog import CatalogService, InMemoryCatalogRepository
from storefront.infrastructure.currency import DEFAULT_URL, AwesomeApiRateSource, ExchangeRateProvider
from storefront.infrastructure.pricing import QuoteService
from storefront.infrastructure.settings import PricingSettingsStore
from storefront.shared.utils.logger import LOG_NAME, init_logging_from_config  # 🧾 Конфіг логування

if TYPE_CHECKING:
    from storefront.config.config_service import ConfigService           # 🗂️ Тип під час перевірки

logger = logging.getLogger(f"{LOG_NAME}.container")                      # 🧾 Модульний логер контейнера


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _int_or_default(value: Any, default: int) -> int:
    """
    Повертає ціле число або запасне значення, якщо каст неможливий.
    """
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _float_or_default(value: Any, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def bootstrap_logging(config: Optional["ConfigService"] = None) -> logging.Logger:
    """
    Зчитує конфіг логування і запускає кореневий логер.
    """
    from storefront.config.config_service import ConfigService           # 🧭 Локальний імпорт для уникнення циклів

    cfg = config or ConfigService()
    node = cfg.get("logging", {}) or {}
    return init_logging_from_config(node)


# ================================
# 🏛️ КОНТЕЙНЕР ЗАЛЕЖНОСТЕЙ
# ================================
class Container:
    """
    Координує ініціалізацію інфраструктурних і доменних сервісів.
    """

    def __init__(self, config: "ConfigService", *, rate_source: Optional[IUpstreamRateSource] = None) -> None:
        self.config = config                                              # ⚙️ Джерело конфігурацій DI
        logger.info("🚀 Стартуємо побудову контейнера залежностей")
        self._setup_domain_services()
        self._setup_exchange_rate(rate_source)
        self._setup_stores()
        logger.info("✅ Контейнер готовий")

    # ================================
    # 🏭 ДОМЕН
    # ================================
    def _setup_domain_services(self) -> None:
        self.installment_planner = InstallmentPlanner()
        self.price_calculator = PriceCalculator(self.installment_planner)
        self.stock_aggregator = StockAggregator()

    # ================================
    # 💱 КУРС ВАЛЮТ
    # ================================
    def _setup_exchange_rate(self, rate_source: Optional[IUpstreamRateSource]) -> None:
        cfg = self.config
        self.rate_source = rate_source or AwesomeApiRateSource(
            url=str(cfg.get("exchange_rate.url") or DEFAULT_URL),
            pair=str(cfg.get("exchange_rate.pair") or "USDBRL"),
            timeout_sec=_float_or_default(cfg.get("exchange_rate.timeout_sec"), 5.0),
            retry_attempts=_int_or_default(cfg.get("exchange_rate.retry_attempts"), 2),
            retry_delay_sec=_float_or_default(cfg.get("exchange_rate.retry_delay_sec"), 1.0),
        )
        timeout = _float_or_default(cfg.get("exchange_rate.timeout_sec"), 5.0)
        retries = max(1, _int_or_default(cfg.get("exchange_rate.retry_attempts"), 2))
        self.exchange_rate_provider = ExchangeRateProvider(
            self.rate_source,
            ttl=timedelta(seconds=_int_or_default(cfg.get("exchange_rate.ttl_sec"), 3600)),
            # 🔁 Загальний бюджет живого запиту покриває всі спроби
            fetch_timeout_sec=timeout * retries + _float_or_default(cfg.get("exchange_rate.retry_delay_sec"), 1.0),
            spread_percent=cfg.get("exchange_rate.spread_percent") or 0,
            cache_file=cfg.get("exchange_rate.cache_file"),
            manual_rate=cfg.get("exchange_rate.manual_rate"),
            use_manual=bool(cfg.get("exchange_rate.use_manual", False)),
        )

    # ================================
    # 🗃️ СХОВИЩА ТА СЦЕНАРІЇ
    # ================================
    def _setup_stores(self) -> None:
        self.settings_store = PricingSettingsStore(PricingSettings.from_mapping(self.config.get("pricing", {}) or {}))
        self.catalog_repository = InMemoryCatalogRepository()
        self.catalog_service = CatalogService(self.catalog_repository, self.stock_aggregator)
        self.quote_service = QuoteService(self.exchange_rate_provider, self.settings_store, self.price_calculator)

    @property
    def admin_token(self) -> Optional[str]:
        token = self.config.get("api.admin_token")
        return str(token) if token else None

    async def shutdown(self) -> None:
        """🧹 Закриває мережеві ресурси."""
        await self.exchange_rate_provider.close()
        logger.info("🔌 Контейнер зупинено")


__all__ = ["Container", "bootstrap_logging"]
