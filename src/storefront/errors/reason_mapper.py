# 🧭 storefront/errors/reason_mapper.py
"""
🧭 Мапить винятки → `ReasonCode` + контекст для тіла відповіді.

🔹 Розрізняє «видимі» помилки користувача (`UserVisibleError`) і технічні.
🔹 Інкапсулює специфіку курсу валют (RateSourceError несе статус апстріму).
🔹 Повертає словник параметрів (`ctx`), що потрапляє в `details` відповіді.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування процесу мапінгу
from typing import Any, Dict, Tuple                                 # 📐 Типи для повернення

# 🧩 Внутрішні модулі проєкту
from storefront.shared.errors import (
    AppError,
    DuplicateSerial,
    DuplicateSku,
    InvalidInput,
    ProductNotFound,
    RateRefreshFailed,
    RateSourceError,
    RateUnavailable,
    SerialNotFound,
    UserVisibleError,
    VariantNotFound,
)
from storefront.shared.utils.logger import LOG_NAME
from .reason_codes import ReasonCode                                # 🧮 Перелік причин

logger = logging.getLogger(f"{LOG_NAME}.errors.reason_mapper")

_USER_VISIBLE: Tuple[Tuple[type, ReasonCode], ...] = (
    (InvalidInput, ReasonCode.INVALID_INPUT),
    (DuplicateSerial, ReasonCode.DUPLICATE_SERIAL),
    (SerialNotFound, ReasonCode.SERIAL_NOT_FOUND),
    (ProductNotFound, ReasonCode.PRODUCT_NOT_FOUND),
    (VariantNotFound, ReasonCode.VARIANT_NOT_FOUND),
    (DuplicateSku, ReasonCode.DUPLICATE_SKU),
)


# ================================
# 🧭 ОСНОВНИЙ МАПЕР
# ================================
def map_error_to_reason(exc: BaseException) -> Tuple[ReasonCode, Dict[str, Any]]:
    """
    Повертає (reason_code, ctx); ctx: безпечні для клієнта подробиці.
    """
    logger.debug("🔎 map_error_to_reason start", extra={"exc_type": type(exc).__name__})

    # ===== UserVisibleError =====
    if isinstance(exc, UserVisibleError):
        return _map_user_visible(exc)

    # ===== Курс валют =====
    if isinstance(exc, RateUnavailable):
        return ReasonCode.RATE_UNAVAILABLE, {}
    if isinstance(exc, RateRefreshFailed):
        return ReasonCode.RATE_REFRESH_FAILED, {}
    if isinstance(exc, RateSourceError):
        if exc.status_code:
            return ReasonCode.HTTP_STATUS, {"status_code": exc.status_code}
        return ReasonCode.HTTP_CONNECTION, {}

    # ===== Fallback =====
    logger.warning("❓ Unknown error mapped to INTERNAL", extra={"exc_type": type(exc).__name__})
    return ReasonCode.INTERNAL, {}


def status_for(exc: BaseException) -> int:
    """🔢 HTTP-статус для винятку."""
    reason, _ = map_error_to_reason(exc)
    return reason.http_status


# ================================
# 🧩 ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _map_user_visible(exc: UserVisibleError) -> Tuple[ReasonCode, Dict[str, Any]]:
    """Розбирає наші `UserVisibleError` по кодах."""
    for error_type, reason in _USER_VISIBLE:
        if isinstance(exc, error_type):
            ctx: Dict[str, Any] = dict(exc.details) if isinstance(exc.details, dict) else {}
            if isinstance(exc, InvalidInput) and exc.field:
                ctx["field"] = exc.field
            logger.debug("👀 %s mapped", type(exc).__name__, extra={"reason": reason.value})
            return reason, ctx
    logger.debug("ℹ️ Generic UserVisibleError mapped to INVALID_INPUT")
    return ReasonCode.INVALID_INPUT, {}


def describe(exc: BaseException) -> str:
    """💬 Текст для клієнта: власні повідомлення лише для наших `AppError`."""
    if isinstance(exc, AppError):
        return exc.message
    return "Internal server error."


__all__ = ["map_error_to_reason", "status_for", "describe"]
