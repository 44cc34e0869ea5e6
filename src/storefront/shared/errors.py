# 🚨 storefront/shared/errors.py
"""
🚨 Єдина ієрархія винятків сервісу.

🔹 `AppError`: корінь; несе `message`, `details` і `to_log_extra()` для логів.
🔹 `UserVisibleError`: помилки, які безпечно показати адміну/клієнту (валідація, склад).
🔹 `RateError`: збої джерела курсу; відновлювані через кеш або ручний курс.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування створення винятків
from typing import Any, Dict, Optional                              # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.shared.utils.logger import LOG_NAME                 # 🏷️ Базове імʼя логера

logger = logging.getLogger(f"{LOG_NAME}.errors")                    # 🧾 Модульний логер


# ================================
# 🧠 БАЗОВІ КЛАСИ
# ================================
class AppError(Exception):
    """🧠 Базовий виняток застосунку."""

    code: str = "app_error"                                         # 🏷️ Машинний код помилки

    def __init__(self, message: str, *, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message                                      # 💬 Людський опис
        self.details = details                                      # 🧾 Додатковий контекст

    def to_log_extra(self) -> Dict[str, Any]:
        """📦 Формує словник для `logger.extra`."""
        extra: Dict[str, Any] = {"error_code": self.code}
        if self.details is not None:
            extra["details"] = self.details
        return extra


class UserVisibleError(AppError):
    """👀 Помилка, текст якої можна показати користувачу."""

    code = "user_visible_error"


# ================================
# 🧮 ЦІНОУТВОРЕННЯ
# ================================
class InvalidInput(UserVisibleError):
    """🧮 Некоректні або поза діапазоном вхідні дані; ніколи не «підрізаються» мовчки."""

    code = "invalid_input"

    def __init__(self, message: str, *, field: Optional[str] = None, details: Optional[Any] = None) -> None:
        super().__init__(message, details=details)
        self.field = field                                          # 🏷️ Поле, що не пройшло валідацію
        logger.debug("🧮 InvalidInput created", extra={"field": field, "reason": message})

    def to_log_extra(self) -> Dict[str, Any]:
        extra = super().to_log_extra()
        if self.field:
            extra["field"] = self.field
        return extra


# ================================
# 💱 КУРС ВАЛЮТ
# ================================
class RateError(AppError):
    """💱 Загальна помилка отримання курсу."""

    code = "rate_error"


class RateUnavailable(RateError):
    """🚫 Курсу немає: upstream недоступний і кеш ще жодного разу не заповнювався."""

    code = "rate_unavailable"


class RateRefreshFailed(RateError):
    """🔁 Примусове оновлення не вдалося; кеш лишився без змін."""

    code = "rate_refresh_failed"


class RateSourceError(RateError):
    """🌐 Збій upstream-джерела (мережа, статус, формат відповіді)."""

    code = "rate_source_error"

    def __init__(self, message: str, *, url: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message, details={"url": url, "status_code": status_code})
        self.url = url
        self.status_code = status_code


# ================================
# 📦 СКЛАД І КАТАЛОГ
# ================================
class DuplicateSerial(UserVisibleError):
    """🔁 Серійний номер уже закріплений за варіантом товару."""

    code = "duplicate_serial"

    def __init__(self, serial: str, *, variant_id: Optional[str] = None) -> None:
        super().__init__(f"Serial number {serial!r} is already registered.", details={"serial": serial, "variant_id": variant_id})
        self.serial = serial
        self.variant_id = variant_id


class SerialNotFound(UserVisibleError):
    """🔍 Серійного номера немає у варіанті."""

    code = "serial_not_found"

    def __init__(self, serial: str, *, variant_id: Optional[str] = None) -> None:
        super().__init__(f"Serial number {serial!r} not found.", details={"serial": serial, "variant_id": variant_id})
        self.serial = serial
        self.variant_id = variant_id


class ProductNotFound(UserVisibleError):
    code = "product_not_found"

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product {product_id!r} not found.", details={"product_id": product_id})
        self.product_id = product_id


class VariantNotFound(UserVisibleError):
    code = "variant_not_found"

    def __init__(self, variant_id: str) -> None:
        super().__init__(f"Variant {variant_id!r} not found.", details={"variant_id": variant_id})
        self.variant_id = variant_id


class DuplicateSku(UserVisibleError):
    code = "duplicate_sku"

    def __init__(self, sku: str) -> None:
        super().__init__(f"SKU {sku!r} is already in use.", details={"sku": sku})
        self.sku = sku


__all__ = [
    "AppError",
    "UserVisibleError",
    "InvalidInput",
    "RateError",
    "RateUnavailable",
    "RateRefreshFailed",
    "RateSourceError",
    "DuplicateSerial",
    "SerialNotFound",
    "ProductNotFound",
    "VariantNotFound",
    "DuplicateSku",
]
