# 🧮 storefront/errors/reason_codes.py
"""🧮 Машинні коди причин помилок і відповідні HTTP-статуси."""

from __future__ import annotations

# 🔠 Системні імпорти
from enum import Enum


class ReasonCode(str, Enum):
    """🧮 Перелік причин, які бачить клієнт API."""

    INVALID_INPUT = "invalid_input"
    DUPLICATE_SERIAL = "duplicate_serial"
    SERIAL_NOT_FOUND = "serial_not_found"
    PRODUCT_NOT_FOUND = "product_not_found"
    VARIANT_NOT_FOUND = "variant_not_found"
    DUPLICATE_SKU = "duplicate_sku"
    RATE_UNAVAILABLE = "rate_unavailable"
    RATE_REFRESH_FAILED = "rate_refresh_failed"
    HTTP_STATUS = "http_status"
    HTTP_CONNECTION = "http_connection"
    FORBIDDEN = "forbidden"
    INTERNAL = "internal"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    ReasonCode.INVALID_INPUT: 422,
    ReasonCode.DUPLICATE_SERIAL: 409,
    ReasonCode.SERIAL_NOT_FOUND: 404,
    ReasonCode.PRODUCT_NOT_FOUND: 404,
    ReasonCode.VARIANT_NOT_FOUND: 404,
    ReasonCode.DUPLICATE_SKU: 409,
    ReasonCode.RATE_UNAVAILABLE: 503,
    ReasonCode.RATE_REFRESH_FAILED: 503,
    ReasonCode.HTTP_STATUS: 502,
    ReasonCode.HTTP_CONNECTION: 502,
    ReasonCode.FORBIDDEN: 403,
    ReasonCode.INTERNAL: 500,
}


__all__ = ["ReasonCode"]
