"""🧪 Мапінг винятків → ReasonCode + HTTP-статус."""

import asyncio

import httpx
import pytest

from storefront.errors import ReasonCode, describe, map_error_to_reason, status_for
from storefront.shared.errors import (
    DuplicateSerial,
    DuplicateSku,
    InvalidInput,
    ProductNotFound,
    RateRefreshFailed,
    RateSourceError,
    RateUnavailable,
    SerialNotFound,
    VariantNotFound,
)


@pytest.mark.parametrize(
    "exc, reason, status",
    [
        (InvalidInput("bad", field="cost"), ReasonCode.INVALID_INPUT, 422),
        (DuplicateSerial("SN-1", variant_id="v1"), ReasonCode.DUPLICATE_SERIAL, 409),
        (SerialNotFound("SN-1"), ReasonCode.SERIAL_NOT_FOUND, 404),
        (ProductNotFound("p1"), ReasonCode.PRODUCT_NOT_FOUND, 404),
        (VariantNotFound("v1"), ReasonCode.VARIANT_NOT_FOUND, 404),
        (DuplicateSku("SKU"), ReasonCode.DUPLICATE_SKU, 409),
        (RateUnavailable("no rate"), ReasonCode.RATE_UNAVAILABLE, 503),
        (RateRefreshFailed("failed"), ReasonCode.RATE_REFRESH_FAILED, 503),
        (RateSourceError("502", status_code=502), ReasonCode.HTTP_STATUS, 502),
        (RateSourceError("down"), ReasonCode.HTTP_CONNECTION, 502),
        (RuntimeError("boom"), ReasonCode.INTERNAL, 500),
    ],
)
def test_reason_and_status(exc, reason, status):
    mapped, _ = map_error_to_reason(exc)
    assert mapped is reason
    assert status_for(exc) == status


@pytest.mark.parametrize("exc", [httpx.ConnectTimeout("slow"), asyncio.TimeoutError(), httpx.ConnectError("down")])
def test_raw_transport_errors_are_internal(exc):
    # Провайдер курсу загортає їх у RateSourceError, сирий виняток означає баг
    assert map_error_to_reason(exc) == (ReasonCode.INTERNAL, {})
    assert status_for(exc) == 500


def test_invalid_input_context_names_the_field():
    _, ctx = map_error_to_reason(InvalidInput("bad", field="discount_percent", details={"max": 100}))
    assert ctx == {"max": 100, "field": "discount_percent"}


def test_duplicate_serial_context_points_to_owner():
    _, ctx = map_error_to_reason(DuplicateSerial("SN-9", variant_id="v7"))
    assert ctx == {"serial": "SN-9", "variant_id": "v7"}


def test_describe_hides_internal_messages():
    assert describe(ProductNotFound("p1")) == "Product 'p1' not found."
    assert describe(RuntimeError("db password leaked")) == "Internal server error."
