"""🧪 PricingSettingsStore: часткові оновлення і публічний вигляд."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from storefront.domain.currency import ExchangeRate, RateSource
from storefront.domain.pricing import PricingSettings
from storefront.infrastructure.settings import PricingSettingsStore
from storefront.shared.errors import InvalidInput


def test_update_accepts_camel_and_snake_case():
    store = PricingSettingsStore()

    updated = store.update({"maxInstallments": 10, "tax_rate": "12", "companyName": None})

    assert updated.max_installments == 10
    assert updated.tax_rate == Decimal("12")
    assert store.get() is updated


def test_invalid_update_keeps_previous_settings():
    store = PricingSettingsStore(PricingSettings(max_installments=6, no_fee_installments=2))
    before = store.get()

    with pytest.raises(InvalidInput):
        store.update({"noFeeInstallments": 7})
    with pytest.raises(InvalidInput):
        store.update({"currency": "BRL"})
    with pytest.raises(InvalidInput):
        store.update({})

    assert store.get() is before


def test_public_view_includes_last_rate():
    rate = ExchangeRate(
        rate=Decimal("5.1000"),
        source=RateSource.CACHED,
        observed_at=datetime(2024, 1, 1, 12, tzinfo=timezone.utc),
    )

    view = PricingSettingsStore().public_view(rate)

    assert view["lastDollarRate"] == "5.1000"
    assert view["lastDollarRateAt"] == "2024-01-01T12:00:00+00:00"
    assert view["maxInstallments"] == 12
    assert view["installmentInterestMode"] == "compound"


def test_public_view_without_rate():
    view = PricingSettingsStore().public_view()
    assert view["lastDollarRate"] is None
    assert view["lastDollarRateAt"] is None
