"""
🧪 test_price_calculator.py: unit-тести для PriceCalculator

Перевіряє:
- Еталонний сценарій 1000 / 30% / 15% / 4% + 0.5
- Перерахунок іноземної собівартості за курсом
- Знижку, власну маржу, вироджену маржу
- Валідацію вхідних даних до будь-яких обчислень
- Детермінізм та монотонність
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from storefront.domain.currency import ExchangeRate, RateSource
from storefront.domain.pricing import PriceCalculator, PricingSettings, calculate
from storefront.shared.errors import InvalidInput


@pytest.fixture
def settings() -> PricingSettings:
    return PricingSettings(
        tax_rate=15,
        processor_rate=4,
        processor_fixed_fee="0.5",
        default_profit_margin=30,
    )


def _rate(value: str) -> ExchangeRate:
    return ExchangeRate(
        rate=Decimal(value),
        source=RateSource.FRESH,
        observed_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


# -------------------
# 📐 Еталонні сценарії
# -------------------

def test_reference_scenario(settings):
    result = PriceCalculator().calculate(cost=1000, settings=settings)

    assert result.margin_amount == Decimal("300")
    assert result.tax_amount == Decimal("195")
    assert result.processor_amount == Decimal("60.30")
    assert result.total_fees == Decimal("255.30")
    assert result.ideal_value == Decimal("1555.30")
    assert result.device_value == Decimal("1555.30")
    assert result.discount_amount == Decimal("0")
    assert result.real_value == Decimal("1300")
    assert result.profit == Decimal("300")
    assert result.profit_margin == Decimal("23.08")
    assert result.degenerate_margin is False


def test_reference_scenario_serializes_money_with_two_decimals(settings):
    payload = calculate(cost=1000, settings=settings).to_dict()

    assert payload["deviceValue"] == "1555.30"
    assert payload["realValue"] == "1300.00"
    assert payload["profitMargin"] == "23.08"
    assert payload["installments"][0] == {"installments": 1, "value": "1555.30", "noFee": True, "total": "1555.30"}


def test_foreign_cost_is_converted_with_rate(settings):
    result = calculate(cost_in_foreign=200, rate=_rate("5"), settings=settings)

    assert result.cost == Decimal("1000")
    assert result.cost_in_foreign == Decimal("200")
    assert result.exchange_rate == Decimal("5")
    assert result.device_value == Decimal("1555.30")


def test_discount_reduces_profit_but_not_fees(settings):
    result = calculate(cost=1000, settings=settings, discount_percent=10)

    assert result.ideal_value == Decimal("1555.30")
    assert result.device_value == Decimal("1399.77")
    assert result.discount_amount == Decimal("155.53")
    assert result.tax_amount == Decimal("195")
    assert result.processor_amount == Decimal("60.30")
    assert result.real_value == Decimal("1144.47")
    assert result.profit == Decimal("144.47")
    assert result.profit_margin == Decimal("12.62")


def test_margin_override_beats_default(settings):
    result = calculate(cost=1000, settings=settings, margin_percent=50)

    assert result.margin_percent == Decimal("50")
    assert result.margin_amount == Decimal("500")


def test_margin_above_hundred_is_allowed(settings):
    result = calculate(cost=100, settings=settings, margin_percent=250)
    assert result.margin_amount == Decimal("250")


def test_degenerate_margin_is_flagged_not_raised():
    zero_fees = PricingSettings(tax_rate=0, processor_rate=0, processor_fixed_fee=0, default_profit_margin=30)
    result = calculate(cost=0, settings=zero_fees)

    assert result.real_value == Decimal("0")
    assert result.profit_margin == Decimal("0")
    assert result.degenerate_margin is True
    assert result.installments == ()


def test_installments_are_planned_from_device_value(settings):
    result = calculate(cost=1000, settings=settings)

    assert [o.count for o in result.installments] == list(range(1, 13))
    assert result.installments[0].value == result.device_value
    assert all(o.no_fee for o in result.installments[:3])


def test_installment_limit_can_be_overridden_per_call(settings):
    result = calculate(cost=1000, settings=settings, max_installments=2)

    assert [o.count for o in result.installments] == [1, 2]
    assert all(o.no_fee for o in result.installments)
    assert settings.max_installments == 12
    assert settings.no_fee_installments == 3


def test_installment_override_keeps_no_fee_count_below_new_limit():
    settings = PricingSettings(max_installments=12, no_fee_installments=3, installment_interest_rate=2)

    result = PriceCalculator().calculate(cost=1000, settings=settings, max_installments=5)

    assert [o.count for o in result.installments] == [1, 2, 3, 4, 5]
    assert [o.no_fee for o in result.installments] == [True, True, True, False, False]


# -------------------
# 🛂 Валідація
# -------------------

@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"cost": 100, "cost_in_foreign": 10}, "cost"),
        ({}, "cost"),
        ({"cost": -1}, "cost"),
        ({"cost": "abc"}, "cost"),
        ({"cost": True}, "cost"),
        ({"cost": 100, "discount_percent": 101}, "discount_percent"),
        ({"cost": 100, "discount_percent": -1}, "discount_percent"),
        ({"cost": 100, "margin_percent": -5}, "margin_percent"),
        ({"cost_in_foreign": 10}, "rate"),
        ({"cost_in_foreign": -10, "rate": None}, "cost_in_foreign"),
        ({"cost": 100, "max_installments": 0}, "max_installments"),
        ({"cost": 100, "max_installments": True}, "max_installments"),
        ({"cost": 100, "max_installments": 2.5}, "max_installments"),
    ],
)
def test_invalid_input_is_rejected(settings, kwargs, field):
    with pytest.raises(InvalidInput) as exc_info:
        calculate(settings=settings, **kwargs)
    assert exc_info.value.field == field


def test_comma_decimal_strings_are_accepted(settings):
    assert calculate(cost="1000,00", settings=settings).device_value == Decimal("1555.30")


# -------------------
# 🔁 Властивості
# -------------------

def test_calculation_is_deterministic(settings):
    first = calculate(cost="123.45", settings=settings, discount_percent="7.5")
    second = calculate(cost="123.45", settings=settings, discount_percent="7.5")

    assert first == second
    assert first.to_dict() == second.to_dict()


@pytest.mark.parametrize("cost", ["0.01", "19.99", "123.45", "1000", "98765.43"])
def test_round_trip_real_minus_cost_equals_margin(settings, cost):
    result = calculate(cost=cost, settings=settings)
    assert abs((result.real_value - result.cost) - result.margin_amount) <= Decimal("0.01")


def test_ideal_value_grows_with_margin_tax_and_processor_rate():
    base = dict(tax_rate=10, processor_rate=3, processor_fixed_fee="0.39", default_profit_margin=20)
    for field in ("tax_rate", "processor_rate", "default_profit_margin"):
        values = []
        for bump in (0, 5, 10, 20):
            params = dict(base)
            params[field] = Decimal(str(base[field])) + bump
            values.append(calculate(cost=500, settings=PricingSettings(**params)).ideal_value)
        assert values == sorted(values) and len(set(values)) == len(values), field


def test_device_value_falls_as_discount_grows(settings):
    values = [calculate(cost=500, settings=settings, discount_percent=d).device_value for d in (0, 5, 25, 50, 100)]
    assert values == sorted(values, reverse=True)
    assert values[-1] == Decimal("0")
