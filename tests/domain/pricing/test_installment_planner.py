"""
🧪 test_installment_planner.py: unit-тести для InstallmentPlanner

Перевіряє:
- Відсікання варіантів нижче мінімального платежу
- Безвідсоткові варіанти та політики відсотків (compound / amortized)
- Порожній план без помилки
"""

from decimal import Decimal

import pytest

from storefront.domain.pricing import InstallmentInterestMode, InstallmentPlanner, PricingSettings, plan
from storefront.shared.errors import InvalidInput


def test_reference_scenario_keeps_only_counts_above_minimum():
    settings = PricingSettings(max_installments=12, no_fee_installments=3, min_installment_value=50)

    options = plan(120, settings)

    assert [o.count for o in options] == [1, 2]
    assert all(o.no_fee for o in options)
    assert options[0].value == Decimal("120.00")
    assert options[1].value == Decimal("60.00")
    assert options[1].total == Decimal("120.00")


def test_plan_may_be_empty():
    settings = PricingSettings(min_installment_value=50)
    assert plan(40, settings) == ()


def test_single_payment_equals_device_value_even_without_no_fee_range():
    settings = PricingSettings(no_fee_installments=0, installment_interest_rate=5, min_installment_value=0)

    first = plan("199.99", settings)[0]

    assert first.count == 1
    assert first.no_fee is True
    assert first.value == Decimal("199.99")


def test_zero_interest_beyond_no_fee_range_is_plain_division():
    settings = PricingSettings(max_installments=6, no_fee_installments=3, min_installment_value=0)

    options = plan(1000, settings)

    assert options[3].count == 4
    assert options[3].no_fee is False
    assert options[3].value == Decimal("250.00")


def test_compound_interest_policy():
    settings = PricingSettings(
        max_installments=3,
        no_fee_installments=1,
        min_installment_value=0,
        installment_interest_rate=2,
        installment_interest_mode=InstallmentInterestMode.COMPOUND,
    )

    options = plan(100, settings)

    assert options[1].value == Decimal("52.02")
    assert options[1].total == Decimal("104.04")
    assert options[2].value == Decimal("35.37")
    assert options[2].total == Decimal("106.12")


def test_amortized_interest_policy():
    settings = PricingSettings(
        max_installments=2,
        no_fee_installments=1,
        min_installment_value=0,
        installment_interest_rate=2,
        installment_interest_mode="amortized",
    )

    options = plan(100, settings)

    assert options[1].no_fee is False
    assert options[1].value == Decimal("51.50")
    assert options[1].total == Decimal("103.01")


@pytest.mark.parametrize("device", ["0", "49.99", "50", "120", "1555.30", "10000"])
def test_options_are_ascending_and_never_below_minimum(device):
    settings = PricingSettings(min_installment_value=50, installment_interest_rate="1.5")

    options = InstallmentPlanner().plan(device, settings)

    counts = [o.count for o in options]
    assert counts == sorted(set(counts))
    assert all(o.value >= settings.min_installment_value for o in options)
    if options:
        assert options[0].value == Decimal(device).quantize(Decimal("0.01"))


def test_planner_is_idempotent():
    settings = PricingSettings(installment_interest_rate=3, no_fee_installments=2, min_installment_value=10)
    assert plan(777, settings) == plan(777, settings)


def test_negative_device_value_is_rejected():
    with pytest.raises(InvalidInput):
        plan(-1, PricingSettings())


def test_minimum_with_sub_cent_precision_is_respected_by_rounded_values():
    settings = PricingSettings(max_installments=3, no_fee_installments=3, min_installment_value="33.333")

    options = plan("100.00", settings)

    assert [(o.count, o.value) for o in options] == [
        (1, Decimal("100.00")),
        (2, Decimal("50.00")),
        (3, Decimal("33.33")),
    ]
    assert all(o.value >= settings.min_installment_value for o in options)


def test_value_just_below_cent_minimum_is_dropped():
    settings = PricingSettings(max_installments=3, no_fee_installments=3, min_installment_value="33.34")

    assert [o.count for o in plan("100.00", settings)] == [1, 2]
