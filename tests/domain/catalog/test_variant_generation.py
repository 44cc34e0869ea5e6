"""🧪 Генерація варіантів та типізовані опції."""

from decimal import Decimal

import pytest

from storefront.domain.catalog import Variant, VariantOption, conform_options, generate_variants, normalize_schema
from storefront.shared.errors import InvalidInput


def test_cartesian_product_in_attribute_order():
    variants = generate_variants(
        "Camiseta",
        [("Cor", ["Azul", "Preto"]), ("Tamanho", ["P", "M", "G"]), ("Estampa", [])],
        base_price="59.90",
    )

    assert [v.name for v in variants] == [
        "Camiseta Azul P",
        "Camiseta Azul M",
        "Camiseta Azul G",
        "Camiseta Preto P",
        "Camiseta Preto M",
        "Camiseta Preto G",
    ]
    assert all(v.stock == 0 and v.is_active for v in variants)
    assert all(v.price == Decimal("59.90") for v in variants)
    assert variants[4].options == (VariantOption("Cor", "Preto"), VariantOption("Tamanho", "M"))


def test_no_values_means_no_variants():
    assert generate_variants("Camiseta", [("Cor", []), ("Tamanho", ["", "  "])]) == []
    assert generate_variants("Camiseta", []) == []


def test_blank_option_is_rejected():
    with pytest.raises(InvalidInput):
        VariantOption("Cor", " ")


def test_conform_options_accepts_mixed_inputs_and_orders_by_schema():
    options = conform_options(
        [{"attribute": "Tamanho", "value": "G"}, VariantOption("Cor", "Azul")],
        ("Cor", "Tamanho"),
    )
    assert options == (VariantOption("Cor", "Azul"), VariantOption("Tamanho", "G"))


def test_conform_options_rejects_repeated_attribute():
    with pytest.raises(InvalidInput):
        conform_options([("Cor", "Azul"), ("Cor", "Preto")], ())


def test_schema_rejects_case_insensitive_duplicates():
    assert normalize_schema(["Cor", " ", "Tamanho"]) == ("Cor", "Tamanho")
    with pytest.raises(InvalidInput):
        normalize_schema(["Cor", "cor"])


def test_serial_numbers_drive_variant_stock():
    variant = Variant(name="Galaxy S24", stock=10, serial_numbers=["A1", "A2"])
    assert variant.tracks_serials is True
    assert variant.stock == 2

    with pytest.raises(InvalidInput):
        Variant(name="Galaxy S24", serial_numbers=["A1", "A1"])
    with pytest.raises(InvalidInput):
        Variant(name="Galaxy S24", stock=-1)
