# 🗂️ storefront/infrastructure/catalog/catalog_service.py
"""
🗂️ CatalogService: сценарії зміни каталогу поверх транзакцій репозиторію.

Кожна мутація виконується в транзакції одного товару і завершується
відновленням інваріантів `StockAggregator`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple

# 🧩 Внутрішні модулі проєкту
from storefront.domain.catalog import (
    ICatalogRepository,
    Product,
    StockAggregator,
    Variant,
    conform_options,
    generate_variants,
    normalize_schema,
)
from storefront.domain.pricing.rounding import Number
from storefront.shared.errors import VariantNotFound
from storefront.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.infrastructure.catalog.service")


class CatalogService:
    """🗂️ Use-case шар для HTTP-ендпоінтів каталогу."""

    def __init__(self, repository: ICatalogRepository, aggregator: Optional[StockAggregator] = None) -> None:
        self._repo = repository
        self._stock = aggregator or StockAggregator()

    # ================================
    # 📦 ТОВАРИ
    # ================================
    def create_product(
        self,
        *,
        name: str,
        sku: Optional[str] = None,
        price: Number = 0,
        stock: int = 0,
        has_variations: bool = False,
        option_schema: Iterable[str] = (),
        variants: Iterable[Variant] = (),
    ) -> Product:
        product = Product(
            name=name,
            sku=sku,
            price=price,
            stock=stock,
            has_variations=has_variations,
            option_schema=tuple(option_schema),
        )
        for variant in variants:
            self._stock.attach_variant(product, variant)
        self._stock.restore_invariants(product)
        return self._repo.add(product)

    def get_product(self, product_id: str) -> Product:
        return self._repo.get(product_id)

    def update_product_stock(self, product_id: str, stock: int) -> Product:
        with self._repo.transaction(product_id) as product:
            self._stock.set_product_stock(product, stock)
            self._stock.restore_invariants(product)
        logger.info("📦 Product %s stock set to %s", product_id, product.stock)
        return product

    # ================================
    # 🧩 ВАРІАНТИ
    # ================================
    def add_variant(
        self,
        product_id: str,
        *,
        name: str,
        sku: Optional[str] = None,
        price: Optional[Number] = None,
        stock: int = 0,
        serial_numbers: Sequence[str] = (),
        tracks_serials: bool = False,
        is_active: bool = True,
        options: Iterable[Any] = (),
    ) -> Tuple[Product, Variant]:
        variant = Variant(
            name=name,
            sku=sku,
            price=price,
            stock=stock,
            serial_numbers=list(serial_numbers),
            tracks_serials=tracks_serials,
            is_active=is_active,
            options=tuple(options),
        )
        with self._repo.transaction(product_id) as product:
            self._stock.attach_variant(product, variant)
            self._stock.restore_invariants(product)
        return product, variant

    def generate_variants_for(
        self,
        product_id: str,
        attributes: Sequence[Tuple[str, Sequence[str]]],
        *,
        base_price: Optional[Number] = None,
    ) -> Tuple[Product, List[Variant]]:
        """
        🧬 Додає до товару варіанти для всіх комбінацій атрибутів.

        Комбінації, що вже є серед варіантів товару, пропускаються. Якщо товар
        ще не має схеми опцій, нею стають атрибути зі значеннями.
        """
        with self._repo.transaction(product_id) as product:
            price: Number = base_price if base_price is not None else product.price
            generated = generate_variants(product.name, attributes, price)
            if not product.option_schema and generated:
                product.option_schema = normalize_schema(o.attribute for o in generated[0].options)

            existing = {conform_options(v.options, product.option_schema) for v in product.variants}
            created: List[Variant] = []
            for variant in generated:
                if conform_options(variant.options, product.option_schema) in existing:
                    continue
                created.append(self._stock.attach_variant(product, variant))
            self._stock.restore_invariants(product)
        logger.info("🧬 %s: %s new variants generated", product_id, len(created))
        return product, created

    def update_variant_stock(self, variant_id: str, stock: int) -> Tuple[Product, Variant]:
        with self._variant_tx(variant_id) as (product, variant):
            self._stock.set_variant_stock(product, variant, stock)
            self._stock.restore_invariants(product)
        return product, variant

    def set_variant_active(self, variant_id: str, active: bool) -> Tuple[Product, Variant]:
        with self._variant_tx(variant_id) as (product, variant):
            self._stock.set_variant_active(product, variant, active)
            self._stock.restore_invariants(product)
        return product, variant

    def add_serial(self, variant_id: str, serial: str) -> Tuple[Product, Variant]:
        with self._variant_tx(variant_id) as (product, variant):
            self._stock.add_serial(product, variant, serial)
            self._stock.restore_invariants(product)
        return product, variant

    def remove_serial(self, variant_id: str, serial: str) -> Tuple[Product, Variant]:
        with self._variant_tx(variant_id) as (product, variant):
            self._stock.remove_serial(product, variant, serial)
            self._stock.restore_invariants(product)
        return product, variant

    # ================================
    # 🔒 ВНУТРІШНЄ
    # ================================
    @contextmanager
    def _variant_tx(self, variant_id: str) -> Iterator[Tuple[Product, Variant]]:
        """🔗 Транзакція товару, якому належить варіант."""
        product_id = self._repo.product_id_for_variant(variant_id)
        with self._repo.transaction(product_id) as product:
            variant = product.find_variant(variant_id)
            if variant is None:
                raise VariantNotFound(variant_id)
            yield product, variant


__all__ = ["CatalogService"]
