# 📊 storefront/domain/catalog/stock.py
"""
📊 StockAggregator: відновлює інваріанти залишків товару та варіантів.

🔹 `variant.stock == len(serial_numbers)` для варіантів з обліком серійників.
🔹 `product.stock == Σ stock` активних варіантів, якщо товар `has_variations`.
🔹 Усі перевірки виконуються ДО мутації; атомарність забезпечує транзакція репозиторію.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування змін складу
from typing import Iterable, Optional

# 🧩 Внутрішні модулі проєкту
from storefront.shared.errors import DuplicateSerial, InvalidInput, SerialNotFound
from storefront.shared.utils.logger import LOG_NAME                 # 🏷️ Базове імʼя логера
from .entities import Product, Variant, conform_options

logger = logging.getLogger(f"{LOG_NAME}.domain.catalog.stock")


class StockAggregator:
    """📊 Єдине місце, де перераховуються залишки."""

    # ================================
    # 🔁 ПЕРЕРАХУНОК
    # ================================
    def recompute_product_stock(self, product: Product, variants: Optional[Iterable[Variant]] = None) -> int:
        """
        🔁 Сума залишків активних варіантів для товару з варіаціями.

        Товар без варіацій не змінюється. Повертає актуальний `product.stock`.
        """
        if product.has_variations:
            pool = product.variants if variants is None else list(variants)
            total = sum(v.stock for v in pool if v.is_active)
            if total != product.stock:
                logger.debug("📊 %s: stock %s → %s", product.id, product.stock, total)
            product.stock = total
        return product.stock

    @staticmethod
    def _sync_variant(variant: Variant) -> None:
        if variant.tracks_serials:
            variant.stock = len(variant.serial_numbers)

    def restore_invariants(self, product: Product) -> Product:
        """🧹 Повне відновлення після масових змін: спершу варіанти, потім товар."""
        for variant in product.variants:
            variant.product_id = product.id
            self._sync_variant(variant)
        self.recompute_product_stock(product)
        return product

    # ================================
    # 🔢 СЕРІЙНІ НОМЕРИ
    # ================================
    def add_serial(self, product: Product, variant: Variant, serial: str) -> Variant:
        """➕ Додає серійний номер; дублікат у будь-якому варіанті товару → `DuplicateSerial`."""
        cleaned = str(serial or "").strip()
        if not cleaned:
            raise InvalidInput("Serial number must not be blank.", field="serial")
        for sibling in product.variants:
            if cleaned in sibling.serial_numbers:
                raise DuplicateSerial(cleaned, variant_id=sibling.id)

        variant.serial_numbers.append(cleaned)
        variant.tracks_serials = True
        self._sync_variant(variant)
        self.recompute_product_stock(product)
        logger.info("➕ Serial %s → variant %s (stock=%s, product=%s)", cleaned, variant.id, variant.stock, product.stock)
        return variant

    def remove_serial(self, product: Product, variant: Variant, serial: str) -> Variant:
        """➖ Видаляє серійний номер; відсутній → `SerialNotFound`."""
        cleaned = str(serial or "").strip()
        if cleaned not in variant.serial_numbers:
            raise SerialNotFound(cleaned, variant_id=variant.id)

        variant.serial_numbers.remove(cleaned)
        self._sync_variant(variant)
        self.recompute_product_stock(product)
        logger.info("➖ Serial %s ← variant %s (stock=%s, product=%s)", cleaned, variant.id, variant.stock, product.stock)
        return variant

    # ================================
    # ✍️ ПРЯМІ ЗМІНИ ЗАЛИШКУ
    # ================================
    def set_variant_stock(self, product: Product, variant: Variant, quantity: int) -> Variant:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            raise InvalidInput("Stock must be a non-negative integer.", field="stock")
        if variant.tracks_serials:
            raise InvalidInput(
                "Stock of a serial-tracked variant follows its serial numbers.",
                field="stock",
                details={"variant_id": variant.id},
            )
        variant.stock = quantity
        self.recompute_product_stock(product)
        return variant

    def set_variant_active(self, product: Product, variant: Variant, active: bool) -> Variant:
        variant.is_active = bool(active)
        self.recompute_product_stock(product)
        return variant

    def set_product_stock(self, product: Product, quantity: int) -> Product:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            raise InvalidInput("Stock must be a non-negative integer.", field="stock")
        if product.has_variations:
            raise InvalidInput(
                "Stock of a product with variations is the sum of its active variants.",
                field="stock",
                details={"product_id": product.id},
            )
        product.stock = quantity
        return product

    def attach_variant(self, product: Product, variant: Variant) -> Variant:
        """🧩 Додає новий варіант до товару і перераховує залишок."""
        variant.options = conform_options(variant.options, product.option_schema)
        for sibling in product.variants:
            for serial in variant.serial_numbers:
                if serial in sibling.serial_numbers:
                    raise DuplicateSerial(serial, variant_id=sibling.id)

        variant.product_id = product.id
        self._sync_variant(variant)
        product.variants.append(variant)
        product.has_variations = True
        self.recompute_product_stock(product)
        logger.info("🧩 Variant %s attached to %s (product stock=%s)", variant.id, product.id, product.stock)
        return variant


__all__ = ["StockAggregator"]
