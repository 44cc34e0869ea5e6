# 📦 storefront/domain/catalog/__init__.py
"""
📦 Пакет `domain.catalog`: товари, варіанти та інваріанти залишків.

🔹 `entities.py`: Product, Variant, VariantOption, `generate_variants`.
🔹 `stock.py`: `StockAggregator`.
🔹 `interfaces.py`: `ICatalogRepository`.
"""

from .entities import (
    Product,
    Variant,
    VariantOption,
    conform_options,
    generate_variants,
    new_id,
    normalize_schema,
)
from .interfaces import ICatalogRepository
from .stock import StockAggregator

__all__ = [
    "Product",
    "Variant",
    "VariantOption",
    "conform_options",
    "generate_variants",
    "new_id",
    "normalize_schema",
    "ICatalogRepository",
    "StockAggregator",
]
