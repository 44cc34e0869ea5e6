# 🧩 storefront/domain/catalog/interfaces.py
"""🧩 Контракт сховища каталогу з транзакціями в межах одного товару."""

from __future__ import annotations

# 🔠 Системні імпорти
from abc import ABC, abstractmethod
from typing import ContextManager, Optional

# 🧩 Внутрішні модулі проєкту
from .entities import Product


class ICatalogRepository(ABC):
    @abstractmethod
    def add(self, product: Product) -> Product:
        """Зберігає новий товар; повертає знімок."""

    @abstractmethod
    def get(self, product_id: str) -> Product:
        """Знімок закоміченого стану або `ProductNotFound`."""

    @abstractmethod
    def product_id_for_variant(self, variant_id: str) -> str:
        """Товар, якому належить варіант, або `VariantNotFound`."""

    @abstractmethod
    def find_by_sku(self, sku: str) -> Optional[str]:
        """Ідентифікатор товару/варіанту з таким SKU."""

    @abstractmethod
    def transaction(self, product_id: str) -> ContextManager[Product]:
        """Робоча копія товару; комітиться лише при виході без винятку."""


__all__ = ["ICatalogRepository"]
