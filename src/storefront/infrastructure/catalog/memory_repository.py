# 💾 storefront/infrastructure/catalog/memory_repository.py
"""
💾 Thread-safe in-memory сховище каталогу з транзакціями на рівні товару.

🔹 Один `RLock` на товар: зміни сусідніх варіантів серіалізуються.
🔹 Транзакція працює з глибокою копією і комітить її лише при успішному виході.
🔹 Читачі отримують копії закоміченого стану; проміжний стан назовні не видно.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import copy                                                         # 🧬 Робочі копії товарів
import logging                                                      # 🧾 Логи транзакцій
from contextlib import contextmanager                               # 🔁 Транзакція як context manager
from threading import RLock                                         # 🔒 Потокобезпечність
from typing import Dict, Iterator, List, Optional

# 🧩 Внутрішні модулі проєкту
from storefront.domain.catalog import ICatalogRepository, Product
from storefront.shared.errors import DuplicateSku, ProductNotFound, VariantNotFound
from storefront.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.infrastructure.catalog.repository")


class InMemoryCatalogRepository(ICatalogRepository):
    """💾 Сховище товарів у памʼяті процесу."""

    def __init__(self) -> None:
        self._products: Dict[str, Product] = {}                     # 📦 Закомічені товари
        self._locks: Dict[str, RLock] = {}                          # 🔒 Лок на кожен товар
        self._variant_index: Dict[str, str] = {}                    # 🔗 variant_id → product_id
        self._sku_index: Dict[str, str] = {}                        # 🏷️ SKU → id власника
        self._registry_lock = RLock()                               # 🔐 Захист індексів і словника локів

    # ================================
    # 📖 ЧИТАННЯ
    # ================================
    def get(self, product_id: str) -> Product:
        lock = self._lock_for(product_id)
        with lock:
            product = self._products.get(product_id)
            if product is None:
                raise ProductNotFound(product_id)
            return copy.deepcopy(product)

    def list_ids(self) -> List[str]:
        with self._registry_lock:
            return list(self._products)

    def product_id_for_variant(self, variant_id: str) -> str:
        with self._registry_lock:
            product_id = self._variant_index.get(variant_id)
        if product_id is None:
            raise VariantNotFound(variant_id)
        return product_id

    def find_by_sku(self, sku: str) -> Optional[str]:
        with self._registry_lock:
            return self._sku_index.get(sku)

    # ================================
    # ✍️ ЗАПИС
    # ================================
    def add(self, product: Product) -> Product:
        snapshot = copy.deepcopy(product)
        with self._registry_lock:
            if snapshot.id in self._products:
                raise DuplicateSku(snapshot.sku or snapshot.id)
            self._check_skus_locked(snapshot)
            self._locks[snapshot.id] = RLock()
            self._products[snapshot.id] = snapshot
            self._reindex_locked(snapshot)
        logger.info("🆕 Product stored: %s (%s)", snapshot.id, snapshot.name)
        return copy.deepcopy(snapshot)

    @contextmanager
    def transaction(self, product_id: str) -> Iterator[Product]:
        """
        🔁 Транзакція над одним товаром.

        Усередині блоку змінюйте лише отриману робочу копію. Будь-який виняток
        скасовує зміни; закомічений стан не змінюється.
        """
        lock = self._lock_for(product_id)
        with lock:
            committed = self._products.get(product_id)
            if committed is None:
                raise ProductNotFound(product_id)
            working = copy.deepcopy(committed)
            try:
                yield working
            except Exception:
                logger.debug("↩️ Transaction on %s rolled back", product_id)
                raise
            with self._registry_lock:
                self._check_skus_locked(working)
                self._drop_index_locked(committed)
                self._products[product_id] = copy.deepcopy(working)
                self._reindex_locked(working)
            logger.debug("✅ Transaction on %s committed (stock=%s)", product_id, working.stock)

    # ================================
    # 🔒 ВНУТРІШНЄ
    # ================================
    def _lock_for(self, product_id: str) -> RLock:
        with self._registry_lock:
            lock = self._locks.get(product_id)
        if lock is None:
            raise ProductNotFound(product_id)
        return lock

    def _check_skus_locked(self, product: Product) -> None:
        """SKU унікальні в усьому каталозі й у межах товару."""
        seen: Dict[str, str] = {}
        owners = [(product.sku, product.id)] + [(v.sku, v.id) for v in product.variants]
        for sku, owner_id in owners:
            if not sku:
                continue
            if sku in seen:
                raise DuplicateSku(sku)
            seen[sku] = owner_id
            existing = self._sku_index.get(sku)
            if existing is not None and existing != owner_id:
                raise DuplicateSku(sku)

    def _reindex_locked(self, product: Product) -> None:
        if product.sku:
            self._sku_index[product.sku] = product.id
        for variant in product.variants:
            self._variant_index[variant.id] = product.id
            if variant.sku:
                self._sku_index[variant.sku] = variant.id

    def _drop_index_locked(self, product: Product) -> None:
        if product.sku:
            self._sku_index.pop(product.sku, None)
        for variant in product.variants:
            self._variant_index.pop(variant.id, None)
            if variant.sku:
                self._sku_index.pop(variant.sku, None)


__all__ = ["InMemoryCatalogRepository"]
