# 🗂️ storefront/infrastructure/catalog/__init__.py
"""🗂️ Сховище каталогу та сценарії зміни товарів і залишків."""

from .catalog_service import CatalogService
from .memory_repository import InMemoryCatalogRepository

__all__ = ["CatalogService", "InMemoryCatalogRepository"]
