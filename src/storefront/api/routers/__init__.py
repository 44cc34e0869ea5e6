# 🛣️ storefront/api/routers/__init__.py
from .catalog import router as catalog_router
from .pricing import router as pricing_router

__all__ = ["catalog_router", "pricing_router"]
