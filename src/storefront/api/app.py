# 🌐 storefront/api/app.py
"""
🌐 Фабрика FastAPI-застосунку.

🔹 Контейнер залежностей живе в `app.state.container`.
🔹 Усі помилки рендеряться в єдиному форматі (`exception_handlers`).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from fastapi import FastAPI

# 🔠 Системні імпорти
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

# 🧩 Внутрішні модулі проєкту
from storefront import __version__
from storefront.config.config_service import ConfigService
from storefront.config.setup.container import Container
from storefront.shared.utils.logger import LOG_NAME
from .exception_handlers import register_exception_handlers
from .routers import catalog_router, pricing_router

logger = logging.getLogger(f"{LOG_NAME}.api")


def create_app(container: Optional[Container] = None) -> FastAPI:
    """🏗️ Збирає застосунок; без контейнера будує його з `ConfigService`."""
    container = container or Container(ConfigService())

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        logger.info("🚀 Storefront API started (v%s)", __version__)
        yield
        await container.shutdown()

    app = FastAPI(title="Storefront Pricing & Stock API", version=__version__, lifespan=lifespan)
    app.state.container = container
    register_exception_handlers(app)
    app.include_router(pricing_router)
    app.include_router(catalog_router)
    return app


__all__ = ["create_app"]
