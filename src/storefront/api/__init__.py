# 🌐 storefront/api/__init__.py
"""🌐 HTTP-шар (FastAPI)."""

from .app import create_app

__all__ = ["create_app"]
