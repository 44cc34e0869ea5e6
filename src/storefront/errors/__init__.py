# 🚨 storefront/errors/__init__.py
"""🚨 Мапінг винятків у коди причин і HTTP-статуси."""

from .reason_codes import ReasonCode
from .reason_mapper import describe, map_error_to_reason, status_for

__all__ = ["ReasonCode", "map_error_to_reason", "status_for", "describe"]
