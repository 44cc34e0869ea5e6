# ⚙️ storefront/infrastructure/settings/__init__.py
from .settings_store import PricingSettingsStore

__all__ = ["PricingSettingsStore"]
