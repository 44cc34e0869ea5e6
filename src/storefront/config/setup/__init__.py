# 📦 storefront/config/setup/__init__.py
"""📦 Збирання залежностей застосунку."""
