# 🏗️ storefront/infrastructure/__init__.py
"""🏗️ Інфраструктурний шар: курс валют, каталог, налаштування, котирування."""
