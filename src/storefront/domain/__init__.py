# 🧠 storefront/domain/__init__.py
"""🧠 Доменний шар: ціноутворення, валютний курс, каталог і залишки."""
