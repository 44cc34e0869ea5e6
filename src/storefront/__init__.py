# 🛒 storefront/__init__.py
"""
🛒 Storefront: двигун ціноутворення, розстрочки та агрегації складу для інтернет-магазину.

🔹 `domain`: чисті розрахунки (ціна, розстрочка, залишки).
🔹 `infrastructure`: курс валют, сховища, сервіси-оркестратори.
🔹 `api`: HTTP-шви для адмінки та вітрини.
"""

__version__ = "1.0.0"
