# 🧩 storefront/shared/__init__.py
"""🧩 Спільний шар: логування та ієрархія винятків."""
