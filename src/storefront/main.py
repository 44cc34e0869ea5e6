# 🚀 storefront/main.py
"""🚀 Точка входу: логування за конфігом і запуск uvicorn."""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import uvicorn

# 🔠 Системні імпорти
import os

# 🧩 Внутрішні модулі проєкту
from storefront.api import create_app
from storefront.config.config_service import ConfigService
from storefront.config.setup.container import Container, bootstrap_logging


def main() -> None:
    config = ConfigService()
    bootstrap_logging(config)
    app = create_app(Container(config))
    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_config=None,                                             # 🧾 Логування вже налаштоване
    )


if __name__ == "__main__":
    main()
