# 🔐 storefront/api/deps.py
"""🔐 Залежності FastAPI: доступ до контейнера та перевірка адмін-токена."""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from fastapi import Depends, Header, HTTPException, Request

# 🔠 Системні імпорти
import hmac                                                         # 🔐 Порівняння за сталий час
import logging
from typing import Optional

# 🧩 Внутрішні модулі проєкту
from storefront.config.setup.container import Container
from storefront.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.api.auth")

ADMIN_HEADER = "X-Admin-Token"


def get_container(request: Request) -> Container:
    return request.app.state.container


def require_admin(
    x_admin_token: Optional[str] = Header(None, alias=ADMIN_HEADER),
    container: Container = Depends(get_container),
) -> bool:
    expected = container.admin_token
    if not expected:
        logger.warning("🔒 Admin request denied: api.admin_token is not configured")
        raise HTTPException(status_code=403, detail="admin access is not configured")
    if not x_admin_token:
        raise HTTPException(status_code=401, detail="missing admin token")
    if not hmac.compare_digest(x_admin_token.encode("utf-8"), expected.encode("utf-8")):
        logger.warning("🔒 Admin request denied: token mismatch")
        raise HTTPException(status_code=403, detail="permission denied")
    return True
