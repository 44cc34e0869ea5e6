# 🚨 storefront/api/exception_handlers.py
"""
🚨 Єдиний формат помилок API: `{"error": code, "message": ..., "details": ...}`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# 🔠 Системні імпорти
import logging
from typing import Any, Optional

# 🧩 Внутрішні модулі проєкту
from storefront.errors import ReasonCode, describe, map_error_to_reason
from storefront.shared.errors import AppError
from storefront.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.api.errors")

_HTTP_REASONS = {401: "unauthorized", 403: ReasonCode.FORBIDDEN.value, 404: "not_found", 405: "method_not_allowed"}


def error_body(code: str, message: str, details: Optional[Any] = None) -> dict:
    return {"error": code, "message": message, "details": jsonable_encoder(details)}


async def _app_error(request: Request, exc: AppError) -> JSONResponse:
    reason, ctx = map_error_to_reason(exc)
    level = logging.ERROR if reason.http_status >= 500 else logging.INFO
    logger.log(
        level,
        "🚨 %s %s → %s (%s)",
        request.method,
        request.url.path,
        reason.value,
        exc.message,
        extra=exc.to_log_extra(),
    )
    return JSONResponse(status_code=reason.http_status, content=error_body(reason.value, describe(exc), ctx or None))


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("🧮 %s %s → validation failed", request.method, request.url.path)
    errors = [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in exc.errors()]
    return JSONResponse(
        status_code=ReasonCode.INVALID_INPUT.http_status,
        content=error_body(ReasonCode.INVALID_INPUT.value, "Request validation failed.", errors),
    )


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _HTTP_REASONS.get(exc.status_code, "http_error")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("💥 Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=ReasonCode.INTERNAL.http_status,
        content=error_body(ReasonCode.INTERNAL.value, describe(exc)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unhandled)


__all__ = ["register_exception_handlers", "error_body"]
