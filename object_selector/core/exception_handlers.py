"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Selector rejections become
HTTP 400 ``{"success": false, "data": {...}}``; framework errors keep their
status codes with the same envelope.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from object_selector.core.config import get_settings
from object_selector.domain.exceptions import PostQueryException, SelectorException

logger = logging.getLogger(__name__)


def _error_envelope(code: str, message: Any, data: Any = None) -> dict[str, Any]:
    return {"success": False, "data": {"code": code, "message": message, "data": data}}


def _selector_exception_handler(request: Request, exc: SelectorException) -> JSONResponse:
    """Return 400 with the rejection code, message and data."""
    if isinstance(exc, PostQueryException):
        logger.warning("Post query failed: code=%s message=%s", exc.error_code, exc.message)
    else:
        logger.info("Selector request rejected: code=%s", exc.error_code)
    return JSONResponse(
        status_code=400,
        content={"success": False, "data": exc.to_dict()},
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content=_error_envelope("validation_error", "Request validation failed", exc.errors()),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_envelope("http_error", exc.detail),
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content=_error_envelope("internal_error", detail),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Handlers: SelectorException (and subclasses), RequestValidationError,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(SelectorException, _selector_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
