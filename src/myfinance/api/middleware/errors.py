"""
Error handlers: map raised errors to RFC 7807 responses.

Registered by :func:`myfinance.api.app.create_app`:

* :class:`~myfinance.core.errors.AppError` → its own ``status``
* ``RequestValidationError`` (body, query, path) → 400 with one entry per field
* ``HTTPException`` (unknown route, wrong method) → its status
* anything else → 500, logged with traceback, generic detail
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from myfinance.api.schemas.common import ErrorDetail, ProblemDetail
from myfinance.core.errors import AppError
from myfinance.core.logging import get_logger

logger = get_logger(__name__)


def problem_response(
    *,
    status: int,
    title: str,
    detail: str = "",
    instance: str = "",
    errors: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a RFC 7807 JSON error response."""
    body = ProblemDetail(
        title=title,
        status=status,
        detail=detail,
        instance=instance,
        errors=[ErrorDetail(**e) for e in errors or []],
    )
    return JSONResponse(status_code=status, content=body.model_dump(), headers=headers)


def _field_path(loc: tuple[Any, ...]) -> str:
    # ("body", "valor") -> "valor";  ("query", "startDate") -> "startDate"
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status >= 500:
        logger.error("request_failed", path=request.url.path, **exc.to_dict())
    headers = {"WWW-Authenticate": "Bearer"} if exc.status == 401 else None
    return problem_response(
        status=exc.status,
        title=exc.message,
        detail=exc.message,
        instance=request.url.path,
        errors=exc.errors,
        headers=headers,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Aggregate every failing field into one 400."""
    errors = [
        {
            "code": str(err.get("type", "invalid")).upper(),
            "message": err.get("msg", "Invalid value"),
            "field": _field_path(tuple(err.get("loc", ()))),
        }
        for err in exc.errors()
    ]
    return problem_response(
        status=400,
        title="Validation error",
        detail="Validation error",
        instance=request.url.path,
        errors=errors,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else ""
    return problem_response(
        status=exc.status_code,
        title=detail or "HTTP error",
        detail=detail,
        instance=request.url.path,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions; renders a generic 500 ProblemDetail."""
    logger.exception("unhandled_exception", path=request.url.path, error_type=type(exc).__name__)
    return problem_response(
        status=500,
        title="Internal server error",
        detail=str(exc) if request.app.state.settings.debug else "An unexpected error occurred.",
        instance=request.url.path,
    )
