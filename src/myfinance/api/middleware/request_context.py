"""Request context middleware: correlation id and request logging.

The id comes from ``X-Request-ID`` (or ``X-Correlation-ID``) when the client
sends one, otherwise a fresh UUID.  It is bound into the structlog context
for the lifetime of the request and echoed back in ``X-Request-ID``.
"""

from __future__ import annotations

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from myfinance.core.logging import get_logger

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = (
            request.headers.get("X-Request-ID")
            or request.headers.get("X-Correlation-ID")
            or str(uuid.uuid4())
        )
        request.state.request_id = request_id

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            logger.info(
                "request_started",
                method=request.method,
                path=request.url.path,
                client=request.client.host if request.client else "unknown",
            )
            try:
                response = await call_next(request)
            except Exception as e:
                logger.exception(
                    "request_failed",
                    method=request.method,
                    path=request.url.path,
                    error=str(e),
                )
                raise

            logger.info(
                "request_completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
            )

        response.headers["X-Request-ID"] = request_id
        return response
