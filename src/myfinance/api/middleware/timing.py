"""Timing middleware: ``X-Process-Time-Ms`` header and a per-request deadline.

A request that runs past ``timeout`` seconds is abandoned and answered with
503 rather than left hanging.
"""

from __future__ import annotations

import asyncio
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from myfinance.api.middleware.errors import problem_response
from myfinance.core.errors import RequestTimeoutError
from myfinance.core.logging import get_logger

logger = get_logger(__name__)


class TimingMiddleware(BaseHTTPMiddleware):
    """Measure request processing time and enforce an optional deadline.

    Parameters
    ----------
    app:
        The ASGI application to wrap.
    timeout:
        Seconds before the request is cut off.  ``None`` disables the deadline.
    """

    def __init__(self, app: object, timeout: float | None = None) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._timeout = timeout

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        try:
            response = await asyncio.wait_for(call_next(request), timeout=self._timeout)
        except TimeoutError:
            err = RequestTimeoutError()
            logger.warning("request_timed_out", path=request.url.path, timeout_seconds=self._timeout)
            response = problem_response(
                status=err.status,
                title=err.message,
                detail=err.message,
                instance=request.url.path,
            )
        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
        response.headers["X-Process-Time-Ms"] = str(elapsed_ms)
        return response
