"""Request logging middleware.

Logs one line per request with method, path, status and duration, and binds
a correlation id (taken from ``X-Request-ID`` or generated) for every record
emitted while the request is handled. Headers and bodies are never logged,
so bearer tokens and passwords stay out of the logs.
"""

import logging
import time
from typing import Callable, Set

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .config import generate_correlation_id, reset_correlation_id, set_correlation_id
from .factory import get_logger

REQUEST_ID_HEADER = "X-Request-ID"

logger = get_logger("library_api.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request and propagate its correlation id."""

    def __init__(self, app, excluded_paths: Set[str] | None = None):
        super().__init__(app)
        self.excluded_paths = excluded_paths if excluded_paths is not None else {"/health"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(REQUEST_ID_HEADER) or generate_correlation_id()
        token = set_correlation_id(correlation_id)
        request.state.correlation_id = correlation_id
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                f"{request.method} {request.url.path} failed",
                extra={"method": request.method, "path": request.url.path},
            )
            raise
        finally:
            reset_correlation_id(token)

        response.headers[REQUEST_ID_HEADER] = correlation_id

        if request.url.path not in self.excluded_paths:
            duration_ms = (time.perf_counter() - start_time) * 1000
            if response.status_code >= 500:
                level = logging.ERROR
            elif response.status_code >= 400:
                level = logging.WARNING
            else:
                level = logging.INFO
            logger.log(
                level,
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round(duration_ms, 2),
                    "correlation_id": correlation_id,
                },
            )

        return response
