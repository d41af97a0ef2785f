"""
Logging Middleware

Request/response logging. Every log line emitted while a request is being
served carries its request_id, method and path.
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from access_control.core.logging import clear_log_context, log_context, logger


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4())[:8])

        log_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        logger.info("Request started", query_params=str(request.query_params))

        start_time = time.perf_counter()

        try:
            response = await call_next(request)

            duration_ms = int((time.perf_counter() - start_time) * 1000)
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as e:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            logger.error("Request failed", error=str(e), duration_ms=duration_ms)
            raise

        finally:
            clear_log_context()
