"""
Logging Middleware

Request/response logging with a per-request correlation ID.
"""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("procurement.api.requests")

CORRELATION_HEADER = "X-Correlation-ID"


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Log every request with its outcome and duration.

    A caller-supplied X-Correlation-ID is reused so that one procurement
    workflow (create proposal, then rank) can be traced across requests.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex[:8]
        request.state.correlation_id = correlation_id

        start_time = time.perf_counter()
        route = f"{request.method} {request.url.path}"
        client_ip = request.client.host if request.client else "unknown"
        logger.info(f"[{correlation_id}] {route} from {client_ip}")

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(f"[{correlation_id}] {route} ERROR: {e} ({duration_ms:.2f}ms)")
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        response.headers[CORRELATION_HEADER] = correlation_id
        response.headers["X-Response-Time-Ms"] = f"{duration_ms:.2f}"

        log_level = logging.INFO if response.status_code < 400 else logging.WARNING
        logger.log(
            log_level,
            f"[{correlation_id}] {route} -> {response.status_code} ({duration_ms:.2f}ms)"
        )
        return response


def get_correlation_id(request: Request) -> str:
    """Get the correlation ID from the request state."""
    return getattr(request.state, "correlation_id", "unknown")
