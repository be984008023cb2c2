"""Request middleware for the probe server."""

import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from ..observability.logging import CorrelationContext, get_logger

logger = get_logger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Middleware to add correlation IDs to requests and responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Bind the correlation ID for the duration of the request."""
        with CorrelationContext(request.headers.get(CORRELATION_ID_HEADER)) as scope:
            request.state.correlation_id = scope.correlation_id
            response = await call_next(request)

        response.headers[CORRELATION_ID_HEADER] = scope.correlation_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log request details."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Log request details."""
        start_time = time.perf_counter()

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.6f}"

        logger.debug(
            "Request processed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration=process_time,
        )

        return response
