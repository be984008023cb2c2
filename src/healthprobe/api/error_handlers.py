"""Error handling and response standardization for the API."""

from datetime import datetime, UTC
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..domain.exceptions import HealthProbeException
from ..domain.models import ErrorCode
from ..observability.logging import get_correlation_id as current_correlation_id
from ..observability.logging import get_logger

logger = get_logger(__name__)

_STATUS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


class ErrorResponse(BaseModel):
    """Standardized error response format."""

    error: bool = True
    code: str
    message: str
    details: dict[str, Any] | None = None
    correlation_id: str | None = None
    timestamp: str
    path: str


def get_correlation_id(request: Request) -> str | None:
    """Extract correlation ID from request."""
    return getattr(request.state, "correlation_id", None) or current_correlation_id()


def create_error_response(
    request: Request,
    code: str,
    message: str,
    status_code: int,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Create standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            code=code,
            message=message,
            details=details,
            correlation_id=get_correlation_id(request),
            timestamp=datetime.now(UTC).isoformat(),
            path=str(request.url.path),
        ).model_dump(),
    )


async def health_probe_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Handle library exceptions; validation errors map to 422."""
    if not isinstance(exc, HealthProbeException):
        raise exc

    status_code = _STATUS_BY_CODE.get(
        exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    logger.warning(
        "Request failed",
        path=request.url.path,
        code=exc.error_code.value,
        error=exc.message,
    )
    return create_error_response(
        request=request,
        code=exc.error_code.value,
        message=exc.message,
        status_code=status_code,
        details=exc.details,
    )


async def unexpected_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        exception_type=type(exc).__name__,
        error=str(exc),
    )
    return create_error_response(
        request=request,
        code=ErrorCode.INTERNAL_ERROR.value,
        message="An unexpected error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details={"exception_type": type(exc).__name__},
    )
