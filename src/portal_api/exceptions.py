"""FastAPI exception handlers for converting PortalError to HTTP responses.

The ErrorCode-to-HTTP status mapping follows REST conventions:
- 400 Bad Request: Business rule violations
- 401 Unauthorized: Failed login
- 404 Not Found: Resource not found
- 409 Conflict: State conflicts (already completed, cancelled, duplicate)
- 500 Internal Server Error: Misconfiguration and store failures
- 502 Bad Gateway: Upstream model or email provider failures

Usage:
    from portal_api.exceptions import register_exception_handlers
    register_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
)

from portal_shared.models.errors import ErrorCode, ErrorResponse, PortalError
from portal_shared.utils.logging import get_logger

logger = get_logger(__name__)

ERROR_CODE_TO_HTTP_STATUS: dict[ErrorCode, int] = {
    # Not found -> 404
    ErrorCode.HOTEL_NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.BOOKING_NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.LINK_INVALID: HTTP_404_NOT_FOUND,
    ErrorCode.LINK_TARGET_MISSING: HTTP_404_NOT_FOUND,
    # State conflicts -> 409
    ErrorCode.LINK_COMPLETED: HTTP_409_CONFLICT,
    ErrorCode.BOOKING_CANCELLED: HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_HOTELIER: HTTP_409_CONFLICT,
    # Business validation -> 400
    ErrorCode.INVALID_DATE_RANGE: HTTP_400_BAD_REQUEST,
    # Authentication -> 401
    ErrorCode.INVALID_CREDENTIALS: HTTP_401_UNAUTHORIZED,
    # Server side
    ErrorCode.AUTH_CONFIG: HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.PERSISTENCE: HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.CONTENT_GENERATION: HTTP_502_BAD_GATEWAY,
    ErrorCode.EMAIL_DELIVERY: HTTP_502_BAD_GATEWAY,
}


def get_http_status_for_error(code: ErrorCode) -> int:
    """Get HTTP status code for an ErrorCode, defaulting to 400."""
    return ERROR_CODE_TO_HTTP_STATUS.get(code, HTTP_400_BAD_REQUEST)


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    """Convert a PortalError to the standard error body."""
    return JSONResponse(
        status_code=get_http_status_for_error(exc.code),
        content=exc.to_response().model_dump(mode="json"),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected exceptions and return a generic 500 body."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    body = ErrorResponse.from_code(ErrorCode.PERSISTENCE)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(mode="json"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(PortalError, portal_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)
