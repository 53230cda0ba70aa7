"""Standard error codes for the hotel portal.

Services return user-facing messages from ``ERROR_MESSAGES`` so that the
same outcome always reads the same way, whether it reaches the caller as an
action payload or as an HTTP error body.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Standard error codes."""

    # Not found
    HOTEL_NOT_FOUND = "ERR_HOTEL_NOT_FOUND"
    BOOKING_NOT_FOUND = "ERR_BOOKING_NOT_FOUND"
    LINK_INVALID = "ERR_LINK_INVALID"
    LINK_TARGET_MISSING = "ERR_LINK_TARGET_MISSING"

    # State conflicts
    LINK_COMPLETED = "ERR_LINK_COMPLETED"
    BOOKING_CANCELLED = "ERR_BOOKING_CANCELLED"
    DUPLICATE_HOTELIER = "ERR_DUPLICATE_HOTELIER"

    # Validation
    INVALID_DATE_RANGE = "ERR_INVALID_DATE_RANGE"

    # Authentication
    INVALID_CREDENTIALS = "ERR_INVALID_CREDENTIALS"
    AUTH_CONFIG = "ERR_AUTH_CONFIG"

    # Infrastructure
    PERSISTENCE = "ERR_PERSISTENCE"
    CONTENT_GENERATION = "ERR_CONTENT_GENERATION"
    EMAIL_DELIVERY = "ERR_EMAIL_DELIVERY"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.HOTEL_NOT_FOUND: "Hotel not found.",
    ErrorCode.BOOKING_NOT_FOUND: "Booking not found.",
    ErrorCode.LINK_INVALID: "This booking link is invalid or has expired.",
    ErrorCode.LINK_TARGET_MISSING: "Could not find the associated hotel or booking.",
    ErrorCode.LINK_COMPLETED: "This booking has already been completed.",
    ErrorCode.BOOKING_CANCELLED: "This booking has been cancelled.",
    ErrorCode.DUPLICATE_HOTELIER: "A hotel with this hotelier email already exists.",
    ErrorCode.INVALID_DATE_RANGE: "Check-out date must be after check-in date.",
    ErrorCode.INVALID_CREDENTIALS: "Invalid credentials.",
    ErrorCode.AUTH_CONFIG: "Server configuration error.",
    ErrorCode.PERSISTENCE: "An unexpected server error occurred. Please try again.",
    ErrorCode.CONTENT_GENERATION: "Text generation failed. Please try again later.",
    ErrorCode.EMAIL_DELIVERY: "Failed to send email.",
}


class ErrorResponse(BaseModel):
    """Standard error body returned by the REST API."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    details: Optional[dict[str, str]] = None

    @classmethod
    def from_code(
        cls,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ) -> "ErrorResponse":
        """Create an ErrorResponse from an error code."""
        return cls(error_code=code, message=ERROR_MESSAGES[code], details=details)


class PortalError(Exception):
    """Exception raised for domain errors that should become HTTP errors."""

    def __init__(
        self,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ):
        self.code = code
        self.message = ERROR_MESSAGES[code]
        self.details = details
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        """Convert this exception to the standard error body."""
        return ErrorResponse.from_code(self.code, self.details)
