"""Pydantic models for hotel portal data entities."""

from .auth import LoginRequest, LoginResult
from .booking import (
    ActionResult,
    Booking,
    BookingLinkCreate,
    BookingLinkResult,
    BookingUpdate,
    DirectBookingCreate,
    DirectBookingResult,
    GuestDetails,
    GuestLink,
    GuestSubmission,
    RoomSelection,
)
from .content import (
    ConfirmationEmailInput,
    ConfirmationEmailOutput,
    EmailResult,
    SecurityPolicyInput,
    SecurityPolicyOutput,
)
from .dashboard import (
    DashboardData,
    DashboardStats,
    GuestBookingData,
    GuestBookingDataResult,
    RecentActivity,
)
from .enums import BookingStatus, HotelStatus, Language, MealPlan
from .errors import ERROR_MESSAGES, ErrorCode, ErrorResponse, PortalError
from .hotel import (
    BankDetails,
    Hotel,
    HotelCreate,
    HotelCreateResult,
    HotelPublic,
    HotelSettings,
    HotelSummary,
    RoomCategory,
    WizardInput,
    WizardStep,
)

__all__ = [
    # Enums
    "BookingStatus",
    "HotelStatus",
    "Language",
    "MealPlan",
    # Hotel
    "BankDetails",
    "Hotel",
    "HotelCreate",
    "HotelCreateResult",
    "HotelPublic",
    "HotelSettings",
    "HotelSummary",
    "RoomCategory",
    "WizardInput",
    "WizardStep",
    # Booking
    "ActionResult",
    "Booking",
    "BookingLinkCreate",
    "BookingLinkResult",
    "BookingUpdate",
    "DirectBookingCreate",
    "DirectBookingResult",
    "GuestDetails",
    "GuestLink",
    "GuestSubmission",
    "RoomSelection",
    # Dashboard / guest form
    "DashboardData",
    "DashboardStats",
    "GuestBookingData",
    "GuestBookingDataResult",
    "RecentActivity",
    # Content
    "ConfirmationEmailInput",
    "ConfirmationEmailOutput",
    "EmailResult",
    "SecurityPolicyInput",
    "SecurityPolicyOutput",
    # Auth
    "LoginRequest",
    "LoginResult",
    # Errors
    "ERROR_MESSAGES",
    "ErrorCode",
    "ErrorResponse",
    "PortalError",
]
