"""Enumeration types for hotel portal data models."""

from enum import Enum


class BookingStatus(str, Enum):
    """Status of a booking.

    ``pending_guest`` -> ``confirmed`` -> ``cancelled``. Cancelled is terminal.
    """

    PENDING_GUEST = "pending_guest"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class HotelStatus(str, Enum):
    """Whether a hotel is active in the agency portfolio."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class Language(str, Enum):
    """Languages the guest form and emails can be presented in."""

    DE = "de"
    EN = "en"


class MealPlan(str, Enum):
    """Meal plan booked with the stay."""

    NONE = "none"
    BREAKFAST = "breakfast"
    HALF_BOARD = "half_board"
    FULL_BOARD = "full_board"
    ALL_INCLUSIVE = "all_inclusive"
