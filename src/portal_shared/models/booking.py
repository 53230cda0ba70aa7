"""Booking and guest link models."""

from datetime import date, datetime
from decimal import Decimal
from typing import Self

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl, model_validator

from .enums import BookingStatus, Language, MealPlan


class GuestDetails(BaseModel):
    """Contact details a guest enters on the booking form."""

    first_name: str
    last_name: str
    email: str
    phone: str


class RoomSelection(BaseModel):
    """One room within a booking."""

    room_type: str = Field(..., min_length=1, description="Room category name")
    adults: int = Field(default=1, ge=1, le=10)
    children: int = Field(default=0, ge=0, le=10)
    toddlers: int = Field(default=0, ge=0, le=10)
    child_ages: str = Field(default="", max_length=100)


class Booking(BaseModel):
    """A reservation belonging to exactly one hotel."""

    booking_id: str = Field(..., description="Unique booking ID")
    hotel_id: str = Field(..., description="Owning hotel")
    guest_name: str = Field(..., description="Guest display name")
    check_in: date = Field(..., description="Check-in date")
    check_out: date = Field(..., description="Check-out date")
    room_type: str | None = Field(default=None, description="Single room type")
    rooms: list[RoomSelection] = Field(default_factory=list)
    meal_plan: MealPlan | None = None
    language: Language = Language.DE
    total_price: Decimal = Field(default=Decimal("0"), ge=0)
    internal_notes: str | None = None
    status: BookingStatus
    guest_link_id: str = Field(..., description="Companion guest link")
    guest_details: GuestDetails | None = None
    document_url: str | None = None
    payment_proof_url: str | None = None
    cancellation_reason: str | None = None
    cancelled_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class GuestLink(BaseModel):
    """Single-use capability token that lets a guest complete one booking."""

    link_id: str = Field(..., description="Public URL path segment")
    booking_id: str
    hotel_id: str
    is_completed: bool = False
    created_at: datetime
    completed_at: datetime | None = None
    expires_at: datetime | None = Field(
        default=None, description="Stored only, not enforced"
    )


class _DateRangeMixin(BaseModel):
    check_in: date
    check_out: date

    @model_validator(mode="after")
    def _check_dates(self) -> Self:
        if self.check_in >= self.check_out:
            raise ValueError("Check-out date must be after check-in date.")
        return self


class BookingLinkCreate(_DateRangeMixin):
    """Form posted by the hotelier to issue a guest booking link."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "guest_name": "Alice Doe",
                    "check_in": "2025-06-01",
                    "check_out": "2025-06-05",
                    "room_type": "Suite",
                    "language": "en",
                }
            ]
        }
    )

    guest_name: str = Field(..., min_length=2, description="Guest display name")
    check_in: date = Field(..., description="Check-in date (YYYY-MM-DD)")
    check_out: date = Field(..., description="Check-out date (YYYY-MM-DD)")
    room_type: str = Field(..., min_length=3, description="Room type")
    language: Language = Field(default=Language.DE)


class DirectBookingCreate(_DateRangeMixin):
    """Full booking entered by hotel staff."""

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    check_in: date
    check_out: date
    language: Language = Language.DE
    meal_plan: MealPlan = MealPlan.NONE
    total_price: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    rooms: list[RoomSelection] = Field(..., min_length=1, max_length=20)
    internal_notes: str = Field(default="", max_length=2000)


class BookingUpdate(BaseModel):
    """Fields hotel staff may change on an existing booking."""

    guest_name: str | None = Field(default=None, min_length=1)
    check_in: date | None = None
    check_out: date | None = None
    room_type: str | None = Field(default=None, min_length=1)


class GuestSubmission(BaseModel):
    """Data a guest submits on the final step of the booking form."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "first_name": "Alice",
                    "last_name": "Doe",
                    "email": "alice@example.com",
                    "phone": "+1-555",
                }
            ]
        }
    )

    first_name: str = Field(..., min_length=1, description="First name")
    last_name: str = Field(..., min_length=1, description="Last name")
    email: EmailStr = Field(..., description="Email for the confirmation")
    phone: str = Field(..., min_length=1, description="Phone number")
    document_url: HttpUrl | None = Field(default=None, description="Uploaded ID document")
    payment_proof_url: HttpUrl | None = Field(
        default=None, description="Uploaded proof of payment"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class ActionResult(BaseModel):
    """Success flag plus a user-facing message."""

    success: bool
    message: str


class BookingLinkResult(ActionResult):
    """Outcome of issuing a booking link."""

    link: str | None = None
    booking_id: str | None = None
    link_id: str | None = None


class DirectBookingResult(ActionResult):
    """Outcome of creating a booking from the dashboard."""

    booking_id: str | None = None
    link: str | None = None
