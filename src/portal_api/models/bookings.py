"""Booking endpoint response models."""

from pydantic import BaseModel, Field

from portal_shared.models import Booking


class BookingListResponse(BaseModel):
    """A hotel's bookings, newest first."""

    bookings: list[Booking]
    total_count: int = Field(..., ge=0)
