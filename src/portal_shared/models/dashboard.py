"""Read-side models for the hotel dashboard and the guest form."""

from pydantic import BaseModel, Field

from .booking import Booking
from .hotel import HotelPublic


class DashboardStats(BaseModel):
    """Summary counters for one hotel."""

    total_revenue: str = Field(
        default="0.00", description="Sum of confirmed booking prices, 2 decimals"
    )
    total_bookings: int = Field(default=0, ge=0)
    confirmed_bookings: int = Field(default=0, ge=0)
    pending_actions: int = Field(default=0, ge=0, description="Bookings awaiting the guest")


class RecentActivity(BaseModel):
    """One line of the dashboard activity feed."""

    id: str
    description: str
    timestamp: str = Field(..., description="dd.MM.yyyy HH:mm or N/A")


class DashboardData(BaseModel):
    """Everything the hotel dashboard shows."""

    hotel_name: str
    stats: DashboardStats = Field(default_factory=DashboardStats)
    recent_activities: list[RecentActivity] = Field(default_factory=list)


class GuestBookingData(BaseModel):
    """Hotel and booking shown to a guest behind a booking link."""

    hotel: HotelPublic
    booking: Booking


class GuestBookingDataResult(BaseModel):
    """Outcome of resolving a guest link for display."""

    success: bool
    message: str | None = None
    data: GuestBookingData | None = None
