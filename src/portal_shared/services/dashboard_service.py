"""Dashboard aggregation for a single hotel."""

from decimal import Decimal
from typing import TYPE_CHECKING

from botocore.exceptions import BotoCoreError, ClientError

from portal_shared.models import (
    BookingStatus,
    DashboardData,
    DashboardStats,
    RecentActivity,
)
from portal_shared.utils.dates import format_activity_timestamp, parse_timestamp
from portal_shared.utils.logging import get_logger

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService

logger = get_logger(__name__)

RECENT_ACTIVITY_LIMIT = 5
FALLBACK_HOTEL_NAME = "Hotel"


class DashboardService:
    """Computes headline stats and the activity feed for a hotel."""

    HOTELS_TABLE = "hotels"

    def __init__(self, db: "DynamoDBService") -> None:
        self.db = db

    def get_hotel_dashboard_data(self, hotel_id: str) -> DashboardData:
        """Aggregate a hotel's bookings into dashboard stats.

        Revenue only counts confirmed bookings. An unknown hotel or a read
        failure yields zeroed stats under the name "Hotel".

        Args:
            hotel_id: Hotel to aggregate

        Returns:
            DashboardData (never raises for store errors)
        """
        try:
            hotel = self.db.get_item(self.HOTELS_TABLE, {"hotel_id": hotel_id})
            if not hotel:
                logger.warning("Dashboard requested for unknown hotel %s", hotel_id)
                return self._empty()
            # Newest first, via the hotel_id GSI
            bookings = self.db.get_bookings_for_hotel(hotel_id)
        except (ClientError, BotoCoreError):
            logger.exception("Error fetching dashboard data for hotel %s", hotel_id)
            return self._empty()

        revenue = Decimal("0")
        confirmed = 0
        pending = 0
        for booking in bookings:
            status = booking.get("status")
            if status == BookingStatus.CONFIRMED.value:
                confirmed += 1
                revenue += Decimal(str(booking.get("total_price") or 0))
            elif status == BookingStatus.PENDING_GUEST.value:
                pending += 1

        activities = [
            RecentActivity(
                id=booking["booking_id"],
                description=f"New booking from {booking.get('guest_name', '')}.",
                timestamp=format_activity_timestamp(
                    parse_timestamp(booking["created_at"])
                    if booking.get("created_at")
                    else None
                ),
            )
            for booking in bookings[:RECENT_ACTIVITY_LIMIT]
        ]

        data = DashboardData(
            hotel_name=hotel.get("name") or FALLBACK_HOTEL_NAME,
            stats=DashboardStats(
                total_revenue=f"{revenue:.2f}",
                total_bookings=len(bookings),
                confirmed_bookings=confirmed,
                pending_actions=pending,
            ),
            recent_activities=activities,
        )
        logger.info(
            "Dashboard for %s: %d bookings, revenue %s",
            data.hotel_name,
            data.stats.total_bookings,
            data.stats.total_revenue,
        )
        return data

    def _empty(self) -> DashboardData:
        return DashboardData(
            hotel_name=FALLBACK_HOTEL_NAME,
            stats=DashboardStats(),
            recent_activities=[],
        )
