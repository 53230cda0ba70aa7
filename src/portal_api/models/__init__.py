"""API request/response models.

Domain models (Booking, Hotel, ...) live in portal_shared.models; this
package only holds HTTP-layer wrappers.
"""

from portal_api.models.bookings import BookingListResponse
from portal_api.models.common import HealthResponse
from portal_api.models.guests import GuestSubmitResponse
from portal_api.models.hotels import HotelListResponse

__all__ = [
    "BookingListResponse",
    "GuestSubmitResponse",
    "HealthResponse",
    "HotelListResponse",
]
