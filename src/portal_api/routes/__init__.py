"""API routes package.

Routers are organized by audience:

- health: Liveness checks
- auth: Hotelier and agency login
- hotels: Agency hotel administration and the hotel dashboard
- bookings: Hotel staff booking management
- guests: Public guest booking form behind a booking link
- advisor: AI security policy advisor

All routers are registered in main.py with /api prefix.
"""

from portal_api.routes.advisor import router as advisor_router
from portal_api.routes.auth import router as auth_router
from portal_api.routes.bookings import router as bookings_router
from portal_api.routes.guests import router as guests_router
from portal_api.routes.health import router as health_router
from portal_api.routes.hotels import router as hotels_router

__all__ = [
    "advisor_router",
    "auth_router",
    "bookings_router",
    "guests_router",
    "health_router",
    "hotels_router",
]
