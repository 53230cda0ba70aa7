"""Booking management endpoints for hotel staff.

All paths are scoped to a hotel. A booking belonging to another hotel is
reported as not found.
"""

from fastapi import APIRouter, Depends, Query, Response
from starlette.status import HTTP_201_CREATED

from portal_api.dependencies import get_booking_service
from portal_api.models.bookings import BookingListResponse
from portal_shared.models import (
    Booking,
    BookingLinkCreate,
    BookingLinkResult,
    BookingUpdate,
    DirectBookingCreate,
    DirectBookingResult,
)
from portal_shared.models.errors import ErrorCode, PortalError
from portal_shared.services.booking_service import BookingService

router = APIRouter(prefix="/hotels/{hotel_id}", tags=["bookings"])


def _get_hotel_booking(service: BookingService, hotel_id: str, booking_id: str) -> Booking:
    booking = service.get_booking(booking_id)
    if booking is None or booking.hotel_id != hotel_id:
        raise PortalError(
            ErrorCode.BOOKING_NOT_FOUND,
            details={"booking_id": booking_id},
        )
    return booking


@router.get(
    "/bookings",
    summary="List bookings",
    response_model=BookingListResponse,
)
async def list_bookings(
    hotel_id: str,
    service: BookingService = Depends(get_booking_service),
) -> BookingListResponse:
    """List a hotel's bookings, newest first."""
    bookings = service.list_bookings(hotel_id)
    return BookingListResponse(bookings=bookings, total_count=len(bookings))


@router.post(
    "/booking-links",
    summary="Create booking link",
    description="""
Create a pending booking and a single-use link the guest uses to complete it.

Both records are written atomically. The returned `link` is a relative path
(`/guest/{link_id}`) to be prefixed with the public site origin.

**Notes:**
- Check-out must be after check-in (422 otherwise)
- Returns 200 with `success: false` if the write fails
""",
    response_model=BookingLinkResult,
    responses={201: {"description": "Booking link created"}},
)
async def create_booking_link(
    hotel_id: str,
    body: BookingLinkCreate,
    response: Response,
    service: BookingService = Depends(get_booking_service),
) -> BookingLinkResult:
    result = service.create_booking_link(hotel_id, body)
    if result.success:
        response.status_code = HTTP_201_CREATED
    return result


@router.post(
    "/bookings",
    summary="Create booking",
    description="Create a complete booking on behalf of a guest, with a companion guest link.",
    response_model=DirectBookingResult,
    responses={201: {"description": "Booking created"}},
)
async def create_booking(
    hotel_id: str,
    body: DirectBookingCreate,
    response: Response,
    service: BookingService = Depends(get_booking_service),
) -> DirectBookingResult:
    result = service.create_direct_booking(hotel_id, body)
    if result.success:
        response.status_code = HTTP_201_CREATED
    return result


@router.get(
    "/bookings/{booking_id}",
    summary="Get booking",
    response_model=Booking,
    responses={404: {"description": "Booking not found"}},
)
async def get_booking(
    hotel_id: str,
    booking_id: str,
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    return _get_hotel_booking(service, hotel_id, booking_id)


@router.patch(
    "/bookings/{booking_id}",
    summary="Update booking",
    description="""
Change guest name, dates or room type.

**Notes:**
- Cancelled bookings cannot be changed (409)
- The resulting date range must stay valid (400)
""",
    response_model=Booking,
    responses={
        400: {"description": "Invalid date range"},
        404: {"description": "Booking not found"},
        409: {"description": "Booking is cancelled"},
    },
)
async def update_booking(
    hotel_id: str,
    booking_id: str,
    body: BookingUpdate,
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    _get_hotel_booking(service, hotel_id, booking_id)

    booking, error = service.update_booking(booking_id, body)
    if booking is None:
        raise PortalError(
            error or ErrorCode.PERSISTENCE, details={"booking_id": booking_id}
        )
    return booking


@router.delete(
    "/bookings/{booking_id}",
    summary="Cancel booking",
    response_model=Booking,
    responses={
        404: {"description": "Booking not found"},
        409: {"description": "Booking already cancelled"},
    },
)
async def cancel_booking(
    hotel_id: str,
    booking_id: str,
    reason: str | None = Query(default=None, max_length=500),
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    """Cancel a booking. Cancellation is final."""
    _get_hotel_booking(service, hotel_id, booking_id)

    booking, error = service.cancel_booking(booking_id, reason)
    if booking is None:
        raise PortalError(
            error or ErrorCode.PERSISTENCE, details={"booking_id": booking_id}
        )
    return booking
