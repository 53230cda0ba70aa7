"""Public guest endpoints behind a booking link.

The link id in the path is the only credential. Hotel and booking are
resolved from the stored link, never from the request body.
"""

from fastapi import APIRouter, Depends

from portal_api.dependencies import get_booking_service
from portal_api.models.guests import GuestSubmitResponse
from portal_shared.models import GuestBookingDataResult, GuestSubmission
from portal_shared.services.booking_service import BookingService, guest_link_path

router = APIRouter(prefix="/guest", tags=["guests"])


@router.get(
    "/{link_id}",
    summary="Load guest booking form",
    description="""
Hotel and booking details needed to render the guest form.

Returns `success: false` with a message when the link is unknown, already
used, or its booking is gone.
""",
    response_model=GuestBookingDataResult,
)
async def get_guest_booking(
    link_id: str,
    service: BookingService = Depends(get_booking_service),
) -> GuestBookingDataResult:
    return service.get_booking_data_for_guest(link_id)


@router.post(
    "/{link_id}",
    summary="Submit guest booking form",
    description="""
Complete the booking with the guest's details.

Each link can be completed exactly once; later submissions receive
`success: false`. A confirmation email is sent on a best-effort basis.
""",
    response_model=GuestSubmitResponse,
)
async def submit_guest_booking(
    link_id: str,
    body: GuestSubmission,
    service: BookingService = Depends(get_booking_service),
) -> GuestSubmitResponse:
    result = service.submit_guest_booking(link_id, body)
    return GuestSubmitResponse(
        success=result.success,
        message=result.message,
        redirect_to=f"{guest_link_path(link_id)}/thank-you" if result.success else None,
    )
