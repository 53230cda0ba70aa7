"""Hotel administration endpoints for the agency, plus the hotel dashboard."""

from fastapi import APIRouter, Depends, Response
from starlette.status import HTTP_201_CREATED

from portal_api.dependencies import get_dashboard_service, get_hotel_service
from portal_api.models.hotels import HotelListResponse
from portal_shared.models import DashboardData, Hotel, HotelCreate, HotelCreateResult
from portal_shared.models.errors import ErrorCode, PortalError
from portal_shared.services.dashboard_service import DashboardService
from portal_shared.services.hotel_service import HotelService

router = APIRouter(prefix="/hotels", tags=["hotels"])


@router.get(
    "",
    summary="List hotels",
    description="All hotels, newest first, each with its number of bookings.",
    response_model=HotelListResponse,
)
async def list_hotels(
    service: HotelService = Depends(get_hotel_service),
) -> HotelListResponse:
    hotels = service.list_hotels()
    return HotelListResponse(hotels=hotels, total_count=len(hotels))


@router.post(
    "",
    summary="Create hotel",
    description="""
Onboard a new hotel.

Stores the hotelier password as a bcrypt hash, applies default settings,
guest form steps and booking template, and seeds one room per room category.

**Notes:**
- Returns 201 on success
- Returns 200 with `success: false` when the hotelier email is taken
""",
    response_model=HotelCreateResult,
    responses={201: {"description": "Hotel created"}},
)
async def create_hotel(
    body: HotelCreate,
    response: Response,
    service: HotelService = Depends(get_hotel_service),
) -> HotelCreateResult:
    result = service.create_hotel(body)
    if result.success:
        response.status_code = HTTP_201_CREATED
    return result


@router.get(
    "/{hotel_id}",
    summary="Get hotel by ID",
    response_model=Hotel,
    responses={404: {"description": "Hotel not found"}},
)
async def get_hotel(
    hotel_id: str,
    service: HotelService = Depends(get_hotel_service),
) -> Hotel:
    hotel = service.get_hotel(hotel_id)
    if hotel is None:
        raise PortalError(ErrorCode.HOTEL_NOT_FOUND, details={"hotel_id": hotel_id})
    return hotel


@router.get(
    "/{hotel_id}/dashboard",
    summary="Hotel dashboard",
    description="""
Headline numbers and the recent activity feed of one hotel.

**Notes:**
- Revenue only counts confirmed bookings, formatted with two decimals
- Pending actions are bookings still waiting for the guest
- An unknown hotel yields zeroed stats rather than an error
""",
    response_model=DashboardData,
)
async def get_dashboard(
    hotel_id: str,
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardData:
    return service.get_hotel_dashboard_data(hotel_id)
