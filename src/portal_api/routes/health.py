"""Health check endpoint."""

from fastapi import APIRouter

from portal_api.models.common import HealthResponse

API_VERSION = "0.1.0"

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    summary="Health check",
    response_model=HealthResponse,
)
async def health() -> HealthResponse:
    return HealthResponse(status="healthy", version=API_VERSION)
