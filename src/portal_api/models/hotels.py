"""Hotel endpoint response models."""

from pydantic import BaseModel, Field

from portal_shared.models import HotelSummary


class HotelListResponse(BaseModel):
    """Agency hotel overview."""

    hotels: list[HotelSummary]
    total_count: int = Field(..., ge=0)
