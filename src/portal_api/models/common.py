"""Shared API response models."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness probe body."""

    status: str = Field(default="healthy", examples=["healthy"])
    version: str = Field(..., examples=["0.1.0"])
