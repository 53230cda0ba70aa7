"""Hotel models: the tenant records managed by the agency."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from .enums import HotelStatus

# bcrypt rejects passwords longer than this
MAX_PASSWORD_BYTES = 72


class RoomCategory(BaseModel):
    """A room category offered by a hotel (e.g. "Double Room")."""

    name: str = Field(..., min_length=2, description="Category name")


class BankDetails(BaseModel):
    """Bank account guests transfer payments to."""

    account_holder: str = Field(default="", description="Account holder name")
    iban: str = Field(default="", description="IBAN")
    bic: str = Field(default="", description="BIC / SWIFT code")
    bank_name: str = Field(default="", description="Bank name")


class HotelSettings(BaseModel):
    """Per-hotel configuration for the guest form."""

    allow_guest_uploads: bool = True
    max_upload_mb: int = Field(default=10, ge=1)
    booking_link_expiry_hours: int = Field(default=48, ge=1)


class WizardInput(BaseModel):
    """One input of a guest form step."""

    key: str
    label: str
    type: str
    required: bool = False


class WizardStep(BaseModel):
    """One step of the multi-step guest form."""

    id: str
    title: str
    description: str
    inputs: list[WizardInput] = Field(default_factory=list)


class HotelCreate(BaseModel):
    """Data required to onboard a new hotel."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "hotel_name": "Hotel Alpenblick",
                    "hotelier_email": "owner@alpenblick.example",
                    "hotelier_password": "s3cret-pass",
                    "contact_email": "info@alpenblick.example",
                    "contact_phone": "+43 512 000000",
                    "full_address": "Dorfstrasse 1, 6020 Innsbruck, Austria",
                    "meals": ["breakfast", "half_board"],
                    "room_categories": [{"name": "Double Room"}],
                    "owner_id": "agency",
                }
            ]
        }
    )

    hotel_name: str = Field(..., min_length=3, description="Display name")
    domain: str | None = Field(default=None, description="Public domain")
    hotelier_email: EmailStr = Field(..., description="Hotelier login email")
    hotelier_password: str = Field(..., min_length=8, description="Hotelier password")
    contact_email: EmailStr = Field(..., description="Public contact email")
    contact_phone: str = Field(default="", description="Public contact phone")
    full_address: str = Field(..., min_length=10, description="Full postal address")
    meals: list[str] = Field(default_factory=list, description="Offered meal plans")
    room_categories: list[RoomCategory] = Field(
        ..., min_length=1, max_length=50, description="Room categories"
    )
    bank_account_holder: str = ""
    iban: str = ""
    bic: str = ""
    bank_name: str = ""
    owner_id: str = Field(..., min_length=1, description="Owning agency user")

    @field_validator("hotelier_password")
    @classmethod
    def _check_password_length(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes when UTF-8 encoded."
            )
        return value


class Hotel(BaseModel):
    """A hotel as stored in DynamoDB (password hash excluded from dumps)."""

    hotel_id: str = Field(..., description="Unique hotel ID")
    name: str = Field(..., description="Display name")
    domain: str | None = None
    hotelier_email: str = Field(..., description="Hotelier login email")
    hotelier_password_hash: str = Field(default="", exclude=True, repr=False)
    contact_email: str = ""
    contact_phone: str = ""
    address: str = ""
    meals: list[str] = Field(default_factory=list)
    room_categories: list[RoomCategory] = Field(default_factory=list)
    bank_details: BankDetails = Field(default_factory=BankDetails)
    owner_id: str = ""
    status: HotelStatus = HotelStatus.ACTIVE
    settings: HotelSettings = Field(default_factory=HotelSettings)
    wizard_config: list[WizardStep] = Field(default_factory=list)
    booking_template: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime


class HotelSummary(BaseModel):
    """Row in the agency's hotel overview."""

    hotel_id: str
    name: str
    address: str = ""
    contact_email: str = ""
    status: HotelStatus = HotelStatus.ACTIVE
    bookings: int = Field(default=0, ge=0, description="Number of bookings")
    created_at: datetime


class HotelPublic(BaseModel):
    """Hotel fields a guest may see on the booking form."""

    hotel_id: str
    name: str
    address: str = ""
    contact_email: str = ""
    contact_phone: str = ""
    meals: list[str] = Field(default_factory=list)
    room_categories: list[RoomCategory] = Field(default_factory=list)
    bank_details: BankDetails = Field(default_factory=BankDetails)
    settings: HotelSettings = Field(default_factory=HotelSettings)
    wizard_config: list[WizardStep] = Field(default_factory=list)

    @classmethod
    def from_hotel(cls, hotel: Hotel) -> "HotelPublic":
        """Project a stored hotel onto its guest-facing fields."""
        return cls(
            hotel_id=hotel.hotel_id,
            name=hotel.name,
            address=hotel.address,
            contact_email=hotel.contact_email,
            contact_phone=hotel.contact_phone,
            meals=hotel.meals,
            room_categories=hotel.room_categories,
            bank_details=hotel.bank_details,
            settings=hotel.settings,
            wizard_config=hotel.wizard_config,
        )


class HotelCreateResult(BaseModel):
    """Outcome of hotel onboarding."""

    success: bool
    message: str
    hotel_id: str | None = None
