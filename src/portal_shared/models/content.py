"""Input/output models for AI-generated text and outgoing email."""

from pydantic import BaseModel, Field

from .errors import ErrorCode


class ConfirmationEmailInput(BaseModel):
    """Facts the confirmation email is written from."""

    guest_name: str = Field(..., description="The name of the guest.")
    hotel_name: str = Field(..., description="The name of the hotel.")
    check_in_date: str = Field(..., description="The check-in date, formatted.")
    check_out_date: str = Field(..., description="The check-out date, formatted.")
    booking_details: str = Field(..., description="Additional booking details.")


class ConfirmationEmailOutput(BaseModel):
    """Generated confirmation email."""

    html_content: str = Field(..., description="Complete HTML document")


class SecurityPolicyInput(BaseModel):
    """Hotel facts the security advisor works from."""

    hotel_name: str = Field(..., min_length=1, description="The name of the hotel.")
    hotel_description: str = Field(
        ...,
        min_length=1,
        description="Size, location and type of clientele.",
    )
    existing_security_measures: str = Field(
        ..., min_length=1, description="Security measures already in place."
    )
    potential_threats: str = Field(
        ..., min_length=1, description="Threats specific to the hotel."
    )


class SecurityPolicyOutput(BaseModel):
    """Generated security policy recommendations."""

    policy_recommendations: str


class EmailResult(BaseModel):
    """Outcome of an email send attempt."""

    success: bool
    message: str
    message_id: str | None = None
    error_code: ErrorCode | None = None
