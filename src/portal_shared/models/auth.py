"""Authentication models for hotelier and agency login."""

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    """Email/password login form."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResult(BaseModel):
    """Outcome of a login attempt.

    Logins are session-less: a successful hotelier login tells the client
    which hotel dashboard to open, nothing more.
    """

    success: bool
    message: str
    hotel_id: str | None = None
