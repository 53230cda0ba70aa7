"""Login endpoints.

Failed logins are reported in the body (``success: false``) with HTTP 200,
so clients render the message without special-casing status codes.
"""

from fastapi import APIRouter, Depends

from portal_api.dependencies import get_auth_service
from portal_shared.models import LoginRequest, LoginResult
from portal_shared.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/hotelier/login",
    summary="Hotelier login",
    description="Check a hotelier's credentials. On success returns the hotel_id "
    "whose dashboard the hotelier may open.",
    response_model=LoginResult,
)
async def login_hotelier(
    body: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> LoginResult:
    return service.login_hotelier(str(body.email), body.password)


@router.post(
    "/agency/login",
    summary="Agency login",
    response_model=LoginResult,
)
async def login_agency(
    body: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> LoginResult:
    return service.login_agency(str(body.email), body.password)
