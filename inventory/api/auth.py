from fastapi import APIRouter, Depends

from inventory.api.deps import get_auth_service
from inventory.schemas.auth import LoginRequest, LoginResponse
from inventory.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in",
    description="Exchange the admin credentials for a bearer token valid for one hour."
)
def login(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Log in.

    - **email**: Account email, must be a valid address (required)
    - **password**: Account password (required)

    Returns the token together with the authenticated user's email and role.
    """
    return auth_service.login(credentials)
