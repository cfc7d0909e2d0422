"""
Authentication API endpoints for registration and login.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from app.config import settings
from app.schemas.error import get_error_responses
from app.schemas.user import UserCreate, LoginRequest
from app.services.auth import AuthService
from app.utils.dependencies import get_auth_service


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register user",
    responses=get_error_responses(400, 409, 500)
)
async def register(
    user_data: UserCreate,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register a new account.

    Raises:
        DuplicateResourceError: If the email is already registered
    """
    user = await auth_service.register(user_data)
    return user.to_dict()


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate with email and password. The token is returned and also set as a cookie.",
    responses=get_error_responses(400, 401, 500)
)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Authenticate user and return an access token.

    Raises:
        InvalidCredentialsError: If credentials are invalid
    """
    user, access_token = await auth_service.login(
        email=login_data.email,
        password=login_data.password
    )

    expires_in = settings.access_token_expire_minutes * 60
    response = JSONResponse(content={
        "user": user.to_dict(),
        "accessToken": access_token,
        "tokenType": "bearer",
        "expiresIn": expires_in
    })
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=access_token,
        max_age=expires_in,
        httponly=True,
        samesite="lax",
        secure=settings.is_production
    )
    return response
