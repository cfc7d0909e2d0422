"""
FastAPI dependency injection utilities for authentication and services.
Provides reusable dependencies for route protection and actor extraction.
"""

from typing import Optional
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from app.config import get_settings
from app.database import get_db
from app.models.user import User
from app.services.auth import AuthService
from app.services.content import BlogService, ContactService
from app.services.media import MediaUploader, get_media_uploader
from app.services.property import PropertyService
from app.services.review import ReviewService
from app.services.user import UserService
from app.utils.auth import extract_token_from_header
from app.utils.exceptions import UnauthorizedError, InvalidTokenError, TokenExpiredError
import uuid
import logging

logger = logging.getLogger(__name__)


async def get_uploader() -> MediaUploader:
    """Media uploader used by the upload endpoints; overridable in tests."""
    return get_media_uploader()


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_property_service(
    db: AsyncSession = Depends(get_db),
    uploader: MediaUploader = Depends(get_uploader)
) -> PropertyService:
    return PropertyService(db, media_uploader=uploader)


async def get_review_service(db: AsyncSession = Depends(get_db)) -> ReviewService:
    return ReviewService(db)


async def get_user_service(
    db: AsyncSession = Depends(get_db),
    uploader: MediaUploader = Depends(get_uploader)
) -> UserService:
    return UserService(db, media_uploader=uploader)


async def get_contact_service(db: AsyncSession = Depends(get_db)) -> ContactService:
    return ContactService(db)


async def get_blog_service(db: AsyncSession = Depends(get_db)) -> BlogService:
    return BlogService(db)


def extract_request_token(request: Request) -> Optional[str]:
    """
    Find the access token on a request.

    A Bearer Authorization header wins over the session cookie.
    """
    authorization = request.headers.get("Authorization")
    if authorization:
        try:
            return extract_token_from_header(authorization)
        except ValueError as e:
            logger.debug(f"Ignoring malformed Authorization header: {e}")

    return request.cookies.get(get_settings().auth_cookie_name) or None


async def resolve_actor(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[uuid.UUID]:
    """
    Resolve the acting user's id, or None for anonymous requests.

    Invalid and expired tokens are treated as anonymous.
    """
    token = extract_request_token(request)
    if not token:
        return None

    try:
        return auth_service.resolve_user_id(token)
    except (InvalidTokenError, TokenExpiredError) as e:
        logger.debug(f"Treating request as anonymous: {e.detail}")
        return None


async def get_current_actor(actor_id: Optional[uuid.UUID] = Depends(resolve_actor)) -> uuid.UUID:
    """
    Raises:
        UnauthorizedError: If the request carries no valid token
    """
    if actor_id is None:
        raise UnauthorizedError("Authentication required")
    return actor_id


async def get_current_user(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """
    Get the authenticated user record.

    Raises:
        UnauthorizedError: If no token was provided
        TokenExpiredError: If the token is expired
        InvalidTokenError: If the token is invalid
        InactiveUserError: If the account is inactive
    """
    token = extract_request_token(request)
    if not token:
        raise UnauthorizedError("Authentication token required")

    return await auth_service.get_current_user(token)
