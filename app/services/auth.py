"""
Authentication service for registration, login and token resolution.
Handles JWT token generation and validation on top of the user repository.
"""

from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.user import UserRepository
from app.models.user import User
from app.schemas.user import UserCreate
from app.utils.auth import create_access_token, verify_token
from app.utils.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    InactiveUserError,
    NotFoundError,
    ValidationError,
    DuplicateResourceError
)
from jose import JWTError, ExpiredSignatureError
import uuid
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for managing user accounts and sessions.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    async def register(self, user_data: UserCreate) -> User:
        """
        Register a new user account.

        Raises:
            DuplicateResourceError: If the email is already registered
            ValidationError: If the email or password is invalid
        """
        try:
            email = User.validate_email_format(user_data.email)
        except ValueError as e:
            raise ValidationError(str(e))

        if await self.user_repo.get_by_email(email):
            raise DuplicateResourceError("User", email)

        try:
            user = await self.user_repo.create_user(user_data.model_dump())
        except ValueError as e:
            raise ValidationError(str(e))

        logger.info(f"Registered user {user.email}")
        return user

    async def authenticate_user(self, email: str, password: str) -> User:
        """
        Authenticate user with email and password.

        Raises:
            ValidationError: If either credential is blank
            InvalidCredentialsError: If credentials are invalid
        """
        if not email or not email.strip():
            raise ValidationError("Email is required")

        if not password or not password.strip():
            raise ValidationError("Password is required")

        user = await self.user_repo.authenticate_user(email, password)
        if not user:
            logger.warning(f"Failed authentication attempt for email: {email}")
            raise InvalidCredentialsError()

        logger.info(f"User authenticated successfully: {user.email}")
        return user

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Authenticate user and create an access token.

        Returns:
            Tuple of (user, access_token)
        """
        user = await self.authenticate_user(email, password)
        return user, create_access_token(user_id=user.id, email=user.email)

    def resolve_user_id(self, token: str) -> uuid.UUID:
        """
        Decode an access token into the user id it was issued for.

        Raises:
            TokenExpiredError: If the token is expired
            InvalidTokenError: If the token is malformed or tampered with
        """
        try:
            payload = verify_token(token)
            return uuid.UUID(payload.user_id)
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except (JWTError, ValueError) as e:
            raise InvalidTokenError(str(e))

    async def get_current_user(self, token: str) -> User:
        """
        Get current user from access token.

        Raises:
            InvalidTokenError: If token is invalid
            TokenExpiredError: If token is expired
            NotFoundError: If user not found
            InactiveUserError: If user account is inactive
        """
        user = await self.get_user_by_id(self.resolve_user_id(token))

        if not user.is_active:
            raise InactiveUserError()

        return user

    async def get_user_by_id(self, user_id: Optional[uuid.UUID]) -> User:
        """
        Raises:
            NotFoundError: If user not found
        """
        if not user_id:
            raise ValidationError("User ID is required")

        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", str(user_id))

        return user
