"""
User profile service: profile reads, updates and profile pictures.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import UploadFile
from typing import Optional
from app.config import get_settings
from app.models.user import User
from app.repositories.user import UserRepository
from app.schemas.user import UserUpdate
from app.services.media import MediaUploader, UploadedMedia, discard_media, get_media_uploader, upload_all
from app.utils.exceptions import NotFoundError
from app.utils.file_utils import TempUploadStorage
import uuid
import logging

logger = logging.getLogger(__name__)


class UserService:
    """Operations on the authenticated user's own profile."""

    def __init__(
        self,
        db_session: AsyncSession,
        media_uploader: Optional[MediaUploader] = None,
        temp_storage: Optional[TempUploadStorage] = None
    ):
        self.db = db_session
        self.settings = get_settings()
        self.user_repo = UserRepository(db_session)
        self.media_uploader = media_uploader or get_media_uploader()
        self.temp_storage = temp_storage or TempUploadStorage()

    async def get_user(self, user_id: uuid.UUID) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", detail="User not found")
        return user

    async def update_user(self, user_id: uuid.UUID, user_data: UserUpdate) -> User:
        """Apply the fields present in the request body."""
        user = await self.get_user(user_id)
        update_data = user_data.provided_fields()
        if not update_data:
            return user

        user = await self.user_repo.update(user, update_data)
        logger.info(f"Updated profile of user {user_id}: {sorted(update_data)}")
        return user

    async def upload_profile_picture(self, user_id: uuid.UUID, file: UploadFile) -> User:
        """
        Replace the user's profile picture.

        The previous picture is removed from the media host once the new one
        is stored; a failed store removes the new upload instead.

        Raises:
            UnsupportedFileTypeError: If the file is not an image
            FileSizeExceededError: If the file is larger than the profile picture limit
            UploadError: If the media host rejected the file
        """
        user = await self.get_user(user_id)

        path = await self.temp_storage.save(file, self.settings.max_profile_picture_size)
        try:
            uploaded = await upload_all(self.media_uploader, [path])
        finally:
            await self.temp_storage.cleanup([path])

        previous = None
        if user.profile_picture_id:
            previous = UploadedMedia(url=user.profile_picture, public_id=user.profile_picture_id)

        media = uploaded[0]
        try:
            user = await self.user_repo.update(
                user, {"profile_picture": media.url, "profile_picture_id": media.public_id}
            )
        except Exception:
            await discard_media(self.media_uploader, [media])
            raise

        if previous is not None:
            await discard_media(self.media_uploader, [previous])

        logger.info(f"User {user_id} uploaded a new profile picture")
        return user
