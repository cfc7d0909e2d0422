"""
Media hosting for uploaded images.

An uploader takes a local file path and returns the hosted asset, or None
when the upload failed. ``upload_all`` fans uploads out concurrently and
removes every hosted asset again if any single upload fails.
"""

import asyncio
import logging
import uuid
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Sequence

import aiofiles
import aiofiles.os
import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from app.config import get_settings
from app.utils.exceptions import UploadError

logger = logging.getLogger(__name__)


class UploadedMedia:
    """A hosted asset: public URL plus the host's identifier for deletion."""

    def __init__(self, url: str, public_id: str):
        self.url = url
        self.public_id = public_id

    def __repr__(self) -> str:
        return f"<UploadedMedia(public_id={self.public_id}, url={self.url})>"


class MediaUploader:
    """Interface for media hosts."""

    async def upload(self, path: Path) -> Optional[UploadedMedia]:
        raise NotImplementedError

    async def delete(self, media: UploadedMedia) -> None:
        raise NotImplementedError


class LocalMediaUploader(MediaUploader):
    """Stores files under a local media directory served at ``base_url``."""

    CHUNK_SIZE = 64 * 1024

    def __init__(self, media_root: str, base_url: str):
        self.media_root = Path(media_root)
        self.base_url = base_url.rstrip("/")
        self.media_root.mkdir(parents=True, exist_ok=True)

    async def upload(self, path: Path) -> Optional[UploadedMedia]:
        public_id = f"{uuid.uuid4().hex}{Path(path).suffix.lower()}"
        target = self.media_root / public_id
        try:
            async with aiofiles.open(path, "rb") as source, aiofiles.open(target, "wb") as dest:
                while True:
                    chunk = await source.read(self.CHUNK_SIZE)
                    if not chunk:
                        break
                    await dest.write(chunk)
        except OSError as e:
            logger.error(f"Failed to store {path} in media root: {e}")
            if target.exists():
                target.unlink()
            return None

        logger.debug(f"Stored {path} as {public_id}")
        return UploadedMedia(url=f"{self.base_url}/{public_id}", public_id=public_id)

    async def delete(self, media: UploadedMedia) -> None:
        target = self.media_root / media.public_id
        try:
            await aiofiles.os.remove(target)
            logger.debug(f"Removed media {media.public_id}")
        except FileNotFoundError:
            logger.warning(f"Media {media.public_id} already removed")


class CloudinaryUploader(MediaUploader):
    """
    Uploads images to Cloudinary with the official SDK.

    The SDK is blocking, so each call runs in a worker thread.
    """

    def __init__(self, cloud_name: str, api_key: str, api_secret: str, timeout: float = 30.0):
        self.timeout = timeout
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True
        )

    async def upload(self, path: Path) -> Optional[UploadedMedia]:
        try:
            result = await asyncio.to_thread(
                cloudinary.uploader.upload,
                str(path),
                resource_type="auto",
                timeout=self.timeout
            )
        except (cloudinary.exceptions.Error, OSError) as e:
            logger.error(f"Cloudinary upload failed for {path}: {e}")
            return None

        if not result or "secure_url" not in result:
            logger.error(f"Cloudinary upload for {path} returned no URL: {result!r}")
            return None

        return UploadedMedia(url=result["secure_url"], public_id=result["public_id"])

    async def delete(self, media: UploadedMedia) -> None:
        result = await asyncio.to_thread(
            cloudinary.uploader.destroy,
            media.public_id,
            timeout=self.timeout
        )
        outcome = (result or {}).get("result")
        if outcome == "not found":
            logger.warning(f"Media {media.public_id} already removed")
        elif outcome != "ok":
            logger.error(f"Cloudinary destroy failed for {media.public_id}: {result!r}")
            raise UploadError(f"Failed to remove media {media.public_id}")


async def upload_all(uploader: MediaUploader, paths: Sequence[Path]) -> List[UploadedMedia]:
    """
    Upload every file concurrently and return the results in input order.

    If any upload fails, the uploads that did succeed are deleted from the
    host before UploadError is raised, so nothing is left behind.

    Raises:
        UploadError: If at least one upload failed
    """
    results = await asyncio.gather(
        *(uploader.upload(path) for path in paths),
        return_exceptions=True
    )

    uploaded = [result for result in results if isinstance(result, UploadedMedia)]
    if len(uploaded) == len(results):
        return uploaded

    for path, result in zip(paths, results):
        if isinstance(result, BaseException):
            logger.error(f"Upload of {path} raised: {result!r}")

    logger.warning(f"{len(results) - len(uploaded)} of {len(results)} uploads failed, removing {len(uploaded)}")
    cleanup = await asyncio.gather(
        *(uploader.delete(media) for media in uploaded),
        return_exceptions=True
    )
    for media, outcome in zip(uploaded, cleanup):
        if isinstance(outcome, BaseException):
            logger.error(f"Could not remove uploaded media {media.public_id}: {outcome!r}")

    raise UploadError("Failed to upload some images")


async def discard_media(uploader: MediaUploader, uploaded: Sequence[UploadedMedia]) -> None:
    """Remove hosted assets whose record was never stored or was replaced."""
    for media in uploaded:
        try:
            await uploader.delete(media)
        except Exception as e:
            logger.error(f"Could not remove uploaded media {media.public_id}: {e}")


@lru_cache()
def get_media_uploader() -> MediaUploader:
    """Build the configured media uploader once per process."""
    settings = get_settings()
    if settings.media_backend == "cloudinary":
        return CloudinaryUploader(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            timeout=settings.media_upload_timeout
        )
    return LocalMediaUploader(settings.media_root, settings.media_base_url)
