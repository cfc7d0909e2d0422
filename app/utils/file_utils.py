"""
File upload utilities for image validation and temporary storage.

Incoming multipart files are validated and written to a temporary
directory; the media uploader then works from those local paths.
"""

import io
import uuid
from pathlib import Path
from typing import Iterable, Optional

from PIL import Image, UnidentifiedImageError
import aiofiles
import aiofiles.os
from fastapi import UploadFile

from app.config import get_settings
from app.utils.exceptions import ValidationError, UnsupportedFileTypeError, FileSizeExceededError
import logging

logger = logging.getLogger(__name__)


class FileValidator:
    """Utility class for image upload validation."""

    @classmethod
    def validate_mime_type(cls, mime_type: Optional[str]) -> str:
        """
        Only image MIME types are accepted.

        Raises:
            UnsupportedFileTypeError: If the type is missing or not an image
        """
        if not mime_type or not mime_type.startswith("image/"):
            raise UnsupportedFileTypeError()
        return mime_type

    @classmethod
    def validate_file_size(cls, file_size: int, max_size: int) -> int:
        """
        Validate file size.

        Raises:
            ValidationError: If the file is empty or too large
        """
        if file_size <= 0:
            raise ValidationError("File size must be greater than 0")
        if file_size > max_size:
            raise FileSizeExceededError(file_size, max_size)
        return file_size

    @classmethod
    def validate_image_content(cls, content: bytes) -> None:
        """
        Check the bytes decode as an image.

        Raises:
            ValidationError: If the content is not a readable image
        """
        try:
            with Image.open(io.BytesIO(content)) as img:
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise ValidationError(f"Invalid image file: {str(e)}")


class TempUploadStorage:
    """Writes validated uploads to the temporary upload directory."""

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir or get_settings().upload_tmp_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def generate_unique_filename(self, original_filename: Optional[str]) -> str:
        """Generate a unique filename while preserving the extension."""
        extension = Path(original_filename or "").suffix.lower()
        return f"{uuid.uuid4()}{extension}"

    async def save(self, file: UploadFile, max_size: int) -> Path:
        """
        Validate an uploaded image and write it to a temporary file.

        Args:
            file: Uploaded file
            max_size: Maximum accepted size in bytes

        Returns:
            Path of the temporary file
        """
        FileValidator.validate_mime_type(file.content_type)

        await file.seek(0)
        content = await file.read()

        FileValidator.validate_file_size(len(content), max_size)
        FileValidator.validate_image_content(content)

        path = self.base_dir / self.generate_unique_filename(file.filename)
        async with aiofiles.open(path, "wb") as f:
            await f.write(content)

        logger.debug(f"Saved upload {file.filename} to {path}")
        return path

    async def cleanup(self, paths: Iterable[Path]) -> None:
        """Remove temporary files, ignoring ones already gone."""
        for path in paths:
            try:
                await aiofiles.os.remove(path)
            except FileNotFoundError:
                pass
