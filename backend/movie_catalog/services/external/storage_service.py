"""
Storage Service - Scoped temporary files for uploaded images
"""

import os
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, List, Protocol

import aiofiles

from movie_catalog.core.config import Settings
from movie_catalog.core.exceptions import ValidationError
from movie_catalog.core.logging import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024


class UploadedFile(Protocol):
    """What the storage needs from a multipart upload (Starlette's UploadFile fits)"""

    filename: str | None

    async def read(self, size: int = -1) -> bytes: ...


class StorageService:
    """Writes uploads to the upload directory and removes them afterwards"""

    def __init__(self, upload_dir: Path, allowed_types: List[str], max_size: int):
        self.upload_dir = Path(upload_dir)
        self.allowed_types = [t.lower().lstrip(".") for t in allowed_types]
        self.max_size = max_size

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorageService":
        return cls(
            upload_dir=settings.UPLOAD_DIR,
            allowed_types=settings.ALLOWED_IMAGE_TYPES,
            max_size=settings.MAX_UPLOAD_SIZE,
        )

    def _generate_safe_filename(self, original_filename: str) -> str:
        """Unique name keeping the original extension"""
        _, ext = os.path.splitext(original_filename)
        ext = ext.lower()
        if ext.lstrip(".") not in self.allowed_types:
            raise ValidationError(f"Unsupported image type: {ext or 'none'}")
        return f"{uuid.uuid4().hex}{ext}"

    @asynccontextmanager
    async def temp_file(self, upload: UploadedFile) -> AsyncIterator[Path]:
        """Hold an upload as a local file for the duration of the block.

        The file is removed when the block exits, whether or not it raised.
        """
        filename = self._generate_safe_filename(upload.filename or "")
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        file_path = self.upload_dir / filename

        try:
            size = 0
            async with aiofiles.open(file_path, "wb") as f:
                while chunk := await upload.read(CHUNK_SIZE):
                    size += len(chunk)
                    if size > self.max_size:
                        raise ValidationError(f"Image exceeds {self.max_size} bytes")
                    await f.write(chunk)

            logger.debug("Saved temp upload", path=str(file_path), size=size)
            yield file_path
        finally:
            try:
                file_path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning("Failed to remove temp upload", path=str(file_path), error=str(e))
