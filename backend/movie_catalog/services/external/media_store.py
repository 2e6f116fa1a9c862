"""
Media Store - Image hosting on Cloudinary
"""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from movie_catalog.core.config import Settings
from movie_catalog.core.exceptions import UploadError
from movie_catalog.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MediaUpload:
    """Result of a successful upload"""
    public_url: str
    public_id: str


class CloudinaryMediaStore:
    """Uploads images and deletes them by their public id.

    Credentials are passed on every SDK call, so the SDK's process-wide
    configuration is left untouched.
    """

    def __init__(
        self,
        cloud_name: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str],
        folder: Optional[str] = None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder

    @classmethod
    def from_settings(cls, settings: Settings) -> "CloudinaryMediaStore":
        return cls(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            folder=settings.CLOUDINARY_FOLDER,
        )

    def _credentials(self) -> Dict[str, Any]:
        missing = [
            name for name, value in (
                ("cloud_name", self.cloud_name),
                ("api_key", self.api_key),
                ("api_secret", self.api_secret),
            )
            if not value
        ]
        if missing:
            raise UploadError(f"Cloudinary credentials missing: {', '.join(missing)}")
        return {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
        }

    async def upload(self, file_path: Union[str, Path]) -> MediaUpload:
        """Upload a local image file"""

        options = self._credentials()
        if self.folder:
            options["folder"] = self.folder

        try:
            result = await asyncio.to_thread(cloudinary.uploader.upload, str(file_path), **options)
        except (CloudinaryError, OSError, ValueError) as e:
            logger.error("Image upload failed", error=str(e))
            raise UploadError(f"Image upload failed: {e}", original_error=e) from e

        public_url = result.get("secure_url")
        public_id = result.get("public_id")
        if not public_url or not public_id:
            raise UploadError("Image upload returned no URL")

        logger.info("Uploaded image", public_id=public_id)
        return MediaUpload(public_url=public_url, public_id=public_id)

    async def delete(self, public_id: str) -> None:
        """Delete a previously uploaded image"""

        try:
            result = await asyncio.to_thread(cloudinary.uploader.destroy, public_id, **self._credentials())
        except (CloudinaryError, OSError, ValueError) as e:
            logger.error("Image delete failed", public_id=public_id, error=str(e))
            raise UploadError(f"Image delete failed: {e}", original_error=e) from e

        outcome = result.get("result")
        if outcome == "not found":
            logger.warning("Image already gone from media host", public_id=public_id)
        elif outcome != "ok":
            raise UploadError(f"Image delete rejected: {outcome}")
        else:
            logger.info("Deleted image", public_id=public_id)
