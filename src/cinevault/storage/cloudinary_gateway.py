"""Cloudinary image gateway.

Uploads in-memory buffers with `cloudinary.uploader.upload` and returns
the `secure_url` of the stored image. Credentials are passed on every
call instead of through the SDK's global configuration, so several
gateways can coexist in one process.
"""

from __future__ import annotations

import io
import logging
import time

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from cinevault.config import Settings
from cinevault.core.errors import ConfigError, UpstreamError
from cinevault.storage.base import ImageGatewayBase, UploadedImage

logger = logging.getLogger(__name__)


class CloudinaryImageGateway(ImageGatewayBase):
    """Gateway backed by Cloudinary's upload API."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str | None = None,
    ):
        """Initialize gateway.

        Args:
            cloud_name: Cloudinary account name.
            api_key: API access key.
            api_secret: API secret.
            folder: Optional folder to upload into.
        """
        self.cloud_name = cloud_name
        self.folder = folder
        self._credentials = {
            "cloud_name": cloud_name,
            "api_key": api_key,
            "api_secret": api_secret,
        }

    @classmethod
    def from_settings(cls, settings: Settings) -> CloudinaryImageGateway:
        """Build a gateway from application settings.

        Raises:
            ConfigError: If any credential is missing.
        """
        missing = [
            name
            for name, value in (
                ("CLOUDINARY_CLOUD_NAME", settings.cloudinary_cloud_name),
                ("CLOUDINARY_API_KEY", settings.cloudinary_api_key),
                ("CLOUDINARY_API_SECRET", settings.cloudinary_api_secret),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"Missing Cloudinary settings: {', '.join(missing)}")

        return cls(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            folder=settings.cloudinary_folder,
        )

    def upload_image(self, data: bytes, filename: str | None = None) -> UploadedImage:
        options = dict(self._credentials, resource_type="image", secure=True)
        if self.folder:
            options["folder"] = self.folder

        start_time = time.time()
        try:
            result = cloudinary.uploader.upload(io.BytesIO(data), **options)
        except (CloudinaryError, OSError) as e:
            raise UpstreamError(f"Cloudinary upload failed: {e}") from e

        latency_ms = int((time.time() - start_time) * 1000)

        secure_url = result.get("secure_url")
        public_id = result.get("public_id")
        if not secure_url or not public_id:
            raise UpstreamError("Cloudinary upload returned no secure_url")

        logger.info(f"Uploaded {filename or 'image'} ({len(data)} bytes) in {latency_ms}ms")
        return UploadedImage(secure_url=secure_url, public_id=public_id)

    def discard_image(self, public_id: str) -> None:
        try:
            result = cloudinary.uploader.destroy(
                public_id, resource_type="image", invalidate=True, **self._credentials
            )
        except (CloudinaryError, OSError) as e:
            raise UpstreamError(f"Cloudinary destroy failed for {public_id}: {e}") from e

        if result.get("result") not in ("ok", "not found"):
            raise UpstreamError(f"Cloudinary destroy failed for {public_id}: {result}")
