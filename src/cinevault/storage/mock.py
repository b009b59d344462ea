"""Mock image gateway for local runs and testing.

Keeps uploaded bytes in memory and hands out Cloudinary-shaped URLs
without calling the real service.
"""

from __future__ import annotations

import hashlib
import itertools

from cinevault.core.errors import UpstreamError
from cinevault.storage.base import ImageGatewayBase, UploadedImage

MOCK_URL_ROOT = "https://res.cloudinary.com"


class MockImageGateway(ImageGatewayBase):
    """In-memory gateway.

    Each upload gets a distinct public_id, even for identical bytes, since
    the real gateway does no deduplication either. Set `fail_uploads` or
    `fail_discards` to simulate provider outages.
    """

    def __init__(self, cloud_name: str = "mock"):
        """Initialize mock gateway.

        Args:
            cloud_name: Account name embedded in generated URLs.
        """
        self.cloud_name = cloud_name
        self.images: dict[str, bytes] = {}
        self.discarded: list[str] = []
        self.upload_count = 0
        self.fail_uploads = False
        self.fail_discards = False
        self._counter = itertools.count(1)

    def _compute_public_id(self, data: bytes) -> str:
        digest = hashlib.sha256(data).hexdigest()[:12]
        return f"{digest}-{next(self._counter)}"

    def upload_image(self, data: bytes, filename: str | None = None) -> UploadedImage:
        if self.fail_uploads:
            raise UpstreamError("Mock upload failure")

        public_id = self._compute_public_id(data)
        self.images[public_id] = data
        self.upload_count += 1

        return UploadedImage(
            secure_url=f"{MOCK_URL_ROOT}/{self.cloud_name}/image/upload/{public_id}",
            public_id=public_id,
        )

    def discard_image(self, public_id: str) -> None:
        if self.fail_discards:
            raise UpstreamError(f"Mock discard failure for {public_id}")

        self.images.pop(public_id, None)
        self.discarded.append(public_id)
