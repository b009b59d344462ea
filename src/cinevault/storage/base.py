"""Base image gateway interface.

Gateway adapter boundary:
- Narrow interface: `upload_image(bytes) -> UploadedImage`
- Forbidden: DB writes, HTTP response shaping
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class UploadedImage:
    """Result of a successful upload."""

    secure_url: str
    public_id: str


class ImageGatewayBase(ABC):
    """Abstract base class for hosted image storage.

    Gateways hold no retry policy and do no size/type validation; the
    storage provider decides what it accepts. Any failure surfaces as
    UpstreamError.
    """

    @abstractmethod
    def upload_image(self, data: bytes, filename: str | None = None) -> UploadedImage:
        """Upload an in-memory image buffer.

        Args:
            data: Raw image bytes.
            filename: Original client filename, informational only.

        Returns:
            UploadedImage with a publicly resolvable HTTPS URL.

        Raises:
            UpstreamError: If the upload fails.
        """
        pass

    @abstractmethod
    def discard_image(self, public_id: str) -> None:
        """Remove a previously uploaded image.

        Args:
            public_id: Identifier returned by upload_image.

        Raises:
            UpstreamError: If the removal fails.
        """
        pass
