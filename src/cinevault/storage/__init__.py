"""Hosted image storage gateways."""

from cinevault.storage.base import ImageGatewayBase, UploadedImage
from cinevault.storage.mock import MockImageGateway

__all__ = ["ImageGatewayBase", "MockImageGateway", "UploadedImage"]
