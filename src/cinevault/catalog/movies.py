"""Movie creation and update with hosted images.

Composes the image gateway and the movie repository: upload first, then
persist the returned URL with the form fields. The two steps are not
transactional. If the database write fails after a successful upload,
the fresh image is discarded on a best-effort basis and the original
error is re-raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cinevault.core.errors import CinevaultError, UpstreamError, ValidationError
from cinevault.db import repo
from cinevault.db.repo import DbSession
from cinevault.models.domain import MovieChanges, MovieEntity, MovieFields
from cinevault.storage.base import ImageGatewayBase, UploadedImage

logger = logging.getLogger(__name__)


@dataclass
class ImageUpload:
    """Image file received from a client, fully buffered in memory."""

    data: bytes
    filename: str | None = None


def _discard_orphan(gateway: ImageGatewayBase, uploaded: UploadedImage) -> None:
    """Remove an image whose record could not be written."""
    try:
        gateway.discard_image(uploaded.public_id)
        logger.info(f"Discarded orphaned image {uploaded.public_id}")
    except UpstreamError as e:
        logger.warning(f"Could not discard orphaned image {uploaded.public_id}: {e}")


def _upload(gateway: ImageGatewayBase, image: ImageUpload) -> UploadedImage:
    logger.info(f"Uploading {image.filename or 'image'} ({len(image.data)} bytes)")
    uploaded = gateway.upload_image(image.data, filename=image.filename)
    logger.info(f"Upload result: {uploaded.secure_url}")
    return uploaded


def create_movie(
    session: DbSession,
    gateway: ImageGatewayBase,
    fields: MovieFields,
    image: ImageUpload | None,
) -> MovieEntity:
    """Upload the image and create the movie record.

    Args:
        session: Database session.
        gateway: Image storage gateway.
        fields: Validated movie fields.
        image: Uploaded image; required.

    Returns:
        The stored movie, with imageUrl from the upload.

    Raises:
        ValidationError: If no image was supplied.
        UpstreamError: If the upload fails (nothing is persisted).
        PersistenceError: If the database write fails.
    """
    if image is None:
        raise ValidationError("No file uploaded")

    uploaded = _upload(gateway, image)

    try:
        return repo.create_movie(session, fields, uploaded.secure_url)
    except CinevaultError:
        _discard_orphan(gateway, uploaded)
        raise


def update_movie(
    session: DbSession,
    gateway: ImageGatewayBase,
    movie_id: str,
    changes: MovieChanges,
    image: ImageUpload | None = None,
) -> MovieEntity:
    """Apply changes to a movie, replacing its image if one is supplied.

    Existence is checked before any upload, so a missing movie never
    causes an upload. Without an image the stored imageUrl is kept.

    Args:
        session: Database session.
        gateway: Image storage gateway.
        movie_id: Movie to update.
        changes: Per-field changes (None keeps the stored value).
        image: Optional replacement image.

    Returns:
        The updated movie.

    Raises:
        NotFoundError: If the movie does not exist.
        UpstreamError: If the upload fails.
        ValidationError: If the merged record would be invalid.
        PersistenceError: If the database write fails.
    """
    repo.get_movie(session, movie_id)

    if image is None:
        return repo.update_movie(session, movie_id, changes)

    uploaded = _upload(gateway, image)

    try:
        return repo.update_movie(session, movie_id, changes, image_url=uploaded.secure_url)
    except CinevaultError:
        _discard_orphan(gateway, uploaded)
        raise
