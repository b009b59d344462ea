"""Movies API endpoints.

POST /api/movies - Create movie (multipart, image required)
GET /api/movies - List movies
GET /api/movies/{movie_id} - Get movie detail
PUT /api/movies/{movie_id} - Update movie (multipart, all optional)
DELETE /api/movies/{movie_id} - Delete movie
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile

from cinevault.api.app import ApiError, get_db_session, get_image_gateway
from cinevault.catalog import movies as catalog
from cinevault.catalog.movies import ImageUpload
from cinevault.core.errors import CinevaultError, NotFoundError, ValidationError
from cinevault.db import repo
from cinevault.db.repo import DbSession
from cinevault.models.types import (
    MessageResponse,
    MovieOut,
    parse_movie_form,
    parse_movie_update_form,
)
from cinevault.storage.base import ImageGatewayBase

router = APIRouter(tags=["movies"])

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Movie not found"


def _read_image(image: UploadFile | None) -> ImageUpload | None:
    """Buffer an uploaded file in memory. Returns None if nothing was sent."""
    if image is None:
        return None

    data = image.file.read()
    if not image.filename and not data:
        return None

    logger.info(f"File received: {image.filename} ({len(data)} bytes, {image.content_type})")
    return ImageUpload(data=data, filename=image.filename)


@router.post("/movies", response_model=MovieOut, status_code=201)
def create_movie(
    title: str | None = Form(None),
    description: str | None = Form(None),
    genre: str | None = Form(None),
    rating: str | None = Form(None),
    release_date: str | None = Form(None, alias="releaseDate"),
    image: UploadFile | None = File(None),
    session: DbSession = Depends(get_db_session),
    gateway: ImageGatewayBase = Depends(get_image_gateway),
) -> MovieOut:
    """Create a movie, uploading its image first.

    Raises:
        ApiError: 400 if no file or invalid fields, 500 if upload or
            database write fails.
    """
    upload = _read_image(image)
    if upload is None:
        raise ApiError(400, "No file uploaded")

    logger.info(f"Body data: title={title!r} genre={genre!r} rating={rating!r}")

    try:
        fields = parse_movie_form(
            {
                "title": title,
                "description": description,
                "genre": genre,
                "rating": rating,
                "releaseDate": release_date,
            }
        )
    except ValidationError as e:
        raise ApiError(400, "Invalid movie data", str(e)) from e

    try:
        movie = catalog.create_movie(session, gateway, fields, upload)
    except CinevaultError as e:
        logger.exception("Error creating movie")
        raise ApiError(500, "Error uploading image", str(e)) from e

    return MovieOut.from_entity(movie)


@router.get("/movies", response_model=list[MovieOut])
def list_movies(session: DbSession = Depends(get_db_session)) -> list[MovieOut]:
    """List all movies in insertion order."""
    try:
        movies = repo.list_movies(session)
    except CinevaultError as e:
        raise ApiError(500, "Error fetching movies", str(e)) from e

    return [MovieOut.from_entity(m) for m in movies]


@router.get("/movies/{movie_id}", response_model=MovieOut)
def get_movie(
    movie_id: str,
    session: DbSession = Depends(get_db_session),
) -> MovieOut:
    """Get movie detail.

    Malformed identifiers are reported as not found.
    """
    try:
        movie = repo.get_movie(session, movie_id)
    except NotFoundError as e:
        raise ApiError(404, NOT_FOUND_MESSAGE) from e
    except CinevaultError as e:
        raise ApiError(500, "Error fetching movie", str(e)) from e

    return MovieOut.from_entity(movie)


@router.put("/movies/{movie_id}", response_model=MovieOut)
def update_movie(
    movie_id: str,
    title: str | None = Form(None),
    description: str | None = Form(None),
    genre: str | None = Form(None),
    rating: str | None = Form(None),
    release_date: str | None = Form(None, alias="releaseDate"),
    image: UploadFile | None = File(None),
    session: DbSession = Depends(get_db_session),
    gateway: ImageGatewayBase = Depends(get_image_gateway),
) -> MovieOut:
    """Update a movie; omitted or blank fields keep their stored values.

    Raises:
        ApiError: 404 if the movie does not exist, 400 on any other failure.
    """
    try:
        changes = parse_movie_update_form(
            {
                "title": title,
                "description": description,
                "genre": genre,
                "rating": rating,
                "releaseDate": release_date,
            }
        )
        movie = catalog.update_movie(session, gateway, movie_id, changes, _read_image(image))
    except NotFoundError as e:
        raise ApiError(404, NOT_FOUND_MESSAGE) from e
    except CinevaultError as e:
        logger.warning(f"Error updating movie {movie_id}: {e}")
        raise ApiError(400, "Error updating movie", str(e)) from e

    return MovieOut.from_entity(movie)


@router.delete("/movies/{movie_id}", response_model=MessageResponse, response_model_exclude_none=True)
def delete_movie(
    movie_id: str,
    session: DbSession = Depends(get_db_session),
) -> MessageResponse:
    """Delete a movie permanently."""
    try:
        repo.delete_movie(session, movie_id)
    except NotFoundError as e:
        raise ApiError(404, NOT_FOUND_MESSAGE) from e
    except CinevaultError as e:
        raise ApiError(500, "Error deleting movie", str(e)) from e

    return MessageResponse(message="Movie deleted successfully")
