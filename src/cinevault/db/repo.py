"""Repository pattern for movie records.

Encapsulates all SQLAlchemy queries, keeping the catalog and API layers
free of ORM details. Returns domain models (not SQLAlchemy entities) to
external callers. Writes commit before returning; any database failure
rolls the session back and surfaces as PersistenceError.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Generator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cinevault.core.errors import (
    InvalidMovieIdError,
    MovieNotFoundError,
    PersistenceError,
    ValidationError,
)
from cinevault.core.identity import is_valid_movie_id, new_movie_id
from cinevault.db.schema import Movie
from cinevault.models.domain import (
    RATING_MAX,
    RATING_MIN,
    MovieChanges,
    MovieEntity,
    MovieFields,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = [
    "DbSession",
    "create_movie",
    "delete_movie",
    "get_movie",
    "list_movies",
    "update_movie",
]

logger = logging.getLogger(__name__)


# ============================================================================
# Converters / guards
# ============================================================================


def _movie_to_entity(movie: Movie) -> MovieEntity:
    """Convert SQLAlchemy Movie to domain entity."""
    return MovieEntity(
        movie_id=movie.movie_id,
        title=movie.title,
        description=movie.description,
        image_url=movie.image_url,
        genre=movie.genre,
        rating=movie.rating,
        release_date=movie.release_date,
    )


def _check_record(
    title: str | None,
    description: str | None,
    image_url: str | None,
    genre: str | None,
    rating: float | None,
    release_date: object,
) -> None:
    """Reject records that would break the all-fields-populated invariant."""
    text_fields = {
        "title": title,
        "description": description,
        "imageUrl": image_url,
        "genre": genre,
    }
    missing = [name for name, value in text_fields.items() if not value or not value.strip()]
    if rating is None:
        missing.append("rating")
    if release_date is None:
        missing.append("releaseDate")
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    if not RATING_MIN <= rating <= RATING_MAX:
        raise ValidationError(f"rating must be between {RATING_MIN} and {RATING_MAX}, got {rating}")


@contextmanager
def _persistence_guard(session: DbSession, action: str) -> Generator[None, None, None]:
    """Translate SQLAlchemy failures into PersistenceError."""
    try:
        yield
    except SQLAlchemyError as e:
        session.rollback()
        logger.warning(f"Database failure while trying to {action}: {e}")
        raise PersistenceError(f"Failed to {action}: {e}") from e


def _load_movie(session: DbSession, movie_id: str) -> Movie:
    """Fetch the ORM row for movie_id or raise."""
    if not is_valid_movie_id(movie_id):
        raise InvalidMovieIdError(movie_id)

    movie = session.query(Movie).filter(Movie.movie_id == movie_id).first()
    if movie is None:
        raise MovieNotFoundError(movie_id)
    return movie


# ============================================================================
# Movie Repository
# ============================================================================


def create_movie(session: DbSession, fields: MovieFields, image_url: str) -> MovieEntity:
    """Persist a new movie and return it with its assigned identifier.

    Raises:
        ValidationError: If a field is missing, empty, or rating is out of range.
        PersistenceError: If the database write fails.
    """
    _check_record(
        fields.title,
        fields.description,
        image_url,
        fields.genre,
        fields.rating,
        fields.release_date,
    )

    movie = Movie(
        movie_id=new_movie_id(),
        title=fields.title,
        description=fields.description,
        image_url=image_url,
        genre=fields.genre,
        rating=fields.rating,
        release_date=fields.release_date,
    )
    with _persistence_guard(session, "create movie"):
        session.add(movie)
        session.commit()

    logger.info(f"Created movie {movie.movie_id}")
    return _movie_to_entity(movie)


def list_movies(session: DbSession) -> list[MovieEntity]:
    """Get all movies in insertion order."""
    with _persistence_guard(session, "list movies"):
        movies = session.query(Movie).order_by(Movie.seq).all()
    return [_movie_to_entity(m) for m in movies]


def get_movie(session: DbSession, movie_id: str) -> MovieEntity:
    """Get movie by ID.

    Raises:
        InvalidMovieIdError: If movie_id is malformed.
        MovieNotFoundError: If no movie has this ID.
        PersistenceError: If the database read fails.
    """
    with _persistence_guard(session, "fetch movie"):
        movie = _load_movie(session, movie_id)
    return _movie_to_entity(movie)


def update_movie(
    session: DbSession,
    movie_id: str,
    changes: MovieChanges,
    image_url: str | None = None,
) -> MovieEntity:
    """Apply a per-field fallback merge to an existing movie.

    Attributes left as None in changes keep their stored value. image_url
    replaces the stored URL only when given.

    Raises:
        InvalidMovieIdError: If movie_id is malformed.
        MovieNotFoundError: If no movie has this ID.
        ValidationError: If the merged record would be invalid.
        PersistenceError: If the database write fails.
    """
    with _persistence_guard(session, "update movie"):
        movie = _load_movie(session, movie_id)

        merged = {
            "title": movie.title,
            "description": movie.description,
            "image_url": image_url if image_url is not None else movie.image_url,
            "genre": movie.genre,
            "rating": movie.rating,
            "release_date": movie.release_date,
        }
        merged.update(changes.supplied())
        _check_record(**merged)

        for name, value in merged.items():
            setattr(movie, name, value)
        session.commit()

    logger.info(f"Updated movie {movie_id}")
    return _movie_to_entity(movie)


def delete_movie(session: DbSession, movie_id: str) -> None:
    """Delete a movie permanently.

    Raises:
        InvalidMovieIdError: If movie_id is malformed.
        MovieNotFoundError: If no movie has this ID.
        PersistenceError: If the database write fails.
    """
    with _persistence_guard(session, "delete movie"):
        movie = _load_movie(session, movie_id)
        session.delete(movie)
        session.commit()

    logger.info(f"Deleted movie {movie_id}")
