"""Error taxonomy for Cinevault.

The store and the image gateway raise these; the API layer translates
them into HTTP responses. Nothing here is retried.
"""

from __future__ import annotations


class CinevaultError(Exception):
    """Base class for all Cinevault errors."""


class ConfigError(CinevaultError):
    """Invalid configuration value."""


class ValidationError(CinevaultError):
    """Missing or invalid required input (e.g. no file on create)."""


class NotFoundError(CinevaultError):
    """Identifier has no matching record."""


class MovieNotFoundError(NotFoundError):
    """No movie exists with the given identifier."""

    def __init__(self, movie_id: str):
        super().__init__(f"Movie not found: {movie_id}")
        self.movie_id = movie_id


class InvalidMovieIdError(NotFoundError):
    """Identifier is malformed and can never match a record."""

    def __init__(self, movie_id: str):
        super().__init__(f"Invalid movie id: {movie_id!r}")
        self.movie_id = movie_id


class UpstreamError(CinevaultError):
    """External image storage operation failed."""


class PersistenceError(CinevaultError):
    """Database operation failed (connectivity, constraint violation, ...)."""
