"""Domain models for Cinevault.

Pure Python dataclasses representing movie records and the inputs that
create or change them. These models are independent of SQLAlchemy and
pydantic, keeping the store and the catalog free of transport concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date

RATING_MIN = 0
RATING_MAX = 10


@dataclass
class MovieEntity:
    """Domain model for a stored movie."""

    movie_id: str
    title: str
    description: str
    image_url: str
    genre: str
    rating: float
    release_date: date


@dataclass
class MovieFields:
    """Client-supplied fields for a new movie.

    The image URL is not part of this: it only comes from an upload.
    """

    title: str
    description: str
    genre: str
    rating: float
    release_date: date


@dataclass
class MovieChanges:
    """Client-supplied changes for an existing movie.

    Each attribute is an explicit optional: None means "keep the previous
    value". Any other value, including a rating of 0, replaces it.
    """

    title: str | None = None
    description: str | None = None
    genre: str | None = None
    rating: float | None = None
    release_date: date | None = None

    def supplied(self) -> dict[str, object]:
        """Return only the attributes that carry a new value."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }
