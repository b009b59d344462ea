"""Pydantic models for the Cinevault API.

Field names are snake_case in Python and camelCase on the wire
(imageUrl, releaseDate), matching the JSON shape clients expect.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from cinevault.core.errors import ValidationError
from cinevault.models.domain import (
    RATING_MAX,
    RATING_MIN,
    MovieChanges,
    MovieEntity,
    MovieFields,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class MovieForm(_CamelModel):
    """Form fields required to create a movie."""

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    genre: str = Field(min_length=1)
    rating: float = Field(ge=RATING_MIN, le=RATING_MAX)
    release_date: date


class MovieUpdateForm(_CamelModel):
    """Form fields accepted when updating a movie. All optional."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    genre: str | None = Field(default=None, min_length=1)
    rating: float | None = Field(default=None, ge=RATING_MIN, le=RATING_MAX)
    release_date: date | None = None


class MovieOut(_CamelModel):
    """Movie as returned by the API."""

    id: str
    title: str
    description: str
    image_url: str
    genre: str
    rating: float
    release_date: date

    @classmethod
    def from_entity(cls, entity: MovieEntity) -> MovieOut:
        """Convert a domain entity to its API representation."""
        return cls(
            id=entity.movie_id,
            title=entity.title,
            description=entity.description,
            image_url=entity.image_url,
            genre=entity.genre,
            rating=entity.rating,
            release_date=entity.release_date,
        )


class MessageResponse(BaseModel):
    """Plain message body, with an error detail for failures."""

    message: str
    error: str | None = None


def _describe(error: PydanticValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "body"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def parse_movie_form(raw: Mapping[str, Any]) -> MovieFields:
    """Validate raw form values for a new movie.

    Args:
        raw: Form values keyed by wire name (title, releaseDate, ...).

    Returns:
        MovieFields with coerced values.

    Raises:
        ValidationError: If a field is missing, empty, or out of range.
    """
    try:
        form = MovieForm.model_validate(
            {key: value for key, value in raw.items() if value is not None}
        )
    except PydanticValidationError as e:
        raise ValidationError(_describe(e)) from e

    return MovieFields(
        title=form.title,
        description=form.description,
        genre=form.genre,
        rating=form.rating,
        release_date=form.release_date,
    )


def parse_movie_update_form(raw: Mapping[str, Any]) -> MovieChanges:
    """Validate raw form values for a movie update.

    Missing and blank values mean "keep the previous value"; they are
    dropped before validation so they never clear a field.

    Args:
        raw: Form values keyed by wire name.

    Returns:
        MovieChanges with one explicit optional per attribute.

    Raises:
        ValidationError: If a supplied value is invalid or out of range.
    """
    supplied = {
        key: value
        for key, value in raw.items()
        if value is not None and not (isinstance(value, str) and not value.strip())
    }
    try:
        form = MovieUpdateForm.model_validate(supplied)
    except PydanticValidationError as e:
        raise ValidationError(_describe(e)) from e

    return MovieChanges(
        title=form.title,
        description=form.description,
        genre=form.genre,
        rating=form.rating,
        release_date=form.release_date,
    )
