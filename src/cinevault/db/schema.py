"""Database schema for Cinevault.

A single `movies` table. Check constraints back up the invariants the
API validates: every text field is non-empty and the rating stays
within [0, 10].
"""

from datetime import date, datetime, timezone

from sqlalchemy import CheckConstraint, Date, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Movie(Base):
    """A movie record with its hosted image URL.

    Invariant: 0 <= rating <= 10
    Invariant: seq increases with insertion order
    Invariant: title, description, genre, image_url are non-empty
    """

    __tablename__ = "movies"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movie_id: Mapped[str] = mapped_column(String(32), nullable=False, unique=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    genre: Mapped[str] = mapped_column(String(128), nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    release_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 10", name="ck_movie_rating_range"),
        CheckConstraint("length(title) > 0", name="ck_movie_title_present"),
        CheckConstraint("length(description) > 0", name="ck_movie_description_present"),
        CheckConstraint("length(genre) > 0", name="ck_movie_genre_present"),
        CheckConstraint("length(image_url) > 0", name="ck_movie_image_url_present"),
    )
