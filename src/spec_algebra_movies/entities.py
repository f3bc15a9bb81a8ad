"""Example entity model the movie specifications read from."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import IntEnum

from pydantic import BaseModel, ConfigDict, field_validator


class MpaaRating(IntEnum):
    """MPAA film ratings, ordered from least to most restrictive."""

    G = 1
    PG = 2
    PG13 = 3
    R = 4


class Director(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str


class Movie(BaseModel):
    """
    A movie as the catalogue sees it. Immutable.

    ``release_date`` is always timezone-aware (UTC). A naive value is read
    as local wall-clock time, the way ``datetime.now()`` produces it.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    release_date: datetime
    mpaa_rating: MpaaRating
    genre: str = ""
    rating: float = 0.0
    director: Director

    @field_validator("release_date")
    @classmethod
    def release_date_in_utc(cls, value: datetime) -> datetime:
        return value.astimezone(timezone.utc)
