from .entities import Director, Movie, MpaaRating
from .specifications import (
    MONTHS_BEFORE_DVD_IS_OUT,
    AvailableOnCDSpecification,
    MovieDirectedBySpecification,
    MovieForKidsSpecification,
    MovieRatedAtMostSpecification,
    ReleasedMonthsAgoSpecification,
)

__all__ = [
    # Entities
    "Movie",
    "Director",
    "MpaaRating",
    # Specifications
    "MovieRatedAtMostSpecification",
    "MovieForKidsSpecification",
    "ReleasedMonthsAgoSpecification",
    "AvailableOnCDSpecification",
    "MovieDirectedBySpecification",
    "MONTHS_BEFORE_DVD_IS_OUT",
]
