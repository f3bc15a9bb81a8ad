"""
Leaf specifications over :class:`Movie`.

Every leaf pairs an explicit evaluator with a structured
:class:`~spec_algebra.tree.Condition`, so it can be checked in memory
and also translated into a query filter.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from spec_algebra import Condition, PredicateTree, Specification, SpecificationOperator
from spec_algebra.utils import add_months

from .entities import Movie, MpaaRating

if TYPE_CHECKING:
    from collections.abc import Callable

# A DVD / CD release follows the theatrical one by this many months.
MONTHS_BEFORE_DVD_IS_OUT = 6


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MovieRatedAtMostSpecification(Specification[Movie]):
    """The movie's MPAA rating is ``ceiling`` or less restrictive."""

    def __init__(self, ceiling: MpaaRating) -> None:
        self._ceiling = ceiling

    @property
    def ceiling(self) -> MpaaRating:
        return self._ceiling

    def to_expression(self) -> PredicateTree[Movie]:
        ceiling = self._ceiling
        return PredicateTree.leaf(
            lambda movie: movie.mpaa_rating <= ceiling,
            condition=Condition("mpaa_rating", SpecificationOperator.LE, ceiling),
            name=type(self).__name__,
        )


class MovieForKidsSpecification(MovieRatedAtMostSpecification):
    def __init__(self) -> None:
        super().__init__(MpaaRating.PG)


class ReleasedMonthsAgoSpecification(Specification[Movie]):
    """
    The movie was released at least ``months`` calendar months ago.

    ``clock`` is read on every evaluation, so the same instance gives
    different answers as time passes. Pass a fixed clock in tests. The
    exported :class:`Condition` holds the cut-off computed when
    :meth:`to_expression` was called.
    """

    def __init__(
        self,
        months: int,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._months = months
        self._clock = clock or _utcnow

    @property
    def months(self) -> int:
        return self._months

    def cutoff(self) -> datetime:
        """Latest release date that still satisfies the condition, as of now."""
        return add_months(self._clock(), -self._months)

    def to_expression(self) -> PredicateTree[Movie]:
        def released_before_cutoff(movie: Movie) -> bool:
            return movie.release_date <= self.cutoff()

        return PredicateTree.leaf(
            released_before_cutoff,
            condition=Condition(
                "release_date", SpecificationOperator.LE, self.cutoff()
            ),
            name=type(self).__name__,
        )


class AvailableOnCDSpecification(ReleasedMonthsAgoSpecification):
    def __init__(self, *, clock: Callable[[], datetime] | None = None) -> None:
        super().__init__(MONTHS_BEFORE_DVD_IS_OUT, clock=clock)


class MovieDirectedBySpecification(Specification[Movie]):
    """The movie's director has exactly this name."""

    def __init__(self, director: str) -> None:
        self._director = director

    @property
    def director(self) -> str:
        return self._director

    def to_expression(self) -> PredicateTree[Movie]:
        director = self._director
        return PredicateTree.leaf(
            lambda movie: movie.director.name == director,
            condition=Condition("director.name", SpecificationOperator.EQ, director),
            name=type(self).__name__,
        )
