"""Shared fixtures for the specification test suite."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pytest

from spec_algebra import (
    MemoryOperatorRegistry,
    PredicateTree,
    Specification,
    build_default_registry,
)
from spec_algebra.utils import add_months
from spec_algebra_movies import Director, Movie, MpaaRating

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return NOW


class FlagSpecification(Specification[Any]):
    """Opaque leaf over a boolean attribute; counts its evaluations."""

    def __init__(self, attr: str) -> None:
        self.attr = attr
        self.calls = 0

    def to_expression(self) -> PredicateTree[Any]:
        def evaluator(candidate: Any) -> bool:
            self.calls += 1
            return bool(getattr(candidate, self.attr))

        return PredicateTree.leaf(evaluator, name=f"flag:{self.attr}")


class Flags:
    def __init__(self, **flags: bool) -> None:
        for name, value in flags.items():
            setattr(self, name, value)


@pytest.fixture
def clock():
    return fixed_clock


@pytest.fixture
def registry() -> MemoryOperatorRegistry:
    return build_default_registry()


@pytest.fixture
def nolan_movie() -> Movie:
    """PG-13, directed by Nolan, released 20 months before ``NOW``."""
    return Movie(
        id=1,
        name="Inception",
        release_date=add_months(NOW, -20),
        mpaa_rating=MpaaRating.PG13,
        genre="Sci-Fi",
        rating=8.8,
        director=Director(name="Nolan"),
    )


@pytest.fixture
def kids_movie() -> Movie:
    """G-rated, released two months before ``NOW``."""
    return Movie(
        id=2,
        name="Paddington",
        release_date=add_months(NOW, -2),
        mpaa_rating=MpaaRating.G,
        genre="Family",
        rating=7.2,
        director=Director(name="King"),
    )


@pytest.fixture
def all_flag_combinations() -> list[Flags]:
    return [
        Flags(a=a, b=b, c=c)
        for a in (False, True)
        for b in (False, True)
        for c in (False, True)
    ]


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def flag_spec() -> type[FlagSpecification]:
    return FlagSpecification


@pytest.fixture
def make_flags() -> type[Flags]:
    return Flags
