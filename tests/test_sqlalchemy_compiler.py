"""Tests for lowering specifications into SQLAlchemy filters."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pytest
from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, select
from sqlalchemy.orm import DeclarativeBase, relationship

from spec_algebra import (
    AttributeSpecification,
    PredicateTree,
    Specification,
    SpecificationOperator,
    UnsupportedOperatorError,
    UntranslatableSpecificationError,
    build_default_registry,
)
from spec_algebra_movies import (
    AvailableOnCDSpecification,
    MovieDirectedBySpecification,
    MovieForKidsSpecification,
)
from spec_algebra_sqlalchemy import (
    DEFAULT_SQLA_REGISTRY,
    apply_specification,
    build_default_sqla_registry,
    build_sqla_filter,
)


class Base(DeclarativeBase):
    pass


class DirectorRecord(Base):
    __tablename__ = "directors"
    id = Column(Integer, primary_key=True)
    name = Column(String)
    movies = relationship("MovieRecord", back_populates="director")


class MovieRecord(Base):
    __tablename__ = "movies"
    id = Column(Integer, primary_key=True)
    name = Column(String)
    genre = Column(String)
    rating = Column(Float)
    mpaa_rating = Column(Integer)
    release_date = Column(DateTime(timezone=True))
    director_id = Column(Integer, ForeignKey("directors.id"))
    director = relationship("DirectorRecord", back_populates="movies")


class _Opaque(Specification[Any]):
    def to_expression(self) -> PredicateTree[Any]:
        return PredicateTree.leaf(lambda _c: True, name="opaque")


def _sql(expr: Any) -> str:
    return str(expr.compile())


# -- identity ----------------------------------------------------------------


def test_identity_has_no_filter_clause():
    assert build_sqla_filter(MovieRecord, Specification.all(MovieRecord)) is None


def test_apply_identity_leaves_statement_unchanged():
    stmt = select(MovieRecord)
    assert apply_specification(stmt, MovieRecord, Specification.all()) is stmt


def test_negated_identity_is_not_true():
    expr = build_sqla_filter(MovieRecord, Specification.all().not_())
    assert expr is not None


# -- leaves ------------------------------------------------------------------


def test_movie_leaf():
    expr = build_sqla_filter(MovieRecord, MovieForKidsSpecification())
    compiled = _sql(expr)
    assert "movies.mpaa_rating IS NOT NULL" in compiled
    assert "movies.mpaa_rating <= :mpaa_rating_1" in compiled


def test_attribute_leaf():
    spec = AttributeSpecification("genre", "=", "Drama")
    compiled = _sql(build_sqla_filter(MovieRecord, spec))
    assert "movies.genre IS NOT NULL AND movies.genre = :genre_1" in compiled


def test_release_date_leaf(clock):
    expr = build_sqla_filter(MovieRecord, AvailableOnCDSpecification(clock=clock))
    compiled = expr.compile()
    assert "movies.release_date <= :release_date_1" in str(compiled)
    assert compiled.params["release_date_1"] == datetime(
        2023, 12, 15, 12, 0, tzinfo=timezone.utc
    )


def test_relationship_has():
    expr = build_sqla_filter(MovieRecord, MovieDirectedBySpecification("Nolan"))
    compiled = _sql(expr)
    assert "EXISTS" in compiled
    assert "directors.name = :name_1" in compiled


def test_relationship_any():
    spec = AttributeSpecification("movies.genre", "in", ["Drama", "Sci-Fi"])
    compiled = _sql(build_sqla_filter(DirectorRecord, spec))
    assert "EXISTS" in compiled
    assert "movies.genre IN" in compiled


# -- combinators -------------------------------------------------------------


def test_and_or_not():
    spec = (
        MovieForKidsSpecification()
        .or_(MovieDirectedBySpecification("Nolan"))
        .and_(AttributeSpecification("genre", "=", "Horror").not_())
    )
    compiled = _sql(build_sqla_filter(MovieRecord, spec))
    assert "movies.mpaa_rating <= :mpaa_rating_1" in compiled
    assert " OR (EXISTS" in compiled or " OR EXISTS" in compiled
    assert "NOT (movies.genre IS NOT NULL AND movies.genre = :genre_1)" in compiled


def test_apply_specification_adds_where():
    stmt = apply_specification(
        select(MovieRecord), MovieRecord, AttributeSpecification("rating", ">", 8)
    )
    assert "WHERE movies.rating IS NOT NULL AND movies.rating > :rating_1" in str(stmt)


def test_negative_operators_keep_null_rows():
    not_equal = AttributeSpecification("genre", "!=", "Drama")
    not_in = AttributeSpecification("genre", "not_in", ["Drama"])
    assert "movies.genre IS NULL OR movies.genre != :genre_1" in _sql(
        build_sqla_filter(MovieRecord, not_equal)
    )
    assert "movies.genre IS NULL OR" in _sql(build_sqla_filter(MovieRecord, not_in))


def test_equal_to_none_is_null_check():
    spec = AttributeSpecification("genre", "=", None)
    assert _sql(build_sqla_filter(MovieRecord, spec)) == "movies.genre IS NULL"


def test_accepts_predicate_tree():
    tree = AttributeSpecification("name", "startswith", "In").to_expression()
    assert "movies.name LIKE" in _sql(build_sqla_filter(MovieRecord, tree))


# -- failures ----------------------------------------------------------------


def test_opaque_leaf_is_untranslatable():
    spec = MovieForKidsSpecification().and_(_Opaque())
    with pytest.raises(UntranslatableSpecificationError) as exc_info:
        build_sqla_filter(MovieRecord, spec)
    assert exc_info.value.leaf_name == "opaque"


def test_unknown_column():
    with pytest.raises(AttributeError):
        build_sqla_filter(MovieRecord, AttributeSpecification("budget", "=", 1))


def test_unregistered_operator():
    registry = build_default_sqla_registry()
    registry.unregister(SpecificationOperator.EQ)
    with pytest.raises(UnsupportedOperatorError, match="SQLAlchemy"):
        build_sqla_filter(
            MovieRecord,
            AttributeSpecification("genre", "=", "Drama"),
            registry=registry,
        )


def test_default_registry_covers_memory_operators():
    assert (
        DEFAULT_SQLA_REGISTRY.supported_operators
        == build_default_registry().supported_operators
    )
