"""
SQLAlchemy translation of specification trees.

Usage::

    from sqlalchemy import select
    from spec_algebra_sqlalchemy import apply_specification

    stmt = apply_specification(select(MovieRow), MovieRow, spec)
"""

from __future__ import annotations

from .compiler import apply_specification, build_sqla_filter
from .operators import (
    DEFAULT_SQLA_REGISTRY,
    ColumnOperator,
    build_default_sqla_registry,
)
from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry

__all__ = [
    "ColumnOperator",
    "DEFAULT_SQLA_REGISTRY",
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    "apply_specification",
    "build_default_sqla_registry",
    "build_sqla_filter",
]
