"""
Built-in SQLAlchemy operators.

SQL comparisons against NULL yield NULL, which ``NOT`` keeps as NULL, so
a bare ``NOT (rating > 5)`` would drop rows the in-memory check keeps.
Every operator here is therefore two-valued: :class:`ColumnOperator`
guards the column with ``IS NOT NULL`` / ``IS NULL`` to reproduce the
result the matching in-memory operator gives a ``None`` field.

Usage::

    from spec_algebra_sqlalchemy.operators import DEFAULT_SQLA_REGISTRY

    clause = DEFAULT_SQLA_REGISTRY.apply(SpecificationOperator.GT, Movie.rating, 8)
"""

from __future__ import annotations

import operator as op_module
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import and_, not_, or_

from spec_algebra.operators import SpecificationOperator as Op

from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy import ColumnElement


class ColumnOperator(SQLAlchemyOperator):
    """
    Operator built from ``build(column, value)``.

    ``on_null`` is the result a NULL column must produce; ``None`` means
    ``build`` is already NULL-safe.
    """

    def __init__(
        self,
        name: Op,
        build: Callable[[Any, Any], Any],
        *,
        on_null: bool | None = False,
    ) -> None:
        self._name = name
        self._build = build
        self._on_null = on_null

    @property
    def name(self) -> Op:
        return self._name

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        clause = self._build(column, value)
        if self._on_null is None:
            return cast("ColumnElement[bool]", clause)
        if self._on_null:
            return or_(column.is_(None), clause)
        return and_(column.is_not(None), clause)


def _equal(column: Any, value: Any) -> Any:
    if value is None:
        return column.is_(None)
    return and_(column.is_not(None), column == value)


def _not_equal(column: Any, value: Any) -> Any:
    if value is None:
        return column.is_not(None)
    return or_(column.is_(None), column != value)


def _between(column: Any, bounds: Any) -> Any:
    low, high = bounds
    return column.between(low, high)


def _like(method: str) -> Callable[[Any, Any], Any]:
    def build(column: Any, value: Any) -> Any:
        return getattr(column, method)(value, autoescape=True)

    return build


_BUILTINS: tuple[tuple[Op, Callable[[Any, Any], Any], bool | None], ...] = (
    (Op.EQ, _equal, None),
    (Op.NE, _not_equal, None),
    (Op.GT, op_module.gt, False),
    (Op.LT, op_module.lt, False),
    (Op.GE, op_module.ge, False),
    (Op.LE, op_module.le, False),
    (Op.IN, lambda column, value: column.in_(list(value)), False),
    (Op.NOT_IN, lambda column, value: column.not_in(list(value)), True),
    (Op.BETWEEN, _between, False),
    (Op.NOT_BETWEEN, lambda column, bounds: not_(_between(column, bounds)), False),
    (Op.CONTAINS, _like("contains"), False),
    (Op.ICONTAINS, _like("icontains"), False),
    (Op.STARTSWITH, _like("startswith"), False),
    (Op.ENDSWITH, _like("endswith"), False),
    (Op.IS_NULL, lambda column, _unused: column.is_(None), None),
    (Op.IS_NOT_NULL, lambda column, _unused: column.is_not(None), None),
)


def build_default_sqla_registry() -> SQLAlchemyOperatorRegistry:
    """A fresh registry holding every built-in SQLAlchemy operator."""
    return SQLAlchemyOperatorRegistry(
        ColumnOperator(name, build, on_null=on_null)
        for name, build, on_null in _BUILTINS
    )


DEFAULT_SQLA_REGISTRY = build_default_sqla_registry()
