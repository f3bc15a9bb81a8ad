"""
Lower a predicate tree into a SQLAlchemy filter expression.

The compiler never runs a leaf's evaluator. It pattern-matches on
:class:`~spec_algebra.tree.NodeKind` and reads the structured
:class:`~spec_algebra.tree.Condition` each leaf carries; leaf-level
comparisons are delegated to a ``SQLAlchemyOperatorRegistry``.

An identity root produces no clause at all (``None``), so an
unconstrained search adds no ``WHERE``. Identity can only appear below
the root under a NOT (it is folded out of AND / OR), where it lowers to
``true()``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import and_, not_, or_, true

from spec_algebra.base import Specification
from spec_algebra.exceptions import UntranslatableSpecificationError
from spec_algebra.tree import NodeKind

from .operators import DEFAULT_SQLA_REGISTRY

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Select

    from spec_algebra.tree import Condition, PredicateNode, PredicateTree

    from .strategy import SQLAlchemyOperatorRegistry

logger = logging.getLogger("spec_algebra.sqlalchemy")

_BACKEND = "SQLAlchemy"

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_sqla_filter(
    model: type[Any],
    spec: Specification[Any] | PredicateTree[Any],
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> ColumnElement[bool] | None:
    """
    Build a SQLAlchemy filter expression from a specification.

    Args:
        model: The SQLAlchemy model class.
        spec: A specification, or the predicate tree of one.
        registry: Optional custom operator registry.  Falls back to
            ``DEFAULT_SQLA_REGISTRY``.

    Returns:
        SQLAlchemy Boolean expression, or ``None`` when the specification
        is the identity and no filter applies.

    Raises:
        UntranslatableSpecificationError: A leaf has no structured condition.
        UnsupportedOperatorError: A leaf operator has no SQLAlchemy strategy.
    """
    tree = spec.to_expression() if isinstance(spec, Specification) else spec
    if tree.is_identity:
        logger.debug("Identity specification on %s, no filter clause", model)
        return None
    reg = registry or DEFAULT_SQLA_REGISTRY
    clause = _compile_node(model, tree.body, reg)
    logger.debug("Compiled specification on %s to %s", model, clause)
    return clause


def apply_specification(
    stmt: Select[Any],
    model: type[Any],
    spec: Specification[Any] | PredicateTree[Any],
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> Select[Any]:
    """
    Add the specification's filter to ``stmt``.

    The statement is returned unchanged for the identity specification.
    """
    clause = build_sqla_filter(model, spec, registry=registry)
    if clause is None:
        return stmt
    return stmt.where(clause)


# ---------------------------------------------------------------------------
# Internal compilation
# ---------------------------------------------------------------------------


def _compile_node(
    model: type[Any],
    node: PredicateNode,
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    kind = node.kind

    if kind is NodeKind.AND:
        return and_(*(_compile_node(model, c, registry) for c in node.children))

    if kind is NodeKind.OR:
        return or_(*(_compile_node(model, c, registry) for c in node.children))

    if kind is NodeKind.NOT:
        return not_(_compile_node(model, node.children[0], registry))

    if kind is NodeKind.IDENTITY:
        return cast("ColumnElement[bool]", true())

    condition: Condition | None = getattr(node, "condition", None)
    if condition is None:
        raise UntranslatableSpecificationError(getattr(node, "name", ""), _BACKEND)
    return _compile_condition(model, condition.attr, condition, registry)


def _compile_condition(
    model: type[Any],
    attr: str,
    condition: Condition,
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    """Compile a leaf condition, following dotted relationship paths."""
    if "." in attr:
        rel_name, nested_attr = attr.split(".", 1)
        rel_attr = getattr(model, rel_name, None)

        if rel_attr is None:
            raise AttributeError(f"Model {model} has no relationship {rel_name}")

        target_model = rel_attr.property.mapper.class_
        inner_expr = _compile_condition(target_model, nested_attr, condition, registry)

        if rel_attr.property.uselist:
            return cast("ColumnElement[bool]", rel_attr.any(inner_expr))
        return cast("ColumnElement[bool]", rel_attr.has(inner_expr))

    column = getattr(model, attr, None)
    if column is None:
        raise AttributeError(f"Model {model} has no attribute {attr}")

    return registry.apply(condition.op, column, condition.val)
