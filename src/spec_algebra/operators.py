"""
Operator vocabulary shared by leaves, the dict form and every backend.

Comparison operators appear in leaf conditions; ``and`` / ``or`` / ``not``
only name composite nodes in the dict form.
"""

from __future__ import annotations

from enum import Enum


class SpecificationOperator(str, Enum):
    """Operators a structured leaf condition can use."""

    EQ = "="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    IN = "in"
    NOT_IN = "not_in"
    BETWEEN = "between"
    NOT_BETWEEN = "not_between"

    CONTAINS = "contains"
    ICONTAINS = "icontains"
    STARTSWITH = "startswith"
    ENDSWITH = "endswith"

    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"

    AND = "and"
    OR = "or"
    NOT = "not"


LOGICAL_OPERATORS: frozenset[SpecificationOperator] = frozenset(
    {SpecificationOperator.AND, SpecificationOperator.OR, SpecificationOperator.NOT}
)
LEAF_OPERATORS: frozenset[SpecificationOperator] = frozenset(
    set(SpecificationOperator) - LOGICAL_OPERATORS
)
# Plain strings, for looking up user input without enum coercion.
LEAF_OPERATOR_NAMES: frozenset[str] = frozenset(op.value for op in LEAF_OPERATORS)
