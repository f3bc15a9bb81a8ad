"""
Built-in in-memory operators.

Each operator is a :class:`FunctionOperator` wrapping a two-argument
function. A ``None`` field value never reaches the function unless the
operator says so: it yields a fixed result instead (``False`` for
ordering, range, membership and string tests, ``True`` for ``not_in``).
The SQLAlchemy translator guards NULL columns to the same fixed results,
so a negated leaf selects the same entities in both views.
"""

from __future__ import annotations

import functools
import operator as op_module
from typing import TYPE_CHECKING, Any

from .evaluator import MemoryOperator, MemoryOperatorRegistry
from .operators import SpecificationOperator as Op

if TYPE_CHECKING:
    from collections.abc import Callable


class FunctionOperator(MemoryOperator):
    """
    Operator backed by ``func(field_value, condition_value)``.

    ``on_null`` is the result for a ``None`` field value; ``None`` means
    the function handles ``None`` itself (equality and null checks).
    """

    def __init__(
        self,
        name: Op,
        func: Callable[[Any, Any], Any],
        *,
        on_null: bool | None = False,
    ) -> None:
        self._name = name
        self._func = func
        self._on_null = on_null

    @property
    def name(self) -> Op:
        return self._name

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None and self._on_null is not None:
            return self._on_null
        return bool(self._func(field_value, condition_value))


def _is_in(value: Any, collection: Any) -> bool:
    return value in collection


def _between(value: Any, bounds: Any) -> bool:
    low, high = bounds
    return bool(low <= value <= high)


def _contains(value: Any, part: Any) -> bool:
    return str(part) in str(value)


def _icontains(value: Any, part: Any) -> bool:
    return str(part).lower() in str(value).lower()


def _startswith(value: Any, prefix: Any) -> bool:
    return str(value).startswith(str(prefix))


def _endswith(value: Any, suffix: Any) -> bool:
    return str(value).endswith(str(suffix))


_BUILTINS: tuple[tuple[Op, Callable[[Any, Any], Any], bool | None], ...] = (
    (Op.EQ, op_module.eq, None),
    (Op.NE, op_module.ne, None),
    (Op.GT, op_module.gt, False),
    (Op.LT, op_module.lt, False),
    (Op.GE, op_module.ge, False),
    (Op.LE, op_module.le, False),
    (Op.IN, _is_in, False),
    (Op.NOT_IN, lambda value, collection: not _is_in(value, collection), True),
    (Op.BETWEEN, _between, False),
    (Op.NOT_BETWEEN, lambda value, bounds: not _between(value, bounds), False),
    (Op.CONTAINS, _contains, False),
    (Op.ICONTAINS, _icontains, False),
    (Op.STARTSWITH, _startswith, False),
    (Op.ENDSWITH, _endswith, False),
    (Op.IS_NULL, lambda value, _unused: value is None, None),
    (Op.IS_NOT_NULL, lambda value, _unused: value is not None, None),
)


def build_default_registry() -> MemoryOperatorRegistry:
    """
    A fresh registry holding every built-in operator.

    Callers may register or unregister freely; nobody else sees it.
    """
    return MemoryOperatorRegistry(
        FunctionOperator(name, func, on_null=on_null)
        for name, func, on_null in _BUILTINS
    )


@functools.lru_cache(maxsize=1)
def default_registry() -> MemoryOperatorRegistry:
    """Shared registry for leaves built without one. Treat it as read-only."""
    return build_default_registry()
