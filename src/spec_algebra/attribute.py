"""Generic structured leaf: one attribute compared through an operator."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from .base import Specification
from .exceptions import InvalidEntityError, OperatorNotFoundError
from .operators import LEAF_OPERATOR_NAMES, SpecificationOperator
from .operators_memory import default_registry
from .tree import Condition, PredicateTree

if TYPE_CHECKING:
    from .evaluator import MemoryOperatorRegistry

T = TypeVar("T")


class AttributeSpecification(Specification[T]):
    """
    Specification that checks a single attribute value.

    In-memory evaluation is delegated to a :class:`MemoryOperatorRegistry`
    (strategy pattern). Without an explicit ``registry`` the shared
    :func:`default_registry` is used.

    The leaf carries a structured :class:`Condition`, so translators can
    lower it into a backend filter.
    """

    def __init__(
        self,
        attr: str,
        op: SpecificationOperator | str,
        val: Any = None,
        *,
        registry: MemoryOperatorRegistry | None = None,
    ) -> None:
        name = getattr(op, "value", op)
        if name not in LEAF_OPERATOR_NAMES:
            raise OperatorNotFoundError(name, sorted(LEAF_OPERATOR_NAMES))
        self._attr = attr
        self._op = SpecificationOperator(name)
        self._val = val
        self._registry = registry if registry is not None else default_registry()

    @property
    def attr(self) -> str:
        return self._attr

    @property
    def op(self) -> SpecificationOperator:
        return self._op

    @property
    def val(self) -> Any:
        return self._val

    def to_expression(self) -> PredicateTree[T]:
        return PredicateTree.leaf(
            self._evaluate,
            condition=Condition(self._attr, self._op, self._val),
            name=self._attr,
        )

    def _evaluate(self, candidate: T) -> bool:
        actual_val = resolve_field(candidate, self._attr)
        return self._registry.evaluate(self._op, actual_val, self._val)

    def __repr__(self) -> str:
        return (
            f"AttributeSpecification({self._attr!r}, {self._op.value!r}, "
            f"{self._val!r})"
        )


def resolve_field(obj: Any, attr_path: str) -> Any:
    """
    Resolve a dot-separated attribute path on *obj*.

    Supports nested attribute access (``director.name``), mapping keys,
    and implicit list traversal (``cast.name`` where ``cast`` is a list
    returns ``[member.name for member in cast]``). A ``None`` along the
    path resolves to ``None``.

    Raises:
        InvalidEntityError: A path segment does not exist on the object.
    """
    parts = attr_path.split(".")
    current = obj
    for index, part in enumerate(parts):
        if current is None:
            return None
        if isinstance(current, list | tuple):
            remaining = ".".join(parts[index:])
            return [resolve_field(item, remaining) for item in current]
        if isinstance(current, Mapping):
            if part not in current:
                raise InvalidEntityError(
                    type(obj).__name__, f"missing key '{part}'", attr_path
                )
            current = current[part]
            continue
        try:
            current = getattr(current, part)
        except AttributeError as exc:
            raise InvalidEntityError(
                type(obj).__name__, f"missing attribute '{part}'", attr_path
            ) from exc
    return current
