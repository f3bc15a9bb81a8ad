"""In-memory evaluation of structured leaf conditions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .registry import OperatorRegistry

if TYPE_CHECKING:
    from .operators import SpecificationOperator


class MemoryOperator(ABC):
    """Checks one operator against a value read from the candidate."""

    @property
    @abstractmethod
    def name(self) -> SpecificationOperator: ...

    @abstractmethod
    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        """
        Args:
            field_value: Value resolved from the candidate; may be ``None``.
            condition_value: The ``val`` of the leaf condition.
        """
        ...


class MemoryOperatorRegistry(OperatorRegistry[MemoryOperator]):
    """
    In-memory operators keyed by :class:`SpecificationOperator`.

    Usage::

        registry = build_default_registry()
        registry.evaluate(SpecificationOperator.GE, movie.rating, 8)
    """

    backend = "in-memory evaluation"

    def evaluate(
        self,
        name: SpecificationOperator,
        field_value: Any,
        condition_value: Any,
    ) -> bool:
        return self.require(name).evaluate(field_value, condition_value)
