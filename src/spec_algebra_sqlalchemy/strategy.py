"""SQLAlchemy operator strategies and their registry."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from spec_algebra.registry import OperatorRegistry

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from spec_algebra.operators import SpecificationOperator


class SQLAlchemyOperator(ABC):
    """Lowers one operator into a boolean SQL expression over a column."""

    @property
    @abstractmethod
    def name(self) -> SpecificationOperator: ...

    @abstractmethod
    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        """
        Args:
            column: A mapped column or instrumented attribute.
            value: The ``val`` of the leaf condition.
        """
        ...


class SQLAlchemyOperatorRegistry(OperatorRegistry[SQLAlchemyOperator]):
    backend = "SQLAlchemy"

    def apply(
        self,
        name: SpecificationOperator,
        column: Any,
        value: Any,
    ) -> ColumnElement[bool]:
        return self.require(name).apply(column, value)
