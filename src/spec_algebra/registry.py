"""
Operator strategy registries.

A registry maps each leaf :class:`SpecificationOperator` to the strategy
implementing it for one backend. The in-memory evaluator and the
SQLAlchemy translator both build on :class:`OperatorRegistry`, so a
backend is extended or restricted the same way everywhere: register a
strategy under an operator, or unregister it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, Protocol, TypeVar

from .exceptions import UnsupportedOperatorError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .operators import SpecificationOperator


class OperatorStrategy(Protocol):
    @property
    def name(self) -> SpecificationOperator: ...


S = TypeVar("S", bound=OperatorStrategy)


class OperatorRegistry(Generic[S]):
    """Strategies of one backend, keyed by the operator they implement."""

    #: Named in :class:`UnsupportedOperatorError` messages.
    backend: str = "unknown backend"

    def __init__(self, strategies: Iterable[S] = ()) -> None:
        self._strategies: dict[SpecificationOperator, S] = {}
        self.register_all(*strategies)

    def register(self, strategy: S) -> None:
        """Add ``strategy``, replacing whatever handled its operator before."""
        self._strategies[strategy.name] = strategy

    def register_all(self, *strategies: S) -> None:
        for strategy in strategies:
            self.register(strategy)

    def unregister(self, name: SpecificationOperator) -> None:
        self._strategies.pop(name, None)

    def get(self, name: SpecificationOperator) -> S | None:
        return self._strategies.get(name)

    def has(self, name: SpecificationOperator) -> bool:
        return name in self._strategies

    @property
    def supported_operators(self) -> set[SpecificationOperator]:
        return set(self._strategies)

    def require(self, name: SpecificationOperator) -> S:
        """
        Strategy registered for ``name``.

        Raises:
            UnsupportedOperatorError: Nothing is registered for ``name``.
        """
        strategy = self._strategies.get(name)
        if strategy is None:
            raise UnsupportedOperatorError(name, self.backend)
        return strategy
