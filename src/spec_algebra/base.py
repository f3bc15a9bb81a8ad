"""
The ``Specification`` facade.

Client code only ever sees :class:`Specification`. The AND / OR / NOT
combinators and the identity ("match everything") specification are
private variants of it: callers reach them through ``and_`` / ``or_`` /
``not_`` (or ``&`` / ``|`` / ``~``) and :meth:`Specification.all`, and
every one of those returns a plain ``Specification``.

Identity folding::

    Specification.all(T).and_(s)  is s
    s.and_(Specification.all(T))  is s
    s.or_(Specification.all(T))   is Specification.all(T)
    Specification.all(T).not_()   is a new NOT node (never folded)

The checks are by reference to the per-type singleton, never by looking
at what a tree would evaluate to.
"""

from __future__ import annotations

import functools
import logging
import threading
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .exceptions import InvalidEntityError
from .tree import PredicateTree

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")

logger = logging.getLogger("spec_algebra.composition")


class Specification(ABC, Generic[T]):
    """
    A reusable, composable condition over entities of type ``T``.

    Subclasses implement :meth:`to_expression`. Instances are immutable;
    combining never touches the operands and always returns a new
    ``Specification`` (or one of the operands, when identity folds away).
    """

    @abstractmethod
    def to_expression(self) -> PredicateTree[T]:
        """Return the predicate tree this specification stands for."""
        ...

    # -- evaluation ----------------------------------------------------------

    def is_satisfied_by(self, candidate: T) -> bool:
        """
        Evaluate against a single entity.

        Raises:
            InvalidEntityError: The entity lacks a field a leaf reads.
        """
        try:
            return self._predicate(candidate)
        except InvalidEntityError:
            raise
        except (AttributeError, KeyError, TypeError) as exc:
            raise InvalidEntityError(type(candidate).__name__, str(exc)) from exc

    @functools.cached_property
    def _predicate(self) -> Callable[[T], bool]:
        return self.to_expression().compile()

    def to_dict(self) -> dict[str, Any]:
        """Dict form of :meth:`to_expression`; ``{}`` means no constraint."""
        return self.to_expression().to_dict()

    # -- composition ---------------------------------------------------------

    def and_(self, other: Specification[T]) -> Specification[T]:
        if _is_all(self):
            logger.debug("Folded identity out of AND (left operand)")
            return other
        if _is_all(other):
            logger.debug("Folded identity out of AND (right operand)")
            return self
        return _AndSpecification(self, other)

    def or_(self, other: Specification[T]) -> Specification[T]:
        if _is_all(self):
            logger.debug("OR absorbed by identity (left operand)")
            return self
        if _is_all(other):
            logger.debug("OR absorbed by identity (right operand)")
            return other
        return _OrSpecification(self, other)

    def not_(self) -> Specification[T]:
        return _NotSpecification(self)

    def merge(self, other: Specification[T]) -> Specification[T]:
        """Merge with another specification using logical AND."""
        return self.and_(other)

    def __and__(self, other: Specification[T]) -> Specification[T]:
        return self.and_(other)

    def __or__(self, other: Specification[T]) -> Specification[T]:
        return self.or_(other)

    def __invert__(self) -> Specification[T]:
        return self.not_()

    # -- identity ------------------------------------------------------------

    @staticmethod
    def all(entity_type: type[Any] = object) -> Specification[Any]:
        """
        The "match everything" specification for ``entity_type``.

        Always the same object for a given type, created on first use.
        Use it as the starting point of an AND chain, or as the filter
        for an unconstrained search.
        """
        return _identity_for(entity_type)


class _AndSpecification(Specification[T]):
    def __init__(self, left: Specification[T], right: Specification[T]) -> None:
        self._left = left
        self._right = right

    def to_expression(self) -> PredicateTree[T]:
        return self._left.to_expression().conjoin(self._right.to_expression())

    def __repr__(self) -> str:
        return f"And({self._left!r}, {self._right!r})"


class _OrSpecification(Specification[T]):
    def __init__(self, left: Specification[T], right: Specification[T]) -> None:
        self._left = left
        self._right = right

    def to_expression(self) -> PredicateTree[T]:
        return self._left.to_expression().disjoin(self._right.to_expression())

    def __repr__(self) -> str:
        return f"Or({self._left!r}, {self._right!r})"


class _NotSpecification(Specification[T]):
    def __init__(self, specification: Specification[T]) -> None:
        self._specification = specification

    def to_expression(self) -> PredicateTree[T]:
        return self._specification.to_expression().negate()

    def __repr__(self) -> str:
        return f"Not({self._specification!r})"


class _IdentitySpecification(Specification[T]):
    # Only created through _identity_for(); one instance per entity type.
    def __init__(self, entity_type: type[Any]) -> None:
        self._entity_type = entity_type

    @property
    def entity_type(self) -> type[Any]:
        return self._entity_type

    def to_expression(self) -> PredicateTree[T]:
        return PredicateTree.identity()

    def __repr__(self) -> str:
        return f"All[{self._entity_type.__name__}]"


_identities: dict[type[Any], _IdentitySpecification[Any]] = {}
_identities_lock = threading.Lock()


def _identity_for(entity_type: type[Any]) -> _IdentitySpecification[Any]:
    spec = _identities.get(entity_type)
    if spec is None:
        with _identities_lock:
            spec = _identities.get(entity_type)
            if spec is None:
                spec = _IdentitySpecification(entity_type)
                _identities[entity_type] = spec
    return spec


def _is_all(spec: Specification[Any]) -> bool:
    return (
        isinstance(spec, _IdentitySpecification)
        and _identities.get(spec.entity_type) is spec
    )
