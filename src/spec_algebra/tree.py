"""
Inspectable predicate trees.

A :class:`PredicateTree` is the data form of a one-argument boolean
function over an entity. It can be compiled into a plain callable for
in-memory evaluation, or walked node by node by a translator that lowers
it into a backend filter without ever executing it.

Node kinds form a closed set (:class:`NodeKind`), which is the contract
translators pattern-match on::

    LEAF      opaque evaluator, optionally paired with a structured Condition
    AND       left, right
    OR        left, right
    NOT       operand
    IDENTITY  always true

Every tree binds exactly one :class:`Parameter`. Combining two trees keeps
the left tree's parameter; node bodies never capture a parameter of their
own, so the combined body is evaluated against the one entity bound at
call time.
"""

from __future__ import annotations

import datetime
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from .operators import SpecificationOperator

T = TypeVar("T")


class NodeKind(str, Enum):
    """Kinds of predicate tree nodes."""

    LEAF = "leaf"
    AND = "and"
    OR = "or"
    NOT = "not"
    IDENTITY = "identity"


@dataclass(frozen=True, eq=False)
class Parameter:
    """The formal parameter of a tree: "the entity being tested"."""

    name: str = "candidate"


@dataclass(frozen=True)
class Condition:
    """Structured description of a leaf, for translators."""

    attr: str
    op: SpecificationOperator
    val: Any = None

    def to_dict(self) -> dict[str, Any]:
        """
        JSON-friendly form. Dates and datetimes become ISO strings tagged
        with a ``value_type`` so the factory can cast them back.
        """
        data: dict[str, Any] = {"op": self.op.value, "attr": self.attr}
        if isinstance(self.val, datetime.datetime):
            data.update(val=self.val.isoformat(), value_type="datetime")
        elif isinstance(self.val, datetime.date):
            data.update(val=self.val.isoformat(), value_type="date")
        else:
            data["val"] = self.val
        return data


class PredicateNode(ABC):
    """Base class of all tree nodes."""

    kind: ClassVar[NodeKind]

    @property
    def children(self) -> tuple[PredicateNode, ...]:
        return ()

    @abstractmethod
    def compile(self) -> Callable[[Any], bool]:
        """Build a callable that evaluates this node against an entity."""
        ...

    @abstractmethod
    def to_dict(self) -> dict[str, Any]: ...


@dataclass(frozen=True)
class LeafNode(PredicateNode):
    evaluator: Callable[[Any], bool]
    condition: Condition | None = None
    name: str = ""

    kind: ClassVar[NodeKind] = NodeKind.LEAF

    def compile(self) -> Callable[[Any], bool]:
        evaluator = self.evaluator

        def _leaf(candidate: Any) -> bool:
            return bool(evaluator(candidate))

        return _leaf

    def to_dict(self) -> dict[str, Any]:
        if self.condition is not None:
            return self.condition.to_dict()
        return {"op": NodeKind.LEAF.value, "name": self.name}


@dataclass(frozen=True)
class AndNode(PredicateNode):
    left: PredicateNode
    right: PredicateNode

    kind: ClassVar[NodeKind] = NodeKind.AND

    @property
    def children(self) -> tuple[PredicateNode, ...]:
        return (self.left, self.right)

    def compile(self) -> Callable[[Any], bool]:
        left = self.left.compile()
        right = self.right.compile()

        def _and(candidate: Any) -> bool:
            return left(candidate) and right(candidate)

        return _and

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": NodeKind.AND.value,
            "conditions": [self.left.to_dict(), self.right.to_dict()],
        }


@dataclass(frozen=True)
class OrNode(PredicateNode):
    left: PredicateNode
    right: PredicateNode

    kind: ClassVar[NodeKind] = NodeKind.OR

    @property
    def children(self) -> tuple[PredicateNode, ...]:
        return (self.left, self.right)

    def compile(self) -> Callable[[Any], bool]:
        left = self.left.compile()
        right = self.right.compile()

        def _or(candidate: Any) -> bool:
            return left(candidate) or right(candidate)

        return _or

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": NodeKind.OR.value,
            "conditions": [self.left.to_dict(), self.right.to_dict()],
        }


@dataclass(frozen=True)
class NotNode(PredicateNode):
    operand: PredicateNode

    kind: ClassVar[NodeKind] = NodeKind.NOT

    @property
    def children(self) -> tuple[PredicateNode, ...]:
        return (self.operand,)

    def compile(self) -> Callable[[Any], bool]:
        operand = self.operand.compile()

        def _not(candidate: Any) -> bool:
            return not operand(candidate)

        return _not

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": NodeKind.NOT.value,
            "conditions": [self.operand.to_dict()],
        }


@dataclass(frozen=True)
class IdentityNode(PredicateNode):
    kind: ClassVar[NodeKind] = NodeKind.IDENTITY

    def compile(self) -> Callable[[Any], bool]:
        def _identity(_candidate: Any) -> bool:
            return True

        return _identity

    def to_dict(self) -> dict[str, Any]:
        return {"op": NodeKind.IDENTITY.value}


@dataclass(frozen=True)
class PredicateTree(Generic[T]):
    """
    A boolean function over ``T`` kept as data.

    Attributes:
        parameter: The single formal parameter shared by the whole body.
        body: Root node.
    """

    parameter: Parameter
    body: PredicateNode

    # -- construction --------------------------------------------------------

    @classmethod
    def leaf(
        cls,
        evaluator: Callable[[T], bool],
        *,
        condition: Condition | None = None,
        name: str = "",
    ) -> PredicateTree[T]:
        """Tree made of a single leaf."""
        return cls(Parameter(), LeafNode(evaluator, condition, name))

    @classmethod
    def identity(cls) -> PredicateTree[T]:
        """Tree that is true for every entity."""
        return cls(Parameter(), IdentityNode())

    # -- combination ---------------------------------------------------------

    def conjoin(self, other: PredicateTree[T]) -> PredicateTree[T]:
        """``self AND other`` bound to ``self.parameter``."""
        return PredicateTree(self.parameter, AndNode(self.body, other.body))

    def disjoin(self, other: PredicateTree[T]) -> PredicateTree[T]:
        """``self OR other`` bound to ``self.parameter``."""
        return PredicateTree(self.parameter, OrNode(self.body, other.body))

    def negate(self) -> PredicateTree[T]:
        return PredicateTree(self.parameter, NotNode(self.body))

    # -- inspection ----------------------------------------------------------

    @property
    def is_identity(self) -> bool:
        return self.body.kind is NodeKind.IDENTITY

    @property
    def parameters(self) -> tuple[Parameter, ...]:
        return (self.parameter,)

    def walk(self) -> Iterator[PredicateNode]:
        """Yield every node, parents before children, left to right."""
        stack: list[PredicateNode] = [self.body]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    # -- evaluation / export -------------------------------------------------

    def compile(self) -> Callable[[T], bool]:
        """Compile the body into a short-circuiting callable."""
        return self.body.compile()

    def to_dict(self) -> dict[str, Any]:
        """
        Export the tree as a JSON-friendly dict.

        An identity root exports as ``{}``, meaning "no filter clause".
        """
        if self.is_identity:
            return {}
        return self.body.to_dict()
