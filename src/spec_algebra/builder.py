"""
Fluent builder for composing specifications.

Example::

    spec = (
        SpecificationBuilder(Movie)
        .or_group()
            .add(MovieForKidsSpecification())
            .add(MovieDirectedBySpecification("Nolan"))
        .end_group()
        .where("rating", ">=", 8)
        .build()
    )
    # → AND(OR(for kids, directed by Nolan), rating >= 8)

Groups fold through ``and_`` / ``or_`` / ``not_``, so identity folding
applies. Empty groups are well defined: an empty AND (and so an empty
builder) is ``Specification.all(entity_type)``, an empty OR matches
nothing.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .attribute import AttributeSpecification
from .base import Specification
from .tree import NodeKind

if TYPE_CHECKING:
    from .evaluator import MemoryOperatorRegistry
    from .operators import SpecificationOperator


@dataclass
class _Group:
    kind: NodeKind
    members: list[Specification[Any]] = field(default_factory=list)


class SpecificationBuilder:
    """
    Collects conditions into nested groups, then folds them into one
    specification. Top-level conditions are ANDed.
    """

    def __init__(
        self,
        entity_type: type[Any] = object,
        registry: MemoryOperatorRegistry | None = None,
    ) -> None:
        self._entity_type = entity_type
        self._registry = registry
        self._groups = [_Group(NodeKind.AND)]

    def where(
        self,
        attr: str,
        op: SpecificationOperator | str,
        val: Any = None,
    ) -> SpecificationBuilder:
        """Add an attribute condition to the innermost open group."""
        return self.add(AttributeSpecification(attr, op, val, registry=self._registry))

    def add(self, spec: Specification[Any]) -> SpecificationBuilder:
        self._groups[-1].members.append(spec)
        return self

    def and_group(self) -> SpecificationBuilder:
        return self._open(NodeKind.AND)

    def or_group(self) -> SpecificationBuilder:
        return self._open(NodeKind.OR)

    def not_group(self) -> SpecificationBuilder:
        """Open a NOT group; it must hold exactly one condition when closed."""
        return self._open(NodeKind.NOT)

    def end_group(self) -> SpecificationBuilder:
        """Close the innermost group and add it to its parent."""
        if len(self._groups) == 1:
            raise ValueError("No open group to close")
        group = self._groups.pop()
        return self.add(self._fold(group))

    def build(self) -> Specification[Any]:
        """
        Fold everything added so far into one specification.

        Raises:
            ValueError: A group is still open.
        """
        open_groups = len(self._groups) - 1
        if open_groups:
            raise ValueError(
                f"{open_groups} group(s) still open, call end_group() before build()"
            )
        return self._fold(self._groups[0])

    def reset(self) -> SpecificationBuilder:
        """Drop all conditions and open groups."""
        self._groups = [_Group(NodeKind.AND)]
        return self

    def _open(self, kind: NodeKind) -> SpecificationBuilder:
        self._groups.append(_Group(kind))
        return self

    def _fold(self, group: _Group) -> Specification[Any]:
        everything = Specification.all(self._entity_type)
        if group.kind is NodeKind.AND:
            return functools.reduce(Specification.and_, group.members, everything)
        if group.kind is NodeKind.OR:
            if not group.members:
                return everything.not_()
            return functools.reduce(Specification.or_, group.members)
        if len(group.members) != 1:
            raise ValueError("NOT group must contain exactly one condition")
        return group.members[0].not_()
