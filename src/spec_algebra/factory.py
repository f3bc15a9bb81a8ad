"""
Build specifications from their dict / JSON form.

This is the inverse of :meth:`Specification.to_dict`::

    {}                                          no constraint
    {"op": "identity"}                          no constraint (nested form)
    {"op": "and" | "or", "conditions": [...]}   two or more children
    {"op": "not", "conditions": [child]}
    {"op": "<=", "attr": "rating", "val": 8, "value_type": "int"}

Composite nodes are rebuilt through ``and_`` / ``or_`` / ``not_``, so
identity folds in imported trees exactly as in hand-built ones. Opaque
leaves (``{"op": "leaf"}``) carry no condition and cannot be rebuilt.
"""

from __future__ import annotations

import functools
import json
import logging
from typing import TYPE_CHECKING, Any

from .attribute import AttributeSpecification
from .base import Specification
from .exceptions import OperatorNotFoundError, ValidationError
from .operators import LEAF_OPERATOR_NAMES
from .tree import NodeKind
from .utils import cast_value

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from .evaluator import MemoryOperatorRegistry
    from .exceptions import SpecificationError

logger = logging.getLogger("spec_algebra.factory")

_ROOT = "<root>"


class SpecificationFactory:
    """Creates specifications from dictionaries or JSON text."""

    @staticmethod
    def from_dict(
        data: dict[str, Any],
        *,
        allowed_fields: Sequence[str] | None = None,
        registry: MemoryOperatorRegistry | None = None,
        entity_type: type[Any] = object,
    ) -> Specification[Any]:
        """
        Validate ``data`` and build the specification it describes.

        Parameters
        ----------
        data:
            The specification dictionary (potentially nested).
        allowed_fields:
            Optional whitelist of attribute paths leaves may use.
        registry:
            Operator registry injected into every
            :class:`AttributeSpecification` leaf.
        entity_type:
            Entity type whose identity singleton stands in for
            "no constraint".

        Raises
        ------
        ValidationError
            The structure is malformed; ``path`` locates the bad node.
        OperatorNotFoundError
            A leaf names an unknown operator.
        """
        for _path, error in _problems(data, _ROOT, allowed_fields):
            raise error
        spec = _build(data, registry, entity_type)
        logger.debug("Built specification %r from dict", spec)
        return spec

    @staticmethod
    def from_json(
        text: str,
        *,
        allowed_fields: Sequence[str] | None = None,
        registry: MemoryOperatorRegistry | None = None,
        entity_type: type[Any] = object,
    ) -> Specification[Any]:
        """Parse a JSON object and build the specification it describes."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Invalid JSON: {exc}", path=_ROOT) from exc
        if not isinstance(data, dict):
            raise ValidationError("Top-level JSON value must be an object", path=_ROOT)
        return SpecificationFactory.from_dict(
            data,
            allowed_fields=allowed_fields,
            registry=registry,
            entity_type=entity_type,
        )

    @staticmethod
    def validate(
        data: Any,
        *,
        allowed_fields: Sequence[str] | None = None,
    ) -> list[str]:
        """Every problem in ``data`` as ``"<path>: <message>"``; empty if valid."""
        return [
            f"{path}: {error}" for path, error in _problems(data, _ROOT, allowed_fields)
        ]


# ---------------------------------------------------------------------------
# Validation: one lazy pass. from_dict stops at the first problem,
# validate() drains the whole iterator.
# ---------------------------------------------------------------------------


def _problems(
    data: Any,
    path: str,
    allowed_fields: Sequence[str] | None,
) -> Iterator[tuple[str, SpecificationError]]:
    if not isinstance(data, dict):
        yield path, ValidationError(
            f"Expected a dict, got {type(data).__name__}", path=path
        )
        return
    if not data:
        if path != _ROOT:
            yield path, ValidationError("Only the root may be empty", path=path)
        return

    op = data.get("op")
    if not op or not isinstance(op, str):
        yield path, ValidationError("Missing or empty 'op' key", path=path)
        return
    op = op.lower()

    if op == NodeKind.IDENTITY:
        return
    if op == NodeKind.LEAF:
        yield path, ValidationError(
            f"Leaf '{data.get('name', '')}' has no structured condition "
            "and cannot be rebuilt",
            path=path,
        )
        return
    if op in (NodeKind.AND, NodeKind.OR, NodeKind.NOT):
        yield from _composite_problems(data, op, path, allowed_fields)
        return

    if op not in LEAF_OPERATOR_NAMES:
        yield path, OperatorNotFoundError(op, sorted(LEAF_OPERATOR_NAMES))
    attr = data.get("attr")
    if not attr or not isinstance(attr, str):
        yield path, ValidationError(f"Leaf missing 'attr': {data}", path=path)
    elif allowed_fields is not None and attr not in allowed_fields:
        yield path, ValidationError(
            f"Field '{attr}' is not in the allowed fields list", path=path
        )


def _composite_problems(
    data: dict[str, Any],
    op: str,
    path: str,
    allowed_fields: Sequence[str] | None,
) -> Iterator[tuple[str, SpecificationError]]:
    children = data.get("conditions")
    if not isinstance(children, list) or not children:
        yield path, ValidationError(
            f"'{op}' requires a non-empty 'conditions' list", path=path
        )
        return
    if op == NodeKind.NOT and len(children) != 1:
        yield path, ValidationError("'not' takes exactly one condition", path=path)
    for index, child in enumerate(children):
        yield from _problems(child, f"{path}.conditions[{index}]", allowed_fields)


# ---------------------------------------------------------------------------
# Construction (input already validated)
# ---------------------------------------------------------------------------


def _build(
    data: dict[str, Any],
    registry: MemoryOperatorRegistry | None,
    entity_type: type[Any],
) -> Specification[Any]:
    if not data:
        return Specification.all(entity_type)
    op = data["op"].lower()
    if op == NodeKind.IDENTITY:
        return Specification.all(entity_type)

    if op in (NodeKind.AND, NodeKind.OR, NodeKind.NOT):
        children = [_build(c, registry, entity_type) for c in data["conditions"]]
        if op == NodeKind.NOT:
            return children[0].not_()
        combine = Specification.and_ if op == NodeKind.AND else Specification.or_
        return functools.reduce(combine, children)

    val = data.get("val")
    if "value_type" in data:
        val = cast_value(val, data["value_type"])
    return AttributeSpecification(data["attr"], op, val, registry=registry)
