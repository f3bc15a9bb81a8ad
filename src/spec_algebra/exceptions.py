"""
Errors raised by the specification algebra.

Building and combining specifications never raises. Everything here
comes from one of three places: evaluating against a malformed entity,
parsing dict/JSON input, or lowering a tree into a backend filter.

Each error renders to a flat dict through ``to_dict()``, keyed by a
stable ``error`` code, for API error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class SpecificationError(Exception):
    """Root of the hierarchy."""

    #: Stable error code; subclasses set it, the base falls back to its name.
    code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code or type(self).__name__, **self._details()}

    def _details(self) -> dict[str, Any]:
        return {"message": str(self)}


class InvalidEntityError(SpecificationError):
    """
    The candidate does not have the shape a leaf expects.

    Raised when a field path cannot be read from the entity (missing
    attribute or mapping key). A field that exists but holds ``None``
    is not an error.
    """

    code = "INVALID_ENTITY"

    def __init__(
        self,
        entity_type: str,
        detail: str,
        field_path: str | None = None,
    ) -> None:
        super().__init__(f"Invalid entity of type '{entity_type}': {detail}")
        self.entity_type = entity_type
        self.detail = detail
        self.field_path = field_path

    def _details(self) -> dict[str, Any]:
        return {
            "entity_type": self.entity_type,
            "detail": self.detail,
            "field_path": self.field_path,
        }


class ValidationError(SpecificationError):
    """A dict/JSON specification is malformed at ``path``."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def _details(self) -> dict[str, Any]:
        return {"message": self.message, "path": self.path}


class OperatorNotFoundError(SpecificationError):
    """An operator name that is not in the vocabulary, with close matches."""

    code = "OPERATOR_NOT_FOUND"

    def __init__(self, operator: str, valid_operators: list[str]) -> None:
        self.operator = operator
        self.valid_operators = sorted(valid_operators)
        self.suggestions = get_close_matches(operator, self.valid_operators, n=3)
        message = f"Unknown operator: '{operator}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(
            f"{message} "
            f"Valid operators: {', '.join(self.valid_operators)}"
        )

    def _details(self) -> dict[str, Any]:
        return {
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": self.valid_operators,
        }


class UnsupportedOperatorError(SpecificationError, ValueError):
    """An operator has no strategy in the registry being used."""

    code = "UNSUPPORTED_OPERATOR"

    def __init__(self, operator: Any, backend: str) -> None:
        self.operator = getattr(operator, "value", operator)
        self.backend = backend
        super().__init__(f"Unsupported operator for {backend}: {self.operator}")

    def _details(self) -> dict[str, Any]:
        return {"operator": self.operator, "backend": self.backend}


class UntranslatableSpecificationError(SpecificationError):
    """
    A translator met a leaf it cannot lower.

    Leaves built only from an opaque evaluator carry no structured
    condition; they can be evaluated in memory but not exported to a
    query backend.
    """

    code = "UNTRANSLATABLE_SPECIFICATION"

    def __init__(self, leaf_name: str, backend: str) -> None:
        self.leaf_name = leaf_name
        self.backend = backend
        super().__init__(
            f"Leaf '{leaf_name or '<anonymous>'}' has no structured condition "
            f"and cannot be translated for {backend}"
        )

    def _details(self) -> dict[str, Any]:
        return {"leaf": self.leaf_name, "backend": self.backend}
