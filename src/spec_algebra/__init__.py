from .attribute import AttributeSpecification, resolve_field
from .base import Specification
from .builder import SpecificationBuilder
from .evaluator import MemoryOperator, MemoryOperatorRegistry
from .exceptions import (
    InvalidEntityError,
    OperatorNotFoundError,
    SpecificationError,
    UnsupportedOperatorError,
    UntranslatableSpecificationError,
    ValidationError,
)
from .factory import SpecificationFactory
from .operators import LEAF_OPERATORS, SpecificationOperator
from .operators_memory import (
    FunctionOperator,
    build_default_registry,
    default_registry,
)
from .registry import OperatorRegistry
from .tree import (
    AndNode,
    Condition,
    IdentityNode,
    LeafNode,
    NodeKind,
    NotNode,
    OrNode,
    Parameter,
    PredicateNode,
    PredicateTree,
)
from .utils import add_months, cast_value

__all__ = [
    # Core types
    "Specification",
    "SpecificationOperator",
    "LEAF_OPERATORS",
    "AttributeSpecification",
    "SpecificationFactory",
    # Predicate tree
    "PredicateTree",
    "PredicateNode",
    "NodeKind",
    "Parameter",
    "Condition",
    "LeafNode",
    "AndNode",
    "OrNode",
    "NotNode",
    "IdentityNode",
    # Builder
    "SpecificationBuilder",
    # Evaluator / strategy
    "OperatorRegistry",
    "MemoryOperator",
    "FunctionOperator",
    "MemoryOperatorRegistry",
    "build_default_registry",
    "default_registry",
    # Exceptions
    "SpecificationError",
    "InvalidEntityError",
    "ValidationError",
    "OperatorNotFoundError",
    "UnsupportedOperatorError",
    "UntranslatableSpecificationError",
    # Utilities
    "add_months",
    "cast_value",
    "resolve_field",
]
