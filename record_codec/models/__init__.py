"""Data models.

Defines the data structures used throughout the engine:
- FieldDescriptor: Parsed per-field configuration (size, range, indirection, ...)
- Expression nodes: Equals, NotEquals, Compare, Predicate
- ExtractedElement / ExclusivityClaims: Call-scoped working state
"""

from record_codec.models.descriptor import (
    FieldDescriptor,
    FieldType,
    Indirection,
    RangeRule,
    SizeRule,
    TypeClass,
)
from record_codec.models.elements import ExclusivityClaims, ExtractedElement
from record_codec.models.expression import (
    Compare,
    Equals,
    Expression,
    ExpressionOperator,
    NotEquals,
    Predicate,
)

__all__ = [
    "Compare",
    "Equals",
    "ExclusivityClaims",
    "Expression",
    "ExpressionOperator",
    "ExtractedElement",
    "FieldDescriptor",
    "FieldType",
    "Indirection",
    "NotEquals",
    "Predicate",
    "RangeRule",
    "SizeRule",
    "TypeClass",
]
