"""Value pipeline shared by every codec.

Stages (private modules):
- **_conversion**: zero values, typed value ↔ string
- **_normalization**: literal-boolean substitution, class filter, truncation
- **_validation**: size / range / required rules and expression evaluation
- **_indirection**: ``Gettable`` / ``Settable`` and named getter/setter dispatch
- **_lifecycle**: clearing, field copying, population check, defaults, rollback

``type_registry`` is public: packages register concrete factories for
polymorphic fields at import time.
"""

from __future__ import annotations

from record_codec.engine._conversion import (
    is_compatible,
    is_zero,
    string_to_value,
    value_to_string,
    zero_value,
)
from record_codec.engine._indirection import (
    Gettable,
    Settable,
    allocate,
    apply_getter,
    apply_setter,
    has_setter,
)
from record_codec.engine._lifecycle import (
    clear_record,
    copy_fields,
    ensure_mutable,
    is_record_populated,
    resolve_default,
    rollback_on_failure,
)
from record_codec.engine._normalization import (
    filter_by_class,
    normalize,
    substitute_bool_literals,
)
from record_codec.engine._validation import (
    check_required,
    evaluate_expression,
    validate_text,
)
from record_codec.engine.type_registry import (
    clear_type_registry,
    get_type_factory,
    list_types,
    register_type,
    unregister_type,
)

__all__ = [
    "Gettable",
    "Settable",
    "allocate",
    "apply_getter",
    "apply_setter",
    "check_required",
    "clear_record",
    "clear_type_registry",
    "copy_fields",
    "ensure_mutable",
    "evaluate_expression",
    "filter_by_class",
    "get_type_factory",
    "has_setter",
    "is_compatible",
    "is_record_populated",
    "is_zero",
    "list_types",
    "normalize",
    "register_type",
    "resolve_default",
    "rollback_on_failure",
    "string_to_value",
    "substitute_bool_literals",
    "unregister_type",
    "validate_text",
    "value_to_string",
    "zero_value",
]
