"""Typed models for parsed field descriptors.

A ``FieldDescriptor`` is the structured form of the raw tags attached to a
dataclass field.  Descriptors are derived from the record *type* only and
never hold per-record state, so a descriptor set can be shared between
concurrent calls.

Design notes:
- All models are frozen dataclasses.
- Absent bounds are ``None``; ``0`` is a real bound.
- ``SizeRule`` uses ``0`` for "no constraint" because a zero length limit
  carries no meaning.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from record_codec.models.expression import Expression


class TypeClass(enum.Enum):
    """Character class a field value is filtered to.

    Values are the short codes accepted by the ``type`` tag.
    """

    ALPHA = "a"
    NUMERIC = "n"
    ALPHA_NUMERIC = "an"
    ALPHA_NUMERIC_SYMBOL = "ans"
    HEX = "h"
    BASE64 = "b64"
    BOOLEAN = "b"
    REGEX_FILTER = "regex"
    UNCONSTRAINED = ""


@dataclass(frozen=True, slots=True)
class SizeRule:
    """Length rule parsed from the ``size`` tag.

    Attributes:
        minimum: Minimum length of a non-empty value (0 = none).
        maximum: Maximum length; longer values are truncated (0 = none).
        modulo: Final length must be a multiple of this (0 = none).
    """

    minimum: int = 0
    maximum: int = 0
    modulo: int = 0


@dataclass(frozen=True, slots=True)
class RangeRule:
    """Numeric range parsed from the ``range`` tag.

    ``None`` marks an absent bound; ``0`` is a bound like any other.
    """

    minimum: int | None = None
    maximum: int | None = None

    @property
    def present(self) -> bool:
        return self.minimum is not None or self.maximum is not None


@dataclass(frozen=True, slots=True)
class Indirection:
    """A named getter or setter extension point.

    Attributes:
        method: Method name to resolve.
        on_record: Resolve against the enclosing record instead of the field value.
        pass_value: Pass the field's current stringified value as the only argument
            (getters only; setters always receive the raw string).
    """

    method: str
    on_record: bool = False
    pass_value: bool = False


@dataclass(frozen=True, slots=True)
class FieldType:
    """Resolved annotation of a record field.

    Attributes:
        base: Concrete class after unwrapping ``Optional`` (``object`` when unknown).
        optional: The annotation admits ``None``.
        container: ``list``, ``dict``, ``set`` or ``tuple`` for collection fields.
    """

    base: Any = str
    optional: bool = False
    container: type | None = None


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Parsed per-field configuration.

    Attributes:
        field_name: Attribute name on the record.
        wire_name: Key used by the JSON and query-string codecs.
        field_type: Resolved annotation.
        position: Zero-based slot for line codecs, ``None`` when not positioned.
        virtual: Field has no slot and is computed by its setter.
        type_class: Character class filter.
        regex: Pattern for ``TypeClass.REGEX_FILTER``.
        size: Length rule.
        value_range: Numeric range rule.
        required: ``True``/``False`` when declared, ``None`` when unset.
        default: Default literal (empty string = no default).
        validation: Parsed validation expression.
        getter: Marshal-side indirection.
        setter: Unmarshal-side indirection.
        bool_true: Literal rendered for ``True`` (and accepted on input).
        bool_false: Literal rendered for ``False`` (and accepted on input).
        time_format: ``strftime`` format for date/time fields.
        out_prefix: Prefix token identifying the value in line output.
        unique_id: Exclusivity group key (lower-cased, empty = none).
        skip_blank: Omit blank strings on marshal.
        skip_zero: Omit zero numbers, ``False``, ``None`` on marshal.
        zero_blank: Render zero numbers as an empty string.
        excluded: Drop the field from JSON and query-string codecs.
    """

    field_name: str
    wire_name: str
    field_type: FieldType = field(default_factory=FieldType)
    position: int | None = None
    virtual: bool = False
    type_class: TypeClass = TypeClass.UNCONSTRAINED
    regex: str = ""
    size: SizeRule = field(default_factory=SizeRule)
    value_range: RangeRule = field(default_factory=RangeRule)
    required: bool | None = None
    default: str = ""
    validation: Expression | None = None
    getter: Indirection | None = None
    setter: Indirection | None = None
    bool_true: str = ""
    bool_false: str = ""
    time_format: str = ""
    out_prefix: str = ""
    unique_id: str = ""
    skip_blank: bool = False
    skip_zero: bool = False
    zero_blank: bool = False
    excluded: bool = False

    @property
    def is_required(self) -> bool:
        return self.required is True

    @property
    def has_default(self) -> bool:
        return len(self.default) > 0

    @property
    def is_line_field(self) -> bool:
        """Field takes part in the line codecs (positioned or virtual)."""
        return self.position is not None or self.virtual

    @property
    def is_named_field(self) -> bool:
        """Field takes part in the JSON and query-string codecs."""
        return not self.excluded
