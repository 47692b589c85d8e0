"""Unified codec exception taxonomy.

Every error raised by the marshaling engine inherits from ``CodecError``
and carries structured context fields (stage, code, offending field) so
that callers can report failures consistently.

Taxonomy categories
-------------------
- ``ConfigurationError``  — malformed descriptors or codec options.
- ``ExtractionError``     — the source representation lacks an expected element.
- ``ValidationError``     — size/range/modulo/required/expression failures.
- ``IndirectionError``    — getter/setter or type registry failures.
- ``SerializationError``  — structural encode failures, always wrapping the cause.

No error is retryable: every failure is terminal and surfaced exactly once.
Every exception exposes ``to_error_dict()`` for a stable structured payload.
"""

from __future__ import annotations


class CodecError(Exception):
    """Base exception for all marshaling-engine errors.

    Attributes:
        message: Human-readable error description.
        stage: Engine stage where the error occurred
            (e.g. ``"descriptor"``, ``"unmarshal"``).
        code: Machine-readable error code (e.g. ``"FIELD_VALIDATION_FAILED"``).
        field_name: Record field the error refers to (empty when not field-specific).
        record_type: Name of the record class being processed, if known.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        field_name: str = "",
        record_type: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.field_name = field_name
        self.record_type = record_type
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ConfigurationError):
            return "configuration"
        if isinstance(self, ExtractionError):
            return "extraction"
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, IndirectionError):
            return "indirection"
        if isinstance(self, SerializationError):
            return "serialization"
        return "codec"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "field_name": self.field_name,
            "record_type": self.record_type,
        }


# ---------------------------------------------------------------------------
# Category classes
# ---------------------------------------------------------------------------


class ConfigurationError(CodecError):
    """Malformed descriptor combination or codec option."""

    default_stage = "descriptor"
    default_code = "CODEC_CONFIGURATION_INVALID"


class ExtractionError(CodecError):
    """An expected element is missing from the source representation."""

    default_stage = "extract"
    default_code = "ELEMENT_NOT_FOUND"


class ValidationError(CodecError):
    """A field value violates its declared rules.

    The message is always qualified with the field name, e.g.
    ``"qty Range Maximum is 100"``.
    """

    default_stage = "validate"
    default_code = "FIELD_VALIDATION_FAILED"


class IndirectionError(CodecError):
    """A getter/setter extension point failed or could not be resolved."""

    default_stage = "indirection"
    default_code = "INDIRECTION_FAILED"


class SerializationError(CodecError):
    """The structural encoder failed to produce output."""

    default_stage = "serialize"
    default_code = "SERIALIZATION_FAILED"
