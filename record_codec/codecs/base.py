"""RecordCodec abstract base class.

Defines the contract every wire-format codec implements and the shared
per-field pipeline they all run:

    extract → literal-boolean substitution → class-normalise →
    indirection → validate → expression-validate → assign / emit

Lifecycle of one call:
    - ``marshal(record)``            — read the record, return the wire string.
    - ``unmarshal(payload, record)`` — clear the record, decode the payload
      into it, and clear it again if anything fails.

Concrete codecs (``PositionalLineCodec``, ``PrefixedLineCodec``,
``FlatJsonCodec``, ``QueryStringCodec``) only implement element
extraction and placement.
"""

from __future__ import annotations

import abc
import logging
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from record_codec.core.config import CodecConfig
from record_codec.core.constants import UNKNOWN_SENTINEL
from record_codec.core.exceptions import CodecError, ConfigurationError, ExtractionError
from record_codec.engine._conversion import (
    is_compatible,
    is_zero,
    string_to_value,
    value_to_string,
)
from record_codec.engine._indirection import Gettable, apply_getter, apply_setter, has_setter
from record_codec.engine._lifecycle import (
    clear_record,
    ensure_mutable,
    resolve_default,
    rollback_on_failure,
)
from record_codec.engine._normalization import normalize, substitute_bool_literals
from record_codec.engine._validation import check_required, evaluate_expression, validate_text
from record_codec.models.elements import ExclusivityClaims, ExtractedElement
from record_codec.schema import describe_record

if TYPE_CHECKING:
    from record_codec.models.descriptor import FieldDescriptor

logger = logging.getLogger("record_codec.codecs")

R = TypeVar("R")


def _tag_record(exc: CodecError, record: Any) -> None:
    if not exc.record_type:
        exc.record_type = type(record).__name__


class RecordCodec(abc.ABC):
    """Abstract base class for record codecs.

    Codecs hold no per-call state, so one instance may be shared between
    threads and used on any number of records.
    """

    #: Registry name of the codec (see ``record_codec.codecs.factory``).
    name: ClassVar[str] = ""

    #: Encode-only codecs reject ``unmarshal`` before touching the record.
    encode_only: ClassVar[bool] = False

    def __init__(self, *, config: CodecConfig | None = None) -> None:
        self._config = config or CodecConfig()

    @property
    def config(self) -> CodecConfig:
        """Return the codec configuration (read-only)."""
        return self._config

    def describe(self, record: Any) -> tuple[FieldDescriptor, ...]:
        """Return the descriptor set for *record* under this codec's strictness."""
        return describe_record(record, strict=self._config.strict_descriptors)

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------

    def marshal(self, record: Any) -> str:
        """Serialise *record* to this codec's wire format.

        The record is never modified, defaults included.

        Raises:
            ConfigurationError, ValidationError, IndirectionError,
            SerializationError: The first failing field, in declaration order.
        """
        descriptors = self.describe(record)
        try:
            return self._marshal(record, descriptors)
        except CodecError as exc:
            _tag_record(exc, record)
            raise

    def unmarshal(self, payload: str, record: R) -> R:
        """Decode *payload* into *record* and return it.

        The record is cleared first.  On any failure every described field
        is reset to its zero value before the error propagates.

        Raises:
            ConfigurationError, ExtractionError, ValidationError,
            IndirectionError: The first failing field, in declaration order.
        """
        if self.encode_only:
            msg = f"{type(self).__name__} is encode-only"
            raise ConfigurationError(msg, record_type=type(record).__name__)

        descriptors = self.describe(record)
        ensure_mutable(record)
        clear_record(record, descriptors)

        try:
            with rollback_on_failure(record, descriptors):
                if payload is None or not payload.strip():
                    msg = f"{type(self).__name__} payload is required"
                    raise ExtractionError(msg)
                self._unmarshal(payload, record, descriptors)
        except CodecError as exc:
            _tag_record(exc, record)
            raise
        return record

    # ------------------------------------------------------------------
    # Codec hooks
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def _marshal(self, record: Any, descriptors: tuple[FieldDescriptor, ...]) -> str:
        """Place every emitted field value and return the wire string."""

    def _unmarshal(
        self,
        payload: str,
        record: Any,
        descriptors: tuple[FieldDescriptor, ...],
    ) -> None:
        """Extract every field's element from *payload* and decode it into *record*.

        Every codec that is not ``encode_only`` overrides this.
        """
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Shared per-field pipeline
    # ------------------------------------------------------------------

    def _decode_field(
        self, record: Any, descriptor: FieldDescriptor, element: ExtractedElement
    ) -> None:
        """Run one extracted element through the pipeline and assign it."""
        config = self._config
        text = element.value if element.found else ""

        if not text.strip() and descriptor.has_default:
            text = descriptor.default

        text = substitute_bool_literals(text, descriptor)
        text = normalize(text, descriptor)

        assigned = False
        value: Any = None
        if has_setter(descriptor):
            result = apply_setter(record, descriptor, text, getattr(record, descriptor.field_name))
            if is_compatible(result, descriptor.field_type):
                value = result
                assigned = True
                text = value_to_string(result, descriptor, config)[0]
            else:
                text = normalize(value_to_string(result, descriptor, config)[0], descriptor)

        validate_text(text, descriptor)

        if not assigned:
            value = string_to_value(text, descriptor.field_type, descriptor, config)
        setattr(record, descriptor.field_name, value)

        evaluate_expression(record, descriptor, text)
        check_required(text, descriptor)

    def _encode_field(
        self,
        record: Any,
        descriptor: FieldDescriptor,
        claims: ExclusivityClaims,
    ) -> str | None:
        """Return the field's wire text, or ``None`` when it is not emitted."""
        config = self._config
        name = descriptor.field_name
        group = descriptor.unique_id

        if group:
            if claims.is_claimed_by_other(group, name):
                return None
            claims.claim(group, name)

        value = getattr(record, name)
        zero = is_zero(value) and not isinstance(value, bool)

        if zero and descriptor.has_default:
            text = resolve_default(record, descriptor, config)
        else:
            text, skip = value_to_string(value, descriptor, config)
            if descriptor.getter is not None or isinstance(value, Gettable):
                value = apply_getter(record, descriptor, value, text)
                text, skip = value_to_string(value, descriptor, config)
            if zero and text.strip().casefold() == UNKNOWN_SENTINEL:
                skip = True
            if skip:
                if group:
                    claims.release(group, name)
                return None

        text = normalize(text, descriptor, outbound=True)
        if descriptor.skip_blank and not text.strip():
            if group:
                claims.release(group, name)
            return None

        validate_text(text, descriptor)
        evaluate_expression(record, descriptor, text)
        check_required(text, descriptor)

        logger.debug("Encoded field '%s' of %s", name, type(record).__name__)
        return text
