"""Flat JSON codec — one JSON object of string values per record.

Only flat objects are accepted: every value must be a string, number,
boolean or ``null``.  Nested objects and arrays are rejected during
extraction.  Output values are always strings::

    {"code": "AB1", "qty": "55"}

Fields map to keys by their wire name (``name`` tag, else the attribute
name).  Fields tagged ``exclude`` or named ``"-"`` are ignored.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from pydantic import StrictBool, StrictFloat, StrictInt, StrictStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from record_codec.codecs.base import RecordCodec
from record_codec.core.exceptions import CodecError, ExtractionError, SerializationError
from record_codec.models.elements import ExclusivityClaims, ExtractedElement
from record_codec.utils.numbers import format_float

if TYPE_CHECKING:
    from record_codec.models.descriptor import FieldDescriptor

logger = logging.getLogger("record_codec.codecs")

FlatScalar = StrictStr | StrictBool | StrictInt | StrictFloat | None

_FLAT_OBJECT: TypeAdapter[dict[str, FlatScalar]] = TypeAdapter(dict[str, FlatScalar])


def scalar_to_text(value: Any) -> str:
    """Render a decoded JSON scalar as the raw string the pipeline expects."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_float(value)
    return str(value)


def parse_flat_object(payload: str | bytes) -> dict[str, FlatScalar]:
    """Decode *payload* as a flat JSON object.

    Raises:
        ExtractionError: Malformed JSON, a non-object document, nested
            values, or an empty object.
    """
    try:
        mapping = _FLAT_OBJECT.validate_json(payload)
    except PydanticValidationError as exc:
        first = exc.errors()[0] if exc.error_count() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        msg = f"Unmarshal Json Failed: {first.get('msg', exc)}"
        if location:
            msg = f"{msg} (at {location})"
        raise ExtractionError(msg) from exc

    if not mapping:
        msg = "Unmarshaled Json Map Has No Elements"
        raise ExtractionError(msg)
    return mapping


class FlatJsonCodec(RecordCodec):
    """Flat, string-valued JSON object codec."""

    name = "json"

    def to_mapping(self, record: Any) -> dict[str, str]:
        """Return the emitted ``wire name → text`` map for *record*.

        Raises:
            SerializationError: No field was emitted.
        """
        return self._mapping(record, self.describe(record))

    def _mapping(self, record: Any, descriptors: tuple[FieldDescriptor, ...]) -> dict[str, str]:
        claims = ExclusivityClaims()
        mapping: dict[str, str] = {}

        for descriptor in descriptors:
            if not descriptor.is_named_field:
                continue
            text = self._encode_field(record, descriptor, claims)
            if text is not None:
                mapping[descriptor.wire_name] = text

        if not mapping:
            msg = f"Marshal of {type(record).__name__} to JSON yielded blank output"
            raise SerializationError(msg, record_type=type(record).__name__)
        return mapping

    def _dumps(self, document: Any) -> str:
        try:
            return json.dumps(document, ensure_ascii=self._config.json_ensure_ascii)
        except (TypeError, ValueError) as exc:
            msg = f"JSON encode failed: {exc}"
            raise SerializationError(msg) from exc

    def _marshal(self, record: Any, descriptors: tuple[FieldDescriptor, ...]) -> str:
        return self._dumps(self._mapping(record, descriptors))

    def marshal_many(self, records: Iterable[Any]) -> str:
        """Serialise several records to a JSON array of flat objects.

        Raises:
            SerializationError: *records* is empty, or any record fails to
                marshal (the cause is chained).
        """
        documents: list[dict[str, str]] = []
        for index, record in enumerate(records):
            try:
                documents.append(self.to_mapping(record))
            except CodecError as exc:
                msg = f"Marshal of record {index} failed: {exc.message}"
                raise SerializationError(
                    msg,
                    field_name=exc.field_name,
                    record_type=type(record).__name__,
                ) from exc

        if not documents:
            msg = "No records to marshal"
            raise SerializationError(msg)
        return self._dumps(documents)

    def _unmarshal(
        self,
        payload: str,
        record: Any,
        descriptors: tuple[FieldDescriptor, ...],
    ) -> None:
        mapping = parse_flat_object(payload)
        logger.debug("Decoded %d JSON key(s) for %s", len(mapping), type(record).__name__)

        for descriptor in descriptors:
            if not descriptor.is_named_field:
                continue
            key = descriptor.wire_name
            if key in mapping:
                element = ExtractedElement(value=scalar_to_text(mapping[key]), key=key)
            else:
                element = ExtractedElement.missing()
            self._decode_field(record, descriptor, element)
