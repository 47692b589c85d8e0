"""Query-string codec (encode only).

Each emitted field becomes a ``name=value`` token; both sides are
percent-escaped and tokens are joined with ``&``.  The output prefix, if
any, is prepended to the value before escaping.  ``unmarshal`` raises
``ConfigurationError`` without touching the record.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from record_codec.codecs.base import RecordCodec
from record_codec.core.exceptions import SerializationError
from record_codec.models.elements import ExclusivityClaims

if TYPE_CHECKING:
    from record_codec.models.descriptor import FieldDescriptor


class QueryStringCodec(RecordCodec):
    """``name=value&...`` encoder."""

    name = "query"
    encode_only = True

    def _marshal(self, record: Any, descriptors: tuple[FieldDescriptor, ...]) -> str:
        claims = ExclusivityClaims()
        tokens: list[str] = []

        for descriptor in descriptors:
            if not descriptor.is_named_field:
                continue
            text = self._encode_field(record, descriptor, claims)
            if text is None:
                continue
            key = quote(descriptor.wire_name, safe="")
            tokens.append(f"{key}={quote(descriptor.out_prefix + text, safe='')}")

        if not tokens:
            msg = f"Marshal of {type(record).__name__} to query string yielded blank output"
            raise SerializationError(msg)
        return "&".join(tokens)
