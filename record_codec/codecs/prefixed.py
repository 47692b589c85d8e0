"""Prefixed-line codec — fields identified by a literal prefix token.

Each element of the line starts with the field's output prefix, e.g.
``"N:Alice|A:42"`` with prefixes ``N:`` and ``A:``.  Element order does
not matter on input.  On output, tokens are ordered by position and
unset fields are left out.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from record_codec.codecs._line import LineCodec, match_prefix
from record_codec.core.exceptions import ExtractionError
from record_codec.engine._lifecycle import is_record_populated
from record_codec.models.elements import ExclusivityClaims

if TYPE_CHECKING:
    from record_codec.models.descriptor import FieldDescriptor

logger = logging.getLogger("record_codec.codecs")


def _participates(descriptor: FieldDescriptor) -> bool:
    if descriptor.virtual:
        return False
    return bool(descriptor.out_prefix) or descriptor.position is not None


class PrefixedLineCodec(LineCodec):
    """Delimited line whose elements carry their own field prefixes."""

    name = "prefixed"

    def _marshal(self, record: Any, descriptors: tuple[FieldDescriptor, ...]) -> str:
        if not is_record_populated(record, descriptors):
            return ""

        claims = ExclusivityClaims()
        emitted: list[tuple[int, int, str]] = []
        for order, descriptor in enumerate(descriptors):
            if not _participates(descriptor):
                continue
            text = self._encode_field(record, descriptor, claims)
            if text is None:
                continue
            position = descriptor.position if descriptor.position is not None else len(descriptors)
            emitted.append((position, order, descriptor.out_prefix + text))

        emitted.sort()
        return self.join([token for _, _, token in emitted])

    def _unmarshal(
        self,
        payload: str,
        record: Any,
        descriptors: tuple[FieldDescriptor, ...],
    ) -> None:
        elements = self.split(payload)

        for descriptor in descriptors:
            if not _participates(descriptor):
                continue

            if descriptor.out_prefix:
                element = match_prefix(elements, descriptor.out_prefix)
                if not element.found and descriptor.is_required and not descriptor.has_default:
                    msg = f"{descriptor.field_name} Prefix {descriptor.out_prefix!r} Not Found"
                    raise ExtractionError(msg, field_name=descriptor.field_name)
            else:
                element = self._element_at(elements, descriptor)

            logger.debug(
                "Field '%s' matched element %s",
                descriptor.field_name,
                element.index,
            )
            self._decode_field(record, descriptor, element)

        self._decode_virtual(record, descriptors)
