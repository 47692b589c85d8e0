"""Positional-line codec — fields addressed by zero-based ordinal slot.

Marshal allocates ``max(position) + 1`` slots seeded with the unset
placeholder.  Unset slots render as empty tokens, unless every emitted
field carries an output prefix: the line is then self-describing and the
placeholders are dropped.  On input, a field with an output prefix is found
by that prefix wherever it sits; other fields are read from their slot.

Example::

    @dataclass
    class Order:
        code: str = codec_field(default="", pos=0, type_class="an", size="3..3", req=True)
        qty: int = codec_field(default=0, pos=1, type_class="n", value_range="0..100")

    codec = PositionalLineCodec(",")
    codec.unmarshal("AB1,55", Order())   # Order(code="AB1", qty=55)
    codec.marshal(Order("AB1", 55))      # "AB1,55"
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from record_codec.codecs._line import LineCodec
from record_codec.core.constants import UNSET_SLOT
from record_codec.engine._lifecycle import is_record_populated
from record_codec.models.elements import ExclusivityClaims

if TYPE_CHECKING:
    from record_codec.models.descriptor import FieldDescriptor

logger = logging.getLogger("record_codec.codecs")


class PositionalLineCodec(LineCodec):
    """Delimited line with one slot per field position."""

    name = "positional"

    def _marshal(self, record: Any, descriptors: tuple[FieldDescriptor, ...]) -> str:
        positioned = [d for d in descriptors if d.position is not None]
        if not positioned or not is_record_populated(record, descriptors):
            return ""

        slots = [UNSET_SLOT] * (max(d.position for d in positioned) + 1)
        claims = ExclusivityClaims()
        emitted = 0
        all_prefixed = True

        for descriptor in positioned:
            text = self._encode_field(record, descriptor, claims)
            if text is None:
                continue
            slots[descriptor.position] = descriptor.out_prefix + text
            emitted += 1
            if not descriptor.out_prefix:
                all_prefixed = False

        if emitted and all_prefixed:
            tokens = [slot for slot in slots if slot != UNSET_SLOT]
        else:
            tokens = ["" if slot == UNSET_SLOT else slot for slot in slots]

        logger.debug(
            "Marshaled %d of %d slot(s) for %s", emitted, len(slots), type(record).__name__
        )
        return self.join(tokens)

    def _unmarshal(
        self,
        payload: str,
        record: Any,
        descriptors: tuple[FieldDescriptor, ...],
    ) -> None:
        elements = self.split(payload)

        for descriptor in descriptors:
            if descriptor.position is None:
                continue
            self._decode_field(record, descriptor, self._locate(elements, descriptor))

        self._decode_virtual(record, descriptors)
