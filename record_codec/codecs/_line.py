"""Shared plumbing for the delimited-line codecs.

A line is split into elements with, in order of precedence:
1. a caller-supplied tokenizer,
2. per-character splitting when ``no_delimiter=True``,
3. the delimiter (``CodecConfig.default_delimiter`` when not given).

Output is always joined with the delimiter, so a tokenizer must be paired
with the delimiter it splits on.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from record_codec.codecs.base import RecordCodec
from record_codec.core.exceptions import ConfigurationError, ExtractionError
from record_codec.models.elements import ExtractedElement

if TYPE_CHECKING:
    from record_codec.core.config import CodecConfig
    from record_codec.models.descriptor import FieldDescriptor

Tokenizer = Callable[[str], list[str]]


def match_prefix(elements: list[str], prefix: str) -> ExtractedElement:
    """Return the first element starting with *prefix* (case-insensitive), prefix stripped."""
    folded = prefix.casefold()
    for index, element in enumerate(elements):
        if element.casefold().startswith(folded):
            return ExtractedElement(value=element[len(prefix) :], index=index, prefix=prefix)
    return ExtractedElement.missing()


class LineCodec(RecordCodec):
    """Base for ``PositionalLineCodec`` and ``PrefixedLineCodec``."""

    def __init__(
        self,
        delimiter: str | None = None,
        *,
        tokenizer: Tokenizer | None = None,
        no_delimiter: bool = False,
        config: CodecConfig | None = None,
    ) -> None:
        super().__init__(config=config)
        if tokenizer is not None and not delimiter:
            name = type(self).__name__
            msg = f"{name} with a tokenizer requires the delimiter used to join output"
            raise ConfigurationError(msg)
        if no_delimiter:
            delimiter = ""
        elif delimiter is None:
            delimiter = self._config.default_delimiter
        elif not delimiter:
            msg = f"{type(self).__name__} requires a delimiter (or no_delimiter=True)"
            raise ConfigurationError(msg)
        self._delimiter = delimiter
        self._tokenizer = tokenizer

    @property
    def delimiter(self) -> str:
        return self._delimiter

    def split(self, payload: str) -> list[str]:
        """Split *payload* into line elements.

        Raises:
            ExtractionError: The payload yields no elements.
        """
        if self._tokenizer is not None:
            elements = list(self._tokenizer(payload))
        elif not self._delimiter:
            elements = list(payload)
        else:
            elements = payload.split(self._delimiter)

        if not elements:
            msg = "Line payload contains zero elements"
            raise ExtractionError(msg)
        return elements

    def join(self, tokens: list[str]) -> str:
        return self._delimiter.join(tokens)

    def _element_at(self, elements: list[str], descriptor: FieldDescriptor) -> ExtractedElement:
        position = descriptor.position
        if position is None or position >= len(elements):
            name = descriptor.field_name
            msg = f"{name} Position {position} Exceeds Line Elements ({len(elements)})"
            raise ExtractionError(msg, field_name=descriptor.field_name)
        return ExtractedElement(value=elements[position], index=position)

    def _locate(self, elements: list[str], descriptor: FieldDescriptor) -> ExtractedElement:
        """Find a field's element by its output prefix, else by its position."""
        if descriptor.out_prefix:
            return match_prefix(elements, descriptor.out_prefix)
        return self._element_at(elements, descriptor)

    def _decode_virtual(self, record: Any, descriptors: tuple[FieldDescriptor, ...]) -> None:
        """Compute virtual fields once every positioned field is assigned."""
        for descriptor in descriptors:
            if descriptor.virtual:
                self._decode_field(record, descriptor, ExtractedElement.missing())
