"""Type-class normalisation of raw field strings.

Responsibilities:
- Literal-boolean substitution (per-field ``bool_true`` / ``bool_false``)
- Character-class filtering per ``TypeClass``
- Silent truncation to ``size.maximum``

Size-min and modulo are *not* checked here; the validator reports them.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from record_codec.core.constants import TRUE_LITERALS
from record_codec.core.exceptions import ConfigurationError
from record_codec.models.descriptor import TypeClass
from record_codec.utils.strings import (
    extract_alpha,
    extract_alpha_numeric,
    extract_alpha_numeric_symbols,
    extract_by_regex,
    extract_hex,
    extract_numeric,
    left,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from record_codec.models.descriptor import FieldDescriptor

logger = logging.getLogger("record_codec.engine")

# Base64 shares the printable-ASCII filter.
_CLASS_FILTERS: dict[TypeClass, Callable[[str], str]] = {
    TypeClass.ALPHA: extract_alpha,
    TypeClass.NUMERIC: extract_numeric,
    TypeClass.ALPHA_NUMERIC: extract_alpha_numeric,
    TypeClass.ALPHA_NUMERIC_SYMBOL: extract_alpha_numeric_symbols,
    TypeClass.HEX: extract_hex,
    TypeClass.BASE64: extract_alpha_numeric_symbols,
}


def substitute_bool_literals(text: str, descriptor: FieldDescriptor) -> str:
    """Map a per-field boolean literal to canonical ``true`` / ``false``."""
    folded = text.strip().casefold()
    if not folded:
        return text
    if descriptor.bool_true and folded == descriptor.bool_true.casefold():
        return "true"
    if descriptor.bool_false and folded == descriptor.bool_false.casefold():
        return "false"
    return text


def _is_true_literal(text: str, descriptor: FieldDescriptor) -> bool:
    folded = text.strip().casefold()
    if descriptor.bool_true and folded == descriptor.bool_true.casefold():
        return True
    return folded in TRUE_LITERALS


def _normalize_boolean(text: str, descriptor: FieldDescriptor, *, outbound: bool) -> str:
    if not text.strip():
        return ""
    truth = _is_true_literal(text, descriptor)
    if not outbound:
        return "true" if truth else "false"
    if truth:
        return descriptor.bool_true or "true"
    return descriptor.bool_false or "false"


def filter_by_class(text: str, descriptor: FieldDescriptor) -> str:
    """Apply the field's character-class filter (no truncation).

    Raises:
        ConfigurationError: The declared regex does not compile.
    """
    if descriptor.type_class is TypeClass.REGEX_FILTER:
        try:
            return extract_by_regex(text, descriptor.regex)
        except re.error as exc:
            msg = f"{descriptor.field_name}: invalid regex {descriptor.regex!r}: {exc}"
            raise ConfigurationError(msg, field_name=descriptor.field_name) from exc

    class_filter = _CLASS_FILTERS.get(descriptor.type_class)
    if class_filter is None:
        return text
    return class_filter(text)


def normalize(text: str, descriptor: FieldDescriptor, *, outbound: bool = False) -> str:
    """Filter *text* to the field's type class, then truncate to ``size.maximum``.

    Boolean fields map to ``true``/``false`` on the way in and to the
    field's boolean literals on the way out; they are never truncated.
    """
    if descriptor.type_class is TypeClass.BOOLEAN:
        return _normalize_boolean(text, descriptor, outbound=outbound)

    result = filter_by_class(text, descriptor)

    maximum = descriptor.size.maximum
    if maximum > 0 and len(result) > maximum:
        logger.debug(
            "Truncating field '%s' from %d to %d characters",
            descriptor.field_name,
            len(result),
            maximum,
        )
        result = left(result, maximum)
    return result
