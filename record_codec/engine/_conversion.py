"""Conversion between typed field values and their wire strings.

Responsibilities:
- Zero value for a resolved field type
- Zero detection used by defaulting and skip rules
- Typed value → string (marshal), including skip/zero-blank flags
- String → typed value (unmarshal), including the Optional wrapper path
"""

from __future__ import annotations

import datetime
import enum
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from record_codec.core.constants import TRUE_LITERALS
from record_codec.core.exceptions import ConfigurationError, ValidationError
from record_codec.utils.numbers import format_float, parse_float, parse_int

if TYPE_CHECKING:
    from record_codec.core.config import CodecConfig
    from record_codec.models.descriptor import FieldDescriptor, FieldType

_NUMERIC_TYPES = (int, float, Decimal)


def is_enum_type(base: Any) -> bool:
    return isinstance(base, type) and issubclass(base, enum.Enum)


def is_numeric_type(base: Any) -> bool:
    """``int``, ``float`` or ``Decimal`` (``bool`` and enums excluded)."""
    if not isinstance(base, type) or base is bool or is_enum_type(base):
        return False
    return issubclass(base, _NUMERIC_TYPES)


# ---------------------------------------------------------------------------
# Zero values
# ---------------------------------------------------------------------------


def zero_value(field_type: FieldType) -> Any:
    """Return the zero/absent value for a field of *field_type*."""
    if field_type.optional:
        return None
    if field_type.container is not None:
        return field_type.container()

    base = field_type.base
    if base is str:
        return ""
    if base is bool:
        return False
    if is_enum_type(base):
        return zero_value_of_enum(base)
    if is_numeric_type(base):
        return base()
    return None


def is_zero(value: Any) -> bool:
    """Return ``True`` for ``None``, blank strings, ``False``, numeric zero,
    empty collections and enum members with a falsy value."""
    if value is None:
        return True
    if isinstance(value, enum.Enum):
        return not value.value
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, bool):
        return value is False
    if isinstance(value, _NUMERIC_TYPES):
        return value == 0
    if isinstance(value, (list, dict, set, tuple)):
        return len(value) == 0
    return False


# ---------------------------------------------------------------------------
# Marshal direction
# ---------------------------------------------------------------------------


def _time_format(value: datetime.date, descriptor: FieldDescriptor, config: CodecConfig) -> str:
    if descriptor.time_format:
        return descriptor.time_format
    if isinstance(value, datetime.datetime):
        return config.time_format
    return config.date_format


def value_to_string(
    value: Any,
    descriptor: FieldDescriptor,
    config: CodecConfig,
) -> tuple[str, bool]:
    """Render *value* for the wire.

    Returns:
        ``(text, skip)`` where *skip* is ``True`` when the field's
        skip-blank / skip-zero flags say the value must not be emitted.
    """
    if value is None:
        return "", descriptor.skip_zero or descriptor.skip_blank

    if isinstance(value, bool):
        if not value and descriptor.skip_zero:
            return "", True
        if value and descriptor.bool_true:
            return descriptor.bool_true, False
        if not value and descriptor.bool_false and descriptor.bool_false != descriptor.bool_true:
            return descriptor.bool_false, False
        return ("true" if value else "false"), False

    if isinstance(value, enum.Enum):
        if not value.value and descriptor.skip_zero:
            return "", True
        text = value.value if isinstance(value.value, str) else value.name
        return text, False

    if isinstance(value, str):
        if descriptor.skip_blank and not value.strip():
            return "", True
        return value, False

    if isinstance(value, _NUMERIC_TYPES):
        if value == 0:
            if descriptor.skip_zero:
                return "", True
            if descriptor.zero_blank:
                return "", False
        if isinstance(value, float):
            return format_float(value), False
        return str(value), False

    if isinstance(value, datetime.date):
        return value.strftime(_time_format(value, descriptor, config)), False

    if isinstance(value, (list, dict, set, tuple)) and not value:
        return "", descriptor.skip_zero or descriptor.skip_blank

    return str(value), False


# ---------------------------------------------------------------------------
# Unmarshal direction
# ---------------------------------------------------------------------------


def _parse_enum(text: str, base: type[enum.Enum], descriptor: FieldDescriptor) -> enum.Enum | None:
    folded = text.strip().casefold()
    for member in base:
        if str(member.value).casefold() == folded or member.name.casefold() == folded:
            return member

    number, ok = parse_int(text)
    if ok:
        for member in base:
            if member.value == number:
                return member

    if not folded:
        return zero_value_of_enum(base)

    msg = f"{descriptor.field_name} Is Not a Valid {base.__name__}"
    raise ValidationError(msg, field_name=descriptor.field_name)


def zero_value_of_enum(base: type[enum.Enum]) -> enum.Enum | None:
    """First member with a falsy value, or ``None`` when the enum has none."""
    for member in base:
        if not member.value:
            return member
    return None


def _parse_time(
    text: str,
    base: type,
    descriptor: FieldDescriptor,
    config: CodecConfig,
) -> datetime.date:
    is_datetime = issubclass(base, datetime.datetime)
    fmt = descriptor.time_format or (config.time_format if is_datetime else config.date_format)
    try:
        parsed = datetime.datetime.strptime(text.strip(), fmt)
    except ValueError as exc:
        msg = f"{descriptor.field_name} Is Not a Valid Time ({fmt})"
        raise ValidationError(msg, field_name=descriptor.field_name) from exc
    return parsed if is_datetime else parsed.date()


def string_to_value(
    text: str,
    field_type: FieldType,
    descriptor: FieldDescriptor,
    config: CodecConfig,
) -> Any:
    """Convert a normalised wire string into a value for *field_type*.

    Numeric parsing is tolerant: unparseable numbers become zero (range
    validation has already reported them when a range is declared).

    Raises:
        ValidationError: Malformed date/time or unknown enum literal.
        ConfigurationError: The field type has no string conversion and no
            setter was declared.
    """
    base = field_type.base

    if not text.strip() and field_type.optional:
        return None

    if base is str or base is object:
        return text

    if base is bool:
        folded = text.strip().lower()
        if descriptor.bool_true and folded == descriptor.bool_true.lower():
            return True
        return folded in TRUE_LITERALS

    if is_enum_type(base):
        return _parse_enum(text, base, descriptor)

    if is_numeric_type(base):
        if issubclass(base, int):
            return base(parse_int(text)[0])
        if issubclass(base, float):
            return base(parse_float(text)[0])
        try:
            return base(text.strip() or "0")
        except InvalidOperation:
            return base()

    if isinstance(base, type) and issubclass(base, datetime.date):
        if not text.strip():
            return None
        return _parse_time(text, base, descriptor, config)

    msg = (
        f"{descriptor.field_name}: type {getattr(base, '__name__', base)!r} "
        "cannot be read from a string without a setter"
    )
    raise ConfigurationError(msg, field_name=descriptor.field_name)


def is_compatible(result: Any, field_type: FieldType) -> bool:
    """Return ``True`` when a setter *result* may be assigned to the field as-is."""
    if result is None:
        return field_type.optional or field_type.base is object
    base = field_type.base
    if base is object:
        return True
    if isinstance(result, bool) and base is not bool:
        return False
    if not isinstance(base, type):
        return False
    return isinstance(result, base)
