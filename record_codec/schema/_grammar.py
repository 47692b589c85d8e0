"""Tag grammars for the descriptor parser.

Responsibilities:
- Interval grammar shared by ``size`` and ``range`` (``N``, ``N..``, ``..M``,
  ``N..M``, optional ``+%K`` modulo suffix on ``size``)
- Position grammar (signed integer or ``virtual``)
- Getter/setter grammar (``base.`` prefix, ``(x)`` suffix)
- Validation-expression grammar
- Type-class and flag parsing

Malformed numeric tokens read as zero unless *strict* is set, in which
case ``ConfigurationError`` is raised.
"""

from __future__ import annotations

import logging

from record_codec.core.constants import (
    PASS_VALUE_SUFFIX,
    RECORD_TARGET_PREFIX,
    VIRTUAL_POSITION,
)
from record_codec.core.exceptions import ConfigurationError
from record_codec.models.descriptor import Indirection, RangeRule, SizeRule, TypeClass
from record_codec.models.expression import (
    Compare,
    Equals,
    Expression,
    ExpressionOperator,
    NotEquals,
    Predicate,
)
from record_codec.utils.numbers import parse_bool

logger = logging.getLogger("record_codec.schema")

_INTERVAL_SEPARATOR = ".."
_MODULO_MARKER = "+%"
_EQUAL_SEPARATOR = "||"
_NOT_EQUAL_SEPARATOR = "&&"

_TYPE_ALIASES: dict[str, TypeClass] = {
    "a": TypeClass.ALPHA,
    "alpha": TypeClass.ALPHA,
    "n": TypeClass.NUMERIC,
    "numeric": TypeClass.NUMERIC,
    "an": TypeClass.ALPHA_NUMERIC,
    "alphanumeric": TypeClass.ALPHA_NUMERIC,
    "ans": TypeClass.ALPHA_NUMERIC_SYMBOL,
    "alphanumericsymbol": TypeClass.ALPHA_NUMERIC_SYMBOL,
    "h": TypeClass.HEX,
    "hex": TypeClass.HEX,
    "b64": TypeClass.BASE64,
    "base64": TypeClass.BASE64,
    "b": TypeClass.BOOLEAN,
    "bool": TypeClass.BOOLEAN,
    "boolean": TypeClass.BOOLEAN,
    "regex": TypeClass.REGEX_FILTER,
    "": TypeClass.UNCONSTRAINED,
}

# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


def _number(token: str, *, tag: str, field_name: str, strict: bool) -> int:
    """Parse a numeric sub-token, reading malformed input as zero."""
    text = token.strip()
    try:
        return int(text)
    except ValueError:
        if strict:
            msg = f"{field_name}: malformed number {token!r} in {tag} tag"
            raise ConfigurationError(msg, field_name=field_name) from None
        logger.warning(
            "Malformed number %r in %s tag of field '%s'; reading as 0",
            token,
            tag,
            field_name,
        )
        return 0


def _interval(
    text: str, *, tag: str, field_name: str, strict: bool
) -> tuple[int | None, int | None]:
    if _INTERVAL_SEPARATOR not in text:
        exact = _number(text, tag=tag, field_name=field_name, strict=strict)
        return exact, exact

    low_text, high_text = text.split(_INTERVAL_SEPARATOR, 1)
    low = None
    high = None
    if low_text.strip():
        low = _number(low_text, tag=tag, field_name=field_name, strict=strict)
    if high_text.strip():
        high = _number(high_text, tag=tag, field_name=field_name, strict=strict)
    return low, high


# ---------------------------------------------------------------------------
# size / range
# ---------------------------------------------------------------------------


def parse_size(text: str, *, field_name: str, strict: bool = False) -> SizeRule:
    """Parse a ``size`` tag (``N``, ``N..``, ``..M``, ``N..M``, ``...+%K``)."""
    text = text.strip().lower()
    if not text:
        return SizeRule()

    modulo = 0
    if _MODULO_MARKER in text:
        text, modulo_text = text.split(_MODULO_MARKER, 1)
        modulo = _number(modulo_text, tag="size", field_name=field_name, strict=strict)
        text = text.strip()

    if not text:
        return SizeRule(modulo=max(modulo, 0))

    low, high = _interval(text, tag="size", field_name=field_name, strict=strict)
    return SizeRule(minimum=max(low or 0, 0), maximum=max(high or 0, 0), modulo=max(modulo, 0))


def parse_range(text: str, *, field_name: str, strict: bool = False) -> RangeRule:
    """Parse a ``range`` tag; absent bounds stay ``None``."""
    text = text.strip().lower()
    if not text:
        return RangeRule()
    low, high = _interval(text, tag="range", field_name=field_name, strict=strict)
    return RangeRule(minimum=low, maximum=high)


# ---------------------------------------------------------------------------
# position
# ---------------------------------------------------------------------------


def parse_position(text: str, *, field_name: str, strict: bool = False) -> tuple[int | None, bool]:
    """Parse a ``pos`` tag.

    Returns:
        ``(position, virtual)``.  ``position`` is ``None`` when the field is
        not positioned (absent, negative, or malformed in lenient mode).
    """
    text = text.strip()
    if not text:
        return None, False
    if text.lower() == VIRTUAL_POSITION:
        return None, True
    try:
        position = int(text)
    except ValueError:
        if strict:
            msg = f"{field_name}: malformed position {text!r}"
            raise ConfigurationError(msg, field_name=field_name) from None
        logger.warning("Malformed position %r on field '%s'; field ignored", text, field_name)
        return None, False
    if position < 0:
        return None, False
    return position, False


# ---------------------------------------------------------------------------
# getter / setter
# ---------------------------------------------------------------------------


def parse_indirection(text: str, *, tag: str, field_name: str) -> Indirection | None:
    """Parse a ``getter``/``setter`` tag such as ``base.Method(x)``."""
    method = text.strip()
    if not method:
        return None

    on_record = method.lower().startswith(RECORD_TARGET_PREFIX)
    if on_record:
        method = method[len(RECORD_TARGET_PREFIX) :]

    pass_value = method.lower().endswith(PASS_VALUE_SUFFIX)
    if pass_value:
        method = method[: -len(PASS_VALUE_SUFFIX)]

    method = method.strip()
    if not method.isidentifier():
        msg = f"{field_name}: {tag} {text!r} does not name a method"
        raise ConfigurationError(msg, field_name=field_name)
    return Indirection(method=method, on_record=on_record, pass_value=pass_value)


# ---------------------------------------------------------------------------
# validation expression
# ---------------------------------------------------------------------------


def parse_expression(text: str, *, field_name: str) -> Expression | None:
    """Parse a ``validate`` tag into an expression node.

    Raises:
        ConfigurationError: On an unknown operator, a missing comparison
            operand, or a predicate that is not a method name.
    """
    text = text.strip()
    if not text:
        return None

    try:
        operator = ExpressionOperator(text[:2])
    except ValueError:
        msg = f"{field_name}: unknown validation operator in {text!r}"
        raise ConfigurationError(msg, field_name=field_name) from None

    operand = text[2:].strip()

    if operator is ExpressionOperator.EQUAL:
        return Equals(values=tuple(v.strip() for v in operand.split(_EQUAL_SEPARATOR)))
    if operator is ExpressionOperator.NOT_EQUAL:
        return NotEquals(values=tuple(v.strip() for v in operand.split(_NOT_EQUAL_SEPARATOR)))
    if operator is ExpressionOperator.PREDICATE:
        if not operand.isidentifier():
            msg = f"{field_name}: predicate {operand!r} is not a method name"
            raise ConfigurationError(msg, field_name=field_name)
        return Predicate(method=operand)

    if not operand:
        msg = f"{field_name}: comparison {text!r} has no operand"
        raise ConfigurationError(msg, field_name=field_name)
    return Compare(operator=operator, operand=operand)


# ---------------------------------------------------------------------------
# type class / flags
# ---------------------------------------------------------------------------


def parse_type_class(text: str, regex: str, *, field_name: str) -> tuple[TypeClass, str]:
    """Resolve the ``type`` tag, demoting unusable combinations to UNCONSTRAINED."""
    key = text.strip().lower().replace("_", "").replace("-", "")
    type_class = _TYPE_ALIASES.get(key)
    if type_class is None:
        logger.warning("Unknown type class %r on field '%s'; unconstrained", text, field_name)
        return TypeClass.UNCONSTRAINED, ""

    if type_class is not TypeClass.REGEX_FILTER:
        return type_class, ""
    if not regex.strip():
        logger.warning("Regex type without pattern on field '%s'; unconstrained", field_name)
        return TypeClass.UNCONSTRAINED, ""
    return type_class, regex.strip()


def parse_required(text: str) -> bool | None:
    """Tri-state ``req`` tag: ``True``, ``False`` or ``None`` when unset."""
    value, ok = parse_bool(text)
    return value if ok else None


def parse_flag(text: str) -> bool:
    """Boolean flag tag; anything unrecognised is ``False``."""
    return parse_bool(text)[0]
