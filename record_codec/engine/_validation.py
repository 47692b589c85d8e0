"""Field validation — size, range, required and expression rules.

Every failure raises ``ValidationError`` carrying the field name and a
human-readable message.  The validator never substitutes a value.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from record_codec.core.exceptions import IndirectionError, ValidationError
from record_codec.engine._conversion import is_numeric_type
from record_codec.models.descriptor import TypeClass
from record_codec.models.expression import Compare, Equals, NotEquals, Predicate
from record_codec.utils.numbers import parse_float, parse_int
from record_codec.utils.strings import contains_fold

if TYPE_CHECKING:
    from record_codec.models.descriptor import FieldDescriptor

logger = logging.getLogger("record_codec.engine")


def _fail(descriptor: FieldDescriptor, message: str) -> ValidationError:
    return ValidationError(message, field_name=descriptor.field_name)


def _range_applies(descriptor: FieldDescriptor) -> bool:
    if not descriptor.value_range.present:
        return False
    if descriptor.type_class is TypeClass.NUMERIC:
        return True
    return is_numeric_type(descriptor.field_type.base)


# ---------------------------------------------------------------------------
# Size / range
# ---------------------------------------------------------------------------


def validate_text(text: str, descriptor: FieldDescriptor) -> None:
    """Check size-min, modulo and numeric range of a normalised value.

    Raises:
        ValidationError: On the first rule the value violates.
    """
    name = descriptor.field_name
    size = descriptor.size

    if text and size.minimum > 0 and len(text) < size.minimum:
        raise _fail(descriptor, f"{name} Min Length is {size.minimum}")

    if text and size.modulo > 0 and len(text) % size.modulo != 0:
        raise _fail(descriptor, f"{name} Length Must Be a Multiple of {size.modulo}")

    if not _range_applies(descriptor):
        return

    number = 0
    if text.strip():
        number, ok = parse_int(text)
        if not ok:
            raise _fail(descriptor, f"{name} Must Be Numeric")

    value_range = descriptor.value_range
    if value_range.minimum is not None and number < value_range.minimum:
        # zero stands for "not given" on optional fields
        if number != 0 or descriptor.is_required:
            raise _fail(descriptor, f"{name} Range Minimum is {value_range.minimum}")

    if value_range.maximum is not None and number > value_range.maximum:
        raise _fail(descriptor, f"{name} Range Maximum is {value_range.maximum}")


def check_required(text: str, descriptor: FieldDescriptor) -> None:
    """Raise ``ValidationError`` when a required field ends up empty."""
    if descriptor.is_required and not text.strip():
        raise _fail(descriptor, f"{descriptor.field_name} is a Required Field")


# ---------------------------------------------------------------------------
# Expression evaluation
# ---------------------------------------------------------------------------


def _evaluate_predicate(record: Any, descriptor: FieldDescriptor, method: str) -> None:
    name = descriptor.field_name
    predicate = getattr(record, method, None)
    if not callable(predicate):
        msg = f"{name}: validation predicate '{method}' not found on {type(record).__name__}"
        raise IndirectionError(msg, field_name=name, record_type=type(record).__name__)

    try:
        result = predicate()
    except ValidationError:
        raise
    except Exception as exc:
        raise _fail(descriptor, f"{name} Failed Validation {method}: {exc}") from exc

    if isinstance(result, BaseException):
        raise _fail(descriptor, f"{name} Failed Validation {method}: {result}") from result
    if result is False:
        raise _fail(descriptor, f"{name} Failed Validation {method}")


def evaluate_expression(record: Any, descriptor: FieldDescriptor, text: str) -> None:
    """Evaluate the field's validation expression against *text*.

    Equality rules are enforced only when the value is non-empty or the
    field is required; numeric comparisons skip empty optional values.

    Raises:
        ValidationError: The value does not satisfy the expression.
        IndirectionError: A predicate names a method the record lacks.
    """
    expression = descriptor.validation
    if expression is None:
        return

    name = descriptor.field_name
    has_content = bool(text.strip())

    if isinstance(expression, Equals):
        if not has_content and not descriptor.is_required:
            return
        if not contains_fold(expression.values, text):
            allowed = ", ".join(expression.values)
            raise _fail(descriptor, f"{name} Must Be One Of {allowed}")
        return

    if isinstance(expression, NotEquals):
        if not has_content and not descriptor.is_required:
            return
        if contains_fold(expression.values, text):
            raise _fail(descriptor, f"{name} Must Not Be {text}")
        return

    if isinstance(expression, Compare):
        if not has_content and not descriptor.is_required:
            return
        value, value_ok = parse_float(text)
        operand, operand_ok = parse_float(expression.operand)
        if not value_ok or not operand_ok:
            condition = f"{expression.operator.value}{expression.operand}"
            msg = f"{name} Comparison {condition} Requires Numbers"
            raise _fail(descriptor, msg)
        if not expression.holds(value, operand):
            msg = f"{name} Must Satisfy {expression.operator.value}{expression.operand}"
            raise _fail(descriptor, msg)
        return

    if isinstance(expression, Predicate):
        _evaluate_predicate(record, descriptor, expression.method)
        return

    logger.warning("Unhandled expression %r on field '%s'", expression, name)
