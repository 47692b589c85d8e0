"""Tests for the per-field value pipeline.

Covers: type-class normalisation and truncation, boolean literal mapping,
size/range/modulo/required validation (including the zero carve-out),
the expression evaluator, and typed value ↔ string conversion.
"""

from __future__ import annotations

import datetime
import enum
from decimal import Decimal

import pytest

from record_codec.core.config import CodecConfig
from record_codec.core.exceptions import ConfigurationError, IndirectionError, ValidationError
from record_codec.engine import (
    check_required,
    evaluate_expression,
    is_compatible,
    is_zero,
    normalize,
    string_to_value,
    substitute_bool_literals,
    validate_text,
    value_to_string,
    zero_value,
)
from record_codec.models import (
    Compare,
    Equals,
    ExpressionOperator,
    FieldDescriptor,
    FieldType,
    NotEquals,
    Predicate,
    RangeRule,
    SizeRule,
    TypeClass,
)

CONFIG = CodecConfig()


def make(**kwargs: object) -> FieldDescriptor:
    kwargs.setdefault("field_name", "f")
    kwargs.setdefault("wire_name", kwargs["field_name"])
    return FieldDescriptor(**kwargs)  # type: ignore[arg-type]


class Status(enum.Enum):
    UNKNOWN = 0
    ACTIVE = 1
    CLOSED = 2


class Checker:
    def __init__(self, outcome: object) -> None:
        self.outcome = outcome

    def check(self) -> object:
        if isinstance(self.outcome, type) and issubclass(self.outcome, Exception):
            raise self.outcome("exploded")
        return self.outcome


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------


class TestNormalize:
    """Type-class filters and size-max truncation."""

    @pytest.mark.parametrize(
        ("type_class", "raw", "expected"),
        [
            (TypeClass.ALPHA, "ab1-C", "abC"),
            (TypeClass.NUMERIC, "-1,234.5", "12345"),
            (TypeClass.ALPHA_NUMERIC, "A-B 1", "AB1"),
            (TypeClass.ALPHA_NUMERIC_SYMBOL, "a\tb!", "ab!"),
            (TypeClass.HEX, "0xG1F", "01F"),
            (TypeClass.BASE64, "QUJD+/=\n", "QUJD+/="),
            (TypeClass.UNCONSTRAINED, "any\tthing", "any\tthing"),
        ],
    )
    def test_class_filters(self, type_class: TypeClass, raw: str, expected: str) -> None:
        assert normalize(raw, make(type_class=type_class)) == expected

    def test_regex_filter_removes_matches(self) -> None:
        d = make(type_class=TypeClass.REGEX_FILTER, regex="[^0-9]+")
        assert normalize("ab12cd3", d) == "123"

    def test_invalid_regex(self) -> None:
        d = make(type_class=TypeClass.REGEX_FILTER, regex="[")
        with pytest.raises(ConfigurationError, match="invalid regex"):
            normalize("x", d)

    def test_truncates_to_size_max(self) -> None:
        d = make(size=SizeRule(minimum=3, maximum=5))
        assert normalize("ABCDEFG", d) == "ABCDE"

    def test_boolean_inbound(self) -> None:
        d = make(type_class=TypeClass.BOOLEAN)
        for raw in ("YES", "on", "Running", "started", "y", "1", "true"):
            assert normalize(raw, d) == "true"
        assert normalize("nope", d) == "false"
        assert normalize("", d) == ""

    def test_boolean_outbound_literals(self) -> None:
        d = make(type_class=TypeClass.BOOLEAN, bool_true="Y", bool_false="N")
        assert normalize("true", d, outbound=True) == "Y"
        assert normalize("false", d, outbound=True) == "N"

    def test_substitute_bool_literals(self) -> None:
        d = make(bool_true="Oui", bool_false="Non")
        assert substitute_bool_literals("oui", d) == "true"
        assert substitute_bool_literals("NON", d) == "false"
        assert substitute_bool_literals("peut-etre", d) == "peut-etre"


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestSizeValidation:
    """size 3..5: short fails, in-range passes, long truncates then passes."""

    d = make(size=SizeRule(minimum=3, maximum=5))

    def test_too_short(self) -> None:
        with pytest.raises(ValidationError, match="f Min Length is 3"):
            validate_text("AB", self.d)

    def test_in_range(self) -> None:
        validate_text("ABC", self.d)
        validate_text("ABCDE", self.d)

    def test_long_value_truncated_then_valid(self) -> None:
        validate_text(normalize("ABCDEFGH", self.d), self.d)

    def test_empty_skips_min(self) -> None:
        validate_text("", self.d)

    def test_modulo(self) -> None:
        d = make(size=SizeRule(modulo=2))
        validate_text("ABCD", d)
        with pytest.raises(ValidationError, match="Multiple of 2"):
            validate_text("ABC", d)


class TestRangeValidation:
    """Numeric range 10..20 with the zero carve-out."""

    d = make(type_class=TypeClass.NUMERIC, value_range=RangeRule(minimum=10, maximum=20))

    def test_zero_passes_when_not_required(self) -> None:
        validate_text("0", self.d)
        validate_text("", self.d)

    def test_zero_fails_when_required(self) -> None:
        d = make(
            type_class=TypeClass.NUMERIC,
            value_range=RangeRule(minimum=10, maximum=20),
            required=True,
        )
        with pytest.raises(ValidationError, match="Range Minimum is 10"):
            validate_text("0", d)

    def test_below_minimum(self) -> None:
        with pytest.raises(ValidationError, match="f Range Minimum is 10"):
            validate_text("5", self.d)

    def test_inside(self) -> None:
        validate_text("15", self.d)

    def test_above_maximum(self) -> None:
        with pytest.raises(ValidationError, match="f Range Maximum is 20"):
            validate_text("25", self.d)

    def test_zero_lower_bound_is_real(self) -> None:
        d = make(field_type=FieldType(base=int), value_range=RangeRule(minimum=0, maximum=None))
        with pytest.raises(ValidationError, match="Range Minimum is 0"):
            validate_text("-1", d)

    def test_unparseable(self) -> None:
        d = make(field_type=FieldType(base=int), value_range=RangeRule(maximum=5))
        with pytest.raises(ValidationError, match="Must Be Numeric"):
            validate_text("abc", d)

    def test_range_ignored_for_text_fields(self) -> None:
        validate_text("abc", make(value_range=RangeRule(maximum=5)))


class TestRequired:
    def test_required_empty(self) -> None:
        with pytest.raises(ValidationError, match="f is a Required Field") as ctx:
            check_required("  ", make(required=True))
        assert ctx.value.field_name == "f"

    def test_not_required(self) -> None:
        check_required("", make(required=False))
        check_required("", make())


class TestExpression:
    """The validation-expression evaluator."""

    def test_equals(self) -> None:
        d = make(validation=Equals(values=("A", "B")))
        evaluate_expression(None, d, "b")
        with pytest.raises(ValidationError, match="Must Be One Of A, B"):
            evaluate_expression(None, d, "C")

    def test_equals_skips_empty_optional(self) -> None:
        evaluate_expression(None, make(validation=Equals(values=("A",))), "")

    def test_equals_enforced_on_required_empty(self) -> None:
        d = make(validation=Equals(values=("A",)), required=True)
        with pytest.raises(ValidationError):
            evaluate_expression(None, d, "")

    def test_not_equals(self) -> None:
        d = make(validation=NotEquals(values=("X", "Y")))
        evaluate_expression(None, d, "Z")
        with pytest.raises(ValidationError, match="Must Not Be y"):
            evaluate_expression(None, d, "y")

    def test_compare(self) -> None:
        d = make(validation=Compare(operator=ExpressionOperator.LESS_EQUAL, operand="10"))
        evaluate_expression(None, d, "10")
        with pytest.raises(ValidationError, match="Must Satisfy <=10"):
            evaluate_expression(None, d, "11")

    def test_compare_strict_operators(self) -> None:
        greater = make(validation=Compare(operator=ExpressionOperator.GREATER, operand="0"))
        evaluate_expression(None, greater, "1")
        with pytest.raises(ValidationError):
            evaluate_expression(None, greater, "0")

    def test_compare_requires_numbers(self) -> None:
        d = make(validation=Compare(operator=ExpressionOperator.LESS, operand="10"))
        with pytest.raises(ValidationError, match="Requires Numbers"):
            evaluate_expression(None, d, "ten")

    def test_predicate_true(self) -> None:
        evaluate_expression(Checker(True), make(validation=Predicate(method="check")), "x")

    @pytest.mark.parametrize("outcome", [False, ValueError("bad"), ValueError])
    def test_predicate_failures(self, outcome: object) -> None:
        d = make(validation=Predicate(method="check"))
        with pytest.raises(ValidationError, match="Failed Validation check"):
            evaluate_expression(Checker(outcome), d, "x")

    def test_predicate_missing(self) -> None:
        d = make(validation=Predicate(method="nope"))
        with pytest.raises(IndirectionError, match="predicate 'nope' not found"):
            evaluate_expression(Checker(True), d, "x")


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


class TestZeroValues:
    def test_zero_values(self) -> None:
        assert zero_value(FieldType(base=str)) == ""
        assert zero_value(FieldType(base=int)) == 0
        assert zero_value(FieldType(base=float)) == 0.0
        assert zero_value(FieldType(base=Decimal)) == Decimal(0)
        assert zero_value(FieldType(base=bool)) is False
        assert zero_value(FieldType(base=int, optional=True)) is None
        assert zero_value(FieldType(base=list, container=list)) == []
        assert zero_value(FieldType(base=Status)) is Status.UNKNOWN
        assert zero_value(FieldType(base=datetime.datetime)) is None

    def test_is_zero(self) -> None:
        for value in (None, "", "  ", 0, 0.0, False, [], Status.UNKNOWN):
            assert is_zero(value)
        for value in ("x", 1, True, [1], Status.ACTIVE, datetime.date(2024, 1, 1)):
            assert not is_zero(value)


class TestValueToString:
    def test_numbers(self) -> None:
        assert value_to_string(55, make(), CONFIG) == ("55", False)
        assert value_to_string(2.5, make(), CONFIG) == ("2.5", False)
        assert value_to_string(3.0, make(), CONFIG) == ("3", False)
        assert value_to_string(Decimal("1.20"), make(), CONFIG) == ("1.20", False)

    def test_zero_flags(self) -> None:
        assert value_to_string(0, make(skip_zero=True), CONFIG) == ("", True)
        assert value_to_string(0, make(zero_blank=True), CONFIG) == ("", False)
        assert value_to_string(0, make(), CONFIG) == ("0", False)

    def test_skip_blank(self) -> None:
        assert value_to_string(" ", make(skip_blank=True), CONFIG) == ("", True)

    def test_bool_literals(self) -> None:
        d = make(bool_true="Y", bool_false="N")
        assert value_to_string(True, d, CONFIG) == ("Y", False)
        assert value_to_string(False, d, CONFIG) == ("N", False)
        assert value_to_string(False, make(skip_zero=True), CONFIG) == ("", True)
        assert value_to_string(True, make(), CONFIG) == ("true", False)

    def test_times(self) -> None:
        moment = datetime.datetime(2024, 3, 1, 12, 30, 0)
        assert value_to_string(moment, make(), CONFIG) == ("2024-03-01 12:30:00", False)
        assert value_to_string(moment, make(time_format="%Y%m%d"), CONFIG) == ("20240301", False)
        assert value_to_string(datetime.date(2024, 3, 1), make(), CONFIG) == ("2024-03-01", False)

    def test_enum_name(self) -> None:
        assert value_to_string(Status.ACTIVE, make(), CONFIG) == ("ACTIVE", False)


class TestStringToValue:
    def test_int_tolerant(self) -> None:
        assert string_to_value("12.7", FieldType(base=int), make(), CONFIG) == 12
        assert string_to_value("", FieldType(base=int), make(), CONFIG) == 0

    def test_optional_empty_is_none(self) -> None:
        assert string_to_value("", FieldType(base=int, optional=True), make(), CONFIG) is None
        assert string_to_value("4", FieldType(base=int, optional=True), make(), CONFIG) == 4

    def test_bool(self) -> None:
        assert string_to_value("true", FieldType(base=bool), make(), CONFIG) is True
        assert string_to_value("YES", FieldType(base=bool), make(), CONFIG) is True
        assert string_to_value("no", FieldType(base=bool), make(), CONFIG) is False

    def test_decimal_and_float(self) -> None:
        assert string_to_value("1.25", FieldType(base=Decimal), make(), CONFIG) == Decimal("1.25")
        assert string_to_value("1.25", FieldType(base=float), make(), CONFIG) == 1.25

    def test_enum_lookup(self) -> None:
        ft = FieldType(base=Status)
        assert string_to_value("active", ft, make(), CONFIG) is Status.ACTIVE
        assert string_to_value("2", ft, make(), CONFIG) is Status.CLOSED
        assert string_to_value("", ft, make(), CONFIG) is Status.UNKNOWN
        with pytest.raises(ValidationError, match="Is Not a Valid Status"):
            string_to_value("bogus", ft, make(), CONFIG)

    def test_datetime(self) -> None:
        ft = FieldType(base=datetime.datetime)
        parsed = string_to_value("2024-03-01 12:30:00", ft, make(), CONFIG)
        assert parsed == datetime.datetime(2024, 3, 1, 12, 30, 0)
        assert string_to_value("", ft, make(), CONFIG) is None
        with pytest.raises(ValidationError, match="Is Not a Valid Time"):
            string_to_value("yesterday", ft, make(), CONFIG)

    def test_date(self) -> None:
        ft = FieldType(base=datetime.date)
        assert string_to_value("2024-03-01", ft, make(), CONFIG) == datetime.date(2024, 3, 1)

    def test_custom_type_needs_setter(self) -> None:
        with pytest.raises(ConfigurationError, match="without a setter"):
            string_to_value("x", FieldType(base=Checker), make(), CONFIG)


class TestIsCompatible:
    def test_rules(self) -> None:
        assert is_compatible(5, FieldType(base=int))
        assert not is_compatible(True, FieldType(base=int))
        assert not is_compatible("5", FieldType(base=int))
        assert is_compatible(None, FieldType(base=int, optional=True))
        assert not is_compatible(None, FieldType(base=int))
        assert is_compatible(object(), FieldType(base=object))
