"""Tests for getter/setter indirection and the type registry.

Covers: Gettable/Settable capabilities, named getters on the value and
on the record, ``(x)`` value passing, setter ``(value, error)`` results,
allocation of absent, collection and polymorphic targets.
"""

from __future__ import annotations

import abc
import unittest
from typing import Any

import pytest

from record_codec.core.exceptions import IndirectionError
from record_codec.engine import (
    Gettable,
    Settable,
    allocate,
    apply_getter,
    apply_setter,
    clear_type_registry,
    get_type_factory,
    has_setter,
    list_types,
    register_type,
    unregister_type,
)
from record_codec.models import FieldDescriptor, FieldType, Indirection


def make(**kwargs: Any) -> FieldDescriptor:
    kwargs.setdefault("field_name", "f")
    kwargs.setdefault("wire_name", kwargs["field_name"])
    return FieldDescriptor(**kwargs)


class Money:
    """Value type implementing both capabilities."""

    def __init__(self, cents: int = 0) -> None:
        self.cents = cents

    def codec_get(self) -> str:
        return f"{self.cents / 100:.2f}"

    def codec_set(self, raw: str) -> Money:
        return Money(round(float(raw) * 100))

    def key(self) -> str:
        return f"M{self.cents}"


class Shape(abc.ABC):
    @abc.abstractmethod
    def area(self) -> float: ...


class Square(Shape):
    def __init__(self) -> None:
        self.side = 0

    def area(self) -> float:
        return float(self.side * self.side)

    def parse(self, raw: str) -> None:
        self.side = int(raw)


class Record:
    def __init__(self) -> None:
        self.f: Any = None
        self.calls: list[str] = []

    def describe_f(self, current: str) -> str:
        self.calls.append(current)
        return f"<{current}>"

    def total(self) -> int:
        return 42

    def set_pair(self, raw: str) -> tuple[Any, Any]:
        if raw == "bad":
            return None, ValueError("rejected")
        return raw.upper(), None

    def set_inplace(self, raw: str) -> None:
        self.f = f"set:{raw}"

    def explode(self, raw: str) -> str:
        msg = "kaboom"
        raise RuntimeError(msg)


class TestCapabilities:
    def test_runtime_protocols(self) -> None:
        assert isinstance(Money(), Gettable)
        assert isinstance(Money(), Settable)
        assert not isinstance("text", Gettable)

    def test_gettable_used_without_tag(self) -> None:
        assert apply_getter(Record(), make(), Money(1250)) == "12.50"

    def test_settable_type_has_setter(self) -> None:
        assert has_setter(make(field_type=FieldType(base=Money)))
        assert not has_setter(make(field_type=FieldType(base=str)))

    def test_settable_used_without_tag(self) -> None:
        d = make(field_type=FieldType(base=Money, optional=True))
        result = apply_setter(Record(), d, "3.10")
        assert isinstance(result, Money)
        assert result.cents == 310


class TestNamedGetter:
    def test_on_value(self) -> None:
        d = make(getter=Indirection(method="key"))
        assert apply_getter(Record(), d, Money(7)) == "M7"

    def test_on_record_without_value(self) -> None:
        d = make(getter=Indirection(method="total", on_record=True))
        assert apply_getter(Record(), d, None) == 42

    def test_pass_value(self) -> None:
        record = Record()
        d = make(getter=Indirection(method="describe_f", on_record=True, pass_value=True))
        assert apply_getter(record, d, "abc", "abc") == "<abc>"
        assert record.calls == ["abc"]

    def test_missing_method(self) -> None:
        d = make(getter=Indirection(method="absent", on_record=True))
        with pytest.raises(IndirectionError, match="method 'absent' not found on Record"):
            apply_getter(Record(), d, None)


class TestNamedSetter:
    def test_pair_ok(self) -> None:
        d = make(setter=Indirection(method="set_pair", on_record=True))
        assert apply_setter(Record(), d, "abc") == "ABC"

    def test_pair_error_aborts(self) -> None:
        d = make(setter=Indirection(method="set_pair", on_record=True))
        with pytest.raises(IndirectionError, match="returned error: rejected") as ctx:
            apply_setter(Record(), d, "bad")
        assert isinstance(ctx.value.__cause__, ValueError)

    def test_in_place_record_setter(self) -> None:
        record = Record()
        d = make(setter=Indirection(method="set_inplace", on_record=True))
        assert apply_setter(record, d, "x") == "set:x"

    def test_raised_exception_wrapped(self) -> None:
        d = make(setter=Indirection(method="explode", on_record=True))
        with pytest.raises(IndirectionError, match="kaboom"):
            apply_setter(Record(), d, "x")

    def test_field_setter_on_allocated_value(self, type_registry: None) -> None:
        register_type(Shape, Square)
        d = make(
            field_type=FieldType(base=Shape, optional=True), setter=Indirection(method="parse")
        )
        result = apply_setter(Record(), d, "4")
        assert isinstance(result, Square)
        assert result.area() == 16.0


class TestAllocate:
    def test_container(self) -> None:
        assert allocate(make(field_type=FieldType(base=list, container=list))) == []

    def test_existing_value_kept(self) -> None:
        money = Money(5)
        assert allocate(make(field_type=FieldType(base=Money)), money) is money

    def test_concrete_type(self) -> None:
        assert isinstance(allocate(make(field_type=FieldType(base=Money, optional=True))), Money)

    def test_polymorphic_requires_registration(self, type_registry: None) -> None:
        d = make(field_type=FieldType(base=Shape, optional=True))
        with pytest.raises(IndirectionError, match="no registered type for 'Shape'"):
            allocate(d)

    def test_polymorphic_from_registry(self, type_registry: None) -> None:
        register_type("Shape", Square)
        assert isinstance(allocate(make(field_type=FieldType(base=Shape))), Square)


class TestTypeRegistry(unittest.TestCase):
    """Explicit registration API."""

    def setUp(self) -> None:
        clear_type_registry()

    def tearDown(self) -> None:
        clear_type_registry()

    def test_register_by_type(self) -> None:
        register_type(Shape, Square)
        assert get_type_factory("Shape") is Square
        assert list_types() == ["Shape"]

    def test_unregister(self) -> None:
        register_type(Shape, Square)
        unregister_type(Shape)
        assert get_type_factory(Shape) is None

    def test_factory_must_be_callable(self) -> None:
        from record_codec.core.exceptions import ConfigurationError

        with self.assertRaises(ConfigurationError):
            register_type("Shape", "not callable")  # type: ignore[arg-type]
