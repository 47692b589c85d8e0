"""Getter/setter indirection — custom formatting and parsing hooks.

Two ways for a record to take over conversion of a field:

1. **Capabilities** — the field's value type implements ``Gettable``
   (``codec_get()``) and/or ``Settable`` (``codec_set(raw)``).  No tag is
   needed.
2. **Named methods** — the ``getter`` / ``setter`` tags name a method on
   the field value, or on the record when prefixed with ``base.``.

Before a setter runs on the field value, an absent value, a collection or
a polymorphic value is materialised (see ``allocate``).  Polymorphic
types resolve through ``record_codec.engine.type_registry``.
"""

from __future__ import annotations

import enum
import inspect
import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from record_codec.core.exceptions import CodecError, IndirectionError
from record_codec.engine._conversion import zero_value_of_enum
from record_codec.engine.type_registry import get_type_factory

if TYPE_CHECKING:
    from collections.abc import Callable

    from record_codec.models.descriptor import FieldDescriptor

logger = logging.getLogger("record_codec.engine")


@runtime_checkable
class Gettable(Protocol):
    """Field value that renders itself for marshal."""

    def codec_get(self) -> Any: ...


@runtime_checkable
class Settable(Protocol):
    """Field value that parses a raw wire string into itself.

    ``codec_set`` returns the new value, a ``(value, error)`` pair, or
    ``None`` after updating itself in place.
    """

    def codec_set(self, raw: str) -> Any: ...


def _record_name(record: Any) -> str:
    return type(record).__name__


def _resolve(
    target: Any, method: str, descriptor: FieldDescriptor, record: Any
) -> Callable[..., Any]:
    bound = getattr(target, method, None)
    if not callable(bound):
        msg = f"{descriptor.field_name}: method '{method}' not found on {type(target).__name__}"
        raise IndirectionError(
            msg, field_name=descriptor.field_name, record_type=_record_name(record)
        )
    return bound


def _invoke(
    bound: Callable[..., Any],
    args: tuple[Any, ...],
    descriptor: FieldDescriptor,
    record: Any,
) -> Any:
    try:
        return bound(*args)
    except CodecError:
        raise
    except Exception as exc:
        name = getattr(bound, "__name__", repr(bound))
        msg = f"{descriptor.field_name}: {name} failed: {exc}"
        raise IndirectionError(
            msg, field_name=descriptor.field_name, record_type=_record_name(record)
        ) from exc


def _unpack(result: Any, descriptor: FieldDescriptor, record: Any, method: str) -> Any:
    """Split a ``(value, error)`` pair, raising on a non-``None`` error."""
    if descriptor.field_type.container is tuple:
        return result
    if not (isinstance(result, tuple) and len(result) == 2):
        return result

    value, error = result
    if error is None:
        return value

    msg = f"{descriptor.field_name}: {method} returned error: {error}"
    exc = IndirectionError(msg, field_name=descriptor.field_name, record_type=_record_name(record))
    if isinstance(error, BaseException):
        raise exc from error
    raise exc


# ---------------------------------------------------------------------------
# Allocation
# ---------------------------------------------------------------------------


def _is_polymorphic(base: Any) -> bool:
    if base is object:
        return True
    if not isinstance(base, type):
        return True
    return inspect.isabstract(base) or bool(getattr(base, "_is_protocol", False))


def allocate(descriptor: FieldDescriptor, current: Any = None) -> Any:
    """Return a concrete value a field-level setter can be invoked on.

    Raises:
        IndirectionError: A polymorphic type has no registry entry, or the
            concrete type cannot be constructed without arguments.
    """
    field_type = descriptor.field_type
    if field_type.container is not None:
        return current if current else field_type.container()
    if current is not None:
        return current

    base = field_type.base
    if isinstance(base, type) and issubclass(base, enum.Enum):
        zero = zero_value_of_enum(base)
        return zero if zero is not None else next(iter(base))

    if _is_polymorphic(base):
        type_name = getattr(base, "__qualname__", str(base))
        factory = get_type_factory(type_name)
        if factory is None:
            msg = f"{descriptor.field_name}: no registered type for '{type_name}'"
            raise IndirectionError(msg, field_name=descriptor.field_name)
        logger.debug(
            "Allocating '%s' for field '%s' from registry", type_name, descriptor.field_name
        )
        return factory()

    try:
        return base()
    except TypeError as exc:
        msg = f"{descriptor.field_name}: cannot allocate {base.__name__}: {exc}"
        raise IndirectionError(msg, field_name=descriptor.field_name) from exc


# ---------------------------------------------------------------------------
# Getter / setter
# ---------------------------------------------------------------------------


def apply_getter(
    record: Any, descriptor: FieldDescriptor, value: Any, current_text: str = ""
) -> Any:
    """Return the value to emit for a field, after its getter (if any).

    *current_text* is the field's stringified value, passed to getters
    declared with the ``(x)`` suffix.
    """
    getter = descriptor.getter
    if getter is None:
        if isinstance(value, Gettable):
            return _invoke(value.codec_get, (), descriptor, record)
        return value

    target = record if getter.on_record else value
    bound = _resolve(target, getter.method, descriptor, record)
    args = (current_text,) if getter.pass_value else ()
    return _invoke(bound, args, descriptor, record)


def has_setter(descriptor: FieldDescriptor) -> bool:
    """Field declares a setter or its type implements ``Settable``."""
    if descriptor.setter is not None:
        return True
    base = descriptor.field_type.base
    return isinstance(base, type) and callable(getattr(base, "codec_set", None))


def apply_setter(record: Any, descriptor: FieldDescriptor, text: str, current: Any = None) -> Any:
    """Run the field's setter on *text* and return the resulting value.

    A setter that returns ``None`` is taken to have updated its target in
    place: the allocated target (field setters) or the record's current
    attribute (``base.`` setters) is returned.

    Raises:
        IndirectionError: Missing method, a raised exception, or a
            non-``None`` error in a ``(value, error)`` result.
    """
    setter = descriptor.setter

    if setter is not None and setter.on_record:
        bound = _resolve(record, setter.method, descriptor, record)
        raw = _invoke(bound, (text,), descriptor, record)
        result = _unpack(raw, descriptor, record, setter.method)
        if result is None:
            return getattr(record, descriptor.field_name)
        return result

    target = allocate(descriptor, current)
    if setter is not None:
        method = setter.method
        bound = _resolve(target, method, descriptor, record)
    elif isinstance(target, Settable):
        method = "codec_set"
        bound = target.codec_set
    else:
        msg = f"{descriptor.field_name}: {type(target).__name__} has no setter"
        raise IndirectionError(
            msg, field_name=descriptor.field_name, record_type=_record_name(record)
        )

    result = _unpack(_invoke(bound, (text,), descriptor, record), descriptor, record, method)
    return target if result is None else result
