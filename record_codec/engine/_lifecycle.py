"""Record lifecycle — clearing, population checks, defaults and rollback.

An unmarshal call either fully succeeds or leaves the record at its
zero state: ``rollback_on_failure`` wraps the per-record operation and
clears every field before the error propagates.
"""

from __future__ import annotations

import contextlib
import copy
import dataclasses
import logging
from typing import TYPE_CHECKING, Any, TypeVar

from record_codec.core.exceptions import ConfigurationError
from record_codec.engine._conversion import is_zero, value_to_string, zero_value
from record_codec.engine._indirection import apply_setter, has_setter

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from record_codec.core.config import CodecConfig
    from record_codec.models.descriptor import FieldDescriptor

logger = logging.getLogger("record_codec.engine")

R = TypeVar("R")


def ensure_mutable(record: Any) -> None:
    """Raise ``ConfigurationError`` for frozen dataclass records."""
    params = getattr(type(record), "__dataclass_params__", None)
    if params is not None and params.frozen:
        msg = f"Record {type(record).__name__} is frozen and cannot be written to"
        raise ConfigurationError(msg, record_type=type(record).__name__)


def copy_fields(source: Any, target: R) -> R:
    """Copy every field of *source* that *target* also declares, by name.

    Both records must be dataclass instances and *target* must not be
    frozen.  Fields present on only one side are left alone.  Returns
    *target*.
    """
    for name, record in (("source", source), ("target", target)):
        if not dataclasses.is_dataclass(record) or isinstance(record, type):
            msg = f"copy_fields {name} must be a dataclass instance, got {type(record).__name__}"
            raise ConfigurationError(msg)
    ensure_mutable(target)

    shared = {f.name for f in dataclasses.fields(target)}
    copied = 0
    for field in dataclasses.fields(source):
        if field.name in shared:
            setattr(target, field.name, getattr(source, field.name))
            copied += 1
    logger.debug(
        "Copied %d field(s) from %s to %s", copied, type(source).__name__, type(target).__name__
    )
    return target


def clear_record(record: Any, descriptors: Sequence[FieldDescriptor]) -> None:
    """Reset every described field of *record* to its zero/absent value."""
    for descriptor in descriptors:
        setattr(record, descriptor.field_name, zero_value(descriptor.field_type))


def is_record_populated(record: Any, descriptors: Sequence[FieldDescriptor]) -> bool:
    """Return ``True`` if any described field holds a non-zero value."""
    return any(not is_zero(getattr(record, d.field_name, None)) for d in descriptors)


@contextlib.contextmanager
def rollback_on_failure(record: Any, descriptors: Sequence[FieldDescriptor]) -> Iterator[Any]:
    """Clear *record* if the wrapped block raises, then re-raise."""
    try:
        yield record
    except Exception:
        clear_record(record, descriptors)
        logger.debug("Rolled back %s after failed unmarshal", type(record).__name__)
        raise


def resolve_default(record: Any, descriptor: FieldDescriptor, config: CodecConfig) -> str:
    """Return the wire text of the field's default, routed through its setter.

    Field-level setters run on a freshly allocated value and ``base.``
    setters run on a shallow copy of *record*, so the caller's record is
    left untouched.
    """
    if not has_setter(descriptor):
        return descriptor.default
    target = record
    if descriptor.setter is not None and descriptor.setter.on_record:
        target = copy.copy(record)
    value = apply_setter(target, descriptor, descriptor.default)
    if value is None:
        return descriptor.default
    return value_to_string(value, descriptor, config)[0]
