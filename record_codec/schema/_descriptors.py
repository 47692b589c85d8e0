"""Build ``FieldDescriptor`` sets from dataclass record types.

Descriptor parsing is pure introspection of the record type, so the
parsed set is cached per (record type, strictness).  Metadata never
changes for a given type; the cache is never invalidated during normal
operation.
"""

from __future__ import annotations

import dataclasses
import functools
import logging
import types
import typing
from typing import Any

from record_codec.core.constants import EXCLUDED_NAME, METADATA_KEY
from record_codec.core.exceptions import ConfigurationError
from record_codec.models.descriptor import FieldDescriptor, FieldType
from record_codec.schema._grammar import (
    parse_expression,
    parse_flag,
    parse_indirection,
    parse_position,
    parse_range,
    parse_required,
    parse_size,
    parse_type_class,
)

logger = logging.getLogger("record_codec.schema")

_CONTAINERS = (list, dict, set, tuple)

# ---------------------------------------------------------------------------
# Annotation analysis
# ---------------------------------------------------------------------------


def analyse_annotation(annotation: Any) -> FieldType:
    """Resolve a field annotation into its concrete base class.

    ``Optional[X]`` / ``X | None`` unwrap to ``X`` with ``optional=True``;
    unions of several concrete types and unresolvable annotations fall back
    to ``object``.
    """
    origin = typing.get_origin(annotation)

    if origin is typing.Union or origin is types.UnionType:
        members = typing.get_args(annotation)
        concrete = [m for m in members if m is not type(None)]
        optional = len(concrete) != len(members)
        if len(concrete) == 1:
            inner = analyse_annotation(concrete[0])
            return FieldType(
                base=inner.base,
                optional=optional or inner.optional,
                container=inner.container,
            )
        return FieldType(base=object, optional=optional)

    if origin is typing.Annotated:
        return analyse_annotation(typing.get_args(annotation)[0])

    if origin in _CONTAINERS:
        return FieldType(base=origin, container=origin)
    if annotation in _CONTAINERS:
        return FieldType(base=annotation, container=annotation)

    if origin is None and isinstance(annotation, type):
        return FieldType(base=annotation)
    return FieldType(base=object)


# ---------------------------------------------------------------------------
# Descriptor construction
# ---------------------------------------------------------------------------


def build_descriptor(
    field: dataclasses.Field[Any],
    annotation: Any,
    *,
    strict: bool = False,
) -> FieldDescriptor:
    """Parse one dataclass field's raw tags into a ``FieldDescriptor``."""
    raw: dict[str, Any] = dict(field.metadata.get(METADATA_KEY, {}))
    name = field.name

    def tag(key: str) -> str:
        value = raw.get(key, "")
        return "" if value is None else str(value)

    position, virtual = parse_position(tag("pos"), field_name=name, strict=strict)
    type_class, regex = parse_type_class(tag("type"), tag("regex"), field_name=name)
    wire_name = tag("name").strip() or name

    return FieldDescriptor(
        field_name=name,
        wire_name=wire_name,
        field_type=analyse_annotation(annotation),
        position=position,
        virtual=virtual,
        type_class=type_class,
        regex=regex,
        size=parse_size(tag("size"), field_name=name, strict=strict),
        value_range=parse_range(tag("range"), field_name=name, strict=strict),
        required=parse_required(tag("req")),
        default=tag("def"),
        validation=parse_expression(tag("validate"), field_name=name),
        getter=parse_indirection(tag("getter"), tag="getter", field_name=name),
        setter=parse_indirection(tag("setter"), tag="setter", field_name=name),
        bool_true=tag("booltrue").strip(),
        bool_false=tag("boolfalse").strip(),
        time_format=tag("timeformat").strip(),
        out_prefix=tag("outprefix").strip(),
        unique_id=tag("uniqueid").strip().lower(),
        skip_blank=parse_flag(tag("skipblank")),
        skip_zero=parse_flag(tag("skipzero")),
        zero_blank=parse_flag(tag("zeroblank")),
        excluded=parse_flag(tag("exclude")) or wire_name == EXCLUDED_NAME,
    )


@functools.lru_cache(maxsize=256)
def _describe_type(record_type: type, strict: bool) -> tuple[FieldDescriptor, ...]:
    try:
        hints = typing.get_type_hints(record_type, include_extras=True)
    except (NameError, TypeError) as exc:
        msg = f"Cannot resolve annotations of {record_type.__name__}: {exc}"
        raise ConfigurationError(msg, record_type=record_type.__name__) from exc

    descriptors = tuple(
        build_descriptor(f, hints.get(f.name, str), strict=strict)
        for f in dataclasses.fields(record_type)
    )
    logger.debug(
        "Parsed %d field descriptor(s) for %s (strict=%s)",
        len(descriptors),
        record_type.__name__,
        strict,
    )
    return descriptors


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def describe(record_type: type, *, strict: bool = False) -> tuple[FieldDescriptor, ...]:
    """Return the descriptor set of a dataclass record type, in declaration order.

    Raises:
        ConfigurationError: If *record_type* is not a dataclass type, its
            annotations cannot be resolved, or a tag is malformed.
    """
    if not isinstance(record_type, type) or not dataclasses.is_dataclass(record_type):
        msg = f"Record type must be a dataclass, got {record_type!r}"
        raise ConfigurationError(msg)
    return _describe_type(record_type, strict)


def describe_record(record: object, *, strict: bool = False) -> tuple[FieldDescriptor, ...]:
    """Return the descriptor set for a record *instance*.

    Raises:
        ConfigurationError: If *record* is ``None``, a class, or not a dataclass.
    """
    if record is None or isinstance(record, type) or not dataclasses.is_dataclass(record):
        msg = f"Record must be a dataclass instance, got {type(record).__name__}"
        raise ConfigurationError(msg)
    return describe(type(record), strict=strict)


def clear_descriptor_cache() -> None:
    """Drop all cached descriptor sets (test isolation helper)."""
    _describe_type.cache_clear()
