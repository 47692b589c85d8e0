"""Descriptor parsing — composable pipeline.

Turns the raw tags attached to dataclass fields into ``FieldDescriptor``
sets:

- **_grammar**: size/range/position/getter/setter/expression grammars
- **_descriptors**: annotation analysis, per-field construction, per-type cache
- **fields**: ``codec_field`` helper for declaring tags
"""

from __future__ import annotations

from record_codec.schema._descriptors import (
    analyse_annotation,
    build_descriptor,
    clear_descriptor_cache,
    describe,
    describe_record,
)
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
from record_codec.schema.fields import codec_field

__all__ = [
    "analyse_annotation",
    "build_descriptor",
    "clear_descriptor_cache",
    "codec_field",
    "describe",
    "describe_record",
    "parse_expression",
    "parse_flag",
    "parse_indirection",
    "parse_position",
    "parse_range",
    "parse_required",
    "parse_size",
    "parse_type_class",
]
