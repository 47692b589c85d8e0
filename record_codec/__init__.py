"""Declarative marshaling of flat dataclass records.

Records are plain (non-frozen) dataclasses whose fields carry codec tags
declared with ``codec_field``.  A codec reads those tags to convert the
record to and from one of four flat wire shapes: positional delimited
lines, prefixed delimited lines, flat JSON objects and query strings.

Example::

    from dataclasses import dataclass

    from record_codec import PositionalLineCodec, codec_field

    @dataclass
    class Order:
        code: str = codec_field(default="", pos=0, type_class="an", size="3..3", req=True)
        qty: int = codec_field(default=0, pos=1, type_class="n", value_range="0..100")

    order = PositionalLineCodec(",").unmarshal("AB1,55", Order())
"""

from record_codec.codecs import (
    FlatJsonCodec,
    PositionalLineCodec,
    PrefixedLineCodec,
    QueryStringCodec,
    RecordCodec,
    get_codec,
    list_codecs,
    register_codec,
    unregister_codec,
)
from record_codec.core.config import CodecConfig, ConfigValidationError
from record_codec.core.exceptions import (
    CodecError,
    ConfigurationError,
    ExtractionError,
    IndirectionError,
    SerializationError,
    ValidationError,
)
from record_codec.engine import (
    Gettable,
    Settable,
    clear_record,
    clear_type_registry,
    copy_fields,
    get_type_factory,
    is_record_populated,
    list_types,
    register_type,
    unregister_type,
)
from record_codec.schema import codec_field, describe

__version__ = "0.1.0"

__all__ = [
    "CodecConfig",
    "CodecError",
    "ConfigValidationError",
    "ConfigurationError",
    "ExtractionError",
    "FlatJsonCodec",
    "Gettable",
    "IndirectionError",
    "PositionalLineCodec",
    "PrefixedLineCodec",
    "QueryStringCodec",
    "RecordCodec",
    "SerializationError",
    "Settable",
    "ValidationError",
    "clear_record",
    "clear_type_registry",
    "codec_field",
    "copy_fields",
    "describe",
    "get_codec",
    "get_type_factory",
    "is_record_populated",
    "list_codecs",
    "list_types",
    "register_codec",
    "register_type",
    "unregister_codec",
    "unregister_type",
]
