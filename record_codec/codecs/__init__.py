"""Record codecs.

- ``PositionalLineCodec`` — delimited line, fields by ordinal slot
- ``PrefixedLineCodec``   — delimited line, fields by prefix token
- ``FlatJsonCodec``       — flat string-valued JSON object
- ``QueryStringCodec``    — ``name=value&...`` (encode only)

Use ``get_codec(name, ...)`` to select one by name.
"""

from record_codec.codecs.base import RecordCodec
from record_codec.codecs.factory import get_codec, list_codecs, register_codec, unregister_codec
from record_codec.codecs.flat_json import FlatJsonCodec
from record_codec.codecs.positional import PositionalLineCodec
from record_codec.codecs.prefixed import PrefixedLineCodec
from record_codec.codecs.query_string import QueryStringCodec

__all__ = [
    "FlatJsonCodec",
    "PositionalLineCodec",
    "PrefixedLineCodec",
    "QueryStringCodec",
    "RecordCodec",
    "get_codec",
    "list_codecs",
    "register_codec",
    "unregister_codec",
]
