"""Codec factory — selects a record codec by name.

Every codec class carries its registry key in the ``name`` class
attribute.  The built-in codecs are registered at import; custom codecs
are added with ``register_codec``.

Usage::

    from record_codec.codecs.factory import get_codec

    codec = get_codec("positional", delimiter="|")
    line = codec.marshal(order)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from record_codec.codecs.base import RecordCodec
from record_codec.codecs.flat_json import FlatJsonCodec
from record_codec.codecs.positional import PositionalLineCodec
from record_codec.codecs.prefixed import PrefixedLineCodec
from record_codec.codecs.query_string import QueryStringCodec
from record_codec.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from record_codec.core.config import CodecConfig

logger = logging.getLogger(__name__)

POSITIONAL = PositionalLineCodec.name
PREFIXED = PrefixedLineCodec.name
FLAT_JSON = FlatJsonCodec.name
QUERY_STRING = QueryStringCodec.name

_CODECS: dict[str, type[RecordCodec]] = {
    codec_cls.name: codec_cls
    for codec_cls in (PositionalLineCodec, PrefixedLineCodec, FlatJsonCodec, QueryStringCodec)
}


def register_codec(codec_cls: type[RecordCodec], *, name: str | None = None) -> None:
    """Register a custom codec class.

    Args:
        codec_cls: A ``RecordCodec`` subclass accepting a ``config`` keyword.
        name: Registry key; defaults to ``codec_cls.name``.

    Raises:
        ConfigurationError: If *codec_cls* is not a ``RecordCodec`` subclass
            or the name is empty.
    """
    if not (isinstance(codec_cls, type) and issubclass(codec_cls, RecordCodec)):
        msg = f"Codec must be a RecordCodec subclass, got {codec_cls!r}"
        raise ConfigurationError(msg)
    key = name if name is not None else codec_cls.name
    if not key:
        msg = f"Codec name must be non-empty ({codec_cls.__name__})"
        raise ConfigurationError(msg)
    _CODECS[key] = codec_cls
    logger.debug("Registered codec %s as %r", codec_cls.__name__, key)


def unregister_codec(name: str) -> None:
    """Remove a codec from the registry (no-op when absent)."""
    _CODECS.pop(name, None)


def get_codec(
    name: str,
    *,
    config: CodecConfig | None = None,
    **options: Any,
) -> RecordCodec:
    """Create and return a codec instance.

    Args:
        name: Codec identifier (``"positional"``, ``"prefixed"``, ``"json"``,
            ``"query"``).
        config: Optional ``CodecConfig``; ``None`` uses the defaults.
        **options: Codec-specific keyword arguments (e.g. ``delimiter``,
            ``tokenizer``, ``no_delimiter`` for the line codecs).

    Raises:
        ConfigurationError: If the named codec is not registered or rejects
            the options.
    """
    codec_cls = _CODECS.get(name)
    if codec_cls is None:
        msg = f"Unknown codec: {name!r}. Available: {', '.join(list_codecs())}"
        raise ConfigurationError(msg)

    try:
        return codec_cls(config=config, **options)
    except TypeError as exc:
        msg = f"Codec {name!r} rejected options {sorted(options)}: {exc}"
        raise ConfigurationError(msg) from exc


def list_codecs() -> list[str]:
    """Return the names of all registered codecs."""
    return sorted(_CODECS)
