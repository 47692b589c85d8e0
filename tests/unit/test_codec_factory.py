"""Tests for the codec factory.

Covers: list_codecs, get_codec, register_codec, unregister_codec, option
and config pass-through, and error handling.
"""

from __future__ import annotations

import unittest
from dataclasses import dataclass

from record_codec.codecs import (
    FlatJsonCodec,
    PositionalLineCodec,
    PrefixedLineCodec,
    QueryStringCodec,
    RecordCodec,
)
from record_codec.codecs.factory import (
    FLAT_JSON,
    POSITIONAL,
    PREFIXED,
    QUERY_STRING,
    get_codec,
    list_codecs,
    register_codec,
    unregister_codec,
)
from record_codec.core.config import CodecConfig
from record_codec.core.exceptions import ConfigurationError
from record_codec.schema import codec_field


@dataclass
class Pair:
    left: str = codec_field(default="", pos=0, out_prefix="L:")
    right: str = codec_field(default="", pos=1, out_prefix="R:")


class SemicolonCodec(PositionalLineCodec):
    name = "semicolon"

    def __init__(self, *, config: CodecConfig | None = None) -> None:
        super().__init__(";", config=config)


class TestListCodecs(unittest.TestCase):
    """list_codecs returns the built-in codecs."""

    def test_includes_builtin_codecs(self) -> None:
        codecs = list_codecs()
        for name in (POSITIONAL, PREFIXED, FLAT_JSON, QUERY_STRING):
            assert name in codecs

    def test_returns_sorted(self) -> None:
        codecs = list_codecs()
        assert codecs == sorted(codecs)


class TestGetCodec(unittest.TestCase):
    """get_codec creates the correct codec instance."""

    def test_builtin_classes(self) -> None:
        assert isinstance(get_codec(POSITIONAL), PositionalLineCodec)
        assert isinstance(get_codec(PREFIXED), PrefixedLineCodec)
        assert isinstance(get_codec(FLAT_JSON), FlatJsonCodec)
        assert isinstance(get_codec(QUERY_STRING), QueryStringCodec)

    def test_options_passed(self) -> None:
        codec = get_codec(PREFIXED, delimiter=";")
        assert codec.marshal(Pair(left="a", right="b")) == "L:a;R:b"

    def test_default_delimiter_from_config(self) -> None:
        codec = get_codec(POSITIONAL, config=CodecConfig(default_delimiter="\t"))
        assert codec.marshal(Pair(left="a", right="b")) == "L:a\tR:b"

    def test_default_config_when_none(self) -> None:
        assert get_codec(FLAT_JSON).config == CodecConfig()

    def test_unknown_codec_raises(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            get_codec("xml")
        assert "'xml'" in str(ctx.exception)
        assert "Available:" in str(ctx.exception)

    def test_rejected_options(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            get_codec(FLAT_JSON, delimiter=",")
        assert "rejected options" in str(ctx.exception)


class TestRegisterCodec(unittest.TestCase):
    """register_codec adds custom codecs."""

    def tearDown(self) -> None:
        unregister_codec("semicolon")
        unregister_codec("csv")

    def test_register_by_class_name(self) -> None:
        register_codec(SemicolonCodec)
        codec = get_codec("semicolon")
        assert isinstance(codec, RecordCodec)
        assert "semicolon" in list_codecs()
        assert codec.marshal(Pair(left="a", right="b")) == "L:a;R:b"

    def test_register_under_alias(self) -> None:
        register_codec(PositionalLineCodec, name="csv")
        assert isinstance(get_codec("csv"), PositionalLineCodec)
        assert POSITIONAL in list_codecs()

    def test_unregister(self) -> None:
        register_codec(SemicolonCodec)
        unregister_codec("semicolon")
        assert "semicolon" not in list_codecs()

    def test_empty_name_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            register_codec(PositionalLineCodec, name="")

    def test_non_codec_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            register_codec(dict)  # type: ignore[arg-type]
