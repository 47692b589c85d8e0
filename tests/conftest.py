"""Shared pytest fixtures for the record codec test suite."""

from collections.abc import Iterator

import pytest

from record_codec.codecs import (
    FlatJsonCodec,
    PositionalLineCodec,
    PrefixedLineCodec,
    QueryStringCodec,
)
from record_codec.engine.type_registry import clear_type_registry

# ---------------------------------------------------------------------------
# Codec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def positional() -> PositionalLineCodec:
    """Comma-delimited positional line codec."""
    return PositionalLineCodec(",")


@pytest.fixture()
def prefixed() -> PrefixedLineCodec:
    """Pipe-delimited prefixed line codec."""
    return PrefixedLineCodec("|")


@pytest.fixture()
def flat_json() -> FlatJsonCodec:
    """Flat JSON codec with default configuration."""
    return FlatJsonCodec()


@pytest.fixture()
def query_string() -> QueryStringCodec:
    """Query-string encoder with default configuration."""
    return QueryStringCodec()


# ---------------------------------------------------------------------------
# Registry isolation
# ---------------------------------------------------------------------------


@pytest.fixture()
def type_registry() -> Iterator[None]:
    """Empty type registry for the duration of one test."""
    clear_type_registry()
    yield
    clear_type_registry()
