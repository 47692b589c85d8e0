"""Tests for the codec exception taxonomy.

Covers: default stage/code per category, category property, structured
error payload, and keyword overrides.
"""

from __future__ import annotations

import pytest

from record_codec.core.config import ConfigValidationError
from record_codec.core.exceptions import (
    CodecError,
    ConfigurationError,
    ExtractionError,
    IndirectionError,
    SerializationError,
    ValidationError,
)


class TestCategories:
    """Each concrete class reports its own category and defaults."""

    @pytest.mark.parametrize(
        ("cls", "category", "stage", "code"),
        [
            (ConfigurationError, "configuration", "descriptor", "CODEC_CONFIGURATION_INVALID"),
            (ExtractionError, "extraction", "extract", "ELEMENT_NOT_FOUND"),
            (ValidationError, "validation", "validate", "FIELD_VALIDATION_FAILED"),
            (IndirectionError, "indirection", "indirection", "INDIRECTION_FAILED"),
            (SerializationError, "serialization", "serialize", "SERIALIZATION_FAILED"),
        ],
    )
    def test_defaults(self, cls: type[CodecError], category: str, stage: str, code: str) -> None:
        exc = cls("boom")
        assert exc.category == category
        assert exc.stage == stage
        assert exc.code == code
        assert isinstance(exc, CodecError)

    def test_base_category(self) -> None:
        assert CodecError("x").category == "codec"

    def test_config_validation_error_is_codec_error(self) -> None:
        exc = ConfigValidationError("KEY", "bad", "must be good")
        assert isinstance(exc, CodecError)
        assert exc.key == "KEY"
        assert exc.value == "bad"
        assert exc.stage == "config"
        assert "KEY='bad'" in str(exc)


class TestErrorDict:
    """to_error_dict() exposes a stable payload."""

    def test_keys(self) -> None:
        exc = ValidationError("qty Range Maximum is 100", field_name="qty", record_type="Order")
        assert exc.to_error_dict() == {
            "category": "validation",
            "code": "FIELD_VALIDATION_FAILED",
            "stage": "validate",
            "message": "qty Range Maximum is 100",
            "field_name": "qty",
            "record_type": "Order",
        }

    def test_overrides(self) -> None:
        exc = ExtractionError("missing", stage="custom", code="CUSTOM")
        assert exc.stage == "custom"
        assert exc.code == "CUSTOM"

    def test_str_is_message(self) -> None:
        assert str(SerializationError("blank output")) == "blank output"
