"""Codec configuration loaded from environment variables.

All values have defaults matching the engine's historical behaviour, so
``CodecConfig()`` is always a valid configuration.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if a value is out of
    its valid range.  Bad configuration is caught at startup rather than
    on the first record.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from record_codec.core.constants import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_DELIMITER,
    DEFAULT_TIME_FORMAT,
)
from record_codec.core.exceptions import CodecError

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off", ""})


class ConfigValidationError(CodecError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class CodecConfig:
    """Immutable codec configuration.

    Attributes:
        strict_descriptors: Raise ``ConfigurationError`` for malformed numeric
            tokens in size/range/position tags instead of reading them as zero.
        time_format: ``strftime`` format for ``datetime`` fields without a
            per-field ``time_format``.
        date_format: ``strftime`` format for ``date`` fields without a
            per-field ``time_format``.
        default_delimiter: Delimiter used by line codecs built via the factory
            when none is given.
        json_ensure_ascii: Escape non-ASCII characters in flat JSON output.
    """

    strict_descriptors: bool = False
    time_format: str = DEFAULT_TIME_FORMAT
    date_format: str = DEFAULT_DATE_FORMAT
    default_delimiter: str = DEFAULT_DELIMITER
    json_ensure_ascii: bool = False

    @classmethod
    def from_env(cls) -> CodecConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a boolean
                variable holds an unrecognised literal.
        """
        config = cls(
            strict_descriptors=_env_bool("RECORD_CODEC_STRICT_DESCRIPTORS", default=False),
            time_format=os.getenv("RECORD_CODEC_TIME_FORMAT", DEFAULT_TIME_FORMAT),
            date_format=os.getenv("RECORD_CODEC_DATE_FORMAT", DEFAULT_DATE_FORMAT),
            default_delimiter=os.getenv("RECORD_CODEC_DEFAULT_DELIMITER", DEFAULT_DELIMITER),
            json_ensure_ascii=_env_bool("RECORD_CODEC_JSON_ENSURE_ASCII", default=False),
        )
        _validate(config)
        return config


def _env_bool(key: str, *, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigValidationError(key, raw, "must be one of 1/0, true/false, yes/no, on/off")


def _validate(config: CodecConfig) -> None:
    """Validate configuration values.  Raises ``ConfigValidationError``."""
    if not config.time_format.strip():
        raise ConfigValidationError(
            "RECORD_CODEC_TIME_FORMAT",
            config.time_format,
            "must not be empty",
        )

    if not config.date_format.strip():
        raise ConfigValidationError(
            "RECORD_CODEC_DATE_FORMAT",
            config.date_format,
            "must not be empty",
        )

    if not config.default_delimiter:
        raise ConfigValidationError(
            "RECORD_CODEC_DEFAULT_DELIMITER",
            config.default_delimiter,
            "must not be empty",
        )
