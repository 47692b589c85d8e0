"""Shared engine constants — single source of truth.

Centralises metadata keys, sentinels and literal sets used by the
descriptor parser, the value pipeline and the codecs.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Field metadata
# ---------------------------------------------------------------------------

METADATA_KEY: str = "codec"
"""Key under ``dataclasses.field(metadata=...)`` holding the raw descriptor tags."""

VIRTUAL_POSITION: str = "virtual"
"""Position sentinel for fields computed by their setter instead of read from a slot."""

EXCLUDED_NAME: str = "-"
"""Wire name that removes a field from JSON and query-string output."""

# ---------------------------------------------------------------------------
# Indirection grammar
# ---------------------------------------------------------------------------

RECORD_TARGET_PREFIX: str = "base."
"""Getter/setter prefix meaning the method lives on the enclosing record."""

PASS_VALUE_SUFFIX: str = "(x)"
"""Getter suffix meaning the current stringified value is passed as argument."""

# ---------------------------------------------------------------------------
# Line codecs
# ---------------------------------------------------------------------------

UNSET_SLOT: str = "{?}"
"""Placeholder seeded into positional slots that no field has written."""

DEFAULT_DELIMITER: str = ","

# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------

TRUE_LITERALS: frozenset[str] = frozenset({"true", "yes", "on", "running", "started", "y", "1"})
"""Case-insensitive literals that normalise to canonical ``true``."""

UNKNOWN_SENTINEL: str = "unknown"
"""Stringified zero-valued enum members equal to this are treated as absent."""

DEFAULT_TIME_FORMAT: str = "%Y-%m-%d %H:%M:%S"
DEFAULT_DATE_FORMAT: str = "%Y-%m-%d"
