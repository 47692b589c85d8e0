"""Tolerant numeric and boolean parsers.

Each parser returns ``(value, ok)`` rather than raising, so callers can
decide whether an unparseable token is an error or simply zero.
"""

from __future__ import annotations

_BOOL_TRUE = frozenset({"1", "t", "true"})
_BOOL_FALSE = frozenset({"0", "f", "false"})


def parse_int(s: str) -> tuple[int, bool]:
    """Parse *s* as an integer, truncating at the first decimal point.

    ``"12.9"`` parses as ``12``; ``"abc"`` returns ``(0, False)``.
    """
    text = s.strip()
    if "." in text:
        text = text.split(".", 1)[0]
    try:
        return int(text), True
    except ValueError:
        return 0, False


def parse_float(s: str) -> tuple[float, bool]:
    """Parse *s* as a float; ``(0.0, False)`` when it is not a number."""
    try:
        return float(s.strip()), True
    except ValueError:
        return 0.0, False


def parse_bool(s: str) -> tuple[bool, bool]:
    """Parse the strict boolean literals ``1/0``, ``t/f`` and ``true/false``."""
    text = s.strip().lower()
    if text in _BOOL_TRUE:
        return True, True
    if text in _BOOL_FALSE:
        return False, True
    return False, False


def is_bool_literal(s: str) -> bool:
    """Return ``True`` when *s* is a literal accepted by ``parse_bool``."""
    return parse_bool(s)[1]


def format_float(value: float) -> str:
    """Render a float without a trailing ``.0`` for whole numbers."""
    if value.is_integer():
        return str(int(value))
    return repr(value)
