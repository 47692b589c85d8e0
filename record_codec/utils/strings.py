"""String primitives consumed by the marshaling engine.

Substring helpers clamp out-of-range lengths instead of raising, and the
``extract_*`` filters keep only the characters of one class by removing
every run that falls outside it.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from functools import lru_cache

_NON_ALPHA = re.compile(r"[^A-Za-z]+")
_NON_NUMERIC = re.compile(r"[^0-9]+")
_NON_ALPHA_NUMERIC = re.compile(r"[^A-Za-z0-9]+")
_NON_PRINTABLE = re.compile(r"[^ -~]+")
_NON_HEX = re.compile(r"[^0-9A-Fa-f]+")

# ---------------------------------------------------------------------------
# Trimming and substrings
# ---------------------------------------------------------------------------


def trim(s: str) -> str:
    """Return *s* without leading and trailing whitespace."""
    return s.strip()


def len_trim(s: str) -> int:
    """Return the length of *s* after trimming whitespace."""
    return len(s.strip())


def left(s: str, length: int) -> str:
    """Return the leftmost *length* characters of *s*.

    A non-positive *length*, or one that covers the whole string, returns
    *s* unchanged.
    """
    if len(s) <= length or length <= 0:
        return s
    return s[:length]


def right(s: str, length: int) -> str:
    """Return the rightmost *length* characters of *s* (same clamping as ``left``)."""
    if len(s) <= length or length <= 0:
        return s
    return s[len(s) - length :]


def mid(s: str, start: int, length: int) -> str:
    """Return *length* characters of *s* beginning at *start*.

    Any request that does not fit inside *s* returns *s* unchanged.
    """
    if len(s) <= length or length <= 0:
        return s
    if start < 0 or start > len(s) - 1:
        return s
    if len(s) - start < length:
        return s
    return s[start : start + length]


# ---------------------------------------------------------------------------
# Character-class filters
# ---------------------------------------------------------------------------


def extract_alpha(s: str) -> str:
    """Keep ``A-Z`` and ``a-z`` only."""
    return _NON_ALPHA.sub("", s)


def extract_numeric(s: str) -> str:
    """Keep ``0-9`` only."""
    return _NON_NUMERIC.sub("", s)


def extract_alpha_numeric(s: str) -> str:
    """Keep letters and digits only."""
    return _NON_ALPHA_NUMERIC.sub("", s)


def extract_alpha_numeric_symbols(s: str) -> str:
    """Keep printable ASCII (space through ``~``)."""
    return _NON_PRINTABLE.sub("", s)


def extract_hex(s: str) -> str:
    """Keep hexadecimal digits only."""
    return _NON_HEX.sub("", s)


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def extract_by_regex(s: str, pattern: str) -> str:
    """Remove every match of *pattern* from *s*.

    Raises:
        re.error: If *pattern* is not a valid regular expression.
    """
    return _compile(pattern).sub("", s)


# ---------------------------------------------------------------------------
# Membership
# ---------------------------------------------------------------------------


def contains_fold(values: Iterable[str], s: str) -> bool:
    """Return ``True`` if *s* equals any of *values*, ignoring case."""
    folded = s.casefold()
    return any(v.casefold() == folded for v in values)
