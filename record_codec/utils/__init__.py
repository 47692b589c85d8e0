"""Primitive string and number helpers consumed by the engine."""

from record_codec.utils.numbers import (
    format_float,
    is_bool_literal,
    parse_bool,
    parse_float,
    parse_int,
)
from record_codec.utils.strings import (
    contains_fold,
    extract_alpha,
    extract_alpha_numeric,
    extract_alpha_numeric_symbols,
    extract_by_regex,
    extract_hex,
    extract_numeric,
    left,
    len_trim,
    mid,
    right,
    trim,
)

__all__ = [
    "contains_fold",
    "extract_alpha",
    "extract_alpha_numeric",
    "extract_alpha_numeric_symbols",
    "extract_by_regex",
    "extract_hex",
    "extract_numeric",
    "format_float",
    "is_bool_literal",
    "left",
    "len_trim",
    "mid",
    "parse_bool",
    "parse_float",
    "parse_int",
    "right",
    "trim",
]
