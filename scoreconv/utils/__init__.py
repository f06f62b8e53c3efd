"""Utility functions for SCOREConv."""

from scoreconv.utils.numbers import round3, format_leading, format_param, parse_number
from scoreconv.utils.binary import ByteCursor
from scoreconv.utils.validation import validate_type_code, looks_like_mus

__all__ = [
    "round3",
    "format_leading",
    "format_param",
    "parse_number",
    "ByteCursor",
    "validate_type_code",
    "looks_like_mus",
]
