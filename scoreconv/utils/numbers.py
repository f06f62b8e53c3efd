"""
Number rounding and fixed-width formatting for SCORE parameters.

SCORE stores every parameter as a 4-byte float, and values read back from
binary files usually carry round-off junk after the third fraction digit.
All numbers are therefore rounded to three decimals before they are shown,
using truncation after a half-unit offset away from zero:

    round3(2.0625)  ->  2.063     trunc(2062.5 + 0.5) / 1000
    round3(-2.0625) -> -2.063     trunc(-2062.5 - 0.5) / 1000

This is not Python's round() (which rounds half to even) and the PMX text
output depends on it byte for byte.

PMX column layout:
    type code < 10    "%1.4f"     e.g. "1.0000"
    type code >= 10   "%2.3f"     e.g. "15.000"
    parameters        " %8.3f"    e.g. "    7.500"
"""

import math
from typing import Optional

from scoreconv.errors import MalformedAsciiNumber


def round3(number: float) -> float:
    """
    Round a value to three fraction digits, half away from zero.

    Args:
        number: Value to round

    Returns:
        Rounded value (non-finite values are returned unchanged)

    Example:
        >>> round3(7.4999999)
        7.5
    """
    if not math.isfinite(number):
        return number

    shifted = number * 1000.0
    if number < 0.0:
        return math.trunc(shifted - 0.5) / 1000.0
    return math.trunc(shifted + 0.5) / 1000.0


def format_leading(type_code: float) -> str:
    """
    Format the first number on a PMX item line.

    The first character of a PMX line must not be a space, so small
    type codes get four fraction digits instead of a wider field.
    Fractions of small type codes carry the staff layer in newer files.
    """
    if type_code < 10:
        return "%1.4f" % type_code
    return "%2.3f" % type_code


def format_param(number: float) -> str:
    """Format one parameter after the first on a PMX line."""
    return " %8.3f" % number


def parse_number(token: str, line: Optional[int] = None) -> float:
    """
    Parse a single PMX token as a float.

    Args:
        token: Whitespace-delimited token from a PMX line
        line: Line number for error reporting

    Returns:
        Parsed value

    Raises:
        MalformedAsciiNumber: If the token is not a number
    """
    try:
        return float(token)
    except ValueError:
        raise MalformedAsciiNumber(f"not a number: {token!r}", line=line) from None
