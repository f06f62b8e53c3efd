"""
Data validation utilities for SCORE item data.
"""

from typing import Optional

from scoreconv.errors import NonPositiveTypeCode, TypeCodeTooLarge
from scoreconv.utils.binary import float_at

SENTINEL = -9999.0

# Type codes 99 and above are rejected; older readers only refused 100+.
MAX_TYPE_CODE = 99.0

# Type codes whose records carry a byte payload
GRAPHIC_TYPE = 15.0
TEXT_TYPE = 16.0


def validate_type_code(
    type_code: float, offset: Optional[int] = None, limit: float = MAX_TYPE_CODE
) -> None:
    """
    Validate an item type code (P1).

    Args:
        type_code: The type code to validate
        offset: Byte offset of the type code, for error messages
        limit: First rejected type code

    Raises:
        NonPositiveTypeCode: If type_code <= 0
        TypeCodeTooLarge: If type_code >= limit
    """
    if not type_code > 0.0:
        raise NonPositiveTypeCode(f"item type code is non-positive: {type_code:f}", offset)
    if type_code >= limit:
        raise TypeCodeTooLarge(f"item type code is way too large: {type_code:f}", offset)


def is_reserved_type(type_code: float) -> bool:
    """Check if a type code belongs to a text or graphic record."""
    return type_code in (GRAPHIC_TYPE, TEXT_TYPE)


def validate_mus_sentinel(data: bytes) -> bool:
    """
    Check the end-of-file marker of MUS data.

    Args:
        data: Complete file data

    Returns:
        True if the buffer ends with the float -9999.0
    """
    if len(data) < 4:
        return False

    return float_at(data, len(data) - 4) == SENTINEL


def looks_like_mus(data: bytes) -> bool:
    """
    Cheap format sniff used before a full parse.

    Binary SCORE files end in the sentinel and have a length of either
    2 or 0 modulo 4 (2-byte or 4-byte word count header).
    """
    return len(data) % 2 == 0 and validate_mus_sentinel(data)
