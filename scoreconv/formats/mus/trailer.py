"""
MUS trailer codec.

The trailer can only be located from the end of the file, so it is read
before any item. Positions relative to the file length L:

    Offset      Size    Description
    L-4         4       Sentinel, must be -9999.0
    L-8         4       Field count (4.0 or 5.0)
    L-12        4       Unit code (0.0 inches, 1.0 centimeters)
    L-16        4       Program version
    L-20        4       Serial number (field count > 4 only)
    ...                 Reserved words (field count > 5 only)
    L-4*(n+1)   4       0.0 start-of-trailer marker
"""

import logging
import math

from scoreconv.errors import InvalidSentinel, TrailerTooSmall, TruncatedInput
from scoreconv.models.trailer import Trailer
from scoreconv.utils.binary import float_at, pack_float
from scoreconv.utils.validation import SENTINEL

logger = logging.getLogger(__name__)


class TrailerCodec:
    """
    Reads and writes the fixed trailer at the end of MUS data.

    Example:
        trailer = TrailerCodec.read_trailer(data)
        print(trailer.unit, trailer.version)
    """

    SENTINEL = SENTINEL
    MIN_FIELD_COUNT = 4.0

    @classmethod
    def read_trailer(cls, data: bytes) -> Trailer:
        """
        Parse the trailer from complete MUS data.

        Args:
            data: Complete file data

        Returns:
            Parsed Trailer

        Raises:
            TruncatedInput: If the buffer cannot hold the trailer
            InvalidSentinel: If the last float is not -9999.0
            TrailerTooSmall: If the field count is below 4
        """
        length = len(data)
        if length < 8:
            raise TruncatedInput(f"file too small for a trailer: {length} bytes")

        sentinel = float_at(data, length - 4)
        if sentinel != cls.SENTINEL:
            raise InvalidSentinel(
                f"last number is not -9999.0 but instead is {sentinel:.1f}", length - 4
            )

        field_count = float_at(data, length - 8)
        if not field_count >= cls.MIN_FIELD_COUNT:
            raise TrailerTooSmall(
                f"trailer size is too small: {field_count:.1f}", length - 8
            )

        if not math.isfinite(field_count) or 4 * (int(field_count) + 1) > length:
            raise TruncatedInput(
                f"trailer of {field_count:g} fields does not fit in {length} bytes"
            )

        unit_code = float_at(data, length - 12)
        version = float_at(data, length - 16)
        serial = float_at(data, length - 20) if field_count > 4.0 else None

        trailer = Trailer(
            field_count=field_count,
            version=version,
            serial=serial,
            sentinel=sentinel,
            unit_code=unit_code,
        )
        if trailer.reserved_count:
            start = length - trailer.byte_size + 4
            trailer.reserved = [
                float_at(data, start + 4 * i) for i in range(trailer.reserved_count)
            ]

        logger.debug(
            "trailer: %g fields, unit=%s, version=%.2f, serial=%s",
            field_count,
            trailer.unit.value,
            version,
            serial,
        )
        return trailer

    @classmethod
    def encode_trailer(cls, trailer: Trailer) -> bytes:
        """
        Serialize a trailer in file order.

        Args:
            trailer: Trailer to write

        Returns:
            4 * (field_count + 1) bytes
        """
        words = [0.0]
        words.extend(trailer.reserved)
        if trailer.has_serial:
            words.append(trailer.serial)
        words.extend([trailer.version, trailer.unit_code, trailer.field_count, cls.SENTINEL])

        return b"".join(pack_float(w) for w in words)
