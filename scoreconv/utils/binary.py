"""
Little-endian binary helpers for MUS data.

ByteCursor is a bounds-checked read position over an immutable buffer.
Every read checks position + length against the end of the cursor's
window and raises TruncatedInput instead of reading past it.
"""

import struct
from typing import Optional

from scoreconv.errors import TruncatedInput

_FLOAT = struct.Struct("<f")
_SHORT = struct.Struct("<H")
_INT = struct.Struct("<I")

WORD_SIZE = 4


class ByteCursor:
    """
    Sequential reader over a window of a byte buffer.

    Offsets reported in errors are absolute positions in the underlying
    buffer, so a cursor over one item body still points at the right
    place in the file.

    Example:
        cursor = ByteCursor(data, start=2, end=len(data) - 24)
        count = cursor.read_float()
    """

    def __init__(self, data: bytes, start: int = 0, end: Optional[int] = None):
        self.data = data
        self.position = start
        self.end = len(data) if end is None else end

    @property
    def remaining(self) -> int:
        """Bytes left before the end of the window."""
        return self.end - self.position

    def at_end(self) -> bool:
        return self.position >= self.end

    def _take(self, length: int, what: str) -> int:
        start = self.position
        if length < 0 or start + length > self.end:
            raise TruncatedInput(
                f"unexpected end of data reading {what}: need {length} bytes, "
                f"{max(self.remaining, 0)} left",
                offset=start,
            )
        self.position = start + length
        return start

    def read_float(self) -> float:
        """Read a little-endian 4-byte float (widened to a Python float)."""
        start = self._take(WORD_SIZE, "float")
        return _FLOAT.unpack_from(self.data, start)[0]

    def read_short(self) -> int:
        """Read a little-endian unsigned 2-byte integer."""
        start = self._take(2, "short")
        return _SHORT.unpack_from(self.data, start)[0]

    def read_int(self) -> int:
        """Read a little-endian unsigned 4-byte integer."""
        start = self._take(WORD_SIZE, "int")
        return _INT.unpack_from(self.data, start)[0]

    def read_bytes(self, length: int) -> bytes:
        start = self._take(length, f"{length}-byte block")
        return bytes(self.data[start : start + length])

    def skip(self, length: int) -> None:
        self._take(length, "padding")

    def sub_cursor(self, length: int) -> "ByteCursor":
        """Split off the next length bytes as their own cursor and skip them."""
        start = self._take(length, "item body")
        return ByteCursor(self.data, start, start + length)


def float_at(data: bytes, offset: int) -> float:
    """Read the little-endian float stored at an absolute offset."""
    return ByteCursor(data, offset).read_float()


def pack_float(value: float) -> bytes:
    """Encode a value as a little-endian 4-byte float."""
    return _FLOAT.pack(value)


def pack_short(value: int) -> bytes:
    return _SHORT.pack(value)


def pad_to_word(data: bytes, fill: bytes = b" ") -> bytes:
    """Pad a byte string to a multiple of four bytes."""
    extra = (WORD_SIZE - len(data) % WORD_SIZE) % WORD_SIZE
    return data + fill * extra


def word_span(length: int) -> int:
    """Number of 4-byte words needed to hold length bytes."""
    return (length + WORD_SIZE - 1) // WORD_SIZE
