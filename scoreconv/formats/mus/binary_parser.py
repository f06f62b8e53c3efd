"""
MUS/PAG binary file parser.

Frames the item list of a binary SCORE file. Little-endian throughout.

File structure:
    Offset      Size    Description
    0x000       2 or 4  Word count N (words after this field)
    0x002/4     ...     Items: float word count, then that many words
    L-4*(n+1)   ...     Trailer (see trailer.py)

The header is 4 bytes wide only when the file length is a multiple of 4
(large Windows SCORE files); otherwise it is 2 bytes.

Framing cannot resynchronize: a bad word count shifts every following
item, so the first error aborts the parse.
"""

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union

from scoreconv.errors import ItemTrailerOverlap, TruncatedInput, ZeroLengthItem
from scoreconv.formats.mus.item_codec import ItemCodec
from scoreconv.formats.mus.trailer import TrailerCodec
from scoreconv.models.document import HeaderWidth
from scoreconv.models.item import Item
from scoreconv.models.trailer import Trailer
from scoreconv.utils.binary import ByteCursor
from scoreconv.utils.numbers import round3

logger = logging.getLogger(__name__)


@dataclass
class MusHeader:
    """
    Leading word count of a MUS file.
    """

    width: HeaderWidth  # 2 or 4 bytes
    word_count: int  # Words after the header, trailer included
    file_size: int

    @property
    def expected_size(self) -> int:
        return int(self.width) + 4 * self.word_count


class ItemReader:
    """
    Parser for binary SCORE files.

    Example:
        reader = ItemReader()
        header, trailer, items = reader.parse_file("page.mus")
    """

    def __init__(self):
        self.data: bytes = b""
        self.header: MusHeader = None
        self.trailer: Trailer = None
        self.items: List[Item] = []
        self.item_offsets: List[int] = []

    def parse_file(self, filepath: Union[str, Path]) -> Tuple[MusHeader, Trailer, List[Item]]:
        """
        Parse a MUS file.

        Args:
            filepath: Path to .mus/.pag file

        Returns:
            Tuple of (header, trailer, items)
        """
        with open(filepath, "rb") as f:
            data = f.read()

        return self.parse_bytes(data)

    def parse_bytes(self, data: bytes) -> Tuple[MusHeader, Trailer, List[Item]]:
        """
        Parse MUS data from bytes.

        Args:
            data: Raw file contents

        Returns:
            Tuple of (header, trailer, items)

        Raises:
            MusFormatError: If the data is not a valid SCORE file
        """
        self.data = data
        self.items = []
        self.item_offsets = []

        self.header = self._parse_header()
        self.trailer = TrailerCodec.read_trailer(data)
        self._read_items()

        return self.header, self.trailer, self.items

    def _parse_header(self) -> MusHeader:
        width = HeaderWidth.for_length(len(self.data))
        cursor = ByteCursor(self.data)
        word_count = cursor.read_short() if width == HeaderWidth.TWO else cursor.read_int()

        header = MusHeader(width=width, word_count=word_count, file_size=len(self.data))
        logger.debug("header: %d-byte word count = %d", int(width), word_count)

        if header.expected_size > len(self.data):
            raise TruncatedInput(
                f"invalid file length: header counts {word_count} words "
                f"({header.expected_size} bytes) but file has {len(self.data)} bytes"
            )
        return header

    def _read_items(self) -> None:
        """Frame and decode items between the header and the trailer."""
        expected = self.header.word_count
        trailer_words = self.trailer.word_count
        start = int(self.header.width)
        end = len(self.data) - self.trailer.byte_size

        if end < start:
            raise ItemTrailerOverlap("trailer overlaps the file header")

        cursor = ByteCursor(self.data, start, end)
        consumed = 0

        while not cursor.at_end():
            if consumed + trailer_words == expected:
                # all counted words are read; the rest is never looked at
                logger.warning(
                    "header word count ends %d bytes before the trailer", cursor.remaining
                )
                break

            offset = cursor.position
            count = round3(cursor.read_float())
            if not count > 0.0:
                raise ZeroLengthItem("parameter size of next item is zero", offset)
            if not math.isfinite(count):
                raise ItemTrailerOverlap(f"item word count is not finite: {count}", offset)

            words = int(count)
            if words <= 0:
                raise ZeroLengthItem(f"parameter size of next item is {count:g}", offset)
            if 4 * words > cursor.remaining or consumed + 1 + words + trailer_words > expected:
                raise ItemTrailerOverlap(
                    f"item data ({words} words) overlaps with trailer contents", offset
                )

            body = cursor.sub_cursor(4 * words)
            self.items.append(ItemCodec.decode_item(body, words))
            self.item_offsets.append(offset)
            consumed += 1 + words

        logger.debug("read %d items (%d words)", len(self.items), consumed)

    def dump_structure(self) -> str:
        """
        Dump the parsed file structure for debugging.

        Returns:
            Multi-line description of header, trailer and items
        """
        lines = ["MUS File Structure", "=" * 40]

        if self.header is None:
            lines.append("(nothing parsed)")
            return "\n".join(lines)

        lines.append(f"File size: {self.header.file_size} bytes")
        lines.append(f"Header width: {int(self.header.width)} bytes")
        lines.append(f"Word count: {self.header.word_count}")
        lines.append(
            f"Trailer: {self.trailer.field_count:g} fields, unit={self.trailer.unit.value}, "
            f"version={self.trailer.version:.2f}"
        )
        lines.append(f"Items: {len(self.items)}")
        lines.append("")

        for offset, item in zip(self.item_offsets, self.items):
            lines.append(
                f"  0x{offset:06X}: {item.kind.value:<8} P1={item.type_code:g} "
                f"({item.word_count} words)"
            )

        return "\n".join(lines)
