"""
MUS file writer.

Writes Document objects to binary SCORE files loadable with the SCORE
"G file" command.
"""

import logging
import struct
from pathlib import Path
from typing import Union

from scoreconv.errors import WordCountOverflow
from scoreconv.formats.mus.item_codec import ItemCodec
from scoreconv.formats.mus.trailer import TrailerCodec
from scoreconv.models.document import Document
from scoreconv.models.trailer import Trailer
from scoreconv.utils.binary import pack_short

logger = logging.getLogger(__name__)


class MusWriter:
    """
    Assembler for binary SCORE files.

    Output is always a 2-byte word count, the encoded items and a
    5-field trailer. Documents too large for a 2-byte count are refused
    rather than written with a wrapped count.

    Example:
        document = PmxReader.read("page.pmx")
        MusWriter.write(document, "page.mus")
    """

    MAX_WORD_COUNT = 0xFFFF

    # Trailer written unless preserve_metadata is set
    FIELD_COUNT = 5.0
    UNIT_CODE = 0.0
    VERSION = 4.0
    SERIAL = 4000000.0

    def __init__(self, preserve_metadata: bool = False):
        """
        Initialize writer.

        Args:
            preserve_metadata: Copy unit, version and serial from the
                document instead of writing the defaults
        """
        self.preserve_metadata = preserve_metadata

    @classmethod
    def write(
        cls,
        document: Document,
        filepath: Union[str, Path],
        preserve_metadata: bool = False,
    ) -> None:
        """
        Write a Document to a MUS file.

        Args:
            document: Document to write
            filepath: Output file path
            preserve_metadata: Keep the document's trailer metadata
        """
        writer = cls(preserve_metadata)
        data = writer.to_bytes(document)

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "wb") as f:
            f.write(data)

    def to_bytes(self, document: Document) -> bytes:
        """
        Convert a Document to MUS binary format.

        Args:
            document: Document to convert

        Returns:
            Complete MUS file data

        Raises:
            MusFormatError: If an item cannot be encoded or the file
                holds more than 0xFFFF words
        """
        # Placeholder count, patched once the size is known
        buffer = bytearray(pack_short(0))

        for item in document.items:
            buffer += ItemCodec.encode_item(item)

        buffer += TrailerCodec.encode_trailer(self.build_trailer(document))

        word_count = (len(buffer) - 2) // 4
        if word_count > self.MAX_WORD_COUNT:
            raise WordCountOverflow(
                f"document has {word_count} words; a 2-byte header holds at most "
                f"{self.MAX_WORD_COUNT}"
            )
        struct.pack_into("<H", buffer, 0, word_count)

        logger.debug("assembled %d items, %d words", len(document.items), word_count)
        return bytes(buffer)

    def build_trailer(self, document: Document) -> Trailer:
        """Trailer to write for a document."""
        if not self.preserve_metadata:
            return Trailer(
                field_count=self.FIELD_COUNT,
                unit_code=self.UNIT_CODE,
                version=self.VERSION,
                serial=self.SERIAL,
            )

        source = document.trailer
        serial = source.serial if source.serial is not None else self.SERIAL
        return Trailer(
            field_count=self.FIELD_COUNT,
            unit_code=source.unit_code,
            version=source.version,
            serial=serial,
        )


# Name used by the text-to-binary pipeline
MusAssembler = MusWriter
