"""
MUS/PAG file reader.

Reads binary SCORE files and converts them to the Document model.
"""

from pathlib import Path
from typing import Union

from scoreconv.formats.mus.binary_parser import ItemReader
from scoreconv.models.document import Document, HeaderWidth
from scoreconv.utils.validation import looks_like_mus


class MusReader:
    """
    Reader for binary SCORE files (.mus, .pag).

    Example:
        document = MusReader.read("page.mus")
        print(f"{len(document)} items, version {document.trailer.version:.2f}")
    """

    EXTENSIONS = (".mus", ".pag")

    def __init__(self):
        self.parser = ItemReader()
        self._raw_data: bytes = b""

    @classmethod
    def read(cls, filepath: Union[str, Path]) -> Document:
        """
        Read a MUS file and return a Document.

        Args:
            filepath: Path to .mus/.pag file

        Returns:
            Parsed Document
        """
        reader = cls()
        return reader.parse_file(filepath)

    def parse_file(self, filepath: Union[str, Path]) -> Document:
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        with open(filepath, "rb") as f:
            self._raw_data = f.read()

        document = self.parse_bytes(self._raw_data)
        document.source = filepath.name
        return document

    def parse_bytes(self, data: bytes) -> Document:
        """
        Parse MUS data from bytes.

        Args:
            data: Raw MUS file contents

        Returns:
            Parsed Document

        Raises:
            MusFormatError: If the data is not a valid SCORE file
        """
        self._raw_data = data
        header, trailer, items = self.parser.parse_bytes(data)

        return Document(
            items=list(items),
            trailer=trailer,
            header_width=HeaderWidth(header.width),
            word_count=header.word_count,
        )

    @classmethod
    def can_read(cls, filepath: Union[str, Path]) -> bool:
        """
        Check if a file looks like binary SCORE data.

        Only the length and the trailing sentinel are checked.
        """
        filepath = Path(filepath)

        if not filepath.is_file():
            return False

        with open(filepath, "rb") as f:
            data = f.read()

        return looks_like_mus(data)

    @classmethod
    def get_file_info(cls, filepath: Union[str, Path]) -> dict:
        """
        Get basic information about a MUS file without decoding items.

        Args:
            filepath: Path to .mus/.pag file

        Returns:
            Dictionary with file info
        """
        with open(filepath, "rb") as f:
            data = f.read()

        return cls.get_file_info_bytes(data)

    @staticmethod
    def get_file_info_bytes(data: bytes) -> dict:
        """Same as get_file_info, for data already in memory."""
        width = HeaderWidth.for_length(len(data))
        info = {
            "valid": looks_like_mus(data),
            "size": len(data),
            "header_width": int(width),
        }

        if len(data) >= int(width):
            info["word_count"] = int.from_bytes(data[: int(width)], "little")
            info["expected_size"] = int(width) + 4 * info["word_count"]

        return info
