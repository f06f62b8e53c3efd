"""
PMX text reader.

Parses SCORE parameter matrix text into Document objects.

Line kinds:
    - first non-blank character is a digit: numeric item; P1 = 15 and
      P1 = 16 take the next line as filename / text
    - "t" followed by whitespace: text item, next line is the text
    - "##KEY:<tab>value": metadata directive (UNITS, VERSION, SERIAL, FILE)
    - "##PAGEBREAK": page separator written for multi-file conversions
    - anything else is ignored (comments, editor commands)
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from scoreconv.errors import PmxFormatError
from scoreconv.formats.pmx.writer import PMX_ENCODING
from scoreconv.models.document import Document
from scoreconv.models.item import GenericItem, GraphicItem, Item, TextItem
from scoreconv.models.trailer import Trailer, Unit
from scoreconv.utils.numbers import parse_number
from scoreconv.utils.validation import GRAPHIC_TYPE, TEXT_TYPE

logger = logging.getLogger(__name__)

DIGITS = "0123456789"


class PmxReader:
    """
    Parser for PMX text.

    Example:
        document = PmxReader.read("page.pmx")
        pages = PmxReader.read_pages("movement.pmx")
    """

    # Numeric parameters written for text and graphic items (P2..P13)
    FIXED_VALUES = 12

    def __init__(self):
        self._lines: List[str] = []
        self._index = 0

    @classmethod
    def read(cls, filepath: Union[str, Path]) -> Document:
        """
        Read a PMX file as a single Document.

        Page breaks are ignored, so a multi-page file yields all of its
        items in order.
        """
        document = cls().parse_text(_read_text(filepath))
        if document.source is None:
            document.source = Path(filepath).name
        return document

    @classmethod
    def read_pages(cls, filepath: Union[str, Path]) -> List[Document]:
        """Read a PMX file split at ##PAGEBREAK lines."""
        return cls().parse_pages(_read_text(filepath))

    def parse_text(self, text: str) -> Document:
        """
        Parse PMX text into one Document.

        Args:
            text: PMX text

        Returns:
            Document with every item in the text

        Raises:
            PmxFormatError: If a numeric line holds a non-number
        """
        return self._parse(text, split_pages=False)[0]

    def parse_pages(self, text: str) -> List[Document]:
        """Parse PMX text into one Document per page."""
        return self._parse(text, split_pages=True)

    def _parse(self, text: str, split_pages: bool) -> List[Document]:
        self._lines = text.split("\n")
        if self._lines and self._lines[-1] == "":
            self._lines.pop()
        self._index = 0

        pages = [_PageBuilder()]

        while self._index < len(self._lines):
            line_number = self._index + 1
            raw = self._next_line()

            if raw.startswith("##"):
                if raw.rstrip() == "##PAGEBREAK":
                    if split_pages:
                        pages.append(_PageBuilder())
                    continue
                pages[-1].apply_directive(raw[2:], line_number)
                continue

            item = self._parse_item_line(raw, line_number)
            if item is None:
                logger.debug("line %d ignored: %r", line_number, raw[:40])
                continue
            pages[-1].items.append(item)

        return [page.build() for page in pages]

    def _next_line(self) -> str:
        """Next raw line with trailing CR removed; empty at end of input."""
        if self._index >= len(self._lines):
            return ""
        line = self._lines[self._index]
        self._index += 1
        return line.rstrip("\r")

    def _parse_item_line(self, raw: str, line_number: int) -> Optional[Item]:
        stripped = raw.lstrip()

        if stripped and stripped[0] in DIGITS:
            values = [parse_number(token, line_number) for token in stripped.split()]
            type_code = values[0]

            if type_code == GRAPHIC_TYPE:
                fixed = self._fixed_values(values[1:], line_number)
                filename = _to_bytes(self._next_line(), line_number + 1)
                return GraphicItem(fixed, filename)
            if type_code == TEXT_TYPE:
                return self._text_item(values[1:], line_number)

            return GenericItem(type_code, values[1:])

        if raw[:1] in ("t", "T") and (len(raw) == 1 or raw[1].isspace()):
            values = [parse_number(token, line_number) for token in raw[2:].split()]
            return self._text_item(values, line_number)

        return None

    def _text_item(self, values: List[float], line_number: int) -> TextItem:
        fixed = self._fixed_values(values, line_number)
        text = _to_bytes(self._next_line(), line_number + 1)
        # P12 is replaced by the real string length
        return TextItem(fixed[: TextItem.FIXED_COUNT], text, width=fixed[-1])

    def _fixed_values(self, values: List[float], line_number: int) -> List[float]:
        """P2..P13, zero filled; extra values are dropped."""
        if len(values) > self.FIXED_VALUES:
            logger.warning(
                "line %d: %d parameters after P1, only %d are kept",
                line_number,
                len(values),
                self.FIXED_VALUES,
            )
        values = list(values[: self.FIXED_VALUES])
        return values + [0.0] * (self.FIXED_VALUES - len(values))


class _PageBuilder:
    """Items and metadata collected for one page."""

    def __init__(self):
        self.items: List[Item] = []
        self.unit = Unit.INCHES
        self.version: Optional[float] = None
        self.serial: Optional[float] = None
        self.source: Optional[str] = None

    def apply_directive(self, directive: str, line_number: int) -> None:
        key, _, value = directive.partition(":")
        key = key.strip().upper()
        value = value.strip()

        if key == "UNITS":
            try:
                self.unit = Unit(value.lower())
            except ValueError:
                logger.warning("line %d: unknown unit %r ignored", line_number, value)
        elif key == "VERSION":
            self.version = parse_number(value, line_number)
        elif key == "SERIAL":
            self.serial = parse_number(value, line_number)
        elif key == "FILE":
            self.source = value
        else:
            logger.debug("line %d: unknown directive %r ignored", line_number, key)

    def build(self) -> Document:
        unit = self.unit if self.unit is not Unit.UNKNOWN else Unit.INCHES
        trailer = Trailer(unit=unit)
        if self.version is not None:
            trailer.version = self.version
        if self.serial is not None:
            trailer.serial = self.serial
        return Document(items=self.items, trailer=trailer, source=self.source)


def _to_bytes(text: str, line_number: int) -> bytes:
    try:
        return text.encode(PMX_ENCODING)
    except UnicodeEncodeError:
        raise PmxFormatError(
            "text is not representable as single-byte characters", line=line_number
        ) from None


def _read_text(filepath: Union[str, Path]) -> str:
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    with open(filepath, "r", encoding=PMX_ENCODING, newline="") as f:
        return f.read()


# Name used by the text-to-binary pipeline
PmxParser = PmxReader
