"""
Error hierarchy for SCOREConv.

All conversion failures derive from ScoreConvError so callers can catch
everything raised by the codec with a single except clause:

    try:
        document = MusReader.read("page.mus")
    except ScoreConvError as e:
        print(f"Error: {e}")

Hierarchy:
    ScoreConvError
    ├── MusFormatError (binary MUS/PAG data)
    │   ├── TruncatedInput
    │   ├── InvalidSentinel
    │   ├── TrailerTooSmall
    │   ├── ZeroLengthItem
    │   ├── ItemTrailerOverlap
    │   ├── NonPositiveTypeCode
    │   ├── TypeCodeTooLarge
    │   ├── TextItemTooShort
    │   ├── TextTooLong
    │   ├── GraphicItemTooFewParams
    │   ├── GraphicFilenameMissing
    │   ├── GraphicFilenameTooLong
    │   └── WordCountOverflow
    └── PmxFormatError (PMX text data)
        └── MalformedAsciiNumber

None of these are recoverable: the binary format has no way to
resynchronize after a bad record, so a failure aborts the whole document.
"""

from typing import Optional


class ScoreConvError(Exception):
    """Base exception for all SCOREConv errors."""

    pass


class MusFormatError(ScoreConvError):
    """
    Invalid binary MUS/PAG data.

    Attributes:
        message: The error description
        offset: Byte offset in the buffer where the problem was found
    """

    def __init__(self, message: str, offset: Optional[int] = None):
        self.message = message
        self.offset = offset
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.offset is None:
            return self.message
        return f"{self.message} (at byte 0x{self.offset:X})"


class TruncatedInput(MusFormatError):
    """A read would run past the end of the buffer or of the current item."""

    pass


class InvalidSentinel(MusFormatError):
    """The last float in the buffer is not -9999.0."""

    pass


class TrailerTooSmall(MusFormatError):
    """The trailer field count is below 4."""

    pass


class ZeroLengthItem(MusFormatError):
    """An item declares a word count of zero or less."""

    pass


class ItemTrailerOverlap(MusFormatError):
    """An item body extends into the trailer."""

    pass


class NonPositiveTypeCode(MusFormatError):
    """Item type code (P1) is zero or negative."""

    pass


class TypeCodeTooLarge(MusFormatError):
    """Item type code (P1) is 99 or more."""

    pass


class TextItemTooShort(MusFormatError):
    """A text item has fewer than 12 numeric parameters before its string."""

    pass


class TextTooLong(MusFormatError):
    """A text item's character count (P12) is negative or implausibly large."""

    pass


class GraphicItemTooFewParams(MusFormatError):
    """A graphic item has fewer than 13 words."""

    pass


class GraphicFilenameMissing(MusFormatError):
    """A graphic item has no room left for its filename."""

    pass


class GraphicFilenameTooLong(MusFormatError):
    """A graphic item's filename spans more than 200 words."""

    pass


class WordCountOverflow(MusFormatError):
    """The document holds more words than a 2-byte header can count."""

    pass


class PmxFormatError(ScoreConvError):
    """
    Invalid PMX text data.

    Attributes:
        message: The error description
        line: 1-based line number in the PMX input, when known
    """

    def __init__(self, message: str, line: Optional[int] = None):
        self.message = message
        self.line = line
        super().__init__(f"line {line}: {message}" if line is not None else message)


class MalformedAsciiNumber(PmxFormatError):
    """A token on a numeric PMX line is not a number."""

    pass
