"""
SCORE item data models.

A SCORE page is a flat list of items. Every item is a list of numeric
parameters P1..Pn where P1 is the item type code. Two type codes carry a
byte payload after their numeric parameters:

    P1 = 16   text item      P2..P13 numeric, then the text string
    P1 = 15   graphic item   P2..P13 numeric, then an EPS filename

Everything else is a plain numeric item. The type code is kept as a
serialization detail; in memory the three kinds are separate classes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union

from scoreconv.utils.binary import word_span
from scoreconv.utils.validation import GRAPHIC_TYPE, TEXT_TYPE, is_reserved_type


class ItemKind(Enum):
    """The three record layouts."""

    GENERIC = "generic"
    TEXT = "text"
    GRAPHIC = "graphic"


def _as_bytes(value: Union[str, bytes]) -> bytes:
    # PMX text is handled as latin-1 so every byte maps to one character
    if isinstance(value, str):
        return value.encode("latin-1")
    return bytes(value)


@dataclass
class GenericItem:
    """
    A numeric item (any type code except 15 and 16).

    Attributes:
        type_code: P1, the item type (fraction may hold the staff layer)
        params: P2..Pn
    """

    type_code: float
    params: List[float] = field(default_factory=list)

    kind = ItemKind.GENERIC

    def __post_init__(self):
        if is_reserved_type(self.type_code):
            raise ValueError(
                f"type code {self.type_code:g} is reserved for text/graphic items"
            )
        self.params = [float(p) for p in self.params]

    @property
    def word_count(self) -> int:
        """Words following the item's count word."""
        return 1 + len(self.params)

    @property
    def values(self) -> List[float]:
        """All numeric parameters including the type code."""
        return [self.type_code] + self.params


@dataclass
class TextItem:
    """
    A text item (P1 = 16).

    Attributes:
        fixed_params: P2..P12; P12 is the string length in bytes
        text: The raw string bytes (without padding)
        width: P13, the text width
    """

    fixed_params: List[float]
    text: bytes = b""
    width: float = 0.0

    kind = ItemKind.TEXT
    type_code = TEXT_TYPE

    FIXED_COUNT = 11
    LENGTH_INDEX = 10  # P12

    def __post_init__(self):
        if len(self.fixed_params) != self.FIXED_COUNT:
            raise ValueError(
                f"text item needs {self.FIXED_COUNT} fixed parameters (P2-P12), "
                f"got {len(self.fixed_params)}"
            )
        self.text = _as_bytes(self.text)
        self.fixed_params = [float(p) for p in self.fixed_params]
        self.fixed_params[self.LENGTH_INDEX] = float(len(self.text))

    @property
    def char_count(self) -> int:
        return len(self.text)

    @property
    def word_count(self) -> int:
        return 1 + self.FIXED_COUNT + 1 + word_span(len(self.text))

    @property
    def values(self) -> List[float]:
        """Numeric parameters P2..P13 as written on a PMX "t" line."""
        return self.fixed_params + [self.width]


@dataclass
class GraphicItem:
    """
    An embedded EPS graphic item (P1 = 15).

    P13 is only used by the SCORE editor when editing the filename.

    Attributes:
        fixed_params: P2..P13
        filename: EPS filename bytes, without trailing space padding
    """

    fixed_params: List[float]
    filename: bytes = b""

    kind = ItemKind.GRAPHIC
    type_code = GRAPHIC_TYPE

    FIXED_COUNT = 12

    def __post_init__(self):
        if len(self.fixed_params) != self.FIXED_COUNT:
            raise ValueError(
                f"graphic item needs {self.FIXED_COUNT} fixed parameters (P2-P13), "
                f"got {len(self.fixed_params)}"
            )
        self.filename = _as_bytes(self.filename)
        self.fixed_params = [float(p) for p in self.fixed_params]

    @property
    def word_count(self) -> int:
        return 1 + self.FIXED_COUNT + word_span(len(self.filename))

    @property
    def values(self) -> List[float]:
        return [self.type_code] + self.fixed_params


Item = Union[GenericItem, TextItem, GraphicItem]
