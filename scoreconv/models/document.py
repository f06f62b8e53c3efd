"""
Document model - the top-level container for one SCORE page.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional

from scoreconv.models.item import Item, ItemKind
from scoreconv.models.trailer import Trailer


class HeaderWidth(IntEnum):
    """
    Size in bytes of the word count at the start of a MUS file.

    DOS versions of SCORE always write 2 bytes. Windows SCORE switches to
    4 bytes when the file holds more than 0xFFFF words, which makes the
    file length a multiple of 4; the width is inferred from that.
    """

    TWO = 2
    FOUR = 4

    @classmethod
    def for_length(cls, length: int) -> "HeaderWidth":
        return cls.FOUR if length % 4 == 0 else cls.TWO


@dataclass
class Document:
    """
    One converted page: its items, trailer and header layout.

    Attributes:
        items: Items in file order
        trailer: File trailer metadata
        header_width: Width of the leading word count
        word_count: Header word count as read from binary data
        source: Original filename, when known
    """

    items: List[Item] = field(default_factory=list)
    trailer: Trailer = field(default_factory=Trailer)
    header_width: HeaderWidth = HeaderWidth.TWO
    word_count: Optional[int] = None
    source: Optional[str] = None

    def add(self, item: Item) -> None:
        self.items.append(item)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    @property
    def item_words(self) -> int:
        """Words used by all items, count words included."""
        return sum(1 + item.word_count for item in self.items)

    @property
    def total_words(self) -> int:
        """Value of the header word count for this document."""
        return self.item_words + self.trailer.word_count

    def count_by_kind(self) -> Dict[ItemKind, int]:
        counts = Counter(item.kind for item in self.items)
        return {kind: counts.get(kind, 0) for kind in ItemKind}

    def type_histogram(self) -> Dict[int, int]:
        """Number of items per integer type code."""
        return dict(sorted(Counter(int(item.type_code) for item in self.items).items()))
