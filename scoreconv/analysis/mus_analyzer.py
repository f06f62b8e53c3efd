"""
MUS file analyzer.

Collects a structural summary of a binary SCORE file:
- Header width and word count vs. actual file size
- Trailer metadata
- Item counts per kind and per type code
- Text strings and EPS filenames
- The parse error, if the file is invalid
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from scoreconv.errors import MusFormatError
from scoreconv.formats.mus.binary_parser import ItemReader
from scoreconv.formats.mus.reader import MusReader
from scoreconv.models.document import Document
from scoreconv.models.item import ItemKind
from scoreconv.models.trailer import Trailer


# Common SCORE item types, by P1
ITEM_TYPE_NAMES = {
    1: "note",
    2: "rest",
    3: "clef",
    4: "line/hairpin",
    5: "slur/tie",
    6: "beam",
    7: "trill/ending",
    8: "staff",
    9: "symbol",
    10: "number",
    11: "user symbol",
    12: "special shape",
    13: "reserved",
    14: "barline",
    15: "EPS graphic",
    16: "text",
    17: "key signature",
    18: "meter",
}


def item_type_name(type_code: int) -> str:
    """Human-readable name of an item type code."""
    return ITEM_TYPE_NAMES.get(type_code, f"type {type_code}")


@dataclass
class MusAnalysis:
    """Complete analysis of a MUS file."""

    filepath: str
    filesize: int
    valid: bool
    error: Optional[str] = None
    error_offset: Optional[int] = None

    header_width: int = 0
    word_count: int = 0
    expected_size: int = 0

    trailer: Optional[Trailer] = None
    item_count: int = 0
    kinds: Dict[str, int] = field(default_factory=dict)
    types: Dict[int, int] = field(default_factory=dict)
    texts: List[str] = field(default_factory=list)
    graphics: List[str] = field(default_factory=list)
    structure: str = ""

    @property
    def size_matches(self) -> bool:
        return self.expected_size == self.filesize


class MusAnalyzer:
    """
    Analyzer for binary SCORE files.

    Unlike MusReader, analysis never raises on bad data; the error is
    recorded in the result instead.

    Example:
        analysis = MusAnalyzer().analyze_file("page.mus")
        print(analysis.valid, analysis.item_count)
    """

    def __init__(self):
        self.data: bytes = b""
        self.parser = ItemReader()

    def analyze_file(self, filepath: Union[str, Path]) -> MusAnalysis:
        with open(filepath, "rb") as f:
            data = f.read()
        return self.analyze_bytes(data, str(filepath))

    def analyze_bytes(self, data: bytes, filepath: str = "<bytes>") -> MusAnalysis:
        self.data = data
        info = MusReader.get_file_info_bytes(data)

        analysis = MusAnalysis(
            filepath=filepath,
            filesize=len(data),
            valid=False,
            header_width=info["header_width"],
            word_count=info.get("word_count", 0),
            expected_size=info.get("expected_size", 0),
        )

        try:
            _, trailer, items = self.parser.parse_bytes(data)
        except MusFormatError as e:
            analysis.error = e.message
            analysis.error_offset = e.offset
            return analysis

        analysis.valid = True
        analysis.trailer = trailer
        analysis.item_count = len(items)
        analysis.structure = self.parser.dump_structure()

        document = Document(items=list(items), trailer=trailer)
        analysis.kinds = {kind.value: n for kind, n in document.count_by_kind().items()}
        analysis.types = document.type_histogram()

        for item in items:
            if item.kind is ItemKind.TEXT:
                analysis.texts.append(item.text.decode("latin-1"))
            elif item.kind is ItemKind.GRAPHIC:
                analysis.graphics.append(item.filename.decode("latin-1"))

        return analysis
