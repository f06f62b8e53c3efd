"""
SCOREConv - Bidirectional converter for SCORE binary and PMX files.

This library provides tools to:
- Read and write binary SCORE page files (.mus, .pag)
- Read and write PMX parameter matrix text (.pmx)
- Convert between the two, including multi-page PMX streams

Example usage:
    from scoreconv import MusReader, PmxWriter, PmxReader, MusWriter

    # Binary page to PMX text
    document = MusReader.read("page.mus")
    PmxWriter.write(document, "page.pmx")

    # And back
    document = PmxReader.read("page.pmx")
    MusWriter.write(document, "page.mus")
"""

__version__ = "0.4.0"
__author__ = "SCOREConv Contributors"

from scoreconv.formats.mus.reader import MusReader
from scoreconv.formats.mus.writer import MusWriter
from scoreconv.formats.pmx.reader import PmxReader
from scoreconv.formats.pmx.writer import PmxWriter
from scoreconv.models.document import Document, HeaderWidth
from scoreconv.models.item import GenericItem, GraphicItem, TextItem
from scoreconv.models.trailer import Trailer, Unit
from scoreconv.errors import ScoreConvError

__all__ = [
    "MusReader",
    "MusWriter",
    "PmxReader",
    "PmxWriter",
    "Document",
    "HeaderWidth",
    "GenericItem",
    "GraphicItem",
    "TextItem",
    "Trailer",
    "Unit",
    "ScoreConvError",
]
