"""PMX parameter matrix text format handlers."""

from scoreconv.formats.pmx.reader import PmxReader, PmxParser
from scoreconv.formats.pmx.writer import PmxWriter, PmxRenderer

__all__ = ["PmxReader", "PmxParser", "PmxWriter", "PmxRenderer"]
