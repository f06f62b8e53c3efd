"""Format handlers for binary MUS and textual PMX data."""

from scoreconv.formats.mus import MusReader, MusWriter
from scoreconv.formats.pmx import PmxReader, PmxWriter

__all__ = ["MusReader", "MusWriter", "PmxReader", "PmxWriter"]
