"""Binary MUS/PAG format handlers."""

from scoreconv.formats.mus.reader import MusReader
from scoreconv.formats.mus.writer import MusWriter, MusAssembler
from scoreconv.formats.mus.binary_parser import ItemReader, MusHeader
from scoreconv.formats.mus.item_codec import ItemCodec
from scoreconv.formats.mus.trailer import TrailerCodec

__all__ = [
    "MusReader",
    "MusWriter",
    "MusAssembler",
    "ItemReader",
    "MusHeader",
    "ItemCodec",
    "TrailerCodec",
]
