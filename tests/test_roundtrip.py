"""Round-trip tests between MUS binary and PMX text."""

import struct

import pytest

from scoreconv.errors import WordCountOverflow
from scoreconv.formats.mus.reader import MusReader
from scoreconv.formats.mus.trailer import TrailerCodec
from scoreconv.formats.mus.writer import MusAssembler, MusWriter
from scoreconv.formats.pmx.reader import PmxParser
from scoreconv.formats.pmx.writer import PmxRenderer
from scoreconv.models.document import Document
from scoreconv.models.item import GenericItem, TextItem
from scoreconv.models.trailer import Unit

from conftest import build_item, build_mus, text_item


def mus_to_pmx(data: bytes, include_header: bool = True) -> str:
    return PmxRenderer(include_header).to_text(MusReader().parse_bytes(data))


def pmx_to_mus(text: str, preserve_metadata: bool = False) -> bytes:
    return MusAssembler(preserve_metadata).to_bytes(PmxParser().parse_text(text))


class TestMusWriter:
    """Test cases for assembling MUS data."""

    def test_header_backpatched(self):
        """Test the word count covers everything after the header."""
        data = pmx_to_mus("1 2 3\n14 1\n")
        (word_count,) = struct.unpack_from("<H", data)

        assert word_count == (len(data) - 2) // 4
        assert len(data) % 4 == 2

    def test_default_trailer(self):
        """Test the SCORE 4 trailer is written by default."""
        data = pmx_to_mus("##UNITS:\tcentimeters\n##VERSION:\t3.00\n1 2\n")
        trailer = TrailerCodec.read_trailer(data)

        assert data.endswith(struct.pack("<f", -9999.0))
        assert trailer.field_count == 5.0
        assert trailer.unit == Unit.INCHES
        assert trailer.version == 4.0
        assert trailer.serial == 4000000.0

    def test_preserve_metadata(self):
        """Test directive values are carried into the trailer on request."""
        text = "##UNITS:\tcentimeters\n##VERSION:\t3.00\n##SERIAL:\t1234.000000\n1 2\n"
        trailer = TrailerCodec.read_trailer(pmx_to_mus(text, preserve_metadata=True))

        assert trailer.unit == Unit.CENTIMETERS
        assert trailer.version == 3.0
        assert trailer.serial == 1234.0

    def test_exact_bytes(self):
        """Test assembled bytes for a single item."""
        expected = build_mus(build_item(5.0, 7.5))
        assert pmx_to_mus("5.0000    7.500\n") == expected

    def test_empty_document(self):
        """Test a document with no items is only header and trailer."""
        data = MusWriter().to_bytes(Document())
        assert data == build_mus(b"")

    def test_word_count_overflow(self):
        """Test pages too large for a 2-byte word count."""
        document = Document(items=[GenericItem(8.0, [0.0] * 70000)])

        with pytest.raises(WordCountOverflow):
            MusWriter().to_bytes(document)

    def test_write_file(self, tmp_path):
        """Test writing creates parent directories."""
        path = tmp_path / "out" / "page.mus"
        MusWriter.write(Document(items=[GenericItem(1.0, [2.0])]), path)

        assert len(MusReader.read(path)) == 1


class TestRoundTrip:
    """Test cases for converting both ways."""

    def test_mus_pmx_mus(self, page_data):
        """Test a SCORE 4 page survives conversion unchanged."""
        assert pmx_to_mus(mus_to_pmx(page_data)) == page_data

    def test_pmx_mus_pmx(self):
        """Test PMX written by the renderer is reproduced exactly."""
        text = (
            "##UNITS:\tinches\n"
            "##VERSION:\t4.00\n"
            "##SERIAL:\t4000000.000000\n"
            "8.0000    1.000    0.000   -2.500\n"
            "14.000    3.000\n"
            "t         1.000    2.000    0.000    0.000    0.000    0.000"
            "    0.000    0.000    0.000    0.000    5.000    0.000\n"
            "Hello\n"
        )
        assert mus_to_pmx(pmx_to_mus(text)) == text

    def test_text_bytes_preserved(self):
        """Test non-printable and high bytes in text."""
        data = build_mus(text_item(b"\x01caf\xe9\x7f"))
        document = MusReader().parse_bytes(pmx_to_mus(mus_to_pmx(data)))

        assert document.items[0].text == b"\x01caf\xe9\x7f"

    def test_rounded_values_stable(self):
        """Test rounding noise does not grow over repeated conversions."""
        data = build_mus(build_item(1.0, 0.1, 1.0 / 3.0, -2.0625))
        first = mus_to_pmx(data, include_header=False)
        second = mus_to_pmx(pmx_to_mus(first), include_header=False)

        assert first == "1.0000    0.100    0.333   -2.063\n"
        assert second == first

    def test_text_length_follows_string(self):
        """Test a wrong P12 in PMX is corrected in the binary."""
        data = pmx_to_mus("t 0 0 0 0 0 0 0 0 0 0 42 0\nabc\n")
        item = MusReader().parse_bytes(data).items[0]

        assert isinstance(item, TextItem)
        assert item.fixed_params[TextItem.LENGTH_INDEX] == 3.0
        assert item.text == b"abc"
