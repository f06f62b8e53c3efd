"""Tests for MUS file framing and the MusReader."""

import logging
import math

import pytest

from scoreconv.errors import (
    InvalidSentinel,
    ItemTrailerOverlap,
    MusFormatError,
    ScoreConvError,
    TruncatedInput,
    ZeroLengthItem,
)
from scoreconv.formats.mus.binary_parser import ItemReader
from scoreconv.formats.mus.reader import MusReader
from scoreconv.models.document import HeaderWidth
from scoreconv.models.item import ItemKind

from conftest import build_item, build_mus, build_trailer, f32


class TestItemReader:
    """Test cases for framing items between header and trailer."""

    def test_single_item(self, scenario_data):
        """Test one numeric item and a 4-field trailer."""
        assert len(scenario_data) == 34

        header, trailer, items = ItemReader().parse_bytes(scenario_data)

        assert header.width == HeaderWidth.TWO
        assert header.word_count == 8
        assert trailer.field_count == 4.0
        assert len(items) == 1
        assert items[0].type_code == 5.0
        assert items[0].params == [7.5]

    def test_mixed_page(self, page_data):
        """Test numeric, text and graphic items in order."""
        reader = ItemReader()
        _, _, items = reader.parse_bytes(page_data)

        assert [item.kind for item in items] == [ItemKind.GENERIC, ItemKind.TEXT, ItemKind.GRAPHIC]
        assert items[1].text == b"Hello"
        assert items[2].filename == b"fig.eps"
        assert reader.item_offsets[0] == 2
        assert reader.item_offsets[1] == 2 + 4 * 6

    def test_four_byte_header(self):
        """Test a file length divisible by 4 uses a 4-byte word count."""
        data = build_mus(build_item(3.0, 1.0), header_width=4)
        assert len(data) % 4 == 0

        header, _, items = ItemReader().parse_bytes(data)

        assert header.width == HeaderWidth.FOUR
        assert items[0].type_code == 3.0

    def test_empty_page(self):
        """Test a file with only a trailer."""
        _, _, items = ItemReader().parse_bytes(build_mus(b""))
        assert items == []

    def test_fractional_word_count(self):
        """Test item word counts are rounded before use."""
        data = build_mus(f32(2.9999, 1.0, 2.0, 3.0))
        _, _, items = ItemReader().parse_bytes(data)

        assert items[0].params == [2.0, 3.0]

    def test_short_header_count_stops_early(self, caplog):
        """Test items past the header word count are left unread."""
        first = build_item(1.0, 2.0)
        second = build_item(3.0, 4.0)
        trailer = build_trailer()
        word_count = (len(first) + len(trailer)) // 4
        data = build_mus(first + second, trailer, word_count=word_count)

        with caplog.at_level(logging.WARNING):
            _, _, items = ItemReader().parse_bytes(data)

        assert len(items) == 1
        assert "before the trailer" in caplog.text

    def test_header_count_past_end(self):
        """Test a header counting more words than the file holds."""
        data = build_mus(build_item(1.0, 2.0), word_count=100)

        with pytest.raises(TruncatedInput):
            ItemReader().parse_bytes(data)

    def test_zero_word_count(self):
        """Test an item declaring zero words."""
        data = build_mus(f32(0.0, 1.0))

        with pytest.raises(ZeroLengthItem) as exc:
            ItemReader().parse_bytes(data)

        assert exc.value.offset == 2

    def test_negative_word_count(self):
        """Test an item declaring a negative word count."""
        with pytest.raises(ZeroLengthItem):
            ItemReader().parse_bytes(build_mus(f32(-2.0, 1.0)))

    def test_item_overlaps_trailer(self):
        """Test an item body running into the trailer."""
        data = build_mus(f32(10.0, 1.0))

        with pytest.raises(ItemTrailerOverlap):
            ItemReader().parse_bytes(data)

    def test_infinite_word_count(self):
        """Test a non-finite word count."""
        data = build_mus(f32(math.inf, 1.0))

        with pytest.raises(ItemTrailerOverlap):
            ItemReader().parse_bytes(data)

    def test_item_passes_header_count(self):
        """Test an item straddling the header word count."""
        first = build_item(1.0, 2.0)
        second = build_item(3.0, 4.0, 5.0)
        trailer = build_trailer()
        word_count = (len(first) + len(trailer)) // 4 + 1
        data = build_mus(first + second, trailer, word_count=word_count)

        with pytest.raises(ItemTrailerOverlap) as exc:
            ItemReader().parse_bytes(data)

        assert exc.value.offset == 2 + len(first)

    def test_corrupted_sentinel(self, page_data):
        """Test the sentinel is checked before any item."""
        data = page_data[:-4] + f32(-9998.0)

        with pytest.raises(InvalidSentinel):
            ItemReader().parse_bytes(data)

    def test_errors_share_base_class(self, page_data):
        """Test every codec failure is a ScoreConvError."""
        with pytest.raises(ScoreConvError):
            ItemReader().parse_bytes(page_data[:-4] + f32(1.0))

    def test_dump_structure(self, page_data):
        """Test the debug dump lists every item."""
        reader = ItemReader()
        reader.parse_bytes(page_data)
        dump = reader.dump_structure()

        assert dump.startswith("MUS File Structure")
        assert "Items: 3" in dump
        assert "P1=16" in dump


class TestMusReader:
    """Test cases for the Document-level reader."""

    def test_read_file(self, mus_file):
        """Test reading a file sets the source name."""
        document = MusReader.read(mus_file)

        assert len(document) == 3
        assert document.source == "page.mus"
        assert document.header_width == HeaderWidth.TWO
        assert document.total_words == document.word_count

    def test_read_missing_file(self, tmp_path):
        """Test a missing file."""
        with pytest.raises(FileNotFoundError):
            MusReader.read(tmp_path / "missing.mus")

    def test_can_read(self, mus_file, tmp_path):
        """Test sniffing for the trailing sentinel."""
        other = tmp_path / "notes.txt"
        other.write_bytes(b"just some text")

        assert MusReader.can_read(mus_file)
        assert not MusReader.can_read(other)

    def test_file_info(self, page_data):
        """Test header info without decoding items."""
        info = MusReader.get_file_info_bytes(page_data)

        assert info["valid"]
        assert info["size"] == len(page_data)
        assert info["header_width"] == 2
        assert info["expected_size"] == len(page_data)

    def test_invalid_data(self):
        """Test garbage data raises a format error."""
        with pytest.raises(MusFormatError):
            MusReader().parse_bytes(b"\x01\x00garbage!")
