"""Tests for the file converters and the MUS analyzer."""

from pathlib import Path

from scoreconv.analysis.mus_analyzer import MusAnalyzer, item_type_name
from scoreconv.converters import (
    MusToPmxConverter,
    PmxToMusConverter,
    convert_mus_to_pmx,
    convert_pmx_to_mus,
)
from scoreconv.converters.pmx_to_mus import page_output_paths
from scoreconv.errors import InvalidSentinel
from scoreconv.formats.mus.reader import MusReader

from conftest import build_item, build_mus, f32


class TestMusToPmx:
    """Test cases for binary to text conversion."""

    def test_convert_to_file(self, mus_file, tmp_path):
        """Test writing a PMX file."""
        output = tmp_path / "page.pmx"
        text = convert_mus_to_pmx(mus_file, output)

        assert output.read_text(encoding="latin-1") == text
        assert "fig.eps\n" in text

    def test_single_file_has_no_file_directive(self, mus_file):
        """Test ##FILE is only written for multi-file streams."""
        text, results = MusToPmxConverter().convert_files([mus_file])

        assert "##FILE" not in text
        assert "##PAGEBREAK" not in text
        assert results[0].ok

    def test_multiple_files(self, mus_file, tmp_path):
        """Test pages are named and separated."""
        second = tmp_path / "page2.mus"
        second.write_bytes(build_mus(build_item(2.0, 1.0)))

        text, results = MusToPmxConverter(include_header=False).convert_files([mus_file, second])

        assert text.count("##PAGEBREAK\n") == 1
        assert f"##FILE:\t{mus_file}\n" in text
        assert text.endswith("##PAGEBREAK\n" f"##FILE:\t{second}\n" "2.0000    1.000\n")
        assert all(result.ok for result in results)

    def test_failed_file_is_skipped(self, mus_file, bad_mus_file):
        """Test one bad file does not stop the others."""
        text, results = MusToPmxConverter().convert_files([bad_mus_file, mus_file])

        assert not results[0].ok
        assert isinstance(results[0].error, InvalidSentinel)
        assert results[1].ok
        assert "##PAGEBREAK" not in text
        assert str(bad_mus_file) not in text
        assert "Hello\n" in text


class TestPmxToMus:
    """Test cases for text to binary conversion."""

    def test_convert_text(self):
        """Test in-memory conversion."""
        data = PmxToMusConverter().convert_text("1 2\n")
        assert len(MusReader().parse_bytes(data)) == 1

    def test_default_output_name(self, tmp_path):
        """Test the output defaults to the source with .mus."""
        source = tmp_path / "page.pmx"
        source.write_text("1 2\n", encoding="latin-1")

        paths = convert_pmx_to_mus(source)

        assert paths == [tmp_path / "page.mus"]
        assert paths[0].exists()

    def test_multi_page_output(self, tmp_path):
        """Test one numbered file per page."""
        source = tmp_path / "movement.pmx"
        source.write_text("1 2\n##PAGEBREAK\n3 4\n##PAGEBREAK\n5 6\n", encoding="latin-1")

        paths = convert_pmx_to_mus(source, tmp_path / "out" / "movement.mus")

        assert [p.name for p in paths] == ["movement-01.mus", "movement-02.mus", "movement-03.mus"]
        assert MusReader.read(paths[2]).items[0].type_code == 5.0

    def test_page_output_paths(self):
        """Test numbering width grows with the page count."""
        assert page_output_paths(Path("a.mus"), 1) == [Path("a.mus")]
        assert page_output_paths(Path("a.mus"), 120)[0] == Path("a-001.mus")


class TestMusAnalyzer:
    """Test cases for the structural summary."""

    def test_analyze_page(self, page_data):
        """Test counts and strings of a valid page."""
        analysis = MusAnalyzer().analyze_bytes(page_data)

        assert analysis.valid
        assert analysis.size_matches
        assert analysis.item_count == 3
        assert analysis.kinds == {"generic": 1, "text": 1, "graphic": 1}
        assert analysis.types == {1: 1, 15: 1, 16: 1}
        assert analysis.texts == ["Hello"]
        assert analysis.graphics == ["fig.eps"]
        assert analysis.trailer.version == 4.0

    def test_analyze_invalid(self, page_data):
        """Test errors are recorded instead of raised."""
        analysis = MusAnalyzer().analyze_bytes(page_data[:-4] + f32(0.0))

        assert not analysis.valid
        assert "-9999.0" in analysis.error
        assert analysis.error_offset == len(page_data) - 4
        assert analysis.item_count == 0

    def test_analyze_file(self, mus_file):
        """Test analyzing from disk."""
        analysis = MusAnalyzer().analyze_file(mus_file)

        assert analysis.filepath == str(mus_file)
        assert analysis.filesize == mus_file.stat().st_size
        assert "MUS File Structure" in analysis.structure

    def test_item_type_names(self):
        """Test type code names."""
        assert item_type_name(16) == "text"
        assert item_type_name(42) == "type 42"
