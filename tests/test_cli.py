"""Tests for the scoreconv command line."""

import pytest
from typer.testing import CliRunner

from cli.app import app
from cli.commands.dump import build_regions
from cli.commands.validate import MusValidator
from scoreconv.analysis.mus_analyzer import MusAnalyzer
from scoreconv.formats.mus.reader import MusReader

from conftest import build_mus, build_trailer, f32


@pytest.fixture
def runner():
    return CliRunner()


class TestConvertCommand:
    """Test cases for `scoreconv convert`."""

    def test_mus_to_stdout(self, runner, mus_file):
        """Test PMX is printed when no output is given."""
        result = runner.invoke(app, ["convert", str(mus_file)])

        assert result.exit_code == 0
        assert result.stdout.startswith("##UNITS:\tinches\n")
        assert "fig.eps\n" in result.stdout

    def test_no_header(self, runner, mus_file):
        """Test --no-header drops directive lines."""
        result = runner.invoke(app, ["convert", str(mus_file), "--no-header"])

        assert result.exit_code == 0
        assert result.stdout.startswith("1.0000")

    def test_mus_to_file(self, runner, mus_file, tmp_path):
        """Test writing PMX to --output."""
        output = tmp_path / "page.pmx"
        result = runner.invoke(app, ["convert", str(mus_file), "-o", str(output)])

        assert result.exit_code == 0
        assert "Hello\n" in output.read_text(encoding="latin-1")

    def test_pmx_to_mus(self, runner, mus_file, tmp_path):
        """Test both directions through the command line."""
        pmx = tmp_path / "page.pmx"
        back = tmp_path / "back.mus"

        runner.invoke(app, ["convert", str(mus_file), "-o", str(pmx)])
        result = runner.invoke(app, ["convert", str(pmx), "-o", str(back)])

        assert result.exit_code == 0
        assert back.read_bytes() == mus_file.read_bytes()

    def test_bad_file_exit_code(self, runner, mus_file, bad_mus_file):
        """Test a failed page sets the exit code but good pages are written."""
        result = runner.invoke(app, ["convert", str(bad_mus_file), str(mus_file)])

        assert result.exit_code == 1
        assert "Hello\n" in result.stdout

    def test_missing_source(self, runner, tmp_path):
        """Test a missing input file."""
        result = runner.invoke(app, ["convert", str(tmp_path / "nope.mus")])
        assert result.exit_code == 1

    def test_bad_pmx(self, runner, tmp_path):
        """Test a malformed PMX file fails cleanly."""
        source = tmp_path / "bad.pmx"
        source.write_text("1 2\n3 oops\n", encoding="latin-1")

        result = runner.invoke(app, ["convert", str(source)])

        assert result.exit_code == 1
        assert not (tmp_path / "bad.mus").exists()


class TestInspectCommands:
    """Test cases for info, validate and dump."""

    def test_info(self, runner, mus_file):
        """Test info on a valid file."""
        result = runner.invoke(app, ["info", str(mus_file), "--structure", "--trailer"])

        assert result.exit_code == 0
        assert "SCORE File Info" in result.output
        assert "Trailer" in result.output

    def test_info_invalid(self, runner, bad_mus_file):
        """Test info reports an invalid file with exit code 1."""
        result = runner.invoke(app, ["info", str(bad_mus_file)])

        assert result.exit_code == 1
        assert "Invalid" in result.output

    def test_validate(self, runner, mus_file):
        """Test a valid file passes."""
        result = runner.invoke(app, ["validate", str(mus_file)])

        assert result.exit_code == 0
        assert "VALID" in result.output
        assert "INVALID" not in result.output

    def test_validate_invalid(self, runner, mus_file, bad_mus_file):
        """Test any invalid file fails the run."""
        result = runner.invoke(app, ["validate", str(mus_file), str(bad_mus_file)])

        assert result.exit_code == 1
        assert "INVALID" in result.output

    def test_dump(self, runner, mus_file):
        """Test the hex dump runs."""
        result = runner.invoke(app, ["dump", str(mus_file), "--length", "32"])

        assert result.exit_code == 0
        assert "MUS Hex Dump" in result.output

    def test_version(self, runner):
        """Test the version command."""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "scoreconv" in result.output


class TestMusValidator:
    """Test cases for validation rules."""

    def test_clean_file(self, page_data):
        """Test a SCORE 4 page has no warnings."""
        result = MusValidator(MusAnalyzer().analyze_bytes(page_data)).validate()

        assert result.valid
        assert result.warnings == []

    def test_unknown_unit_warning(self):
        """Test unknown units are flagged but not fatal."""
        data = build_mus(f32(2.0, 1.0, 1.0), build_trailer(unit=3.0))
        result = MusValidator(MusAnalyzer().analyze_bytes(data)).validate()

        assert result.valid
        assert any("unit" in issue.message for issue in result.warnings)

    def test_parse_error(self, page_data):
        """Test a framing error is an error issue with its offset."""
        data = build_mus(f32(0.0, 1.0))
        result = MusValidator(MusAnalyzer().analyze_bytes(data)).validate()

        assert not result.valid
        assert result.errors[0].offset == 2


class TestDumpRegions:
    """Test cases for hex dump region mapping."""

    def test_regions_cover_file(self, page_data):
        """Test header, items and trailer are contiguous."""
        regions = build_regions(page_data)
        names = [region[2] for region in regions]

        assert names == ["HEADER", "ITEM 1", "ITEM 2", "ITEM 3", "TRAILER"]
        assert regions[-1][1] == len(page_data)
        for previous, current in zip(regions, regions[1:]):
            assert previous[1] == current[0]

    def test_unparsed_region(self, page_data):
        """Test a bad file still maps its header."""
        regions = build_regions(page_data[:-4] + f32(1.0))

        assert [region[2] for region in regions] == ["HEADER", "UNPARSED"]

    def test_reader_agrees(self, mus_file):
        """Test the dump and the reader see the same item count."""
        regions = build_regions(mus_file.read_bytes())
        assert len(regions) - 2 == len(MusReader.read(mus_file))
