"""
MUS to PMX converter.

Converts binary SCORE files (.mus/.pag) to PMX text. Several input files
can be joined into one multi-page PMX stream:

    ##FILE:     page1.mus
    ...items of page 1...
    ##PAGEBREAK
    ##FILE:     page2.mus
    ...items of page 2...

Multi-page PMX cannot be loaded into SCORE but is handy when converting a
whole movement into another format.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from scoreconv.errors import ScoreConvError
from scoreconv.formats.mus.reader import MusReader
from scoreconv.formats.pmx.writer import PMX_ENCODING, PmxWriter

logger = logging.getLogger(__name__)


@dataclass
class PageResult:
    """Outcome of converting one input file."""

    source: Path
    text: Optional[str] = None
    error: Optional[ScoreConvError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MusToPmxConverter:
    """
    Converter from binary SCORE data to PMX text.

    Attributes:
        include_header: Emit ##UNITS/##VERSION/##SERIAL lines per page
    """

    FILE_DIRECTIVE = "##FILE:\t{name}\n"
    PAGE_BREAK = "##PAGEBREAK\n"

    def __init__(self, include_header: bool = True):
        self.include_header = include_header
        self._writer = PmxWriter(include_header)

    def convert(self, source: Union[str, Path]) -> str:
        """
        Convert one MUS file.

        Args:
            source: Path to .mus/.pag file

        Returns:
            PMX text

        Raises:
            ScoreConvError: If the file is not valid SCORE data
        """
        return self._writer.to_text(MusReader.read(source))

    def convert_bytes(self, data: bytes) -> str:
        """Convert MUS data held in memory."""
        return self._writer.to_text(MusReader().parse_bytes(data))

    def convert_files(self, sources: Sequence[Union[str, Path]]) -> Tuple[str, List[PageResult]]:
        """
        Convert several MUS files into one PMX stream.

        Files are processed in order. A file that fails to parse is left
        out of the output and reported in the results; the others are
        still converted.

        Args:
            sources: Input files, in page order

        Returns:
            Tuple of (PMX text, per-file results)
        """
        results: List[PageResult] = []
        pages: List[str] = []
        multi = len(sources) > 1

        for source in sources:
            source = Path(source)
            result = PageResult(source=source)
            try:
                result.text = self.convert(source)
            except ScoreConvError as e:
                logger.debug("%s: %s", source, e)
                result.error = e
            results.append(result)

            if result.ok:
                header = self.FILE_DIRECTIVE.format(name=source) if multi else ""
                pages.append(header + result.text)

        return self.PAGE_BREAK.join(pages), results


def convert_mus_to_pmx(
    source: Union[str, Path],
    output: Optional[Union[str, Path]] = None,
    include_header: bool = True,
) -> str:
    """
    Convert a MUS file to PMX text, optionally writing it to a file.

    Args:
        source: Path to .mus/.pag file
        output: Output .pmx path (optional)
        include_header: Emit trailer metadata lines

    Returns:
        PMX text
    """
    text = MusToPmxConverter(include_header).convert(source)

    if output is not None:
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding=PMX_ENCODING, newline="") as f:
            f.write(text)

    return text
