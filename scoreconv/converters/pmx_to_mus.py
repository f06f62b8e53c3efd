"""
PMX to MUS converter.

Converts PMX text into binary SCORE files. A single-page PMX file becomes
one .mus file; multi-page PMX (pages separated by ##PAGEBREAK) becomes one
file per page, numbered after the output name.

Limitations: output always uses the 2-byte word count of DOS SCORE, so
pages over 0xFFFF words are refused.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from scoreconv.formats.mus.writer import MusAssembler
from scoreconv.formats.pmx.reader import PmxParser

logger = logging.getLogger(__name__)


class PmxToMusConverter:
    """
    Converter from PMX text to binary SCORE data.

    Attributes:
        preserve_metadata: Carry ##UNITS/##VERSION/##SERIAL values into
            the trailer instead of the SCORE 4 defaults
    """

    def __init__(self, preserve_metadata: bool = False):
        self.preserve_metadata = preserve_metadata
        self._assembler = MusAssembler(preserve_metadata)

    def convert(self, source: Union[str, Path]) -> bytes:
        """
        Convert a PMX file into one MUS buffer.

        Args:
            source: Path to .pmx file

        Returns:
            Complete MUS file data
        """
        return self._assembler.to_bytes(PmxParser.read(source))

    def convert_text(self, text: str) -> bytes:
        """Convert PMX text held in memory."""
        return self._assembler.to_bytes(PmxParser().parse_text(text))

    def convert_pages(self, source: Union[str, Path]) -> List[bytes]:
        """Convert a multi-page PMX file into one MUS buffer per page."""
        pages = PmxParser.read_pages(source)
        logger.debug("%s: %d page(s)", source, len(pages))
        return [self._assembler.to_bytes(page) for page in pages]


def page_output_paths(output: Path, count: int) -> List[Path]:
    """
    Output names for a multi-page conversion.

    A single page keeps the name; otherwise pages are numbered:
    movement.mus -> movement-01.mus, movement-02.mus, ...
    """
    if count == 1:
        return [output]
    width = max(2, len(str(count)))
    return [
        output.with_name(f"{output.stem}-{n:0{width}d}{output.suffix}")
        for n in range(1, count + 1)
    ]


def convert_pmx_to_mus(
    source: Union[str, Path],
    output: Optional[Union[str, Path]] = None,
    preserve_metadata: bool = False,
) -> List[Path]:
    """
    Convert a PMX file to one or more MUS files.

    Args:
        source: Path to .pmx file
        output: Output path (default: source with .mus extension)
        preserve_metadata: Keep trailer metadata from the PMX directives

    Returns:
        Paths of the written files
    """
    source = Path(source)
    output = Path(output) if output is not None else source.with_suffix(".mus")

    buffers = PmxToMusConverter(preserve_metadata).convert_pages(source)
    paths = page_output_paths(output, len(buffers))

    for path, data in zip(paths, buffers):
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)

    return paths
