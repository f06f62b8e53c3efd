"""
PMX text writer.

Renders Document objects as SCORE parameter matrix text, which SCORE
loads with the "RE file.pmx" command. One line per item:

    8.0000    1.000    0.000    ...        numeric item, P1 < 10
    14.000    1.000   20.000    ...        numeric item, P1 >= 10
    t         1.000   10.000    ...        text item, P2..P13
    Allegro                                ...followed by the raw text
    15.000    1.000    0.000    ...        EPS graphic, P2..P13
    figure.eps                             ...followed by the filename

Text and filenames are bytes in the model; they are mapped to characters
one to one (latin-1) so control bytes pass through unchanged.
"""

from pathlib import Path
from typing import List, Union

from scoreconv.models.document import Document
from scoreconv.models.item import Item, ItemKind
from scoreconv.models.trailer import Trailer, Unit
from scoreconv.utils.numbers import format_leading, format_param

PMX_ENCODING = "latin-1"


class PmxWriter:
    """
    Renderer for PMX text.

    Example:
        document = MusReader.read("page.mus")
        print(PmxWriter().to_text(document), end="")
    """

    TEXT_PREFIX = "t     "

    def __init__(self, include_header: bool = True):
        """
        Initialize writer.

        Args:
            include_header: Emit ##UNITS/##VERSION/##SERIAL lines from
                the trailer before the items
        """
        self.include_header = include_header

    @classmethod
    def write(
        cls, document: Document, filepath: Union[str, Path], include_header: bool = True
    ) -> None:
        """
        Write a Document to a PMX file.

        Args:
            document: Document to write
            filepath: Output file path
            include_header: Emit trailer metadata lines
        """
        text = cls(include_header).to_text(document)

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "w", encoding=PMX_ENCODING, newline="") as f:
            f.write(text)

    def to_text(self, document: Document) -> str:
        """
        Render a Document as PMX text.

        Args:
            document: Document to render

        Returns:
            PMX text, newline terminated
        """
        out: List[str] = []

        if self.include_header:
            out.extend(self.render_header(document.trailer))

        for item in document.items:
            out.append(self.render_item(item))

        return "".join(out)

    @staticmethod
    def render_header(trailer: Trailer) -> List[str]:
        """Metadata directive lines for a trailer."""
        lines = []
        if trailer.unit is not Unit.UNKNOWN:
            lines.append(f"##UNITS:\t{trailer.unit.value}\n")
        lines.append("##VERSION:\t%.2f\n" % trailer.version)
        if trailer.has_serial and trailer.serial > 0:
            lines.append("##SERIAL:\t%f\n" % trailer.serial)
        return lines

    @classmethod
    def render_item(cls, item: Item) -> str:
        """Render one item as its PMX line(s)."""
        if item.kind is ItemKind.TEXT:
            params = "".join(format_param(p) for p in item.values)
            text = item.text.decode(PMX_ENCODING)
            return f"{cls.TEXT_PREFIX}{params}\n{text}\n"

        line = format_leading(item.type_code)
        if item.kind is ItemKind.GRAPHIC:
            line += "".join(format_param(p) for p in item.fixed_params)
            return f"{line}\n{item.filename.decode(PMX_ENCODING)}\n"

        line += "".join(format_param(p) for p in item.params)
        return line + "\n"


# Name used by the binary-to-text pipeline
PmxRenderer = PmxWriter
