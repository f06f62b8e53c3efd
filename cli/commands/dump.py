"""
Dump command - annotated hex dump of a MUS file.
"""

from pathlib import Path
from typing import List, Tuple

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

from scoreconv.errors import MusFormatError
from scoreconv.formats.mus.binary_parser import ItemReader
from scoreconv.models.document import HeaderWidth
from scoreconv.models.item import ItemKind

console = Console()
app = typer.Typer()

Region = Tuple[int, int, str, str, str]

KIND_COLORS = {
    ItemKind.GENERIC: "green",
    ItemKind.TEXT: "yellow",
    ItemKind.GRAPHIC: "magenta",
}


def build_regions(data: bytes) -> List[Region]:
    """
    Map a MUS buffer into regions with start, end, name, description, and color.

    If the items cannot be framed, the span between header and end of
    file is reported as a single unparsed region.
    """
    width = int(HeaderWidth.for_length(len(data)))
    regions: List[Region] = [(0, width, "HEADER", "Word count", "bright_blue")]

    reader = ItemReader()
    try:
        _, trailer, items = reader.parse_bytes(data)
    except MusFormatError as e:
        regions.append((width, len(data), "UNPARSED", e.message, "red"))
        return regions

    for index, (offset, item) in enumerate(zip(reader.item_offsets, items), 1):
        end = offset + 4 * (item.word_count + 1)
        regions.append(
            (
                offset,
                end,
                f"ITEM {index}",
                f"{item.kind.value} P1={item.type_code:g}",
                KIND_COLORS[item.kind],
            )
        )

    trailer_start = len(data) - trailer.byte_size
    items_end = regions[-1][1]
    if items_end < trailer_start:
        regions.append((items_end, trailer_start, "UNREAD", "Past the counted words", "dim"))
    regions.append((trailer_start, len(data), "TRAILER", f"{trailer.field_count:g} fields", "cyan"))

    return regions


def get_region_for_offset(regions: List[Region], offset: int) -> Tuple[str, str, str]:
    """Get region name, description, and color for an offset."""
    for start, end, name, desc, color in regions:
        if start <= offset < end:
            return name, desc, color
    return "UNKNOWN", "Unknown region", "white"


def format_hex_line(regions: List[Region], data: bytes, offset: int, bytes_per_line: int = 16) -> Text:
    """
    Format a single line of hex dump with colors and annotations.

    Returns Rich Text object with colored output.
    """
    region_name, _, region_color = get_region_for_offset(regions, offset)

    text = Text()
    text.append(f"0x{offset:06X} ", style="dim")
    text.append(f"[{region_name:10s}] ", style=region_color)

    for i, byte in enumerate(data):
        _, _, color = get_region_for_offset(regions, offset + i)
        text.append(f"{byte:02X}", style="dim" if byte == 0x00 else color)
        text.append(" ")

    if len(data) < bytes_per_line:
        text.append("   " * (bytes_per_line - len(data)))

    text.append(" ", style="dim")
    for byte in data:
        if 32 <= byte < 127:
            text.append(chr(byte), style="green")
        else:
            text.append(".", style="dim")

    return text


def create_legend(regions: List[Region]) -> Table:
    """Create a legend for the hex dump colors."""
    table = Table(title="Legend", box=box.SIMPLE, show_header=False, expand=False)
    table.add_column("Region", width=12)
    table.add_column("Description", width=40)

    for start, end, name, desc, color in regions:
        table.add_row(
            Text(name, style=color),
            f"{desc} ({end - start} bytes, 0x{start:06X}-0x{end - 1:06X})",
        )

    return table


@app.command()
def dump(
    file: Path = typer.Argument(..., help="MUS/PAG file to dump"),
    start: int = typer.Option(0, "--start", "-s", help="Start offset"),
    length: int = typer.Option(0, "--length", "-l", help="Number of bytes (0=all)"),
    width: int = typer.Option(16, "--width", "-w", help="Bytes per line"),
    no_legend: bool = typer.Option(False, "--no-legend", help="Hide the legend"),
) -> None:
    """
    Annotated hex dump of a binary SCORE file.

    Every byte is attributed to the header, one item, or the trailer.
    When framing fails, the dump still shows where parsing stopped.

    Examples:

        scoreconv dump page.mus

        scoreconv dump page.mus --start 256 --length 128
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    with open(file, "rb") as f:
        data = f.read()

    regions = build_regions(data)

    if length == 0:
        length = len(data) - start
    end = min(start + length, len(data))

    if not no_legend:
        console.print(create_legend(regions))
        console.print()

    console.print(
        Panel(
            f"[bold]File:[/bold] {file}\n"
            f"[bold]Size:[/bold] {len(data)} bytes\n"
            f"[bold]Showing:[/bold] 0x{start:06X} - 0x{max(end - 1, start):06X} ({max(end - start, 0)} bytes)",
            title="[bold]MUS Hex Dump[/bold]",
            border_style="blue",
        )
    )

    lines_shown = 0
    for offset in range(start, end, width):
        console.print(format_hex_line(regions, data[offset : min(offset + width, end)], offset, width))
        lines_shown += 1

    console.print()
    console.print(f"[dim]Total: {lines_shown} lines displayed[/dim]")


if __name__ == "__main__":
    app()
