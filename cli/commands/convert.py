"""
Convert command - bidirectional conversion between MUS and PMX formats.
"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from scoreconv.converters.mus_to_pmx import MusToPmxConverter
from scoreconv.converters.pmx_to_mus import PmxToMusConverter, page_output_paths
from scoreconv.errors import ScoreConvError
from scoreconv.formats.pmx.writer import PMX_ENCODING

console = Console(stderr=True)
app = typer.Typer()

PMX_SUFFIXES = (".pmx", ".txt")


@app.command()
def convert(
    sources: List[Path] = typer.Argument(..., help="Source files (.mus/.pag or .pmx)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path"),
    no_header: bool = typer.Option(
        False, "--no-header", help="Omit ##UNITS/##VERSION/##SERIAL lines in PMX output"
    ),
    preserve_metadata: bool = typer.Option(
        False,
        "--preserve-metadata",
        help="Write PMX ##UNITS/##VERSION/##SERIAL values into the MUS trailer",
    ),
) -> None:
    """
    Convert between binary SCORE files and PMX text.

    The direction follows the input extension:

    - .mus/.pag -> PMX (stdout unless --output is given)
    - .pmx -> .mus

    Several binary inputs are joined into one multi-page PMX stream,
    separated by ##PAGEBREAK lines. A multi-page PMX input produces
    one numbered .mus file per page.

    Examples:

        scoreconv convert page.mus -o page.pmx

        scoreconv convert page.pmx -o page.mus

        scoreconv convert p01.mus p02.mus p03.mus -o movement.pmx
    """
    for source in sources:
        if not source.exists():
            console.print(f"[red]Error: Source file not found: {source}[/red]")
            raise typer.Exit(1)

    if sources[0].suffix.lower() in PMX_SUFFIXES:
        if len(sources) > 1:
            console.print("[red]Error: PMX to MUS conversion takes a single input[/red]")
            raise typer.Exit(1)
        _pmx_to_mus(sources[0], output, preserve_metadata)
    else:
        _mus_to_pmx(sources, output, include_header=not no_header)


def _mus_to_pmx(sources: List[Path], output: Optional[Path], include_header: bool) -> None:
    converter = MusToPmxConverter(include_header=include_header)
    text, results = converter.convert_files(sources)

    failed = [r for r in results if not r.ok]
    for result in failed:
        console.print(f"[red]Error: {result.source}: {result.error}[/red]")

    if output is None:
        typer.echo(text, nl=False)
    elif len(failed) < len(results):
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding=PMX_ENCODING, newline="") as f:
            f.write(text)
        pages = len(results) - len(failed)
        console.print(f"[green]Converted:[/green] {pages} page(s) -> {output}")

    if failed:
        raise typer.Exit(1)


def _pmx_to_mus(source: Path, output: Optional[Path], preserve_metadata: bool) -> None:
    output = output or source.with_suffix(".mus")
    converter = PmxToMusConverter(preserve_metadata=preserve_metadata)

    try:
        buffers = converter.convert_pages(source)
    except ScoreConvError as e:
        console.print(f"[red]Error: {source}: {e}[/red]")
        raise typer.Exit(1)

    for path, data in zip(page_output_paths(output, len(buffers)), buffers):
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)

        console.print(f"[green]Converted:[/green] {source} -> {path}")
        console.print(f"[dim]Output size: {len(data)} bytes ({(len(data) - 2) // 4} words)[/dim]")


if __name__ == "__main__":
    app()
