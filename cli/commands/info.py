"""
Info command - display MUS file information.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.hex_view import display_float_words
from cli.display.tables import display_mus_info
from scoreconv.analysis.mus_analyzer import MusAnalyzer

console = Console()
app = typer.Typer()


@app.command()
def info(
    file: Path = typer.Argument(..., help="MUS/PAG file to analyze"),
    structure: bool = typer.Option(False, "--structure", "-s", help="Show the item map"),
    trailer_words: bool = typer.Option(
        False, "--trailer", "-t", help="Show the raw trailer words"
    ),
    no_text: bool = typer.Option(False, "--no-text", help="Hide text strings and EPS filenames"),
) -> None:
    """
    Display information about a binary SCORE file.

    Shows the header word count, trailer metadata (units, version, serial)
    and item statistics by type code.

    Examples:

        scoreconv info page.mus

        scoreconv info page.mus --structure

        scoreconv info page.pag --trailer
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    analyzer = MusAnalyzer()
    analysis = analyzer.analyze_file(file)

    display_mus_info(analysis, show_text=not no_text)

    if analysis.valid and trailer_words:
        size = analysis.trailer.byte_size
        display_float_words(
            analyzer.data[-size:],
            title="[bold]Trailer Words[/bold]",
            start_offset=len(analyzer.data) - size,
        )

    if analysis.valid and structure:
        console.print()
        console.print(analysis.structure, highlight=False, markup=False)

    if not analysis.valid:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
