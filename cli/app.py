"""
SCOREConv - Bidirectional converter for SCORE MUS/PMX files.

A modern CLI tool for converting and inspecting SCORE notation data.
"""

import logging

import typer
from rich.console import Console

from scoreconv import __version__
from cli.commands.info import info
from cli.commands.convert import convert
from cli.commands.validate import validate
from cli.commands.dump import dump

console = Console()

# Main app
app = typer.Typer(
    name="scoreconv",
    help="Convert and inspect SCORE binary (.mus/.pag) and PMX text files.",
    add_completion=False,
    rich_markup_mode="rich",
)

# Add commands directly
app.command(name="info")(info)
app.command(name="convert")(convert)
app.command(name="validate")(validate)
app.command(name="dump")(dump)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s" if verbose else "%(levelname)s: %(message)s",
    )


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]scoreconv[/bold] version {__version__}")
    console.print("[dim]Bidirectional converter for SCORE MUS/PMX files[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """
    SCOREConv - Convert and inspect SCORE notation files.

    Supports bidirectional conversion between:

    - [cyan]MUS/PAG[/cyan] binary item lists (.mus, .pag)
    - [cyan]PMX[/cyan] parameter matrix text (.pmx)

    [bold]Quick Start:[/bold]

        scoreconv convert page.mus              # PMX to stdout
        scoreconv convert page.mus -o page.pmx  # PMX to a file
        scoreconv convert page.pmx -o page.mus  # Back to binary
        scoreconv convert p1.mus p2.mus         # Multi-page PMX

    [bold]Inspection Commands:[/bold]

        scoreconv info page.mus       # Trailer, item statistics
        scoreconv validate *.mus      # Check file structure
        scoreconv dump page.mus       # Item map and hex dump

    Use --help with any command for more details.
    """
    setup_logging(verbose)

    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
