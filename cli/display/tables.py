"""
Rich table displays for MUS file information.
"""

from rich.console import Console
from rich.table import Table
from rich.markup import escape
from rich.panel import Panel
from rich import box

from scoreconv.analysis.mus_analyzer import MusAnalysis, item_type_name


console = Console()


def display_mus_info(analysis: MusAnalysis, show_text: bool = True) -> None:
    """Display MUS file analysis with Rich formatting."""

    status = "[green]Valid[/green]" if analysis.valid else "[red]Invalid[/red]"
    size_note = (
        "" if analysis.size_matches else f" [yellow](header expects {analysis.expected_size})[/yellow]"
    )

    header_content = f"""[bold]File:[/bold] {analysis.filepath}
[bold]Status:[/bold] {status}
[bold]File Size:[/bold] {analysis.filesize} bytes{size_note}
[bold]Header:[/bold] {analysis.header_width}-byte word count = {analysis.word_count}"""

    if analysis.error:
        where = f" at byte 0x{analysis.error_offset:X}" if analysis.error_offset is not None else ""
        header_content += f"\n[bold]Error:[/bold] [red]{analysis.error}{where}[/red]"

    console.print(
        Panel(
            header_content,
            title="[bold blue]SCORE File Info[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )

    if not analysis.valid:
        return

    trailer = analysis.trailer
    serial = f"{trailer.serial:.0f}" if trailer.has_serial else "[dim]none[/dim]"
    trailer_content = f"""[bold]Fields:[/bold] {trailer.field_count:g}
[bold]Units:[/bold] {trailer.unit.value}
[bold]Version:[/bold] {trailer.version:.2f}
[bold]Serial:[/bold] {serial}"""

    console.print(
        Panel(
            trailer_content, title="[bold cyan]Trailer[/bold cyan]", border_style="cyan", expand=False
        )
    )

    type_table = Table(
        title=f"Items ({analysis.item_count})",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta",
    )
    type_table.add_column("P1", style="dim", width=4, justify="right")
    type_table.add_column("Type", style="cyan", width=16)
    type_table.add_column("Count", width=8, justify="right")

    for type_code, count in sorted(analysis.types.items()):
        type_table.add_row(str(type_code), item_type_name(type_code), str(count))

    console.print(type_table)

    if show_text and (analysis.texts or analysis.graphics):
        text_table = Table(
            title="Text and Graphics", box=box.SIMPLE, show_header=True, header_style="bold green"
        )
        text_table.add_column("Kind", width=8)
        text_table.add_column("Content", width=60)

        for text in analysis.texts:
            text_table.add_row("text", escape(repr(text)))
        for filename in analysis.graphics:
            text_table.add_row("[yellow]eps[/yellow]", escape(filename))

        console.print(text_table)
