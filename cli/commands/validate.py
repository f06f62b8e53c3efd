"""
Validate command - check MUS/PAG file integrity and structure.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from scoreconv.analysis.mus_analyzer import MusAnalysis, MusAnalyzer
from scoreconv.models.trailer import Unit

console = Console()
app = typer.Typer()


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: str  # "error", "warning", "info"
    area: str
    offset: int
    message: str


@dataclass
class ValidationResult:
    """Result of validating a MUS file."""

    filepath: str
    valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)
    info: List[ValidationIssue] = field(default_factory=list)

    @property
    def total_issues(self) -> int:
        return len(self.errors) + len(self.warnings) + len(self.info)


class MusValidator:
    """Validate binary SCORE file structure."""

    KNOWN_VERSIONS = (2.0, 3.0, 3.5, 4.0, 5.0, 6.0)

    def __init__(self, analysis: MusAnalysis):
        self.analysis = analysis
        self.issues: List[ValidationIssue] = []

    def validate(self) -> ValidationResult:
        """Perform full validation and return result."""
        self.issues = []

        self._validate_structure()
        if self.analysis.valid:
            self._validate_size()
            self._validate_trailer()
            self._validate_items()

        errors = [i for i in self.issues if i.severity == "error"]
        warnings = [i for i in self.issues if i.severity == "warning"]
        info = [i for i in self.issues if i.severity == "info"]

        return ValidationResult(
            filepath=self.analysis.filepath,
            valid=not errors,
            errors=errors,
            warnings=warnings,
            info=info,
        )

    def _add_issue(self, severity: str, area: str, offset: int, message: str) -> None:
        self.issues.append(ValidationIssue(severity, area, offset, message))

    def _validate_structure(self) -> None:
        if self.analysis.valid:
            self._add_issue(
                "info", "Items", self.analysis.header_width, f"{self.analysis.item_count} items decoded"
            )
        else:
            offset = self.analysis.error_offset if self.analysis.error_offset is not None else 0
            self._add_issue("error", "Structure", offset, self.analysis.error)

    def _validate_size(self) -> None:
        """Bytes past the counted words are legal but never read."""
        analysis = self.analysis
        if analysis.size_matches:
            self._add_issue("info", "File Size", 0, f"{analysis.filesize} bytes match header")
        else:
            self._add_issue(
                "warning",
                "File Size",
                0,
                f"header counts {analysis.expected_size} bytes, file has {analysis.filesize}",
            )

    def _validate_trailer(self) -> None:
        trailer = self.analysis.trailer
        offset = self.analysis.filesize - trailer.byte_size

        if trailer.unit is Unit.UNKNOWN:
            self._add_issue(
                "warning", "Trailer", offset, f"unknown measurement unit code {trailer.unit_code:g}"
            )
        if trailer.version not in self.KNOWN_VERSIONS:
            self._add_issue("warning", "Trailer", offset, f"unusual version {trailer.version:.2f}")
        if not trailer.has_serial:
            self._add_issue("info", "Trailer", offset, "no serial number field")
        else:
            self._add_issue("info", "Trailer", offset, f"version {trailer.version:.2f}")

    def _validate_items(self) -> None:
        if self.analysis.item_count == 0:
            self._add_issue("warning", "Items", self.analysis.header_width, "file contains no items")


def display_validation(result: ValidationResult, verbose: bool = False) -> None:
    """Display validation result with Rich formatting."""
    if result.valid:
        status = "[bold green]VALID[/bold green]"
        border = "green"
    else:
        status = "[bold red]INVALID[/bold red]"
        border = "red"

    console.print(
        Panel(
            f"[bold]File:[/bold] {result.filepath}\n"
            f"[bold]Status:[/bold] {status}\n\n"
            f"Errors: [red]{len(result.errors)}[/red]  "
            f"Warnings: [yellow]{len(result.warnings)}[/yellow]  "
            f"Info: [blue]{len(result.info)}[/blue]",
            title="[bold]Validation Result[/bold]",
            border_style=border,
        )
    )

    if result.errors or result.warnings:
        table = Table(title="Issues", box=box.ROUNDED, show_header=True, header_style="bold cyan")
        table.add_column("Severity", width=10)
        table.add_column("Area", style="cyan", width=12)
        table.add_column("Offset", style="dim", width=10)
        table.add_column("Message", width=50)

        for issue in result.errors:
            table.add_row("[red]ERROR[/red]", issue.area, f"0x{issue.offset:06X}", issue.message)

        for issue in result.warnings:
            table.add_row("[yellow]WARN[/yellow]", issue.area, f"0x{issue.offset:06X}", issue.message)

        console.print(table)

    if result.info and (verbose or not (result.errors or result.warnings)):
        info_table = Table(title="Validation Checks", box=box.SIMPLE, show_header=False)
        info_table.add_column("", width=60)

        for issue in result.info:
            info_table.add_row(f"[green]OK[/green] {issue.area}: {issue.message}")

        console.print(info_table)


@app.command()
def validate(
    files: List[Path] = typer.Argument(..., help="MUS/PAG files to validate"),
    details: bool = typer.Option(False, "--details", "-d", help="Show all validation details"),
    strict: bool = typer.Option(False, "--strict", "-s", help="Treat warnings as errors"),
) -> None:
    """
    Validate binary SCORE file structure.

    Checks for:

    - Trailer sentinel and field count
    - Header word count against the file length
    - Item framing (word counts, type codes, text and EPS records)
    - Known units and version numbers

    Exits with status 1 if any file is invalid.

    Examples:

        scoreconv validate page.mus

        scoreconv validate *.pag --strict
    """
    all_valid = True

    for file in files:
        if not file.exists():
            console.print(f"[red]Error: File not found: {file}[/red]")
            all_valid = False
            continue

        analysis = MusAnalyzer().analyze_file(file)
        result = MusValidator(analysis).validate()

        if strict and result.warnings:
            result.valid = False

        display_validation(result, verbose=details)
        all_valid = all_valid and result.valid

    if not all_valid:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
