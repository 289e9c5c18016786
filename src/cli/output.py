"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output:
colored status lines, a spinner while the walk runs and the enrichment
summary. Supports verbosity levels and the --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner
from rich.table import Table

from src.enrichment.models import EnrichmentReport


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Document enriched")
        >>> with handler.spinner("Enriching Jira links..."):
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner while an operation runs.

        Args:
            message: Message to display with spinner

        Example:
            >>> with handler.spinner("Enriching Jira links..."):
            ...     asyncio.run(run.run(credentials))
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10):
            yield

    def print_enrichment_summary(self, report: EnrichmentReport) -> None:
        """Display the counters of a finished walk and its last error."""
        self.console.print("\n[bold]Enrichment Summary:[/bold]")

        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_row("Blocks visited", str(report.visited))
        table.add_row("Jira links found", str(report.placeholders))
        table.add_row("[green]Enriched[/green]", str(report.enriched))
        if report.skipped:
            table.add_row("[dim]Skipped (not an issue URL)[/dim]", str(report.skipped))
        if report.failed:
            table.add_row("[red]Failed[/red]", str(report.failed))
        if report.partial:
            table.add_row("[yellow]Left next to replacement[/yellow]", str(report.partial))
        self.console.print(table)

        if report.last_error:
            self.console.print(f"\n[red]Last error:[/red] {report.last_error}")

        if report.placeholders == 0:
            self.console.print("\n[yellow]No Jira links found[/yellow]")
        elif report.failed:
            self.console.print("\n[red]Enrichment completed with errors[/red]")
        else:
            self.console.print("\n[green]Enrichment completed successfully[/green]")
