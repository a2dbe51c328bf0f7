"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich library for progress bars, colored output, and formatted text.
Supports verbosity levels and --no-color flag. Messages go to stderr so that
converted Markdown written to stdout stays clean.
"""

from contextlib import contextmanager
from typing import Callable, Iterator, List

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)

from textile2md.batch.models import BatchSummary, Document


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Converted 3 document(s)")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            stderr=True,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    @contextmanager
    def progress_bar(self, total: int, description: str = "Converting") -> Iterator[Callable[[], None]]:
        """Display progress bar for multi-document runs.

        Args:
            total: Total number of documents
            description: Description text for progress bar

        Yields:
            Function advancing the bar by one document

        Example:
            >>> with handler.progress_bar(10) as advance:
            ...     advance()
        """
        progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=self.console,
        )
        with progress:
            task = progress.add_task(description, total=total)
            yield lambda: progress.update(task, advance=1)

    def print_batch_summary(self, summary: BatchSummary) -> None:
        """Display batch summary with color coding.

        Args:
            summary: Summary returned by BatchRunner.run()
        """
        self.console.print("\n[bold]Migration Summary:[/bold]")

        if summary.converted > 0:
            self.console.print(f"  [green]✓[/green] Converted: {summary.converted} document(s)")

        if summary.empty > 0:
            self.console.print(f"  [dim]─[/dim] Empty: {summary.empty} document(s)")

        if summary.failed:
            self.console.print(f"  [red]✗[/red] Failed: {len(summary.failed)} document(s)")
            for result in summary.failed:
                self.console.print(f"    • {result.document.source_path}: {result.error}", markup=False)

        if summary.not_started > 0:
            self.console.print(f"  [yellow]⊘[/yellow] Not started: {summary.not_started} document(s)")

        total = summary.converted + len(summary.failed) + summary.not_started
        if total == 0:
            self.console.print("\n[yellow]No documents to convert[/yellow]")
        elif summary.aborted:
            self.console.print("\n[red]Migration aborted after a failed document[/red]")
        elif summary.failed:
            self.console.print("\n[red]Migration completed with failures[/red]")
        else:
            self.console.print("\n[green]Migration completed successfully[/green]")

    def print_dryrun_summary(self, documents: List[Document]) -> None:
        """Display the documents a run would convert.

        Args:
            documents: Documents returned by BatchRunner.discover()
        """
        self.console.print("\n[bold]Dry Run - Documents Preview:[/bold]")

        if not documents:
            self.console.print("\n[yellow]No documents to convert[/yellow]")
            return

        self.console.print(f"\n[green]Would convert ({len(documents)} document(s)):[/green]")
        for document in documents:
            self.console.print(f"  • {document.source_path} → {document.output_path}", markup=False)
