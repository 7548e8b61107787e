"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich for spinners, colored output and formatted text. Supports
verbosity levels and the --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator, List, Tuple

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner

from src.models.gist_page import File, Page


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Pushed")
        >>> with handler.spinner("Fetching pages..."):
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
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print(self, message: str) -> None:
        """Display message without formatting."""
        self.console.print(escape(message))

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner while a blocking operation runs.

        Args:
            message: Message to display with spinner

        Example:
            >>> with handler.spinner("Checking pages..."):
            ...     index.build_pages()
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield

    def print_files(self, files: List[File]) -> None:
        """Print one line per file: gist id, file name and description."""
        if not files:
            self.console.print("[yellow]No gist files found[/yellow]")
            return

        for file in files:
            description = file.page.description or ""
            visibility = "" if file.page.public else " [dim](secret)[/dim]"
            self.console.print(
                f"[cyan]{file.page.id}[/cyan]  {escape(file.name)}"
                f"  [dim]{escape(description)}[/dim]{visibility}"
            )

    def print_sync_failures(self, failures: List[Tuple[str, str]]) -> None:
        """List gists whose mirror could not be cloned or opened (verbosity >= 1).

        Skipped gists are left out of the listing without notice by default.
        """
        for page_id, reason in failures:
            self.info(f"Skipped gist {page_id}: {reason}")

    def print_created(self, page: Page) -> None:
        """Display the created gist."""
        self.success(f"Created gist {page.id}")
        self.console.print(f"  {escape(page.url)}")
