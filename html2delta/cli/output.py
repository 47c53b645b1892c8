"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Status messages go to stderr so that converted operations written to
stdout stay machine-readable. Supports verbosity levels and --no-color.
"""

from typing import Any, Dict, List

from delta import Delta
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console for status messages (stderr)
        stdout: Rich Console for results (stdout)

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Conversion completed")
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
        self.stdout = Console(
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green (only if verbosity >= 1).

        Args:
            message: Success message to display
        """
        if self.verbosity >= 1:
            self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red.

        Args:
            message: Error message to display
        """
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow.

        Args:
            message: Warning message to display
        """
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1).

        Args:
            message: Info message to display
        """
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2).

        Args:
            message: Debug message to display
        """
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print_summary(self, operations: List[Dict[str, Any]]) -> None:
        """Display conversion summary (only if verbosity >= 1).

        Args:
            operations: Converted operations
        """
        if self.verbosity < 1:
            return

        embeds = sum(1 for op in operations if not isinstance(op["insert"], str))
        lines = sum(op["insert"].count("\n") for op in operations if isinstance(op["insert"], str))
        formatted = sum(1 for op in operations if op.get("attributes"))

        self.console.print("\n[bold]Conversion Summary:[/bold]")
        self.console.print(f"  Operations: {len(operations)}")
        self.console.print(f"  Lines: {lines}")
        if formatted:
            self.console.print(f"  Formatted: {formatted}")
        if embeds:
            self.console.print(f"  Embeds: {embeds}")

    def print_lines(self, delta: Delta) -> None:
        """Display a delta line by line with each line's block attributes.

        Args:
            delta: Delta to display
        """
        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Text")
        table.add_column("Line attributes")

        for line, attributes, index in delta.iter_lines():
            text = "".join(
                op["insert"] if isinstance(op["insert"], str) else f"[{next(iter(op['insert']), 'embed')}]"
                for op in line.ops
            )
            formatted = ", ".join(f"{key}={value}" for key, value in (attributes or {}).items())
            table.add_row(str(index), Text(text), Text(formatted))

        self.stdout.print(table)
