"""Output formatting utilities for CLI."""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from jd_renderer.models.document import RenderedDocument

console = Console()
error_console = Console(stderr=True)


def print_error(message: str, details: dict | None = None) -> None:
    """Print an error message."""
    error_console.print(f"[red]Error:[/red] {message}")
    if details:
        for key, value in details.items():
            error_console.print(f"  [dim]{key}:[/dim] {value}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_document_summary(document: RenderedDocument, path: Path, title: str) -> None:
    """Print the written document's details in a panel."""
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Job", title)
    table.add_row("File", str(path))
    table.add_row("Pages", str(document.page_count))
    table.add_row("Size", f"{document.size_mb:.2f} MB")

    console.print(Panel(table, title="Job Description PDF", border_style="green"))
