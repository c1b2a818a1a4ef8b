"""Rich formatting utilities for terminal output."""

from typing import Any, Optional

from humanize import naturalsize, precisedelta
from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from ..detector.models import ScanStats, ScanSummary

console = Console()


def print_success(message: str) -> None:
    """Print success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print error message."""
    console.print(f"[red]✗[/red] {message}", style="red")


def print_warning(message: str) -> None:
    """Print warning message."""
    console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")


def print_info(message: str) -> None:
    """Print info message."""
    console.print(f"[blue]ℹ[/blue] {message}")


def print_panel(title: str, content: str, style: str = "blue") -> None:
    """Print content in a panel.

    Args:
        title: Panel title
        content: Panel content
        style: Panel border style
    """
    console.print(Panel(content, title=title, border_style=style))


def create_progress() -> Progress:
    """Create a progress display for work of unknown size.

    Returns:
        Configured Progress instance
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TextColumn("{task.completed} files"),
        TimeElapsedColumn(),
        console=console,
    )


def create_table(title: Optional[str] = None, **kwargs: Any) -> Table:
    """Create a Rich table with common styling.

    Args:
        title: Optional table title
        **kwargs: Additional Table arguments

    Returns:
        Configured Table instance
    """
    return Table(title=title, show_header=True, header_style="bold cyan", **kwargs)


def format_summary(summary: ScanSummary) -> str:
    """Format run counters for a summary panel."""
    text = f"""
Total files processed: {summary.total_files:,}
Unique files found: {summary.unique_files:,}
Within-directory duplicates: {summary.same_dir_dupes:,}
Cross-directory duplicates: {summary.cross_dir_dupes:,}
Filename cleanup candidates: {summary.rename_candidates:,}
Files with numeric suffixes: {summary.suffixed_files:,}
"""
    if summary.skipped_files:
        text += f"Unreadable files skipped: {summary.skipped_files:,}\n"
    return text.strip()


def format_stats(stats: ScanStats) -> str:
    """Format throughput figures for a performance panel."""
    return f"""
Total runtime: {precisedelta(stats.elapsed_seconds, minimum_unit="milliseconds")}
Hashing time: {precisedelta(stats.hashing_seconds, minimum_unit="milliseconds")}
Data processed: {naturalsize(stats.bytes_processed)}
Throughput: {naturalsize(stats.throughput)}/s
""".strip()
