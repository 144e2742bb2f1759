"""
Rich-based console utilities for the CareFinder CLI.

Provides consistent terminal output with:
- Logo/branding
- Styled messages (info, success, warning, error)
- Spinner for the dataset download
- Facility and summary tables
"""

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

CAREFINDER_THEME = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red bold",
        "highlight": "magenta",
        "muted": "dim",
        "brand": "bold blue",
        "path": "cyan underline",
        "command": "bold green",
    }
)

# Global console instance with custom theme
console = Console(theme=CAREFINDER_THEME)

CAREFINDER_LOGO = r"""
   ____                _____ _           _
  / ___|__ _ _ __ ___|  ___(_)_ __   __| | ___ _ __
 | |   / _` | '__/ _ \ |_  | | '_ \ / _` |/ _ \ '__|
 | |__| (_| | | |  __/  _| | | | | | (_| |  __/ |
  \____\__,_|_|  \___|_|   |_|_| |_|\__,_|\___|_|
"""

CAREFINDER_TAGLINE = "California Healthcare Facility Search"


def print_logo(show_tagline: bool = True, show_version: bool = True) -> None:
    """Print the logo with optional tagline and version."""
    from carefinder import __version__

    logo_text = Text(CAREFINDER_LOGO, style="bold blue")

    if show_tagline:
        logo_text.append(Text(f"\n  {CAREFINDER_TAGLINE}", style="italic cyan"))

    if show_version:
        logo_text.append(Text(f"\n  v{__version__}", style="dim"))

    console.print(logo_text)


def info(message: str, prefix: str = "info") -> None:
    """Print an info message."""
    console.print(f"[info]{prefix}:[/info] {message}")


def success(message: str, prefix: str = "done") -> None:
    """Print a success message."""
    console.print(f"[success]{prefix}:[/success] {message}")


def warning(message: str, prefix: str = "warning") -> None:
    """Print a warning message."""
    console.print(f"[warning]{prefix}:[/warning] {message}")


def error(message: str, prefix: str = "error") -> None:
    """Print an error message."""
    console.print(f"[error]{prefix}:[/error] {message}")


def print_key_value(key: str, value: Any, indent: int = 2) -> None:
    spaces = " " * indent
    console.print(f"{spaces}[muted]{key}:[/muted] {value}")


def print_error_panel(title: str, message: str, hint: str | None = None) -> None:
    """Print an error in a styled panel."""
    content = f"[error]{escape(message)}[/error]"
    if hint:
        content += f"\n\n[dim]Hint: {hint}[/dim]"
    console.print(Panel(content, title=f"[error]{title}[/error]", padding=(1, 2)))


def create_spinner_progress() -> Progress:
    """
    Create a simple spinner for indeterminate tasks.

    Shows: spinner, description, elapsed time
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        TimeElapsedColumn(),
        console=console,
    )


def print_facilities_table(records: list[dict], limit: int | None = None) -> None:
    """Print matching facilities, nearest first."""
    table = Table(
        show_header=True,
        header_style="bold",
        border_style="dim",
        padding=(0, 1),
    )
    table.add_column("Facility", style="bold")
    table.add_column("Type")
    table.add_column("City")
    table.add_column("Miles", justify="right")
    table.add_column("Capacity", justify="right")

    shown = records if limit is None else records[:limit]
    for rec in shown:
        capacity = (
            f"[success]{rec['capacity']}[/success]"
            if rec["has_inpatient_capacity"]
            else "[muted]0[/muted]"
        )
        table.add_row(
            Text(rec["name"]),
            Text(rec["facility_type"]),
            Text(rec["city"]),
            f"{rec['distance_miles']:.2f}",
            capacity,
        )

    console.print(table)
    if limit is not None and len(records) > limit:
        console.print(f"[muted]... {len(records) - limit} more not shown[/muted]")


def print_summary_table(rows: list[tuple[str, str]]) -> None:
    """Print the five labeled summary statistics."""
    table = Table(show_header=True, header_style="bold", border_style="dim")
    table.add_column("Statistic")
    table.add_column("Value", justify="right")
    for label, value in rows:
        table.add_row(label, value)
    console.print(table)
