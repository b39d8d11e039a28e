"""Shared utility functions for the Hozokit generator.

Provides name helpers, file-system helpers and Rich-based console output.
Every component prints through the module-level ``console`` unless a
different one is passed in, which keeps test output capturable.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def dashify(value: str, target: str = " ", separator: str = "-") -> str:
    """Lowercase *value* and replace every *target* with *separator*.

    Only the target string is replaced; nothing else is stripped, so folder
    names stay predictable for the user.

    Examples::

        dashify("Hozokit Generator Project") -> "hozokit-generator-project"
        dashify("My Theme") -> "my-theme"
    """
    return separator.join(value.lower().split(target))


def snakify(value: str, target: str = " ", separator: str = "_") -> str:
    """Like :func:`dashify` but joins with underscores.

    Examples::

        snakify("Super Awesome Component") -> "super_awesome_component"
    """
    return separator.join(value.lower().split(target))


def format_tags(value: str | None) -> str:
    """Normalise a comma separated tag list (``"a ,b"`` -> ``"a, b"``)."""
    if not value:
        return ""
    tags = [tag.strip() for tag in value.split(",")]
    return ", ".join(tag for tag in tags if tag)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def read_version_marker(path: str | Path) -> str | None:
    """Return the stripped content of an ``.nvmrc`` style file, or ``None``."""
    marker = Path(path)
    if not marker.is_file():
        return None
    content = marker.read_text(encoding="utf-8").strip()
    return content or None


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
    """
    if seconds < 0:
        return "0.0s"

    minutes = int(seconds // 60)
    secs = seconds % 60
    if minutes > 0:
        return f"{minutes}m {int(secs)}s"
    return f"{secs:.1f}s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_banner(title: str, body: str, out: Console | None = None) -> None:
    """Print a framed greeting panel."""
    (out or console).print(
        Panel(body, title=f"[bold]{title}[/bold]", border_style="bright_blue")
    )


def print_summary_table(
    data: dict[str, str], title: str = "Summary", out: Console | None = None
) -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))

    (out or console).print(table)


def print_success(message: str, out: Console | None = None) -> None:
    """Print a green success message."""
    (out or console).print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str, out: Console | None = None) -> None:
    """Print a red ``Error:`` line followed by the message."""
    (out or console).print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False)


def print_warning(message: str, out: Console | None = None) -> None:
    """Print a yellow ``Warning:`` line followed by the message."""
    (out or console).print(
        f"[bold yellow]Warning:[/bold yellow] {escape(message)}", highlight=False
    )


def create_progress(out: Console | None = None) -> Progress:
    """Create a Rich progress display with one spinner per task.

    Returns:
        A ``Progress`` instance suitable for use as a context manager.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=out or console,
    )
