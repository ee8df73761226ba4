"""Shared utility functions for aoctool.

Provides Rich-based console reporting and a couple of file-system helpers
used by both initializers.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Args:
        path: Directory path.

    Returns:
        The resolved ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()


def strict_subpath(path: Path, root: Path) -> Path | None:
    """Return *path* relative to *root* if it lies strictly inside *root*.

    Returns ``None`` when *path* is *root* itself or lies outside it.

    Examples::

        strict_subpath(Path("/a/b/inputs"), Path("/a/b")) -> Path("inputs")
        strict_subpath(Path("/a/b"), Path("/a/b"))        -> None
        strict_subpath(Path("/a/c"), Path("/a/b"))        -> None
    """
    if path == root or not path.is_relative_to(root):
        return None
    return path.relative_to(root)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_step(message: str) -> None:
    """Print a cyan progress line."""
    console.print(f"[cyan]{message}[/cyan]")


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
