"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from bagpack.core.theme import get_theme

if TYPE_CHECKING:
    from bagpack.models.package import PackageRecord, PackageStatus


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_package_table(title: str = "Installed Packages") -> Table:
    """Create a pre-configured table for displaying package records.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for package display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],  # Zebra striping for readability
    )
    table.add_column("Package", no_wrap=True, style="package.name")
    table.add_column("Installed", style="package.version")
    table.add_column("Latest", style="package.version")
    table.add_column("Status", justify="center")
    table.add_column("Installed At", style="muted")
    return table


def format_status(status: PackageStatus) -> str:
    """Format a package status with color markup.

    Unknown statuses are shown as ``-`` like in the exported document.
    """
    return f"[status.{status.value}]{status.to_wire()}[/]"


def format_package_row(pkg: PackageRecord) -> tuple[str, str, str, str, str]:
    """Format a package record as a table row.

    Args:
        pkg: The record to format.

    Returns:
        Tuple of (name, installed, latest, status, installed_at) with Rich markup.
    """
    return (
        pkg.name,
        pkg.current_version,
        pkg.latest_version or "-",
        format_status(pkg.status),
        pkg.installed_at or "-",
    )


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
