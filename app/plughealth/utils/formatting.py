"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from plughealth.core.theme import get_theme

if TYPE_CHECKING:
    from plughealth.models.health import HealthRecord, HealthStatus, HealthSummary


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


def configure_logging(verbose: bool = False) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: Log at DEBUG level instead of WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=verbose, markup=False)],
        force=True,
    )


def format_timestamp(epoch_ms: int | None, *, date_only: bool = False) -> str:
    """Format epoch milliseconds in local time.

    Args:
        epoch_ms: Timestamp, or None.
        date_only: Omit the time of day.

    Returns:
        Formatted local time, or "Unknown" for None.
    """
    if epoch_ms is None:
        return "Unknown"
    moment = datetime.fromtimestamp(epoch_ms / 1000)
    return moment.strftime("%Y-%m-%d" if date_only else "%Y-%m-%d %H:%M")


def format_status_badge(status: HealthStatus) -> str:
    """Format a health status label with its band color."""
    return f"[status.{status.value}]{status.label}[/]"


def create_health_table(title: str = "Plugin Health") -> Table:
    """Create a pre-configured table for displaying health records.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for health record display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],  # Zebra striping for readability
    )
    table.add_column("Plugin", no_wrap=True)
    table.add_column("Status", width=12)
    table.add_column("Last update", style="muted")
    table.add_column("Score", style="info", justify="right")
    table.add_column("Summary", style="text", overflow="ellipsis")
    return table


def format_health_row(record: HealthRecord) -> tuple[str, str, str, str, str]:
    """Format a health record as a table row with proper styling.

    Args:
        record: The record to format.

    Returns:
        Tuple of (plugin, status, last update, score, summary) with Rich markup.
    """
    plugin = (
        f"[plugin.name]{escape(record.name)}[/]\n"
        f"[muted]v{escape(record.version)} · {escape(record.id)}[/]"
    )
    return (
        plugin,
        format_status_badge(record.health_status),
        format_timestamp(record.last_updated, date_only=True),
        str(record.health_score),
        record.summary,
    )


def format_summary_badges(summary: HealthSummary) -> str:
    """Format per-status counts as a single line of colored badges."""
    return "  ".join(
        [
            f"[status.green]Healthy {summary.green}[/]",
            f"[status.yellow]Monitor {summary.yellow}[/]",
            f"[status.red]Risk {summary.red}[/]",
            f"[status.black]Abandoned {summary.black}[/]",
        ]
    )


def format_status_line(summary: HealthSummary | None) -> str:
    """Format the compact status-bar text.

    Args:
        summary: Counts of the cached snapshot, or None without scan data.

    Returns:
        Plain text such as "Health: ✅ 3 | ⚠️ 1 | 🚨 2".
    """
    if summary is None:
        return "Health monitor: no scan"
    parts = [
        f"✅ {summary.green}",
        f"⚠️ {summary.yellow}",
        f"\U0001f6a8 {summary.at_risk}",
    ]
    return f"Health: {' | '.join(parts)}"


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
