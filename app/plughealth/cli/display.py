"""Shared Rich display functions for health snapshots.

Renders the dashboard (last-checked line, status badges and the
per-plugin table) used by the scan, show and watch commands.
"""

from plughealth.models.health import Snapshot
from plughealth.utils.formatting import (
    console,
    create_health_table,
    format_health_row,
    format_status_line,
    format_summary_badges,
    format_timestamp,
)

NO_DATA_MESSAGE = "No scan data available yet."


def print_dashboard(snapshot: Snapshot | None, limit: int | None = None) -> None:
    """Print the health dashboard for a snapshot.

    Args:
        snapshot: Snapshot to render, or None when no scan has run.
        limit: Maximum number of plugin rows to show.
    """
    if snapshot is None:
        console.print(f"[muted]{NO_DATA_MESSAGE}[/muted]")
        console.print("[dim]Run 'plughealth scan' to check your plugins.[/dim]")
        return

    console.print(f"[muted]Last checked: {format_timestamp(snapshot.checked_at)}[/muted]")
    console.print(format_summary_badges(snapshot.summary))

    if not snapshot.results:
        console.print("\n[dim]No plugins installed.[/dim]")
        return

    rows = snapshot.results[:limit] if limit else snapshot.results
    table = create_health_table()
    for record in rows:
        table.add_row(*format_health_row(record))
    console.print(table)

    if limit and len(rows) < len(snapshot.results):
        console.print(
            f"[dim](showing {len(rows)} of {len(snapshot.results)}, limited to {limit})[/dim]"
        )


def print_status_line(snapshot: Snapshot | None) -> None:
    """Print the one-line status-bar summary."""
    summary = snapshot.summary if snapshot is not None else None
    console.print(format_status_line(summary), markup=False, emoji=False)


def print_snapshot_json(snapshot: Snapshot | None) -> None:
    """Print a snapshot (or null) as JSON."""
    console.print_json(snapshot.to_json() if snapshot is not None else "null")
