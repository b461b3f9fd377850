"""Scan command implementation.

Runs one manual health scan and displays the resulting snapshot.
"""

import asyncio

import typer

from plughealth.cli.display import print_dashboard, print_snapshot_json
from plughealth.cli.types import (
    FormatOption,
    LimitOption,
    OutputFormat,
    PluginsDirOption,
    is_quiet,
)
from plughealth.core.monitor import build_scheduler
from plughealth.core.notify import ConsoleNotifier
from plughealth.models.health import ScanOrigin

app = typer.Typer(
    help="Scan installed plugins now.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def scan_plugins(
    ctx: typer.Context,
    plugins_dir: PluginsDirOption = None,
    output_format: FormatOption = OutputFormat.TABLE,
    limit: LimitOption = None,
) -> None:
    """Scan installed plugins and display their health.

    The result replaces the cached snapshot shown by 'plughealth show'.

    Examples:
        plughealth scan                              # Scan the configured plugin dir
        plughealth scan -p ~/vault/.obsidian/plugins # Scan a specific directory
        plughealth scan --format json                # Output as JSON
    """
    if ctx.invoked_subcommand is not None:
        return

    quiet = is_quiet(ctx) or output_format == OutputFormat.JSON
    scheduler = build_scheduler(
        plugins_dir=plugins_dir,
        notifier=ConsoleNotifier(quiet=quiet),
    )

    snapshot = asyncio.run(scheduler.request_scan(ScanOrigin.MANUAL))

    if snapshot is not None:
        if output_format == OutputFormat.JSON:
            print_snapshot_json(snapshot)
        else:
            print_dashboard(snapshot, limit=limit)

    if scheduler.state.last_error is not None:
        raise typer.Exit(code=1)
