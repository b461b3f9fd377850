"""Show and status commands.

Render the cached snapshot without scanning.
"""

import typer

from plughealth.cli.display import print_dashboard, print_snapshot_json, print_status_line
from plughealth.cli.types import FormatOption, LimitOption, OutputFormat
from plughealth.core.store import SettingsStore

app = typer.Typer(
    help="Show the cached health dashboard.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_dashboard(
    ctx: typer.Context,
    output_format: FormatOption = OutputFormat.TABLE,
    limit: LimitOption = None,
) -> None:
    """Display the results of the last scan."""
    if ctx.invoked_subcommand is not None:
        return

    snapshot = SettingsStore().load().snapshot

    if output_format == OutputFormat.JSON:
        print_snapshot_json(snapshot)
        return

    print_dashboard(snapshot, limit=limit)


def status() -> None:
    """Print a one-line summary of the last scan."""
    print_status_line(SettingsStore().load().snapshot)
