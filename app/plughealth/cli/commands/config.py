"""Config command implementation.

View and change the persisted monitor settings.
"""

from typing import Annotated

import typer
from pydantic import ValidationError
from rich.table import Table

from plughealth.core.monitor import build_scheduler, resolve_plugins_dir
from plughealth.core.notify import ConsoleNotifier
from plughealth.core.settings import MonitorSettings
from plughealth.core.store import SettingsStore
from plughealth.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(
    help="View or change monitor settings.",
    no_args_is_help=True,
)


def _mask(token: str) -> str:
    """Hide all but the last four characters of a secret."""
    if not token:
        return "-"
    if len(token) <= 4:
        return "****"
    return f"****{token[-4:]}"


def _print_settings(settings: MonitorSettings) -> None:
    table = Table(title="plughealth settings", show_header=True, header_style="bold_header")
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    interval = settings.auto_scan_interval_hours
    effective = settings.effective_interval_hours
    interval_text = f"{interval:g} h"
    if effective != interval:
        interval_text += f" [muted](applied as {effective:g} h)[/muted]"

    table.add_row("Automatic scans", "enabled" if settings.enable_auto_scan else "disabled")
    table.add_row("Interval", interval_text)
    table.add_row("Lookup timeout", f"{settings.lookup_timeout_seconds:g} s")
    table.add_row("Plugins directory", str(resolve_plugins_dir(settings)))
    table.add_row("GitHub token", _mask(settings.github_token))
    table.add_row("Community API endpoint", settings.community_api_url or "-")

    console.print(table)


@app.command()
def show() -> None:
    """Display the current settings."""
    _print_settings(SettingsStore().load().settings)


@app.command("set")
def set_settings(
    auto_scan: Annotated[
        bool | None,
        typer.Option(
            "--auto-scan/--no-auto-scan",
            help="Enable or disable scheduled scans.",
        ),
    ] = None,
    interval: Annotated[
        str | None,
        typer.Option(
            "--interval",
            "-i",
            help="Hours between scheduled scans (applied within 1-168).",
        ),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option(
            "--timeout",
            help="Seconds to wait for a single plugin's timestamp (0.1-60).",
        ),
    ] = None,
    plugins_dir: Annotated[
        str | None,
        typer.Option(
            "--plugins-dir",
            "-p",
            help="Plugin directory to inspect (empty string resets to default).",
        ),
    ] = None,
    github_token: Annotated[
        str | None,
        typer.Option(
            "--github-token",
            help="GitHub token for future API integration. Stored locally.",
        ),
    ] = None,
    community_api_url: Annotated[
        str | None,
        typer.Option(
            "--community-api-url",
            help="Community directory endpoint for future checks.",
        ),
    ] = None,
) -> None:
    """Change one or more settings."""
    scheduler = build_scheduler(notifier=ConsoleNotifier())
    settings = scheduler.settings

    if interval is not None and _as_float(interval) is None:
        print_warning(f"Interval '{interval}' is not a number; using the default instead.")

    try:
        if timeout is not None:
            settings.lookup_timeout_seconds = timeout
        if plugins_dir is not None:
            settings.plugins_dir = plugins_dir or None
        if github_token is not None:
            settings.github_token = github_token
        if community_api_url is not None:
            settings.community_api_url = community_api_url
    except ValidationError as e:
        print_error(f"Invalid setting: {e.errors()[0]['msg']}")
        raise typer.Exit(code=1) from e

    saved = True
    if auto_scan is not None:
        saved = scheduler.set_auto_scan_enabled(auto_scan) and saved
    if interval is not None:
        saved = scheduler.set_interval_hours(interval) and saved
    if auto_scan is None and interval is None:
        saved = scheduler.save_settings()

    if not saved:
        raise typer.Exit(code=1)

    print_success("Settings saved.")
    _print_settings(settings)


def _as_float(value: str) -> float | None:
    try:
        return float(value)
    except ValueError:
        return None
