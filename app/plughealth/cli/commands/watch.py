"""Watch command implementation.

Keeps the scheduler running in the foreground: one startup scan, then
periodic scans while auto-scan is enabled, printing the status line
after every completed scan. With auto-scan disabled it exits after the
startup scan.
"""

import asyncio
from typing import Annotated

import typer

from plughealth.cli.types import PluginsDirOption, is_quiet
from plughealth.core.monitor import build_scheduler
from plughealth.core.notify import ConsoleNotifier
from plughealth.core.scheduler import ScanScheduler
from plughealth.models.health import Snapshot
from plughealth.utils.formatting import console, format_status_line, format_timestamp, print_info

app = typer.Typer(
    help="Run scheduled scans in the foreground.",
    invoke_without_command=True,
)


def _print_refresh(snapshot: Snapshot) -> None:
    """Redraw the status line for a new snapshot."""
    console.print(
        f"[muted]{format_timestamp(snapshot.checked_at)}[/muted] "
        f"{format_status_line(snapshot.summary)}"
    )


async def _watch(scheduler: ScanScheduler, max_runtime: float | None) -> None:
    """Start the scheduler and keep it alive until cancelled or timed out.

    Returns right after the startup scan when auto-scan is disabled.
    """
    unsubscribe = scheduler.subscribe(_print_refresh)
    try:
        await scheduler.start()
        if not scheduler.settings.enable_auto_scan:
            return
        if max_runtime is None:
            await asyncio.Event().wait()
        else:
            await asyncio.sleep(max_runtime)
    finally:
        unsubscribe()
        await scheduler.shutdown()


@app.callback(invoke_without_command=True)
def watch(
    ctx: typer.Context,
    plugins_dir: PluginsDirOption = None,
    max_runtime: Annotated[
        float | None,
        typer.Option(
            "--max-runtime",
            help="Stop after this many seconds (default: run until Ctrl-C).",
            min=0,
        ),
    ] = None,
) -> None:
    """Scan now, then keep scanning on the configured interval.

    Examples:
        plughealth watch                  # Run until interrupted
        plughealth watch --max-runtime 60 # Stop after one minute
    """
    if ctx.invoked_subcommand is not None:
        return

    scheduler = build_scheduler(
        plugins_dir=plugins_dir,
        notifier=ConsoleNotifier(quiet=is_quiet(ctx)),
    )

    settings = scheduler.settings
    if settings.enable_auto_scan:
        print_info(f"Auto-scan every {settings.effective_interval_hours:g} hours. Ctrl-C to stop.")
    else:
        print_info("Auto-scan is disabled; running the startup scan only.")

    try:
        asyncio.run(_watch(scheduler, max_runtime))
    except KeyboardInterrupt:
        print_info("Stopped.")
