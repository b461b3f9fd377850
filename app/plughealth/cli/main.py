"""plughealth command-line entry point.

Global flags are parsed once here and handed to subcommands through
``ctx.obj`` as a CliOptions instance.
"""

from typing import Annotated

import typer

from plughealth import __version__
from plughealth.cli.commands import config, scan, show, watch
from plughealth.cli.types import CliOptions
from plughealth.utils.formatting import configure_logging

app = typer.Typer(
    name="plughealth",
    help="Recency-weighted health monitor for installed plugins.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(scan.app, name="scan")
app.add_typer(show.app, name="show")
app.command(name="status", help="Print a one-line summary of the last scan.")(show.status)
app.add_typer(watch.app, name="watch")
app.add_typer(config.app, name="config")


def _show_version(requested: bool) -> None:
    if requested:
        typer.echo(f"plughealth {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug details to stderr."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Hide informational notices."),
    ] = False,
    _version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=_show_version,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
) -> None:
    """Score installed plugins by how recently they were updated.

    Results of the last scan are cached, so 'show' and 'status' are instant.
    """
    configure_logging(verbose=verbose)
    ctx.obj = CliOptions(verbose=verbose, quiet=quiet)


if __name__ == "__main__":
    app()
