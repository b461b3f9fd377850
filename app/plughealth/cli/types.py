"""Shared types and option definitions for CLI commands."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


PluginsDirOption = Annotated[
    Path | None,
    typer.Option(
        "--plugins-dir",
        "-p",
        help="Plugin directory to inspect (default: configured or ./.obsidian/plugins).",
        file_okay=False,
    ),
]

FormatOption = Annotated[
    OutputFormat,
    typer.Option(
        "--format",
        "-f",
        help="Output format: table or json.",
        case_sensitive=False,
    ),
]

LimitOption = Annotated[
    int | None,
    typer.Option(
        "--limit",
        "-n",
        help="Limit number of plugins to display.",
    ),
]


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Global flags shared with every subcommand."""

    verbose: bool = False
    quiet: bool = False


def is_quiet(ctx: typer.Context) -> bool:
    """Return the global --quiet flag of the invocation."""
    options = ctx.find_root().obj
    return isinstance(options, CliOptions) and options.quiet
