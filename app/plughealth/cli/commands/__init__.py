"""CLI commands for plughealth.

This package contains all subcommand implementations.
"""

from plughealth.cli.commands import config, scan, show, watch

__all__ = ["config", "scan", "show", "watch"]
