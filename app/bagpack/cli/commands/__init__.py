"""CLI commands for bagpack.

This package contains all subcommand implementations.
"""

from bagpack.cli.commands import config, export, scan, watch

__all__ = ["config", "export", "scan", "watch"]
