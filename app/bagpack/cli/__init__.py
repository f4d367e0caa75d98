"""CLI package for bagpack.

This package contains the Typer application and all subcommands.
"""

from bagpack.cli.main import app

__all__ = ["app"]
