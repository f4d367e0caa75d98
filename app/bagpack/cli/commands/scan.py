"""Scan command implementation.

Collects installed packages and available updates from the package managers.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from bagpack.cli.display import print_summary
from bagpack.cli.types import (
    ManagerChoice,
    OutputFormat,
    build_aggregator,
    collect_or_exit,
    selected_managers,
)
from bagpack.core.export import ExportError, export_summary
from bagpack.utils.formatting import console, print_error, print_info

app = typer.Typer(
    help="Scan package managers for installed and outdated packages.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def scan_packages(
    ctx: typer.Context,
    manager: Annotated[
        ManagerChoice,
        typer.Option(
            "--manager",
            "-m",
            help="Package manager to scan: brew, npm, pip, or all.",
            case_sensitive=False,
        ),
    ] = ManagerChoice.ALL,
    outdated_only: Annotated[
        bool,
        typer.Option(
            "--outdated-only",
            "-o",
            help="Only show packages with a newer version available.",
        ),
    ] = False,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-n",
            help="Limit number of packages displayed per manager.",
        ),
    ] = None,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export the inventory document to a JSON file.",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Scan and display globally installed packages.

    Managers that fail are reported as warnings; the others are still shown.

    Examples:
        bagpack scan                        # Scan brew, npm and pip
        bagpack scan --manager npm          # Scan npm only
        bagpack scan --outdated-only        # Show only outdated packages
        bagpack scan --format json          # Print the inventory document
        bagpack scan --export inventory.json
    """
    if ctx.invoked_subcommand is not None:
        return

    summary = collect_or_exit(build_aggregator(manager))

    if export_path is not None:
        try:
            written = export_summary(summary, export_path)
        except ExportError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        if output_format == OutputFormat.TABLE:
            print_info(f"Inventory exported to {written}")

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(summary.to_dict()))
        return

    print_summary(
        summary,
        selected_managers(manager),
        outdated_only=outdated_only,
        limit=limit,
    )
