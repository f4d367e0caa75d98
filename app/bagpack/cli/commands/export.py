"""Export command implementation.

Writes the inventory document to a file or standard output.
"""

import sys
from pathlib import Path
from typing import Annotated

import typer

from bagpack.cli.types import ManagerChoice, build_aggregator, collect_or_exit
from bagpack.core.export import ExportError, export_summary
from bagpack.utils.formatting import print_error, print_info, print_warning

app = typer.Typer(
    help="Export the inventory document as JSON.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def export_inventory(
    path: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Destination file. Prints to stdout when omitted.",
        ),
    ] = None,
    manager: Annotated[
        ManagerChoice,
        typer.Option(
            "--manager",
            "-m",
            help="Package manager to include: brew, npm, pip, or all.",
            case_sensitive=False,
        ),
    ] = ManagerChoice.ALL,
) -> None:
    """Collect the inventory and write it as a JSON document.

    Warnings are included in the document and also reported on stderr.
    """
    summary = collect_or_exit(build_aggregator(manager))

    for warning in summary.warnings:
        print_warning(f"{warning.manager.label}: {warning.message}")

    try:
        written = export_summary(summary, path, stream=sys.stdout)
    except ExportError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if written is not None:
        print_info(f"Inventory exported to {written}")
