"""Watch command implementation.

Keeps the inventory fresh by refreshing immediately and then on the
configured interval until interrupted.
"""

import threading
from datetime import timedelta
from pathlib import Path
from typing import Annotated

import typer

from bagpack.cli.display import print_summary
from bagpack.cli.types import ManagerChoice, get_collectors, require_config, selected_managers
from bagpack.core.aggregator import AggregationFailure, InventoryAggregator
from bagpack.core.export import ExportError, export_summary
from bagpack.core.scheduler import RefreshScheduler
from bagpack.models.snapshot import CollectionSummary
from bagpack.utils.formatting import print_error, print_info

app = typer.Typer(
    help="Refresh the inventory periodically.",
    invoke_without_command=True,
)


def _wait_forever() -> None:
    """Block the main thread until interrupted."""
    threading.Event().wait()


@app.callback(invoke_without_command=True)
def watch_inventory(
    manager: Annotated[
        ManagerChoice,
        typer.Option(
            "--manager",
            "-m",
            help="Package manager to watch: brew, npm, pip, or all.",
            case_sensitive=False,
        ),
    ] = ManagerChoice.ALL,
    interval_hours: Annotated[
        float | None,
        typer.Option(
            "--interval",
            "-i",
            min=0.01,
            help="Hours between refreshes (default from config, 24).",
        ),
    ] = None,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Rewrite this JSON file after every refresh.",
        ),
    ] = None,
) -> None:
    """Refresh now, then every interval, until Ctrl+C.

    Each refresh is printed and, with --export, written to a file.
    """
    config = require_config()
    managers = selected_managers(manager)
    hours = interval_hours if interval_hours is not None else config.refresh_interval_hours

    def on_refresh(summary: CollectionSummary) -> None:
        print_summary(summary, managers)
        if export_path is not None:
            try:
                export_summary(summary, export_path)
            except ExportError as e:
                print_error(str(e))

    scheduler = RefreshScheduler(
        InventoryAggregator(get_collectors(manager, config)),
        interval=timedelta(hours=hours),
        on_refresh=on_refresh,
    )

    try:
        scheduler.refresh_now()
    except AggregationFailure as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    scheduler.schedule()
    print_info(f"Refreshing every {hours:g}h. Press Ctrl+C to stop.")
    try:
        _wait_forever()
    except KeyboardInterrupt:
        print_info("Stopping.")
    finally:
        scheduler.shutdown()
