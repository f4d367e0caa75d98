"""Shared Rich display functions for collection summaries.

Provides table builders and summary printers used by the scan and
watch commands.
"""

from rich.table import Table

from bagpack.models.package import PackageManager
from bagpack.models.snapshot import CollectionSummary, format_timestamp
from bagpack.utils.formatting import (
    console,
    create_package_table,
    format_package_row,
    print_warning,
)


def create_manager_table(
    summary: CollectionSummary,
    manager: PackageManager,
    *,
    outdated_only: bool = False,
    limit: int | None = None,
) -> Table:
    """Create a table listing one manager's records.

    Args:
        summary: Summary to display.
        manager: Manager whose records are listed.
        outdated_only: Only include outdated records.
        limit: Maximum number of rows.

    Returns:
        Rich Table titled with the manager label and record count.
    """
    records = summary.snapshot.by_manager()[manager]
    if outdated_only:
        records = [r for r in records if r.is_outdated]

    table = create_package_table(f"{manager.label} ({len(records)})")
    for record in records[:limit] if limit else records:
        table.add_row(*format_package_row(record))
    return table


def print_summary(
    summary: CollectionSummary,
    managers: list[PackageManager] | None = None,
    *,
    outdated_only: bool = False,
    limit: int | None = None,
) -> None:
    """Print one table per manager followed by warnings and totals.

    A manager that failed without reporting any records is listed as a
    warning instead of a table. Records kept after a failed outdated check
    are still shown, with status unknown.

    Args:
        summary: Summary to display.
        managers: Managers to show. Defaults to all.
        outdated_only: Only include outdated records.
        limit: Maximum rows per table.
    """
    selected = managers if managers is not None else list(PackageManager)

    by_manager = summary.snapshot.by_manager()
    for manager in selected:
        if summary.warning_for(manager) is not None and not by_manager[manager]:
            continue
        console.print(
            create_manager_table(summary, manager, outdated_only=outdated_only, limit=limit)
        )

    for warning in summary.warnings:
        if warning.manager in selected:
            print_warning(f"{warning.manager.label}: {warning.message}")

    snapshot = summary.snapshot
    console.print(
        f"\n[dim]{len(snapshot.packages)} packages, "
        f"{snapshot.outdated_count} outdated "
        f"(generated {format_timestamp(snapshot.generated_at)})[/]"
    )
