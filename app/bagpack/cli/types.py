"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum

import typer

from bagpack.collectors.base import Collector
from bagpack.core.aggregator import AggregationFailure, InventoryAggregator, default_collectors
from bagpack.core.config import BagpackConfig, ConfigError, load_config
from bagpack.models.package import PackageManager
from bagpack.models.snapshot import CollectionSummary
from bagpack.utils.formatting import print_error


class ManagerChoice(str, Enum):
    """Available package managers for CLI commands."""

    BREW = "brew"
    NPM = "npm"
    PIP = "pip"
    ALL = "all"


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def get_collectors(
    manager: ManagerChoice = ManagerChoice.ALL,
    config: BagpackConfig | None = None,
) -> list[Collector]:
    """Get collector instances based on manager selection.

    Args:
        manager: The manager choice (brew, npm, pip, or all).
        config: Configuration applied to the collectors.

    Returns:
        List of collector instances in enumeration order.
    """
    collectors = default_collectors(config)
    if manager == ManagerChoice.ALL:
        return collectors
    wanted = selected_managers(manager)
    return [c for c in collectors if c.manager in wanted]


def require_config() -> BagpackConfig:
    """Load configuration, exiting with an error message if it is invalid."""
    try:
        return load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def build_aggregator(manager: ManagerChoice = ManagerChoice.ALL) -> InventoryAggregator:
    """Create an aggregator for the selected managers using the user config."""
    return InventoryAggregator(get_collectors(manager, require_config()))


def collect_or_exit(aggregator: InventoryAggregator) -> CollectionSummary:
    """Run one collection, exiting with an error if no summary can be produced."""
    try:
        return aggregator.collect()
    except AggregationFailure as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def selected_managers(manager: ManagerChoice) -> list[PackageManager]:
    """Return the managers covered by a --manager choice, in enumeration order."""
    if manager == ManagerChoice.ALL:
        return list(PackageManager)
    return [PackageManager(manager.value)]
